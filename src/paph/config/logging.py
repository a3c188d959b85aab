"""structlog configuration for paph.

paph is a library and never configures logging on import. Applications
that want paph's debug output call :func:`configure_logging` once.

Two output modes:
- Human (default): colored console output to stderr
- JSON: Structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

from paph.config.settings import PaphSettings


def configure_logging(
    settings: PaphSettings | None = None,
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Flags left as ``None`` come from *settings*, or from
    :meth:`PaphSettings.load` (``PAPH_VERBOSE``, ``PAPH_LOG_JSON``, the
    TOML file) when no settings are given.

    Args:
        settings: Settings supplying ``verbose`` and ``log_json``.
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    if verbose is None or log_json is None:
        if settings is None:
            settings = PaphSettings.load()
        if verbose is None:
            verbose = settings.verbose
        if log_json is None:
            log_json = settings.log_json

    paph_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("paph").setLevel(paph_level)
