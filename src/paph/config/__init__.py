"""Configuration — settings models, TOML/env loading, logging setup."""
