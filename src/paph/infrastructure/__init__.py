"""Infrastructure layer — the edge store and its NetworkX export.

This layer depends on stdlib and third-party libs (NetworkX).
It must never import from services or config.
The service layer bridges between domain models and infrastructure.
"""
