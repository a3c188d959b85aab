"""Domain layer — edges, routes and errors.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, or config.
"""
