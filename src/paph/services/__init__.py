"""Service layer — route search, composition and query caching.

Services may import from domain and infrastructure layers.
They must never import from config.
"""
