"""Graph storage."""
