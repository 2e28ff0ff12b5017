"""API routers for the CallCat scheduling service."""

from callcat.routers import health, scheduling

__all__ = ["health", "scheduling"]
