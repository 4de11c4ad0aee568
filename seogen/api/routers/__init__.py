"""API routers."""

from . import generate, health

__all__ = ["generate", "health"]
