"""Route group exports."""

from . import health, optimizations

__all__ = ["health", "optimizations"]
