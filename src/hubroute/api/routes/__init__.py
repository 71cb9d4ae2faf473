"""Route group exports."""

from . import health, routing

__all__ = ["health", "routing"]
