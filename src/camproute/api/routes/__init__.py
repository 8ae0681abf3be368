"""Route group exports."""

from . import health, routes, seasons, trips

__all__ = ["health", "trips", "routes", "seasons"]
