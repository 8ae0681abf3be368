"""Error types raised by the planning engine."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a request cannot be planned, e.g. too few waypoints.

    The message is meant to be shown to the end user as-is.
    """
