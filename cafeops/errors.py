from __future__ import annotations


class CafeError(Exception):
    """Base class for every error raised by the café core."""


class InvalidInput(CafeError, ValueError):
    """Raised when an action payload breaks a business rule. Nothing is mutated."""


class NotFound(CafeError, LookupError):
    """Raised by lookups when the requested id does not exist."""
