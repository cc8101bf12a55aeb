"""Base exception for Trellis."""


class TrellisError(Exception):
    """Base class for all errors raised by Trellis."""

    pass
