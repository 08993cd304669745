"""Errors raised by the tracker services."""


class TrackerError(ValueError):
    """Base class for rejected tracker calls."""


class InvalidRangeError(TrackerError):
    """Raised when a start date falls after the end date."""


class InsufficientDataError(TrackerError):
    """Raised when an analysis window has no usable days."""
