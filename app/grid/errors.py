"""
Errors raised while detecting and splitting grids.
"""


class GridSplitterError(Exception):
    """Base class for grid splitting failures."""

    pass


class DecodeFailure(GridSplitterError):
    """Raised when the input cannot be interpreted as an image."""

    pass


class ContextUnavailable(GridSplitterError):
    """Raised when a decoded image cannot provide an RGBA pixel buffer."""

    pass


class NoGridDetected(GridSplitterError):
    """Raised when no detector produced any cells."""

    pass
