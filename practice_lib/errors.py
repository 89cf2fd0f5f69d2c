"""Exceptions raised by the practice grader.

Every failure the pipeline can report is a subclass of PracticeError so
callers can catch the family at once. None of these errors touches the
drawing being evaluated; the user can always redraw or resubmit.
"""


class PracticeError(Exception):
    """Base class for recoverable grader errors."""


class EmptyDrawingError(PracticeError):
    """Raised when a drawing with no strokes is submitted."""

    def __init__(self, message: str = "Please write the character before submitting."):
        super().__init__(message)


class ImageDecodeError(PracticeError):
    """Raised when an encoded raster cannot be turned back into pixels."""


class RenderUnavailableError(PracticeError):
    """Raised when no pixel-rendering backend is available."""


class ConversionError(PracticeError):
    """Raised when the character set conversion service fails."""
