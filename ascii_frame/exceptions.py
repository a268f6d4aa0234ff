"""Exceptions raised by the conversion pipeline."""


class AsciiFrameError(Exception):
    """Base class for every error raised by ascii_frame."""


class EmptyDensityRampError(AsciiFrameError, ValueError):
    """The density ramp has no characters; the conversion is refused."""

    def __init__(self, message: str = "density ramp must contain at least one character"):
        super().__init__(message)


class InvalidSettingsError(AsciiFrameError, ValueError):
    """A conversion setting is out of range or unknown."""


class InvalidPixelBufferError(AsciiFrameError, ValueError):
    """A pixel buffer does not match its declared dimensions."""
