"""Exception classes for WAV to CDDA conversion."""
from typing import Optional

from cdda.error_number import ErrorNumber


class ConversionError(Exception):
    """Base exception for all conversion failures.

    Carries the display name of the offending input (or output) and the
    processing stage, so the caller can report which file failed and where.
    """
    error_number = ErrorNumber.InvalidArgument
    stage = "convert"

    def __init__(self, message: str, name: Optional[str] = None):
        self.message = message
        self.name = name
        super().__init__(f"{name}: {message}" if name else message)


class InvalidContainer(ConversionError):
    """Raised when the RIFF/WAVE header is missing or malformed."""
    error_number = ErrorNumber.InvalidArgument
    stage = "parse"


class MissingChunk(ConversionError):
    """Raised when the fmt or data chunk is absent."""
    error_number = ErrorNumber.NoData
    stage = "parse"


class UnsupportedFormat(ConversionError):
    """Raised when the audio is not 44.1kHz, 16-bit, stereo PCM."""
    error_number = ErrorNumber.NotSupported
    stage = "validate"


class DiscIOError(ConversionError):
    """Raised on a short read, short write, open or seek failure."""
    error_number = ErrorNumber.InOutError
    stage = "io"

    def __init__(self, message: str, name: Optional[str] = None, direction: Optional[str] = None):
        self.direction = direction
        super().__init__(message, name)


class ResourceError(ConversionError):
    """Raised when per-run bookkeeping cannot be allocated."""
    error_number = ErrorNumber.OutOfMemory
    stage = "bookkeeping"
