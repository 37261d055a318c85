"""Custom exception hierarchy for CaptionSmith."""


class CaptionSmithError(Exception):
    """Base exception for all CaptionSmith errors."""

    def __init__(self, message, error_code=None, details=None, original_error=None):
        self.message = message
        self.error_code = error_code or "UNKNOWN"
        self.details = details or {}
        self.original_error = original_error

        full_message = f"[{self.error_code}] {message}"
        if details:
            full_message += f"\nDetails: {details}"
        if original_error:
            full_message += f"\nCaused by: {original_error}"

        super().__init__(full_message)

    def to_dict(self):
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ProcessingError(CaptionSmithError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "PROC_ERR", details, original_error)


class InputError(ProcessingError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "INP_ERR", details, original_error)


class ValidationError(ProcessingError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "VALID_ERR", details, original_error)


class MalformedInputError(ProcessingError):
    """Text that should carry timing information does not."""

    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "MALFORMED_ERR", details, original_error)


class TimestampError(MalformedInputError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "TS_ERR", details, original_error)


class UnsupportedFormatError(ProcessingError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "FMT_ERR", details, original_error)


class IndexOutOfRangeError(ProcessingError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "INDEX_ERR", details, original_error)


class InvalidRangeError(ProcessingError):
    """Audio slice bounds are empty, reversed or past the end of the buffer."""

    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "RANGE_ERR", details, original_error)


class DecodeError(ProcessingError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "DECODE_ERR", details, original_error)


class ConversionError(ProcessingError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "CONV_ERR", details, original_error)


class TTSError(ProcessingError):
    def __init__(self, message, error_code=None, details=None, original_error=None):
        super().__init__(message, error_code or "TTS_ERR", details, original_error)
