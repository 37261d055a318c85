"""Error codes for the CaptionSmith caption and audio engine."""

from enum import Enum


class ErrorCategory(Enum):
    SYSTEM = "System"
    FILE = "File Operation"
    CAPTION = "Caption Processing"
    AUDIO = "Audio Processing"


class ErrorCode(Enum):
    # File Errors (2000-2006)
    FILE_NOT_FOUND = 2000
    INVALID_FILE_FORMAT = 2003
    FILE_WRITE_ERROR = 2005
    FILE_READ_ERROR = 2006

    # Caption Errors (3001-3005)
    UNSUPPORTED_FORMAT = 3001
    INDEX_OUT_OF_RANGE = 3002
    INVALID_TIMESTAMP = 3003
    INVALID_TIMING = 3004
    EMPTY_CAPTION_SET = 3005

    # Audio Errors (4000-4007)
    AUDIO_DECODE_ERROR = 4000
    INVALID_SAMPLE_RANGE = 4001
    TRANSCODE_ERROR = 4002
    SAMPLE_RATE_ERROR = 4004
    TTS_ERROR = 4007

    @classmethod
    def get_category(cls, code) -> ErrorCategory:
        code_value = code.value if isinstance(code, cls) else code
        ranges = {
            (1000, 1999): ErrorCategory.SYSTEM,
            (2000, 2999): ErrorCategory.FILE,
            (3000, 3999): ErrorCategory.CAPTION,
            (4000, 4999): ErrorCategory.AUDIO,
        }
        for (lo, hi), cat in ranges.items():
            if lo <= code_value <= hi:
                return cat
        return ErrorCategory.SYSTEM

    @classmethod
    def get_description(cls, code) -> str:
        descriptions = {
            cls.FILE_NOT_FOUND: "File not found",
            cls.INVALID_FILE_FORMAT: "Invalid file format",
            cls.FILE_WRITE_ERROR: "Failed to write file",
            cls.FILE_READ_ERROR: "Failed to read file",
            cls.UNSUPPORTED_FORMAT: "Caption format not supported",
            cls.INDEX_OUT_OF_RANGE: "Caption index out of range",
            cls.INVALID_TIMESTAMP: "Timestamp could not be parsed",
            cls.INVALID_TIMING: "Caption ends before it starts",
            cls.EMPTY_CAPTION_SET: "No captions loaded",
            cls.AUDIO_DECODE_ERROR: "Audio could not be decoded",
            cls.INVALID_SAMPLE_RANGE: "Audio sample range is invalid",
            cls.TRANSCODE_ERROR: "Audio transcoding failed",
            cls.SAMPLE_RATE_ERROR: "Invalid sample rate",
            cls.TTS_ERROR: "Text-to-speech synthesis failed",
        }
        return descriptions.get(code, "Unknown error")
