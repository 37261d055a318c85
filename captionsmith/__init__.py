"""CaptionSmith — caption conversion, editing and audio alignment toolkit."""

__version__ = "0.1.0"

__all__ = [
    "audio_io",
    "cli",
    "error_codes",
    "exceptions",
    "ffmpeg",
    "generators",
    "input_handler",
    "log",
    "models",
    "narration",
    "parsers",
    "progress",
    "slicer",
    "store",
    "timecode",
]
