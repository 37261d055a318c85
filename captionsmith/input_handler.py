"""Input validation — pre-flight checks for caption files, audio files and output paths."""

import logging
from pathlib import Path

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import InputError, ValidationError
from captionsmith.models import CaptionFormat

logger = logging.getLogger(__name__)

SUPPORTED_AUDIO_FORMATS = {'.wav', '.mp3', '.m4a', '.aac', '.flac', '.ogg', '.webm', '.opus'}


class InputHandler:
    """Validate and normalize input files and parameters."""

    def detect_caption_format(self, path: Path) -> CaptionFormat:
        return CaptionFormat.from_path(path)

    def validate_caption_file(self, path: Path) -> CaptionFormat:
        path = Path(path)
        if not path.exists():
            raise InputError(
                f"Caption file not found: {path}",
                error_code=str(ErrorCode.FILE_NOT_FOUND.value),
            )
        if not path.is_file():
            raise InputError(f"Path is not a file: {path}")
        return self.detect_caption_format(path)

    def validate_audio_file(self, path: Path) -> bool:
        path = Path(path)
        if not path.exists():
            raise InputError(
                f"Audio file not found: {path}",
                error_code=str(ErrorCode.FILE_NOT_FOUND.value),
            )
        if not path.is_file():
            raise InputError(f"Path is not a file: {path}")
        return True

    def validate_audio_format(self, path: Path) -> bool:
        suffix = Path(path).suffix.lower()
        if suffix not in SUPPORTED_AUDIO_FORMATS:
            raise ValidationError(
                f"Unsupported audio format: {suffix}",
                error_code=str(ErrorCode.INVALID_FILE_FORMAT.value),
            )
        return True

    def validate_output_dir(self, path: Path) -> bool:
        path = Path(path)
        if not path.exists():
            raise InputError(f"Output directory does not exist: {path}")
        if not path.is_dir():
            raise InputError(f"Path is not a directory: {path}")
        return True

    def prepare_output_dir(self, path: Path) -> Path:
        """Create *path* if needed and check that it is a usable directory."""
        path = Path(path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InputError(
                f"Cannot create output directory {path}: {e}",
                error_code=str(ErrorCode.FILE_WRITE_ERROR.value),
                original_error=e,
            )
        self.validate_output_dir(path)
        return path
