"""FFmpeg-based transcoding of compressed audio to PCM WAV."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import ConversionError

logger = logging.getLogger(__name__)


def ffmpeg_available() -> bool:
    return shutil.which('ffmpeg') is not None


def transcode_to_wav(
    input_path: Path,
    output_path: Path,
    sample_rate: Optional[int] = None,
    channels: Optional[int] = None,
) -> Path:
    """Decode any ffmpeg-readable audio into 16-bit PCM WAV.

    The source sample rate and channel layout are kept unless overridden.
    """
    cmd = ['ffmpeg', '-i', str(input_path), '-vn', '-acodec', 'pcm_s16le']
    if sample_rate is not None:
        cmd.extend(['-ar', str(sample_rate)])
    if channels is not None:
        cmd.extend(['-ac', str(channels)])
    cmd.extend(['-y', str(output_path)])
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        subprocess.run(cmd, check=True, capture_output=True)
    except subprocess.CalledProcessError as e:
        stderr_msg = e.stderr.decode().strip() if e.stderr else "Unknown error"
        raise ConversionError(
            f"Failed to transcode {input_path}: {stderr_msg[:500]}",
            error_code=str(ErrorCode.TRANSCODE_ERROR.value),
            original_error=e,
        )

    size_mb = output_path.stat().st_size / (1024 * 1024)
    logger.info("Transcoded audio: %s (%.1f MB)", output_path, size_mb)
    return output_path
