"""Decode audio files into sample buffers using soundfile, with an ffmpeg fallback."""

import io
import logging
import tempfile
from pathlib import Path
from typing import Union

import soundfile as sf

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import ConversionError, DecodeError
from captionsmith.ffmpeg import ffmpeg_available, transcode_to_wav
from captionsmith.models import AudioSampleBuffer

logger = logging.getLogger(__name__)


def _read(source: Union[str, io.BytesIO]) -> AudioSampleBuffer:
    data, sample_rate = sf.read(source, dtype='float32', always_2d=True)
    return AudioSampleBuffer.from_interleaved(data, sample_rate)


def decode_audio(path: Path) -> AudioSampleBuffer:
    """Decode an audio file; formats libsndfile cannot read go through ffmpeg."""
    path = Path(path)
    if not path.is_file():
        raise DecodeError(
            f"Audio file not found: {path}",
            error_code=str(ErrorCode.FILE_NOT_FOUND.value),
        )
    try:
        buffer = _read(str(path))
    except (RuntimeError, sf.SoundFileError) as e:
        if not ffmpeg_available():
            raise DecodeError(
                f"Could not decode audio {path}: {e}",
                error_code=str(ErrorCode.AUDIO_DECODE_ERROR.value),
                original_error=e,
            )
        logger.info("soundfile cannot read %s, transcoding with ffmpeg", path.name)
        buffer = _decode_via_ffmpeg(path)

    logger.info(
        "Decoded %s: %d Hz, %d ch, %.2fs",
        path.name, buffer.sample_rate, buffer.channels, buffer.duration,
    )
    return buffer


def _decode_via_ffmpeg(path: Path) -> AudioSampleBuffer:
    with tempfile.TemporaryDirectory(prefix='captionsmith_') as tmp:
        wav_path = Path(tmp) / f'{path.stem}.wav'
        try:
            transcode_to_wav(path, wav_path)
            return _read(str(wav_path))
        except (ConversionError, RuntimeError, sf.SoundFileError) as e:
            raise DecodeError(
                f"Could not decode audio {path}: {e}",
                error_code=str(ErrorCode.AUDIO_DECODE_ERROR.value),
                original_error=e,
            )


def decode_audio_bytes(data: bytes) -> AudioSampleBuffer:
    """Decode an in-memory audio file (WAV, FLAC, OGG ...)."""
    try:
        return _read(io.BytesIO(data))
    except (RuntimeError, sf.SoundFileError) as e:
        raise DecodeError(
            f"Could not decode {len(data)} bytes of audio: {e}",
            error_code=str(ErrorCode.AUDIO_DECODE_ERROR.value),
            original_error=e,
        )
