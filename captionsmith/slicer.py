"""Cut caption-aligned clips out of decoded audio and encode them as 16-bit WAV."""

import logging
import math
import struct
from pathlib import Path

import numpy as np

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import InputError, InvalidRangeError
from captionsmith.models import AudioClip, AudioSampleBuffer, CaptionEntry

logger = logging.getLogger(__name__)

WAV_HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
PCM_FORMAT = 1
INT16_MIN = -32768
INT16_MAX = 32767


def slice_audio(buffer: AudioSampleBuffer, start_seconds: float, end_seconds: float) -> AudioClip:
    """Copy the frames in ``[start_seconds, end_seconds)`` into a new clip.

    Out-of-range requests fail instead of being clamped, so a clip is never
    shorter than the caption window that asked for it.
    """
    start_sample = math.floor(start_seconds * buffer.sample_rate)
    end_sample = math.floor(end_seconds * buffer.sample_rate)
    length = end_sample - start_sample

    details = {
        'start_sample': start_sample,
        'end_sample': end_sample,
        'available': buffer.length,
    }
    if length <= 0:
        raise InvalidRangeError(
            f"Empty clip range {start_seconds:.3f}s - {end_seconds:.3f}s",
            error_code=str(ErrorCode.INVALID_SAMPLE_RANGE.value),
            details=details,
        )
    if start_sample < 0 or end_sample > buffer.length:
        raise InvalidRangeError(
            f"Clip range {start_seconds:.3f}s - {end_seconds:.3f}s exceeds "
            f"audio duration {buffer.duration:.3f}s",
            error_code=str(ErrorCode.INVALID_SAMPLE_RANGE.value),
            details=details,
        )

    samples = buffer.samples[:, start_sample:end_sample].copy()
    logger.debug("Sliced %d frames x %d channels at %d Hz", length, buffer.channels, buffer.sample_rate)
    return AudioClip(
        buffer=AudioSampleBuffer(sample_rate=buffer.sample_rate, samples=samples),
        start_sample=start_sample,
        end_sample=end_sample,
    )


def slice_entry(buffer: AudioSampleBuffer, entry: CaptionEntry) -> AudioClip:
    """Clip the audio covered by a caption entry."""
    return slice_audio(buffer, entry.start_seconds, entry.end_seconds)


def quantize(samples: np.ndarray, clamp: bool = True) -> np.ndarray:
    """Map float samples to int16: positive by 32767, negative by 32768."""
    samples = np.asarray(samples, dtype=np.float64)
    scaled = np.rint(np.where(samples < 0, samples * 32768.0, samples * 32767.0))
    if clamp:
        scaled = np.clip(scaled, INT16_MIN, INT16_MAX)
    else:
        # two's-complement wrap, what an unchecked 16-bit store does
        scaled = ((scaled.astype(np.int64) - INT16_MIN) % 65536) + INT16_MIN
    return scaled.astype('<i2')


def wav_header(channels: int, sample_rate: int, frames: int) -> bytes:
    """Canonical 44-byte RIFF/WAVE header for 16-bit little-endian PCM."""
    block_align = channels * BITS_PER_SAMPLE // 8
    data_size = frames * block_align
    return struct.pack(
        '<4sI4s4sIHHIIHH4sI',
        b'RIFF', 36 + data_size, b'WAVE',
        b'fmt ', 16, PCM_FORMAT, channels, sample_rate,
        sample_rate * block_align, block_align, BITS_PER_SAMPLE,
        b'data', data_size,
    )


def encode_wav(buffer: AudioSampleBuffer, clamp: bool = True) -> bytes:
    """Serialize a buffer as a self-contained WAV byte string."""
    pcm = quantize(buffer.samples, clamp=clamp)
    # (channels, frames) -> frames-major interleave
    interleaved = np.ascontiguousarray(pcm.T).tobytes()
    return wav_header(buffer.channels, buffer.sample_rate, buffer.length) + interleaved


def write_wav(buffer: AudioSampleBuffer, path: Path, clamp: bool = True) -> Path:
    """Write a sample buffer to disk as WAV, creating parent directories."""
    path = Path(path)
    data = encode_wav(buffer, clamp=clamp)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise InputError(
            f"Failed to write WAV file {path}: {e}",
            error_code=str(ErrorCode.FILE_WRITE_ERROR.value),
            original_error=e,
        )
    logger.info("Saved WAV: %s (%.2fs)", path, buffer.duration)
    return path


def write_clip(clip: AudioClip, path: Path, clamp: bool = True) -> Path:
    """Write a clip to disk as WAV."""
    return write_wav(clip.buffer, path, clamp=clamp)
