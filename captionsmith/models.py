"""Data models for captions, engine settings and decoded audio."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

import numpy as np

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import UnsupportedFormatError, ValidationError
from captionsmith.timecode import parse_timestamp


class CaptionFormat(Enum):
    """Supported caption text formats, keyed by file extension."""
    SRT = 'srt'
    VTT = 'vtt'
    TXT = 'txt'

    @classmethod
    def coerce(cls, value: Union['CaptionFormat', str]) -> 'CaptionFormat':
        """Accept an enum member or its tag ('srt', '.VTT', ...)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            tag = value.strip().lower().lstrip('.')
            for member in cls:
                if member.value == tag:
                    return member
        raise UnsupportedFormatError(
            f"Unsupported caption format: {value!r}",
            error_code=str(ErrorCode.UNSUPPORTED_FORMAT.value),
            details={'supported': [m.value for m in cls]},
        )

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'CaptionFormat':
        suffix = Path(path).suffix
        if not suffix:
            raise UnsupportedFormatError(
                f"Cannot detect caption format without a file extension: {path}",
                error_code=str(ErrorCode.UNSUPPORTED_FORMAT.value),
            )
        return cls.coerce(suffix)

    @property
    def mime_type(self) -> str:
        return f'text/{self.value}'


@dataclass(frozen=True)
class CaptionEntry:
    """A single timed caption; timestamps keep the text of the source file."""
    start_time: str
    end_time: str
    text: str

    @property
    def start_seconds(self) -> float:
        return parse_timestamp(self.start_time)

    @property
    def end_seconds(self) -> float:
        return parse_timestamp(self.end_time)

    @property
    def duration(self) -> float:
        """Return the caption window length in seconds."""
        return self.end_seconds - self.start_seconds

    def validate(self) -> None:
        """Raise if either timestamp is unparseable or the entry ends before it starts."""
        start = self.start_seconds
        end = self.end_seconds
        if start > end:
            raise ValidationError(
                f"Caption ends before it starts: {self.start_time} --> {self.end_time}",
                error_code=str(ErrorCode.INVALID_TIMING.value),
                details={'start': start, 'end': end},
            )


@dataclass
class EngineConfig:
    """Tunable behaviour of the caption store and audio export."""
    txt_cadence: float = 3.0
    clamp_samples: bool = True
    validate_updates: bool = True
    encoding: str = 'utf-8'


@dataclass
class AudioSampleBuffer:
    """Decoded linear-PCM audio held channel-major: ``samples.shape == (channels, frames)``."""
    sample_rate: int
    samples: np.ndarray

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValidationError(
                f"Sample rate must be positive, got {self.sample_rate}",
                error_code=str(ErrorCode.SAMPLE_RATE_ERROR.value),
            )
        samples = np.asarray(self.samples, dtype=np.float32)
        if samples.ndim == 1:
            samples = samples[np.newaxis, :]
        if samples.ndim != 2 or samples.shape[0] < 1:
            raise ValidationError(
                f"Expected (channels, frames) samples, got shape {samples.shape}",
            )
        self.samples = samples

    @classmethod
    def from_interleaved(cls, data: np.ndarray, sample_rate: int) -> 'AudioSampleBuffer':
        """Build from a frames-first array as returned by soundfile."""
        data = np.asarray(data)
        if data.ndim == 1:
            return cls(sample_rate=sample_rate, samples=data)
        return cls(sample_rate=sample_rate, samples=data.T)

    @property
    def channels(self) -> int:
        return self.samples.shape[0]

    @property
    def length(self) -> int:
        """Number of frames per channel."""
        return self.samples.shape[1]

    @property
    def duration(self) -> float:
        return self.length / self.sample_rate


@dataclass
class AudioClip:
    """A standalone excerpt cut from a larger buffer."""
    buffer: AudioSampleBuffer
    start_sample: int
    end_sample: int

    @property
    def length(self) -> int:
        return self.end_sample - self.start_sample

    def to_wav(self, clamp: bool = True) -> bytes:
        """Serialize the clip as a 16-bit PCM WAV byte string."""
        from captionsmith.slicer import encode_wav
        return encode_wav(self.buffer, clamp=clamp)
