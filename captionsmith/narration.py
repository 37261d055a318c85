"""Narration for caption entries — Piper TTS engine plus voice selection helpers."""

import gc
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import TTSError
from captionsmith.models import AudioSampleBuffer, CaptionEntry

logger = logging.getLogger(__name__)

DEFAULT_VOICE = "en_US-lessac-medium"
BUNDLED_VOICES = ["en_US-lessac-medium", "en_US-amy-medium", "en_GB-alba-medium", "pl_PL-gosia-medium"]


@dataclass(frozen=True)
class Voice:
    """A selectable narration voice."""
    name: str
    lang: str
    default: bool = False

    @classmethod
    def from_piper_name(cls, name: str, default: bool = False) -> 'Voice':
        """``en_US-lessac-medium`` -> language ``en-US``."""
        locale = name.split('-', 1)[0]
        return cls(name=name, lang=locale.replace('_', '-'), default=default)


def available_languages(voices: Sequence[Voice]) -> List[str]:
    return sorted({v.lang for v in voices})


def voices_for_language(voices: Sequence[Voice], lang: str) -> List[Voice]:
    return [v for v in voices if v.lang == lang]


def select_default_voice(voices: Sequence[Voice], locale: str = 'en') -> Optional[Voice]:
    """Pick the flagged default, else a voice matching *locale*, else English, else the first."""
    if not voices:
        return None
    for predicate in (
        lambda v: v.default,
        lambda v: v.lang.startswith(locale),
        lambda v: v.lang.startswith('en'),
    ):
        for voice in voices:
            if predicate(voice):
                return voice
    return voices[0]


class PiperNarrator:
    """Piper TTS — CPU-friendly ONNX synthesis of caption text."""

    def __init__(
        self,
        voice: str = DEFAULT_VOICE,
        model_path: Optional[Path] = None,
        data_path: Optional[Path] = None,
    ) -> None:
        self.voice = voice
        self.model_path = model_path
        self.data_path = data_path
        self._model: Optional[Any] = None

    def _load_model(self) -> None:
        if self._model is not None:
            return
        try:
            from piper import PiperVoice
        except ImportError:
            raise TTSError(
                "piper not installed. Install: pip install piper-tts",
                error_code=str(ErrorCode.TTS_ERROR.value),
            )
        if self.model_path is None:
            raise TTSError("model_path required to load Piper model")
        logger.info("Loading Piper model: %s", self.model_path)
        self._model = PiperVoice.load(str(self.model_path))

    def synthesize(self, text: str) -> AudioSampleBuffer:
        """Synthesize text to a mono sample buffer."""
        if not text or not text.strip():
            raise TTSError("Text cannot be empty")
        self._load_model()

        import numpy as np

        chunks = list(self._model.synthesize(text))
        if not chunks:
            raise TTSError(f"Piper produced no audio for: {text[:40]!r}")
        audio = np.concatenate([c.audio_float_array for c in chunks])
        return AudioSampleBuffer(sample_rate=chunks[0].sample_rate, samples=audio)

    def narrate_entry(self, entry: CaptionEntry) -> AudioSampleBuffer:
        buffer = self.synthesize(entry.text)
        if buffer.duration > entry.duration:
            logger.warning(
                "Narration runs %.2fs past its caption window (%s --> %s)",
                buffer.duration - entry.duration, entry.start_time, entry.end_time,
            )
        return buffer

    def list_voices(self) -> List[Voice]:
        """Return bundled voices plus any ``*.onnx`` models found in data_path."""
        names = set(BUNDLED_VOICES)
        if self.data_path and Path(self.data_path).is_dir():
            names.update(f.stem for f in Path(self.data_path).glob("*.onnx"))
        return [Voice.from_piper_name(n, default=(n == self.voice)) for n in sorted(names)]

    def cleanup(self) -> None:
        """Unload model and free memory."""
        if self._model is not None:
            del self._model
            self._model = None
            gc.collect()
            logger.info("Piper TTS model unloaded")
