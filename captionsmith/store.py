"""In-memory caption set: import, per-entry editing, export and clip extraction."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import IndexOutOfRangeError, ValidationError
from captionsmith.generators import export_filename, generate_captions
from captionsmith.models import (
    AudioClip, AudioSampleBuffer, CaptionEntry, CaptionFormat, EngineConfig,
)
from captionsmith.parsers import parse_caption_file, parse_captions
from captionsmith.slicer import slice_entry

logger = logging.getLogger(__name__)


class CaptionStore:
    """Holds the ordered caption entries, their source name and active format.

    The entry count is fixed by the last successful import; edits replace
    entries in place. Every operation either succeeds completely or leaves
    the previous state untouched.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._entries: List[CaptionEntry] = []
        self._source_name = ''
        self._format = CaptionFormat.SRT
        self._audio: Optional[AudioSampleBuffer] = None

    @property
    def entries(self) -> Tuple[CaptionEntry, ...]:
        return tuple(self._entries)

    @property
    def source_name(self) -> str:
        return self._source_name

    @property
    def format(self) -> CaptionFormat:
        return self._format

    @property
    def audio(self) -> Optional[AudioSampleBuffer]:
        return self._audio

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> CaptionEntry:
        self._check_index(index)
        return self._entries[index]

    def load(
        self,
        entries: Sequence[CaptionEntry],
        source_name: str,
        fmt: Union[CaptionFormat, str],
    ) -> None:
        """Replace the whole caption set."""
        fmt = CaptionFormat.coerce(fmt)
        self._entries = list(entries)
        self._source_name = source_name
        self._format = fmt
        logger.info("Loaded %d entries from '%s' (%s)", len(self._entries), source_name, fmt.value)

    def import_text(self, content: str, source_name: str, fmt: Union[CaptionFormat, str]) -> None:
        entries = parse_captions(content, fmt, txt_cadence=self.config.txt_cadence)
        self.load(entries, source_name, fmt)

    def import_file(self, path: Path, fmt: Optional[Union[CaptionFormat, str]] = None) -> None:
        """Parse a caption file and load it under the file's base name."""
        path = Path(path)
        fmt = CaptionFormat.coerce(fmt) if fmt is not None else CaptionFormat.from_path(path)
        entries = parse_caption_file(
            path, fmt, encoding=self.config.encoding, txt_cadence=self.config.txt_cadence,
        )
        self.load(entries, path.stem, fmt)

    def set_format(self, fmt: Union[CaptionFormat, str]) -> None:
        """Change the export format; entries are left exactly as they are."""
        self._format = CaptionFormat.coerce(fmt)

    def update_entry(self, index: int, entry: CaptionEntry) -> None:
        self._check_index(index)
        if self.config.validate_updates:
            entry.validate()
        self._entries[index] = entry
        logger.debug("Updated entry %d: %s --> %s", index, entry.start_time, entry.end_time)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise IndexOutOfRangeError(
                f"Caption index {index} out of range (0-{len(self._entries) - 1})",
                error_code=str(ErrorCode.INDEX_OUT_OF_RANGE.value),
                details={'index': index, 'count': len(self._entries)},
            )

    def export(self, fmt: Optional[Union[CaptionFormat, str]] = None) -> Tuple[str, str, str]:
        """Return ``(filename, mime_type, content)`` for the active or given format."""
        if not self._entries:
            raise ValidationError(
                "No captions to export",
                error_code=str(ErrorCode.EMPTY_CAPTION_SET.value),
            )
        fmt = CaptionFormat.coerce(fmt) if fmt is not None else self._format
        content = generate_captions(self._entries, fmt)
        return export_filename(self._source_name, fmt), fmt.mime_type, content

    def load_audio(self, buffer: AudioSampleBuffer) -> None:
        self._audio = buffer

    def clip(self, index: int) -> AudioClip:
        """Slice the attached audio track to the window of entry *index*."""
        entry = self[index]
        if self._audio is None:
            raise ValidationError("No audio loaded to clip from")
        return slice_entry(self._audio, entry)

    def clip_filename(self, index: int, ext: str = 'wav') -> str:
        """``<source>_<n>.<ext>`` with a 1-based entry number."""
        self._check_index(index)
        return f"{self._source_name}_{index + 1}.{ext}"
