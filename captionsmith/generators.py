"""Caption writers for SRT, WebVTT and plain text."""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Union

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import InputError
from captionsmith.models import CaptionEntry, CaptionFormat
from captionsmith.timecode import to_format

logger = logging.getLogger(__name__)


def generate_srt(entries: Sequence[CaptionEntry]) -> str:
    """Numbered blocks separated by a single blank line, comma timestamps."""
    blocks = []
    for n, entry in enumerate(entries, 1):
        start = to_format(entry.start_time, CaptionFormat.SRT)
        end = to_format(entry.end_time, CaptionFormat.SRT)
        blocks.append(f"{n}\n{start} --> {end}\n{entry.text}\n")
    return '\n'.join(blocks)


def generate_vtt(entries: Sequence[CaptionEntry]) -> str:
    """WebVTT output with period timestamps."""
    parts = ['WEBVTT\n\n']
    for n, entry in enumerate(entries, 1):
        start = to_format(entry.start_time, CaptionFormat.VTT)
        end = to_format(entry.end_time, CaptionFormat.VTT)
        parts.append(f"{n}\n{start} --> {end}\n{entry.text}\n\n")
    return ''.join(parts)


def generate_txt(entries: Sequence[CaptionEntry]) -> str:
    """Plain-text output — one caption per line, timing dropped."""
    return '\n'.join(entry.text for entry in entries)


GENERATORS: Dict[CaptionFormat, Callable[[Sequence[CaptionEntry]], str]] = {
    CaptionFormat.SRT: generate_srt,
    CaptionFormat.VTT: generate_vtt,
    CaptionFormat.TXT: generate_txt,
}


def generate_captions(entries: Sequence[CaptionEntry], fmt: Union[CaptionFormat, str]) -> str:
    """Serialize entries in the given caption format."""
    fmt = CaptionFormat.coerce(fmt)
    return GENERATORS[fmt](entries)


def export_filename(source_name: str, fmt: Union[CaptionFormat, str]) -> str:
    return f"{source_name}.{CaptionFormat.coerce(fmt).value}"


def write_caption_file(
    entries: Sequence[CaptionEntry],
    path: Path,
    fmt: Optional[Union[CaptionFormat, str]] = None,
    encoding: str = 'utf-8',
) -> Path:
    """Write entries to *path*, taking the format from its extension when not given."""
    path = Path(path)
    fmt = CaptionFormat.coerce(fmt) if fmt is not None else CaptionFormat.from_path(path)
    content = generate_captions(entries, fmt)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)
    except OSError as e:
        raise InputError(
            f"Failed to write caption file {path}: {e}",
            error_code=str(ErrorCode.FILE_WRITE_ERROR.value),
            original_error=e,
        )
    logger.info("Wrote %d %s entries -> %s", len(entries), fmt.value, path)
    return path
