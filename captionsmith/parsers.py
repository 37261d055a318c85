"""Caption parsers for SRT, WebVTT and plain text.

Parsing is deliberately lenient: blocks without a usable timing line are
dropped rather than reported, because caption files in the wild are often
irregular.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import InputError
from captionsmith.models import CaptionEntry, CaptionFormat
from captionsmith.timecode import format_seconds

logger = logging.getLogger(__name__)

TIMING_SEPARATOR = ' --> '
VTT_HEADER = 'WEBVTT'
DEFAULT_TXT_CADENCE = 3.0

_BLANK_LINE = re.compile(r'\n[ \t]*\n')


def _normalize_newlines(content: str) -> str:
    return content.replace('\r\n', '\n').replace('\r', '\n')


def _split_timing(line: str):
    start, _, end = line.partition(TIMING_SEPARATOR)
    return start.strip(), end.strip()


def parse_srt(content: str) -> List[CaptionEntry]:
    """Parse SRT content string into a list of CaptionEntry objects."""
    content = _normalize_newlines(content).strip()
    if not content:
        return []

    entries = []
    for block in _BLANK_LINE.split(content):
        lines = block.strip('\n').split('\n')
        if len(lines) < 3 or TIMING_SEPARATOR not in lines[1]:
            logger.debug("Skipping SRT block without timing line: %r", lines[0][:40])
            continue
        start, end = _split_timing(lines[1])
        entries.append(CaptionEntry(
            start_time=start,
            end_time=end,
            text='\n'.join(lines[2:]).strip(),
        ))
    return entries


def parse_vtt(content: str) -> List[CaptionEntry]:
    """Parse WebVTT content; cue identifiers, NOTE and STYLE blocks are ignored."""
    lines = _normalize_newlines(content).strip().split('\n')
    entries: List[CaptionEntry] = []
    start_idx = 1 if lines and VTT_HEADER in lines[0] else 0

    pending: Optional[dict] = None

    def flush():
        nonlocal pending
        if pending is not None:
            entries.append(CaptionEntry(**pending))
            pending = None

    for i in range(start_idx, len(lines)):
        line = lines[i].strip()
        if not line:
            continue

        if TIMING_SEPARATOR in line:
            flush()
            start, end = _split_timing(line)
            # drop cue settings such as "align:start position:10%"
            end = end.split()[0] if end else end
            pending = {'start_time': start, 'end_time': end, 'text': ''}
            is_last = i == len(lines) - 1
        elif pending is not None:
            pending['text'] = f"{pending['text']}\n{line}" if pending['text'] else line
            is_last = i == len(lines) - 1
        else:
            continue

        if is_last or not lines[i + 1].strip():
            flush()

    flush()
    return entries


def parse_txt(content: str, cadence: float = DEFAULT_TXT_CADENCE) -> List[CaptionEntry]:
    """One caption per line with synthetic, back-to-back timestamps."""
    content = _normalize_newlines(content).strip()
    if not content:
        return []
    return [
        CaptionEntry(
            start_time=format_seconds(i * cadence),
            end_time=format_seconds((i + 1) * cadence),
            text=line.strip(),
        )
        for i, line in enumerate(content.split('\n'))
    ]


# every parser takes (content, txt_cadence); only plain text uses the cadence
PARSERS: Dict[CaptionFormat, Callable[[str, float], List[CaptionEntry]]] = {
    CaptionFormat.SRT: lambda content, cadence: parse_srt(content),
    CaptionFormat.VTT: lambda content, cadence: parse_vtt(content),
    CaptionFormat.TXT: parse_txt,
}


def parse_captions(
    content: str,
    fmt: Union[CaptionFormat, str],
    txt_cadence: float = DEFAULT_TXT_CADENCE,
) -> List[CaptionEntry]:
    """Parse caption text in the given format."""
    fmt = CaptionFormat.coerce(fmt)
    entries = PARSERS[fmt](content, txt_cadence)
    logger.info("Parsed %d %s entries", len(entries), fmt.value)
    return entries


def parse_caption_file(
    path: Path,
    fmt: Optional[Union[CaptionFormat, str]] = None,
    encoding: str = 'utf-8',
    txt_cadence: float = DEFAULT_TXT_CADENCE,
) -> List[CaptionEntry]:
    """Parse a caption file, detecting the format from its extension when not given."""
    path = Path(path)
    fmt = CaptionFormat.coerce(fmt) if fmt is not None else CaptionFormat.from_path(path)
    try:
        # utf-8-sig strips the BOM some editors write
        if encoding.lower().replace('-', '') == 'utf8':
            encoding = 'utf-8-sig'
        content = path.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise InputError(
            f"Caption file not found: {path}",
            error_code=str(ErrorCode.FILE_NOT_FOUND.value),
            original_error=e,
        )
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(
            f"Failed to read caption file {path}: {e}",
            error_code=str(ErrorCode.FILE_READ_ERROR.value),
            original_error=e,
        )
    return parse_captions(content, fmt, txt_cadence=txt_cadence)
