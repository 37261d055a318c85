"""Timestamp parsing and formatting shared by every caption format."""

import math
import re

from captionsmith.error_codes import ErrorCode
from captionsmith.exceptions import TimestampError

_FIELD_WEIGHTS = (1, 60, 3600)
_WHOLE_FIELD = re.compile(r'[0-9]+')
_SECONDS_FIELD = re.compile(r'[0-9]+(?:[.,][0-9]+)?')


def parse_timestamp(text: str) -> float:
    """Convert ``MM:SS[.mmm]`` or ``HH:MM:SS[.mmm]`` to seconds.

    The sub-second separator may be a period (WebVTT) or a comma (SRT).
    """
    raw = text.strip()
    parts = raw.split(':')
    if len(parts) not in (2, 3):
        raise TimestampError(
            f"Expected 2 or 3 colon-separated fields in timestamp {text!r}",
            error_code=str(ErrorCode.INVALID_TIMESTAMP.value),
        )

    total = 0.0
    for weight, part in zip(_FIELD_WEIGHTS, reversed(parts)):
        # only the seconds field may carry a fraction
        pattern = _SECONDS_FIELD if weight == 1 else _WHOLE_FIELD
        if not pattern.fullmatch(part):
            raise TimestampError(
                f"Invalid field {part!r} in timestamp {text!r}",
                error_code=str(ErrorCode.INVALID_TIMESTAMP.value),
            )
        total += float(part.replace(',', '.')) * weight
    return total


def format_seconds(seconds: float, separator: str = '.') -> str:
    """Render seconds as ``HH:MM:SS.mmm``, truncating to whole milliseconds."""
    if seconds < 0:
        raise TimestampError(
            f"Cannot format negative offset {seconds}",
            error_code=str(ErrorCode.INVALID_TIMESTAMP.value),
        )
    # round first so 61.123 * 1000 == 61122.99999 still truncates to 61123
    total_ms = math.floor(round(seconds * 1000, 6))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{ms:03d}"


def to_format(timestamp: str, fmt) -> str:
    """Normalise the sub-second separator of *timestamp* for a caption format."""
    from captionsmith.models import CaptionFormat

    fmt = CaptionFormat.coerce(fmt)
    if fmt is CaptionFormat.SRT:
        return timestamp.replace('.', ',')
    if fmt is CaptionFormat.VTT:
        return timestamp.replace(',', '.')
    return timestamp
