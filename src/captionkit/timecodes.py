"""
Timestamp codecs: caption time encodings to seconds and back for display.

Every parse function raises ValueError on malformed input; the format
parsers catch it and drop the offending cue.
"""

import math
from collections.abc import Callable

CUE_SEPARATOR = " --> "


def _check_seconds(value: float, raw: object) -> float:
    if not math.isfinite(value) or value < 0:
        msg = f"Invalid timestamp: {raw!r}"
        raise ValueError(msg)
    return value


def parse_decimal_seconds(value: str | float | int) -> float:
    """Parse a caption-track XML ``start``/``dur`` field ("12.5")."""
    if isinstance(value, str):
        value = value.strip()
    return _check_seconds(float(value), value)


def vtt_time_to_seconds(ts: str) -> float:
    """Convert ``HH:MM:SS.mmm`` (or ``MM:SS.mmm``) to seconds."""
    parts = ts.strip().split(":")
    if len(parts) == 3:
        hours, minutes = int(parts[0]), int(parts[1])
    elif len(parts) == 2:
        hours, minutes = 0, int(parts[0])
    else:
        msg = f"Invalid WebVTT timestamp: {ts!r}"
        raise ValueError(msg)
    seconds = float(parts[-1])
    if hours < 0 or minutes < 0:
        msg = f"Invalid WebVTT timestamp: {ts!r}"
        raise ValueError(msg)
    return _check_seconds(hours * 3600 + minutes * 60 + seconds, ts)


def srt_time_to_seconds(ts: str) -> float:
    """Convert ``HH:MM:SS,mmm`` to seconds."""
    parts = ts.strip().split(":")
    if len(parts) != 3:
        msg = f"Invalid SRT timestamp: {ts!r}"
        raise ValueError(msg)
    h, m, rest = parts
    sec_ms = rest.split(",")
    if len(sec_ms) != 2:
        msg = f"Invalid SRT timestamp: {ts!r}"
        raise ValueError(msg)
    s, ms = sec_ms
    hours, minutes, seconds, millis = int(h), int(m), int(s), int(ms)
    if min(hours, minutes, seconds, millis) < 0:
        msg = f"Invalid SRT timestamp: {ts!r}"
        raise ValueError(msg)
    return hours * 3600 + minutes * 60 + seconds + millis / 1000.0


def parse_cue_timing(line: str, to_seconds: Callable[[str], float]) -> tuple[float, float]:
    """Parse a ``start --> end [settings]`` line into (start, duration)."""
    sides = line.strip().split(CUE_SEPARATOR)
    if len(sides) != 2:
        msg = f"Invalid cue timing line: {line!r}"
        raise ValueError(msg)
    end_fields = sides[1].split()
    if not end_fields:
        msg = f"Missing cue end time: {line!r}"
        raise ValueError(msg)
    start = to_seconds(sides[0])
    end = to_seconds(end_fields[0])
    if end < start:
        msg = f"Cue ends before it starts: {line!r}"
        raise ValueError(msg)
    return start, end - start


def format_timestamp(seconds: float) -> str:
    """Format seconds as M:SS for display (truncates, never rounds up)."""
    seconds = max(0.0, seconds)
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def _split_millis(seconds: float) -> tuple[int, int, int, int]:
    total_ms = int(round(max(0.0, seconds) * 1000))
    h, rem = divmod(total_ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return h, m, s, ms


def format_srt_timestamp(seconds: float) -> str:
    """Format seconds as HH:MM:SS,mmm."""
    h, m, s, ms = _split_millis(seconds)
    return f"{h:02}:{m:02}:{s:02},{ms:03}"


def format_vtt_timestamp(seconds: float) -> str:
    """Format seconds as HH:MM:SS.mmm."""
    h, m, s, ms = _split_millis(seconds)
    return f"{h:02}:{m:02}:{s:02}.{ms:03}"
