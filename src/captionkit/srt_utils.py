"""
SRT parsing and writing utilities.
"""

import logging
import re

from .models import Segment
from .timecodes import CUE_SEPARATOR, format_srt_timestamp, parse_cue_timing, srt_time_to_seconds

logger = logging.getLogger("captionkit")

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")


def to_srt(segments: list[Segment]) -> str:
    """Render segments as SRT text."""
    return "".join(
        f"{i}\n{format_srt_timestamp(s.start)} --> {format_srt_timestamp(s.end)}\n{s.text}\n\n"
        for i, s in enumerate(segments, 1)
    )


def write_srt(segments: list[Segment], path: str) -> None:
    """Write segments to SRT file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_srt(segments))


def parse_srt(content: str) -> list[Segment]:
    """Parse SRT text into segments.

    A block is ``index``, ``start --> end`` and one or more text lines.
    Blocks that are too short or carry a bad timing line are skipped.
    """
    raw = (content or "").replace("\r\n", "\n").replace("\r", "\n").strip()
    out: list[Segment] = []
    for b in _BLOCK_SPLIT_RE.split(raw):
        lines = [ln.strip() for ln in b.split("\n")]
        if len(lines) < 3:
            continue
        if CUE_SEPARATOR not in lines[1]:
            continue
        try:
            start, duration = parse_cue_timing(lines[1], srt_time_to_seconds)
        except ValueError as e:
            logger.debug("Skipping SRT block %r: %s", lines[0], e)
            continue
        text = " ".join(_TAG_RE.sub("", ln) for ln in lines[2:]).strip()
        text = " ".join(text.split())
        if not text:
            continue
        out.append(Segment(text=text, start=start, duration=duration))
    return out


def read_srt(path: str) -> list[Segment]:
    """Parse an SRT file."""
    with open(path, encoding="utf-8") as f:
        return parse_srt(f.read())
