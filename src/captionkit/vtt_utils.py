"""
WebVTT parsing.

By default the first text line after a timing line closes the cue, which
matches how auto-generated YouTube tracks are laid out (one line per cue,
the previous line repeated in the next cue). ``join_lines=True`` keeps
every text line of a cue and joins them the way the SRT parser does.
"""

import logging
import re

from .models import Segment
from .timecodes import CUE_SEPARATOR, format_vtt_timestamp, parse_cue_timing, vtt_time_to_seconds
from .timedtext import decode_entities

logger = logging.getLogger("captionkit")

_MARKUP_RE = re.compile(r"<[^>]*>")
_HEADER_PREFIXES = ("NOTE", "Kind:", "Language:")


def _clean_cue_text(line: str) -> str:
    text = decode_entities(_MARKUP_RE.sub("", line)).replace("&nbsp;", " ")
    return " ".join(text.split())


def parse_vtt(content: str, join_lines: bool = False) -> list[Segment]:
    """Parse a WebVTT payload into segments."""
    out: list[Segment] = []
    timing: tuple[float, float] | None = None
    texts: list[str] = []

    def close_cue() -> None:
        nonlocal timing, texts
        if timing is not None and texts:
            start, duration = timing
            out.append(Segment(text=" ".join(texts), start=start, duration=duration))
        timing = None
        texts = []

    for raw_line in (content or "").splitlines():
        line = raw_line.strip()

        if not line:
            close_cue()
            continue

        if CUE_SEPARATOR in line:
            close_cue()
            try:
                timing = parse_cue_timing(line, vtt_time_to_seconds)
            except ValueError as e:
                logger.debug("Skipping VTT cue with bad timing: %s", e)
            continue

        if timing is None:
            # header, NOTE/STYLE blocks, cue identifiers, text of a dropped cue
            continue
        if line == "WEBVTT" or line.startswith(_HEADER_PREFIXES):
            continue
        if "align:" in line or "position:" in line:
            continue

        text = _clean_cue_text(line)
        if not text:
            continue
        texts.append(text)
        if not join_lines:
            close_cue()

    close_cue()
    return out


def read_vtt(path: str, join_lines: bool = False) -> list[Segment]:
    """Parse a WebVTT file."""
    with open(path, encoding="utf-8") as f:
        return parse_vtt(f.read(), join_lines=join_lines)


def to_vtt(segments: list[Segment]) -> str:
    """Render segments as WebVTT text."""
    cues = "".join(
        f"{format_vtt_timestamp(s.start)} --> {format_vtt_timestamp(s.end)}\n{s.text}\n\n"
        for s in segments
    )
    return "WEBVTT\n\n" + cues


def write_vtt(segments: list[Segment], path: str) -> None:
    """Write segments to a WebVTT file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_vtt(segments))
