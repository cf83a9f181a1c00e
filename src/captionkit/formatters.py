"""
Read-only views over a canonical transcript.
"""

import json
from collections.abc import Iterable

from .models import Segment, Transcript
from .srt_utils import to_srt
from .timecodes import format_timestamp
from .vtt_utils import to_vtt

OUTPUT_FORMATS = ("text", "display", "srt", "vtt", "json")


def _segments(value: Transcript | Iterable[Segment]) -> Iterable[Segment]:
    return value.segments if isinstance(value, Transcript) else value


def get_full_text(value: Transcript | Iterable[Segment]) -> str:
    """All segment texts joined by a single space."""
    return " ".join(s.text for s in _segments(value))


def format_transcript_for_display(value: Transcript | Iterable[Segment]) -> str:
    """One ``[M:SS] text`` line per segment."""
    return "\n".join(f"[{format_timestamp(s.start)}] {s.text}" for s in _segments(value))


def transcript_to_dict(transcript: Transcript) -> dict:
    return {
        "video_id": transcript.video_id,
        "url": transcript.url,
        "title": transcript.title,
        "language": transcript.language,
        "method": transcript.method,
        "segments": [
            {"text": s.text, "start": s.start, "duration": s.duration} for s in transcript.segments
        ],
    }


def write_json(transcript: Transcript, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(transcript_to_dict(transcript), f, ensure_ascii=False, indent=2)


def render(transcript: Transcript, fmt: str) -> str:
    """Render a transcript in one of OUTPUT_FORMATS."""
    if fmt == "text":
        return get_full_text(transcript)
    if fmt == "display":
        return format_transcript_for_display(transcript)
    if fmt == "srt":
        return to_srt(list(transcript.segments))
    if fmt == "vtt":
        return to_vtt(list(transcript.segments))
    if fmt == "json":
        return json.dumps(transcript_to_dict(transcript), ensure_ascii=False, indent=2)
    msg = f"Unknown output format: {fmt}"
    raise ValueError(msg)
