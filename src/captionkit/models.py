"""
Data models for the caption normalization pipeline.
"""

from dataclasses import dataclass, field


class CaptionFormat:
    """Encoding tags of the raw caption payloads we know how to parse."""

    XML_TIMEDTEXT = "xml-timedtext"
    VTT = "vtt"
    SRT = "srt"

    ALL = (XML_TIMEDTEXT, VTT, SRT)


@dataclass
class Segment:
    """A single caption segment with timing and text."""

    text: str
    start: float  # seconds
    duration: float  # seconds

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass
class RawCaptionTrack:
    """An upstream caption payload before parsing."""

    payload: str
    format: str
    language: str | None = None


@dataclass
class FetchedCaptions:
    """Raw (not yet deduplicated) segments delivered by one caption source."""

    segments: list[Segment]
    language: str | None = None
    title: str | None = None


@dataclass
class ExtractionAttempt:
    """Outcome of trying one extraction method for one video."""

    method: str
    segment_count: int = 0
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.segment_count > 0


@dataclass(frozen=True)
class Transcript:
    """Canonical, deduplicated transcript of a video."""

    video_id: str
    url: str
    method: str
    segments: tuple[Segment, ...]
    title: str | None = None
    language: str | None = None
    attempts: tuple[ExtractionAttempt, ...] = field(default=(), compare=False)
