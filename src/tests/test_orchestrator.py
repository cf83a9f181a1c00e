"""
Tests for the source fallback orchestrator.
"""

import pytest

from captionkit.config import ExtractorConfig
from captionkit.errors import InvalidVideoReference, NoTranscriptAvailable
from captionkit.models import FetchedCaptions, Segment
from captionkit.orchestrator import TranscriptExtractor, run_attempt
from captionkit.sources import TimedTextSource, YtDlpSource

VIDEO_ID = "dQw4w9WgXcQ"


class FakeSource:
    """Caption source stub that records its calls."""

    def __init__(self, name, segments=None, error=None, title=None):
        self.name = name
        self.segments = segments or []
        self.error = error
        self.title = title
        self.calls = []

    def fetch(self, video_id):
        self.calls.append(video_id)
        if self.error:
            raise self.error
        return FetchedCaptions(segments=list(self.segments), language="en", title=self.title)


def _segments():
    return [
        Segment(text="hello world", start=1.0, duration=3.0),
        Segment(text="hello world again", start=1.5, duration=3.0),
        Segment(text="goodbye world", start=6.0, duration=3.5),
    ]


def test_fallback_ordering():
    """Test throw -> empty -> success, and that later methods are never run."""
    first = FakeSource("one", error=RuntimeError("boom"))
    second = FakeSource("two")
    third = FakeSource("three", segments=_segments(), title="A video")
    fourth = FakeSource("four", segments=_segments())

    extractor = TranscriptExtractor([first, second, third, fourth])
    transcript = extractor.extract(f"https://www.youtube.com/watch?v={VIDEO_ID}&t=10")

    assert transcript.method == "three"
    assert transcript.video_id == VIDEO_ID
    assert transcript.url == f"https://www.youtube.com/watch?v={VIDEO_ID}"
    assert transcript.title == "A video"
    assert transcript.language == "en"
    assert first.calls == second.calls == third.calls == [VIDEO_ID]
    assert fourth.calls == []

    assert [a.method for a in transcript.attempts] == ["one", "two", "three"]
    assert "boom" in transcript.attempts[0].error
    assert transcript.attempts[1].error == "no segments"
    assert transcript.attempts[2].succeeded
    assert transcript.attempts[2].segment_count == 3


def test_extract_deduplicates():
    """Test that the adopted method's segments are deduplicated."""
    extractor = TranscriptExtractor([FakeSource("only", segments=_segments())])

    transcript = extractor.extract(VIDEO_ID)

    assert [s.text for s in transcript.segments] == ["hello world again", "goodbye world"]
    assert isinstance(transcript.segments, tuple)


def test_all_methods_exhausted():
    """Test the single terminal error."""
    sources = [FakeSource("one", error=ValueError("bad payload")), FakeSource("two")]
    extractor = TranscriptExtractor(sources)

    with pytest.raises(NoTranscriptAvailable) as excinfo:
        extractor.extract(VIDEO_ID)

    err = excinfo.value
    assert err.video_id == VIDEO_ID
    assert [a.method for a in err.attempts] == ["one", "two"]
    assert "No transcript available" in str(err)
    assert "bad payload" in str(err)


def test_no_sources_configured():
    """Test an empty method list."""
    with pytest.raises(NoTranscriptAvailable):
        TranscriptExtractor([]).extract(VIDEO_ID)


def test_invalid_reference_runs_no_source():
    """Test that input validation happens before any method runs."""
    source = FakeSource("one", segments=_segments())

    with pytest.raises(InvalidVideoReference):
        TranscriptExtractor([source]).extract("https://example.com/not-a-video")

    assert source.calls == []


def test_run_attempt_never_raises():
    """Test the attempt/outcome value for each case."""
    attempt, fetched = run_attempt(FakeSource("x", error=KeyError("tracks")), VIDEO_ID)
    assert not attempt.succeeded
    assert fetched is None
    assert "KeyError" in attempt.error

    attempt, fetched = run_attempt(FakeSource("y", segments=_segments()), VIDEO_ID)
    assert attempt.succeeded
    assert len(fetched.segments) == 3


def test_from_config_builds_default_chain():
    """Test default method order from configuration."""
    extractor = TranscriptExtractor.from_config(ExtractorConfig())

    assert extractor.methods == ["timedtext", "youtube-transcript-api", "yt-dlp"]
    assert isinstance(extractor.sources[0], TimedTextSource)
    assert isinstance(extractor.sources[-1], YtDlpSource)

    with_token = TranscriptExtractor.from_config(ExtractorConfig(api_token="secret"))
    assert with_token.methods == ["timedtext", "youtube-transcript-api", "transcript-api", "yt-dlp"]

    custom = TranscriptExtractor.from_config(ExtractorConfig(), ["yt-dlp", "timedtext"])
    assert custom.methods == ["yt-dlp", "timedtext"]

    with pytest.raises(ValueError):
        TranscriptExtractor.from_config(ExtractorConfig(), ["carrier-pigeon"])
