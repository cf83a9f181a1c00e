"""
Transcript extraction: try caption sources in priority order, normalize the
first one that yields segments.
"""

import logging

from .config import ExtractorConfig
from .dedup import deduplicate_segments
from .errors import NoTranscriptAvailable
from .models import ExtractionAttempt, FetchedCaptions, Transcript
from .sources import CaptionSource, build_sources
from .youtube import extract_video_id, watch_url

logger = logging.getLogger("captionkit")


def run_attempt(source: CaptionSource, video_id: str) -> tuple[ExtractionAttempt, FetchedCaptions | None]:
    """Run one source to completion and report the outcome; never raises."""
    try:
        fetched = source.fetch(video_id)
    except Exception as e:
        logger.warning("Method %s failed for %s: %s", source.name, video_id, e)
        return ExtractionAttempt(method=source.name, error=f"{type(e).__name__}: {e}"), None

    count = len(fetched.segments) if fetched else 0
    if not count:
        logger.warning("Method %s returned no segments for %s", source.name, video_id)
        return ExtractionAttempt(method=source.name, error="no segments"), None
    return ExtractionAttempt(method=source.name, segment_count=count), fetched


class TranscriptExtractor:
    """Sequential fallback over a fixed list of caption sources.

    Holds no per-call state, so one instance can serve concurrent requests.
    """

    def __init__(self, sources: list[CaptionSource], config: ExtractorConfig | None = None):
        self.sources = list(sources)
        self.config = config or ExtractorConfig()

    @classmethod
    def from_config(cls, config: ExtractorConfig, methods: list[str] | None = None) -> "TranscriptExtractor":
        return cls(build_sources(config, methods), config)

    @property
    def methods(self) -> list[str]:
        return [s.name for s in self.sources]

    def extract(self, video_ref: str) -> Transcript:
        """Return the canonical transcript for a video URL or id.

        Raises InvalidVideoReference before any source runs if ``video_ref``
        is not a video, and NoTranscriptAvailable once every source failed.
        """
        video_id = extract_video_id(video_ref)
        logger.info("Extracting transcript for %s (methods: %s)", video_id, ", ".join(self.methods))

        attempts: list[ExtractionAttempt] = []
        for source in self.sources:
            attempt, fetched = run_attempt(source, video_id)
            attempts.append(attempt)
            if fetched is None:
                continue

            segments = deduplicate_segments(fetched.segments)
            logger.info(
                "Method %s: %d raw -> %d segments", source.name, attempt.segment_count, len(segments)
            )
            return Transcript(
                video_id=video_id,
                url=watch_url(video_id),
                method=source.name,
                segments=tuple(segments),
                title=fetched.title,
                language=fetched.language,
                attempts=tuple(attempts),
            )

        raise NoTranscriptAvailable(video_id, attempts)
