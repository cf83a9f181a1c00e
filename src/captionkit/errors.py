"""
Exceptions raised by the caption pipeline.
"""

from .models import ExtractionAttempt


class CaptionKitError(RuntimeError):
    """Base class for all captionkit errors."""


class InvalidVideoReference(CaptionKitError, ValueError):
    """The given URL or id does not identify a video."""


class CaptionSourceError(CaptionKitError):
    """A caption source could not deliver a track."""


class NoTranscriptAvailable(CaptionKitError):
    """Every configured extraction method failed for a video."""

    def __init__(self, video_id: str, attempts: list[ExtractionAttempt]):
        self.video_id = video_id
        self.attempts = list(attempts)
        reasons = "; ".join(
            f"{a.method}: {a.error or 'no segments'}" for a in self.attempts
        )
        msg = f"No transcript available for {video_id}"
        if reasons:
            msg += f" ({reasons})"
        super().__init__(msg)
