"""
YouTube video references: URL parsing and canonical watch URLs.
"""

import re

from .errors import InvalidVideoReference

_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
_URL_PATTERNS = (
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/|youtube\.com/shorts/)"
        r"([^&\n?#/]+)"
    ),
    re.compile(r"youtube\.com/watch\?.*?v=([^&\n?#/]+)"),
)


def extract_video_id(ref: str) -> str:
    """Return the video id for a YouTube URL or a bare 11-character id."""
    ref = (ref or "").strip()
    if _ID_RE.match(ref):
        return ref
    for pattern in _URL_PATTERNS:
        m = pattern.search(ref)
        if m and m.group(1):
            return m.group(1)
    msg = f"Could not extract video ID from: {ref!r}"
    raise InvalidVideoReference(msg)


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"
