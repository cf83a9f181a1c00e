"""
Upstream caption sources.

Each source turns a video id into raw (not yet deduplicated) segments, or
raises. Sources are ordered from cheapest to most expensive; the extractor
walks them in that order and stops at the first that yields anything.
"""

import contextlib
import json
import logging
import re
import subprocess
import tempfile
from collections.abc import Iterator
from pathlib import Path

import httpx
from youtube_transcript_api import YouTubeTranscriptApi

from .config import ExtractorConfig
from .errors import CaptionSourceError
from .models import CaptionFormat, FetchedCaptions, RawCaptionTrack, Segment
from .parsers import parse_track
from .timecodes import parse_decimal_seconds
from .timedtext import decode_entities
from .youtube import watch_url

logger = logging.getLogger("captionkit")

HOSTED_API_URL = "https://www.youtube-transcript.io/api/transcripts"

_CAPTION_TRACKS_KEY = '"captionTracks":'
_TITLE_RE = re.compile(r'<meta\s+name="title"\s+content="([^"]*)"')
_FMT_PARAM_RE = re.compile(r"&fmt=[^&]*")


class CaptionSource:
    """One way of getting captions for a video."""

    name = "source"

    def __init__(self, config: ExtractorConfig | None = None):
        self.config = config or ExtractorConfig()

    def fetch(self, video_id: str) -> FetchedCaptions:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class _HttpSource(CaptionSource):
    def __init__(self, config: ExtractorConfig | None = None, client: httpx.Client | None = None):
        super().__init__(config)
        self._client = client

    @contextlib.contextmanager
    def http(self) -> Iterator[httpx.Client]:
        """Injected client if any, else a short-lived one owned by this call."""
        if self._client is not None:
            yield self._client
            return
        with httpx.Client(
            timeout=self.config.http_timeout,
            headers={"User-Agent": self.config.user_agent, "Accept-Language": "en-US,en;q=0.9"},
            follow_redirects=True,
        ) as client:
            yield client


def _language_matches(code: str, lang: str) -> bool:
    code, lang = code.lower(), lang.lower()
    return code == lang or code.startswith(lang + "-")


def pick_caption_track(tracks: list[dict], languages: tuple[str, ...]) -> dict | None:
    """Prefer manual tracks over auto-generated ("asr") ones, in language order."""
    if not tracks:
        return None
    for lang in languages:
        manual = [
            t for t in tracks
            if _language_matches(t.get("languageCode", ""), lang) and t.get("kind") != "asr"
        ]
        if manual:
            return manual[0]
        generated = [t for t in tracks if _language_matches(t.get("languageCode", ""), lang)]
        if generated:
            return generated[0]
    return tracks[0]


def extract_caption_tracks(html: str) -> list[dict]:
    """Pull the ``captionTracks`` array out of a watch page's player response."""
    idx = html.find(_CAPTION_TRACKS_KEY)
    if idx == -1:
        return []
    start = html.find("[", idx)
    if start == -1:
        return []
    try:
        tracks, _ = json.JSONDecoder().raw_decode(html, start)
    except json.JSONDecodeError:
        logger.debug("Malformed captionTracks JSON")
        return []
    return [t for t in tracks if isinstance(t, dict) and t.get("baseUrl")]


class TimedTextSource(_HttpSource):
    """Caption-track XML listed in the watch page (cheapest: two GETs)."""

    name = "timedtext"

    def fetch(self, video_id: str) -> FetchedCaptions:
        with self.http() as client:
            page = client.get(watch_url(video_id))
            page.raise_for_status()
            html = page.text
            track_info = pick_caption_track(extract_caption_tracks(html), self.config.languages)
            if track_info is None:
                msg = "No caption tracks listed on watch page"
                raise CaptionSourceError(msg)

            language = track_info.get("languageCode")
            logger.debug("Using %s caption track (%s)", language, track_info.get("kind") or "manual")
            resp = client.get(_FMT_PARAM_RE.sub("", track_info["baseUrl"]))
            resp.raise_for_status()

        track = RawCaptionTrack(payload=resp.text, format=CaptionFormat.XML_TIMEDTEXT, language=language)
        m = _TITLE_RE.search(html)
        title = decode_entities(m.group(1)) if m else None
        return FetchedCaptions(segments=parse_track(track), language=language, title=title)


class TranscriptApiSource(CaptionSource):
    """The youtube-transcript-api library."""

    name = "youtube-transcript-api"

    def __init__(self, config: ExtractorConfig | None = None, api: YouTubeTranscriptApi | None = None):
        super().__init__(config)
        self._api = api

    def fetch(self, video_id: str) -> FetchedCaptions:
        api = self._api or YouTubeTranscriptApi()
        fetched = api.fetch(video_id, languages=list(self.config.languages))
        segments: list[Segment] = []
        for snippet in fetched:
            text = (snippet.text or "").strip()
            if not text:
                continue
            try:
                start = parse_decimal_seconds(snippet.start)
                duration = parse_decimal_seconds(snippet.duration)
            except (TypeError, ValueError) as e:
                logger.debug("Dropping transcript snippet %r: %s", text[:40], e)
                continue
            segments.append(Segment(text=text, start=start, duration=duration))
        return FetchedCaptions(segments=segments, language=getattr(fetched, "language_code", None))


class HostedApiSource(_HttpSource):
    """youtube-transcript.io hosted API (needs a token)."""

    name = "transcript-api"

    def fetch(self, video_id: str) -> FetchedCaptions:
        token = self.config.api_token
        if not token:
            msg = "YouTube Transcript API token not configured"
            raise CaptionSourceError(msg)

        with self.http() as client:
            resp = client.post(
                HOSTED_API_URL,
                headers={"Authorization": f"Basic {token}"},
                json={"ids": [video_id]},
            )
        if not resp.is_success:
            msg = f"YouTube Transcript API failed: {resp.status_code} - {resp.text[:200]}"
            raise CaptionSourceError(msg)

        data = resp.json()
        video_data = data[0] if isinstance(data, list) and data else None
        if not video_data:
            msg = "No video data in API response"
            raise CaptionSourceError(msg)
        tracks = video_data.get("tracks") or []
        if not tracks:
            msg = "No transcript tracks found for this video"
            raise CaptionSourceError(msg)

        segments: list[Segment] = []
        for item in tracks[0].get("transcript") or []:
            text = decode_entities(str(item.get("text", ""))).strip()
            if not text:
                continue
            try:
                start = parse_decimal_seconds(item.get("start"))
                duration = parse_decimal_seconds(item.get("dur", 0))
            except (TypeError, ValueError) as e:
                logger.debug("Dropping API record %r: %s", text[:40], e)
                continue
            segments.append(Segment(text=text, start=start, duration=duration))
        return FetchedCaptions(
            segments=segments,
            language=tracks[0].get("language"),
            title=video_data.get("title"),
        )


def run(cmd: list[str], *, timeout: float | None = None) -> str:
    """Run an external command and return its output."""
    logger.debug("Running: %s", " ".join(map(str, cmd)))
    try:
        proc = subprocess.run(
            cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, check=False, timeout=timeout
        )
    except FileNotFoundError as e:
        msg = f"Executable not found: {cmd[0]}"
        raise CaptionSourceError(msg) from e
    except subprocess.TimeoutExpired as e:
        msg = f"{cmd[0]} timed out after {timeout}s"
        raise CaptionSourceError(msg) from e
    if proc.returncode != 0:
        logger.debug("Command failed with code %d: %s", proc.returncode, proc.stdout)
        msg = f"{cmd[0]} failed with code {proc.returncode}"
        raise CaptionSourceError(msg)
    return proc.stdout


def _subtitle_language(path: Path, video_id: str) -> str | None:
    # <video_id>.<lang>.<ext>
    stem = path.name[: -len(path.suffix)] if path.suffix else path.name
    return stem[len(video_id):].lstrip(".") or None


def pick_subtitle_file(files: list[Path], video_id: str, languages: tuple[str, ...]) -> Path | None:
    if not files:
        return None
    files = sorted(files)
    for lang in languages:
        for f in files:
            if _subtitle_language(f, video_id) == lang:
                return f
        for f in files:
            if _language_matches(_subtitle_language(f, video_id) or "", lang):
                return f
    return files[0]


class YtDlpSource(CaptionSource):
    """yt-dlp subtitle download (most expensive: spawns a process)."""

    name = "yt-dlp"

    def fetch(self, video_id: str) -> FetchedCaptions:
        # per-video temp dir so concurrent extractions never share files
        with tempfile.TemporaryDirectory(prefix=f"captionkit-{video_id}-", dir=self.config.temp_dir) as tmp:
            cmd = [
                self.config.yt_dlp_path,
                "--skip-download",
                "--write-subs",
                "--write-auto-subs",
                "--sub-langs", ",".join(self.config.languages),
                "--sub-format", "vtt/srt/best",
                "--no-playlist",
                "-o", str(Path(tmp) / f"{video_id}.%(ext)s"),
                watch_url(video_id),
            ]
            run(cmd, timeout=self.config.process_timeout)

            files = [p for p in Path(tmp).glob(f"{video_id}*") if p.suffix in (".vtt", ".srt")]
            path = pick_subtitle_file(files, video_id, self.config.languages)
            if path is None:
                msg = "yt-dlp produced no subtitle file"
                raise CaptionSourceError(msg)
            payload = path.read_text(encoding="utf-8", errors="replace")

        fmt = CaptionFormat.VTT if path.suffix == ".vtt" else CaptionFormat.SRT
        language = _subtitle_language(path, video_id)
        track = RawCaptionTrack(payload=payload, format=fmt, language=language)
        segments = parse_track(track, vtt_join_lines=self.config.vtt_join_lines)
        return FetchedCaptions(segments=segments, language=language)


SOURCE_TYPES: dict[str, type[CaptionSource]] = {
    TimedTextSource.name: TimedTextSource,
    TranscriptApiSource.name: TranscriptApiSource,
    HostedApiSource.name: HostedApiSource,
    YtDlpSource.name: YtDlpSource,
}
DEFAULT_ORDER = ("timedtext", "youtube-transcript-api", "transcript-api", "yt-dlp")


def build_sources(config: ExtractorConfig, names: list[str] | None = None) -> list[CaptionSource]:
    """Instantiate sources in priority order.

    Without ``names`` the default order is used and the hosted API is left
    out unless a token is configured.
    """
    if names is None:
        names = [n for n in DEFAULT_ORDER if n != HostedApiSource.name or config.api_token]
    unknown = [n for n in names if n not in SOURCE_TYPES]
    if unknown:
        msg = f"Unknown extraction method(s): {', '.join(unknown)}"
        raise ValueError(msg)
    return [SOURCE_TYPES[n](config) for n in names]
