"""
Extraction configuration.

Components receive an ExtractorConfig explicitly; only ``from_env`` looks
at the process environment.
"""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
_TOKEN_PLACEHOLDER = "your_transcript_api_token_here"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        msg = f"{name} must be a number, got {raw!r}"
        raise ValueError(msg) from None


@dataclass(frozen=True)
class ExtractorConfig:
    """Settings shared by the caption sources and the extractor."""

    languages: tuple[str, ...] = ("en",)
    yt_dlp_path: str = "yt-dlp"
    api_token: str | None = None
    http_timeout: float = 30.0
    process_timeout: float | None = None  # no internal deadline by default
    vtt_join_lines: bool = False
    temp_dir: str | None = None
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "ExtractorConfig":
        """Build a config from environment variables (call load_dotenv first)."""
        langs = os.getenv("CAPTIONKIT_LANGUAGES", "")
        languages = tuple(x.strip() for x in langs.split(",") if x.strip()) or ("en",)
        token = os.getenv("YOUTUBE_TRANSCRIPT_API_TOKEN", "").strip()
        if token == _TOKEN_PLACEHOLDER:
            token = ""
        return cls(
            languages=languages,
            yt_dlp_path=os.getenv("CAPTIONKIT_YT_DLP", "yt-dlp"),
            api_token=token or None,
            http_timeout=_env_float("CAPTIONKIT_HTTP_TIMEOUT", 30.0),
            process_timeout=_env_float("CAPTIONKIT_PROCESS_TIMEOUT", None),
            vtt_join_lines=_env_flag("CAPTIONKIT_VTT_JOIN_LINES"),
            temp_dir=os.getenv("CAPTIONKIT_TEMP_DIR") or None,
        )
