"""
Command-line interface for caption extraction.
"""

import argparse
import dataclasses
import logging
import os
import pathlib
import sys

from dotenv import load_dotenv

from .batch import extract_many
from .config import ExtractorConfig
from .errors import CaptionKitError, InvalidVideoReference, NoTranscriptAvailable
from .formatters import OUTPUT_FORMATS, render
from .orchestrator import TranscriptExtractor
from .sources import DEFAULT_ORDER

logger = logging.getLogger("captionkit")

_EXTENSIONS = {"text": "txt", "display": "txt", "srt": "srt", "vtt": "vtt", "json": "json"}


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    ap = argparse.ArgumentParser(description="Fetch and normalize YouTube captions")

    ap.add_argument("videos", nargs="+", help="YouTube URL(s) or video id(s)")

    # Sources
    ap.add_argument(
        "--methods",
        default=None,
        help=f"Comma-separated extraction methods in priority order (default: {','.join(DEFAULT_ORDER)})",
    )
    ap.add_argument(
        "--lang",
        action="append",
        default=None,
        help="Preferred caption language; repeat for fallbacks (default: $CAPTIONKIT_LANGUAGES or en)",
    )
    ap.add_argument("--yt-dlp", dest="yt_dlp", default=None, help="Path to the yt-dlp executable")
    ap.add_argument(
        "--vtt-join-lines",
        action="store_true",
        help="Keep every text line of a multi-line WebVTT cue instead of only the first",
    )

    # Output
    ap.add_argument("--format", choices=OUTPUT_FORMATS, default="display")
    ap.add_argument(
        "--output",
        default=None,
        help="Output file (one video) or directory (several videos); stdout if omitted",
    )
    ap.add_argument("--max-concurrent", type=_positive_int, default=4, help="Parallel videos in batch mode")

    # Logging
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    return ap.parse_args(argv)


def build_config(args: argparse.Namespace) -> ExtractorConfig:
    """Environment settings overridden by command-line flags."""
    config = ExtractorConfig.from_env()
    overrides = {}
    if args.lang:
        overrides["languages"] = tuple(args.lang)
    if args.yt_dlp:
        overrides["yt_dlp_path"] = args.yt_dlp
    if args.vtt_join_lines:
        overrides["vtt_join_lines"] = True
    return dataclasses.replace(config, **overrides)


def _emit(text: str, path: str | None) -> None:
    if path is None:
        sys.stdout.write(text + "\n")
        return
    pathlib.Path(path).parent.mkdir(parents=True, exist_ok=True)
    pathlib.Path(path).write_text(text + "\n", encoding="utf-8")
    logger.info(f"Saved transcript -> {path}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    # .env in the project root (parent of src), else the current directory
    project_root = pathlib.Path(__file__).parent.parent.parent
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()

    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = build_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    methods = [m.strip() for m in args.methods.split(",") if m.strip()] if args.methods else None
    try:
        extractor = TranscriptExtractor.from_config(config, methods)
    except ValueError as e:
        logger.error(str(e))
        return 2

    if len(args.videos) == 1:
        try:
            transcript = extractor.extract(args.videos[0])
        except InvalidVideoReference as e:
            logger.error(str(e))
            return 2
        except NoTranscriptAvailable as e:
            logger.error(str(e))
            return 1
        logger.info(f"Transcript for {transcript.video_id} via {transcript.method} ({len(transcript.segments)} segments)")
        _emit(render(transcript, args.format), args.output)
        return 0

    results = extract_many(extractor, args.videos, max_concurrent=args.max_concurrent, progress=not args.verbose)
    exit_code = 0
    for ref, result in zip(args.videos, results, strict=True):
        if isinstance(result, CaptionKitError):
            logger.error(f"{ref}: {result}")
            exit_code = max(exit_code, 2 if isinstance(result, InvalidVideoReference) else 1)
            continue
        if args.output:
            out_path = os.path.join(args.output, f"{result.video_id}.{_EXTENSIONS[args.format]}")
            _emit(render(result, args.format), out_path)
        else:
            _emit(f"# {result.video_id} ({result.method})\n{render(result, args.format)}\n", None)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
