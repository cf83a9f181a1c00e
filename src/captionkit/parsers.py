"""
Dispatch a raw caption track to the parser for its encoding.
"""

import logging

from .models import CaptionFormat, RawCaptionTrack, Segment
from .srt_utils import parse_srt
from .timedtext import parse_timedtext
from .vtt_utils import parse_vtt

logger = logging.getLogger("captionkit")


def parse_track(track: RawCaptionTrack, *, vtt_join_lines: bool = False) -> list[Segment]:
    """Parse a raw track into raw segments; never raises."""
    if track.format not in CaptionFormat.ALL:
        logger.warning("Unsupported caption format: %s", track.format)
        return []
    try:
        if track.format == CaptionFormat.XML_TIMEDTEXT:
            segments = parse_timedtext(track.payload)
        elif track.format == CaptionFormat.VTT:
            segments = parse_vtt(track.payload, join_lines=vtt_join_lines)
        else:
            segments = parse_srt(track.payload)
    except Exception as e:
        logger.warning("Failed to parse %s track: %s", track.format, e)
        return []
    logger.debug("Parsed %d raw segments from %s track", len(segments), track.format)
    return segments
