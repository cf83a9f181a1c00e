"""
Caption-track XML ("timedtext") parsing.

A track looks like::

    <transcript>
      <text start="0.5" dur="2.1">Q&amp;A &lt;session&gt;</text>
      ...
    </transcript>
"""

import logging
import re

from .models import Segment
from .timecodes import parse_decimal_seconds

logger = logging.getLogger("captionkit")

_TEXT_RE = re.compile(r"<text\b([^>]*?)(?:/>|>(.*?)</text\s*>)", re.S | re.I)
_ATTR_RE = re.compile(r"([\w:-]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")
_TAG_RE = re.compile(r"<[^>]+>")

# &amp; goes last so "&amp;lt;" decodes once, to "&lt;"
_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)


def decode_entities(text: str) -> str:
    """Decode the five standard XML character entities."""
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def _attributes(raw: str) -> dict[str, str]:
    return {
        m.group(1).lower(): m.group(2) if m.group(2) is not None else m.group(3)
        for m in _ATTR_RE.finditer(raw)
    }


def parse_timedtext(xml: str) -> list[Segment]:
    """Parse caption-track XML into segments, in source order."""
    out: list[Segment] = []
    for m in _TEXT_RE.finditer(xml or ""):
        attrs = _attributes(m.group(1))
        inner = _TAG_RE.sub("", m.group(2) or "")
        text = decode_entities(inner).strip()
        if not text:
            continue
        try:
            start = parse_decimal_seconds(attrs["start"])
            duration = parse_decimal_seconds(attrs.get("dur", "0"))
        except (KeyError, ValueError) as e:
            logger.debug("Dropping timedtext cue %r: %s", text[:40], e)
            continue
        out.append(Segment(text=text, start=start, duration=duration))
    return out
