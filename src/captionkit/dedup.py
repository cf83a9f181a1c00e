"""
Collapse the overlapping refinements that auto-generated captions emit.

Single greedy left-to-right pass: each incoming segment is compared only
with the current survivor. It is folded into it when the word sets are
similar enough or the two start within a short window of each other; the
longer text wins and the shorter segment is dropped whole (timing is not
merged into a range). On equal length the current survivor is kept.
"""

import logging

from .models import Segment

logger = logging.getLogger("captionkit")

SIMILARITY_THRESHOLD = 0.7
PROXIMITY_SECONDS = 2.0


def tokenize(text: str) -> set[str]:
    """Lowercased whitespace-separated words."""
    return set(text.lower().split())


def jaccard_similarity(a: str, b: str) -> float:
    """Jaccard index of the word sets of two texts (0.0 if both are empty)."""
    words_a, words_b = tokenize(a), tokenize(b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def _is_refinement(
    current: Segment, nxt: Segment, similarity_threshold: float, proximity_seconds: float
) -> bool:
    if jaccard_similarity(current.text, nxt.text) > similarity_threshold:
        return True
    return abs(nxt.start - current.start) < proximity_seconds


def deduplicate_segments(
    segments: list[Segment],
    *,
    similarity_threshold: float = SIMILARITY_THRESHOLD,
    proximity_seconds: float = PROXIMITY_SECONDS,
) -> list[Segment]:
    """Return the canonical, non-redundant sequence for time-ordered raw segments."""
    if not segments:
        return []

    out: list[Segment] = []
    current = segments[0]
    for nxt in segments[1:]:
        if _is_refinement(current, nxt, similarity_threshold, proximity_seconds):
            if len(nxt.text) > len(current.text):
                current = nxt
        else:
            out.append(current)
            current = nxt
    out.append(current)

    reduction = round((1 - len(out) / len(segments)) * 100)
    logger.debug(
        "Deduplication: %d -> %d segments (%d%% reduction)", len(segments), len(out), reduction
    )
    return out
