"""
Concurrent extraction of several videos.

Each request runs the (blocking) extractor in a worker thread; the methods
inside one request are still tried one at a time.
"""

import asyncio
import logging

from tqdm.asyncio import tqdm

from .errors import CaptionKitError
from .models import Transcript
from .orchestrator import TranscriptExtractor

logger = logging.getLogger("captionkit")


async def extract_many_async(
    extractor: TranscriptExtractor,
    video_refs: list[str],
    max_concurrent: int = 4,
    progress: bool = True,
) -> list[Transcript | CaptionKitError]:
    """Extract transcripts with a concurrency limit; results keep input order.

    Per-video failures are returned in place of the transcript, not raised.
    """
    if max_concurrent < 1:
        msg = f"max_concurrent must be at least 1, got {max_concurrent}"
        raise ValueError(msg)
    semaphore = asyncio.Semaphore(max_concurrent)

    async def extract_one(ref: str) -> Transcript | CaptionKitError:
        async with semaphore:
            try:
                return await asyncio.to_thread(extractor.extract, ref)
            except CaptionKitError as e:
                logger.warning("Extraction failed for %s: %s", ref, e)
                return e

    tasks = [extract_one(ref) for ref in video_refs]
    return await tqdm.gather(*tasks, desc="Extracting transcripts", disable=not progress)


def extract_many(
    extractor: TranscriptExtractor,
    video_refs: list[str],
    max_concurrent: int = 4,
    progress: bool = True,
) -> list[Transcript | CaptionKitError]:
    """Sync wrapper around extract_many_async."""
    return asyncio.run(extract_many_async(extractor, video_refs, max_concurrent, progress))
