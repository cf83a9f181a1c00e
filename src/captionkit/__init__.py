"""
captionkit - YouTube caption extraction and normalization.

A small pipeline for:
- Fetching caption tracks from several upstream sources, cheapest first
- Parsing caption-track XML, WebVTT and SRT into timed segments
- Collapsing the overlapping refinements of auto-generated captions
- Rendering transcripts as plain text, [M:SS] lines, SRT, WebVTT or JSON
"""

__version__ = "0.1.0"
