"""
Pydantic data models for Muqassim.

These models represent the core data structures used throughout the library:
- Segment: An annotated ayah or aameen time region
- Region: A raw (start, end) pair produced by auto-segmentation
- OverlayRegion: Mirrored state of a region on the waveform overlay
- Surah: Surah metadata
- ExportDocument: The JSON timings document
"""

from muqassim.models.segment import Segment, SegmentKind, TimeField
from muqassim.models.region import Region, OverlayRegion, RegionUpdate
from muqassim.models.surah import Surah
from muqassim.models.export import AyahEntry, AameenEntry, ExportDocument

__all__ = [
    "Segment",
    "SegmentKind",
    "TimeField",
    "Region",
    "OverlayRegion",
    "RegionUpdate",
    "Surah",
    "AyahEntry",
    "AameenEntry",
    "ExportDocument",
]
