"""
Core modules for Muqassim.

This package contains the core logic for:
- Silence-based auto-segmentation of recitations
- The canonical annotation list and its numbering
- Syncing the annotation list onto a waveform overlay
- Export of the annotations as a JSON document

Primary API:
    from muqassim.core import AnnotationList, detect_regions, build_export

    annotations = AnnotationList()
    annotations.replace_with_regions(detect_regions(buffer))
    document = build_export(annotations, surah=1, audio="001.mp3")
"""

# Primary API - what most users need
from muqassim.core.annotations import AnnotationList
from muqassim.core.segmenter import segment, detect_regions, detect_regions_async
from muqassim.core.serializer import (
    build_export,
    default_export_filename,
    to_json,
    write_export,
)

# Overlay sync
from muqassim.core.reconciler import (
    OverlaySync,
    ReconcilePlan,
    RegionOverlay,
    apply_plan,
    kind_color,
    reconcile,
)

# Helpers
from muqassim.core.timefmt import format_time, parse_seconds

__all__ = [
    # Primary API
    "AnnotationList",
    "segment",
    "detect_regions",
    "detect_regions_async",
    "build_export",
    "default_export_filename",
    "to_json",
    "write_export",
    # Overlay sync
    "OverlaySync",
    "ReconcilePlan",
    "RegionOverlay",
    "apply_plan",
    "kind_color",
    "reconcile",
    # Helpers
    "format_time",
    "parse_seconds",
]
