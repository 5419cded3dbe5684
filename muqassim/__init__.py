"""
مُقَسِّم (Muqassim): mark ayah boundaries in Quran recitations.

Usage:
    from muqassim import AnnotationList, detect_regions, load_audio, build_export

    # Auto-segment on silences
    buffer = load_audio("001.mp3")
    annotations = AnnotationList()
    annotations.replace_with_regions(detect_regions(buffer))

    # Manual corrections
    annotations.add_aameen(41.2, 42.9)
    annotations.update_field(annotations[0].id, "start", 0.35)

    # Export
    document = build_export(annotations, surah="1", audio="001.mp3")
    for entry in document.ayahs:
        print(entry)
"""

from muqassim.models import (
    AameenEntry,
    AyahEntry,
    ExportDocument,
    OverlayRegion,
    Region,
    RegionUpdate,
    Segment,
    SegmentKind,
    Surah,
)
from muqassim.config import MuqassimSettings, get_settings, configure
from muqassim.exceptions import (
    MuqassimError,
    AudioFileError,
    SegmentationError,
    EncodingError,
    ExportError,
)
from muqassim.audio import (
    AudioBuffer,
    load_audio,
    audio_buffer_to_mp3,
    audio_buffer_to_wav,
    slice_buffer,
)
from muqassim.core import (
    AnnotationList,
    OverlaySync,
    build_export,
    detect_regions,
    reconcile,
    segment,
    to_json,
)
from muqassim.session import AnnotationSession

__version__ = "1.0.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "Segment",
    "SegmentKind",
    "Region",
    "OverlayRegion",
    "RegionUpdate",
    "Surah",
    "AyahEntry",
    "AameenEntry",
    "ExportDocument",
    # Config
    "MuqassimSettings",
    "get_settings",
    "configure",
    # Exceptions
    "MuqassimError",
    "AudioFileError",
    "SegmentationError",
    "EncodingError",
    "ExportError",
    # Audio
    "AudioBuffer",
    "load_audio",
    "audio_buffer_to_mp3",
    "audio_buffer_to_wav",
    "slice_buffer",
    # Core
    "AnnotationList",
    "OverlaySync",
    "build_export",
    "detect_regions",
    "reconcile",
    "segment",
    "to_json",
    # Session
    "AnnotationSession",
]
