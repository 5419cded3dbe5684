"""
Export of an annotation list to the JSON timings document.
"""

import json
import logging
from pathlib import Path
from typing import Iterable

from muqassim.core.timefmt import parse_int
from muqassim.exceptions import ExportError
from muqassim.models import (
    AameenEntry,
    AyahEntry,
    ExportDocument,
    Segment,
    SegmentKind,
    Surah,
)

logger = logging.getLogger(__name__)


def _entry_time(segment: Segment, field: str, strict: bool) -> float:
    value = getattr(segment, field)
    if value is not None:
        return value
    if strict:
        raise ExportError(f"{segment} has no {field} time")
    logger.warning("%s has no %s time, exporting 0", segment, field)
    return 0.0


def segment_to_entry(segment: Segment, strict: bool = False) -> AyahEntry | AameenEntry:
    """Build the tagged export entry for one segment."""
    start = _entry_time(segment, "start", strict)
    end = _entry_time(segment, "end", strict)
    if end < start:
        logger.warning("%s ends before it starts", segment)

    if segment.kind == SegmentKind.AAMEEN:
        return AameenEntry(start=start, end=end)
    if segment.ordinal is None:
        raise ExportError(f"{segment} has no ordinal")
    return AyahEntry(ayah=segment.ordinal, start=start, end=end)


def build_export(
    segments: Iterable[Segment],
    surah: str | int | None = None,
    surah_name: str = "",
    audio: str | Path | None = None,
    strict: bool = False,
) -> ExportDocument:
    """
    Build the export document from the current segments.

    The segments are copied before anything is read, so later edits to the
    list cannot leak into the document.

    Args:
        segments: Segments in list order (usually an AnnotationList)
        surah: Surah number, as typed; unparsable or missing becomes 0
        surah_name: Surah name; filled from metadata when empty and the
            surah number is valid
        audio: Source audio file name or path ("" if none)
        strict: Raise ExportError for missing times instead of exporting 0

    Returns:
        ExportDocument ready for serialization
    """
    snapshot = [segment.model_copy(deep=True) for segment in segments]
    surah_id = parse_int(surah, default=0)

    if not surah_name and Surah.is_valid_id(surah_id):
        surah_name = Surah.from_id(surah_id).name_arabic

    document = ExportDocument(
        surah=surah_id,
        surah_name=surah_name,
        audio=Path(audio).name if audio else "",
        ayahs=[segment_to_entry(segment, strict=strict) for segment in snapshot],
    )

    if Surah.is_valid_id(surah_id):
        expected = Surah.from_id(surah_id).total_ayahs
        if document.ayah_count != expected:
            logger.warning(
                "Surah %d has %d ayahs but %d are marked",
                surah_id, expected, document.ayah_count,
            )
    return document


def to_json(document: ExportDocument) -> str:
    """Serialize a document as indented JSON, keeping Arabic text readable."""
    return json.dumps(document.to_dict(), ensure_ascii=False, indent=2)


def default_export_filename(surah_name: str = "") -> str:
    """Suggested file name for an export: "<name>_timings.json"."""
    return f"{surah_name or 'surah'}_timings.json"


def write_export(document: ExportDocument, path: str | Path) -> Path:
    """
    Write a document to disk as UTF-8 JSON.

    Raises:
        ExportError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(to_json(document), encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e

    logger.info("Saved %d entries to %s", len(document.ayahs), path)
    return path
