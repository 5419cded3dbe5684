"""
The canonical, ordered list of annotated segments.

Invariants kept by every operation:
- at most one aameen segment;
- ayah ordinals read in list order are exactly 1..N;
- segment ids are unique.

Structural mutations (insert, remove, reorder) re-derive the ordinals of
the whole list. Field updates never do: ordinals depend on order only.
Operations addressing an unknown id are no-ops that return False.
"""

import logging
from typing import Iterable, Iterator

from muqassim.core.timefmt import parse_seconds
from muqassim.models import Region, Segment, SegmentKind, TimeField

logger = logging.getLogger(__name__)

TIME_FIELDS: tuple[str, ...] = ("start", "end")


def _check_field(field: str) -> None:
    if field not in TIME_FIELDS:
        raise ValueError(f"Invalid field: {field!r}. Must be 'start' or 'end'.")


class AnnotationList:
    """
    Owns the ordered segments of one recitation.

    Example:
        annotations = AnnotationList()
        first = annotations.add_ayah(0.0, 4.2)
        annotations.add_ayah(4.5, 9.0)
        annotations.add_aameen(9.3, 10.1)
        annotations.reorder(first.id, 1)
        [s.ordinal for s in annotations]  # [1, 2, None]
    """

    def __init__(self, segments: Iterable[Segment] | None = None):
        self._segments: list[Segment] = []
        if segments is not None:
            seen: set[str] = set()
            has_aameen = False
            for segment in segments:
                if segment.id in seen:
                    raise ValueError(f"Duplicate segment id: {segment.id}")
                if segment.is_aameen:
                    if has_aameen:
                        raise ValueError("Only one aameen segment is allowed")
                    has_aameen = True
                seen.add(segment.id)
                self._segments.append(segment)
            self.reindex()

    # ============ Queries ============

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(list(self._segments))

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    @property
    def segments(self) -> list[Segment]:
        """Shallow copy of the list, in order."""
        return list(self._segments)

    @property
    def ayah_count(self) -> int:
        return sum(1 for s in self._segments if s.kind == SegmentKind.AYAH)

    @property
    def aameen(self) -> Segment | None:
        """The aameen segment, if one exists."""
        for segment in self._segments:
            if segment.is_aameen:
                return segment
        return None

    def index_of(self, segment_id: str) -> int | None:
        for i, segment in enumerate(self._segments):
            if segment.id == segment_id:
                return i
        return None

    def get(self, segment_id: str) -> Segment | None:
        index = self.index_of(segment_id)
        return None if index is None else self._segments[index]

    def snapshot(self) -> list[Segment]:
        """Independent copies of every segment, for export."""
        return [segment.model_copy(deep=True) for segment in self._segments]

    # ============ Structural mutations ============

    def reindex(self) -> None:
        """Number ayahs 1..N in list order; aameen carries no ordinal."""
        count = 1
        for segment in self._segments:
            if segment.kind == SegmentKind.AYAH:
                segment.ordinal = count
                count += 1
            else:
                segment.ordinal = None

    def add_ayah(
        self,
        start: float | None,
        end: float | None,
        after_index: int | None = None,
    ) -> Segment:
        """
        Create an ayah segment.

        Args:
            start: Start time in seconds (None if not captured)
            end: End time in seconds (None if not captured)
            after_index: Insert right after this position; append if None

        Returns:
            The new segment, already numbered
        """
        segment = Segment(kind=SegmentKind.AYAH, start=start, end=end)
        if after_index is None:
            self._segments.append(segment)
        else:
            position = min(max(after_index + 1, 0), len(self._segments))
            self._segments.insert(position, segment)
        self.reindex()
        return segment

    def add_aameen(self, start: float | None, end: float | None) -> Segment | None:
        """Append the aameen segment; returns None if one already exists."""
        if self.aameen is not None:
            logger.debug("Aameen already present, ignoring add")
            return None
        segment = Segment(kind=SegmentKind.AAMEEN, start=start, end=end)
        self._segments.append(segment)
        self.reindex()
        return segment

    def remove(self, segment_id: str) -> bool:
        """Delete a segment by id; False if it is not in the list."""
        index = self.index_of(segment_id)
        if index is None:
            return False
        del self._segments[index]
        self.reindex()
        return True

    def reorder(self, segment_id: str, new_index: int) -> bool:
        """
        Move a segment to ``new_index`` (clamped to the list bounds).

        The relative order of every other segment is preserved.

        Returns:
            True if the list changed
        """
        old_index = self.index_of(segment_id)
        if old_index is None:
            return False
        new_index = min(max(new_index, 0), len(self._segments) - 1)
        if new_index == old_index:
            return False
        segment = self._segments.pop(old_index)
        self._segments.insert(new_index, segment)
        self.reindex()
        return True

    def move(self, old_index: int, new_index: int) -> bool:
        """Apply a drag-reorder event: the item at ``old_index`` moved to ``new_index``."""
        if not 0 <= old_index < len(self._segments):
            return False
        return self.reorder(self._segments[old_index].id, new_index)

    def replace_with_regions(self, regions: Iterable[Region]) -> list[Segment]:
        """Replace the whole list with one ayah per detected region."""
        self._segments = [
            Segment(kind=SegmentKind.AYAH, start=region.start, end=region.end)
            for region in regions
        ]
        self.reindex()
        return list(self._segments)

    def clear(self) -> None:
        self._segments = []

    # ============ Field updates ============

    def update_field(self, segment_id: str, field: TimeField, value: float) -> bool:
        """
        Set a boundary verbatim.

        No clamping and no check against the other boundary: a manual
        correction may leave start > end, and that is kept as entered.
        """
        _check_field(field)
        segment = self.get(segment_id)
        if segment is None:
            return False
        setattr(segment, field, float(value))
        return True

    def capture_field(self, segment_id: str, field: TimeField, playhead: float) -> bool:
        """Set a boundary to the current playhead time."""
        return self.update_field(segment_id, field, playhead)

    def set_field_text(self, segment_id: str, field: TimeField, text: str) -> bool:
        """
        Apply a typed boundary value.

        Non-numeric text is ignored and the existing value retained.
        """
        _check_field(field)
        value = parse_seconds(text)
        if value is None:
            logger.debug("Ignoring non-numeric %s value %r", field, text)
            return False
        return self.update_field(segment_id, field, value)

    def __repr__(self) -> str:
        return f"AnnotationList({len(self._segments)} segments, {self.ayah_count} ayahs)"
