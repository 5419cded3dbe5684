"""
Annotated segment data model.
"""

import uuid
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


TimeField = Literal["start", "end"]


def new_segment_id() -> str:
    """Return a fresh opaque segment identifier."""
    return uuid.uuid4().hex


class SegmentKind(str, Enum):
    """Kind of annotated segment."""

    AYAH = "ayah"
    AAMEEN = "aameen"  # آمين after Al-Fatiha, at most one per list


class Segment(BaseModel):
    """
    Represents one annotated time region of a recitation.

    Segments live in an AnnotationList which owns their order and derives
    the ordinal of every ayah from it. Times are not cross-checked: a
    segment may hold start > end after a manual correction.

    Attributes:
        id: Opaque identifier, stable for the segment's lifetime
        kind: Ayah or aameen
        ordinal: 1-based ayah number derived from list order (None for aameen)
        start: Start time in seconds, None if not captured yet
        end: End time in seconds, None if not captured yet
    """

    id: str = Field(
        default_factory=new_segment_id,
        description="Opaque unique identifier",
        min_length=1,
    )
    kind: SegmentKind = Field(
        default=SegmentKind.AYAH,
        description="Kind of segment",
    )
    ordinal: Optional[int] = Field(
        default=None,
        description="Ayah number derived from list order (ayahs only)",
        ge=1,
    )
    start: Optional[float] = Field(
        default=None,
        description="Start time in seconds",
    )
    end: Optional[float] = Field(
        default=None,
        description="End time in seconds",
    )

    @property
    def is_aameen(self) -> bool:
        """Whether this is the aameen marker."""
        return self.kind == SegmentKind.AAMEEN

    @property
    def is_complete(self) -> bool:
        """Whether both boundaries have been captured."""
        return self.start is not None and self.end is not None

    @property
    def duration(self) -> float | None:
        """Duration in seconds, None while a boundary is missing."""
        if not self.is_complete:
            return None
        return self.end - self.start

    @property
    def label(self) -> str:
        """Short display label: the ordinal, or AM for the aameen."""
        if self.is_aameen:
            return "AM"
        return str(self.ordinal) if self.ordinal is not None else "?"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "3f2b9c1e8a7d4e0f9b6a5c4d3e2f1a0b",
                    "kind": "ayah",
                    "ordinal": 1,
                    "start": 4.8,
                    "end": 8.2,
                }
            ]
        }
    }

    def __str__(self) -> str:
        start = "--" if self.start is None else f"{self.start:.2f}s"
        end = "--" if self.end is None else f"{self.end:.2f}s"
        return f"Segment({self.label}: {start}-{end}, {self.kind.value})"
