"""
Time region models: raw segmenter output and the mirrored overlay state.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Region(BaseModel):
    """
    A raw (start, end) pair in seconds produced by the segmenter.

    Regions are transient: they are consumed once to build segments.
    """

    model_config = ConfigDict(frozen=True)

    start: float = Field(..., description="Start time in seconds", ge=0.0)
    end: float = Field(..., description="End time in seconds", ge=0.0)

    @property
    def duration(self) -> float:
        return self.end - self.start

    def as_tuple(self) -> tuple[float, float]:
        return (self.start, self.end)

    def __str__(self) -> str:
        return f"Region({self.start:.2f}s-{self.end:.2f}s)"


class OverlayRegion(BaseModel):
    """
    State of one region on the external waveform overlay.

    Keyed by the id of the segment it projects. The overlay is never a
    source of truth; user drags come back through the annotation list.
    """

    id: str
    start: float
    end: float
    color: str
    draggable: bool = True
    resizable: bool = True


class RegionUpdate(BaseModel):
    """Facets of an overlay region that must be rewritten (None = keep)."""

    id: str
    start: Optional[float] = None
    end: Optional[float] = None
    color: Optional[str] = None

    @property
    def moves(self) -> bool:
        """Whether the update repositions the region."""
        return self.start is not None or self.end is not None
