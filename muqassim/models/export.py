"""
Export document models.

The ayah array is a tagged union: every entry carries either an ``ayah``
key (its ordinal) or an ``aameen`` key (literal 1), never both.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class AyahEntry(BaseModel):
    """Timing of one numbered ayah."""

    model_config = ConfigDict(extra="forbid")

    ayah: int = Field(..., description="Ayah ordinal", ge=1)
    start: float
    end: float


class AameenEntry(BaseModel):
    """Timing of the aameen marker."""

    model_config = ConfigDict(extra="forbid")

    aameen: Literal[1] = 1
    start: float
    end: float


ExportEntry = Union[AyahEntry, AameenEntry]


class ExportDocument(BaseModel):
    """
    The JSON document written for one annotated recitation.

    Attributes:
        surah: Surah number (0 when unknown)
        surah_name: Surah name, serialized as ``surahName``
        audio: Source audio file name ("" if none)
        ayahs: Entries in annotation list order
    """

    model_config = ConfigDict(populate_by_name=True)

    surah: int = 0
    surah_name: str = Field(default="", alias="surahName")
    audio: str = ""
    ayahs: list[ExportEntry] = Field(default_factory=list)

    @property
    def ayah_count(self) -> int:
        return sum(1 for entry in self.ayahs if isinstance(entry, AyahEntry))

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
