"""
Exception hierarchy for Muqassim.

Operator mistakes on the annotation list (unknown ids, a second aameen,
non-numeric field text) are not errors and never raise. The exceptions
below cover failures that must reach the user: undecodable audio, a failed
segmentation run, encoding and export problems.
"""

from pathlib import Path


class MuqassimError(Exception):
    """Base class for all Muqassim errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AudioFileError(MuqassimError):
    """Raised when a source audio file is missing or cannot be decoded."""

    def __init__(self, path: str | Path, reason: str = "Could not read audio file"):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class SegmentationError(MuqassimError):
    """Raised when auto-segmentation cannot analyse the audio."""

    def __init__(self, message: str = "Error analyzing audio. Try adjusting settings."):
        super().__init__(message)


class EncodingError(MuqassimError):
    """Raised when WAV/MP3 encoding fails or no encoder is available."""


class ExportError(MuqassimError):
    """Raised when the export document cannot be produced or written."""
