"""
Annotation session: the controller behind an annotation UI.

A session owns the annotation list and the handles to the external
collaborators (playback engine, region overlay). Every user action mutates
the list first and then pushes the result to the overlay; overlay drags
come back through ``on_overlay_region_updated`` as ordinary field updates.
"""

import logging
from pathlib import Path
from typing import Protocol

from muqassim.audio.buffer import AudioBuffer, load_audio
from muqassim.audio.encoder import AudioFormat, export_segment_audio
from muqassim.config import MuqassimSettings, get_settings
from muqassim.core.annotations import AnnotationList
from muqassim.core.reconciler import OverlaySync, RegionOverlay
from muqassim.core.segmenter import SEGMENT_PARAMETERS, detect_regions
from muqassim.core.serializer import build_export, default_export_filename, write_export
from muqassim.exceptions import AudioFileError, MuqassimError, SegmentationError
from muqassim.models import ExportDocument, Segment, TimeField

logger = logging.getLogger(__name__)


class PlaybackEngine(Protocol):
    """The waveform/playback engine, implemented by the UI layer."""

    @property
    def current_time(self) -> float:
        ...

    def seek(self, seconds: float) -> None:
        ...

    def load(self, source: str) -> None:
        ...

    def play(self, start: float | None = None, end: float | None = None) -> None:
        ...


class AnnotationSession:
    """
    Annotation state for one audio source plus its collaborators.

    Example:
        with AnnotationSession(playback=engine, overlay=regions) as session:
            session.open("001.mp3")
            session.auto_segment()
            session.add_aameen()
            session.export(surah="1", path="out/001_timings.json")
    """

    def __init__(
        self,
        playback: PlaybackEngine | None = None,
        overlay: RegionOverlay | None = None,
        settings: MuqassimSettings | None = None,
    ):
        """
        Initialize the session.

        Args:
            playback: Playback engine used for the playhead and segment playback
            overlay: Region overlay kept in sync with the list
            settings: Settings instance to use
        """
        self._settings = settings or get_settings()
        self._playback = playback
        self.annotations = AnnotationList()
        self._sync = OverlaySync(self.annotations, overlay, self._settings) if overlay else None

        self._source: Path | None = None
        self._buffer: AudioBuffer | None = None

    # ============ Lifecycle ============

    @property
    def source(self) -> Path | None:
        return self._source

    @property
    def buffer(self) -> AudioBuffer | None:
        return self._buffer

    @property
    def audio_name(self) -> str:
        return self._source.name if self._source else ""

    def open(self, source: str | Path, buffer: AudioBuffer | None = None) -> None:
        """
        Load a new audio source, discarding the current annotations.

        Args:
            source: Audio file path
            buffer: Already decoded samples; decoded lazily when None
        """
        self._source = Path(source)
        self._buffer = buffer
        self.annotations.clear()
        if self._sync:
            self._sync.clear()
        if self._playback:
            self._playback.load(str(self._source))
        logger.info("Opened %s", self._source)

    def close(self) -> None:
        """Release the collaborators and forget the source."""
        if self._sync:
            self._sync.clear()
        self._sync = None
        self._playback = None
        self._buffer = None
        self._source = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ============ Helpers ============

    @property
    def playhead(self) -> float | None:
        return self._playback.current_time if self._playback else None

    def _default_bounds(self) -> tuple[float, float]:
        if self._playback is None:
            return 0.0, self._settings.default_segment_length
        now = self._playback.current_time
        return now, now + self._settings.default_segment_length

    def _decoded(self) -> AudioBuffer:
        if self._buffer is None:
            if self._source is None:
                raise AudioFileError("<none>", "No audio source loaded")
            self._buffer = load_audio(self._source)
        return self._buffer

    def sync_overlay(self) -> None:
        if self._sync:
            self._sync.sync()

    # ============ User actions ============

    def add_ayah(self, after_index: int | None = None) -> Segment:
        """Add an ayah at the playhead, appended or inserted after ``after_index``."""
        start, end = self._default_bounds()
        segment = self.annotations.add_ayah(start, end, after_index=after_index)
        self.sync_overlay()
        return segment

    def add_aameen(self) -> Segment | None:
        """Add the aameen at the playhead; None if it already exists."""
        start, end = self._default_bounds()
        segment = self.annotations.add_aameen(start, end)
        if segment is not None:
            self.sync_overlay()
        return segment

    def remove(self, segment_id: str) -> bool:
        changed = self.annotations.remove(segment_id)
        if changed:
            self.sync_overlay()
        return changed

    def move(self, old_index: int, new_index: int) -> bool:
        """Handle the drag-reorder surface's "item moved" event."""
        changed = self.annotations.move(old_index, new_index)
        if changed:
            self.sync_overlay()
        return changed

    def capture(self, segment_id: str, field: TimeField) -> bool:
        """Set a boundary to the playhead; no-op without a playback engine."""
        if self._playback is None:
            return False
        changed = self.annotations.capture_field(segment_id, field, self._playback.current_time)
        if changed:
            self.sync_overlay()
        return changed

    def edit_field(self, segment_id: str, field: TimeField, text: str) -> bool:
        """Apply a typed value; non-numeric text is ignored."""
        changed = self.annotations.set_field_text(segment_id, field, text)
        if changed:
            self.sync_overlay()
        return changed

    def on_overlay_region_updated(self, region_id: str, start: float, end: float) -> bool:
        """Fold an overlay drag/resize into the list, then sync."""
        if self._sync is None:
            return False
        changed = self._sync.on_region_updated(region_id, start, end)
        if changed:
            self._sync.sync()
        return changed

    def play_segment(self, segment_id: str) -> bool:
        """Play one segment; False if it is unknown or incomplete."""
        segment = self.annotations.get(segment_id)
        if self._playback is None or segment is None or not segment.is_complete:
            return False
        self._playback.play(segment.start, segment.end)
        return True

    def auto_segment(self, **overrides) -> list[Segment]:
        """
        Replace the list with one ayah per detected sound region.

        All-or-nothing: on failure the list is left untouched.

        Args:
            **overrides: Segmentation parameters (threshold, padding,
                min_silence_duration, min_sound_duration)

        Returns:
            The new segments

        Raises:
            SegmentationError: If the audio cannot be decoded or analysed
            TypeError: If an override is not a segmentation parameter
        """
        unknown = sorted(set(overrides) - set(SEGMENT_PARAMETERS))
        if unknown:
            raise TypeError(f"Unknown segmentation parameters: {', '.join(unknown)}")

        try:
            regions = detect_regions(self._decoded(), self._settings, **overrides)
        except MuqassimError as e:
            logger.error("Auto-segmentation failed: %s", e, exc_info=True)
            raise SegmentationError(f"Error analyzing audio: {e.message}") from e
        except Exception as e:
            logger.error("Auto-segmentation failed: %s", e, exc_info=True)
            raise SegmentationError() from e

        if self._sync:
            self._sync.clear()
        segments = self.annotations.replace_with_regions(regions)
        self.sync_overlay()
        return segments

    # ============ Export ============

    def build_export(self, surah: str | int | None = None, surah_name: str = "") -> ExportDocument:
        return build_export(
            self.annotations,
            surah=surah,
            surah_name=surah_name,
            audio=self.audio_name,
        )

    def export(
        self,
        surah: str | int | None = None,
        surah_name: str = "",
        path: str | Path | None = None,
    ) -> Path:
        """
        Write the timings document.

        Args:
            surah: Surah number as typed
            surah_name: Surah name
            path: Target file; defaults to "<name>_timings.json" in the output dir

        Returns:
            Path of the written file
        """
        document = self.build_export(surah, surah_name)
        if path is None:
            path = self._settings.output_dir / default_export_filename(document.surah_name)
        return write_export(document, path)

    def export_slices(self, out_dir: str | Path | None = None, fmt: AudioFormat = "wav") -> list[Path]:
        """Write one audio file per segment."""
        out_dir = out_dir or self._settings.output_dir
        return export_segment_audio(
            self._decoded(),
            self.annotations.snapshot(),
            out_dir,
            fmt=fmt,
            settings=self._settings,
        )
