"""
One-directional sync from the annotation list to the waveform overlay.

The annotation list is authoritative. ``reconcile`` compares it with the
regions currently on the overlay and plans the adds, updates and removals
that make the overlay match. Positions inside the drift tolerance are left
alone so that a region being dragged is not snapped back to slightly stale
canonical values on every pass.

Drags travel the other way only through the model: ``OverlaySync`` folds a
region update into the list with ``update_field`` and only then syncs.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from muqassim.config import MuqassimSettings, get_settings
from muqassim.core.annotations import AnnotationList
from muqassim.models import OverlayRegion, RegionUpdate, Segment, SegmentKind

logger = logging.getLogger(__name__)


def kind_color(kind: SegmentKind, settings: MuqassimSettings | None = None) -> str:
    """Overlay color for a segment kind."""
    settings = settings or get_settings()
    if kind == SegmentKind.AAMEEN:
        return settings.aameen_color
    return settings.ayah_color


@dataclass
class ReconcilePlan:
    """Operations to apply to the overlay, computed by ``reconcile``."""

    to_add: list[OverlayRegion] = field(default_factory=list)
    to_update: list[RegionUpdate] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.to_add or self.to_update or self.to_remove)

    def __len__(self) -> int:
        return len(self.to_add) + len(self.to_update) + len(self.to_remove)


def reconcile(
    canonical: Iterable[Segment],
    overlay_state: Iterable[OverlayRegion],
    tolerance: float | None = None,
    settings: MuqassimSettings | None = None,
) -> ReconcilePlan:
    """
    Plan the overlay operations that mirror the canonical list.

    Args:
        canonical: Segments in list order
        overlay_state: Regions currently on the overlay
        tolerance: Position dead-band in seconds (overrides settings.drift_tolerance)
        settings: Settings instance to use

    Returns:
        ReconcilePlan with regions to add, updates and ids to remove
    """
    settings = settings or get_settings()
    eps = settings.drift_tolerance if tolerance is None else tolerance

    existing = {region.id: region for region in overlay_state}
    canonical_ids: set[str] = set()
    plan = ReconcilePlan()

    for segment in canonical:
        canonical_ids.add(segment.id)
        if not segment.is_complete:
            continue

        color = kind_color(segment.kind, settings)
        region = existing.get(segment.id)
        if region is None:
            plan.to_add.append(
                OverlayRegion(
                    id=segment.id,
                    start=segment.start,
                    end=segment.end,
                    color=color,
                )
            )
            continue

        update = RegionUpdate(id=segment.id)
        if abs(region.start - segment.start) > eps or abs(region.end - segment.end) > eps:
            update.start = segment.start
            update.end = segment.end
        if region.color != color:
            update.color = color
        if update.moves or update.color is not None:
            plan.to_update.append(update)

    plan.to_remove = [region_id for region_id in existing if region_id not in canonical_ids]
    return plan


class RegionOverlay(Protocol):
    """The waveform region overlay, implemented by the UI layer."""

    def add_region(
        self,
        region_id: str,
        start: float,
        end: float,
        color: str,
        draggable: bool = True,
        resizable: bool = True,
    ) -> None:
        ...

    def list_regions(self) -> list[OverlayRegion]:
        ...

    def update_region(
        self,
        region_id: str,
        start: float | None = None,
        end: float | None = None,
        color: str | None = None,
    ) -> None:
        ...

    def remove_region(self, region_id: str) -> None:
        ...


def apply_plan(overlay: RegionOverlay, plan: ReconcilePlan) -> None:
    """Apply a plan to an overlay: removals, then updates, then additions."""
    for region_id in plan.to_remove:
        overlay.remove_region(region_id)
    for update in plan.to_update:
        overlay.update_region(update.id, start=update.start, end=update.end, color=update.color)
    for region in plan.to_add:
        overlay.add_region(
            region.id,
            region.start,
            region.end,
            region.color,
            draggable=region.draggable,
            resizable=region.resizable,
        )


class OverlaySync:
    """
    Keeps an overlay in step with an annotation list.

    Example:
        sync = OverlaySync(annotations, overlay)
        annotations.add_ayah(0.0, 2.0)
        sync.sync()
        # user drags the region on the overlay
        sync.on_region_updated(region_id, 0.4, 2.3)
    """

    def __init__(
        self,
        annotations: AnnotationList,
        overlay: RegionOverlay,
        settings: MuqassimSettings | None = None,
    ):
        self._annotations = annotations
        self._overlay = overlay
        self._settings = settings or get_settings()

    @property
    def overlay(self) -> RegionOverlay:
        return self._overlay

    def sync(self) -> ReconcilePlan:
        """Reconcile and apply; returns the applied plan."""
        plan = reconcile(
            self._annotations,
            self._overlay.list_regions(),
            settings=self._settings,
        )
        if not plan.is_empty:
            logger.debug(
                "Overlay sync: %d add, %d update, %d remove",
                len(plan.to_add), len(plan.to_update), len(plan.to_remove),
            )
            apply_plan(self._overlay, plan)
        return plan

    def on_region_updated(self, region_id: str, start: float, end: float) -> bool:
        """
        Fold a drag/resize from the overlay into the canonical list.

        Returns:
            False if the region has no canonical segment
        """
        if self._annotations.get(region_id) is None:
            return False
        self._annotations.update_field(region_id, "start", start)
        self._annotations.update_field(region_id, "end", end)
        return True

    def clear(self) -> None:
        """Remove every region from the overlay."""
        for region in self._overlay.list_regions():
            self._overlay.remove_region(region.id)
