"""
Unit tests for overlay reconciliation.
"""

import pytest

from muqassim.core import AnnotationList, OverlaySync, apply_plan, kind_color, reconcile
from muqassim.models import OverlayRegion, Segment, SegmentKind

AYAH_COLOR = "rgba(79, 70, 229, 0.2)"
AAMEEN_COLOR = "rgba(168, 85, 247, 0.2)"


def region_for(segment, **changes):
    fields = {
        "id": segment.id,
        "start": segment.start,
        "end": segment.end,
        "color": AYAH_COLOR if segment.kind == SegmentKind.AYAH else AAMEEN_COLOR,
    }
    fields.update(changes)
    return OverlayRegion(**fields)


class TestReconcile:
    """Test the pure reconcile() planner."""

    def test_adds_missing_regions(self, populated_list, settings):
        """Every complete segment without a region is added with its kind color."""
        plan = reconcile(populated_list, [], settings=settings)

        assert [r.id for r in plan.to_add] == [s.id for s in populated_list]
        assert plan.to_add[0].color == AYAH_COLOR
        assert plan.to_add[-1].color == AAMEEN_COLOR
        assert all(r.draggable and r.resizable for r in plan.to_add)
        assert plan.to_update == []
        assert plan.to_remove == []

    def test_in_sync_is_empty(self, populated_list, settings):
        overlay = [region_for(s) for s in populated_list]
        assert reconcile(populated_list, overlay, settings=settings).is_empty

    @pytest.mark.parametrize("overlay_start,expect_update", [
        (5.05, False),
        (4.95, False),
        (5.20, True),
        (4.80, True),
    ])
    def test_dead_band(self, settings, overlay_start, expect_update):
        """Drift within 0.1s is tolerated; larger drift is corrected."""
        segment = Segment(start=5.0, end=8.0, ordinal=1)
        plan = reconcile([segment], [region_for(segment, start=overlay_start)], settings=settings)

        assert bool(plan.to_update) is expect_update
        if expect_update:
            update = plan.to_update[0]
            assert update.start == 5.0
            assert update.end == 8.0
            assert update.color is None

    def test_end_drift(self, settings):
        segment = Segment(start=5.0, end=8.0, ordinal=1)
        plan = reconcile([segment], [region_for(segment, end=8.5)], settings=settings)
        assert plan.to_update[0].moves

    def test_explicit_tolerance(self, settings):
        segment = Segment(start=5.0, end=8.0, ordinal=1)
        overlay = [region_for(segment, start=5.05)]
        assert reconcile([segment], overlay, tolerance=0.01, settings=settings).to_update

    def test_color_updated_independently(self, settings):
        """A stale color is fixed even when the position is within the dead-band."""
        segment = Segment(kind=SegmentKind.AAMEEN, start=5.0, end=8.0)
        plan = reconcile([segment], [region_for(segment, start=5.02, color=AYAH_COLOR)], settings=settings)

        assert len(plan.to_update) == 1
        update = plan.to_update[0]
        assert update.color == AAMEEN_COLOR
        assert not update.moves

    def test_removes_orphans(self, populated_list, settings):
        overlay = [region_for(s) for s in populated_list]
        overlay.append(OverlayRegion(id="orphan", start=1.0, end=2.0, color=AYAH_COLOR))

        plan = reconcile(populated_list, overlay, settings=settings)
        assert plan.to_remove == ["orphan"]

    def test_incomplete_segments_not_projected(self, settings):
        """Segments with a null bound are never added."""
        plan = reconcile([Segment(start=1.0), Segment(end=2.0), Segment()], [], settings=settings)
        assert plan.is_empty

    def test_incomplete_segment_keeps_existing_region(self, settings):
        """A region whose segment lost a bound is neither updated nor removed."""
        segment = Segment(start=1.0, end=2.0)
        overlay = [region_for(segment)]
        segment.end = None

        assert reconcile([segment], overlay, settings=settings).is_empty

    def test_pure(self, populated_list, settings):
        """Inputs are not modified."""
        overlay = [region_for(s, start=s.start + 1) for s in populated_list]
        before = [r.model_copy() for r in overlay]
        reconcile(populated_list, overlay, settings=settings)
        assert overlay == before

    def test_kind_color(self, settings):
        assert kind_color(SegmentKind.AYAH, settings) == AYAH_COLOR
        assert kind_color(SegmentKind.AAMEEN, settings) == AAMEEN_COLOR


class TestOverlaySync:
    """Test applying plans to an overlay collaborator."""

    def test_apply_plan(self, populated_list, fake_overlay, settings):
        apply_plan(fake_overlay, reconcile(populated_list, [], settings=settings))
        assert set(fake_overlay.regions) == {s.id for s in populated_list}

    def test_sync_tracks_list(self, fake_overlay, settings):
        """Adds, edits and removals reach the overlay."""
        annotations = AnnotationList()
        sync = OverlaySync(annotations, fake_overlay, settings)

        first = annotations.add_ayah(0.0, 2.0)
        second = annotations.add_ayah(3.0, 5.0)
        sync.sync()
        assert set(fake_overlay.regions) == {first.id, second.id}

        annotations.update_field(first.id, "end", 2.5)
        annotations.remove(second.id)
        sync.sync()

        assert set(fake_overlay.regions) == {first.id}
        assert fake_overlay.regions[first.id].end == 2.5

    def test_second_sync_is_noop(self, populated_list, fake_overlay, settings):
        sync = OverlaySync(populated_list, fake_overlay, settings)
        sync.sync()
        calls = len(fake_overlay.calls)

        assert sync.sync().is_empty
        assert len(fake_overlay.calls) == calls

    def test_drag_within_dead_band_not_overwritten(self, fake_overlay, settings):
        """A region mid-drag is not snapped back by a sync."""
        annotations = AnnotationList()
        segment = annotations.add_ayah(5.0, 8.0)
        sync = OverlaySync(annotations, fake_overlay, settings)
        sync.sync()

        fake_overlay.drag(segment.id, 5.06, 8.04)
        sync.sync()

        assert fake_overlay.regions[segment.id].start == 5.06

    def test_region_update_folds_into_model(self, fake_overlay, settings):
        """Overlay drags flow back through the model."""
        annotations = AnnotationList()
        segment = annotations.add_ayah(5.0, 8.0)
        sync = OverlaySync(annotations, fake_overlay, settings)
        sync.sync()

        fake_overlay.drag(segment.id, 6.0, 9.0)
        assert sync.on_region_updated(segment.id, 6.0, 9.0) is True
        assert (segment.start, segment.end) == (6.0, 9.0)
        assert sync.sync().is_empty

    def test_region_update_unknown_id(self, fake_overlay, settings):
        sync = OverlaySync(AnnotationList(), fake_overlay, settings)
        assert sync.on_region_updated("missing", 1.0, 2.0) is False

    def test_clear(self, populated_list, fake_overlay, settings):
        sync = OverlaySync(populated_list, fake_overlay, settings)
        sync.sync()
        sync.clear()
        assert fake_overlay.regions == {}
