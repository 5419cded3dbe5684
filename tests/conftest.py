"""
Shared fixtures and test configuration for Muqassim tests.
"""

import numpy as np
import pytest

from muqassim.audio import AudioBuffer
from muqassim.config import MuqassimSettings
from muqassim.core import AnnotationList
from muqassim.models import OverlayRegion

SAMPLE_RATE = 8000


def make_track(duration: float, bursts: list[tuple[float, float]], amplitude: float = 0.5,
               sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Silent mono track with constant-amplitude bursts at the given (start, end) seconds."""
    samples = np.zeros(int(round(duration * sample_rate)), dtype=np.float32)
    for start, end in bursts:
        samples[int(round(start * sample_rate)):int(round(end * sample_rate))] = amplitude
    return samples


class FakeOverlay:
    """In-memory region overlay recording every call."""

    def __init__(self):
        self.regions: dict[str, OverlayRegion] = {}
        self.calls: list[tuple] = []

    def add_region(self, region_id, start, end, color, draggable=True, resizable=True):
        self.calls.append(("add", region_id))
        self.regions[region_id] = OverlayRegion(
            id=region_id, start=start, end=end, color=color,
            draggable=draggable, resizable=resizable,
        )

    def list_regions(self):
        return list(self.regions.values())

    def update_region(self, region_id, start=None, end=None, color=None):
        self.calls.append(("update", region_id))
        region = self.regions[region_id]
        changes = {k: v for k, v in {"start": start, "end": end, "color": color}.items() if v is not None}
        self.regions[region_id] = region.model_copy(update=changes)

    def remove_region(self, region_id):
        self.calls.append(("remove", region_id))
        del self.regions[region_id]

    def drag(self, region_id, start, end):
        """Simulate the user moving a region without notifying anyone."""
        self.regions[region_id] = self.regions[region_id].model_copy(update={"start": start, "end": end})


class FakePlayback:
    """Playback engine with a settable playhead."""

    def __init__(self, current_time: float = 0.0):
        self.current_time = current_time
        self.loaded: list[str] = []
        self.played: list[tuple] = []

    def seek(self, seconds):
        self.current_time = seconds

    def load(self, source):
        self.loaded.append(source)

    def play(self, start=None, end=None):
        self.played.append((start, end))


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return MuqassimSettings(_env_file=None)


@pytest.fixture
def track_factory():
    """The make_track helper, as a fixture."""
    return make_track


@pytest.fixture
def two_burst_track():
    """30-second track, silent except for bursts at [5, 8] and [15, 18]."""
    return make_track(30.0, [(5.0, 8.0), (15.0, 18.0)])


@pytest.fixture
def two_burst_buffer(two_burst_track):
    return AudioBuffer.from_mono(two_burst_track, SAMPLE_RATE)


@pytest.fixture
def stereo_buffer():
    """Short stereo buffer with distinct channels."""
    t = np.linspace(0, 1, 2400, endpoint=False)
    left = 0.5 * np.sin(2 * np.pi * 220 * t)
    right = -0.25 * np.sin(2 * np.pi * 330 * t)
    return AudioBuffer(np.stack([left, right]), 2400)


@pytest.fixture
def populated_list():
    """Three ayahs and the aameen."""
    annotations = AnnotationList()
    annotations.add_ayah(0.0, 4.0)
    annotations.add_ayah(4.5, 9.0)
    annotations.add_ayah(9.5, 14.0)
    annotations.add_aameen(14.5, 15.5)
    return annotations


@pytest.fixture
def fake_overlay():
    return FakeOverlay()


@pytest.fixture
def fake_playback():
    return FakePlayback(current_time=12.5)
