"""
Silence-based auto-segmentation.

Splits a recitation into sound regions separated by silences that are long
enough to mark an ayah boundary. The rule is a single forward scan over
the first channel:

- a sample is sound when ``abs(sample) > threshold``;
- the first sound sample opens a segment, every sound sample resets the
  silence run;
- once the silence run exceeds ``min_silence_duration * sample_rate``
  samples the segment closes at the last sound sample;
- segments shorter than ``min_sound_duration`` are dropped (never merged
  into the next one);
- kept segments are padded and clipped to ``[0, duration]``.

The scan is evaluated with numpy over the gaps between sound samples, which
gives the same regions as the per-sample loop without iterating in Python.
"""

import asyncio
import logging
import math

import numpy as np

from muqassim.audio.buffer import AudioBuffer
from muqassim.config import MuqassimSettings, get_settings
from muqassim.models import Region

logger = logging.getLogger(__name__)


def _first_channel(samples) -> np.ndarray:
    data = np.asarray(samples)
    if data.ndim == 2:
        data = data[0]
    elif data.ndim != 1:
        raise ValueError(f"Expected 1-D or 2-D samples, got shape {data.shape}")
    return data


def _run_bounds(loud_idx: np.ndarray, n_samples: int, close_run: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Start and end sample indices of every sound segment.

    ``close_run`` is the silence run length that closes a segment. A
    segment still open at the end of the track ends at ``n_samples``.
    """
    # Silent samples between consecutive sound samples
    gaps = np.diff(loud_idx) - 1
    breaks = np.flatnonzero(gaps >= close_run)

    starts = np.concatenate(([loud_idx[0]], loud_idx[breaks + 1]))
    ends = np.concatenate((loud_idx[breaks], [loud_idx[-1]]))

    trailing_silence = n_samples - 1 - loud_idx[-1]
    if trailing_silence < close_run:
        ends[-1] = n_samples
    return starts, ends


def segment(
    samples,
    sample_rate: int,
    min_silence_duration: float,
    min_sound_duration: float,
    threshold: float,
    padding: float,
) -> list[Region]:
    """
    Detect sound regions separated by silence.

    Args:
        samples: Float samples; for 2-D input of shape (channels, n) only
            the first channel is examined
        sample_rate: Samples per second
        min_silence_duration: Seconds of silence that close a segment
        min_sound_duration: Shortest segment kept, in seconds
        threshold: Amplitude in [0, 1] above which a sample is sound
        padding: Seconds added before and after each kept segment

    Returns:
        Regions in scan order, clipped to [0, track duration]
    """
    if sample_rate <= 0:
        raise ValueError(f"Invalid sample rate: {sample_rate}")

    channel = _first_channel(samples)
    n_samples = channel.shape[0]
    duration = n_samples / sample_rate

    loud_idx = np.flatnonzero(np.abs(channel) > threshold)
    if loud_idx.size == 0:
        return []

    # The run counter must exceed min_silence_samples, so the closing run
    # length is the next integer above it (and at least one sample).
    min_silence_samples = min_silence_duration * sample_rate
    close_run = max(1, math.floor(min_silence_samples) + 1)

    starts, ends = _run_bounds(loud_idx, n_samples, close_run)
    open_at_end = ends[-1] == n_samples

    regions: list[Region] = []
    last = len(starts) - 1
    for k, (start_idx, end_idx) in enumerate(zip(starts.tolist(), ends.tolist())):
        if (end_idx - start_idx) / sample_rate < min_sound_duration:
            continue

        start = max(0.0, start_idx / sample_rate - padding)
        if k == last and open_at_end:
            end = duration
        else:
            end = min(duration, end_idx / sample_rate + padding)
        # A lone loud sample with no padding yields start == end.
        regions.append(Region(start=start, end=end))

    return regions


SEGMENT_PARAMETERS = ("min_silence_duration", "min_sound_duration", "threshold", "padding")


def detect_regions(
    buffer: AudioBuffer,
    settings: MuqassimSettings | None = None,
    *,
    min_silence_duration: float | None = None,
    min_sound_duration: float | None = None,
    threshold: float | None = None,
    padding: float | None = None,
) -> list[Region]:
    """
    Run auto-segmentation on a buffer, filling unset parameters from settings.

    Args:
        buffer: Decoded audio
        settings: Settings instance to use
        min_silence_duration: Overrides settings.min_silence_duration
        min_sound_duration: Overrides settings.min_sound_duration
        threshold: Overrides settings.silence_threshold
        padding: Overrides settings.padding

    Returns:
        Detected regions in scan order
    """
    settings = settings or get_settings()
    params = {
        "min_silence_duration": (
            settings.min_silence_duration if min_silence_duration is None else min_silence_duration
        ),
        "min_sound_duration": (
            settings.min_sound_duration if min_sound_duration is None else min_sound_duration
        ),
        "threshold": settings.silence_threshold if threshold is None else threshold,
        "padding": settings.padding if padding is None else padding,
    }

    logger.debug(
        "Segmenting %.2fs of audio at %d Hz with %s",
        buffer.duration, buffer.sample_rate, params,
    )
    regions = segment(buffer.channels, buffer.sample_rate, **params)
    logger.info("Detected %d regions in %.2fs of audio", len(regions), buffer.duration)
    return regions


async def detect_regions_async(
    buffer: AudioBuffer,
    settings: MuqassimSettings | None = None,
    **overrides,
) -> list[Region]:
    """
    Asynchronously run auto-segmentation.

    Uses run_in_executor so the CPU-bound scan does not block the event
    loop. The result is all-or-nothing: the full region list, or the
    exception raised by the scan.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, lambda: detect_regions(buffer, settings, **overrides)
    )
