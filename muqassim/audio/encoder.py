"""
Sample encoding: float buffers to 16-bit WAV and MP3 containers.

WAV containers are written with ``soundfile`` as 16-bit PCM. MP3
bitstreams are produced by an external block encoder that consumes
1152-sample frames of 16-bit PCM; the default one wraps ``lameenc``.
"""

import io
import logging
import math
from pathlib import Path
from typing import Iterable, Literal, Protocol

import numpy as np
import soundfile as sf

from muqassim.audio.buffer import AudioBuffer
from muqassim.config import MuqassimSettings, get_settings
from muqassim.exceptions import EncodingError
from muqassim.models import Segment

logger = logging.getLogger(__name__)

MP3_BLOCK_SIZE = 1152

AudioFormat = Literal["wav", "mp3"]


def float_to_int16(samples) -> np.ndarray:
    """
    Convert float samples to int16 PCM.

    Samples are clamped to [-1, 1]; negative values scale by 32768 and
    non-negative values by 32767, truncating toward zero. NaN becomes 0.
    """
    s = np.nan_to_num(np.asarray(samples, dtype=np.float64), nan=0.0)
    s = np.clip(s, -1.0, 1.0)
    scaled = np.where(s < 0, s * 32768.0, s * 32767.0)
    return np.trunc(scaled).astype(np.int16)


def audio_buffer_to_wav(buffer: AudioBuffer) -> bytes:
    """
    Encode a buffer as a 16-bit PCM WAV container.

    Args:
        buffer: Audio to encode (any channel count)

    Returns:
        RIFF/WAVE bytes with frame-interleaved 16-bit samples

    Raises:
        EncodingError: If libsndfile rejects the buffer
    """
    bio = io.BytesIO()
    try:
        sf.write(
            bio,
            float_to_int16(buffer.channels).T,
            buffer.sample_rate,
            format="WAV",
            subtype="PCM_16",
        )
    except (RuntimeError, ValueError, TypeError) as e:
        raise EncodingError(f"WAV encoding failed: {e}") from e
    return bio.getvalue()


class Mp3BlockEncoder(Protocol):
    """An MP3 encoder fed with blocks of int16 PCM."""

    def encode_buffer(self, left: np.ndarray, right: np.ndarray | None = None) -> bytes:
        ...

    def flush(self) -> bytes:
        ...


class LameBlockEncoder:
    """
    Block encoder backed by the LAME library (via ``lameenc``).

    Example:
        encoder = LameBlockEncoder(sample_rate=44100, channels=2, bitrate=128)
        data = encoder.encode_buffer(left, right) + encoder.flush()
    """

    def __init__(
        self,
        sample_rate: int,
        channels: int = 1,
        bitrate: int = 128,
        quality: int = 2,
    ):
        try:
            import lameenc
        except ImportError:
            raise EncodingError(
                "lameenc not installed. Install with: pip install lameenc"
            )

        if channels not in (1, 2):
            raise EncodingError(f"MP3 supports 1 or 2 channels, got {channels}")

        self._channels = channels
        self._encoder = lameenc.Encoder()
        self._encoder.set_bit_rate(bitrate)
        self._encoder.set_in_sample_rate(sample_rate)
        self._encoder.set_channels(channels)
        self._encoder.set_quality(quality)

    def encode_buffer(self, left: np.ndarray, right: np.ndarray | None = None) -> bytes:
        if self._channels == 2:
            if right is None:
                right = left
            pcm = np.column_stack((left, right)).reshape(-1)
        else:
            pcm = left
        return bytes(self._encoder.encode(pcm.astype("<i2").tobytes()))

    def flush(self) -> bytes:
        return bytes(self._encoder.flush())


def audio_buffer_to_mp3(
    buffer: AudioBuffer,
    bitrate: int | None = None,
    encoder: Mp3BlockEncoder | None = None,
    settings: MuqassimSettings | None = None,
) -> bytes:
    """
    Encode a buffer as MP3.

    Mono buffers are encoded as a single stream; buffers with two or more
    channels are encoded as stereo from their first two channels.

    Args:
        buffer: Audio to encode
        bitrate: Bitrate in kbps (overrides settings)
        encoder: Block encoder to use (defaults to LameBlockEncoder)
        settings: Settings instance to use

    Returns:
        Concatenated MP3 bytes, including the final flush

    Raises:
        EncodingError: If the encoder is unavailable or fails
    """
    settings = settings or get_settings()
    stereo = buffer.n_channels >= 2

    if encoder is None:
        encoder = LameBlockEncoder(
            sample_rate=buffer.sample_rate,
            channels=2 if stereo else 1,
            bitrate=bitrate or settings.mp3_bitrate,
            quality=settings.mp3_quality,
        )

    left = float_to_int16(buffer.channel(0))
    right = float_to_int16(buffer.channel(1)) if stereo else None

    chunks: list[bytes] = []
    try:
        for offset in range(0, buffer.n_samples, MP3_BLOCK_SIZE):
            left_block = left[offset:offset + MP3_BLOCK_SIZE]
            if stereo:
                chunk = encoder.encode_buffer(left_block, right[offset:offset + MP3_BLOCK_SIZE])
            else:
                chunk = encoder.encode_buffer(left_block)
            if chunk:
                chunks.append(chunk)
        tail = encoder.flush()
        if tail:
            chunks.append(tail)
    except EncodingError:
        raise
    except Exception as e:
        raise EncodingError(f"MP3 encoding failed: {e}") from e

    return b"".join(chunks)


def slice_buffer(buffer: AudioBuffer, start: float, end: float) -> AudioBuffer:
    """
    Copy the [start, end) range of a buffer into a new buffer.

    Sample indices are floor(t * rate), clamped to the buffer length. An
    inverted range yields an empty buffer.
    """
    n = buffer.n_samples
    first = min(max(math.floor(start * buffer.sample_rate), 0), n)
    last = min(max(math.floor(end * buffer.sample_rate), 0), n)
    if last < first:
        last = first
    return AudioBuffer(buffer.channels[:, first:last].copy(), buffer.sample_rate)


def encode_buffer(
    buffer: AudioBuffer,
    fmt: AudioFormat = "wav",
    settings: MuqassimSettings | None = None,
) -> bytes:
    """Encode a buffer in the requested container format."""
    if fmt == "wav":
        return audio_buffer_to_wav(buffer)
    if fmt == "mp3":
        return audio_buffer_to_mp3(buffer, settings=settings)
    raise ValueError(f"Unsupported format: {fmt!r}. Use 'wav' or 'mp3'.")


def slice_filename(segment: Segment, fmt: AudioFormat) -> str:
    """File name for an exported slice: 001.wav, 002.mp3, aameen.wav."""
    if segment.is_aameen:
        return f"aameen.{fmt}"
    return f"{segment.ordinal:03d}.{fmt}"


def export_segment_audio(
    buffer: AudioBuffer,
    segments: Iterable[Segment],
    out_dir: str | Path,
    fmt: AudioFormat = "wav",
    settings: MuqassimSettings | None = None,
) -> list[Path]:
    """
    Write one audio file per annotated segment.

    Segments with a missing boundary or an empty range are skipped.

    Args:
        buffer: Source audio
        segments: Segments to extract, in list order
        out_dir: Destination directory (created if needed)
        fmt: "wav" or "mp3"
        settings: Settings instance to use

    Returns:
        Paths of the written files

    Raises:
        EncodingError: If encoding or writing a slice fails
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for segment in segments:
        if not segment.is_complete:
            logger.warning("Skipping %s: boundary not captured", segment)
            continue

        piece = slice_buffer(buffer, segment.start, segment.end)
        if piece.n_samples == 0:
            logger.warning("Skipping %s: empty range", segment)
            continue

        path = out_dir / slice_filename(segment, fmt)
        data = encode_buffer(piece, fmt, settings=settings)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise EncodingError(f"Could not write {path}: {e}") from e
        logger.debug("Wrote %s (%.2fs)", path, piece.duration)
        written.append(path)

    logger.info("Exported %d slices to %s", len(written), out_dir)
    return written
