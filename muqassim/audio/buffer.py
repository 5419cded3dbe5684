"""
In-memory multi-channel audio buffers.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from muqassim.exceptions import AudioFileError


@dataclass(eq=False)
class AudioBuffer:
    """
    Decoded audio held as float samples.

    Attributes:
        channels: Array of shape (n_channels, n_samples), float32 in [-1, 1]
        sample_rate: Samples per second
    """

    channels: np.ndarray
    sample_rate: int

    def __post_init__(self):
        data = np.asarray(self.channels, dtype=np.float32)
        if data.ndim == 1:
            data = data[np.newaxis, :]
        if data.ndim != 2:
            raise ValueError(f"Expected 1-D or 2-D samples, got shape {data.shape}")
        if self.sample_rate <= 0:
            raise ValueError(f"Invalid sample rate: {self.sample_rate}")
        self.channels = data

    @classmethod
    def from_mono(cls, samples, sample_rate: int) -> "AudioBuffer":
        return cls(np.asarray(samples, dtype=np.float32)[np.newaxis, :], sample_rate)

    @property
    def n_channels(self) -> int:
        return self.channels.shape[0]

    @property
    def n_samples(self) -> int:
        return self.channels.shape[1]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.n_samples / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        """Samples of one channel."""
        return self.channels[index]

    def __len__(self) -> int:
        return self.n_samples


def load_audio(audio_path: str | Path) -> AudioBuffer:
    """
    Decode an audio file at its native sample rate, keeping all channels.

    Args:
        audio_path: Path to a WAV/MP3/FLAC/... file

    Returns:
        AudioBuffer with the decoded samples

    Raises:
        AudioFileError: If the file is missing or cannot be decoded
    """
    audio_path = Path(audio_path)
    if not audio_path.exists():
        raise AudioFileError(audio_path, "File not found")

    import librosa

    try:
        y, sr = librosa.load(str(audio_path), sr=None, mono=False)
    except Exception as e:
        raise AudioFileError(audio_path, f"Could not decode audio ({e})") from e

    return AudioBuffer(y, int(sr))
