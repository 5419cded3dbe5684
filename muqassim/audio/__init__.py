"""
Audio loading, slicing and encoding.
"""

from muqassim.audio.buffer import AudioBuffer, load_audio
from muqassim.audio.encoder import (
    LameBlockEncoder,
    Mp3BlockEncoder,
    audio_buffer_to_mp3,
    audio_buffer_to_wav,
    export_segment_audio,
    float_to_int16,
    slice_buffer,
)

__all__ = [
    "AudioBuffer",
    "load_audio",
    "LameBlockEncoder",
    "Mp3BlockEncoder",
    "audio_buffer_to_mp3",
    "audio_buffer_to_wav",
    "export_segment_audio",
    "float_to_int16",
    "slice_buffer",
]
