"""
Unit tests for data models and configuration.
"""

import pytest

from muqassim.config import MuqassimSettings, configure, get_settings
from muqassim.core.timefmt import format_time, parse_int
from muqassim.models import Region, Segment, SegmentKind, Surah


class TestSegment:
    """Test Segment model."""

    def test_segment_creation(self):
        segment = Segment(kind=SegmentKind.AYAH, ordinal=1, start=0.0, end=5.0)

        assert segment.id
        assert segment.duration == 5.0
        assert segment.is_complete
        assert not segment.is_aameen
        assert segment.label == "1"

    def test_inverted_times_accepted(self):
        """No start <= end check: manual corrections are kept as entered."""
        segment = Segment(start=8.0, end=3.0)
        assert segment.duration == -5.0

    def test_invalid_ordinal(self):
        with pytest.raises(Exception):
            Segment(ordinal=0)

    def test_str(self):
        segment = Segment(kind=SegmentKind.AAMEEN, start=1.0)
        assert str(segment) == "Segment(AM: 1.00s---, aameen)"


class TestRegion:
    """Test Region model."""

    def test_frozen(self):
        region = Region(start=1.0, end=2.0)
        with pytest.raises(Exception):
            region.start = 3.0

    def test_negative_start_rejected(self):
        with pytest.raises(Exception):
            Region(start=-0.1, end=1.0)

    def test_duration(self):
        assert Region(start=1.5, end=4.0).duration == 2.5


class TestSurah:
    """Test surah metadata."""

    @pytest.mark.parametrize("surah_id,name,count", [
        (1, "الفاتحة", 7),
        (112, "الإخلاص", 4),
        (114, "الناس", 6),
    ])
    def test_from_id(self, surah_id, name, count):
        surah = Surah.from_id(surah_id)
        assert surah.name_arabic == name
        assert surah.total_ayahs == count

    @pytest.mark.parametrize("surah_id", [0, 115, -1])
    def test_invalid_id(self, surah_id):
        with pytest.raises(ValueError):
            Surah.from_id(surah_id)


class TestTimeFormat:
    """Test time helpers."""

    @pytest.mark.parametrize("seconds,expected", [
        (0.0, "0:00.00"),
        (5.5, "0:05.50"),
        (75.25, "1:15.25"),
        (600.0, "10:00.00"),
    ])
    def test_format_time(self, seconds, expected):
        assert format_time(seconds) == expected

    @pytest.mark.parametrize("text,expected", [
        ("7", 7),
        ("  12 ", 12),
        ("3rd", 3),
        ("x", 0),
        ("", 0),
    ])
    def test_parse_int(self, text, expected):
        assert parse_int(text) == expected


class TestSettings:
    """Test configuration."""

    def test_defaults(self, settings):
        assert settings.silence_threshold == 0.02
        assert settings.min_silence_duration == 0.8
        assert settings.min_sound_duration == 0.5
        assert settings.padding == 0.2
        assert settings.drift_tolerance == 0.1

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MUQASSIM_SILENCE_THRESHOLD", "0.05")
        monkeypatch.setenv("MUQASSIM_LOG_LEVEL", "debug")
        settings = MuqassimSettings(_env_file=None)

        assert settings.silence_threshold == 0.05
        assert settings.log_level == "DEBUG"

    def test_threshold_bounds(self):
        with pytest.raises(Exception):
            MuqassimSettings(_env_file=None, silence_threshold=1.5)

    def test_configure_replaces_default(self):
        original = get_settings()
        try:
            configured = configure(padding=0.5)
            assert get_settings() is configured
            assert get_settings().padding == 0.5
        finally:
            configure(**original.model_dump())
