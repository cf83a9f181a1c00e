"""
Tests for timestamp codecs.
"""

import pytest

from captionkit.timecodes import (
    format_srt_timestamp,
    format_timestamp,
    format_vtt_timestamp,
    parse_cue_timing,
    parse_decimal_seconds,
    srt_time_to_seconds,
    vtt_time_to_seconds,
)


def test_parse_decimal_seconds():
    """Test XML start/dur parsing."""
    assert parse_decimal_seconds("12.5") == 12.5
    assert parse_decimal_seconds(" 3 ") == 3.0
    assert parse_decimal_seconds(0) == 0.0

    for bad in ("abc", "", "nan", "-1"):
        with pytest.raises(ValueError):
            parse_decimal_seconds(bad)


def test_vtt_time_to_seconds():
    """Test WebVTT timestamp conversion."""
    assert vtt_time_to_seconds("00:00:01.000") == 1.0
    assert vtt_time_to_seconds("01:02:03.500") == 3723.5
    assert vtt_time_to_seconds("02:03.250") == 123.25

    for bad in ("00:xx:01.000", "1.000", "00:00:00:01.000"):
        with pytest.raises(ValueError):
            vtt_time_to_seconds(bad)


def test_srt_time_to_seconds():
    """Test SRT timestamp conversion."""
    assert srt_time_to_seconds("00:00:01,000") == 1.0
    assert srt_time_to_seconds("01:02:03,250") == 3723.25

    for bad in ("00:00:01.000", "00:01,000", "aa:00:01,000"):
        with pytest.raises(ValueError):
            srt_time_to_seconds(bad)


def test_parse_cue_timing_with_settings():
    """Test that cue settings after the end time are ignored."""
    start, duration = parse_cue_timing(
        "00:00:04.000 --> 00:00:07.500 align:start position:0%", vtt_time_to_seconds
    )
    assert start == 4.0
    assert duration == 3.5


def test_parse_cue_timing_rejects_bad_lines():
    """Test malformed timing lines."""
    with pytest.raises(ValueError):
        parse_cue_timing("00:00:04.000 00:00:07.500", vtt_time_to_seconds)
    with pytest.raises(ValueError):
        parse_cue_timing("00:00:07.000 --> 00:00:04.000", vtt_time_to_seconds)


def test_format_timestamp():
    """Test M:SS display formatting."""
    assert format_timestamp(0) == "0:00"
    assert format_timestamp(5.9) == "0:05"
    assert format_timestamp(65) == "1:05"
    assert format_timestamp(3661.2) == "61:01"


def test_format_srt_and_vtt_timestamps():
    """Test export timestamp formatting."""
    assert format_srt_timestamp(3723.25) == "01:02:03,250"
    assert format_vtt_timestamp(3723.25) == "01:02:03.250"
    assert format_srt_timestamp(2.9999) == "00:00:03,000"
