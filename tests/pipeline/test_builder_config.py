from __future__ import annotations

import pytest

from transcript_segments.errors import ConfigurationError
from transcript_segments.pipeline.config import (
    DEFAULT_BUILDER_OPTIONS,
    SegmentBuilderOptions,
    build_options,
    complete_channels_for,
)
from transcript_segments.pipeline.models import ChannelProfile


def test_defaults_never_split_and_have_no_speaker_count():
    options = build_options()

    assert options.to_dict() == DEFAULT_BUILDER_OPTIONS
    assert options.max_gap_ms is None
    assert options.num_speakers is None


def test_overrides_are_merged_and_none_keeps_default():
    options = build_options({"max_gap_ms": 1500, "num_speakers": None})

    assert options == SegmentBuilderOptions(max_gap_ms=1500)


def test_options_instance_passes_through():
    options = SegmentBuilderOptions(num_speakers=2)

    assert build_options(options) is options


def test_unknown_keys_are_rejected():
    with pytest.raises(ConfigurationError) as excinfo:
        build_options({"maxGap": 10, "speakers": 2})

    assert excinfo.value.context == {"unknown": ["maxGap", "speakers"]}


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_gap_ms": -0.5},
        {"max_gap_ms": "1000"},
        {"max_gap_ms": True},
        {"num_speakers": 0},
        {"num_speakers": 2.0},
        {"num_speakers": False},
    ],
)
def test_invalid_values_raise(overrides):
    with pytest.raises(ConfigurationError):
        build_options(overrides)


def test_zero_gap_is_allowed():
    assert build_options({"max_gap_ms": 0}).max_gap_ms == 0


@pytest.mark.parametrize(
    ("num_speakers", "expected"),
    [
        (None, {ChannelProfile.DIRECT_MIC}),
        (1, {ChannelProfile.DIRECT_MIC}),
        (2, {ChannelProfile.DIRECT_MIC, ChannelProfile.REMOTE_PARTY}),
        (4, {ChannelProfile.DIRECT_MIC}),
    ],
)
def test_complete_channels_follow_speaker_count(num_speakers, expected):
    assert complete_channels_for(SegmentBuilderOptions(num_speakers=num_speakers)) == expected
