"""
transcript-segments: speaker-attributed segments from live recognizer output.
"""

__version__ = "0.1.0"

from .errors import (
    ConfigurationError,
    PayloadError,
    SegmentationError,
    StageExecutionError,
)
from .labels import SpeakerLabelManager, StaticLabelContext, is_known_speaker, render_label
from .pipeline import (
    ChannelProfile,
    ProviderSpeakerIndex,
    RuntimeSpeakerHint,
    Segment,
    SegmentBuilderOptions,
    SegmentKey,
    SegmentWord,
    SpeakerIdentity,
    UserSpeakerAssignment,
    Word,
    build_options,
    build_segments,
)

__all__ = [
    "__version__",
    "ChannelProfile",
    "ConfigurationError",
    "PayloadError",
    "ProviderSpeakerIndex",
    "RuntimeSpeakerHint",
    "Segment",
    "SegmentBuilderOptions",
    "SegmentKey",
    "SegmentWord",
    "SegmentationError",
    "SpeakerIdentity",
    "SpeakerLabelManager",
    "StageExecutionError",
    "StaticLabelContext",
    "UserSpeakerAssignment",
    "Word",
    "build_options",
    "build_segments",
    "is_known_speaker",
    "render_label",
]
