from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Protocol, Union

__all__ = [
    "ChannelProfile",
    "WordLike",
    "Word",
    "SegmentWord",
    "NormalizedWord",
    "ProviderSpeakerIndex",
    "UserSpeakerAssignment",
    "SpeakerHintData",
    "RuntimeSpeakerHint",
    "SpeakerIdentity",
    "SegmentKey",
    "ResolvedWordFrame",
    "ProtoSegment",
    "Segment",
]


class ChannelProfile(IntEnum):
    """Audio channel a word was captured on."""

    DIRECT_MIC = 0
    REMOTE_PARTY = 1
    MIXED_CAPTURE = 2


class WordLike(Protocol):
    text: str
    start_ms: int
    end_ms: int
    channel: ChannelProfile


@dataclass(frozen=True)
class Word:
    text: str
    start_ms: int
    end_ms: int
    channel: ChannelProfile = ChannelProfile.DIRECT_MIC
    id: str | None = None


@dataclass(frozen=True)
class SegmentWord:
    """A word as it appears in an output segment."""

    text: str
    start_ms: int
    end_ms: int
    channel: ChannelProfile
    is_final: bool
    id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "text": self.text,
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "channel": int(self.channel),
            "is_final": self.is_final,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload


@dataclass(frozen=True)
class NormalizedWord(SegmentWord):
    # Position in the merged, time-sorted sequence; speaker hints target it.
    order: int = 0

    def to_segment_word(self) -> SegmentWord:
        return SegmentWord(
            text=self.text,
            start_ms=self.start_ms,
            end_ms=self.end_ms,
            channel=self.channel,
            is_final=self.is_final,
            id=self.id,
        )


@dataclass(frozen=True)
class ProviderSpeakerIndex:
    """Diarization index reported by the recognizer."""

    speaker_index: int
    provider: str | None = None
    channel: int | None = None


@dataclass(frozen=True)
class UserSpeakerAssignment:
    """A human-confirmed mapping of a word to a person."""

    human_id: str


SpeakerHintData = Union[ProviderSpeakerIndex, UserSpeakerAssignment]


@dataclass(frozen=True)
class RuntimeSpeakerHint:
    word_index: int
    data: SpeakerHintData


@dataclass(frozen=True)
class SpeakerIdentity:
    speaker_index: int | None = None
    human_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.speaker_index is None and self.human_id is None

    @property
    def is_complete(self) -> bool:
        return self.speaker_index is not None and self.human_id is not None


@dataclass(frozen=True)
class SegmentKey:
    """Grouping key for a run of words.

    Two keys are equal iff channel, speaker index and human id all match,
    absent values included.
    """

    channel: ChannelProfile
    speaker_index: int | None = None
    speaker_human_id: str | None = None

    @classmethod
    def from_identity(
        cls, channel: ChannelProfile, identity: SpeakerIdentity | None = None
    ) -> SegmentKey:
        if identity is None:
            return cls(channel=channel)
        return cls(
            channel=channel,
            speaker_index=identity.speaker_index,
            speaker_human_id=identity.human_id,
        )

    @property
    def has_speaker_identity(self) -> bool:
        return self.speaker_index is not None or self.speaker_human_id is not None

    def serialize(self) -> str:
        return json.dumps([int(self.channel), self.speaker_index, self.speaker_human_id])

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"channel": int(self.channel)}
        if self.speaker_index is not None:
            payload["speaker_index"] = self.speaker_index
        if self.speaker_human_id is not None:
            payload["speaker_human_id"] = self.speaker_human_id
        return payload


@dataclass(frozen=True)
class ResolvedWordFrame:
    word: NormalizedWord
    identity: SpeakerIdentity = field(default_factory=SpeakerIdentity)


@dataclass
class ProtoSegment:
    """Mutable run of resolved words used between collection and finalization."""

    key: SegmentKey
    words: list[ResolvedWordFrame] = field(default_factory=list)


@dataclass(frozen=True)
class Segment:
    key: SegmentKey
    words: tuple[SegmentWord, ...] = ()

    @property
    def start_ms(self) -> int:
        return self.words[0].start_ms if self.words else 0

    @property
    def end_ms(self) -> int:
        return max((word.end_ms for word in self.words), default=0)

    @property
    def text(self) -> str:
        return " ".join(word.text.strip() for word in self.words if word.text.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key.to_dict(),
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "text": self.text,
            "words": [word.to_dict() for word in self.words],
        }
