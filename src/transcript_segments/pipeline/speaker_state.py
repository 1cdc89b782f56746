"""Per-call speaker memory shared by the resolver and the propagator."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .config import SegmentBuilderOptions, complete_channels_for
from .models import (
    ChannelProfile,
    ProviderSpeakerIndex,
    RuntimeSpeakerHint,
    SpeakerIdentity,
    UserSpeakerAssignment,
)


@dataclass
class SpeakerState:
    """Lookup tables built from hints and filled in while resolving words.

    A fresh instance is created for every ``build_segments`` call and dropped
    when it returns.
    """

    assignment_by_word_index: dict[int, SpeakerIdentity] = field(default_factory=dict)
    human_id_by_speaker_index: dict[int, str] = field(default_factory=dict)
    human_id_by_channel: dict[ChannelProfile, str] = field(default_factory=dict)
    last_speaker_by_channel: dict[ChannelProfile, SpeakerIdentity] = field(default_factory=dict)
    complete_channels: frozenset[ChannelProfile] = frozenset({ChannelProfile.DIRECT_MIC})

    def is_complete_channel(self, channel: ChannelProfile) -> bool:
        return channel in self.complete_channels

    def remember_human_for_index(self, identity: SpeakerIdentity) -> None:
        if identity.is_complete:
            self.human_id_by_speaker_index[identity.speaker_index] = identity.human_id


def _merge_hint(current: SpeakerIdentity, hint: RuntimeSpeakerHint) -> SpeakerIdentity:
    data = hint.data
    if isinstance(data, ProviderSpeakerIndex):
        return SpeakerIdentity(speaker_index=data.speaker_index, human_id=current.human_id)
    if isinstance(data, UserSpeakerAssignment):
        return SpeakerIdentity(speaker_index=current.speaker_index, human_id=data.human_id)
    return current


def create_speaker_state(
    speaker_hints: Iterable[RuntimeSpeakerHint],
    options: SegmentBuilderOptions,
) -> SpeakerState:
    state = SpeakerState(complete_channels=frozenset(complete_channels_for(options)))

    for hint in speaker_hints:
        current = state.assignment_by_word_index.get(hint.word_index, SpeakerIdentity())
        merged = _merge_hint(current, hint)
        state.assignment_by_word_index[hint.word_index] = merged
        state.remember_human_for_index(merged)

    return state


__all__ = ["SpeakerState", "create_speaker_state"]
