"""Assign a best-effort speaker identity to every normalized word.

Words are resolved strictly in order: each word may teach the speaker state
something (an index to human mapping, a channel owner, the latest speaker on
a channel) that later words rely on.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from ..models import NormalizedWord, ResolvedWordFrame, SpeakerIdentity
from ..speaker_state import SpeakerState
from .base import SegmentationState


@dataclass(frozen=True)
class RuleContext:
    word: NormalizedWord
    state: SpeakerState
    assignment: SpeakerIdentity | None = None


IdentityRule = Callable[[SpeakerIdentity, RuleContext], SpeakerIdentity]


def apply_explicit_assignment(identity: SpeakerIdentity, ctx: RuleContext) -> SpeakerIdentity:
    assignment = ctx.assignment
    if assignment is None:
        return identity
    return SpeakerIdentity(
        speaker_index=(
            assignment.speaker_index
            if assignment.speaker_index is not None
            else identity.speaker_index
        ),
        human_id=assignment.human_id if assignment.human_id is not None else identity.human_id,
    )


def apply_speaker_index_human_id(identity: SpeakerIdentity, ctx: RuleContext) -> SpeakerIdentity:
    if identity.speaker_index is None or identity.human_id is not None:
        return identity
    human_id = ctx.state.human_id_by_speaker_index.get(identity.speaker_index)
    if human_id is None:
        return identity
    return replace(identity, human_id=human_id)


def apply_channel_human_id(identity: SpeakerIdentity, ctx: RuleContext) -> SpeakerIdentity:
    if identity.human_id is not None:
        return identity
    if not ctx.state.is_complete_channel(ctx.word.channel):
        return identity
    human_id = ctx.state.human_id_by_channel.get(ctx.word.channel)
    if human_id is None:
        return identity
    return replace(identity, human_id=human_id)


def carry_partial_identity_forward(
    identity: SpeakerIdentity, ctx: RuleContext
) -> SpeakerIdentity:
    # A final word stands on its own evidence.
    if ctx.word.is_final or identity.is_complete:
        return identity
    last = ctx.state.last_speaker_by_channel.get(ctx.word.channel)
    if last is None:
        return identity
    return SpeakerIdentity(
        speaker_index=(
            identity.speaker_index if identity.speaker_index is not None else last.speaker_index
        ),
        human_id=identity.human_id if identity.human_id is not None else last.human_id,
    )


IDENTITY_RULES: tuple[IdentityRule, ...] = (
    apply_explicit_assignment,
    apply_speaker_index_human_id,
    apply_channel_human_id,
    carry_partial_identity_forward,
)


def apply_identity_rules(
    ctx: RuleContext, rules: Sequence[IdentityRule] = IDENTITY_RULES
) -> SpeakerIdentity:
    identity = SpeakerIdentity()
    for rule in rules:
        identity = rule(identity, ctx)
    return identity


def remember_identity(
    word: NormalizedWord,
    assignment: SpeakerIdentity | None,
    identity: SpeakerIdentity,
    state: SpeakerState,
) -> None:
    has_explicit_assignment = assignment is not None and not assignment.is_empty

    state.remember_human_for_index(identity)

    # Index-scoped humans stay out of the channel map: a complete channel has
    # no speaker-index ambiguity to resolve.
    if (
        state.is_complete_channel(word.channel)
        and identity.human_id is not None
        and identity.speaker_index is None
    ):
        state.human_id_by_channel[word.channel] = identity.human_id

    if word.is_final or identity.speaker_index is not None or has_explicit_assignment:
        if not identity.is_empty:
            state.last_speaker_by_channel[word.channel] = identity


def resolve_identities(
    words: Sequence[NormalizedWord], state: SpeakerState
) -> list[ResolvedWordFrame]:
    frames: list[ResolvedWordFrame] = []
    for index, word in enumerate(words):
        assignment = state.assignment_by_word_index.get(index)
        identity = apply_identity_rules(RuleContext(word=word, state=state, assignment=assignment))
        remember_identity(word, assignment, identity, state)
        frames.append(ResolvedWordFrame(word=word, identity=identity))
    return frames


def run(state: SegmentationState) -> None:
    state.frames = resolve_identities(state.words, state.require_speaker_state())


__all__ = [
    "IDENTITY_RULES",
    "IdentityRule",
    "RuleContext",
    "apply_channel_human_id",
    "apply_explicit_assignment",
    "apply_identity_rules",
    "apply_speaker_index_human_id",
    "carry_partial_identity_forward",
    "remember_identity",
    "resolve_identities",
    "run",
]
