from __future__ import annotations

from transcript_segments.pipeline.config import SegmentBuilderOptions
from transcript_segments.pipeline.models import (
    ChannelProfile,
    ProviderSpeakerIndex,
    RuntimeSpeakerHint,
    SpeakerIdentity,
    UserSpeakerAssignment,
    Word,
)
from transcript_segments.pipeline.speaker_state import create_speaker_state
from transcript_segments.pipeline.stages.normalize import normalize_words
from transcript_segments.pipeline.stages.resolve import (
    RuleContext,
    apply_channel_human_id,
    apply_identity_rules,
    carry_partial_identity_forward,
    remember_identity,
    resolve_identities,
)

MIC = ChannelProfile.DIRECT_MIC
REMOTE = ChannelProfile.REMOTE_PARTY
MIXED = ChannelProfile.MIXED_CAPTURE


def _w(start: int, channel: ChannelProfile = MIC) -> Word:
    return Word(text=f"w{start}", start_ms=start, end_ms=start + 80, channel=channel)


def _index(word_index: int, speaker_index: int) -> RuntimeSpeakerHint:
    return RuntimeSpeakerHint(word_index, ProviderSpeakerIndex(speaker_index=speaker_index))


def _human(word_index: int, human_id: str) -> RuntimeSpeakerHint:
    return RuntimeSpeakerHint(word_index, UserSpeakerAssignment(human_id=human_id))


def _resolve(finals, partials=(), hints=(), num_speakers=None):
    state = create_speaker_state(hints, SegmentBuilderOptions(num_speakers=num_speakers))
    frames = resolve_identities(normalize_words(finals, partials), state)
    return [frame.identity for frame in frames], state


def test_explicit_assignment_is_applied():
    identities, _ = _resolve([_w(0, MIXED)], hints=[_index(0, 3)])

    assert identities == [SpeakerIdentity(speaker_index=3)]


def test_eager_index_mapping_names_other_words():
    identities, _ = _resolve(
        [_w(0, MIXED), _w(100, MIXED)],
        hints=[_index(1, 1), _index(0, 1), _human(1, "bob")],
    )

    assert identities[0] == SpeakerIdentity(speaker_index=1, human_id="bob")


def test_index_mapping_is_learned_while_resolving():
    identities, state = _resolve(
        [_w(0, MIC), _w(100, MIC), _w(200, MIXED)],
        hints=[_human(0, "me"), _index(1, 2), _index(2, 2)],
    )

    assert identities == [
        SpeakerIdentity(human_id="me"),
        SpeakerIdentity(speaker_index=2, human_id="me"),
        SpeakerIdentity(speaker_index=2, human_id="me"),
    ]
    assert state.human_id_by_speaker_index == {2: "me"}
    assert state.human_id_by_channel == {MIC: "me"}


def test_complete_channel_owner_names_later_words():
    identities, _ = _resolve([_w(0), _w(50)], hints=[_human(0, "alice")])

    assert identities == [SpeakerIdentity(human_id="alice"), SpeakerIdentity(human_id="alice")]


def test_incomplete_channel_is_not_resolved_by_channel():
    identities, state = _resolve([_w(0, REMOTE), _w(50, REMOTE)], hints=[_human(0, "bob")])

    assert identities[1] == SpeakerIdentity()
    assert state.human_id_by_channel == {}


def test_remote_channel_resolves_by_channel_with_two_speakers():
    identities, state = _resolve(
        [_w(0, REMOTE), _w(50, REMOTE)], hints=[_human(0, "bob")], num_speakers=2
    )

    assert identities[1] == SpeakerIdentity(human_id="bob")
    assert state.human_id_by_channel == {REMOTE: "bob"}


def test_index_scoped_human_is_not_promoted_to_channel():
    identities, state = _resolve([_w(0), _w(50)], hints=[_index(0, 0), _human(0, "alice")])

    assert identities == [SpeakerIdentity(speaker_index=0, human_id="alice"), SpeakerIdentity()]
    assert state.human_id_by_channel == {}


def test_partial_inherits_last_speaker_but_final_does_not():
    identities, _ = _resolve(
        [_w(0, REMOTE), _w(200, REMOTE)],
        partials=[_w(100, REMOTE)],
        hints=[_index(0, 1)],
    )

    assert identities == [
        SpeakerIdentity(speaker_index=1),
        SpeakerIdentity(speaker_index=1),
        SpeakerIdentity(),
    ]


def test_carry_forward_fills_only_missing_fields():
    identities, _ = _resolve(
        [_w(0, MIXED)],
        partials=[_w(100, MIXED)],
        hints=[_index(0, 1), _human(0, "x"), _index(1, 3)],
    )

    assert identities[1] == SpeakerIdentity(speaker_index=3, human_id="x")


def test_unresolved_final_keeps_channel_memory():
    identities, state = _resolve(
        [_w(0, REMOTE), _w(100, REMOTE)],
        partials=[_w(200, REMOTE)],
        hints=[_index(0, 1)],
    )

    assert identities[1] == SpeakerIdentity()
    assert identities[2] == SpeakerIdentity(speaker_index=1)
    assert state.last_speaker_by_channel[REMOTE] == SpeakerIdentity(speaker_index=1)


def test_partial_without_own_evidence_leaves_memory_alone():
    _, state = _resolve([_w(0, REMOTE)], hints=[_index(0, 1)])
    (partial,) = normalize_words([], [_w(300, REMOTE)])

    remember_identity(partial, None, SpeakerIdentity(human_id="zed"), state)

    assert state.last_speaker_by_channel[REMOTE] == SpeakerIdentity(speaker_index=1)


def test_partial_with_explicit_assignment_updates_memory():
    _, state = _resolve([_w(0, REMOTE)], hints=[_index(0, 1)])
    (partial,) = normalize_words([], [_w(300, REMOTE)])
    assignment = SpeakerIdentity(human_id="zed")

    remember_identity(partial, assignment, SpeakerIdentity(speaker_index=1, human_id="zed"), state)

    assert state.last_speaker_by_channel[REMOTE] == SpeakerIdentity(speaker_index=1, human_id="zed")
    assert state.human_id_by_speaker_index == {1: "zed"}


def test_out_of_range_hints_are_inert():
    identities, _ = _resolve([_w(0), _w(100)], hints=[_human(7, "ghost"), _index(-1, 4)])

    assert identities == [SpeakerIdentity(), SpeakerIdentity()]


def test_rules_only_fill_unset_fields():
    state = create_speaker_state([], SegmentBuilderOptions())
    state.human_id_by_channel[MIC] = "owner"
    (word,) = normalize_words([_w(0)], [])
    ctx = RuleContext(word=word, state=state)

    assert apply_channel_human_id(SpeakerIdentity(human_id="kept"), ctx).human_id == "kept"
    assert apply_channel_human_id(SpeakerIdentity(), ctx).human_id == "owner"
    assert carry_partial_identity_forward(SpeakerIdentity(), ctx) == SpeakerIdentity()


def test_rule_list_can_be_replaced():
    state = create_speaker_state([], SegmentBuilderOptions())
    (word,) = normalize_words([_w(0)], [])

    def always_seven(identity, ctx):
        return SpeakerIdentity(speaker_index=7, human_id=identity.human_id)

    identity = apply_identity_rules(RuleContext(word=word, state=state), rules=[always_seven])

    assert identity == SpeakerIdentity(speaker_index=7)
