"""Pydantic models for transcript frame documents.

A frame is the complete input of one ``build_segments`` call, as produced by
a recorder or exported from storage::

    {
      "final_words":   [{"text": "hi", "start_ms": 0, "end_ms": 200, "channel": 0, "id": "w1"}],
      "partial_words": [{"text": "there", "start_ms": 250, "end_ms": 400, "channel": 0}],
      "speaker_hints": [{"word_index": 0, "data": {"type": "user_speaker_assignment", "human_id": "alice"}}],
      "stored_speaker_hints": [{"word_id": "w1", "type": "provider_speaker_index", "value": {"speaker_index": 0}}],
      "options": {"max_gap_ms": 2000, "num_speakers": 2}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import PayloadError
from ..pipeline.models import (
    ChannelProfile,
    ProviderSpeakerIndex,
    RuntimeSpeakerHint,
    UserSpeakerAssignment,
    Word,
)
from .hint_adapter import StoredSpeakerHint, runtime_hints_from_stored


class WordPayload(BaseModel):
    """A recognized word; extra recognizer fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    text: str
    start_ms: int = Field(..., ge=0)
    end_ms: int = Field(..., ge=0)
    channel: ChannelProfile = ChannelProfile.DIRECT_MIC
    id: str | None = None

    @model_validator(mode="after")
    def check_timing(self) -> WordPayload:
        if self.end_ms < self.start_ms:
            raise ValueError("end_ms must not precede start_ms")
        return self

    def to_word(self) -> Word:
        return Word(
            text=self.text,
            start_ms=self.start_ms,
            end_ms=self.end_ms,
            channel=self.channel,
            id=self.id or None,
        )


class ProviderSpeakerIndexPayload(BaseModel):
    type: Literal["provider_speaker_index"]
    speaker_index: int
    provider: str | None = None
    channel: int | None = None


class UserSpeakerAssignmentPayload(BaseModel):
    type: Literal["user_speaker_assignment"]
    human_id: str = Field(..., min_length=1)


HintDataPayload = Annotated[
    Union[ProviderSpeakerIndexPayload, UserSpeakerAssignmentPayload],
    Field(discriminator="type"),
]


class SpeakerHintPayload(BaseModel):
    """Hint addressed by position in the merged, time-sorted word sequence."""

    word_index: int
    data: HintDataPayload

    def to_hint(self) -> RuntimeSpeakerHint:
        data = self.data
        if isinstance(data, ProviderSpeakerIndexPayload):
            return RuntimeSpeakerHint(
                word_index=self.word_index,
                data=ProviderSpeakerIndex(
                    speaker_index=data.speaker_index,
                    provider=data.provider,
                    channel=data.channel,
                ),
            )
        return RuntimeSpeakerHint(
            word_index=self.word_index,
            data=UserSpeakerAssignment(human_id=data.human_id),
        )


class StoredSpeakerHintPayload(BaseModel):
    """Hint addressed by stable word id, as persisted."""

    word_id: str
    type: str
    value: dict[str, Any] = Field(default_factory=dict)

    def to_stored(self) -> StoredSpeakerHint:
        return StoredSpeakerHint(word_id=self.word_id, type=self.type, value=dict(self.value))


class BuilderOptionsPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_gap_ms: float | None = Field(None, ge=0)
    num_speakers: int | None = Field(None, ge=1)


class TranscriptFramePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    final_words: list[WordPayload] = Field(default_factory=list)
    partial_words: list[WordPayload] = Field(default_factory=list)
    speaker_hints: list[SpeakerHintPayload] = Field(default_factory=list)
    stored_speaker_hints: list[StoredSpeakerHintPayload] = Field(default_factory=list)
    options: BuilderOptionsPayload = Field(default_factory=BuilderOptionsPayload)


@dataclass
class TranscriptFrame:
    """Validated frame converted to core types."""

    final_words: list[Word] = field(default_factory=list)
    partial_words: list[Word] = field(default_factory=list)
    speaker_hints: list[RuntimeSpeakerHint] = field(default_factory=list)
    stored_speaker_hints: list[StoredSpeakerHint] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)

    def runtime_hints(self) -> list[RuntimeSpeakerHint]:
        """Positional hints followed by the translated stored hints."""

        hints = list(self.speaker_hints)
        if self.stored_speaker_hints:
            hints.extend(
                runtime_hints_from_stored(
                    self.final_words, self.partial_words, self.stored_speaker_hints
                )
            )
        return hints


def _summarise_validation(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": ".".join(str(part) for part in err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def parse_transcript_frame(obj: Any) -> TranscriptFrame:
    try:
        payload = TranscriptFramePayload.model_validate(obj)
    except ValidationError as exc:
        errors = _summarise_validation(exc)
        first = errors[0] if errors else {"loc": "", "msg": str(exc)}
        raise PayloadError(
            f"Invalid transcript frame at {first['loc'] or '<root>'}: {first['msg']}",
            context={"errors": errors},
            cause=exc,
        ) from exc

    return TranscriptFrame(
        final_words=[word.to_word() for word in payload.final_words],
        partial_words=[word.to_word() for word in payload.partial_words],
        speaker_hints=[hint.to_hint() for hint in payload.speaker_hints],
        stored_speaker_hints=[hint.to_stored() for hint in payload.stored_speaker_hints],
        options=payload.options.model_dump(exclude_none=True),
    )


def load_transcript_frame(path: Path | str) -> TranscriptFrame:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PayloadError(
            f"Could not read transcript frame: {exc}", context={"path": path.as_posix()}, cause=exc
        ) from exc
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadError(
            f"Transcript frame is not valid JSON: {exc.msg} (line {exc.lineno})",
            context={"path": path.as_posix()},
            cause=exc,
        ) from exc
    return parse_transcript_frame(obj)


__all__ = [
    "TranscriptFrame",
    "TranscriptFramePayload",
    "WordPayload",
    "SpeakerHintPayload",
    "StoredSpeakerHintPayload",
    "BuilderOptionsPayload",
    "load_transcript_frame",
    "parse_transcript_frame",
]
