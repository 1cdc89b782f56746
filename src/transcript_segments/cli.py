"""Command line interface for the transcript segment builder."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import typer

from .errors import SegmentationError
from .io.payload import load_transcript_frame
from .labels import StaticLabelContext
from .outputs import build_speaker_rollup, render_human_transcript, segments_to_dicts
from .pipeline.builder import build_segments
from .pipeline.logger import set_verbose
from .pipeline.models import Segment

app = typer.Typer(help="Build speaker-attributed transcript segments from recognized words.")


class OutputFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


@app.callback()
def main() -> None:
    """Transcript segment builder."""


def _parse_names(values: list[str] | None) -> dict[str, str]:
    names: dict[str, str] = {}
    for value in values or []:
        human_id, sep, name = value.partition("=")
        if not sep or not human_id.strip() or not name.strip():
            raise typer.BadParameter(f"expected ID=NAME, got {value!r}", param_hint="--name")
        names[human_id.strip()] = name.strip()
    return names


def _option_overrides(max_gap_ms: float | None, num_speakers: int | None) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if max_gap_ms is not None:
        overrides["max_gap_ms"] = max_gap_ms
    if num_speakers is not None:
        overrides["num_speakers"] = num_speakers
    return overrides


def _build_from_file(
    input: Path, max_gap_ms: float | None, num_speakers: int | None
) -> list[Segment]:
    frame = load_transcript_frame(input)
    options = dict(frame.options)
    options.update(_option_overrides(max_gap_ms, num_speakers))
    return build_segments(
        frame.final_words,
        frame.partial_words,
        frame.runtime_hints(),
        options,
    )


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text.rstrip("\n"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")


def _fail(exc: SegmentationError) -> None:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command(help="Build segments from a transcript frame JSON document.")
def build(
    input: Path = typer.Argument(..., exists=True, readable=True, help="Transcript frame JSON"),
    max_gap_ms: Optional[float] = typer.Option(
        None, help="Split same-speaker runs on silences longer than this (ms)"
    ),
    num_speakers: Optional[int] = typer.Option(
        None, help="Number of call participants (2 makes the remote channel single-speaker)"
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.JSON, "--format", case_sensitive=False, help="Output format"
    ),
    self_human_id: Optional[str] = typer.Option(
        None, help="Human id of the local participant (labels the mic channel)"
    ),
    name: Optional[list[str]] = typer.Option(
        None, "--name", help="Display name mapping ID=NAME; may be repeated"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
    verbose: bool = typer.Option(False, "--verbose", help="Log stage timings", is_flag=True),
) -> None:
    set_verbose(verbose)
    ctx = StaticLabelContext(self_human_id=self_human_id, names=_parse_names(name))
    try:
        segments = _build_from_file(input, max_gap_ms, num_speakers)
    except SegmentationError as exc:
        _fail(exc)
        return

    if format is OutputFormat.TEXT:
        _emit(render_human_transcript(segments, ctx), output)
    else:
        _emit(json.dumps(segments_to_dicts(segments, ctx), indent=2, ensure_ascii=False), output)


@app.command(help="Summarise who spoke, per segment key.")
def speakers(
    input: Path = typer.Argument(..., exists=True, readable=True, help="Transcript frame JSON"),
    max_gap_ms: Optional[float] = typer.Option(None, help="Silence split threshold (ms)"),
    num_speakers: Optional[int] = typer.Option(None, help="Number of call participants"),
    self_human_id: Optional[str] = typer.Option(None, help="Human id of the local participant"),
    name: Optional[list[str]] = typer.Option(None, "--name", help="ID=NAME; may be repeated"),
    verbose: bool = typer.Option(False, "--verbose", help="Log stage timings", is_flag=True),
) -> None:
    set_verbose(verbose)
    ctx = StaticLabelContext(self_human_id=self_human_id, names=_parse_names(name))
    try:
        segments = _build_from_file(input, max_gap_ms, num_speakers)
    except SegmentationError as exc:
        _fail(exc)
        return
    typer.echo(json.dumps(build_speaker_rollup(segments, ctx), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
