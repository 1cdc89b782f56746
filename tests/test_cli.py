"""Regression tests for the transcript-segments Typer CLI."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from transcript_segments import cli

FRAME = {
    "final_words": [
        {"text": "hi", "start_ms": 0, "end_ms": 200, "channel": 0},
        {"text": "hello", "start_ms": 400, "end_ms": 700, "channel": 1, "id": "r1"},
        {"text": "again", "start_ms": 5000, "end_ms": 5300, "channel": 1},
    ],
    "stored_speaker_hints": [
        {"word_id": "r1", "type": "user_speaker_assignment", "value": {"human_id": "bob"}}
    ],
    "options": {"num_speakers": 2},
}


def _write_frame(tmp_path, frame=FRAME):
    path = tmp_path / "frame.json"
    path.write_text(json.dumps(frame), encoding="utf-8")
    return path


def test_build_command_prints_segments_json(tmp_path):
    """Ensure `transcript-segments build` emits labelled segments."""

    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["build", str(_write_frame(tmp_path)), "--self-human-id", "me", "--name", "bob=Bob"],
    )

    assert result.exit_code == 0, result.stdout

    payload = json.loads(result.stdout.strip())
    assert [row["label"] for row in payload] == ["You", "Bob"]
    assert payload[1]["key"] == {"channel": 1, "speaker_human_id": "bob"}
    assert payload[1]["text"] == "hello again"


def test_cli_options_override_frame_options(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli.app, ["build", str(_write_frame(tmp_path)), "--max-gap-ms", "1000"]
    )

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout.strip())
    assert [row["text"] for row in payload] == ["hi", "hello", "again"]


def test_text_format_written_to_file(tmp_path):
    out_file = tmp_path / "out" / "transcript.txt"

    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["build", str(_write_frame(tmp_path)), "--format", "text", "-o", str(out_file)],
    )

    assert result.exit_code == 0, result.stdout
    rendered = out_file.read_text(encoding="utf-8")
    assert rendered.startswith("[00:00.000 - 00:00.200] Speaker 1\n  Text: hi\n")
    assert "Text: hello again" in rendered


def test_speakers_command_prints_rollup(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli.app, ["speakers", str(_write_frame(tmp_path))])

    assert result.exit_code == 0, result.stdout
    rollup = json.loads(result.stdout.strip())
    assert [row["words"] for row in rollup] == [1, 2]


def test_invalid_frame_exits_with_error(tmp_path):
    path = _write_frame(tmp_path, {"final_words": [{"text": "x", "start_ms": 9, "end_ms": 1}]})

    runner = CliRunner()
    result = runner.invoke(cli.app, ["build", str(path)])

    assert result.exit_code == 1
    assert "error: Invalid transcript frame" in result.output


def test_malformed_name_mapping_is_rejected(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli.app, ["build", str(_write_frame(tmp_path)), "--name", "bob"])

    assert result.exit_code != 0
