"""Tests for the command-line entry point."""

import argparse

import pytest

import cli
from resume_builder.client.draft_store import DraftStore, FileStorage


def test_draft_file_requires_json_suffix():
    with pytest.raises(argparse.ArgumentTypeError):
        cli.draft_file("foo.txt")

    assert cli.draft_file("drafts/foo.json").stem == "foo"


def test_non_json_draft_is_rejected(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--mode", "text", "--draft", "foo.txt"])

    assert excinfo.value.code == 2
    assert "must end in .json" in capsys.readouterr().err


def test_text_mode_reads_given_draft(tmp_path, capsys):
    DraftStore(FileStorage(tmp_path), key="mine").save(
        {"personalInfo": {"firstName": "Ana", "lastName": "Silva"}, "skills": ["Python"]}
    )

    cli.main(["--mode", "text", "--draft", str(tmp_path / "mine.json")])

    out = capsys.readouterr().out
    assert "Ana Silva" in out
    assert "Python" in out
