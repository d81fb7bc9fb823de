"""CLI tests for the search and tokenize commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import note_search.main as main_module
from note_search.tokenizer import Tokenizer


@pytest.fixture()
def notes_env(tmp_path: Path, search_tokens: list[str]) -> dict[str, str]:
    vocab_file = tmp_path / "vocab.txt"
    vocab_file.write_text("\n".join(search_tokens) + "\n", encoding="utf-8")
    notes_file = tmp_path / "notes.json"
    notes_file.write_text(
        json.dumps(
            [
                {"id": "n1", "content": "beta"},
                {"id": "n2", "content": "gamma"},
                {"id": "n3", "content": "alpha"},
            ]
        )
    )
    return {"vocab": str(vocab_file), "notes": str(notes_file)}


@pytest.fixture()
def stub_provider(monkeypatch, text_keyed_provider) -> None:
    def fake_build_provider(provider, tokenizer: Tokenizer, *, model_path=None):
        return text_keyed_provider(
            tokenizer,
            {
                "alpha": [1.0, 0.0],
                "beta": [0.0, 1.0],
                "gamma": [0.7, 0.7],
            },
        )

    monkeypatch.setattr(main_module, "build_provider", fake_build_provider)


def _positions(output: str, ids: list[str]) -> list[int]:
    return [output.index(doc_id) for doc_id in ids]


def test_search_prints_ranked_notes(notes_env, stub_provider) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["search", "alpha", "--notes", notes_env["notes"], "--vocab", notes_env["vocab"]],
    )

    assert result.exit_code == 0
    n3, n2, n1 = _positions(result.output, ["n3", "n2", "n1"])
    assert n3 < n2 < n1


def test_search_with_workers(notes_env, stub_provider) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        [
            "search",
            "alpha",
            "--notes",
            notes_env["notes"],
            "--vocab",
            notes_env["vocab"],
            "--workers",
            "3",
            "--limit",
            "1",
        ],
    )

    assert result.exit_code == 0
    assert "n3" in result.output
    assert "n1" not in result.output


def test_empty_query_lists_notes_in_original_order(notes_env, stub_provider) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["search", "", "--notes", notes_env["notes"], "--vocab", notes_env["vocab"]],
    )

    assert result.exit_code == 0
    n1, n2, n3 = _positions(result.output, ["n1", "n2", "n3"])
    assert n1 < n2 < n3


def test_search_missing_notes_file_means_no_notes(tmp_path: Path, stub_provider) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["search", "alpha", "--notes", str(tmp_path / "missing.json")],
    )

    assert result.exit_code == 0
    assert "No matching notes." in result.output


def test_search_malformed_notes_file_fails(tmp_path: Path, stub_provider) -> None:
    notes_file = tmp_path / "notes.json"
    notes_file.write_text("{not json")

    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["search", "alpha", "--notes", str(notes_file)],
    )

    assert result.exit_code == 1
    assert "Could not read notes" in result.output


def test_search_genai_without_key_fails(notes_env, monkeypatch) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        [
            "search",
            "alpha",
            "--notes",
            notes_env["notes"],
            "--vocab",
            notes_env["vocab"],
            "--provider",
            "genai",
        ],
    )

    assert result.exit_code == 1
    assert "GOOGLE_API_KEY" in result.output


def test_tokenize_prints_ids(tmp_path: Path, base_tokens: list[str]) -> None:
    vocab_file = tmp_path / "vocab.txt"
    vocab_file.write_text("\n".join(base_tokens), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["tokenize", "Hello world", "--vocab", str(vocab_file), "--show-tokens"],
    )

    assert result.exit_code == 0
    assert "[CLS] hello world [SEP]" in result.output
    assert "[2, 4, 5, 3]" in result.output
    assert "Length: 4 / 128" in result.output
