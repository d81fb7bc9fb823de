"""
Configuration helpers for vocabulary, model and notes locations.
"""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_VOCAB_PATH = "~/.note_search/vocab.txt"
DEFAULT_MODEL_PATH = "~/.note_search/model.onnx"
DEFAULT_NOTES_PATH = "~/.note_search/notes.json"
DEFAULT_PROVIDER = "onnx"

ENV_VOCAB_PATH = "NOTE_SEARCH_VOCAB_PATH"
ENV_MODEL_PATH = "NOTE_SEARCH_MODEL_PATH"
ENV_NOTES_PATH = "NOTE_SEARCH_NOTES_PATH"
ENV_PROVIDER = "NOTE_SEARCH_PROVIDER"

SUPPORTED_PROVIDERS = ("onnx", "genai")


def _resolve_path(override_path: str | None, env_var: str, default: str) -> str:
    """
    Resolve a path from explicit override, env var, or default.

    Precedence:
    1) explicit override_path
    2) environment variable
    3) default path
    """
    raw_path = override_path or os.getenv(env_var) or default
    return str(Path(raw_path).expanduser().resolve())


def resolve_vocab_path(override_path: str | None = None) -> str:
    return _resolve_path(override_path, ENV_VOCAB_PATH, DEFAULT_VOCAB_PATH)


def resolve_model_path(override_path: str | None = None) -> str:
    return _resolve_path(override_path, ENV_MODEL_PATH, DEFAULT_MODEL_PATH)


def resolve_notes_path(override_path: str | None = None) -> str:
    return _resolve_path(override_path, ENV_NOTES_PATH, DEFAULT_NOTES_PATH)


def resolve_provider(override: str | None = None) -> str:
    provider = (override or os.getenv(ENV_PROVIDER) or DEFAULT_PROVIDER).lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ValueError(
            f"Unknown embedding provider '{provider}'. "
            f"Supported: {', '.join(SUPPORTED_PROVIDERS)}."
        )
    return provider
