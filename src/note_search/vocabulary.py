"""
WordPiece vocabulary loading and lookup.

A vocabulary file is a newline-delimited token list; a token's id is the
0-based index of its line.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path
from types import MappingProxyType


logger = logging.getLogger(__name__)

UNK_TOKEN = "[UNK]"
PAD_TOKEN = "[PAD]"
CLS_TOKEN = "[CLS]"
SEP_TOKEN = "[SEP]"

RESERVED_TOKENS = frozenset({UNK_TOKEN, PAD_TOKEN, CLS_TOKEN, SEP_TOKEN})


class Vocabulary:
    """Immutable token <-> id mapping."""

    def __init__(self, tokens: Sequence[str]) -> None:
        # Keys are NFC so lookups match canonically equivalent text.
        self._tokens: tuple[str, ...] = tuple(
            unicodedata.normalize("NFC", token) for token in tokens
        )
        ids: dict[str, int] = {}
        for index, token in enumerate(self._tokens):
            # Duplicate lines: the later line wins.
            ids[token] = index
        self._ids = MappingProxyType(ids)

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> Vocabulary:
        return cls(list(tokens))

    @classmethod
    def load(cls, source: str | PathLike[str] | Iterable[str]) -> Vocabulary:
        """
        Build a vocabulary from a file path or an iterable of lines.

        An unreadable file yields an empty vocabulary; every lookup then
        misses and tokenization degrades accordingly.
        """
        if isinstance(source, (str, PathLike)):
            path = Path(source).expanduser()
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Failed to load vocabulary file %s: %s", path, exc)
                return cls([])
            lines: Iterable[str] = content.splitlines()
        else:
            lines = (line.rstrip("\r\n") for line in source)

        vocabulary = cls(list(lines))
        logger.debug("Loaded vocabulary with %d entries", len(vocabulary))
        return vocabulary

    def id_of(self, token: str) -> int | None:
        return self._ids.get(unicodedata.normalize("NFC", token))

    def token_of(self, token_id: int) -> str | None:
        if 0 <= token_id < len(self._tokens):
            return self._tokens[token_id]
        return None

    @property
    def unk_id(self) -> int | None:
        return self._ids.get(UNK_TOKEN)

    @property
    def pad_id(self) -> int | None:
        return self._ids.get(PAD_TOKEN)

    @property
    def cls_id(self) -> int | None:
        return self._ids.get(CLS_TOKEN)

    @property
    def sep_id(self) -> int | None:
        return self._ids.get(SEP_TOKEN)

    def __contains__(self, token: object) -> bool:
        if isinstance(token, str):
            token = unicodedata.normalize("NFC", token)
        return token in self._ids

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self._tokens)})"


def load_vocabulary(source: str | PathLike[str] | Iterable[str]) -> Vocabulary:
    """Load a vocabulary from a path or iterable of lines."""
    return Vocabulary.load(source)
