"""
WordPiece tokenizer producing fixed-length model inputs.

Text is NFC-normalized, lowercased, split on whitespace, broken into greedy
longest-match subword pieces over grapheme clusters, wrapped in [CLS]/[SEP] and padded or truncated to a fixed
length together with an attention mask.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass

import regex

from .vocabulary import (
    CLS_TOKEN,
    RESERVED_TOKENS,
    SEP_TOKEN,
    UNK_TOKEN,
    Vocabulary,
)


MAX_LEN = 128
CONTINUATION_PREFIX = "##"
_FALLBACK_PAD_ID = 0
_GRAPHEME = regex.compile(r"\X")


@dataclass(frozen=True)
class TokenizedInput:
    """Fixed-length token ids and the matching attention mask."""

    ids: tuple[int, ...]
    attention_mask: tuple[int, ...]

    @property
    def content_length(self) -> int:
        return sum(self.attention_mask)


class Tokenizer:
    """Deterministic WordPiece tokenizer over a shared read-only vocabulary."""

    def __init__(self, vocabulary: Vocabulary, *, max_length: int = MAX_LEN) -> None:
        if max_length <= 0:
            raise ValueError("max_length must be > 0")
        self.vocabulary = vocabulary
        self.max_length = max_length

    @property
    def pad_id(self) -> int:
        pad_id = self.vocabulary.pad_id
        return _FALLBACK_PAD_ID if pad_id is None else pad_id

    @staticmethod
    def words(text: str) -> list[str]:
        return unicodedata.normalize("NFC", text.lower()).split()

    def wordpiece(self, word: str) -> list[str]:
        """
        Split a single word into vocabulary pieces.

        Non-initial pieces carry the ``##`` continuation prefix. A position
        where not even one character matches emits [UNK] and advances by one
        character. Characters are grapheme clusters, so a combining mark or an
        emoji modifier is never split from its base.
        """
        word = unicodedata.normalize("NFC", word)
        if word in self.vocabulary:
            return [word]

        chars = _GRAPHEME.findall(word)
        pieces: list[str] = []
        start = 0
        length = len(chars)
        while start < length:
            end = length
            found: str | None = None
            while start < end:
                candidate = "".join(chars[start:end])
                if start > 0:
                    candidate = CONTINUATION_PREFIX + candidate
                if candidate in self.vocabulary:
                    found = candidate
                    break
                end -= 1

            if found is None:
                pieces.append(UNK_TOKEN)
                start += 1
            else:
                pieces.append(found)
                start = end
        return pieces

    def tokens(self, text: str) -> list[str]:
        """Return the string token sequence, including [CLS] and [SEP]."""
        tokens = [CLS_TOKEN]
        for word in self.words(text):
            tokens.extend(self.wordpiece(word))
        tokens.append(SEP_TOKEN)
        return tokens

    def convert_tokens_to_ids(self, tokens: Sequence[str]) -> list[int]:
        unk_id = self.vocabulary.unk_id
        ids: list[int] = []
        for token in tokens:
            token_id = self.vocabulary.id_of(token)
            if token_id is None:
                token_id = unk_id
            if token_id is not None:
                ids.append(token_id)
        return ids

    def tokenize(self, text: str) -> TokenizedInput:
        ids = self.convert_tokens_to_ids(self.tokens(text))
        # Hard cut: a truncated sequence loses its trailing [SEP].
        ids = ids[: self.max_length]
        padding = self.max_length - len(ids)
        attention_mask = [1] * len(ids) + [0] * padding
        ids.extend([self.pad_id] * padding)
        return TokenizedInput(ids=tuple(ids), attention_mask=tuple(attention_mask))

    def decode(
        self,
        ids: Sequence[int],
        attention_mask: Sequence[int] | None = None,
    ) -> str:
        """Rebuild text from ids, skipping padding and reserved tokens."""
        words: list[str] = []
        for position, token_id in enumerate(ids):
            if attention_mask is not None and not attention_mask[position]:
                break
            token = self.vocabulary.token_of(token_id)
            if token is None or token in RESERVED_TOKENS:
                continue
            if token.startswith(CONTINUATION_PREFIX) and words:
                words[-1] += token[len(CONTINUATION_PREFIX) :]
            else:
                words.append(token)
        return " ".join(words)
