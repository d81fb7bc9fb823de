from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from note_search.tokenizer import Tokenizer
from note_search.vocabulary import Vocabulary


BASE_TOKENS = ["[PAD]", "[UNK]", "[CLS]", "[SEP]", "hello", "world"]
SEARCH_TOKENS = BASE_TOKENS + [
    "alpha",
    "beta",
    "gamma",
    "query",
    "play",
    "##ing",
    "##s",
    "un",
    "una",
    "##ble",
]


class TextKeyedProvider:
    """Embedding stub that decodes the ids and looks the text up in a table."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        vectors: dict[str, list[float] | None],
    ) -> None:
        self.tokenizer = tokenizer
        self.vectors = vectors
        self.calls: list[str] = []

    def embed(
        self, ids: Sequence[int], attention_mask: Sequence[int]
    ) -> list[float] | None:
        text = self.tokenizer.decode(ids, attention_mask)
        self.calls.append(text)
        return self.vectors.get(text)


@pytest.fixture()
def base_tokens() -> list[str]:
    return list(BASE_TOKENS)


@pytest.fixture()
def search_tokens() -> list[str]:
    return list(SEARCH_TOKENS)


@pytest.fixture()
def vocabulary(base_tokens: list[str]) -> Vocabulary:
    return Vocabulary.from_tokens(base_tokens)


@pytest.fixture()
def tokenizer(vocabulary: Vocabulary) -> Tokenizer:
    return Tokenizer(vocabulary)


@pytest.fixture()
def search_tokenizer(search_tokens: list[str]) -> Tokenizer:
    return Tokenizer(Vocabulary.from_tokens(search_tokens))


@pytest.fixture()
def text_keyed_provider() -> Callable[..., TextKeyedProvider]:
    """Factory for stub providers mapping decoded text to fixed vectors."""

    def make(
        tokenizer: Tokenizer, vectors: dict[str, list[float] | None]
    ) -> TextKeyedProvider:
        return TextKeyedProvider(tokenizer, vectors)

    return make
