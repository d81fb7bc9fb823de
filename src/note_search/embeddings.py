"""
Embedding providers for note similarity search.

An embedding provider maps a tokenized input (ids plus attention mask) to a
unit-normalized vector, or returns ``None`` when the backend is unavailable or
the computation fails. Two backends are shipped: a local ONNX sentence
embedding model and the Google GenAI embedding API.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from google.genai import Client as GenAIClient

from .tokenizer import Tokenizer


logger = logging.getLogger(__name__)

DIM = 384

_DEFAULT_GENAI_MODEL = "gemini-embedding-001"
_GENAI_TASK_TYPE = "SEMANTIC_SIMILARITY"


class EmbeddingProvider(Protocol):
    """Capability that turns a tokenized input into an embedding."""

    def embed(
        self, ids: Sequence[int], attention_mask: Sequence[int]
    ) -> list[float] | None:
        """Return a unit-normalized vector, or None if unavailable."""


def normalize(vector: Sequence[float]) -> list[float]:
    """Scale a vector to unit length; a zero vector is returned unchanged."""
    norm = math.sqrt(sum(x * x for x in vector))
    if norm == 0:
        return [float(x) for x in vector]
    return [float(x) / norm for x in vector]


class OnnxEmbeddingProvider:
    """
    Run a local sentence-embedding model with ONNX Runtime.

    The model is loaded on first use. If loading fails, the failure is logged
    once and every later call reports the provider as unavailable.
    """

    def __init__(
        self,
        model_path: str | Path,
        *,
        dim: int = DIM,
        session: Any | None = None,
    ) -> None:
        self.model_path = Path(model_path).expanduser()
        self.dim = dim
        self._session = session
        self._disabled = False

    @property
    def available(self) -> bool:
        return self._load_session() is not None

    def _load_session(self) -> Any | None:
        if self._session is not None or self._disabled:
            return self._session
        try:
            import onnxruntime as ort

            self._session = ort.InferenceSession(
                str(self.model_path),
                providers=["CPUExecutionProvider"],
            )
        except Exception as exc:
            logger.warning("Failed to load embedding model %s: %s", self.model_path, exc)
            self._disabled = True
            return None
        logger.debug("Loaded embedding model %s", self.model_path)
        return self._session

    def embed(
        self, ids: Sequence[int], attention_mask: Sequence[int]
    ) -> list[float] | None:
        session = self._load_session()
        if session is None:
            return None

        import numpy as np

        try:
            input_ids = np.asarray([ids], dtype=np.int64)
            mask = np.asarray([attention_mask], dtype=np.int64)
            feeds: dict[str, Any] = {}
            for model_input in session.get_inputs():
                if model_input.name == "input_ids":
                    feeds[model_input.name] = input_ids
                elif model_input.name == "attention_mask":
                    feeds[model_input.name] = mask
                elif model_input.name == "token_type_ids":
                    feeds[model_input.name] = np.zeros_like(input_ids)
            output = np.asarray(session.run(None, feeds)[0], dtype=np.float32)
        except Exception as exc:
            logger.warning("Embedding computation failed: %s", exc)
            return None

        if output.ndim == 3:
            # Token-level hidden states: mean-pool over the real tokens.
            weights = mask[..., None].astype(np.float32)
            pooled = (output * weights).sum(axis=1) / np.clip(
                weights.sum(axis=1), 1e-9, None
            )
            vector = pooled[0]
        else:
            vector = output.reshape(-1)

        if vector.shape[0] != self.dim:
            logger.warning(
                "Embedding model returned dimension %d, expected %d",
                vector.shape[0],
                self.dim,
            )
            return None
        return normalize(vector.tolist())


class GenAIEmbeddingProvider:
    """Embed tokenized text via the Google GenAI embedding API."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int = DIM,
        client: Any | None = None,
    ) -> None:
        self.tokenizer = tokenizer
        self.model = model or os.getenv(
            "NOTE_SEARCH_EMBEDDING_MODEL", _DEFAULT_GENAI_MODEL
        )
        self.dim = dim

        if client is not None:
            self._client = client
        else:
            resolved_key = api_key or os.getenv("GOOGLE_API_KEY")
            if resolved_key is None:
                raise ValueError(
                    "GOOGLE_API_KEY not found. "
                    "Provide api_key or set the environment variable."
                )
            self._client = GenAIClient(api_key=resolved_key)

    def embed(
        self, ids: Sequence[int], attention_mask: Sequence[int]
    ) -> list[float] | None:
        text = self.tokenizer.decode(ids, attention_mask)
        if not text:
            logger.debug("Nothing to embed after decoding; skipping GenAI request")
            return None
        try:
            result = self._client.models.embed_content(
                model=self.model,
                contents=[text],
                config={
                    "task_type": _GENAI_TASK_TYPE,
                    "output_dimensionality": self.dim,
                },
            )
            values = list(result.embeddings[0].values)
        except Exception as exc:
            logger.warning("GenAI embedding request failed: %s", exc)
            return None
        # Truncated output dimensionalities are not normalized by the API.
        return normalize(values)
