"""
note_search - semantic search for personal notes.

This package turns free-form note text into fixed-length WordPiece model
inputs, obtains sentence embeddings for them from a pluggable embedding
provider, and ranks notes by cosine similarity to a query.

Example usage:
    >>> from note_search import Vocabulary, Tokenizer, SemanticSearchEngine
    >>> from note_search import Document, OnnxEmbeddingProvider
    >>> tokenizer = Tokenizer(Vocabulary.load("vocab.txt"))
    >>> engine = SemanticSearchEngine(tokenizer, OnnxEmbeddingProvider("model.onnx"))
    >>> engine.search("grocery list", [Document(id="1", text="buy milk and eggs")])
"""

from .embeddings import (
    DIM,
    EmbeddingProvider,
    GenAIEmbeddingProvider,
    OnnxEmbeddingProvider,
    normalize,
)
from .models import Document, Note, load_notes
from .search import (
    EmbeddingCache,
    SemanticSearchEngine,
    rank,
    similarity,
)
from .tokenizer import MAX_LEN, TokenizedInput, Tokenizer
from .vocabulary import Vocabulary, load_vocabulary

__all__ = [
    # Vocabulary
    "Vocabulary",
    "load_vocabulary",
    # Tokenizer
    "MAX_LEN",
    "TokenizedInput",
    "Tokenizer",
    # Embeddings
    "DIM",
    "EmbeddingProvider",
    "GenAIEmbeddingProvider",
    "OnnxEmbeddingProvider",
    "normalize",
    # Search
    "EmbeddingCache",
    "SemanticSearchEngine",
    "rank",
    "similarity",
    # Models
    "Document",
    "Note",
    "load_notes",
]
