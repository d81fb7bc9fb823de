import logging
from typing import Annotated

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from typer import Argument, Exit, Option, Typer

from .config import (
    resolve_model_path,
    resolve_notes_path,
    resolve_provider,
    resolve_vocab_path,
)
from .embeddings import EmbeddingProvider, GenAIEmbeddingProvider, OnnxEmbeddingProvider
from .models import load_notes
from .search import SemanticSearchEngine
from .tokenizer import Tokenizer
from .vocabulary import Vocabulary

app = Typer(help="Semantic search over your notes.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_provider(
    provider: str,
    tokenizer: Tokenizer,
    *,
    model_path: str | None = None,
) -> EmbeddingProvider:
    if provider == "genai":
        return GenAIEmbeddingProvider(tokenizer)
    return OnnxEmbeddingProvider(resolve_model_path(model_path))


@app.command()
def search(
    query: Annotated[str, Argument(help="Free-text query to rank notes by.")],
    notes: Annotated[
        str | None,
        Option("--notes", "-n", help="Path to the notes JSON file."),
    ] = None,
    vocab: Annotated[
        str | None,
        Option("--vocab", help="Path to the WordPiece vocabulary file."),
    ] = None,
    provider: Annotated[
        str | None,
        Option("--provider", "-p", help="Embedding provider: onnx or genai."),
    ] = None,
    model_path: Annotated[
        str | None,
        Option("--model-path", help="Path to the ONNX embedding model."),
    ] = None,
    limit: Annotated[
        int, Option("--limit", "-l", help="Maximum number of notes to show.")
    ] = 10,
    workers: Annotated[
        int, Option("--workers", "-w", help="Threads used to embed notes.")
    ] = 1,
    verbose: Annotated[
        bool, Option("--verbose", "-v", help="Show debug logging.")
    ] = False,
) -> None:
    _configure_logging(verbose)
    console = Console()

    try:
        loaded_notes = load_notes(resolve_notes_path(notes))
    except FileNotFoundError:
        # No notes saved yet.
        loaded_notes = []
    except (OSError, ValidationError) as exc:
        console.print(f"[bold red]Could not read notes:[/] {escape(str(exc))}")
        raise Exit(code=1)

    if not loaded_notes:
        console.print("[bold yellow]No matching notes.[/]")
        return

    tokenizer = Tokenizer(Vocabulary.load(resolve_vocab_path(vocab)))
    try:
        embedding_provider = build_provider(
            resolve_provider(provider), tokenizer, model_path=model_path
        )
        engine = SemanticSearchEngine(
            tokenizer, embedding_provider, max_workers=workers
        )
    except ValueError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/]")
        raise Exit(code=1)

    notes_by_id = {note.id: note for note in loaded_notes}
    with console.status(status="Searching notes..."):
        ranked = engine.search(query, [note.to_document() for note in loaded_notes])

    if not ranked:
        console.print("[bold yellow]No matching notes.[/]")
        return

    table = Table(title=f"Results for: {escape(query)}" if query else "All notes")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("ID", style="magenta")
    table.add_column("Preview")
    for index, document in enumerate(ranked[: max(limit, 1)], start=1):
        preview = notes_by_id[document.id].preview_text
        table.add_row(str(index), document.id, escape(preview))
    console.print(table)


@app.command()
def tokenize(
    text: Annotated[str, Argument(help="Text to tokenize.")],
    vocab: Annotated[
        str | None,
        Option("--vocab", help="Path to the WordPiece vocabulary file."),
    ] = None,
    show_tokens: Annotated[
        bool, Option("--show-tokens", help="Also print the WordPiece pieces.")
    ] = False,
    verbose: Annotated[
        bool, Option("--verbose", "-v", help="Show debug logging.")
    ] = False,
) -> None:
    _configure_logging(verbose)
    console = Console()

    tokenizer = Tokenizer(Vocabulary.load(resolve_vocab_path(vocab)))
    tokenized = tokenizer.tokenize(text)
    length = tokenized.content_length

    if show_tokens:
        pieces = " ".join(tokenizer.tokens(text))
        console.print(f"[bold]Tokens:[/] {escape(pieces)}")
    console.print(f"[bold]Ids:[/] {list(tokenized.ids[:length])}")
    console.print(f"[bold]Length:[/] {length} / {tokenizer.max_length}")
