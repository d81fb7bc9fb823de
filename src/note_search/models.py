from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


@dataclass(frozen=True)
class Document:
    """A searchable document: an opaque identifier and its text body."""

    id: str
    text: str


class Note(BaseModel):
    """A note as stored by the note-taking app"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique note identifier")
    content: str = Field(default="", description="Note body")
    created_at: float | None = Field(
        default=None,
        alias="createdAt",
        description="Creation time, seconds since the app's reference date",
    )
    modified_at: float | None = Field(
        default=None,
        alias="modifiedAt",
        description="Last modification time, seconds since the app's reference date",
    )

    @property
    def preview_text(self) -> str:
        preview = " ".join(self.content.splitlines()[:3])
        return preview if preview else "No content"

    def to_document(self) -> Document:
        return Document(id=self.id, text=self.content)


_NOTES_ADAPTER = TypeAdapter(list[Note])


def load_notes(path: str | Path) -> list[Note]:
    """Read a JSON array of notes, preserving file order."""
    raw = Path(path).expanduser().read_bytes()
    return _NOTES_ADAPTER.validate_json(raw)
