"""In-memory store of generated project documentation.

Entries live for the lifetime of one server instance: no persistence, no
eviction, no size bound.  Writes are last-write-wins by id.
"""

from __future__ import annotations

from .errors import MethodNotFoundError


class DocumentStore:
    """Mapping from a project identifier to markdown text."""

    def __init__(self) -> None:
        self._docs: dict[str, str] = {}

    def put(self, doc_id: str, content: str) -> None:
        """Insert or overwrite the document stored under *doc_id*."""
        self._docs[doc_id] = content

    def get(self, doc_id: str) -> str:
        """Return the document for *doc_id*.

        Raises:
            MethodNotFoundError: If nothing was stored under *doc_id*.
        """
        try:
            return self._docs[doc_id]
        except KeyError:
            raise MethodNotFoundError(f"Documentation not found for {doc_id}") from None

    def items(self) -> list[tuple[str, str]]:
        """Snapshot of every ``(id, content)`` pair in insertion order."""
        return list(self._docs.items())

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._docs

    def __len__(self) -> int:
        return len(self._docs)
