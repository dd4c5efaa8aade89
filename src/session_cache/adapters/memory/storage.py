from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ...domain.ports import TokenStorage


class InMemoryTokenStorage(TokenStorage):
    """
    Process-local TokenStorage backed by a list of documents.

    Matches documents by field equality, the same way a document store
    evaluates a plain filter. Nothing survives the process.
    """

    def __init__(self, documents: Optional[List[Mapping[str, Any]]] = None) -> None:
        self._documents: List[Dict[str, Any]] = [dict(d) for d in documents or []]

    def close(self) -> None:
        pass

    @property
    def documents(self) -> List[Dict[str, Any]]:
        """Copies of the stored documents (for inspection)."""
        return [dict(d) for d in self._documents]

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        for doc in self._documents:
            if self._matches(doc, filter):
                return dict(doc)
        return None

    async def update(self, filter: Mapping[str, Any], values: Mapping[str, Any], *, upsert: bool = True) -> None:
        for doc in self._documents:
            if self._matches(doc, filter):
                doc.update(values)
                return

        if upsert:
            self._documents.append({**filter, **values})

    async def remove(self, filter: Mapping[str, Any], *, multi: bool = True) -> int:
        kept: List[Dict[str, Any]] = []
        removed = 0
        for doc in self._documents:
            if self._matches(doc, filter) and (multi or removed == 0):
                removed += 1
                continue
            kept.append(doc)

        self._documents = kept
        return removed

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _matches(doc: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
        return all(doc.get(k) == v for k, v in filter.items())
