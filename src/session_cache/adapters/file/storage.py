from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ...domain.exceptions import StoreIOError
from ...domain.ports import TokenStorage


class JSONFileTokenStorage(TokenStorage):
    """
    TokenStorage persisted as a JSON list of documents in a local file.

    - a missing file reads as an empty store
    - writes go to a sibling temp file and are swapped in with os.replace
    - file I/O runs in a worker thread; one lock serializes access
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        pass

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        async with self._lock:
            documents = await asyncio.to_thread(self._load)

        for doc in documents:
            if self._matches(doc, filter):
                return doc
        return None

    async def update(self, filter: Mapping[str, Any], values: Mapping[str, Any], *, upsert: bool = True) -> None:
        async with self._lock:
            documents = await asyncio.to_thread(self._load)

            for doc in documents:
                if self._matches(doc, filter):
                    doc.update(values)
                    break
            else:
                if not upsert:
                    return
                documents.append({**filter, **values})

            await asyncio.to_thread(self._dump, documents)

    async def remove(self, filter: Mapping[str, Any], *, multi: bool = True) -> int:
        async with self._lock:
            documents = await asyncio.to_thread(self._load)

            kept: List[Dict[str, Any]] = []
            removed = 0
            for doc in documents:
                if self._matches(doc, filter) and (multi or removed == 0):
                    removed += 1
                    continue
                kept.append(doc)

            if removed:
                await asyncio.to_thread(self._dump, kept)
            return removed

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _load(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            return []

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StoreIOError(f"Failed to read {self._path}: {exc}") from exc

        if not isinstance(data, list):
            raise StoreIOError(f"Failed to read {self._path}: expected a JSON list of documents")
        return [doc for doc in data if isinstance(doc, dict)]

    def _dump(self, documents: List[Dict[str, Any]]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(documents, f, indent=2)
            os.replace(tmp, self._path)
        except OSError as exc:
            raise StoreIOError(f"Failed to write {self._path}: {exc}") from exc

    @staticmethod
    def _matches(doc: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
        return all(doc.get(k) == v for k, v in filter.items())
