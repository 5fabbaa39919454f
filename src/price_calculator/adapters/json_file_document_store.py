"""Document store backed by one JSON file per key."""

import asyncio
import json
import os
from dataclasses import dataclass
from pathlib import Path

from price_calculator.adapters.document_store import DocumentStore, StorageError


@dataclass
class JsonFileDocumentStore(DocumentStore):
    """Filesystem implementation of the document store."""

    directory: Path

    @classmethod
    def create(cls, directory: Path | str) -> "JsonFileDocumentStore":
        """Create a store rooted at ``directory``, creating it if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    async def get(self, key: str) -> object | None:
        """Return the decoded document stored for a key."""
        return await asyncio.to_thread(self._read, self._path(key))

    async def set(self, key: str, document: object) -> None:
        """Write a document atomically."""
        await asyncio.to_thread(self._write, self._path(key), document)

    async def remove(self, key: str) -> None:
        """Delete the file for a key."""
        path = self._path(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to remove {key}") from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    @staticmethod
    def _read(path: Path) -> object | None:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Failed to read {path.name}") from exc
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt document {path.name}") from exc

    @staticmethod
    def _write(path: Path, document: object) -> None:
        tmp_path = path.with_suffix(".json.tmp")
        try:
            encoded = json.dumps(document, ensure_ascii=False)
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(encoded, encoding="utf-8")
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Failed to write {path.name}") from exc
