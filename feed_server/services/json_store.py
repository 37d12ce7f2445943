"""
JSON-file document store.

Used when DATA_SOURCE=json; the path comes from DATA_JSON_PATH. Accepts
either {collection: {doc_id: fields}} or {collection: [{"id": ..., ...}]}.
Reads are served from memory; increment() writes the file back atomically
and rolls the in-memory change back if the write fails.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from recommender import StoreQueryError

from .memory_store import InMemoryDocumentStore

logger = logging.getLogger(__name__)


def _normalize_collections(raw: Any) -> Dict[str, Dict[str, Dict[str, Any]]]:
    if not isinstance(raw, dict):
        raise ValueError("top-level JSON must be an object keyed by collection name")
    out: Dict[str, Dict[str, Dict[str, Any]]] = {}
    for name, docs in raw.items():
        if isinstance(docs, dict):
            out[name] = {str(doc_id): dict(fields) for doc_id, fields in docs.items()}
        elif isinstance(docs, list):
            coll = {}
            for d in docs:
                if not isinstance(d, dict) or not d.get("id"):
                    continue
                fields = dict(d)
                coll[str(fields.pop("id"))] = fields
            out[name] = coll
        else:
            raise ValueError(f"collection {name!r} must be an object or a list")
    return out


class JsonDocumentStore(InMemoryDocumentStore):
    """Document store loaded from (and written back to) one JSON file."""

    def __init__(self, path: Union[Path, str], fan_out_limit: int = 10):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Data JSON not found: {self._path}")
        try:
            with open(self._path) as f:
                collections = _normalize_collections(json.load(f))
        except (json.JSONDecodeError, ValueError) as e:
            raise StoreQueryError(f"cannot load {self._path}: {e}", operation="load") from e
        super().__init__(collections, fan_out_limit=fan_out_limit)
        logger.info(
            "loaded %s: %s",
            self._path,
            ", ".join(f"{name}={len(docs)}" for name, docs in collections.items()) or "empty",
        )

    def _save(self) -> None:
        """Write the snapshot to a sibling temp file, then swap it in; the data file is never left partial."""
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise StoreQueryError(f"cannot write {self._path}: {e}", operation="save") from e
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(self.snapshot(), f, indent=2, default=str)
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StoreQueryError(f"cannot write {self._path}: {e}", operation="save") from e

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        amount: int = 1,
    ) -> bool:
        before = self.get(collection, doc_id)
        updated = await super().increment(collection, doc_id, field, amount)
        if not updated:
            return False
        try:
            self._save()
        except StoreQueryError:
            # memory must keep matching the file
            self._collections[collection][doc_id] = before
            logger.error("increment %s/%s.%s rolled back: write-back failed", collection, doc_id, field)
            raise
        return True
