"""JSON-file-backed implementation of AuthoritativeStore.

One file per collection, holding ``{document_id: document}``.  Writes go
to a temporary file that replaces the collection file in one step, so a
feed polling the same file never reads half a write.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from shopcat.domain.exceptions import PersistenceFailed
from shopcat.domain.repository.product_store import AuthoritativeStore

logger = logging.getLogger(__name__)


def collection_path(data_dir: Path, collection: str) -> Path:
    return data_dir / f"{collection}.json"


class JsonDocumentStore(AuthoritativeStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- AuthoritativeStore interface -----------------------------------------

    def create(self, payload: Mapping[str, Any]) -> str:
        document_id = uuid.uuid4().hex
        with self._lock:
            documents = self._load_raw()
            documents[document_id] = dict(payload)
            self._persist_raw(documents)
        logger.debug("Created document %s in %s", document_id, self._file_path.name)
        return document_id

    def update(self, document_id: str, fields: Mapping[str, Any]) -> None:
        with self._lock:
            documents = self._load_raw()
            if document_id not in documents:
                raise PersistenceFailed(f"No document with id '{document_id}'")
            document = documents[document_id]
            if not isinstance(document, dict):
                raise PersistenceFailed(f"Document '{document_id}' is not an object")
            document.update(fields)
            self._persist_raw(documents)

    def delete(self, document_id: str) -> None:
        with self._lock:
            documents = self._load_raw()
            if document_id not in documents:
                raise PersistenceFailed(f"No document with id '{document_id}'")
            del documents[document_id]
            self._persist_raw(documents)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceFailed(str(exc)) from exc
        if not isinstance(raw, dict):
            raise PersistenceFailed(f"{self._file_path} is not a document collection")
        return raw

    def _persist_raw(self, documents: dict[str, dict]) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".", suffix=".tmp"
            )
        except OSError as exc:
            raise PersistenceFailed(str(exc)) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(json.dumps(documents, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceFailed(str(exc)) from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
