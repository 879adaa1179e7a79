"""Abstract authoritative store for product documents.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON file, hosted document
database, in-memory) live in the infrastructure layer or in tests.

Implementations raise ``PersistenceFailed`` for every failure; they do
not interpret or retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class AuthoritativeStore(ABC):

    @abstractmethod
    def create(self, payload: Mapping[str, Any]) -> str:
        """Store a new document and return its generated id."""

    @abstractmethod
    def update(self, document_id: str, fields: Mapping[str, Any]) -> None:
        """Merge ``fields`` into an existing document; other fields are untouched."""

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Remove a document."""
