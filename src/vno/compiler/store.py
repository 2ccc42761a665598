"""Keyed storage for finalized component records."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from .models import CompileContext, ComponentRecord

__all__ = ["ComponentStore"]


class ComponentStore:
    """Finalized components keyed by label, in finalization order.

    The store is append-only. ``size`` counts every insertion and never
    decreases, even when a label is written twice. The last writer wins and
    keeps the position of the first insertion.
    """

    def __init__(self, context: CompileContext | None = None) -> None:
        self._records: dict[str, ComponentRecord] = {}
        self._root: ComponentRecord | None = None
        self._context = context or CompileContext()
        self.size = 0

    def put(self, label: str, record: ComponentRecord) -> ComponentRecord:
        """Store ``record`` under ``label`` and return it."""

        self._records[label] = record
        self.size += 1
        return record

    def get(self, label: str) -> ComponentRecord | None:
        return self._records.get(label)

    @property
    def root(self) -> ComponentRecord | None:
        return self._root

    @root.setter
    def root(self, record: ComponentRecord) -> None:
        self._root = record

    @property
    def context(self) -> CompileContext:
        return self._context

    @context.setter
    def context(self, context: CompileContext) -> None:
        self._context = context

    def records(self) -> list[ComponentRecord]:
        """Return stored records in finalization order."""

        return list(self._records.values())

    def labels(self) -> Iterator[str]:
        return iter(self._records)

    def paths(self) -> dict[str, Path]:
        """Return a label to path mapping of stored records."""

        return {label: record.path for label, record in self._records.items()}

    def __contains__(self, label: object) -> bool:
        return label in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ComponentRecord]:
        return iter(self._records.values())
