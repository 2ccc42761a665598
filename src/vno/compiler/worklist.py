"""FIFO queue of components awaiting compilation."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Iterator

from .models import ComponentRecord

__all__ = ["Worklist"]


class Worklist:
    """Pending component records, drained front to back.

    Example:
        >>> from pathlib import Path
        >>> queue = Worklist([ComponentRecord("App", Path("/app/App.vue"))])
        >>> queue.pop().label
        'App'
        >>> bool(queue)
        False
    """

    def __init__(self, records: list[ComponentRecord] | None = None) -> None:
        self._pending: deque[ComponentRecord] = deque()
        for record in records or ():
            self.push(record)

    def push(self, record: ComponentRecord) -> None:
        self._pending.append(record)

    def pop(self) -> ComponentRecord:
        """Remove and return the oldest pending record.

        Raises:
            IndexError: If the worklist is empty.
        """

        return self._pending.popleft()

    def labels(self) -> list[str]:
        return [record.label for record in self._pending]

    def paths(self) -> dict[str, Path]:
        """Return a label to path mapping of pending records."""

        return {record.label: record.path for record in self._pending}

    def __contains__(self, label: object) -> bool:
        return any(record.label == label for record in self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def __iter__(self) -> Iterator[ComponentRecord]:
        return iter(self._pending)
