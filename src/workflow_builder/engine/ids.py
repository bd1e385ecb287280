"""Identifier sources for new workflow nodes.

Contract: an id source never hands out an id already used by any node created
in the workflow's lifetime, including nodes only present in undo/redo history.
Ids that entered the workflow from outside (imported trees, restored history)
must be passed to :meth:`IdSource.reserve`. A history restored from disk
reserves its persisted ``issued_ids`` too, so ids of snapshots dropped from
``future`` stay retired.
"""

from __future__ import annotations

import itertools
import uuid
from collections.abc import Iterable
from typing import Protocol


class IdSource(Protocol):
    def next(self) -> str: ...

    def reserve(self, ids: Iterable[str]) -> None: ...


class SequentialIdSource:
    """Deterministic ids: ``node-1``, ``node-2``, ... skipping reserved ones."""

    def __init__(self, prefix: str = "node-", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._used: set[str] = set()

    def next(self) -> str:
        while True:
            candidate = f"{self._prefix}{next(self._counter)}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate

    def reserve(self, ids: Iterable[str]) -> None:
        self._used.update(ids)


class UuidIdSource:
    def __init__(self, prefix: str = "node-") -> None:
        self._prefix = prefix
        self._used: set[str] = set()

    def next(self) -> str:
        while True:
            candidate = f"{self._prefix}{uuid.uuid4().hex}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate

    def reserve(self, ids: Iterable[str]) -> None:
        self._used.update(ids)
