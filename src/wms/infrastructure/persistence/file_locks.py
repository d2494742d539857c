"""Keyed locks that also serialize separate ``wms`` processes.

Every CLI invocation is its own process working on the same JSON files, so
the in-process ``KeyedLocks`` are paired with one lock file in the data
directory.  The file lock is taken first and is re-entrant per thread, so
nested holds (an order lock, then the product locks beneath it) never wait
on themselves.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

from wms.domain.service.locks import KeyedLocks


class InterProcessLocks(KeyedLocks):

    def __init__(self, file_lock: FileLock) -> None:
        super().__init__()
        self._file_lock = file_lock

    @classmethod
    def in_directory(cls, data_dir: Path, name: str = "ledger.lock") -> InterProcessLocks:
        data_dir.mkdir(parents=True, exist_ok=True)
        return cls(FileLock(str(data_dir / name)))

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._file_lock:
            with super().hold(key):
                yield

    @contextmanager
    def hold_all(self, keys: Iterable[str]) -> Iterator[None]:
        with self._file_lock:
            with super().hold_all(keys):
                yield
