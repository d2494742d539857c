"""File-backed KeyValueStore holding the client session and preferences."""

from __future__ import annotations

import json
from pathlib import Path

from filelock import FileLock

from wms.application.ports import KeyValueStore


class JsonKeyValueStore(KeyValueStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
        self._lock = FileLock(str(file_path.with_suffix(file_path.suffix + ".lock")))

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._persist(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._persist(data)

    def _load(self) -> dict[str, str]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist(self, data: dict[str, str]) -> None:
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)
