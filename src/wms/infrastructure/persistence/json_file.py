"""Shared file handling for the JSON-backed repositories."""

from __future__ import annotations

import json
from pathlib import Path

from filelock import FileLock


class JsonFile:
    """A JSON list on disk, rewritten whole on every save.

    ``lock`` must be held across a load-modify-persist cycle.  It is a
    lock file beside the data file, so it also keeps other ``wms``
    processes out; it is re-entrant within a thread.
    """

    def __init__(self, file_path: Path) -> None:
        self.path = file_path
        self._ensure_file()
        self.lock = FileLock(str(self.path.with_suffix(self.path.suffix + ".lock")))

    def load(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def persist(self, rows: list[dict]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self.path)

    def _ensure_file(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")


def next_string_id(rows: list[dict]) -> str:
    numeric = [int(r["id"]) for r in rows if str(r["id"]).isdigit()]
    return str(max(numeric, default=0) + 1)
