"""JSON-file cache backing the client's offline reads.

The cache holds the last successful response per collection ("projects",
"tasks", "users", "dashboard"). It is a read fallback only: nothing written
while offline is stored here, and nothing here is ever pushed back to the
server.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any


class LocalCache:
    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> dict[str, Any]:
        """Return the whole cache; a missing or unreadable file is an empty cache."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Any | None:
        return self.load().get(key)

    def put(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``; the file is replaced atomically."""
        data = self.load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            tmp_path.replace(self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
