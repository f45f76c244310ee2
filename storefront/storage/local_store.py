"""Local key-value snapshot storage"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class LocalStore:
    """
    Durable key-value store holding one JSON-encoded string per key.

    Values that fail to decode are dropped and read as absent. With no
    path the store lives in memory only.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path).expanduser() if path else None
        self._entries: dict[str, str] = {}

    def load(self) -> None:
        """Read the backing file, starting empty if it is missing or unreadable"""
        self._entries = {}
        if self.path is None or not self.path.exists():
            return

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable local store {self.path}: {e}")
            return

        if not isinstance(raw, dict):
            logger.warning(f"Discarding malformed local store {self.path}")
            return

        self._entries = {k: v for k, v in raw.items() if isinstance(v, str)}

    def flush(self) -> None:
        """Write all entries to the backing file"""
        if self.path is None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self._entries), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._entries[key] = value
        self.flush()

    def remove(self, key: str) -> None:
        if self._entries.pop(key, None) is not None:
            self.flush()

    def clear(self) -> None:
        self._entries = {}
        self.flush()

    def get_json(self, key: str) -> Optional[Any]:
        """Decode a stored value; corrupted values are removed and read as None"""
        raw = self.get_item(key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding corrupted '{key}' snapshot")
            self.remove(key)
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))

    def __contains__(self, key: str) -> bool:
        return key in self._entries
