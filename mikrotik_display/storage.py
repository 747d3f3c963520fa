"""Client-local preference cache."""

import json
import logging
import os
from pathlib import Path
from typing import Any

_LOGGER = logging.getLogger(__name__)


def _write_atomic(path: Path, payload: str) -> None:
    tmp = path.with_name(path.name + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(payload)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


class PreferenceStore:
    """Small key/value store that outlives the client, like browser storage.

    Without a path the values live in memory only.
    """

    def __init__(self, path: str | Path | None = None) -> None:  # noqa: D107
        self.path = Path(path) if path is not None else None
        self._data: dict[str, Any] = self._load()


    def _load(self) -> dict[str, Any]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as ex:
            _LOGGER.warning("Ignoring unreadable preferences %s: %s", self.path, ex)
            return {}
        if not isinstance(data, dict):
            _LOGGER.warning("Ignoring malformed preferences %s", self.path)
            return {}
        return data


    def get(self, key: str, default: Any = None) -> Any:
        """Return stored value or default."""
        return self._data.get(key, default)


    def set(self, key: str, value: Any) -> None:
        """Store value and write it through."""
        self._data[key] = value
        if self.path is None:
            return
        try:
            _write_atomic(self.path, json.dumps(self._data, indent=2))
        except OSError as ex:
            _LOGGER.error("Failed to write preferences %s: %s", self.path, ex)
