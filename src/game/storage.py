# src/game/storage.py
"""
Key-value stores for values that outlive a play session (the best score).
Values are strings, like browser local storage; callers parse them.
"""
from __future__ import annotations
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value) -> None: ...


class MemoryStore:
    """In-process store; used by tests and by the gym env."""
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value) -> None:
        self._data[key] = str(value)


class JsonFileStore:
    """
    Flat JSON object on disk. A missing or unreadable file reads as empty;
    every set() writes a sibling temp file and renames it over the store,
    so a crash mid-write leaves the previous contents in place.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value) -> None:
        data = self._load()
        data[key] = str(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = None
        try:
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=self.path.parent,
                                             prefix=self.path.name + ".", suffix=".tmp",
                                             delete=False) as f:
                tmp = Path(f.name)
                f.write(json.dumps(data, indent=2))
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(self.path)
        except BaseException:
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            raise


def parse_int(raw: Optional[str]) -> int:
    """Stored integer or 0 when absent, unparseable or negative."""
    if raw is None:
        return 0
    try:
        value = int(str(raw).strip())
    except ValueError:
        return 0
    return max(0, value)
