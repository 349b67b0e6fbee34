"""Local key-value persistence.

Values are plain strings, mirroring browser ``localStorage``: callers encode
their own JSON. Writes are last-write-wins with no locking.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Dict, Optional, Protocol

from core.errors import PersistenceError

logger = logging.getLogger(__name__)

CALCULATOR_KEY = "rentCalculatorData"
UNLOCKED_EMAIL_KEY = "rentCalculatorUnlockedEmail"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """In-memory store suitable for tests and a single Streamlit session."""

    def __init__(self, data: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """Store every key in one JSON object on disk (``SESSION_FILE``)."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"could not read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except PersistenceError:
            logger.warning("Discarding unreadable store at %s", self.path)
            data = {}
        data[key] = value
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as exc:
            raise PersistenceError(f"could not write {self.path}: {exc}") from exc

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            try:
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump(data, f)
            except OSError as exc:
                raise PersistenceError(f"could not write {self.path}: {exc}") from exc
