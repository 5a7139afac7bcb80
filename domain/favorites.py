"""Favorite recipe names, kept in a durable string key-value store.

The whole list is read on every query and rewritten on every change. Two
writers racing on the same store get last-writer-wins.
"""

from enum import Enum
import json
import logging
import os
from pathlib import Path
import tempfile
from typing import Any, Protocol


logger = logging.getLogger(__name__)


FAVORITES_KEY = "favorite_recipes"
SCHEMA_VERSION = 1


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStore:
    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = {} if items is None else items

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStore:
    """All keys in one JSON object on disk. Each write replaces the file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, starting empty: %r", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s, expected a JSON object.", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)


class FavoriteResult(Enum):
    added = "added"
    already_exists = "already_exists"
    deleted = "deleted"
    not_present = "not_present"


class FavoritesStore:
    def __init__(self, store: KeyValueStore, *, key: str = FAVORITES_KEY) -> None:
        self.store = store
        self.key = key

    def _load(self) -> list[str]:
        raw = self.store.get_item(self.key)
        if raw is None:
            return []
        try:
            data: Any = json.loads(raw)
        except ValueError as e:
            logger.warning("Unreadable favorites under %r: %r", self.key, e)
            return []

        # A bare list is the pre-versioning format.
        if isinstance(data, dict):
            if data.get("version") != SCHEMA_VERSION:
                logger.warning("Unknown favorites version %r.", data.get("version"))
                return []
            data = data.get("names")
        if not isinstance(data, list):
            logger.warning("Favorites under %r are not a list.", self.key)
            return []

        names: list[str] = []
        for name in data:
            if isinstance(name, str) and name not in names:
                names.append(name)
        return names

    def _save(self, names: list[str]) -> None:
        self.store.set_item(
            self.key, json.dumps({"version": SCHEMA_VERSION, "names": names})
        )

    def list(self) -> list[str]:
        return self._load()

    def __contains__(self, name: object) -> bool:
        return name in self._load()

    def add(self, name: str) -> FavoriteResult:
        names = self._load()
        if name in names:
            return FavoriteResult.already_exists
        names.append(name)
        self._save(names)
        logger.info("Saved favorite %s", name)
        return FavoriteResult.added

    def delete(self, name: str) -> FavoriteResult:
        names = self._load()
        remaining = [n for n in names if n != name]
        self._save(remaining)
        if len(remaining) == len(names):
            return FavoriteResult.not_present
        logger.info("Deleted favorite %s", name)
        return FavoriteResult.deleted
