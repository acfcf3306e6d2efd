"""File-backed response cache.

Usage example:
    from pathlib import Path

    from dexpaprika_sdk.infrastructure.cache import DiskCache

    cache = DiskCache(Path("/tmp/dexpaprika_cache"), default_ttl_seconds=600)
    cache.set("key", {"chains": 15})
    cache.get("key")
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import override

from ..observability import get_logger
from ..protocols import Cache
from .validation import CacheEntryInput, IncomingDataError, validate_json_as

logger = get_logger("dexpaprika_sdk.infrastructure.cache")

DEFAULT_DISK_TTL_SECONDS = 604800
CACHE_FILE_SUFFIX = ".cache"


def _new_lock() -> threading.Lock:
    return threading.Lock()


@dataclass
class DiskCache(Cache):
    """File-based cache: one JSON file per key, each with its own expiry.

    A ttl <= 0 stores an entry that never expires. Entries that cannot be read
    back (corrupt or foreign files) are treated as misses and removed.
    """

    cache_dir: Path
    default_ttl_seconds: int = DEFAULT_DISK_TTL_SECONDS
    clock: Callable[[], float] = time.time
    _lock: threading.Lock = field(default_factory=_new_lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        h = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{h}{CACHE_FILE_SUFFIX}"

    def _read_entry(self, path: Path) -> CacheEntryInput | None:
        try:
            payload = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Cache entry %s could not be read: %s", path.name, exc)
            return None
        try:
            return validate_json_as(CacheEntryInput, payload)
        except IncomingDataError:
            logger.warning("Discarding corrupt cache entry %s", path.name)
            path.unlink(missing_ok=True)
            return None

    def _is_expired(self, entry: CacheEntryInput) -> bool:
        expires_at = entry["expires_at"]
        return expires_at is not None and expires_at <= self.clock()

    @override
    def get(self, key: str) -> object | None:
        path = self._path(key)
        with self._lock:
            entry = self._read_entry(path)
            if entry is None:
                return None
            if self._is_expired(entry):
                path.unlink(missing_ok=True)
                return None
            return entry["value"]

    @override
    def set(self, key: str, value: object, ttl: int | None = None) -> bool:
        effective_ttl = self.default_ttl_seconds if ttl is None else ttl
        expires_at = None if effective_ttl <= 0 else self.clock() + effective_ttl
        path = self._path(key)
        try:
            payload = json.dumps({"value": value, "expires_at": expires_at}, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.warning("Value for cache entry %s is not JSON-serialisable: %s", path.name, exc)
            return False

        with self._lock:
            try:
                fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except OSError as exc:
                logger.warning("Cache entry %s could not be written: %s", path.name, exc)
                return False
        return True

    @override
    def has(self, key: str) -> bool:
        return self.get(key) is not None

    @override
    def delete(self, key: str) -> bool:
        with self._lock:
            try:
                self._path(key).unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Cache entry could not be deleted: %s", exc)
                return False
        return True

    @override
    def clear(self) -> bool:
        ok = True
        with self._lock:
            for path in self.cache_dir.glob(f"*{CACHE_FILE_SUFFIX}"):
                try:
                    path.unlink(missing_ok=True)
                except OSError as exc:
                    logger.warning("Cache entry %s could not be deleted: %s", path.name, exc)
                    ok = False
        return ok
