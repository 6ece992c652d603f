"""
Table Cache - Stores built solver tables on disk between runs.

The cache:
- Uses a hash of the table name and format version as key
- Stores one compressed numpy archive (.npz) per entry
- Is optional (tables can always be rebuilt)
- Never holds puzzle states, only derived lookup tables

Design decisions:
- Simple file-based storage
- A corrupt or unreadable entry is deleted and treated as a miss
"""

from __future__ import annotations
import hashlib
import logging
import shutil
import zipfile
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)


class TableCache:
    """
    File-based cache for solver tables.

    Usage:
        cache = TableCache(cache_dir="~/.cubesolve/tables")

        arrays = cache.get("two_phase_full_v1")
        if arrays is None:
            arrays = build()
            cache.put("two_phase_full_v1", arrays)
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        format_version: str = "1",
    ):
        if cache_dir is None:
            cache_dir = Path.home() / ".cubesolve" / "tables"
        self.cache_dir = Path(cache_dir).expanduser()
        self.format_version = format_version

        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def get(self, name: str) -> dict[str, np.ndarray] | None:
        """
        Get cached arrays for a table name.

        Returns None if not cached or the entry cannot be read.
        """
        cache_path = self._get_cache_path(self._make_cache_key(name))
        if not cache_path.exists():
            return None

        try:
            with np.load(cache_path, allow_pickle=False) as archive:
                arrays = {key: archive[key] for key in archive.files}
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            logger.warning("Dropping unreadable table cache %s: %s", cache_path, e)
            cache_path.unlink(missing_ok=True)
            return None

        logger.debug("Loaded %d tables from %s", len(arrays), cache_path)
        return arrays

    def put(self, name: str, arrays: dict[str, np.ndarray]):
        """
        Cache a set of named arrays.
        """
        cache_path = self._get_cache_path(self._make_cache_key(name))
        tmp_path = cache_path.with_suffix(".tmp.npz")
        np.savez_compressed(tmp_path, **arrays)
        tmp_path.replace(cache_path)
        logger.debug("Stored %d tables in %s", len(arrays), cache_path)

    def invalidate(self, name: str):
        """
        Remove the cached entry for a table name.
        """
        self._get_cache_path(self._make_cache_key(name)).unlink(missing_ok=True)

    def clear(self):
        """
        Clear entire cache.
        """
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    def list_cached(self) -> list[str]:
        """
        List all cached entry keys.
        """
        if not self.cache_dir.exists():
            return []

        return [f.stem for f in self.cache_dir.glob("*.npz") if not f.stem.endswith(".tmp")]

    def _make_cache_key(self, name: str) -> str:
        """
        Create cache key from table name and format version.

        Uses SHA-256 truncated to 16 + 8 chars.
        """
        name_hash = hashlib.sha256(name.encode("utf-8")).hexdigest()[:16]
        version_hash = hashlib.sha256(self.format_version.encode()).hexdigest()[:8]
        return f"{name_hash}_{version_hash}"

    def _get_cache_path(self, cache_key: str) -> Path:
        return self.cache_dir / f"{cache_key}.npz"
