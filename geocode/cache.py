"""
JSON file-backed cache of geocoding results.

Maps a location string to its coordinates or to ``null`` when the
geocoder had no match, so that neither outcome is looked up twice.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from collection.models import Coordinates

logger = logging.getLogger(__name__)

# Returned by get() when nothing is cached for a location
MISSING = object()


class GeocodeCache:
    """
    Location -> coordinates cache with optional file persistence.

    Entries are only written to disk by :meth:`save`, which callers run
    once at the end of a pass.
    """

    def __init__(self, cache_file: Optional[Path] = None):
        """
        Initialize cache.

        Args:
            cache_file: JSON file to load from and save to. ``None`` keeps
                the cache in memory only.
        """
        self.cache_file = Path(cache_file) if cache_file is not None else None
        self.entries: Dict[str, Optional[Coordinates]] = self._load()
        self.hits = 0
        self.misses = 0

    def _load(self) -> Dict[str, Optional[Coordinates]]:
        """Load cache from disk."""
        if self.cache_file is None or not self.cache_file.exists():
            return {}
        try:
            raw = json.loads(self.cache_file.read_text())
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable geocode cache %s: %s", self.cache_file, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring geocode cache %s: not a JSON object", self.cache_file)
            return {}

        entries: Dict[str, Optional[Coordinates]] = {}
        for key, value in raw.items():
            if value is None:
                entries[key] = None
                continue
            try:
                entries[key] = Coordinates.model_validate(value)
            except ValueError:
                logger.warning("Dropping malformed cache entry for %r", key)
        logger.info("Loaded %d geocode cache entries from %s", len(entries), self.cache_file)
        return entries

    def save(self, path: Optional[Path] = None) -> None:
        """Write the cache to disk (atomic write)."""
        target = Path(path) if path is not None else self.cache_file
        if target is None:
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            key: value.to_dict() if value is not None else None
            for key, value in self.entries.items()
        }
        temp_file = target.with_suffix(".tmp")
        temp_file.write_text(json.dumps(payload, indent=2, ensure_ascii=False))
        temp_file.replace(target)
        logger.info("Geocode cache saved to %s", target)

    def __contains__(self, location: str) -> bool:
        return location in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, location: str, default=None):
        """
        Return the cached result for ``location``.

        A cached ``None`` means the location is known to be unresolvable.
        When nothing is cached, ``default`` is returned and counted as a
        miss, so pass :data:`MISSING` to tell the two cases apart.
        """
        if location in self.entries:
            self.hits += 1
            return self.entries[location]
        self.misses += 1
        return default

    def set(self, location: str, coordinates: Optional[Coordinates]) -> None:
        self.entries[location] = coordinates

    def get_stats(self) -> dict:
        """Get cache statistics."""
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0

        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": f"{hit_rate:.1f}%",
            "total_entries": len(self.entries),
        }


__all__ = ["GeocodeCache", "MISSING"]
