"""Load-once bookkeeping for provider types built from source."""

import logging
import re
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class ProviderLoadCache:
    """Maps a load key to the provider type produced for it.

    Entries are never removed. ``load_once`` holds a re-entrant lock across
    check, build and insert, so a key is built at most once even with
    concurrent callers, and a source may itself load other keys.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._loaded: dict[str, type] = {}

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._loaded

    def __len__(self) -> int:
        with self._lock:
            return len(self._loaded)

    def get(self, key: str) -> type | None:
        with self._lock:
            return self._loaded.get(key)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._loaded)

    def load_once(self, key: str, build: Callable[[], type]) -> type:
        """Return the type cached for ``key``, building it on first request.

        Nothing is cached when ``build`` raises.
        """
        with self._lock:
            loaded = self._loaded.get(key)
            if loaded is not None:
                logger.info(f"Provider {key} has already been loaded! Skipping the reload.")
                return loaded

            provider_class = build()
            self._loaded[key] = provider_class
            return provider_class


# Process-wide cache used when callers do not pass their own
_load_cache = ProviderLoadCache()


def get_load_cache() -> ProviderLoadCache:
    return _load_cache


def filename_to_qualified_string(cookbook_name: str, filename: str | Path) -> str:
    """Resource type name for a provider file: ``<cookbook>_<stem>``.

    A file named ``default`` maps to the cookbook name alone.
    """
    stem = Path(filename).stem
    if stem == "default":
        return cookbook_name
    return f"{cookbook_name}_{stem}"


def convert_to_class_name(name: str) -> str:
    """``"my_cookbook-site"`` -> ``"MyCookbookSite"``."""
    parts = re.split(r"[^0-9A-Za-z]+", name)
    class_name = "".join(part[:1].upper() + part[1:] for part in parts if part)
    if not class_name or class_name[0].isdigit():
        class_name = f"Provider{class_name}"
    return class_name
