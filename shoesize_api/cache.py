import time
from typing import Any, Dict, Hashable, Optional, Tuple

from .config import settings


# conversion tuple, e.g. ("convert", 42.0, SizeUnit.EU, SizeUnit.CM, Category.MEN) -> (expires_at, response)
_cache: Dict[Hashable, Tuple[float, Any]] = {}


def get(key: Hashable) -> Optional[Any]:
    entry = _cache.get(key)
    if entry is None:
        return None
    expires_at, value = entry
    if time.time() > expires_at:
        _cache.pop(key, None)
        return None
    return value


def set(key: Hashable, value: Any) -> None:
    if key not in _cache and len(_cache) >= settings.CACHE_MAX_ITEMS:
        # drop the entry closest to expiry
        oldest_key = min(_cache.items(), key=lambda kv: kv[1][0])[0]
        _cache.pop(oldest_key, None)
    _cache[key] = (time.time() + settings.CACHE_TTL_SECONDS, value)


def clear() -> None:
    _cache.clear()


def size() -> int:
    return len(_cache)
