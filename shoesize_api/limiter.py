import math
import time
from typing import Dict, Tuple

from fastapi import HTTPException, Request

from .config import settings


# client ip -> (tokens left, last refill timestamp)
_buckets: Dict[str, Tuple[float, float]] = {}


def _client_id(request: Request) -> str:
    return request.client.host if request.client else "anon"


def rate_limit(request: Request) -> None:
    """Token bucket per client ip; raises 429 once the bucket is empty."""
    ident = _client_id(request)
    capacity = float(settings.RATE_LIMIT_BURST)
    refill_per_min = float(settings.RATE_LIMIT_PER_MIN)
    now = time.time()
    tokens, last = _buckets.get(ident, (capacity, now))
    elapsed_min = max(0.0, (now - last) / 60.0)
    tokens = min(capacity, tokens + elapsed_min * refill_per_min)
    if tokens < 1.0:
        _buckets[ident] = (tokens, now)
        wait_s = math.ceil((1.0 - tokens) * 60.0 / refill_per_min) if refill_per_min > 0 else 60
        raise HTTPException(status_code=429, detail="Too Many Requests", headers={"Retry-After": str(wait_s)})
    _buckets[ident] = (tokens - 1.0, now)


def reset() -> None:
    _buckets.clear()
