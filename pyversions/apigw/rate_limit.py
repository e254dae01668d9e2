"""
Rate limiting GCRA par chemin de requête.

Ce module implémente un limiteur GCRA (Generic Cell Rate Algorithm) : chaque clé conserve un
temps d'arrivée théorique (TAT). Un débit de `max_rate` requêtes par `period` secondes donne un
intervalle d'émission T = period / max_rate ; une rafale de `max_burst` autorise `max_burst + 1`
requêtes consécutives avant d'imposer une requête toutes les T secondes.

Le middleware applique une clé par chemin, de sorte que chaque endpoint dispose de son propre
seau. En cas de refus, la requête est court-circuitée avec un 429 et `Retry-After`.
"""

from __future__ import annotations

import math
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response as StarletteResponse

from pyversions.apigw.errors import ErrorCodes, create_error_response, extract_trace_id
from pyversions.app.metrics import RATE_LIMIT_BLOCKS, normalize_route

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RateQuota:
    """Quota: `max_rate` requêtes par `period` secondes, rafale `max_burst`."""

    max_rate: int = 20
    max_burst: int = 5
    period: float = 60.0

    def __post_init__(self) -> None:
        if self.max_rate <= 0:
            raise ValueError("max_rate must be positive")
        if self.max_burst < 0:
            raise ValueError("max_burst must not be negative")
        if self.period <= 0:
            raise ValueError("period must be positive")

    @classmethod
    def per_minute(cls, rate: int, burst: int) -> RateQuota:
        return cls(max_rate=rate, max_burst=burst, period=60.0)

    @property
    def emission_interval(self) -> float:
        return self.period / self.max_rate


@dataclass
class RateLimitResult:
    """Résultat d'une vérification de rate limit (durées en secondes)."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float
    retry_after: float | None = None


class MemoryTATStore:
    """Stockage en mémoire des TAT, borné en nombre de clés (éviction LRU).

    Non thread-safe: le limiteur sérialise les accès.
    """

    def __init__(self, max_keys: int = 65536) -> None:
        if max_keys <= 0:
            raise ValueError("max_keys must be positive")
        self.max_keys = max_keys
        self._tats: OrderedDict[str, float] = OrderedDict()

    def get(self, key: str) -> float | None:
        tat = self._tats.get(key)
        if tat is not None:
            self._tats.move_to_end(key)
        return tat

    def set(self, key: str, tat: float) -> None:
        self._tats[key] = tat
        self._tats.move_to_end(key)
        while len(self._tats) > self.max_keys:
            self._tats.popitem(last=False)

    def __len__(self) -> int:
        return len(self._tats)


class GCRARateLimiter:
    """Limiteur GCRA thread-safe, à construire une fois par processus et à injecter."""

    def __init__(
        self,
        quota: RateQuota,
        store: MemoryTATStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.quota = quota
        self.store = store if store is not None else MemoryTATStore()
        self._clock = clock
        self._lock = threading.Lock()
        self.emission_interval = quota.emission_interval
        self.delay_variation_tolerance = self.emission_interval * (quota.max_burst + 1)
        self.limit = quota.max_burst + 1

    def check(self, key: str, quantity: int = 1) -> RateLimitResult:
        """Décide l'admission de `quantity` requêtes pour `key` et met à jour l'état."""
        increment = quantity * self.emission_interval
        with self._lock:
            now = self._clock()
            tat = self.store.get(key)
            if tat is None:
                tat = now
            new_tat = max(tat, now) + increment
            allow_at = new_tat - self.delay_variation_tolerance
            diff = now - allow_at

            if diff < 0:
                retry_after = -diff if increment <= self.delay_variation_tolerance else None
                return RateLimitResult(
                    allowed=False,
                    limit=self.limit,
                    remaining=0,
                    reset_after=max(0.0, tat - now),
                    retry_after=retry_after,
                )

            self.store.set(key, new_tat)

        ttl = new_tat - now
        remaining = 0
        headroom = self.delay_variation_tolerance - ttl
        if headroom > -self.emission_interval:
            remaining = max(0, int(headroom // self.emission_interval))
        return RateLimitResult(
            allowed=True,
            limit=self.limit,
            remaining=remaining,
            reset_after=ttl,
        )


def path_key(request: Request) -> str:
    """Clé de rate limit: le chemin de la requête."""
    return request.url.path


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware appliquant un `GCRARateLimiter` injecté à chaque requête."""

    def __init__(
        self,
        app: Any,
        limiter: GCRARateLimiter,
        key_func: Callable[[Request], str] = path_key,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.key_func = key_func

    async def dispatch(self, request: Request, call_next: Any) -> StarletteResponse:
        key = self.key_func(request)
        result = self.limiter.check(key)

        if not result.allowed:
            route = normalize_route(request.url.path)
            RATE_LIMIT_BLOCKS.labels(route=route).inc()
            retry_after = math.ceil(result.retry_after) if result.retry_after else None
            log.warning(
                "rate_limit_exceeded",
                path=request.url.path,
                method=request.method,
                retry_after=retry_after,
            )
            response = create_error_response(
                status_code=429,
                code=ErrorCodes.RATE_LIMITED,
                message="Rate limit exceeded. Try again later.",
                trace_id=extract_trace_id(request),
                details={"retry_after": retry_after} if retry_after else None,
            )
            if retry_after:
                response.headers["Retry-After"] = str(retry_after)
            self._add_headers(response, result)
            return response

        response = await call_next(request)
        self._add_headers(response, result)
        return response

    @staticmethod
    def _add_headers(response: StarletteResponse, result: RateLimitResult) -> None:
        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        response.headers["X-RateLimit-Reset"] = str(math.ceil(result.reset_after))
