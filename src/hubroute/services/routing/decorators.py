"""Cross-cutting stages that wrap a route strategy without changing its contract.

Each stage exposes the wrapped strategy's ``name`` and delegates ``calculate``.
The default pipeline is validation -> logging -> caching -> strategy, so invalid
requests are neither cached nor logged as completed calculations.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable

from ...config import settings
from .base import RouteStrategy
from .errors import InvalidRouteRequestError
from .models import Route, RouteRequest

logger = logging.getLogger(__name__)


class RouteStrategyDecorator(RouteStrategy):
    """Delegates everything to ``inner``; subclasses override ``calculate``."""

    def __init__(self, inner: RouteStrategy) -> None:
        if inner is None:
            raise ValueError("inner strategy is required")
        self.inner = inner

    @property
    def name(self) -> str:
        return self.inner.name

    def calculate(self, request: RouteRequest) -> Route:
        return self.inner.calculate(request)


class ValidatingRouteStrategy(RouteStrategyDecorator):
    def calculate(self, request: RouteRequest) -> Route:
        validate_request(request)
        return self.inner.calculate(request)


def validate_request(request: RouteRequest | None) -> None:
    """Raise ``InvalidRouteRequestError`` for requests no strategy should see."""

    if request is None:
        raise InvalidRouteRequestError("Route request is required.")
    if request.origin is None:
        raise InvalidRouteRequestError("request.origin is required.")
    if request.destination is None:
        raise InvalidRouteRequestError("request.destination is required.")
    if request.package_weight is None:
        raise InvalidRouteRequestError("request.package_weight is required.")
    if request.origin == request.destination:
        raise InvalidRouteRequestError("Origin and destination must be different coordinates.")
    if request.package_weight.value <= 0:
        raise InvalidRouteRequestError("Package weight must be positive.")


class LoggingRouteStrategy(RouteStrategyDecorator):
    def __init__(self, inner: RouteStrategy, log: logging.Logger | None = None) -> None:
        super().__init__(inner)
        self.log = log or logger

    def calculate(self, request: RouteRequest) -> Route:
        self.log.info(
            f"Route calculation started: strategy={self.name}, origin={request.origin}, "
            f"destination={request.destination}, service_level={request.service_level.value}"
        )
        started = time.perf_counter()

        route = self.inner.calculate(request)

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        self.log.info(
            f"Route calculation completed: strategy={self.name}, distance={route.distance_km:.2f}km, "
            f"duration={route.estimated_duration}, cost={route.estimated_cost}, "
            f"waypoints={len(route.waypoint_node_ids)}, elapsed={elapsed_ms:.2f}ms"
        )
        return route


class _KeySlot:
    """Per-key computation lock plus the number of callers holding or awaiting it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class RouteCache:
    """Thread-safe bounded LRU map with per-key single-flight computation.

    Concurrent callers asking for the same missing key wait for one computation
    instead of each running it; entries are only published once complete.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        self.max_entries = max_entries if max_entries is not None else settings.route_cache_max_entries
        if self.max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._entries: OrderedDict[str, Route] = OrderedDict()
        self._lock = threading.Lock()
        self._key_locks: dict[str, _KeySlot] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _lookup(self, key: str) -> Route | None:
        route = self._entries.get(key)
        if route is not None:
            self._entries.move_to_end(key)
        return route

    def get_or_compute(self, key: str, compute: Callable[[], Route]) -> Route:
        with self._lock:
            cached = self._lookup(key)
            if cached is not None:
                logger.debug(f"Route cache hit: {key}")
                return cached
            slot = self._key_locks.get(key)
            if slot is None:
                slot = self._key_locks[key] = _KeySlot()
            slot.users += 1

        try:
            with slot.lock:
                with self._lock:
                    cached = self._lookup(key)
                    if cached is not None:
                        logger.debug(f"Route cache hit after wait: {key}")
                        return cached
                logger.debug(f"Route cache miss: {key}")
                route = compute()
                with self._lock:
                    self._entries[key] = route
                    self._entries.move_to_end(key)
                    while len(self._entries) > self.max_entries:
                        evicted, _ = self._entries.popitem(last=False)
                        logger.debug(f"Route cache evicted: {evicted}")
                return route
        finally:
            # the slot stays registered while any caller still holds or waits on it
            with self._lock:
                slot.users -= 1
                if slot.users == 0:
                    self._key_locks.pop(key, None)


class CachingRouteStrategy(RouteStrategyDecorator):
    """Memoise whole routes by request; only pure route computation is cached."""

    def __init__(self, inner: RouteStrategy, cache: RouteCache | None = None) -> None:
        super().__init__(inner)
        self.cache = cache if cache is not None else RouteCache()

    def calculate(self, request: RouteRequest) -> Route:
        if request is None:
            raise InvalidRouteRequestError("Route request is required.")
        return self.cache.get_or_compute(self.cache_key(request), lambda: self.inner.calculate(request))

    def cache_key(self, request: RouteRequest) -> str:
        """``Name|olat,olon|dlat,dlon|kg|ServiceLevel`` with numerically normalised values."""

        def _fmt(value) -> str:
            return format(value.normalize(), "f")

        return "|".join(
            (
                self.name,
                f"{_fmt(request.origin.latitude)},{_fmt(request.origin.longitude)}",
                f"{_fmt(request.destination.latitude)},{_fmt(request.destination.longitude)}",
                f"{_fmt(request.package_weight.to_kilograms())}kg",
                request.service_level.value,
            )
        )
