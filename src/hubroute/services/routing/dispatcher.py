"""Registry of route strategies keyed by case-insensitive name."""

from __future__ import annotations

import functools
from typing import Callable, Iterable, Sequence

from .base import RouteStrategy
from .decorators import CachingRouteStrategy, LoggingRouteStrategy, RouteCache, ValidatingRouteStrategy
from .errors import StrategyNotFoundError
from .strategies import BalancedRouteStrategy, CheapestRouteStrategy, FastestRouteStrategy

Stage = Callable[[RouteStrategy], RouteStrategy]


class RouteStrategyRegistry:
    """O(1) lookup over an explicitly declared set of strategies."""

    def __init__(self, strategies: Iterable[RouteStrategy]) -> None:
        self._strategies: dict[str, RouteStrategy] = {}
        for strategy in strategies:
            key = strategy.name.casefold()
            if key in self._strategies:
                raise ValueError(f"Duplicate route strategy name '{strategy.name}'.")
            self._strategies[key] = strategy

    def create(self, strategy_name: str) -> RouteStrategy:
        if not strategy_name or not strategy_name.strip():
            raise StrategyNotFoundError(strategy_name or "")
        strategy = self._strategies.get(strategy_name.strip().casefold())
        if strategy is None:
            raise StrategyNotFoundError(strategy_name)
        return strategy

    def available(self) -> list[str]:
        return [strategy.name for strategy in self._strategies.values()]

    def __contains__(self, strategy_name: object) -> bool:
        return isinstance(strategy_name, str) and strategy_name.strip().casefold() in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)


def compose(strategy: RouteStrategy, stages: Sequence[Stage]) -> RouteStrategy:
    """Wrap ``strategy`` so ``stages[0]`` is outermost and ``stages[-1]`` innermost."""

    wrapped = strategy
    for stage in reversed(stages):
        wrapped = stage(wrapped)
    return wrapped


def default_stages(cache_max_entries: int | None = None) -> list[Stage]:
    return [
        ValidatingRouteStrategy,
        LoggingRouteStrategy,
        lambda inner: CachingRouteStrategy(inner, RouteCache(cache_max_entries)),
    ]


def build_registry(
    strategies: Iterable[RouteStrategy] | None = None,
    *,
    stages: Sequence[Stage] | None = None,
) -> RouteStrategyRegistry:
    """Build a registry where every strategy runs behind the cross-cutting stages."""

    if strategies is None:
        strategies = (FastestRouteStrategy(), CheapestRouteStrategy(), BalancedRouteStrategy())
    pipeline = default_stages() if stages is None else stages
    return RouteStrategyRegistry(compose(strategy, pipeline) for strategy in strategies)


@functools.lru_cache(maxsize=1)
def get_registry() -> RouteStrategyRegistry:
    """Process-wide registry; strategies are stateless apart from their caches."""

    return build_registry()
