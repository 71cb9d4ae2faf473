"""Routing error taxonomy."""

from __future__ import annotations


class RoutingError(Exception):
    """Base class for routing failures that carry a machine-readable code."""

    code = "ROUTING_ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code:
            self.code = code

    @property
    def message(self) -> str:
        return str(self)


class StrategyNotFoundError(RoutingError, LookupError):
    code = "STRATEGY_NOT_FOUND"

    def __init__(self, strategy_name: str) -> None:
        super().__init__(f"No route strategy registered with name '{strategy_name}'.")
        self.strategy_name = strategy_name


class InvalidRouteRequestError(RoutingError, ValueError):
    code = "VALIDATION_ERROR"
