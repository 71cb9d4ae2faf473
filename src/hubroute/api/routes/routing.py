"""Routing endpoints."""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...schemas.routing import CalculateRouteRequest, CompareRoutesRequest, RouteResponse, StrategyListResponse
from ...services.outputs.routing_formatter import route_to_json, routes_to_csv
from ...services.routing.errors import RoutingError
from ...services.routing.service import calculate_route, compare_routes, list_strategies

router = APIRouter(prefix="/routing", tags=["routing"])

T = TypeVar("T")


def _run(action: Callable[[], T], failure: str) -> T:
    """Translate engine errors into HTTP errors."""
    try:
        return action()
    except RoutingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": exc.code, "message": exc.message},
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "VALIDATION_ERROR", "message": str(exc)},
        ) from exc
    except Exception as exc:
        logging.exception(f"{failure}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "INTERNAL_ERROR", "message": f"{failure}."},
        ) from exc


@router.post("/calculate", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def calculate(payload: CalculateRouteRequest) -> RouteResponse:
    """Calculate a route with one strategy: Fastest (A*), Cheapest (Dijkstra) or Balanced."""
    route = _run(
        lambda: calculate_route(payload.strategy, payload.to_route_request()),
        "Failed to calculate route",
    )
    return RouteResponse(**route_to_json(route))


@router.post("/compare", response_model=List[RouteResponse], status_code=status.HTTP_200_OK)
def compare(payload: CompareRoutesRequest) -> List[RouteResponse]:
    """Run every registered strategy for the same request."""
    routes = _run(lambda: compare_routes(payload.to_route_request()), "Failed to compare routes")
    return [RouteResponse(**route_to_json(route)) for route in routes]


@router.post("/compare/csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def compare_csv(payload: CompareRoutesRequest) -> PlainTextResponse:
    routes = _run(lambda: compare_routes(payload.to_route_request()), "Failed to compare routes")
    return PlainTextResponse(routes_to_csv(routes), media_type="text/csv")


@router.get("/strategies", response_model=StrategyListResponse, status_code=status.HTTP_200_OK)
def strategies() -> StrategyListResponse:
    return StrategyListResponse(strategies=list_strategies())
