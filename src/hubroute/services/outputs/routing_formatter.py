"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Sequence

from ..routing.models import Route

ONE_DECIMAL = Decimal("0.1")


def format_duration(duration: timedelta) -> str:
    """``HH:MM:SS``; hours keep counting past 24 so multi-day routes stay readable."""

    total_seconds = int(duration.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def round_distance(distance_km: Decimal) -> Decimal:
    return distance_km.quantize(ONE_DECIMAL, rounding=ROUND_HALF_EVEN)


def route_to_json(route: Route) -> dict:
    return {
        "strategy_used": route.strategy_used,
        "waypoint_node_ids": list(route.waypoint_node_ids),
        "distance_km": round_distance(route.distance_km),
        "estimated_duration": format_duration(route.estimated_duration),
        "estimated_cost": {
            "amount": route.estimated_cost.amount,
            "currency": route.estimated_cost.currency,
        },
        "found": not route.is_empty,
    }


def routes_to_csv(routes: Sequence[Route]) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "strategy_used",
        "waypoints",
        "waypoint_count",
        "distance_km",
        "estimated_duration",
        "cost_amount",
        "cost_currency",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for route in routes:
        writer.writerow(
            {
                "strategy_used": route.strategy_used,
                "waypoints": " > ".join(route.waypoint_node_ids),
                "waypoint_count": len(route.waypoint_node_ids),
                "distance_km": round_distance(route.distance_km),
                "estimated_duration": format_duration(route.estimated_duration),
                "cost_amount": f"{route.estimated_cost.amount:.2f}",
                "cost_currency": route.estimated_cost.currency,
            }
        )
    return buffer.getvalue()
