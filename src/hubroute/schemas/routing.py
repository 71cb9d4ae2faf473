"""Routing request/response schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from ..models.domain import Coordinate, ServiceLevel, Weight, WeightUnit
from ..services.routing.models import RouteRequest


class CoordinateModel(BaseModel):
    latitude: Decimal = Field(..., ge=-90, le=90, description="Latitude in decimal degrees.")
    longitude: Decimal = Field(..., ge=-180, le=180, description="Longitude in decimal degrees.")

    def to_domain(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class WeightModel(BaseModel):
    value: Decimal = Field(..., gt=0, description="Package weight value.")
    unit: str = Field(default="Kg", description="Kg, G, Jin or Lb.")

    def to_domain(self) -> Weight:
        return Weight(self.value, WeightUnit.parse(self.unit))


class MoneyModel(BaseModel):
    amount: float
    currency: str


class CompareRoutesRequest(BaseModel):
    origin: CoordinateModel = Field(..., description="Origin coordinate (e.g. Shanghai 31.2304, 121.4737).")
    destination: CoordinateModel = Field(..., description="Destination coordinate (e.g. Beijing 39.9042, 116.4074).")
    package_weight: WeightModel
    service_level: str = Field(default="Standard", description="Express, Standard or Economy.")

    def to_route_request(self) -> RouteRequest:
        return RouteRequest(
            origin=self.origin.to_domain(),
            destination=self.destination.to_domain(),
            package_weight=self.package_weight.to_domain(),
            service_level=ServiceLevel.parse(self.service_level),
        )


class CalculateRouteRequest(CompareRoutesRequest):
    strategy: str = Field(..., description="Fastest, Cheapest or Balanced (case-insensitive).")


class RouteResponse(BaseModel):
    strategy_used: str
    waypoint_node_ids: List[str]
    distance_km: float = Field(..., description="Total distance rounded to one decimal.")
    estimated_duration: str = Field(..., description="HH:MM:SS; hours are not wrapped at 24.")
    estimated_cost: MoneyModel
    found: bool = Field(..., description="False when no route connects origin and destination.")


class StrategyListResponse(BaseModel):
    strategies: List[str]
