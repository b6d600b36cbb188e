"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Stop


@dataclass(slots=True)
class VehicleInstance:
    index: int
    unit: int
    vehicle_id: str
    name: str
    capacity: float
    remaining_capacity: float


@dataclass(slots=True)
class RouteStop:
    location_id: str
    location_name: str
    latitude: float
    longitude: float
    demand: float
    order: int

    @classmethod
    def from_stop(cls, stop: Stop, order: int) -> "RouteStop":
        return cls(
            location_id=stop.stop_id,
            location_name=stop.name,
            latitude=stop.latitude,
            longitude=stop.longitude,
            demand=stop.demand,
            order=order,
        )


@dataclass(slots=True)
class Route:
    """Depot-to-depot tour bound to one vehicle instance."""

    vehicle: VehicleInstance
    stops: List[RouteStop]
    total_distance: float
    total_demand: float

    @property
    def customer_stops(self) -> List[RouteStop]:
        return self.stops[1:-1]

    @property
    def stop_ids(self) -> List[str]:
        return [stop.location_id for stop in self.stops]


@dataclass(frozen=True, slots=True)
class Saving:
    first_id: str
    second_id: str
    value: float


@dataclass(slots=True)
class MergeOutcome:
    routes: List[Route]
    merges: int = 0
    rejected_capacity: int = 0
    skipped_unrouted: int = 0
    skipped_same_route: int = 0


@dataclass(slots=True)
class OptimizationResult:
    routes: List[Route]
    total_distance: float
    unrouted_stop_ids: List[str] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)
