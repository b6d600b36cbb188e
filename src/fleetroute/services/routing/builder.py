"""Construction of the initial depot -> stop -> depot routes."""

from __future__ import annotations

import logging
from typing import Literal, Sequence

from ...models.domain import Stop
from ..geospatial import DistanceTable
from .models import Route, RouteStop, VehicleInstance

CursorPolicy = Literal["per_stop", "per_assignment"]


def _singleton_route(depot: Stop, stop: Stop, vehicle: VehicleInstance, table: DistanceTable) -> Route:
    return Route(
        vehicle=vehicle,
        stops=[
            RouteStop.from_stop(depot, 0),
            RouteStop.from_stop(stop, 1),
            RouteStop.from_stop(depot, 2),
        ],
        total_distance=table.between(depot.stop_id, stop.stop_id) * 2,
        total_demand=stop.demand,
    )


def build_initial_routes(
    depot: Stop,
    stops: Sequence[Stop],
    fleet: Sequence[VehicleInstance],
    table: DistanceTable,
    *,
    cursor_policy: CursorPolicy = "per_stop",
) -> list[Route]:
    """Give every customer stop its own route on the next vehicle in the pool.

    A stop is skipped when the pool is exhausted or its demand exceeds the
    remaining capacity of the vehicle under the cursor. Skipped stops are
    never revisited. With ``per_stop`` the cursor moves past a vehicle even
    when its stop was skipped; with ``per_assignment`` it only moves after
    a successful assignment.
    """

    routes: list[Route] = []
    cursor = 0
    for stop in stops:
        if stop.stop_id == depot.stop_id:
            continue

        vehicle = fleet[cursor] if cursor < len(fleet) else None
        if vehicle is not None and stop.demand <= vehicle.remaining_capacity:
            routes.append(_singleton_route(depot, stop, vehicle, table))
            vehicle.remaining_capacity -= stop.demand
            cursor += 1
            continue

        if vehicle is None:
            logging.debug(f"No vehicle left for stop {stop.stop_id}, skipping")
        else:
            logging.debug(
                f"Stop {stop.stop_id} demand {stop.demand} exceeds remaining capacity "
                f"{vehicle.remaining_capacity} of {vehicle.vehicle_id}#{vehicle.unit}, skipping"
            )
        if cursor_policy == "per_stop":
            cursor += 1
    return routes
