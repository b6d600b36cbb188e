"""Greedy single-pass merging of routes in savings order."""

from __future__ import annotations

import logging
from typing import Literal, Optional, Sequence

from ..geospatial import DistanceTable
from .models import MergeOutcome, Route, RouteStop, Saving, VehicleInstance

CapacityCheck = Literal["first_route", "both_routes"]


def _select_vehicle(
    first: Route,
    second: Route,
    demand: float,
    capacity_check: CapacityCheck,
) -> Optional[VehicleInstance]:
    if capacity_check == "first_route":
        return first.vehicle if demand <= first.vehicle.capacity else None

    candidates = [vehicle for vehicle in (first.vehicle, second.vehicle) if demand <= vehicle.capacity]
    if not candidates:
        return None
    # max() keeps the first route's vehicle on equal capacity
    return max(candidates, key=lambda vehicle: vehicle.capacity)


def _merge_pair(first: Route, second: Route, vehicle: VehicleInstance, table: DistanceTable) -> Route:
    depot = first.stops[0]
    sequence = [depot, *first.customer_stops, *second.customer_stops, depot]
    stops = [
        RouteStop(
            location_id=stop.location_id,
            location_name=stop.location_name,
            latitude=stop.latitude,
            longitude=stop.longitude,
            demand=stop.demand,
            order=order,
        )
        for order, stop in enumerate(sequence)
    ]
    demand = first.total_demand + second.total_demand
    vehicle.remaining_capacity = vehicle.capacity - demand
    return Route(
        vehicle=vehicle,
        stops=stops,
        total_distance=table.route_length(stop.location_id for stop in stops),
        total_demand=demand,
    )


def merge_routes(
    routes: Sequence[Route],
    savings: Sequence[Saving],
    table: DistanceTable,
    *,
    capacity_check: CapacityCheck = "first_route",
) -> MergeOutcome:
    """Walk the savings once and join the two routes serving each pair when allowed.

    Routes live in positional slots. A merged route takes the earlier of the
    two slots and the later slot is emptied, which keeps the surviving routes
    in the same relative order as the initial construction. The vehicle of
    the route that is absorbed is not returned to any pool.
    """

    slots: list[Optional[Route]] = list(routes)
    owner: dict[str, int] = {}
    for slot, route in enumerate(slots):
        for stop in route.customer_stops:
            owner[stop.location_id] = slot

    outcome = MergeOutcome(routes=[])
    for saving in savings:
        first_slot = owner.get(saving.first_id)
        second_slot = owner.get(saving.second_id)
        if first_slot is None or second_slot is None:
            outcome.skipped_unrouted += 1
            continue
        if first_slot == second_slot:
            outcome.skipped_same_route += 1
            continue

        first = slots[first_slot]
        second = slots[second_slot]
        demand = first.total_demand + second.total_demand
        vehicle = _select_vehicle(first, second, demand, capacity_check)
        if vehicle is None:
            outcome.rejected_capacity += 1
            continue

        merged = _merge_pair(first, second, vehicle, table)
        keep, drop = min(first_slot, second_slot), max(first_slot, second_slot)
        slots[keep] = merged
        slots[drop] = None
        for stop in merged.customer_stops:
            owner[stop.location_id] = keep
        outcome.merges += 1
        logging.debug(
            f"Merged {saving.first_id} and {saving.second_id} (saving {saving.value:.3f} km) "
            f"onto {vehicle.vehicle_id}#{vehicle.unit}, demand {demand}"
        )

    outcome.routes = [route for route in slots if route is not None]
    return outcome
