"""Clarke-Wright savings solver for the capacitated vehicle routing problem."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import Stop, VehicleType
from ..geospatial import build_distance_table
from .builder import CursorPolicy, build_initial_routes
from .fleet import allocate_fleet
from .merger import CapacityCheck, merge_routes
from .models import OptimizationResult
from .savings import compute_savings


@dataclass(slots=True)
class SolverOptions:
    cursor_policy: CursorPolicy = settings.builder_cursor_policy
    capacity_check: CapacityCheck = settings.merge_capacity_check


def resolve_depot(stops: Sequence[Stop]) -> Optional[Stop]:
    """Return the first stop flagged as depot, else the first stop."""

    if not stops:
        return None
    return next((stop for stop in stops if stop.is_depot), stops[0])


def solve_cvrp(
    *,
    vehicle_types: Sequence[VehicleType],
    stops: Sequence[Stop],
    options: SolverOptions | None = None,
) -> OptimizationResult:
    options = options or SolverOptions()
    depot = resolve_depot(stops)
    if depot is None:
        return OptimizationResult(routes=[], total_distance=0.0, metadata={"status": "empty", "stops": 0})

    customers = [stop for stop in stops if stop.stop_id != depot.stop_id]
    table = build_distance_table(stops)
    savings = compute_savings(depot, customers, table)
    fleet = allocate_fleet(vehicle_types)
    logging.debug(
        f"Depot {depot.stop_id}: {len(customers)} stops, {len(fleet)} vehicles, {len(savings)} savings"
    )

    initial_routes = build_initial_routes(
        depot, customers, fleet, table, cursor_policy=options.cursor_policy
    )
    outcome = merge_routes(initial_routes, savings, table, capacity_check=options.capacity_check)

    routes = outcome.routes
    total_distance = sum(route.total_distance for route in routes)
    routed = {stop.location_id for route in routes for stop in route.customer_stops}
    unrouted = [stop.stop_id for stop in customers if stop.stop_id not in routed]
    if unrouted:
        logging.warning(f"{len(unrouted)} of {len(customers)} stops could not be assigned to a vehicle")

    metadata = {
        "status": "complete" if routes else "empty",
        "depot_id": depot.stop_id,
        "stops": len(customers),
        "routed_stops": len(routed),
        "vehicles_available": len(fleet),
        "vehicles_used": len(routes),
        "savings_evaluated": len(savings),
        "merges": outcome.merges,
        "rejected_capacity": outcome.rejected_capacity,
        "skipped_unrouted": outcome.skipped_unrouted,
        "skipped_same_route": outcome.skipped_same_route,
        "cursor_policy": options.cursor_policy,
        "capacity_check": options.capacity_check,
    }
    logging.info(
        f"Clarke-Wright run: {len(routes)} routes, {len(routed)}/{len(customers)} stops routed, "
        f"{outcome.merges} merges, total distance {total_distance:.3f} km"
    )
    return OptimizationResult(
        routes=routes,
        total_distance=total_distance,
        unrouted_stop_ids=unrouted,
        metadata=metadata,
    )
