"""Serializers for optimization outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..routing.models import OptimizationResult


def optimization_result_to_json(result: OptimizationResult, *, name: str) -> dict:
    return {
        "name": name,
        "total_distance": result.total_distance,
        "unrouted_location_ids": list(result.unrouted_stop_ids),
        "metadata": result.metadata,
        "routes": [
            {
                "vehicle_id": route.vehicle.vehicle_id,
                "vehicle_name": route.vehicle.name,
                "vehicle_unit": route.vehicle.unit,
                "total_distance": route.total_distance,
                "total_capacity": route.total_demand,
                "stops": [asdict(stop) for stop in route.stops],
            }
            for route in result.routes
        ],
    }


def optimization_result_to_csv(result: OptimizationResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "route_index",
        "vehicle_id",
        "vehicle_name",
        "vehicle_unit",
        "order",
        "location_id",
        "location_name",
        "latitude",
        "longitude",
        "demand",
        "total_distance",
        "total_capacity",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for route_index, route in enumerate(result.routes, start=1):
        for stop in route.stops:
            writer.writerow(
                {
                    "route_index": route_index,
                    "vehicle_id": route.vehicle.vehicle_id,
                    "vehicle_name": route.vehicle.name,
                    "vehicle_unit": route.vehicle.unit,
                    "order": stop.order,
                    "location_id": stop.location_id,
                    "location_name": stop.location_name,
                    "latitude": stop.latitude,
                    "longitude": stop.longitude,
                    "demand": stop.demand,
                    "total_distance": route.total_distance,
                    "total_capacity": route.total_demand,
                }
            )
    return buffer.getvalue()
