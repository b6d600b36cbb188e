"""Expansion of vehicle types into individual vehicle instances."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import VehicleType
from .models import VehicleInstance


def allocate_fleet(vehicle_types: Sequence[VehicleType]) -> list[VehicleInstance]:
    """Flatten ``count`` units of each type, earlier types first."""

    fleet: list[VehicleInstance] = []
    for vehicle_type in vehicle_types:
        for unit in range(vehicle_type.count):
            fleet.append(
                VehicleInstance(
                    index=len(fleet),
                    unit=unit,
                    vehicle_id=vehicle_type.vehicle_id,
                    name=vehicle_type.name,
                    capacity=vehicle_type.capacity,
                    remaining_capacity=vehicle_type.capacity,
                )
            )
    return fleet
