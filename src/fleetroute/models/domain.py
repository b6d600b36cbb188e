"""Domain models for stops and vehicle definitions."""

from dataclasses import dataclass


@dataclass(slots=True)
class Stop:
    """A geocoded location to visit; one stop per run acts as the depot."""

    stop_id: str
    name: str
    latitude: float
    longitude: float
    demand: float = 0.0
    is_depot: bool = False


@dataclass(frozen=True, slots=True)
class VehicleType:
    """A class of identical vehicles available ``count`` times."""

    vehicle_id: str
    name: str
    capacity: float
    count: int = 1
