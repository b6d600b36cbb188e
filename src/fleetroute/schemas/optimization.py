"""Optimization request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class VehicleModel(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    capacity: float = Field(..., gt=0)
    count: int = Field(default=1, ge=1)


class LocationModel(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    demand: float = Field(default=0, ge=0)
    is_depot: bool = False


class SolverOptionsModel(BaseModel):
    cursor_policy: Optional[Literal["per_stop", "per_assignment"]] = None
    capacity_check: Optional[Literal["first_route", "both_routes"]] = None


class OptimizationRequest(BaseModel):
    name: str = Field(..., min_length=1)
    vehicles: List[VehicleModel]
    locations: List[LocationModel]
    options: Optional[SolverOptionsModel] = None
    persist: bool = False
    requested_by: Optional[str] = Field(default=None, description="Person or system requesting the run.")
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")
    tags: Optional[List[str]] = Field(default=None, description="Tags to associate with the run.")
    notes: Optional[str] = Field(default=None, description="Free-form notes captured with the run.")

    @field_validator("vehicles", "locations")
    @classmethod
    def _unique_ids(cls, value: list) -> list:
        seen: set[str] = set()
        for item in value:
            if item.id in seen:
                raise ValueError(f"Duplicate id '{item.id}'")
            seen.add(item.id)
        return value


class RouteStopModel(BaseModel):
    location_id: str
    location_name: str
    latitude: float
    longitude: float
    demand: float
    order: int


class RouteModel(BaseModel):
    vehicle_id: str
    vehicle_name: str
    vehicle_unit: int
    stops: List[RouteStopModel]
    total_distance: float
    total_capacity: float


class OptimizationResponse(BaseModel):
    name: str
    created_at: datetime
    total_distance: float
    routes: List[RouteModel]
    unrouted_location_ids: List[str]
    metadata: dict
