"""Optimization orchestration service."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from ...config import settings
from ...models.domain import Stop, VehicleType
from ...persistence.filesystem import FileStorage, slugify
from ...schemas.optimization import (
    OptimizationRequest,
    OptimizationResponse,
    RouteModel,
    RouteStopModel,
)
from ..export.geojson import export_routes_to_geojson, save_geojson
from ..outputs.routing_formatter import optimization_result_to_csv, optimization_result_to_json
from .models import OptimizationResult
from .solver import SolverOptions, solve_cvrp


def _build_options(payload: OptimizationRequest) -> SolverOptions:
    base = SolverOptions()
    overrides = payload.options
    return SolverOptions(
        cursor_policy=overrides.cursor_policy
        if overrides and overrides.cursor_policy is not None
        else base.cursor_policy,
        capacity_check=overrides.capacity_check
        if overrides and overrides.capacity_check is not None
        else base.capacity_check,
    )


def _to_domain(payload: OptimizationRequest) -> tuple[list[VehicleType], list[Stop]]:
    vehicle_types = [
        VehicleType(vehicle_id=item.id, name=item.name, capacity=item.capacity, count=item.count)
        for item in payload.vehicles
    ]
    stops = [
        Stop(
            stop_id=item.id,
            name=item.name,
            latitude=item.latitude,
            longitude=item.longitude,
            demand=item.demand,
            is_depot=item.is_depot,
        )
        for item in payload.locations
    ]
    return vehicle_types, stops


def _to_response(
    payload: OptimizationRequest,
    result: OptimizationResult,
    metadata: dict,
    created_at: datetime,
) -> OptimizationResponse:
    return OptimizationResponse(
        name=payload.name,
        created_at=created_at,
        total_distance=result.total_distance,
        unrouted_location_ids=list(result.unrouted_stop_ids),
        metadata=metadata,
        routes=[
            RouteModel(
                vehicle_id=route.vehicle.vehicle_id,
                vehicle_name=route.vehicle.name,
                vehicle_unit=route.vehicle.unit,
                total_distance=route.total_distance,
                total_capacity=route.total_demand,
                stops=[RouteStopModel(**asdict(stop)) for stop in route.stops],
            )
            for route in result.routes
        ],
    )


def _write_artifacts(payload: OptimizationRequest, result: OptimizationResult, response: OptimizationResponse) -> str:
    storage = FileStorage()
    run_dir = storage.make_run_directory(prefix=f"optimization_{slugify(payload.run_label or payload.name)}")
    summary = optimization_result_to_json(result, name=payload.name)
    summary["created_at"] = response.created_at.isoformat()
    summary["metadata"] = response.metadata
    storage.write_json(run_dir / "summary.json", summary)
    storage.write_csv(run_dir / "routes.csv", optimization_result_to_csv(result))
    save_geojson(export_routes_to_geojson(response.model_dump()), run_dir / "routes.geojson")
    return str(run_dir)


def optimize_routes(payload: OptimizationRequest) -> OptimizationResponse:
    if not payload.vehicles or not payload.locations:
        raise ValueError("Vehicles or locations not found")
    if len(payload.locations) > settings.max_locations_per_run:
        raise ValueError(
            f"Too many locations for one run: {len(payload.locations)} "
            f"(limit {settings.max_locations_per_run})"
        )

    vehicle_types, stops = _to_domain(payload)
    options = _build_options(payload)
    logging.info(
        f"Optimizing '{payload.name}': {len(stops)} locations, "
        f"{sum(v.count for v in vehicle_types)} vehicles"
    )
    result = solve_cvrp(vehicle_types=vehicle_types, stops=stops, options=options)

    metadata = dict(result.metadata)
    if payload.run_label:
        metadata["run_label"] = payload.run_label
    if payload.requested_by:
        metadata["author"] = payload.requested_by
    if payload.notes:
        metadata["notes"] = payload.notes
    if payload.tags:
        merged_tags: list[str] = []
        for tag in payload.tags:
            normalized = tag.strip()
            if normalized and normalized not in merged_tags:
                merged_tags.append(normalized)
        metadata["tags"] = merged_tags

    response = _to_response(payload, result, metadata, datetime.now(timezone.utc))

    if payload.persist:
        try:
            output_dir = _write_artifacts(payload, result, response)
        except OSError as exc:
            logging.warning(f"Failed to write optimization artifacts: {exc}")
        else:
            response.metadata["output_dir"] = output_dir

    return response
