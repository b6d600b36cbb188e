"""GeoJSON export utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List


def generate_route_color(index: int) -> str:
    """Generate distinct colors for routes."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
        "#e000a2", "#e000e0", "#09e0e0", "#e0002f", "#22e000",
        "#15dde0", "#e00017", "#08e000", "#3100e0", "#e0bb0b",
    ]
    return colors[index % len(colors)]


def export_routes_to_geojson(optimization_response: Dict[str, Any]) -> Dict[str, Any]:
    """Convert an optimization response to a GeoJSON FeatureCollection.

    Args:
        optimization_response: Response from an optimization run (``model_dump`` form)

    Returns:
        FeatureCollection with one LineString feature per route
    """
    features: List[Dict[str, Any]] = []

    for idx, route in enumerate(optimization_response.get("routes", [])):
        stops = sorted(route.get("stops", []), key=lambda stop: stop.get("order", 0))

        # GeoJSON uses lon,lat order (x,y)
        coordinates = [
            [stop["longitude"], stop["latitude"]]
            for stop in stops
            if stop.get("latitude") is not None and stop.get("longitude") is not None
        ]
        if len(coordinates) < 2:
            continue

        color = generate_route_color(idx)
        features.append(
            {
                "type": "Feature",
                "id": f"route_{idx + 1}",
                "geometry": {"type": "LineString", "coordinates": coordinates},
                "properties": {
                    "name": f"Route {idx + 1}",
                    "vehicle_id": route.get("vehicle_id"),
                    "vehicle_name": route.get("vehicle_name"),
                    "vehicle_unit": route.get("vehicle_unit"),
                    "total_distance_km": route.get("total_distance"),
                    "total_capacity": route.get("total_capacity"),
                    "stop_count": max(len(stops) - 2, 0),
                    "location_ids": [stop.get("location_id") for stop in stops],
                    "stroke": color,
                    "stroke-width": 3,
                    "stroke-opacity": 0.8,
                },
            }
        )

    return {
        "type": "FeatureCollection",
        "name": optimization_response.get("name"),
        "features": features,
    }


def save_geojson(collection: Dict[str, Any], output_path: Path) -> None:
    """Save a FeatureCollection to disk.

    Args:
        collection: GeoJSON FeatureCollection
        output_path: Path to save JSON file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, indent=2, ensure_ascii=False, default=str)
