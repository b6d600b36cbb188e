"""Export services."""

from .geojson import (
    export_routes_to_geojson,
    save_geojson,
)

__all__ = [
    "export_routes_to_geojson",
    "save_geojson",
]
