"""Geospatial helper functions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from ..models.domain import Stop

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(slots=True)
class DistanceTable:
    """Symmetric great-circle distances between every stop of a run, in km."""

    index: dict[str, int]
    matrix: np.ndarray

    def between(self, first_id: str, second_id: str) -> float:
        return float(self.matrix[self.index[first_id], self.index[second_id]])

    def route_length(self, stop_ids: Iterable[str]) -> float:
        """Sum of consecutive legs along a sequence of stop ids."""

        ids = list(stop_ids)
        total = 0.0
        for from_id, to_id in zip(ids, ids[1:]):
            total += self.between(from_id, to_id)
        return total


def build_distance_table(stops: Sequence[Stop]) -> DistanceTable:
    """Compute the pairwise distance matrix over ``stops`` (depot included).

    Each unordered pair is evaluated once and mirrored, so the table is
    exactly symmetric with a zero diagonal.
    """

    index: dict[str, int] = {}
    ordered: list[Stop] = []
    for stop in stops:
        if stop.stop_id in index:
            continue
        index[stop.stop_id] = len(ordered)
        ordered.append(stop)

    size = len(ordered)
    matrix = np.zeros((size, size), dtype=float)
    for i in range(size):
        for j in range(i + 1, size):
            distance = haversine_km(
                ordered[i].latitude,
                ordered[i].longitude,
                ordered[j].latitude,
                ordered[j].longitude,
            )
            matrix[i, j] = distance
            matrix[j, i] = distance
    return DistanceTable(index=index, matrix=matrix)
