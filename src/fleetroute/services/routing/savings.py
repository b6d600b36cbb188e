"""Clarke-Wright savings computation."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Stop
from ..geospatial import DistanceTable
from .models import Saving


def compute_savings(depot: Stop, stops: Sequence[Stop], table: DistanceTable) -> list[Saving]:
    """Return the saving of every unordered pair of customer stops, best first.

    ``saving(i, j) = d(depot, i) + d(depot, j) - d(i, j)``. Pairs are
    enumerated ``i < j`` in input order and the sort is stable, so equal
    savings keep that enumeration order.
    """

    customers = [stop for stop in stops if stop.stop_id != depot.stop_id]
    savings: list[Saving] = []
    for i, first in enumerate(customers):
        depot_to_first = table.between(depot.stop_id, first.stop_id)
        for second in customers[i + 1:]:
            if second.stop_id == first.stop_id:
                continue
            value = (
                depot_to_first
                + table.between(depot.stop_id, second.stop_id)
                - table.between(first.stop_id, second.stop_id)
            )
            savings.append(Saving(first_id=first.stop_id, second_id=second.stop_id, value=value))

    savings.sort(key=lambda saving: saving.value, reverse=True)
    return savings
