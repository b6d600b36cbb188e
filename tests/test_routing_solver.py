import pytest

from fleetroute.models.domain import Stop, VehicleType
from fleetroute.services.geospatial import haversine_km
from fleetroute.services.routing.solver import SolverOptions, resolve_depot, solve_cvrp


def _stop(sid: str, lat: float, lon: float, demand: float = 0.0, is_depot: bool = False) -> Stop:
    return Stop(stop_id=sid, name=f"Stop {sid}", latitude=lat, longitude=lon, demand=demand, is_depot=is_depot)


def _vehicle(vid: str, capacity: float, count: int = 1) -> VehicleType:
    return VehicleType(vehicle_id=vid, name=f"Vehicle {vid}", capacity=capacity, count=count)


def _line_stops(demand: float) -> list[Stop]:
    return [_stop("D", 0.0, 0.0), _stop("A", 0.0, 1.0, demand), _stop("B", 0.0, 2.0, demand)]


def _sample_stops() -> list[Stop]:
    coordinates = [
        (21.54, 39.17), (21.49, 39.19), (21.60, 39.11), (21.58, 39.25), (21.45, 39.22),
        (21.52, 39.30), (21.66, 39.15), (21.43, 39.16), (21.57, 39.20), (21.50, 39.09),
    ]
    stops = [_stop("DC", 21.53, 39.18, is_depot=True)]
    for i, (lat, lon) in enumerate(coordinates):
        stops.append(_stop(f"C{i + 1}", lat, lon, demand=(i % 4) + 2))
    return stops


def test_resolve_depot_prefers_flag_then_first_stop():
    plain = [_stop("A", 0.0, 1.0), _stop("B", 0.0, 2.0)]
    flagged = [_stop("A", 0.0, 1.0), _stop("B", 0.0, 2.0, is_depot=True), _stop("C", 0.0, 3.0, is_depot=True)]

    assert resolve_depot(plain).stop_id == "A"
    assert resolve_depot(flagged).stop_id == "B"
    assert resolve_depot([]) is None


def test_two_stops_merge_into_one_feasible_route():
    result = solve_cvrp(vehicle_types=[_vehicle("V", 10, count=2)], stops=_line_stops(5))

    assert len(result.routes) == 1
    route = result.routes[0]
    assert route.stop_ids == ["D", "A", "B", "D"]
    assert route.total_demand == 10
    assert route.total_demand <= route.vehicle.capacity
    assert result.total_distance == pytest.approx(4 * haversine_km(0.0, 0.0, 0.0, 1.0), rel=1e-9)
    assert result.unrouted_stop_ids == []
    assert result.metadata["merges"] == 1


def test_single_vehicle_cannot_seed_second_stop():
    result = solve_cvrp(vehicle_types=[_vehicle("V", 10, count=1)], stops=_line_stops(5))

    assert [route.stop_ids for route in result.routes] == [["D", "A", "D"]]
    assert result.unrouted_stop_ids == ["B"]


def test_merge_rejected_when_pair_exceeds_capacity():
    result = solve_cvrp(vehicle_types=[_vehicle("V", 9, count=2)], stops=_line_stops(5))

    assert [route.stop_ids for route in result.routes] == [["D", "A", "D"], ["D", "B", "D"]]
    assert [route.vehicle.unit for route in result.routes] == [0, 1]
    assert result.metadata["rejected_capacity"] == 1

    single = solve_cvrp(vehicle_types=[_vehicle("V", 9, count=1)], stops=_line_stops(5))
    assert len(single.routes) == 1
    assert single.unrouted_stop_ids == ["B"]


def test_capacity_below_every_demand_routes_nothing():
    result = solve_cvrp(vehicle_types=[_vehicle("V", 4, count=2)], stops=_line_stops(5))

    assert result.routes == []
    assert result.total_distance == 0.0
    assert result.unrouted_stop_ids == ["A", "B"]


def test_zero_customer_stops_gives_empty_result():
    result = solve_cvrp(vehicle_types=[_vehicle("V", 10)], stops=[_stop("D", 0.0, 0.0)])

    assert result.routes == []
    assert result.total_distance == 0.0
    assert result.metadata["status"] == "empty"

    nothing = solve_cvrp(vehicle_types=[_vehicle("V", 10)], stops=[])
    assert nothing.routes == []
    assert nothing.total_distance == 0.0


def test_no_vehicles_gives_empty_result():
    result = solve_cvrp(vehicle_types=[], stops=_line_stops(1))

    assert result.routes == []
    assert result.unrouted_stop_ids == ["A", "B"]


def test_oversized_stop_never_appears_in_output():
    stops = _sample_stops()
    stops.append(_stop("HUGE", 21.55, 39.18, demand=500))

    result = solve_cvrp(vehicle_types=[_vehicle("V", 12, count=20)], stops=stops)

    routed = {stop.location_id for route in result.routes for stop in route.stops}
    assert "HUGE" not in routed
    assert "HUGE" in result.unrouted_stop_ids


def test_routes_start_and_end_at_depot_within_capacity():
    stops = _sample_stops()
    result = solve_cvrp(
        vehicle_types=[_vehicle("VAN", 8, count=4), _vehicle("TRUCK", 15, count=8)],
        stops=stops,
    )

    assert result.routes
    for route in result.routes:
        ids = route.stop_ids
        assert ids[0] == "DC" and ids[-1] == "DC"
        assert "DC" not in ids[1:-1]
        assert route.total_demand == sum(stop.demand for stop in route.customer_stops)
        assert route.total_demand <= route.vehicle.capacity
        assert [stop.order for stop in route.stops] == list(range(len(ids)))


def test_total_distance_matches_independent_recomputation():
    result = solve_cvrp(vehicle_types=[_vehicle("TRUCK", 15, count=10)], stops=_sample_stops())

    recomputed = 0.0
    for route in result.routes:
        legs = zip(route.stops, route.stops[1:])
        route_distance = sum(haversine_km(a.latitude, a.longitude, b.latitude, b.longitude) for a, b in legs)
        assert route.total_distance == pytest.approx(route_distance, rel=1e-9)
        recomputed += route_distance
    assert result.total_distance == pytest.approx(recomputed, rel=1e-9)


def test_runs_are_deterministic():
    vehicle_types = [_vehicle("VAN", 8, count=4), _vehicle("TRUCK", 15, count=8)]

    first = solve_cvrp(vehicle_types=vehicle_types, stops=_sample_stops())
    second = solve_cvrp(vehicle_types=vehicle_types, stops=_sample_stops())

    assert [r.stop_ids for r in first.routes] == [r.stop_ids for r in second.routes]
    assert [(r.vehicle.vehicle_id, r.vehicle.unit) for r in first.routes] == [
        (r.vehicle.vehicle_id, r.vehicle.unit) for r in second.routes
    ]
    assert first.total_distance == second.total_distance


def test_options_are_reported_in_metadata():
    options = SolverOptions(cursor_policy="per_assignment", capacity_check="both_routes")

    result = solve_cvrp(vehicle_types=[_vehicle("V", 10, count=2)], stops=_line_stops(5), options=options)

    assert result.metadata["cursor_policy"] == "per_assignment"
    assert result.metadata["capacity_check"] == "both_routes"
    assert result.metadata["depot_id"] == "D"
    assert result.metadata["vehicles_available"] == 2
    assert result.metadata["vehicles_used"] == 1
