from fleetroute.models.domain import VehicleType
from fleetroute.services.routing.fleet import allocate_fleet


def test_allocate_fleet_expands_counts_in_input_order():
    fleet = allocate_fleet(
        [
            VehicleType(vehicle_id="V1", name="Van", capacity=10, count=2),
            VehicleType(vehicle_id="V2", name="Truck", capacity=30, count=1),
        ]
    )

    assert [(v.vehicle_id, v.unit) for v in fleet] == [("V1", 0), ("V1", 1), ("V2", 0)]
    assert [v.index for v in fleet] == [0, 1, 2]
    assert all(v.remaining_capacity == v.capacity for v in fleet)


def test_allocated_instances_are_independent():
    fleet = allocate_fleet([VehicleType(vehicle_id="V1", name="Van", capacity=10, count=2)])

    fleet[0].remaining_capacity -= 4

    assert fleet[0].remaining_capacity == 6
    assert fleet[1].remaining_capacity == 10


def test_allocate_fleet_empty():
    assert allocate_fleet([]) == []
