from datetime import datetime, timezone

import pytest

from courierhub.delivery.model import Delivery, DeliveryPriority, DeliveryStatus

CREATED = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
ETA = datetime(2024, 5, 2, 12, 30, tzinfo=timezone.utc)


def _delivery(**overrides):
    fields = dict(
        order_id=10,
        customer_id=20,
        delivery_address="1 Main St",
        estimated_delivery_time=ETA,
        created_at=CREATED,
        updated_at=CREATED,
    )
    fields.update(overrides)
    return Delivery(**fields)


def test_defaults():
    delivery = _delivery()
    assert delivery.id == 0
    assert delivery.courier_id is None
    assert delivery.status is DeliveryStatus.PENDING
    assert delivery.priority is DeliveryPriority.NORMAL


def test_to_dict_omits_unset_optionals():
    data = _delivery().to_dict()
    assert "courier_id" not in data
    assert "delivered_at" not in data
    assert data["status"] == "pending"
    assert data["priority"] == "normal"
    assert data["order_id"] == 10
    assert data["delivery_address"] == "1 Main St"


def test_to_dict_includes_set_optionals():
    delivered = datetime(2024, 5, 2, 11, 0, tzinfo=timezone.utc)
    data = _delivery(courier_id=0, delivered_at=delivered).to_dict()
    assert data["courier_id"] == 0
    assert data["delivered_at"] == delivered.isoformat()


def test_to_dict_timestamps_are_iso():
    data = _delivery().to_dict()
    assert data["created_at"] == CREATED.isoformat()
    assert data["estimated_delivery_time"] == ETA.isoformat()


def test_known_strings_become_enums():
    delivery = _delivery(status="in_transit", priority="express")
    assert delivery.status is DeliveryStatus.IN_TRANSIT
    assert delivery.priority is DeliveryPriority.EXPRESS


def test_unknown_status_is_kept():
    delivery = _delivery(status="lost")
    assert delivery.status == "lost"
    assert delivery.to_dict()["status"] == "lost"


@pytest.mark.parametrize(
    "stored, member",
    [
        ("pending", DeliveryStatus.PENDING),
        ("assigned", DeliveryStatus.ASSIGNED),
        ("in_transit", DeliveryStatus.IN_TRANSIT),
        ("delivered", DeliveryStatus.DELIVERED),
        ("failed", DeliveryStatus.FAILED),
    ],
)
def test_status_values_match_stored_strings(stored, member):
    delivery = _delivery(status=stored)
    assert delivery.status is member
    assert delivery.to_dict()["status"] == stored