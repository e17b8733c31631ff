from datetime import datetime

import pytest

from courierhub.delivery.model import Delivery, DeliveryStatus
from courierhub.delivery.repository import RepositoryError
from courierhub.delivery.service import DeliveryService

WHEN = datetime(2024, 3, 1, 8, 0)


class FakeRepository:
    def __init__(self):
        self.calls = []
        self.stored = Delivery(
            id=3,
            order_id=1,
            customer_id=2,
            delivery_address="3 Elm St",
            estimated_delivery_time=WHEN,
            created_at=WHEN,
            updated_at=WHEN,
        )

    def create(self, delivery):
        self.calls.append(("create", delivery))
        return 1

    def get_by_id(self, delivery_id):
        self.calls.append(("get_by_id", delivery_id))
        if delivery_id != self.stored.id:
            raise RepositoryError("failed to get delivery by id: no rows in result set")
        return self.stored

    def update_status(self, delivery_id, status):
        self.calls.append(("update_status", delivery_id, status))

    def assign_courier(self, delivery_id, courier_id):
        self.calls.append(("assign_courier", delivery_id, courier_id))

    def mark_as_delivered(self, delivery_id, delivered_at):
        self.calls.append(("mark_as_delivered", delivery_id, delivered_at))


@pytest.fixture
def repo():
    return FakeRepository()


def test_get_by_id_returns_repository_result(repo):
    service = DeliveryService(repo)
    assert service.get_by_id(3) is repo.stored
    assert repo.calls == [("get_by_id", 3)]


def test_get_by_id_propagates_errors(repo):
    service = DeliveryService(repo)
    with pytest.raises(RepositoryError, match="no rows"):
        service.get_by_id(4)


def test_update_status_delegates(repo):
    DeliveryService(repo).update_status(3, DeliveryStatus.FAILED)
    assert repo.calls == [("update_status", 3, DeliveryStatus.FAILED)]


def test_assign_courier_delegates(repo):
    DeliveryService(repo).assign_courier(3, 9)
    assert repo.calls == [("assign_courier", 3, 9)]


def test_mark_as_delivered_delegates(repo):
    DeliveryService(repo).mark_as_delivered(3, WHEN)
    assert repo.calls == [("mark_as_delivered", 3, WHEN)]