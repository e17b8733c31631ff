from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from courierhub.delivery.model import Delivery, DeliveryPriority, DeliveryStatus
from courierhub.delivery.repository import RepositoryError, SqlDeliveryRepository

SCHEMA = """
CREATE TABLE deliveries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    order_id INTEGER NOT NULL,
    customer_id INTEGER NOT NULL,
    courier_id INTEGER,
    status TEXT NOT NULL,
    priority TEXT NOT NULL,
    delivery_address TEXT NOT NULL,
    estimated_delivery_time TIMESTAMP NOT NULL,
    delivered_at TIMESTAMP,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

CREATED = datetime(2024, 1, 1, 9, 0)
ETA = datetime(2024, 1, 2, 18, 0)


def _engine(with_schema=True):
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    if with_schema:
        with engine.begin() as connection:
            connection.exec_driver_sql(SCHEMA)
    return engine


@pytest.fixture
def repo():
    engine = _engine()
    yield SqlDeliveryRepository(engine)
    engine.dispose()


def _delivery(**overrides):
    fields = dict(
        order_id=5,
        customer_id=6,
        delivery_address="2 Side St",
        estimated_delivery_time=ETA,
        created_at=CREATED,
        updated_at=CREATED,
    )
    fields.update(overrides)
    return Delivery(**fields)


def test_create_then_get_round_trip(repo):
    delivery = _delivery(priority=DeliveryPriority.EXPRESS)
    new_id = repo.create(delivery)
    assert delivery.id == new_id
    assert repo.get_by_id(new_id) == delivery


def test_create_assigns_distinct_ids(repo):
    first = repo.create(_delivery())
    second = repo.create(_delivery(order_id=7))
    assert first != second
    assert repo.get_by_id(second).order_id == 7


def test_get_missing_raises(repo):
    with pytest.raises(RepositoryError, match="^failed to get delivery by id"):
        repo.get_by_id(999)


def test_update_status(repo):
    new_id = repo.create(_delivery())
    repo.update_status(new_id, DeliveryStatus.IN_TRANSIT)
    fetched = repo.get_by_id(new_id)
    assert fetched.status is DeliveryStatus.IN_TRANSIT
    assert fetched.updated_at > CREATED


def test_update_status_accepts_any_string(repo):
    new_id = repo.create(_delivery())
    repo.update_status(new_id, "lost")
    assert repo.get_by_id(new_id).status == "lost"


def test_assign_courier(repo):
    new_id = repo.create(_delivery())
    repo.assign_courier(new_id, 42)
    fetched = repo.get_by_id(new_id)
    assert fetched.courier_id == 42
    assert fetched.status is DeliveryStatus.ASSIGNED


def test_mark_as_delivered(repo):
    new_id = repo.create(_delivery())
    delivered = datetime(2024, 1, 2, 17, 45)
    repo.mark_as_delivered(new_id, delivered)
    fetched = repo.get_by_id(new_id)
    assert fetched.status is DeliveryStatus.DELIVERED
    assert fetched.delivered_at == delivered


def test_update_missing_row_is_silent(repo):
    repo.update_status(12345, DeliveryStatus.FAILED)
    with pytest.raises(RepositoryError):
        repo.get_by_id(12345)


def test_errors_without_table():
    engine = _engine(with_schema=False)
    repo = SqlDeliveryRepository(engine)
    with pytest.raises(RepositoryError, match="^failed to create delivery"):
        repo.create(_delivery())
    with pytest.raises(RepositoryError, match="^failed to update status"):
        repo.update_status(1, DeliveryStatus.FAILED)
    with pytest.raises(RepositoryError, match="^failed to assign courier"):
        repo.assign_courier(1, 2)
    with pytest.raises(RepositoryError, match="^failed to mark as delivered"):
        repo.mark_as_delivered(1, ETA)
    engine.dispose()