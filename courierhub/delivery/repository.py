"""Storage of deliveries in a SQL database."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from courierhub.delivery.model import Delivery, DeliveryStatus

_metadata = MetaData()

_deliveries = Table(
    "deliveries",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, nullable=False),
    Column("customer_id", Integer, nullable=False),
    Column("courier_id", Integer, nullable=True),
    Column("status", String, nullable=False),
    Column("priority", String, nullable=False),
    Column("delivery_address", String, nullable=False),
    Column("estimated_delivery_time", DateTime(timezone=True), nullable=False),
    Column("delivered_at", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


class RepositoryError(Exception):
    """Raised when a delivery cannot be stored or read."""


class DeliveryRepository(Protocol):
    """Operations the delivery service needs from storage."""

    def create(self, delivery: Delivery) -> int: ...

    def get_by_id(self, delivery_id: int) -> Delivery: ...

    def update_status(self, delivery_id: int, status: DeliveryStatus | str) -> None: ...

    def assign_courier(self, delivery_id: int, courier_id: int) -> None: ...

    def mark_as_delivered(self, delivery_id: int, delivered_at: datetime) -> None: ...


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SqlDeliveryRepository:
    """Delivery storage backed by a SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _execute(self, statement, action: str):
        try:
            with self._engine.begin() as connection:
                return connection.execute(statement)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"failed to {action}: {exc}") from exc

    def create(self, delivery: Delivery) -> int:
        """Insert the delivery, set its id and return that id."""
        statement = insert(_deliveries).values(
            order_id=delivery.order_id,
            customer_id=delivery.customer_id,
            courier_id=delivery.courier_id,
            status=_text(delivery.status),
            priority=_text(delivery.priority),
            delivery_address=delivery.delivery_address,
            estimated_delivery_time=delivery.estimated_delivery_time,
            delivered_at=delivery.delivered_at,
            created_at=delivery.created_at,
            updated_at=delivery.updated_at,
        )
        result = self._execute(statement, "create delivery")
        delivery.id = result.inserted_primary_key[0]
        return delivery.id

    def get_by_id(self, delivery_id: int) -> Delivery:
        """Return the delivery with the given id."""
        statement = select(_deliveries).where(_deliveries.c.id == delivery_id)
        try:
            with self._engine.connect() as connection:
                row = connection.execute(statement).mappings().first()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"failed to get delivery by id: {exc}") from exc
        if row is None:
            raise RepositoryError("failed to get delivery by id: no rows in result set")
        return Delivery(**row)

    def update_status(self, delivery_id: int, status: DeliveryStatus | str) -> None:
        """Set the status of a delivery."""
        statement = (
            update(_deliveries)
            .where(_deliveries.c.id == delivery_id)
            .values(status=_text(status), updated_at=_now())
        )
        self._execute(statement, "update status")

    def assign_courier(self, delivery_id: int, courier_id: int) -> None:
        """Give the delivery to a courier and mark it assigned."""
        statement = (
            update(_deliveries)
            .where(_deliveries.c.id == delivery_id)
            .values(
                courier_id=courier_id,
                status=DeliveryStatus.ASSIGNED.value,
                updated_at=_now(),
            )
        )
        self._execute(statement, "assign courier")

    def mark_as_delivered(self, delivery_id: int, delivered_at: datetime) -> None:
        """Mark the delivery delivered at the given time."""
        statement = (
            update(_deliveries)
            .where(_deliveries.c.id == delivery_id)
            .values(
                status=DeliveryStatus.DELIVERED.value,
                delivered_at=delivered_at,
                updated_at=_now(),
            )
        )
        self._execute(statement, "mark as delivered")