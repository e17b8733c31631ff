"""Storage of orders in a SQL database."""

from __future__ import annotations

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from courierhub.order.model import Order

_orders = sa.Table(
    "orders",
    sa.MetaData(),
    sa.Column(
        "id", sa.BigInteger().with_variant(sa.Integer, "sqlite"), primary_key=True
    ),
    sa.Column("parcel_id", sa.BigInteger, nullable=False),
    sa.Column("delivery_address", sa.String, nullable=False),
    sa.Column("status", sa.String, nullable=False),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
)


class OrderNotFoundError(LookupError):
    """Raised when no order has the requested id."""


class OrderRepository:
    """Order storage on a SQLAlchemy engine; database errors propagate as raised."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create_order(self, order: Order) -> int:
        """Insert the order, set its id and return that id."""
        values = order.to_dict()
        del values["id"]
        values.update(created_at=order.created_at, updated_at=order.updated_at)
        with self._engine.begin() as connection:
            result = connection.execute(sa.insert(_orders).values(**values))
        order.id = result.inserted_primary_key[0]
        return order.id

    def get_order(self, order_id: int) -> Order:
        """Return the order with the given id."""
        statement = sa.select(_orders).where(_orders.c.id == order_id)
        with self._engine.connect() as connection:
            row = connection.execute(statement).mappings().first()
        if row is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return Order(**row)

    def update_order_status(self, order_id: int, status: str) -> None:
        """Set the status of an order and refresh its update time."""
        statement = (
            sa.update(_orders)
            .where(_orders.c.id == order_id)
            .values(status=status, updated_at=datetime.now(timezone.utc))
        )
        with self._engine.begin() as connection:
            connection.execute(statement)

    def delete_order(self, order_id: int) -> None:
        """Remove the order with the given id, if it exists."""
        with self._engine.begin() as connection:
            connection.execute(sa.delete(_orders).where(_orders.c.id == order_id))