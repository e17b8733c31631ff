"""Business operations on orders."""

from __future__ import annotations

from courierhub.order.model import Order
from courierhub.order.repository import OrderRepository


class OrderService:
    """Order operations on top of a repository."""

    def __init__(self, repository: OrderRepository) -> None:
        self._repository = repository

    def create_order(self, order: Order) -> int:
        """Store a new order, set its id and return that id."""
        return self._repository.create_order(order)

    def get_order(self, order_id: int) -> Order:
        """Return the order with the given id."""
        return self._repository.get_order(int(order_id))

    def update_order_status(self, order_id: int, status: str) -> None:
        """Change an order's status."""
        self._repository.update_order_status(int(order_id), status)

    def delete_order(self, order_id: int) -> None:
        """Remove an order."""
        self._repository.delete_order(int(order_id))