"""Business operations on deliveries."""

from __future__ import annotations

from datetime import datetime

from courierhub.delivery.model import Delivery, DeliveryStatus
from courierhub.delivery.repository import DeliveryRepository


class DeliveryService:
    """Delivery operations on top of a repository."""

    def __init__(self, repository: DeliveryRepository) -> None:
        self._repository = repository

    def get_by_id(self, delivery_id: int) -> Delivery:
        """Return the delivery with the given id."""
        return self._repository.get_by_id(int(delivery_id))

    def update_status(self, delivery_id: int, status: DeliveryStatus | str) -> None:
        """Change a delivery's status."""
        self._repository.update_status(int(delivery_id), status)

    def assign_courier(self, delivery_id: int, courier_id: int) -> None:
        """Assign a courier to a delivery."""
        self._repository.assign_courier(int(delivery_id), int(courier_id))

    def mark_as_delivered(self, delivery_id: int, delivered_at: datetime) -> None:
        """Record that a delivery arrived."""
        self._repository.mark_as_delivered(int(delivery_id), delivered_at)