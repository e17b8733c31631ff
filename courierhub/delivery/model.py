"""Delivery records and their statuses."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class DeliveryStatus(str, Enum):
    """Stage of a delivery."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    FAILED = "failed"


class DeliveryPriority(str, Enum):
    """How urgently a delivery is to be made."""

    NORMAL = "normal"
    EXPRESS = "express"


def _coerce(enum_type: type[Enum], value: Any) -> Any:
    try:
        return enum_type(value)
    except ValueError:
        return value


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(kw_only=True)
class Delivery:
    """A delivery of one order; unknown status or priority strings are kept as given."""

    id: int = 0
    order_id: int
    customer_id: int
    courier_id: int | None = None
    status: DeliveryStatus | str = DeliveryStatus.PENDING
    priority: DeliveryPriority | str = DeliveryPriority.NORMAL
    delivery_address: str
    estimated_delivery_time: datetime
    delivered_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        self.status = _coerce(DeliveryStatus, self.status)
        self.priority = _coerce(DeliveryPriority, self.priority)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict; courier_id and delivered_at only when set."""
        return {k: _plain(v) for k, v in asdict(self).items() if v is not None}