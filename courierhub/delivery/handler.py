"""gRPC-facing handler for delivery requests; timestamps are RFC 3339 in UTC."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from courierhub.delivery.model import Delivery
from courierhub.delivery.service import DeliveryService

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _timestamp(value: datetime) -> str:
    return _utc(value).isoformat().replace("+00:00", "Z")


def _parse_timestamp(value: Any) -> datetime:
    """Read a timestamp field; a missing one means the Unix epoch."""
    if value is None or value == "":
        return _EPOCH
    if isinstance(value, datetime):
        return _utc(value)
    raw = str(value)
    if raw[-1:] in ("Z", "z"):
        raw = raw[:-1] + "+00:00"
    try:
        return _utc(datetime.fromisoformat(raw))
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {value!r}") from exc


def _int_field(request: Mapping[str, Any], key: str) -> int:
    return int(request.get(key) or 0)


def delivery_to_message(delivery: Delivery) -> dict[str, Any]:
    """Convert a delivery to its wire message; no courier reads as 0."""
    message = {
        "id": delivery.id,
        "order_id": delivery.order_id,
        "customer_id": delivery.customer_id,
        "courier_id": delivery.courier_id or 0,
        "status": getattr(delivery.status, "value", delivery.status),
        "priority": getattr(delivery.priority, "value", delivery.priority),
        "delivery_address": delivery.delivery_address,
        "estimated_delivery_time": _timestamp(delivery.estimated_delivery_time),
        "created_at": _timestamp(delivery.created_at),
        "updated_at": _timestamp(delivery.updated_at),
    }
    if delivery.delivered_at is not None:
        message["delivered_at"] = _timestamp(delivery.delivered_at)
    return message


class DeliveryHandler:
    """Turns wire requests into delivery service calls."""

    def __init__(self, service: DeliveryService) -> None:
        self._service = service

    def get_delivery(self, request: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``{"delivery": message}`` for the requested id."""
        delivery = self._service.get_by_id(_int_field(request, "id"))
        return {"delivery": delivery_to_message(delivery)}

    def update_status(self, request: Mapping[str, Any]) -> dict[str, Any]:
        self._service.update_status(
            _int_field(request, "id"), str(request.get("status") or "")
        )
        return {}

    def assign_courier(self, request: Mapping[str, Any]) -> dict[str, Any]:
        self._service.assign_courier(
            _int_field(request, "id"), _int_field(request, "courier_id")
        )
        return {}

    def mark_as_delivered(self, request: Mapping[str, Any]) -> dict[str, Any]:
        self._service.mark_as_delivered(
            _int_field(request, "id"), _parse_timestamp(request.get("delivered_at"))
        )
        return {}