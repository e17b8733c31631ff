"""gRPC-facing handler for order requests.

Requests and responses are JSON-style dicts; timestamps travel as
RFC 3339 strings in UTC.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from courierhub.order.model import Order
from courierhub.order.service import OrderService


def _timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _int_field(request: Mapping[str, Any], key: str) -> int:
    return int(request.get(key) or 0)


def _str_field(request: Mapping[str, Any], key: str) -> str:
    return str(request.get(key) or "")


class OrderHandler:
    """Turns wire requests into order service calls."""

    def __init__(self, service: OrderService) -> None:
        self._service = service

    def create_order(self, request: Mapping[str, Any]) -> dict[str, Any]:
        """Create an order from the request and return ``{"id": new_id}``."""
        now = datetime.now(timezone.utc)
        order = Order(
            parcel_id=_int_field(request, "parcel_id"),
            delivery_address=_str_field(request, "delivery_address"),
            status=_str_field(request, "status"),
            created_at=now,
            updated_at=now,
        )
        self._service.create_order(order)
        return {"id": order.id}

    def get_order(self, request: Mapping[str, Any]) -> dict[str, Any]:
        """Return the requested order as a wire message."""
        order = self._service.get_order(_int_field(request, "id"))
        return {
            "id": order.id,
            "parcel_id": order.parcel_id,
            "delivery_address": order.delivery_address,
            "status": order.status,
            "created_at": _timestamp(order.created_at),
            "updated_at": _timestamp(order.updated_at),
        }

    def update_order_status(self, request: Mapping[str, Any]) -> dict[str, Any]:
        """Set the status named in the request and echo the id."""
        order_id = _int_field(request, "id")
        self._service.update_order_status(order_id, _str_field(request, "status"))
        return {"id": order_id}

    def delete_order(self, request: Mapping[str, Any]) -> dict[str, Any]:
        """Delete the requested order and echo the id."""
        order_id = _int_field(request, "id")
        self._service.delete_order(order_id)
        return {"id": order_id}