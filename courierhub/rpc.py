"""gRPC plumbing shared by the order and delivery servers; messages travel as JSON."""

from __future__ import annotations

import json
import logging
import signal
import threading
from collections.abc import Callable, Mapping
from datetime import date
from enum import Enum
from typing import Any

import grpc

logger = logging.getLogger(__name__)

Method = Callable[[dict], Any]


def _encode_value(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"cannot encode {type(value).__name__}")


def _serialize(message: Any) -> bytes:
    return json.dumps(message, default=_encode_value).encode("utf-8")


def _deserialize(data: bytes) -> dict:
    return json.loads(data) if data else {}


def _behavior(method: Method):
    def behavior(request: dict, context: grpc.ServicerContext) -> Any:
        try:
            response = method(request)
        except Exception as exc:
            context.abort(grpc.StatusCode.UNKNOWN, str(exc))
        return {} if response is None else response

    return behavior


def make_generic_handler(
    service_name: str, methods: Mapping[str, Method]
) -> grpc.GenericRpcHandler:
    """Build a handler that routes ``/<service_name>/<method>`` calls."""
    handlers = {
        name: grpc.unary_unary_rpc_method_handler(
            _behavior(method),
            request_deserializer=_deserialize,
            response_serializer=_serialize,
        )
        for name, method in methods.items()
    }
    return grpc.method_handlers_generic_handler(service_name, handlers)


def run_until_signal(server: grpc.Server, address: str) -> int:
    """Serve on ``address`` until SIGINT or SIGTERM, stop gracefully, return the port."""
    try:
        port = server.add_insecure_port(address)
    except RuntimeError as exc:
        raise OSError(f"cannot listen on {address}: {exc}") from exc
    if not port:
        raise OSError(f"cannot listen on {address}")

    stop = threading.Event()
    previous = {
        sig: signal.signal(sig, lambda signum, frame: stop.set())
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        server.start()
        while not stop.wait(0.2):
            pass
        logger.info("shutdown signal received, stopping server")
        server.stop(30.0).wait()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return port