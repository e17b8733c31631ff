"""Entry point of the order gRPC server."""

from __future__ import annotations

import argparse
import logging
from concurrent import futures
from pathlib import Path

import grpc
from dotenv import load_dotenv
from sqlalchemy.engine import Engine

from courierhub.config import Config
from courierhub.db import DatabaseError, close_postgres, connect_postgres
from courierhub.order.handler import OrderHandler
from courierhub.order.repository import OrderRepository
from courierhub.order.service import OrderService
from courierhub.rpc import make_generic_handler, run_until_signal

logger = logging.getLogger(__name__)

SERVICE_NAME = "order.v1.OrderService"
ADDRESS = "[::]:50051"


def build_server(engine: Engine) -> grpc.Server:
    """Wire repository, service and handler into an unstarted gRPC server."""
    handler = OrderHandler(OrderService(OrderRepository(engine)))
    methods = {
        "CreateOrder": handler.create_order,
        "GetOrder": handler.get_order,
        "UpdateOrderStatus": handler.update_order_status,
        "DeleteOrder": handler.delete_order,
    }
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=10))
    server.add_generic_rpc_handlers((make_generic_handler(SERVICE_NAME, methods),))
    return server


def main(argv: list[str] | None = None) -> int:
    """Run the order server until interrupted; return the exit status."""
    parser = argparse.ArgumentParser(prog="order-server")
    parser.add_argument("--env-file", default=".env")
    parser.add_argument("--listen", default=ADDRESS)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    env_file = Path(args.env_file)
    if not env_file.is_file():
        logger.error("cannot load %s: file not found", env_file)
        return 1
    load_dotenv(env_file)
    try:
        engine = connect_postgres(Config.from_env())
    except DatabaseError as exc:
        logger.error("database connection failed: %s", exc)
        return 1
    try:
        logger.info("order-service gRPC listening on %s", args.listen)
        run_until_signal(build_server(engine), args.listen)
    except OSError as exc:
        logger.error("cannot listen: %s", exc)
        return 1
    finally:
        close_postgres(engine)
    return 0