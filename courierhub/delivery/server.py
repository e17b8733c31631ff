"""Entry point of the delivery gRPC server."""

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
from courierhub.delivery.handler import DeliveryHandler
from courierhub.delivery.repository import SqlDeliveryRepository
from courierhub.delivery.service import DeliveryService
from courierhub.rpc import make_generic_handler, run_until_signal

logger = logging.getLogger(__name__)

SERVICE_NAME = "delivery.v1.DeliveryService"
ADDRESS = "[::]:50052"


def build_server(engine: Engine) -> grpc.Server:
    """Wire repository, service and handler into an unstarted gRPC server."""
    handler = DeliveryHandler(DeliveryService(SqlDeliveryRepository(engine)))
    methods = {
        "GetDelivery": handler.get_delivery,
        "UpdateStatus": handler.update_status,
        "AssignCourier": handler.assign_courier,
        "MarkAsDelivered": handler.mark_as_delivered,
    }
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=10))
    server.add_generic_rpc_handlers((make_generic_handler(SERVICE_NAME, methods),))
    return server


def main(argv: list[str] | None = None) -> int:
    """Run the delivery server until interrupted; return the exit status."""
    parser = argparse.ArgumentParser(prog="delivery-server")
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
        logger.info("delivery-service gRPC listening on %s", args.listen)
        run_until_signal(build_server(engine), args.listen)
    except OSError as exc:
        logger.error("cannot listen: %s", exc)
        return 1
    finally:
        close_postgres(engine)
    return 0