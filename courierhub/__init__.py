"""Order and delivery gRPC servers storing their data in PostgreSQL."""

__version__ = "0.1.0"