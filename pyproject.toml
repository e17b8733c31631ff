[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "courierhub"
version = "0.1.0"
description = "Order and delivery gRPC services backed by PostgreSQL"
requires-python = ">=3.10"
keywords = ["grpc", "delivery", "orders", "postgresql", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "sqlalchemy>=2.0",
    "grpcio>=1.60",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = ["pytest>=7.0"]

[project.scripts]
courierhub-delivery = "courierhub.delivery.server:main"
courierhub-order = "courierhub.order.server:main"

[tool.hatch.build.targets.wheel]
packages = ["courierhub"]

[tool.pytest.ini_options]
addopts = "-ra"
