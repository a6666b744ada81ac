"""Pytest configuration and fixtures for relalg tests."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from relalg import Database, Table
from relalg.infrastructure.config import Config, EngineConfig, ObservabilityConfig
from relalg.infrastructure.metrics import MetricsRegistry
from sample_rows import Author, Book, Sale


@pytest.fixture
def test_config() -> Config:
    """Provide a configuration independent of the environment."""
    return Config(
        engine=EngineConfig(strict_row_types=True, default_group_key="key"),
        observability=ObservabilityConfig(log_level="DEBUG", log_format="console"),
    )


@pytest.fixture
def collector_registry() -> CollectorRegistry:
    """Provide a private Prometheus registry."""
    return CollectorRegistry(auto_describe=True)


@pytest.fixture
def metrics_registry(collector_registry: CollectorRegistry) -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    return MetricsRegistry(registry=collector_registry)


@pytest.fixture
def db(test_config: Config, metrics_registry: MetricsRegistry) -> Database:
    """Provide an empty database with isolated metrics."""
    return Database(config=test_config, metrics=metrics_registry)


@pytest.fixture
def books() -> Table[Book]:
    """books = [{1, "1984", 1}, {2, "Mockingbird", 2}]"""
    table = Table("books", Book)
    table.insert_many([Book(1, "1984", 1), Book(2, "Mockingbird", 2)])
    return table


@pytest.fixture
def authors() -> Table[Author]:
    """authors = [{1, "Orwell"}, {2, "Lee"}]"""
    table = Table("authors", Author)
    table.insert_many([Author(1, "Orwell"), Author(2, "Lee")])
    return table


@pytest.fixture
def sales() -> Table[Sale]:
    """Sales with repeated keys and one NULL copies value."""
    table = Table("sales", Sale)
    table.insert_many(
        [
            Sale(1, "north", 10),
            Sale(2, "south", 5),
            Sale(1, "south", 7),
            Sale(3, "north", None),
            Sale(2, "north", 3),
        ]
    )
    return table


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "property: Property-style tests over many inputs")
