"""Pytest configuration and shared fixtures.

A `.env.test` file at the project root, if present, is loaded FIRST with
override=True so local registry settings never leak in from the shell.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

_TEST_ENV_FILE = Path(__file__).parent.parent / ".env.test"
if _TEST_ENV_FILE.exists():
    load_dotenv(_TEST_ENV_FILE, override=True)

import os

import pytest

os.environ.setdefault("LOG_LEVEL", "INFO")

from cdc_schema_hub.config.settings import get_settings
from cdc_schema_hub.infrastructure.schema import ColumnDef, TableMetadata
from cdc_schema_hub.io.connectors.schema_registry import InMemorySchemaRegistryClient
from cdc_schema_hub.io.schema import SchemaRegistryGateway


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def orders_table() -> TableMetadata:
    """Table `shop.orders`: partition key order_id, clustering key created_at."""
    order_id = ColumnDef.of("order_id", "int")
    created_at = ColumnDef.of("created_at", "timestamp")
    status = ColumnDef.of("status", "text")
    return TableMetadata(
        keyspace="shop",
        name="orders",
        partition_key_columns=(order_id,),
        clustering_key_columns=(created_at,),
        columns=(order_id, created_at, status),
    )


@pytest.fixture
def registry() -> InMemorySchemaRegistryClient:
    return InMemorySchemaRegistryClient()


@pytest.fixture
def gateway(registry: InMemorySchemaRegistryClient) -> SchemaRegistryGateway:
    return SchemaRegistryGateway(registry)
