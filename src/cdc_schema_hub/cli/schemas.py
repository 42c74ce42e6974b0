"""
CLI handlers for schema derivation and registry operations.

Usage:
    # Print derived key/value schemas for every table in a definitions file
    python -m cdc_schema_hub.cli show --tables-file config/tables.yml

    # Register schemas for one table against the configured registry
    python -m cdc_schema_hub.cli register --tables-file config/tables.yml --table shop.orders

    # Fetch the latest value schema registered for a topic
    python -m cdc_schema_hub.cli get --topic shop.orders --value
"""

from __future__ import annotations

import argparse
import json
from typing import List, Optional

from cdc_schema_hub.config import Settings, get_settings
from cdc_schema_hub.infrastructure.schema import (
    SchemaStructureError,
    TableMetadata,
    build_key_schema,
    build_value_schema,
    key_subject,
    value_subject,
)
from cdc_schema_hub.infrastructure.settings import (
    TableDefinitionsError,
    load_table_definitions,
)
from cdc_schema_hub.io.schema import SchemaRegistryError, SchemaRegistryGateway
from cdc_schema_hub.utils.logging import get_logger

logger = get_logger(__name__)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--registry-url",
        help="Schema registry base URL (default: CDC_SCHEMA_REGISTRY_URL)",
    )
    parser.add_argument(
        "--topic-prefix",
        help="Topic prefix (default: CDC_TOPIC_PREFIX)",
    )


def add_table_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tables-file",
        help="YAML table definitions (default: CDC_TABLES_FILE)",
    )
    parser.add_argument(
        "--table",
        action="append",
        dest="tables",
        metavar="KEYSPACE.TABLE",
        help="Restrict to this table; may be repeated",
    )


def _effective_settings(args: argparse.Namespace) -> Settings:
    settings = get_settings()
    overrides = {}
    if getattr(args, "registry_url", None):
        overrides["schema_registry_url"] = args.registry_url.rstrip("/")
    if getattr(args, "topic_prefix", None) is not None:
        overrides["topic_prefix"] = args.topic_prefix
    if getattr(args, "tables_file", None):
        overrides["tables_file"] = args.tables_file
    return settings.model_copy(update=overrides) if overrides else settings


def _select_tables(settings: Settings, selected: Optional[List[str]]) -> List[TableMetadata]:
    if not settings.tables_file:
        raise TableDefinitionsError("No table definitions file given (--tables-file)")
    tables = load_table_definitions(settings.tables_file)
    if not selected:
        return tables

    by_name = {t.qualified_name: t for t in tables}
    unknown = [name for name in selected if name not in by_name]
    if unknown:
        raise TableDefinitionsError(
            f"Tables {unknown} not found. Available: {sorted(by_name)}"
        )
    return [by_name[name] for name in selected]


def run_show(args: argparse.Namespace) -> int:
    settings = _effective_settings(args)
    try:
        tables = _select_tables(settings, args.tables)
        documents = [
            {
                "table": table.qualified_name,
                "key": build_key_schema(table, settings.topic_prefix).to_avro(),
                "value": build_value_schema(table, settings.topic_prefix).to_avro(),
            }
            for table in tables
        ]
    except (TableDefinitionsError, SchemaStructureError) as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(documents, indent=2, ensure_ascii=False))
    return 0


def run_register(args: argparse.Namespace) -> int:
    settings = _effective_settings(args)
    try:
        tables = _select_tables(settings, args.tables)
    except TableDefinitionsError as e:
        print(f"Error: {e}")
        return 1

    gateway = SchemaRegistryGateway.from_settings(settings)
    failures = 0
    for table in tables:
        topic = gateway.topic_name(table)
        try:
            gateway.register_schemas_for_table(table)
        except (SchemaRegistryError, SchemaStructureError) as e:
            failures += 1
            logger.error("cli.register_failed", table=table.qualified_name, error=str(e))
            print(f"FAILED {table.qualified_name}: {e}")
            continue
        key_id = gateway.cached_schema_id(key_subject(topic))
        value_id = gateway.cached_schema_id(value_subject(topic))
        print(f"{table.qualified_name}: {key_subject(topic)}={key_id} {value_subject(topic)}={value_id}")

    print(f"\nRegistered {len(tables) - failures}/{len(tables)} tables")
    return 1 if failures else 0


def run_get(args: argparse.Namespace) -> int:
    settings = _effective_settings(args)
    gateway = SchemaRegistryGateway.from_settings(settings)
    try:
        if args.key:
            schema = gateway.get_key_schema(args.topic)
        else:
            schema = gateway.get_value_schema(args.topic)
    except SchemaRegistryError as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(schema.to_avro(), indent=2, ensure_ascii=False))
    return 0
