"""
Infrastructure Settings and Configuration

Components:
- table_definitions: Pydantic models and loader for table definition YAML files
"""

from cdc_schema_hub.infrastructure.settings.table_definitions import (
    ColumnConfig,
    TableConfig,
    TableDefinitions,
    TableDefinitionsError,
    load_table_definitions,
)

__all__ = [
    "ColumnConfig",
    "TableConfig",
    "TableDefinitions",
    "TableDefinitionsError",
    "load_table_definitions",
]
