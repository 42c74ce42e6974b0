"""
Unit tests for key/value/data schema derivation.
"""

from __future__ import annotations

import pytest

from cdc_schema_hub.infrastructure.schema import (
    ColumnDef,
    Field,
    PrimitiveSchema,
    RecordSchema,
    SchemaStructureError,
    TableMetadata,
    UnionSchema,
    build_data_schema,
    build_key_schema,
    build_value_schema,
    nullable_wrapper,
    schema_from_json,
)

INT = PrimitiveSchema("int")
TIMESTAMP = PrimitiveSchema("long", "timestamp-millis")


def _table(partition, clustering=(), columns=()) -> TableMetadata:
    return TableMetadata(
        keyspace="ks",
        name="t",
        partition_key_columns=tuple(partition),
        clustering_key_columns=tuple(clustering),
        columns=tuple(columns),
    )


class TestKeySchema:
    def test_partition_keys_in_order_and_required(self) -> None:
        p1 = ColumnDef.of("p1", "int")
        p2 = ColumnDef.of("p2", "text")
        key = build_key_schema(_table([p1, p2], columns=[p1, p2]))

        assert key.name == "ks.t.Key"
        assert key.field_names == ("p1", "p2")
        assert key.fields[0] == Field("p1", INT)
        assert key.fields[1] == Field("p2", PrimitiveSchema("string"))
        for field in key.fields:
            assert not field.has_default
            assert not isinstance(field.type, UnionSchema)

    def test_clustering_and_regular_columns_excluded(self, orders_table: TableMetadata) -> None:
        assert build_key_schema(orders_table).field_names == ("order_id",)

    def test_no_partition_key_yields_empty_record(self) -> None:
        key = build_key_schema(_table([], columns=[ColumnDef.of("a", "int")]))
        assert key == RecordSchema("ks.t.Key", ())

    def test_topic_prefix_is_applied(self, orders_table: TableMetadata) -> None:
        key = build_key_schema(orders_table, topic_prefix="cdc")
        assert key.name == "cdc.shop.orders.Key"

    def test_duplicate_partition_key_fails(self) -> None:
        p1 = ColumnDef.of("p1", "int")
        with pytest.raises(SchemaStructureError) as exc_info:
            build_key_schema(_table([p1, p1]))
        assert "p1" in str(exc_info.value)


class TestValueSchema:
    def test_envelope_fields(self, orders_table: TableMetadata) -> None:
        value = build_value_schema(orders_table)

        assert value.name == "shop.orders.Value"
        assert value.field_names == ("operation", "timestamp", "data")
        assert value.field("operation").type == PrimitiveSchema("string")
        assert value.field("timestamp").type == PrimitiveSchema("long")
        assert value.field("data").type == build_data_schema(orders_table)
        for field in value.fields:
            assert not field.has_default

    def test_derivation_is_deterministic(self, orders_table: TableMetadata) -> None:
        assert build_value_schema(orders_table) == build_value_schema(orders_table)
        assert build_value_schema(orders_table).to_json() == build_value_schema(orders_table).to_json()


class TestDataSchema:
    def test_orders_scenario(self, orders_table: TableMetadata) -> None:
        data = build_data_schema(orders_table)

        assert data.name == "shop.orders.Data"
        assert data.field_names == (
            "order_id",
            "created_at",
            "order_id",
            "created_at",
            "status",
        )
        assert data.fields[4] == Field(
            "status",
            UnionSchema(
                (
                    PrimitiveSchema("null"),
                    RecordSchema("status", (Field("value", PrimitiveSchema("string")),)),
                )
            ),
            default=None,
        )

    def test_field_count_is_sum_of_groups(self) -> None:
        p = [ColumnDef.of("p1", "int"), ColumnDef.of("p2", "int")]
        c = [ColumnDef.of("c1", "date")]
        cols = p + c + [ColumnDef.of("x", "blob"), ColumnDef.of("y", "list<int>")]
        data = build_data_schema(_table(p, c, cols))
        assert len(data.fields) == len(p) + len(c) + len(cols)

    def test_every_field_is_nullable_wrapper(self, orders_table: TableMetadata) -> None:
        for field in build_data_schema(orders_table).fields:
            assert field.default is None
            assert isinstance(field.type, UnionSchema)
            assert len(field.type.types) == 2
            assert field.type.types[0] == PrimitiveSchema("null")
            wrapper = field.type.types[1]
            assert isinstance(wrapper, RecordSchema)
            assert wrapper.name == field.name
            assert wrapper.field_names == ("value",)

    def test_wrapper_carries_mapped_type(self) -> None:
        created_at = ColumnDef.of("created_at", "timestamp")
        union = nullable_wrapper(created_at)
        assert union.types[1].field("value").type == TIMESTAMP
        assert not union.types[1].field("value").has_default

    def test_repeated_key_columns_render_as_references(self, orders_table: TableMetadata) -> None:
        rendered = build_data_schema(orders_table).to_avro()
        assert rendered["fields"][0]["type"][1]["name"] == "order_id"
        assert rendered["fields"][2]["type"] == ["null", "order_id"]
        assert rendered["fields"][2]["default"] is None

    def test_value_schema_survives_json_round_trip(self, orders_table: TableMetadata) -> None:
        value = build_value_schema(orders_table)
        assert schema_from_json(value.to_json()) == value

    def test_duplicate_column_within_group_fails(self) -> None:
        a = ColumnDef.of("a", "int")
        with pytest.raises(SchemaStructureError) as exc_info:
            build_data_schema(_table([a], columns=[a, ColumnDef.of("a", "text")]))
        assert "columns" in str(exc_info.value)

    def test_duplicate_clustering_column_fails(self) -> None:
        p = ColumnDef.of("p", "int")
        c = ColumnDef.of("c", "int")
        with pytest.raises(SchemaStructureError):
            build_data_schema(_table([p], [c, c], [p, c]))

    @pytest.mark.parametrize("column_name", ["Key", "Value", "Data", "ks.t.Value"])
    def test_column_clashing_with_record_name_fails(self, column_name: str) -> None:
        p = ColumnDef.of("p", "int")
        clash = ColumnDef.of(column_name, "text")
        with pytest.raises(SchemaStructureError, match="clashes"):
            build_data_schema(_table([p], columns=[p, clash]))

    def test_record_name_clash_depends_on_topic_prefix(self) -> None:
        p = ColumnDef.of("p", "int")
        table = _table([p], columns=[p, ColumnDef.of("ks.t.Data", "text")])
        data = build_data_schema(table, "cdc")
        assert data.name == "cdc.ks.t.Data"

    def test_column_named_after_primitive_fails(self) -> None:
        p = ColumnDef.of("p", "int")
        with pytest.raises(SchemaStructureError):
            build_data_schema(_table([p], columns=[p, ColumnDef.of("string", "text")]))
