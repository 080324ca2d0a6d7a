# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for record and variant declaration collection."""

import pytest

from witgen.generator.declarations import CollisionPolicy, DeclarationCollisionError, collect_declarations
from witgen.generator.naming import NamingError
from witgen.source.parser import parse

# ###############
# Records
# ###############


class TestRecords:
    def test_named_struct_becomes_record(self) -> None:
        result = collect_declarations(parse("struct LineItem { quantity: u32, unit_price: f64 }"))
        assert result == {
            "line-item": "    record line-item {\n        quantity: u32,\n        unit-price: f64\n    }",
        }

    def test_field_types_are_mapped(self) -> None:
        result = collect_declarations(parse("struct Order { items: Vec<LineItem>, note: Option<String> }"))
        assert "items: list<line-item>" in result["order"]
        assert "note: option<string>" in result["order"]

    @pytest.mark.parametrize("source", ["struct Empty {}", "struct Id(u64);", "struct Marker;"])
    def test_structs_without_named_fields_are_omitted(self, source: str) -> None:
        assert collect_declarations(parse(source)) == {}

    def test_invalid_field_name_raises(self) -> None:
        with pytest.raises(NamingError, match="Field name 'line2'"):
            collect_declarations(parse("struct Order { line2: u32 }"))

    def test_invalid_struct_name_raises_even_without_fields(self) -> None:
        with pytest.raises(NamingError, match="Struct name 'Stream'"):
            collect_declarations(parse("struct Stream;"))


# ###############
# Variants
# ###############


class TestVariants:
    def test_enum_becomes_variant(self) -> None:
        result = collect_declarations(parse("enum OrderStatus { Pending, Failed(String), Shipped }"))
        assert result == {
            "order-status": (
                "    variant order-status {\n"
                "        pending,\n"
                "        failed(string),\n"
                "        shipped\n"
                "    }"
            ),
        }

    def test_empty_enum_is_kept(self) -> None:
        result = collect_declarations(parse("enum Never {}"))
        assert result == {"never": "    variant never {\n\n    }"}

    def test_multi_field_and_named_cases_render_bare(self) -> None:
        result = collect_declarations(parse("enum Shape { Point(i32, i32), Circle { radius: f64 } }"))
        assert result["shape"] == "    variant shape {\n        point,\n        circle\n    }"

    def test_payload_referencing_custom_type(self) -> None:
        result = collect_declarations(parse("enum Event { Placed(OrderInfo) }"))
        assert "placed(order-info)" in result["event"]

    def test_invalid_case_name_raises(self) -> None:
        with pytest.raises(NamingError, match="Enum variant name 'V2'"):
            collect_declarations(parse("enum Version { V2 }"))


# ###############
# Collisions and Ordering
# ###############


class TestCollisions:
    _SOURCE = "struct line_item { a: u32 } struct LineItem { b: u32 }"

    def test_later_declaration_overwrites_by_default(self) -> None:
        result = collect_declarations(parse(self._SOURCE))
        assert list(result) == ["line-item"]
        assert "b: u32" in result["line-item"]

    def test_reject_policy_raises(self) -> None:
        with pytest.raises(DeclarationCollisionError) as exc_info:
            collect_declarations(parse(self._SOURCE), CollisionPolicy.REJECT)
        assert exc_info.value.wit_name == "line-item"
        assert exc_info.value.first == "line_item"
        assert exc_info.value.second == "LineItem"

    def test_reject_policy_allows_distinct_names(self) -> None:
        result = collect_declarations(parse("struct A { a: u32 } enum B { X }"), CollisionPolicy.REJECT)
        assert list(result) == ["a", "b"]

    def test_impl_blocks_are_ignored(self) -> None:
        assert collect_declarations(parse("impl Order { fn f(&self) {} }")) == {}
