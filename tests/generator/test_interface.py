# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for interface generation from annotated impl blocks."""

import pytest

from witgen.generator.declarations import collect_declarations
from witgen.generator.interface import (
    build_interface,
    export_markers,
    generate_interface,
    impl_type_name,
    interface_name_for,
    render_function,
    resolve_type_closure,
)
from witgen.generator.naming import NamingError
from witgen.model.syntax import ImplItem, PathType, ReferenceType, SourceFile
from witgen.model.wit import ExportedFunction, ExportMarker, WitParam
from witgen.source.parser import parse

# ###############
# Test Helpers
# ###############

_ORDER_SOURCE = """
use hyperware_process_lib::hyperprocess;

pub struct LineItem {
    quantity: u32,
}

#[hyperprocess(wit_world = "orders-dot-os-v0")]
impl OrderState {
    #[init]
    async fn initialize(&mut self) {}

    #[remote]
    fn order_total(&self, item: LineItem) -> bool {
        item.quantity > 0
    }

    fn helper(&self) -> u32 { 1 }
}
"""


def _first_impl(source: SourceFile) -> ImplItem:
    return source.impls[0]


def _generate(text: str) -> str:
    source = parse(text)
    impl = _first_impl(source)
    name = impl_type_name(impl)
    assert name is not None
    return generate_interface(impl, name, source)


# ###############
# End-to-end Interface
# ###############


class TestGenerateInterface:
    def test_order_interface(self) -> None:
        assert _generate(_ORDER_SOURCE) == (
            "interface order {\n"
            "    use standard.{address};\n"
            "\n"
            "    record line-item {\n"
            "        quantity: u32\n"
            "    }\n"
            "\n"
            "    //remote\n"
            "    order-total: func(target: address, item: line-item) -> result<bool, string>;\n"
            "}\n"
        )

    def test_no_exported_methods_yields_empty_text(self) -> None:
        text = """
        #[hyperprocess(wit_world = "w")]
        impl QuietState { fn helper(&self) {} #[init] fn init(&mut self) {} }
        """
        assert _generate(text) == ""

    def test_interface_without_declarations(self) -> None:
        text = """
        impl Counter {
            #[local]
            fn increment(&mut self, by: u64) -> u64 { by }
            #[http]
            fn reset(&mut self) {}
        }
        """
        assert _generate(text) == (
            "interface counter {\n"
            "    use standard.{address};\n"
            "\n"
            "    //local\n"
            "    increment: func(target: address, by: u64) -> result<u64, string>;\n"
            "    //http\n"
            "    reset: func(target: address) -> result<unit, string>;\n"
            "}\n"
        )

    def test_only_reachable_declarations_are_included(self) -> None:
        text = """
        struct Used { a: u32 }
        struct Unrelated { b: u32 }
        impl Svc { #[remote] fn get(&self) -> Used { todo!() } }
        """
        result = _generate(text)
        assert "record used" in result
        assert "unrelated" not in result


# ###############
# Functions
# ###############


class TestFunctions:
    def test_markers_follow_fixed_order(self) -> None:
        source = parse("impl A { #[http] #[local] #[remote] fn f(&self) {} }")
        method = _first_impl(source).methods[0]
        assert export_markers(method) == [ExportMarker.REMOTE, ExportMarker.LOCAL, ExportMarker.HTTP]

    def test_render_function_with_several_markers(self) -> None:
        function = ExportedFunction(
            name="place-order",
            params=[WitParam(name="item", type="line-item"), WitParam(name="count", type="u32")],
            return_type="option<string>",
            markers=[ExportMarker.REMOTE, ExportMarker.HTTP],
        )
        assert render_function(function) == (
            "    //remote\n"
            "    //http\n"
            "    place-order: func(target: address, item: line-item, count: u32) -> result<option<string>, string>;"
        )

    def test_receiver_and_pattern_params_are_excluded(self) -> None:
        source = parse("impl A { #[remote] fn f(&self, (a, b): (u32, u32), _: u32, value: i32) {} }")
        interface = build_interface(_first_impl(source), "A", source)
        assert interface is not None
        assert interface.functions[0].params == [WitParam(name="value", type="s32")]

    def test_parameter_names_are_kebab_cased(self) -> None:
        source = parse("impl A { #[remote] fn f(&self, order_id: u64) {} }")
        interface = build_interface(_first_impl(source), "A", source)
        assert interface is not None
        assert interface.functions[0].params[0].name == "order-id"

    def test_unmarked_methods_are_not_exported(self) -> None:
        source = parse("impl A { fn hidden(&self) {} #[remote] fn shown(&self) {} }")
        interface = build_interface(_first_impl(source), "A", source)
        assert interface is not None
        assert [function.name for function in interface.functions] == ["shown"]

    def test_unexported_methods_are_not_validated(self) -> None:
        source = parse("impl A { fn helper2(&self) {} #[remote] fn shown(&self) {} }")
        assert build_interface(_first_impl(source), "A", source) is not None

    @pytest.mark.parametrize(
        ("method", "message"),
        [
            ("#[remote] fn get_v2(&self) {}", "Function name 'get_v2'"),
            ("#[remote] fn f(&self, stream_id: u32) {}", "Parameter name 'stream_id'"),
            ("#[remote] fn f(&self) -> Item2 { todo!() }", "Type name 'Item2'"),
        ],
    )
    def test_naming_violations_raise(self, method: str, message: str) -> None:
        source = parse(f"impl A {{ {method} }}")
        with pytest.raises(NamingError, match=message):
            build_interface(_first_impl(source), "A", source)


# ###############
# Interface Names
# ###############


class TestInterfaceNames:
    def test_state_suffix_is_stripped(self) -> None:
        assert interface_name_for("OrderState") == "order"
        assert interface_name_for("ChatRoomState") == "chat-room"

    def test_invalid_type_name_raises(self) -> None:
        with pytest.raises(NamingError, match="Interface name 'Stream'"):
            interface_name_for("Stream")

    def test_impl_type_name_uses_last_segment(self) -> None:
        impl = ImplItem(self_type=PathType(segments=["crate", "OrderState"]))
        assert impl_type_name(impl) == "OrderState"

    def test_impl_type_name_for_non_path(self) -> None:
        impl = ImplItem(self_type=ReferenceType(elem=PathType(segments=["A"])))
        assert impl_type_name(impl) is None


# ###############
# Type Closure
# ###############


class TestTypeClosure:
    def test_transitive_references(self) -> None:
        declarations = {
            "order": "    record order {\n        customer: customer\n    }",
            "customer": "    record customer {\n        address: postal-address\n    }",
            "postal-address": "    record postal-address {\n        city: string\n    }",
        }
        assert resolve_type_closure({"order"}, declarations) == ["order", "customer", "postal-address"]

    def test_cycles_terminate_and_visit_once(self) -> None:
        source = parse("struct Node { next: Option<Link> } struct Link { target: Node }")
        declarations = collect_declarations(source)
        assert resolve_type_closure({"node"}, declarations) == ["node", "link"]

    def test_self_reference(self) -> None:
        declarations = {"tree": "    record tree {\n        children: list<tree>\n    }"}
        assert resolve_type_closure({"tree"}, declarations) == ["tree"]

    def test_names_without_declaration_are_skipped(self) -> None:
        assert resolve_type_closure({"external"}, {"order": "    record order {\n        a: u32\n    }"}) == []

    def test_textual_containment_includes_substring_names(self) -> None:
        declarations = {
            "item": "    record item {\n        a: u32\n    }",
            "line-item": "    record line-item {\n        b: u32\n    }",
        }
        assert resolve_type_closure({"line-item"}, declarations) == ["line-item", "item"]

    def test_order_is_deterministic(self) -> None:
        declarations = {
            "beta": "    record beta {\n        x: u32\n    }",
            "alpha": "    record alpha {\n        y: u32\n    }",
        }
        assert resolve_type_closure({"beta", "alpha"}, declarations) == ["alpha", "beta"]
