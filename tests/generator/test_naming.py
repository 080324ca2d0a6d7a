# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for identifier normalization and the naming policy."""

import pytest

from witgen.generator.naming import NamingError, strip_state_suffix, to_kebab_case, validate_name

# ###############
# Naming Policy
# ###############


class TestValidateName:
    @pytest.mark.parametrize("name", ["Order", "line_item", "placeOrder", "a"])
    def test_accepts_plain_names(self, name: str) -> None:
        validate_name(name, "Type")

    @pytest.mark.parametrize("name", ["Order2", "v1_api", "0"])
    def test_rejects_digits(self, name: str) -> None:
        with pytest.raises(NamingError, match="contains numbers"):
            validate_name(name, "Type")

    @pytest.mark.parametrize("name", ["stream", "EventStream", "STREAM_ID", "upstream_host"])
    def test_rejects_stream_in_any_case(self, name: str) -> None:
        with pytest.raises(NamingError, match="contains 'stream'"):
            validate_name(name, "Function")

    def test_error_carries_context(self) -> None:
        with pytest.raises(NamingError) as exc_info:
            validate_name("item2", "Field")
        error = exc_info.value
        assert error.name == "item2"
        assert error.kind == "Field"
        assert str(error) == "Field name 'item2' contains numbers, which is not allowed"


# ###############
# Case Conversion
# ###############


class TestToKebabCase:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("LineItem", "line-item"),
            ("order_total", "order-total"),
            ("Order", "order"),
            ("placeOrder", "place-order"),
            ("HTMLPage", "html-page"),
            ("getHTTPResponse", "get-http-response"),
            ("ID", "id"),
            ("lower", "lower"),
            ("", ""),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        assert to_kebab_case(name) == expected

    def test_snake_case_only_replaces_underscores(self) -> None:
        assert to_kebab_case("Mixed_Case") == "Mixed-Case"

    @pytest.mark.parametrize("name", ["line-item", "order", "get-http-response"])
    def test_idempotent_on_output(self, name: str) -> None:
        assert to_kebab_case(name) == name
        assert to_kebab_case(to_kebab_case(name)) == to_kebab_case(name)


class TestStripStateSuffix:
    def test_strips_trailing_state(self) -> None:
        assert strip_state_suffix("OrderState") == "Order"

    def test_keeps_other_names(self) -> None:
        assert strip_state_suffix("Order") == "Order"
        assert strip_state_suffix("StateMachine") == "StateMachine"

    def test_only_suffix_is_removed(self) -> None:
        assert strip_state_suffix("StateState") == "State"
