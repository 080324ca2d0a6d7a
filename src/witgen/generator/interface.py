# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation of one WIT interface from an annotated impl block.

A method becomes part of the interface when it carries at least one export
marker (``#[remote]``, ``#[local]`` or ``#[http]``). Every exported function
is rendered as fallible (``result<T, string>``) and takes the target process
address as its first parameter. The interface also embeds the declarations
of every custom type its functions reach, directly or through other
declarations.
"""

from __future__ import annotations

from witgen.generator.declarations import CollisionPolicy, collect_declarations
from witgen.generator.naming import strip_state_suffix, to_kebab_case, validate_name
from witgen.generator.type_mapper import UNIT_TYPE, map_type
from witgen.model.syntax import ImplItem, MethodDef, PathType, SourceFile, TypedParam
from witgen.model.wit import ExportedFunction, ExportMarker, WitInterface, WitParam

# ###############
# Public Interface
# ###############

ADDRESS_IMPORT = "use standard.{address};"


def interface_name_for(type_name: str) -> str:
    """Return the WIT interface name for an impl block's raw type name.

    The ``State`` suffix is stripped before conversion, so ``OrderState``
    yields ``order``.

    Raises:
        NamingError: If the type name violates the naming policy.
    """
    validate_name(type_name, "Interface")
    return to_kebab_case(strip_state_suffix(type_name))


def impl_type_name(impl_item: ImplItem) -> str | None:
    """Return the last path segment of the impl block's self type, if it is a path."""
    if isinstance(impl_item.self_type, PathType):
        return impl_item.self_type.name or "Unknown"
    return None


def export_markers(method: MethodDef) -> list[ExportMarker]:
    """Return the export markers attached to *method*, in rendering order."""
    return [marker for marker in ExportMarker if method.has_attribute(marker.value)]


def build_interface(
    impl_item: ImplItem,
    interface_name: str,
    source: SourceFile,
    *,
    collision_policy: CollisionPolicy = CollisionPolicy.OVERWRITE,
) -> WitInterface | None:
    """Translate an annotated impl block into a :class:`WitInterface`.

    Args:
        impl_item: The impl block whose methods are considered for export.
        interface_name: Raw type name of the impl block (e.g. ``OrderState``).
        source: The whole parsed module, used to find type declarations.
        collision_policy: Passed to :func:`collect_declarations`.

    Returns:
        The interface, or None if the block has no exported method.

    Raises:
        NamingError: If any exported name violates the naming policy.
        DeclarationCollisionError: On a declaration collision under ``REJECT``.
    """
    name = interface_name_for(interface_name)
    used_types: set[str] = set()
    functions = [
        _build_function(method, markers, used_types)
        for method in impl_item.methods
        if (markers := export_markers(method))
    ]
    if not functions:
        return None

    all_declarations = collect_declarations(source, collision_policy)
    closure = resolve_type_closure(used_types, all_declarations)
    return WitInterface(
        name=name,
        functions=functions,
        declarations=[all_declarations[type_name] for type_name in closure],
        declaration_names=closure,
    )


def resolve_type_closure(used_types: set[str], declarations: dict[str, str]) -> list[str]:
    """Return the names of all declarations reachable from *used_types*, in emission order.

    A declaration is considered to depend on another when the other's name
    occurs anywhere in its rendered text. This is a textual heuristic: it
    can pull in unrelated declarations whose name is a substring of the
    text, but it never misses a real reference. Each name is visited at most
    once, so reference cycles terminate. Names without a declaration
    (e.g. types imported from other crates) are skipped.
    """
    pending = sorted(used_types, reverse=True)
    processed: set[str] = set()
    closure: list[str] = []
    while pending:
        type_name = pending.pop()
        if type_name in processed:
            continue
        processed.add(type_name)
        text = declarations.get(type_name)
        if text is None:
            continue
        closure.append(type_name)
        for candidate in sorted(declarations):
            if candidate in text and candidate not in processed:
                pending.append(candidate)
    return closure


def render_function(function: ExportedFunction) -> str:
    """Render an exported function with its marker comments."""
    lines = [f"    //{marker.value}" for marker in function.markers]
    params = ["target: address"] + [f"{param.name}: {param.type}" for param in function.params]
    lines.append(f"    {function.name}: func({', '.join(params)}) -> result<{function.return_type}, string>;")
    return "\n".join(lines)


def render_interface(interface: WitInterface) -> str:
    """Render the complete ``interface <name> { ... }`` block."""
    sections = [f"    {ADDRESS_IMPORT}"]
    if interface.declarations:
        sections.append("\n\n".join(interface.declarations))
    sections.append("\n".join(render_function(function) for function in interface.functions))
    return f"interface {interface.name} {{\n" + "\n\n".join(sections) + "\n}\n"


def generate_interface(
    impl_item: ImplItem,
    interface_name: str,
    source: SourceFile,
    *,
    collision_policy: CollisionPolicy = CollisionPolicy.OVERWRITE,
) -> str:
    """Return the WIT text for *impl_item*, or an empty string if nothing is exported."""
    interface = build_interface(impl_item, interface_name, source, collision_policy=collision_policy)
    if interface is None:
        return ""
    return render_interface(interface)


# ################
# Implementation
# ################


def _build_function(method: MethodDef, markers: list[ExportMarker], used_types: set[str]) -> ExportedFunction:
    validate_name(method.name, "Function")
    params: list[WitParam] = []
    for param in method.params:
        # Receivers and destructuring patterns have no name to export.
        if not isinstance(param, TypedParam) or param.binding is None or param.binding == "self":
            continue
        validate_name(param.binding, "Parameter")
        params.append(WitParam(name=to_kebab_case(param.binding), type=map_type(param.type, used_types)))

    return_type = UNIT_TYPE if method.output is None else map_type(method.output, used_types)
    return ExportedFunction(
        name=to_kebab_case(method.name),
        params=params,
        return_type=return_type,
        markers=markers,
    )
