# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for world manifest discovery and aggregation."""

from pathlib import Path

from witgen.generator.world import (
    DEFAULT_WORLD_NAME,
    aggregate,
    export_statement,
    extract_world_name,
    find_world_manifests,
    render_world,
)
from witgen.model.wit import WorldManifest

# ###############
# World Names
# ###############


class TestExtractWorldName:
    def test_simple_world_line(self) -> None:
        assert extract_world_name("world app-v0 {\n}\n") == "app-v0"

    def test_brace_attached_to_name(self) -> None:
        assert extract_world_name("world app{\n}") == "app"

    def test_indented_world_line_after_package(self) -> None:
        assert extract_world_name("package my:pkg;\n\n  world app {\n}") == "app"

    def test_first_world_wins(self) -> None:
        assert extract_world_name("world first {}\nworld second {}") == "first"

    def test_no_world_line(self) -> None:
        assert extract_world_name("interface order {\n}\n") is None

    def test_bare_world_keyword(self) -> None:
        assert extract_world_name("world \n") is None

    def test_only_first_world_line_counts(self) -> None:
        assert extract_world_name("world {\nworld later {}\n") is None


# ###############
# Rendering
# ###############


class TestRenderWorld:
    def test_exports_then_include(self) -> None:
        manifest = WorldManifest(name="app", exports=[export_statement("order"), export_statement("chat")])
        assert render_world(manifest) == (
            "world app {\n"
            "    export order;\n"
            "    export chat;\n"
            "    include process-v1;\n"
            "}\n"
        )

    def test_no_exports(self) -> None:
        assert render_world(WorldManifest(name="app")) == "world app {\n    include process-v1;\n}\n"

    def test_custom_include(self) -> None:
        assert "    include other-v2;\n" in render_world(WorldManifest(name="app", include="other-v2"))


# ###############
# Discovery
# ###############


class TestFindWorldManifests:
    def test_only_world_files_are_found(self, tmp_path: Path) -> None:
        (tmp_path / "order.wit").write_text("interface order {\n}\n")
        (tmp_path / "app.wit").write_text("world app-v0 {\n    export old;\n}\n")
        (tmp_path / "notes.txt").write_text("world ignored {}\n")
        assert find_world_manifests(tmp_path) == [(tmp_path / "app.wit", "app-v0")]

    def test_sorted_by_file_name(self, tmp_path: Path) -> None:
        (tmp_path / "b.wit").write_text("world b {}\n")
        (tmp_path / "a.wit").write_text("world a {}\n")
        assert [name for _, name in find_world_manifests(tmp_path)] == ["a", "b"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert find_world_manifests(tmp_path / "missing") == []


# ###############
# Aggregation
# ###############


class TestAggregate:
    def test_existing_manifest_is_rewritten(self, tmp_path: Path) -> None:
        manifest = tmp_path / "app.wit"
        manifest.write_text("world my-app {\n    export stale;\n    include process-v1;\n}\n")
        written = aggregate(tmp_path, [export_statement("order")])
        assert written == [manifest]
        assert manifest.read_text() == "world my-app {\n    export order;\n    include process-v1;\n}\n"

    def test_every_manifest_gets_the_same_exports(self, tmp_path: Path) -> None:
        (tmp_path / "one.wit").write_text("world one {}\n")
        (tmp_path / "two.wit").write_text("world two {}\n")
        aggregate(tmp_path, [export_statement("a"), export_statement("b")])
        for name in ("one", "two"):
            text = (tmp_path / f"{name}.wit").read_text()
            assert text.startswith(f"world {name} {{\n")
            assert "    export a;\n    export b;\n" in text

    def test_default_manifest_is_created(self, tmp_path: Path) -> None:
        written = aggregate(tmp_path, [export_statement("order")])
        default = tmp_path / f"{DEFAULT_WORLD_NAME}.wit"
        assert written == [default]
        assert default.read_text().startswith(f"world {DEFAULT_WORLD_NAME} {{\n")

    def test_custom_default_world_and_include(self, tmp_path: Path) -> None:
        aggregate(tmp_path, [export_statement("order")], default_world="mine", include="base-v1")
        assert (tmp_path / "mine.wit").read_text() == "world mine {\n    export order;\n    include base-v1;\n}\n"

    def test_nothing_written_without_exports_or_manifests(self, tmp_path: Path) -> None:
        assert aggregate(tmp_path, []) == []
        assert list(tmp_path.iterdir()) == []

    def test_existing_manifest_emptied_when_no_exports(self, tmp_path: Path) -> None:
        manifest = tmp_path / "app.wit"
        manifest.write_text("world app {\n    export stale;\n}\n")
        aggregate(tmp_path, [])
        assert manifest.read_text() == "world app {\n    include process-v1;\n}\n"

    def test_interface_files_are_untouched(self, tmp_path: Path) -> None:
        interface = tmp_path / "order.wit"
        interface.write_text("interface order {\n}\n")
        aggregate(tmp_path, [export_statement("order")])
        assert interface.read_text() == "interface order {\n}\n"
