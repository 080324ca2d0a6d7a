# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the witgen command-line interface."""

import argparse
import sys
from pathlib import Path

from witgen.errors import WitgenError
from witgen.generator.build import GenerationResult, generate_workspace, read_source, translate_source
from witgen.workspace.config import CONFIG_FILE_NAME, load_config_for, render_default_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the witgen CLI."""
    parser = argparse.ArgumentParser(
        prog="witgen",
        description="witgen: WIT interface generator for annotated Rust processes",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default configuration file",
        description=f"Create a {CONFIG_FILE_NAME} file listing every setting with its default value.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate WIT interfaces and update world manifests",
        description=(
            "Scan the process projects below a directory, write one .wit interface "
            "per annotated impl block and rewrite the world manifests."
        ),
    )
    generate_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the process projects (default: current directory)",
    )
    generate_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the functions and type declarations of each interface",
    )

    # preview subcommand
    preview_parser = subparsers.add_parser(
        "preview",
        help="Print the interfaces of one source file",
        description="Parse a single Rust source file and print the WIT it would produce without writing files.",
    )
    preview_parser.add_argument("file", help="Rust source file to translate")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "preview":
        return _cmd_preview(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(render_default_config(), encoding="utf-8")
    print(f"Wrote default configuration to '{config_file}'.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    try:
        config = load_config_for(directory)
        result = generate_workspace(directory, config)
    except WitgenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not result.projects:
        print("No process projects found.")
        return 0

    _report(result, verbose=args.verbose)
    return 0


def _cmd_preview(args: argparse.Namespace) -> int:
    """Handle the preview subcommand."""
    path = Path(args.file).resolve()

    if not path.is_file():
        print(f"Error: file '{path}' does not exist.", file=sys.stderr)
        return 1

    try:
        config = load_config_for(Path.cwd())
        source = read_source(path)
        generated, warnings = translate_source(source, config.collision_policy)
    except WitgenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for warning in warnings:
        print(f"Warning: {warning.message}")
    if not generated:
        print("No interfaces would be generated.")
        return 0
    for item in generated:
        print(f"// {item.interface.name}.wit (world {item.world})")
        print(item.text, end="")
    return 0


def _report(result: GenerationResult, verbose: bool) -> None:
    """Print the outcome of a generate run."""
    for project in result.projects:
        print(f"Processed '{project.project.name}'")
        for warning in project.warnings:
            print(f"Warning: {warning.message}")
        for generated in project.interfaces:
            print(f"  Wrote {generated.path}")
            if verbose:
                for function in generated.interface.functions:
                    print(f"    function {function.name}")
                for name in generated.interface.declaration_names:
                    print(f"    type {name}")

    for manifest in result.manifests:
        print(f"Updated world manifest '{manifest}'")
    print(f"Generated {len(result.exports)} interface(s).")
