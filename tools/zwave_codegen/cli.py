"""Command line entry point for the Z-Wave command class generator."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .catalog import Catalog, CatalogBuilder
from .config import GeneratorConfig, resolve_config
from .emitter import Artifact, emit, write_artifacts
from .errors import ConfigError, GenerationError
from .naming import IdentifierStyle
from .profiles import PROFILES
from .source import load_catalog


TAG = "[zwave-codegen]"


@dataclass
class GenerationResult:
    catalog: Catalog
    artifacts: List[Artifact]
    warnings: List[str] = field(default_factory=list)
    skipped_count: int = 0
    written: List[Path] = field(default_factory=list)


def generate(config: GeneratorConfig, write: bool = True, quiet: bool = False) -> GenerationResult:
    """Read the input document, resolve the catalog and write all artifacts.

    Every artifact is rendered before the output directory is cleared.
    """

    def progress(message: str) -> None:
        if not quiet:
            print(f"{TAG} {message}")

    progress(f"loading input file: {config.input_path}")
    builder = CatalogBuilder(config.style)
    catalog = load_catalog(config.input_path, builder)
    progress(f"done reading input file ({len(catalog)} command classes)")

    warnings = list(config.warnings) + builder.warnings
    artifacts = emit(catalog, config.profile, config.namespace, warnings)
    result = GenerationResult(
        catalog=catalog,
        artifacts=artifacts,
        warnings=warnings,
        skipped_count=builder.skipped,
    )
    if not write:
        return result

    progress(f"writing {len(artifacts)} {config.profile.name} files to: {config.output_path}")
    result.written = write_artifacts(config.output_path, artifacts)
    progress("done writing output files")
    return result


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate command class enumerations from Z-Wave command class XML."
    )
    parser.add_argument(
        "--config",
        help="Optional YAML file with generator settings.",
    )
    parser.add_argument(
        "-i",
        "--input",
        help="Input XML file path.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output directory. Existing contents are deleted.",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        help="Target language profile (default: javascript).",
    )
    parser.add_argument(
        "--identifier-style",
        choices=[style.value for style in IdentifierStyle],
        help="Override the profile's identifier style.",
    )
    parser.add_argument(
        "--namespace",
        help="Java package or C++ namespace for generated files.",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Read and resolve the input without writing output files.",
    )
    parser.add_argument(
        "--print-summary",
        action="store_true",
        help="Print generation summary to stderr.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print progress lines.",
    )
    return parser


def _print_summary(result: GenerationResult, output_target: str) -> None:
    catalog = result.catalog
    lines = [
        f"{TAG} generation summary",
        f"  output: {output_target}",
        f"  command classes: {len(catalog)}",
        f"  commands: {catalog.command_count}",
        f"  artifacts: {len(result.artifacts)}",
        f"  skipped nodes: {result.skipped_count}",
    ]

    if result.warnings:
        lines.append(f"  warnings: {len(result.warnings)}")
        for warning in result.warnings:
            lines.append(f"    - {warning}")
    else:
        lines.append("  warnings: 0")

    sys.stderr.write("\n".join(lines) + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(
            Path(args.config) if args.config else None,
            {
                "input": args.input,
                "output": args.output,
                "profile": args.profile,
                "identifier_style": args.identifier_style,
                "namespace": args.namespace,
            },
        )
    except ConfigError as exc:
        sys.stderr.write(f"{TAG} error: {exc}\n")
        return 2

    try:
        result = generate(config, write=not args.validate_only, quiet=args.quiet)
    except GenerationError as exc:
        sys.stderr.write(f"{TAG} error: {exc}\n")
        return 1

    if args.print_summary:
        output_target = "<validate-only>" if args.validate_only else str(config.output_path)
        _print_summary(result, output_target)

    return 0
