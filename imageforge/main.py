# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# IMAGEFORGE - COMMAND LINE
# -----------------------------------------------------------------------------
# Responsibility: The operator entry point.
#
# Commands:
# - validate CONFIG [CONFIG ...]: merge the files, validate one layer and
#   print a table of errors and warnings (exit 1 on failure)
# - options: list the supported PHP versions, platforms and architectures
# -----------------------------------------------------------------------------

import argparse
from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from imageforge import __version__
from imageforge.core.engine import ConfigLayer, ValidationEngine
from imageforge.core.errors import ForgeError
from imageforge.core.loader import ConfigLoader
from imageforge.core.settings import get_settings
from imageforge.domain.enums import Architecture, Platform, PHPVersion
from imageforge.validation import ValidationResult

console = Console()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="imageforge",
        description="Validate PHP/Nginx container image configurations.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    validate = commands.add_parser("validate", help="Validate configuration files.")
    validate.add_argument(
        "configs",
        nargs="+",
        metavar="CONFIG",
        help="JSON or YAML files, deep-merged in order (later files win).",
    )
    validate.add_argument(
        "--layer",
        choices=ValidationEngine.layers(),
        default=ConfigLayer.FINAL.value,
        help="Layer to validate against (default: final).",
    )
    validate.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first error.",
    )

    commands.add_parser("options", help="List supported versions, platforms and architectures.")
    return parser.parse_args(argv)


def _result_table(result: ValidationResult) -> Table:
    table = Table(title="Validation Report", show_lines=False)
    table.add_column("Level", style="bold")
    table.add_column("Message")
    for message in result.errors:
        table.add_row("[red]ERROR[/red]", message)
    for message in result.warnings:
        table.add_row("[yellow]WARNING[/yellow]", message)
    return table


def run_validate(args: argparse.Namespace) -> int:
    settings = get_settings()
    engine = ValidationEngine(
        abort_early=True if args.fail_fast else None,
        settings=settings,
    )
    loader = ConfigLoader(cache_ttl=settings.config_cache_ttl)

    try:
        document = loader.load_many(args.configs)
    except ForgeError as e:
        engine.classifier.handle(e)
        return 1

    result = engine.validate(document, args.layer)
    if result.errors or result.warnings:
        console.print(_result_table(result))

    if not result.is_valid:
        console.print(
            Panel(
                f"[bold red]{len(result.errors)} error(s) in the {args.layer} configuration[/bold red]",
                title="INVALID",
                border_style="red",
            )
        )
        return 1

    console.print(
        Panel(
            f"[bold green]{args.layer} configuration is valid[/bold green]",
            title="VALID",
            border_style="green",
        )
    )
    return 0


def run_options() -> int:
    table = Table(title="Supported Options")
    table.add_column("Option", style="bold cyan")
    table.add_column("Values")
    table.add_row("PHP versions", ", ".join(PHPVersion.values()))
    table.add_row("Platforms", ", ".join(Platform.values()))
    table.add_row("Architectures", ", ".join(Architecture.values()))
    console.print(table)
    console.print(f"[dim]End-of-life PHP versions: {', '.join(PHPVersion.end_of_life())}[/dim]")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.command == "validate":
        return run_validate(args)
    return run_options()


if __name__ == "__main__":
    raise SystemExit(main())
