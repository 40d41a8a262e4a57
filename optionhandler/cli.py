"""
Command-line interface of the option handler generator.

Reads one or more JSON class definitions and writes one Python module per
definition into the output directory.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    BatchOptions,
    BatchReport,
    GeneratorConfig,
    SchemaError,
    generate_batch,
    generate_code,
    get_generator,
    list_supported_languages,
)
from .codegen.core.config import ConfigError, get_config_manager, load_config
from .codegen.registry import (
    RegistryError,
    get_language_info,
    get_registry,
    is_language_supported,
)
from .logging_config import get_logger, setup_logging
from .utils import DefinitionIOError, load_definition

logger = get_logger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser reporting usage errors with EXIT_USAGE."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


# Initialize rich consoles
console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = _ArgumentParser(
        prog="optionhandler-gen",
        description="Generate option handler superclasses from JSON class definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  optionhandler-gen --configuration my_svm.json --output-dir src
  optionhandler-gen --configuration a.json b.json --output-dir src --add-package-structure --generate-dirs
  optionhandler-gen --configuration my_svm.json --stdout
  optionhandler-gen --list-languages
        """.strip(),
    )

    # Input/output
    parser.add_argument(
        "--configuration",
        nargs="+",
        metavar="JSON",
        help="JSON class definition file(s) or http(s) URL(s)",
    )
    parser.add_argument(
        "--output-dir",
        metavar="DIR",
        help="Directory to write the generated modules to (must exist)",
    )
    parser.add_argument(
        "--add-package-structure",
        action="store_true",
        help="Place modules in sub-directories mirroring the package",
    )
    parser.add_argument(
        "--generate-dirs",
        action="store_true",
        help="Create missing package directories",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the generated code instead of writing files",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Continue with the remaining definitions after a failure",
    )

    # Generation options
    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--language", "-l", default="python", help="Target language (default: python)"
    )
    gen_group.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )
    gen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't generate docstrings in output code",
    )
    gen_group.add_argument(
        "--copyright-year",
        type=int,
        metavar="YEAR",
        help="Year for the copyright notice (default: current year)",
    )
    gen_group.add_argument(
        "--module-case",
        choices=["snake", "original"],
        help="File name style of generated modules",
    )

    # Informational / diagnostics
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported target languages and exit",
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Output debugging information"
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``optionhandler-gen`` command.

    Args:
        argv: Command line arguments, defaults to sys.argv[1:]

    Returns:
        Exit code (0 success, 1 usage error, 2 generation failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.list_languages:
            return _list_languages()

        _validate_args(args)
        config = _build_config(args)

        if args.stdout:
            return _generate_to_stdout(args, config)
        return _generate_to_files(args, config)

    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        parser.print_usage(sys.stderr)
        return EXIT_USAGE


def _validate_args(args: argparse.Namespace):
    """Check argument combinations argparse cannot express."""
    if not args.configuration:
        raise CLIError("--configuration is required")

    if not is_language_supported(args.language):
        raise CLIError(
            f"Unsupported language '{args.language}'. "
            f"Supported languages: {', '.join(list_supported_languages())}"
        )

    if args.stdout:
        return

    if not args.output_dir:
        raise CLIError("--output-dir is required unless --stdout is given")

    output_dir = Path(args.output_dir)
    if not output_dir.exists():
        raise CLIError(f"Output directory does not exist: {output_dir}")
    if not output_dir.is_dir():
        raise CLIError(f"Output directory points to a file: {output_dir}")


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI switches."""
    overrides: Dict[str, Any] = {}

    if args.no_comments:
        overrides["add_comments"] = False
    if args.copyright_year is not None:
        overrides["copyright_year"] = args.copyright_year
    if args.module_case:
        overrides["module_case"] = args.module_case

    language = get_registry().resolve(args.language)
    try:
        config = load_config(language, custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config):
        logger.warning("Configuration: %s", warning)

    return config


def _generate_to_stdout(args: argparse.Namespace, config: GeneratorConfig) -> int:
    """Generate code and print it with syntax highlighting."""
    try:
        generator = get_generator(args.language, config)
    except RegistryError as e:
        raise CLIError(str(e)) from e

    errors = []
    for source in args.configuration:
        try:
            definition = load_definition(source)
        except (DefinitionIOError, SchemaError) as e:
            errors.append(f"Failed to process {source}: {e}")
            if not args.keep_going:
                break
            continue

        result = generate_code(generator, definition)
        if not result.success:
            errors.append(result.error_message)
            if not args.keep_going:
                break
            continue

        console.print(
            Panel(
                Syntax(result.code, generator.language_name, theme="monokai"),
                title=f"📄 {generator.module_filename(definition)}",
                border_style="green",
            )
        )
        _print_warnings(result.warnings)

    if errors:
        _print_errors(errors)
        return EXIT_FAILURE
    return EXIT_OK


def _generate_to_files(args: argparse.Namespace, config: GeneratorConfig) -> int:
    """Generate all definitions and write them to the output directory."""
    options = BatchOptions(
        output_dir=Path(args.output_dir),
        add_package_structure=args.add_package_structure,
        generate_dirs=args.generate_dirs,
        keep_going=args.keep_going,
        language=args.language,
        config=config,
    )

    try:
        report = generate_batch(args.configuration, options)
    except RegistryError as e:
        raise CLIError(str(e)) from e

    _print_report(report, args.verbose)

    if not report.success:
        _print_errors(report.errors)
        return EXIT_FAILURE
    return EXIT_OK


def _print_report(report: BatchReport, verbose: bool):
    """Show written files and warnings."""
    if report.written:
        table = Table(
            title="📦 Generated Modules", box=box.SIMPLE, header_style="bold cyan"
        )
        table.add_column("File", style="green")
        for path in report.written:
            table.add_row(str(path))
        console.print(table)

    if report.skipped:
        console.print(f"[yellow]⚠️  {report.skipped} definition(s) skipped[/yellow]")

    if verbose:
        _print_warnings(report.warnings)


def _print_warnings(warnings: List[str]):
    if warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()


def _print_errors(errors: List[str]):
    """Print the accumulated error messages to stderr."""
    err_console.print("[red]✗ Generation failed:[/red]")
    for error in errors:
        err_console.print(f"  {error}", markup=False, highlight=False)


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {language}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
