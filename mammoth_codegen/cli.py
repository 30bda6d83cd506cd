"""
Command-line interface for generating analytics event code.

Fetches a Mammoth schema (or reads a local one), generates code for the
requested language and writes it to a file.
"""

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    GeneratorConfig,
    GenerationResult,
    SchemaError,
    generate_code,
    get_generator,
    is_language_supported,
    list_supported_languages,
    load_config,
    load_schema,
)
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.registry import RegistryError, get_registry, list_all_language_info
from .logging_config import configure_logging, get_logger
from .utils import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    OutputError,
    SchemaFetchError,
    fetch_schema,
    load_schema_file,
    schema_url,
    write_generated_code,
)

logger = get_logger(__name__)

VPN_HINT = "Please make sure you are connected to the Trafi VPN"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mammoth-codegen",
        description="Generate analytics event code from a Mammoth schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mammoth-codegen --project whitelabel --output-path app/src/main/kotlin
  mammoth-codegen -l python --schema-file schema.json --stdout
  mammoth-codegen --list-languages
        """.strip(),
    )

    # Schema source
    source_group = parser.add_argument_group("schema source")
    source_group.add_argument(
        "--project", default="whitelabel", help="Mammoth project id (default: whitelabel)"
    )
    source_group.add_argument(
        "--version", default="", help="Mammoth schema version (default: latest)"
    )
    source_group.add_argument(
        "--schema-file", metavar="FILE", help="Read the schema from a local JSON file"
    )
    source_group.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Mammoth service URL (default: {DEFAULT_BASE_URL})",
    )
    source_group.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )

    # Output
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--output-path", default=".", help="Generated code output directory (default: .)"
    )
    output_group.add_argument(
        "--output-filename",
        help="Generated code file name (default: MammothEvents.kt / mammoth_events.py)",
    )
    output_group.add_argument(
        "--stdout", action="store_true", help="Print the generated code instead of writing it"
    )

    # Generation options
    gen_group = parser.add_argument_group("generation")
    gen_group.add_argument(
        "--language", "-l", default="kotlin", help="Target language (default: kotlin)"
    )
    gen_group.add_argument(
        "--class-name", help="Name of the generated object/class (default: AnalyticsEvent)"
    )
    gen_group.add_argument(
        "--no-schema-metadata",
        action="store_true",
        help="Don't add schema event id and version to events",
    )
    gen_group.add_argument(
        "--require-event-type",
        action="store_true",
        help="Fail on events without an event_type value",
    )
    gen_group.add_argument(
        "--strict-identifiers",
        action="store_true",
        help="Fail instead of warning on duplicate generated identifiers",
    )
    gen_group.add_argument("--config", metavar="FILE", help="JSON configuration file")

    # Informational
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages", action="store_true", help="List supported languages and exit"
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logs and generation metadata"
    )

    return parser


def main(argv=None) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments without the program name; defaults to sys.argv

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = create_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger.debug("mammoth-codegen %s", __version__)

    try:
        if args.list_languages:
            return _list_languages()

        _validate_args(args)
        config = _build_config(args)
        return _generate_and_output(args, config)

    except SchemaFetchError as e:
        console.print(f"[red]✗ Error:[/red] {e}", highlight=False)
        if e.connectivity:
            console.print(f"[yellow]{VPN_HINT}[/yellow]")
        return 1
    except (CLIError, ConfigError, RegistryError, SchemaError, OutputError) as e:
        console.print(f"[red]✗ Error:[/red] {e}", highlight=False)
        return 1
    except FileNotFoundError as e:
        console.print(f"[red]✗ Error:[/red] {e}", highlight=False)
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        console.print(f"[red]✗ Unexpected error:[/red] {e}", highlight=False)
        return 1


def _validate_args(args: argparse.Namespace):
    """Reject option combinations that cannot work together."""
    if not is_language_supported(args.language):
        supported = ", ".join(list_supported_languages())
        raise CLIError(
            f"Unsupported language '{args.language}'. Supported languages: {supported}"
        )

    if args.stdout and args.output_filename:
        raise CLIError("--stdout cannot be combined with --output-filename")

    if args.timeout <= 0:
        raise CLIError("--timeout must be a positive number of seconds")

    if not args.stdout and not Path(args.output_path).is_dir():
        raise CLIError(f"Output directory does not exist: {args.output_path}")


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    config_dict = {}

    if args.class_name:
        config_dict["output_class_name"] = args.class_name

    if args.output_filename:
        config_dict["output_file"] = args.output_filename

    if args.no_schema_metadata:
        config_dict["include_schema_metadata"] = False

    if args.require_event_type:
        config_dict["require_publish_event"] = True

    if args.strict_identifiers:
        config_dict["strict_identifiers"] = True

    language = get_registry().resolve(args.language)
    config = load_config(language, custom_config=config_dict, config_file=args.config)

    for warning in get_config_manager().validate_config(config, language):
        logger.warning(warning)

    return config


def _load_document(args: argparse.Namespace, progress: Progress):
    """Read the schema document from a local file or the Mammoth service."""
    if args.schema_file:
        task = progress.add_task(f"[cyan]Reading schema from {args.schema_file}...", total=None)
        document = load_schema_file(args.schema_file)
    else:
        url = schema_url(args.project, args.version, args.base_url)
        task = progress.add_task(f"[cyan]Downloading schema from {url}...", total=None)
        document = fetch_schema(args.project, args.version, args.base_url, args.timeout)
    progress.remove_task(task)
    return document


def _generate_and_output(args: argparse.Namespace, config: GeneratorConfig) -> int:
    """Generate code and handle output with rich formatting."""
    generator = get_generator(args.language, config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        document = _load_document(args, progress)

        parse_task = progress.add_task("[cyan]Parsing schema...", total=None)
        schema = load_schema(document)
        progress.remove_task(parse_task)

        gen_task = progress.add_task(
            f"[green]Generating {generator.language_name} code...", total=None
        )
        result = generate_code(generator, schema)
        progress.remove_task(gen_task)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}", highlight=False)
        return 1

    if args.stdout:
        console.print(Syntax(result.code, generator.language_name, theme="monokai"))
    else:
        target = write_generated_code(
            result.code, args.output_path, generator.default_output_filename
        )
        console.print(
            f"[green]✓[/green] Generated {generator.language_name} code saved to [cyan]{target}[/cyan]"
        )

    if args.verbose:
        _print_metadata(result)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}", highlight=False)

    return 0


def _print_metadata(result: GenerationResult):
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Default File", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            f"🔧 {lang_name}",
            info["file_extension"],
            info["default_output_filename"],
            info["class"],
            aliases,
        )

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] mammoth-codegen --project [dim]PROJECT[/dim] "
            "--language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0
