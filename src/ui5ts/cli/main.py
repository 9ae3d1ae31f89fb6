"""ui5ts CLI - TypeScript declarations for the UI5 API.

This module provides the command-line interface for ui5ts, enabling full
generation from the UI5 SDK as well as rendering of local api.json files.
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from ui5ts.core.config import ConfigError, GeneratorConfig, get_settings, load_generator_config

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="ui5ts",
    help="TypeScript declaration generator for the UI5 API",
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()
err_console = Console(stderr=True)

# Global verbose flag
_verbose: bool = False


def set_verbose(verbose: bool) -> None:
    """Set global verbose mode."""
    global _verbose
    _verbose = verbose


def is_verbose() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose


def print_exception(e: Exception) -> None:
    """Print exception details in verbose mode."""
    if _verbose:
        err_console.print("\n[dim]--- Traceback (verbose mode) ---[/dim]")
        err_console.print(f"[dim]{traceback.format_exc()}[/dim]")


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through rich."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with full tracebacks"),
    ] = False,
) -> None:
    """ui5ts CLI - TypeScript declarations for the UI5 API."""
    set_verbose(verbose)
    configure_logging(verbose)


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Generator config file (defaults to UI5TS_CONFIG_PATH)"),
]


def get_config(config_path: Path | None) -> GeneratorConfig:
    """Load the generator config with error handling.

    Without an explicit path, the configured default is used when it exists,
    otherwise built-in defaults apply.
    """
    path = config_path or get_settings().config_path
    if config_path is None and not path.exists():
        return GeneratorConfig()
    try:
        return load_generator_config(path)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        if e.details:
            err_console.print(f"  {e.details}")
        print_exception(e)
        raise typer.Exit(1)


def read_api(api_json: Path):
    """Parse a local api.json file with error handling."""
    from ui5ts.core.serializer import SerializationError, parse_api

    try:
        return parse_api(api_json.read_text(encoding="utf-8"))
    except SerializationError as e:
        err_console.print(f"[red]Error:[/red] {e.message} in {api_json}")
        if e.details:
            err_console.print(f"  {e.details}")
        print_exception(e)
        raise typer.Exit(1)


ApiJsonArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to a local api.json file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]


@app.command()
def generate(
    versions: Annotated[
        Optional[list[str]],
        typer.Option("--version", "-V", help="UI5 version (repeatable; defaults to config)"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Fetch api.json files and write declaration files.

    Example:
        ui5ts generate --version 1.60.0 --config ui5ts.config.json
    """
    from ui5ts.generator.errors import GenerationError
    from ui5ts.services.fetcher import ApiFetcher
    from ui5ts.services.generator_service import GeneratorService

    config = get_config(config_path)
    selected = versions or config.input.versions
    if not selected:
        err_console.print("[red]Error:[/red] No version given and none configured")
        raise typer.Exit(1)

    failed = False
    with ApiFetcher(config) as fetcher:
        service = GeneratorService(config, fetcher)
        for version in selected:
            console.print(f"[blue]Generating version:[/blue] {version}")
            try:
                with console.status("[bold blue]Generating..."):
                    result = service.generate(version)
            except GenerationError as e:
                err_console.print(f"[red]Error:[/red] {e}")
                print_exception(e)
                raise typer.Exit(1)

            if result.success:
                console.print("[green]✓[/green] Generation completed successfully")
                console.print(f"  Libraries: {', '.join(result.libraries)}")
                console.print(f"  Symbols: {result.symbols_count}")
                console.print(f"  Classes: {result.classes_count}")
                for path in result.files_written:
                    console.print(f"  Wrote: {path}")
            else:
                failed = True
                err_console.print(f"[red]Error:[/red] Generation of {version} failed")
                for error in result.errors:
                    err_console.print(f"  - {error}")

    if failed:
        raise typer.Exit(1)


@app.command()
def render(
    api_json: ApiJsonArgument,
    config_path: ConfigOption = None,
    library: Annotated[
        Optional[str],
        typer.Option("--library", "-l", help="Only render symbols of this library"),
    ] = None,
    exports: Annotated[
        bool,
        typer.Option("--exports", help="Render module exports instead of definitions"),
    ] = False,
) -> None:
    """Render declarations of a local api.json file to stdout.

    Example:
        ui5ts render ./apis/sap/m/api.json
    """
    from ui5ts.generator.collator import DeclarationCollator
    from ui5ts.generator.errors import GenerationError
    from ui5ts.services.generator_service import prepare_tree

    config = get_config(config_path)
    api = read_api(api_json)
    try:
        collator = DeclarationCollator(prepare_tree([api], config))
        text = collator.render_exports(library) if exports else collator.render_definitions(library)
    except GenerationError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        print_exception(e)
        raise typer.Exit(1)
    typer.echo(text)


@app.command()
def overloads(
    api_json: ApiJsonArgument,
    method: Annotated[str, typer.Argument(help="Full method name, e.g. sap.m.Button.attachPress")],
    config_path: ConfigOption = None,
) -> None:
    """Print the declaration overloads planned for one method.

    Example:
        ui5ts overloads ./apis/sap/m/api.json sap.m.Button.attachPress
    """
    from ui5ts.generator.emitter import DeclarationEmitter
    from ui5ts.generator.errors import GenerationError
    from ui5ts.services.generator_service import prepare_tree

    config = get_config(config_path)
    tree = prepare_tree([read_api(api_json)], config)
    found = tree.find_method(method)
    if found is None:
        err_console.print(f"[red]Error:[/red] Method not found: {method}")
        raise typer.Exit(1)

    try:
        blocks = DeclarationEmitter(tree).emit_method(found)
    except GenerationError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        print_exception(e)
        raise typer.Exit(1)

    if not blocks:
        console.print(f"[yellow]Method is filtered by configuration:[/yellow] {method}")
        return
    console.print(f"[blue]{len(blocks)} overload(s) for:[/blue] {method}")
    typer.echo("\n\n".join(blocks))


if __name__ == "__main__":
    app()
