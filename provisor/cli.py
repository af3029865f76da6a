"""
Provisor CLI - Converge declarative resources from the command line.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core import ProvisorCore
from .settings import get_settings

# Setup
app = typer.Typer(
    name="provisor",
    help="Declarative resource providers with scoped convergence",
    add_completion=False,
)
console = Console()


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Configure logging on module import
configure_logging()


def _get_recipe_file(recipe: Path | None) -> Path:
    """Resolve the recipe to converge, defaulting to the configured file.

    Raises:
        SystemExit: If the recipe does not exist
    """
    recipe_file = recipe or Path.cwd() / get_settings().recipe_file
    if not recipe_file.exists():
        console.print(
            f"[bold red]✗ Error:[/bold red] No recipe found at {recipe_file}"
        )
        console.print(
            "[dim]Hint: pass a recipe path or cd into a directory containing one[/dim]"
        )
        raise typer.Exit(code=1)
    return recipe_file


def _create_command_panel(title: str, color: str, cookbook_path: Path) -> Panel:
    """Create a Rich Panel for command display."""
    return Panel.fit(
        f"[bold {color}]{title}[/bold {color}]\n"
        f"Directory: {Path.cwd().name}\n"
        f"Cookbooks: {cookbook_path}",
        border_style=color,
    )


def _handle_command_error(e: Exception, command_type: str) -> None:
    """Print a command failure and exit with code 1."""
    console.print(
        f"\n[bold red]✗ {command_type.capitalize()} failed:[/bold red] {escape(str(e))}"
    )
    cause = e.__cause__
    while cause is not None:
        console.print(f"[dim]  caused by: {escape(str(cause))}[/dim]")
        cause = cause.__cause__
    raise typer.Exit(code=1)


@app.command()
def converge(
    recipe: Path = typer.Argument(
        None, help="Recipe file to converge (defaults to PV_RECIPE_FILE)"
    ),
    cookbooks: Path = typer.Option(
        None, "--cookbooks", "-c", help="Cookbook directory (overrides .env)"
    ),
):
    """Load cookbook providers, evaluate a recipe and converge its resources."""
    recipe_file = _get_recipe_file(recipe)
    core = ProvisorCore(cookbook_path=cookbooks)
    console.print(_create_command_panel("Provisor Converge", "blue", core.cookbook_path))

    try:
        result = core.converge(recipe_file)
    except Exception as e:
        _handle_command_error(e, "converge")

    console.print("\n[bold green]✓ Converge complete![/bold green]")
    console.print(
        f"[dim]Resources: {result['resources']}  Updated: {len(result['updated'])}[/dim]"
    )
    for identity in result["updated"]:
        console.print(f"  [green]~[/green] {escape(identity)}")


@app.command()
def providers(
    cookbooks: Path = typer.Option(
        None, "--cookbooks", "-c", help="Cookbook directory (overrides .env)"
    ),
):
    """List resource types and the providers that converge them."""
    core = ProvisorCore(cookbook_path=cookbooks)

    try:
        registered = core.providers()
    except Exception as e:
        _handle_command_error(e, "provider loading")

    table = Table(title="Providers")
    table.add_column("Resource type", style="bold")
    table.add_column("Provider")
    for type_name, description in registered.items():
        table.add_row(type_name, escape(description))
    console.print(table)


@app.command()
def version():
    """Show Provisor version."""
    from . import __version__

    console.print(f"Provisor version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
