"""Nova Store Command Line Interface."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from config.settings import settings
from core.commands import Commands
from core.errors import StoreError
from core.store import ProjectStore
from models.project import Project

# Set up logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

console = Console()


def _open(project_file: str) -> Commands:
    """Load a project file into a fresh store."""
    commands = Commands(ProjectStore())
    try:
        commands.load_project(Path(project_file))
    except StoreError as e:
        console.print(f"[red]Failed to load project: {escape(e.message)}[/red]")
        sys.exit(1)
    return commands


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def cli(verbose: bool):
    """Nova Store - inspect and maintain visual novel project files."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.argument("name")
@click.option("--output", "-o", required=True, type=click.Path(), help="Where to write the project file")
def new(name: str, output: str):
    """Create a new project seeded with one season, episode and page."""

    commands = Commands(ProjectStore())
    project = commands.create_project(name)
    try:
        commands.save_project_as(Path(output), project)
    except StoreError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)

    console.print(f"[bold green]✓ Created '{name}' at {output}[/bold green]")


@cli.command()
@click.argument("project_file", type=click.Path(exists=True))
def show(project_file: str):
    """Show project summary and page tree."""

    commands = _open(project_file)
    _show_project_summary(commands.get_current_project())


@cli.command()
@click.argument("project_file", type=click.Path(exists=True))
def check(project_file: str):
    """Report dangling references and duplicate IDs."""

    commands = _open(project_file)
    issues = commands.check_integrity()

    if not issues:
        console.print("[green]✓ No integrity issues found[/green]")
        return

    table = Table(title=f"{len(issues)} integrity issue(s)")
    table.add_column("Kind", style="yellow")
    table.add_column("Location", style="cyan")
    table.add_column("Message")
    for issue in issues:
        table.add_row(issue.kind.value, issue.location, issue.message)
    console.print(table)
    sys.exit(1)


@cli.command()
@click.argument("project_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), default=None, help="Write here instead of in place")
def migrate(project_file: str, output: Optional[str]):
    """Rewrite a project file in the current schema."""

    commands = _open(project_file)
    target = Path(output) if output else Path(project_file)
    try:
        commands.save_project_as(target, commands.get_current_project())
    except StoreError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Migrated project written to {target}[/green]")


@cli.command()
@click.argument("project_file", type=click.Path(exists=True))
def assets(project_file: str):
    """List the project's imported assets."""

    commands = _open(project_file)
    names = commands.get_project_assets()
    if not names:
        console.print("[yellow]No assets imported yet[/yellow]")
        return
    for name in names:
        console.print(f"  {name}")


@cli.command("import")
@click.argument("project_file", type=click.Path(exists=True))
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
def import_(project_file: str, source: str):
    """Copy SOURCE into the project's assets directory."""

    commands = _open(project_file)
    try:
        name = commands.import_file(Path(source))
    except StoreError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Imported as {name}[/green]")


def _show_project_summary(project: Project):
    """Display project summary and page tree tables."""

    console.print(Panel.fit(
        f"[bold blue]{escape(project.name)}[/bold blue]\n"
        f"Canvas {project.width}x{project.height} · schema v{project.schema_version}",
        border_style="blue",
    ))

    table = Table(title="Contents")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Seasons", str(len(project.seasons)))
    table.add_row("Pages", str(project.page_count))
    table.add_row("Characters", str(len(project.characters)))
    table.add_row("Scripts", str(len(project.script_graphs)))
    active = project.active_page
    table.add_row("Open page", active.name if active else "-")

    console.print(table)

    if project.page_count:
        page_table = Table(title="Pages")
        page_table.add_column("Season", style="dim")
        page_table.add_column("Episode", style="dim")
        page_table.add_column("Page")
        page_table.add_column("Elements", justify="right")
        page_table.add_column("Background", max_width=40)

        for season, episode, page in project.iter_pages():
            page_table.add_row(
                season.name,
                episode.name,
                page.name,
                str(page.element_count),
                page.background or "",
            )

        console.print(page_table)


if __name__ == "__main__":
    cli()
