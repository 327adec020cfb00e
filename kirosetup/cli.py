"""
kirosetup CLI - Kiro CLI integration for the BMad Method

A command-line tool that reads an installed BMAD tree and generates:
1. Kiro agent configs and prompts from compiled agents
2. Command stubs for workflows, tasks and tools
3. Steering files from planning artifacts (optional)
"""

from pathlib import Path
from typing import Optional
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from kirosetup import __version__
from kirosetup.config import InstallerSettings
from kirosetup.exceptions import KiroSetupError
from kirosetup.installer import KiroCliSetup
from kirosetup.schemas import InstallState, SetupOptions, SetupResult, SteeringResult

app = typer.Typer(
    name="kirosetup",
    help="Kiro CLI integration for the BMad Method",
    add_completion=False,
)

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route installer logs through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def _print_steering(steering: SteeringResult) -> None:
    console.print("\n[bold]🧭 Steering[/bold]")
    for filename in steering.generated:
        console.print(f"   • [green]{filename}[/green]")
    for filename in steering.skipped:
        console.print(f"   • [yellow]{filename}[/yellow] skipped (no source document)")
    for error in steering.errors:
        console.print(f"   • [red]{error}[/red]")


def _print_summary(result: SetupResult, kiro_dir: Path) -> None:
    table = Table(title="Generated files", show_header=True, header_style="bold cyan")
    table.add_column("Category")
    table.add_column("Generated", justify="right", style="green")
    table.add_column("Skipped", justify="right", style="yellow")

    table.add_row("Agents", str(len(result.agents)), str(result.agents_skipped))
    for kind, label in (("workflow", "Workflows"), ("task", "Tasks"), ("tool", "Tools")):
        table.add_row(label, str(len(result.commands.get(kind, []))), "")
    table.add_row("Commands (failed)", "", str(result.commands_skipped))

    console.print("\n")
    console.print(table)

    console.print(f"\n[bold]📦 Modules:[/bold] {', '.join(result.modules) or 'none'}")
    if result.cleaned:
        console.print(f"[bold]🧹 Cleaned:[/bold] {result.cleaned} previously generated entries")

    if result.steering is not None:
        _print_steering(result.steering)

    if result.warnings:
        console.print("\n[bold yellow]⚠️  Warnings[/bold yellow]")
        for warning in result.warnings:
            console.print(f"   • {warning}")

    console.print(f"\n[bold]📁 Output:[/bold] [cyan]{kiro_dir}[/cyan]")


@app.command()
def setup(
    project_dir: Path = typer.Argument(..., help="Project directory (receives .kiro/)"),
    bmad_dir: Optional[Path] = typer.Option(
        None,
        "--bmad-dir",
        "-b",
        help="Installed BMAD folder (default: PROJECT_DIR/_bmad)",
    ),
    steering: bool = typer.Option(
        False,
        "--steering",
        "-s",
        help="Also generate steering files from planning artifacts",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Generate Kiro agents, commands and (optionally) steering files.

    Previously generated files are replaced; user-authored files in
    .kiro/ are left alone.
    """
    configure_logging(verbose)
    settings = InstallerSettings.from_env()
    installer = KiroCliSetup(settings)

    console.print(Panel.fit(
        f"[bold cyan]Kiro CLI Setup[/bold cyan]\n\n"
        f"Project: [cyan]{project_dir}[/cyan]\n"
        f"BMAD: [cyan]{bmad_dir or project_dir / settings.bmad_folder_name}[/cyan]",
        border_style="cyan",
    ))

    try:
        result = installer.setup(project_dir, bmad_dir, SetupOptions(steering=steering))
    except KiroSetupError as e:
        console.print(f"\n[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)

    _print_summary(result, installer.kiro_dir(project_dir))

    console.print(Panel.fit(
        f"[bold green]✓ {len(result.agents)} agents and {result.commands_generated} commands configured[/bold green]\n\n"
        f"Start an agent with: [cyan]{settings.cli_command} --agent <agent-name>[/cyan]",
        border_style="green",
    ))


@app.command()
def steering(
    project_dir: Path = typer.Argument(..., help="Project directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Regenerate steering files from BMAD planning artifacts."""
    configure_logging(verbose)
    installer = KiroCliSetup(InstallerSettings.from_env())

    result = installer.generate_steering(project_dir)
    _print_steering(result)

    if result.errors:
        raise typer.Exit(1)


@app.command()
def check():
    """Check whether the Kiro CLI is installed."""
    installer = KiroCliSetup(InstallerSettings.from_env())

    if installer.is_available():
        console.print(f"[bold green]✓ {installer.settings.cli_command} is available[/bold green]")
        return

    console.print(f"[yellow]⚠️  {installer.settings.cli_command} not found[/yellow]\n")
    console.print(installer.get_install_instructions())
    raise typer.Exit(1)


@app.command()
def detect(
    project_dir: Path = typer.Argument(..., help="Project directory"),
    bmad_dir: Optional[Path] = typer.Option(
        None,
        "--bmad-dir",
        "-b",
        help="Installed BMAD folder (default: PROJECT_DIR/_bmad)",
    ),
):
    """Show the installation state of a project."""
    installer = KiroCliSetup(InstallerSettings.from_env())
    detection = installer.detect_installation(project_dir, bmad_dir)

    color = {
        InstallState.ABSENT: "red",
        InstallState.FRESH: "green",
        InstallState.EXISTING: "cyan",
    }[detection.state]

    console.print(f"[bold]State:[/bold] [{color}]{detection.state.value}[/{color}]")
    console.print(f"   .kiro/: {'yes' if detection.target_exists else 'no'}")
    console.print(f"   agents/: {'yes' if detection.agents_exists else 'no'}")
    console.print(f"   commands/: {'yes' if detection.commands_exists else 'no'}")
    console.print(f"   steering/: {'yes' if detection.steering_exists else 'no'}")

    if not detection.can_proceed:
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold cyan]kirosetup[/bold cyan] v{__version__}")
    console.print("Kiro CLI integration for the BMad Method")


if __name__ == "__main__":
    app()
