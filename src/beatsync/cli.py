"""Command-line interface for beatsync."""

import logging
from pathlib import Path

import click
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from beatsync import __version__
from beatsync.artifacts import ArtifactKind
from beatsync.config import IdeConfigStore, load_config, resolve_content_root, save_config
from beatsync.config.loader import (
    get_home_config_path,
    get_local_config_path,
    home_config_exists,
    local_config_exists,
)
from beatsync.console import console
from beatsync.errors import BeatSyncError, MissingInstallationError, UnknownTargetError
from beatsync.installer import TargetResult, install, uninstall
from beatsync.sync import detect
from beatsync.targets import TARGETS, RenderTarget, get_target_names, resolve_targets

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Route log records through Rich at the given level."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"beatsync [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def _from_cli(ctx: click.Context, param_name: str) -> bool:
    """Check if a parameter was explicitly set on the command line."""
    source = ctx.get_parameter_source(param_name)
    return source == click.core.ParameterSource.COMMANDLINE


def _resolve_or_exit(names: tuple[str, ...]) -> list[RenderTarget]:
    try:
        return resolve_targets(names)
    except UnknownTargetError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("Available targets: " + ", ".join(get_target_names()))
        raise SystemExit(1) from None


def _print_results(results: list[TargetResult]) -> None:
    table = Table(title="Install Summary")
    table.add_column("Target", style="cyan")
    for kind in ArtifactKind:
        table.add_column(kind.dirname.capitalize(), justify="right")
    table.add_column("Written", justify="right")
    table.add_column("Destination")

    for result in results:
        if result.success:
            counts = [str(result.counts.get(kind, 0)) for kind in ArtifactKind]
            table.add_row(
                result.target, *counts, str(result.written), str(result.destination)
            )
        else:
            dashes = ["-"] * len(ArtifactKind)
            table.add_row(
                result.target, *dashes, "[red]failed[/red]", str(result.destination)
            )

    console.print(table)
    for result in results:
        if not result.success:
            console.print(f"[red]✗ {result.target}: {escape(result.error or '')}[/red]")


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """beatsync - install BEAT agents, tasks, tools and workflows into IDEs."""
    config = load_config()
    configure_logging("DEBUG" if verbose else (config.log_level or "WARNING"))

    if ctx.invoked_subcommand is None:
        console.print("[bold]beatsync[/bold] - BEAT content for your IDEs")
        console.print("\nRun [cyan]beatsync --help[/cyan] for available commands.")


@main.command("install")
@click.option(
    "--target",
    "-t",
    "target_names",
    multiple=True,
    help="Target to install into (repeatable). See `beatsync targets`.",
)
@click.option(
    "--module",
    "-m",
    "modules",
    multiple=True,
    help="Module to include besides core (repeatable).",
)
@click.option(
    "--content-root",
    type=click.Path(file_okay=False, path_type=Path),
    help="BEAT installation directory (default: ./beat).",
)
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Project directory to install into (default: current directory).",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    default=False,
    help="Stop at the first target that fails.",
)
@click.pass_context
def install_command(
    ctx: click.Context,
    target_names: tuple[str, ...],
    modules: tuple[str, ...],
    content_root: Path | None,
    project_dir: Path,
    fail_fast: bool,
) -> None:
    """Install BEAT content into one or more targets."""
    config = load_config(project_dir)

    # Override with config values if not explicitly set on CLI
    if not _from_cli(ctx, "target_names") and config.targets:
        target_names = config.targets
    if not _from_cli(ctx, "modules") and config.modules:
        modules = config.modules
    if not _from_cli(ctx, "fail_fast") and config.fail_fast is not None:
        fail_fast = config.fail_fast
    content_root = resolve_content_root(config, project_dir, content_root)

    if not target_names:
        console.print("[red]No targets selected. Use --target or set 'targets' in config.[/red]")
        console.print("Available targets: " + ", ".join(get_target_names()))
        raise SystemExit(1)

    targets = _resolve_or_exit(target_names)

    try:
        results = install(
            project_dir, content_root, targets, modules, fail_fast=fail_fast
        )
    except MissingInstallationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("[dim]Install BEAT into this project first, or pass --content-root.[/dim]")
        raise SystemExit(1) from None
    except BeatSyncError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from None

    _print_results(results)

    store = IdeConfigStore(content_root)
    for result in results:
        if not result.success:
            continue
        try:
            store.save(result.target, {"modules": list(modules)})
        except BeatSyncError as e:
            logger.warning("Could not save settings for %s: %s", result.target, e)

    if not all(r.success for r in results):
        raise SystemExit(1)


@main.command("uninstall")
@click.option(
    "--target",
    "-t",
    "target_names",
    multiple=True,
    help="Target to remove output from (repeatable, default: all project-level targets).",
)
@click.option(
    "--content-root",
    type=click.Path(file_okay=False, path_type=Path),
    help="BEAT installation directory (default: ./beat).",
)
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Project directory (default: current directory).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be removed without removing it.",
)
def uninstall_command(
    target_names: tuple[str, ...],
    content_root: Path | None,
    project_dir: Path,
    dry_run: bool,
) -> None:
    """Remove BEAT output from targets.

    Only entries owned by beatsync (the beat- prefix or the beat
    subdirectory) are removed, along with the target's stored settings.
    """
    if target_names:
        targets = _resolve_or_exit(target_names)
    else:
        targets = [t for t in TARGETS if not t.is_user_level]

    store = IdeConfigStore(
        resolve_content_root(load_config(project_dir), project_dir, content_root)
    )

    try:
        removed = uninstall(project_dir, targets, dry_run=dry_run)
        forgotten = [] if dry_run else [t.name for t in targets if store.delete(t.name)]
    except BeatSyncError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from None

    if not sum(removed.values()) and not forgotten:
        console.print("[dim]Nothing to remove.[/dim]")
        return

    verb = "would remove" if dry_run else "removed"
    for name, count in removed.items():
        if count:
            console.print(f"  [green]✓[/green] {name}: {verb} {count} entries")
    for name in forgotten:
        console.print(f"  [dim]Forgot stored settings for {name}[/dim]")


@main.command("targets")
def targets_command() -> None:
    """List supported targets."""
    table = Table(title="Targets")
    table.add_column("Name", style="cyan")
    table.add_column("Display name")
    table.add_column("Naming")
    table.add_column("Envelope")
    table.add_column("Install dir")

    for target in TARGETS:
        table.add_row(
            target.name,
            target.display_name,
            target.naming.value,
            target.envelope.value,
            target.install_dir,
        )
    console.print(table)


@main.command("status")
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Project directory (default: current directory).",
)
def status_command(project_dir: Path) -> None:
    """Show which targets have BEAT content installed."""
    content_root = resolve_content_root(load_config(project_dir), project_dir)
    stored = IdeConfigStore(content_root).load_all()

    console.print("[bold]Installed targets:[/bold]\n")
    for target in TARGETS:
        if detect(target, project_dir):
            line = f"  [green]✓[/green] {target.display_name} ([cyan]{target.name}[/cyan])"
            modules = stored.get(target.name, {}).get("modules")
            if modules:
                line += f" [dim]modules: {escape(', '.join(map(str, modules)))}[/dim]"
            console.print(line)
        else:
            console.print(f"  [dim]✗ {target.display_name} ({target.name})[/dim]")


@main.command("config")
@click.option(
    "--save",
    is_flag=True,
    default=False,
    help="Write the effective configuration to ./.beatsync/config.yaml.",
)
def config_command(save: bool) -> None:
    """Show the current effective configuration."""
    config = load_config()
    console.print("\n[bold]Current Effective Configuration:[/bold]")
    console.print(f"  [dim]Global: {get_home_config_path()}[/dim]")
    console.print(f"  [dim]Local: {get_local_config_path()}[/dim]")
    console.print()

    for key, value in config.to_dict().items():
        console.print(f"  {key}: {escape(str(value))}")

    console.print()
    if home_config_exists():
        console.print("  [green]Global config: exists[/green]")
    else:
        console.print("  [dim]Global config: not found[/dim]")
    if local_config_exists():
        console.print("  [green]Local config: exists[/green]")
    else:
        console.print("  [dim]Local config: not found[/dim]")

    if save:
        path = get_local_config_path()
        try:
            save_config(config, path)
        except BeatSyncError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise SystemExit(1) from None
        console.print(f"\n[green]Configuration saved to {path}[/green]")
