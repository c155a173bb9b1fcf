"""Main CLI entry point using Typer."""

from __future__ import annotations

import asyncio
import platform
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from flux_tui import __version__
from flux_tui.config import CONFIG_FILE, FluxTUIConfig, load_config
from flux_tui.core.reducer import AppController
from flux_tui.integrations.kubernetes.client import KubernetesClient
from flux_tui.integrations.kubernetes.exceptions import KubernetesError
from flux_tui.integrations.kubernetes.flux_cli import FluxCLI, FluxError
from flux_tui.logging.config import configure_logging
from flux_tui.services.kubernetes.flux_manager import FluxManager
from flux_tui.tui.apps.flux import FluxApp

app = typer.Typer(
    name="flux-tui",
    help="Terminal dashboard for Flux CD Kustomizations, HelmReleases and HelmCharts.",
    add_completion=True,
)

console = Console()
logger = structlog.get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"flux-tui version {__version__}")
        raise typer.Exit()


def run_dashboard(config: FluxTUIConfig) -> None:
    """Connect to the cluster, load the first snapshot and run the TUI.

    Args:
        config: Resolved configuration.

    Raises:
        KubernetesError: If no Kubernetes configuration can be loaded.
    """
    client = KubernetesClient(config)
    manager = FluxManager(client)
    runner = FluxCLI(
        config.flux_binary,
        context=config.context,
        kubeconfig=config.kubeconfig,
        timeout=config.command_timeout,
    )

    controller = asyncio.run(
        AppController.create(
            manager,
            runner,
            cluster_name=client.cluster_name,
            namespace_filter=config.namespace,
        )
    )
    logger.info(
        "dashboard_starting",
        cluster=client.cluster_name,
        context=client.get_current_context(),
        refresh_interval=config.refresh_interval,
    )
    with client:
        FluxApp(controller, refresh_interval=config.refresh_interval).run()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help=f"Config file (default: {CONFIG_FILE}).",
    ),
    kubeconfig: str | None = typer.Option(
        None,
        "--kubeconfig",
        help="Path to the kubeconfig file.",
    ),
    context: str | None = typer.Option(
        None,
        "--context",
        help="Kubeconfig context to use.",
    ),
    namespace: str | None = typer.Option(
        None,
        "--namespace",
        "-n",
        help="Start filtered to this namespace.",
    ),
    refresh_interval: int | None = typer.Option(
        None,
        "--refresh-interval",
        help="Seconds between automatic refreshes.",
    ),
) -> None:
    """flux-tui - Watch and reconcile Flux resources from the terminal."""
    dashboard = ctx.invoked_subcommand is None
    # The dashboard owns the terminal, so logs only go to the log file
    configure_logging(verbose=verbose, debug=debug, console=not dashboard)

    try:
        config = load_config(config_path).with_overrides(
            kubeconfig=kubeconfig,
            context=context,
            namespace=namespace,
            refresh_interval=refresh_interval,
        )
    except (OSError, ValueError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1) from None

    ctx.obj = config
    if not dashboard:
        return

    try:
        run_dashboard(config)
    except KubernetesError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None


@app.command()
def status(ctx: typer.Context) -> None:
    """Show configuration, cluster connectivity and flux CLI availability."""
    config: FluxTUIConfig = ctx.obj
    logger.info("Checking status")

    table = Table(title="flux-tui Status")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Status", style="green")
    table.add_column("Details", style="dim")

    table.add_row("Version", __version__, "flux-tui")
    table.add_row("Python", platform.python_version(), platform.python_implementation())
    table.add_row(
        "Config",
        "found" if CONFIG_FILE.exists() else "defaults",
        str(CONFIG_FILE),
    )

    try:
        with KubernetesClient(config) as client:
            reachable = client.check_connection()
            table.add_row(
                "Cluster",
                client.cluster_name,
                f"context {client.get_current_context()}",
            )
            table.add_row(
                "API server",
                "reachable" if reachable else "[red]unreachable[/red]",
                "",
            )
    except KubernetesError as e:
        table.add_row("Cluster", "[red]unavailable[/red]", str(e))

    runner = FluxCLI(config.flux_binary)
    if runner.is_available():
        try:
            table.add_row("flux CLI", runner.get_version(), runner.binary)
        except FluxError as e:
            table.add_row("flux CLI", "[yellow]error[/yellow]", str(e))
    else:
        table.add_row("flux CLI", "[red]not found[/red]", "reconcile and suspend unavailable")

    console.print(table)


if __name__ == "__main__":
    app()
