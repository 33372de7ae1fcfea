"""Command implementations for CLI."""

from typing import Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from provisioner.api.base import ComputeAPI
from provisioner.models.config import ProvisionerConfig
from provisioner.models.resources import Server
from provisioner.models.server import CreateServerArgs
from provisioner.orchestrator import ServerProvisioner
from provisioner.resolvers.autocomplete import complete_image_label


console = Console()

SERVER_ACTION_TIMEOUT = 600.0


def create_server(
    api: ComputeAPI,
    config: ProvisionerConfig,
    args: CreateServerArgs,
    wait: bool = False,
) -> Server:
    """Create a server and print its summary."""
    provisioner = ServerProvisioner(
        api, implicit_root_volume_size=config.validation.implicit_root_volume_size
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Creating server {args.name}...", total=None)
        server = provisioner.create_server(args)
        if wait:
            progress.update(task, description=f"Waiting for server {server.id}...")
            server = api.wait_for_server(args.zone, server.id, SERVER_ACTION_TIMEOUT)
        progress.update(task, completed=True)

    console.print(f"[green]✓[/green] Server {server.name} created")
    print_server(server)
    return server


def print_server(server: Server):
    """Render a server record as a table."""
    table = Table(title="Server", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("ID", server.id)
    table.add_row("Name", server.name)
    table.add_row("Type", server.commercial_type or "")
    table.add_row("State", server.state or "")
    if server.public_ip:
        kind = "dynamic" if server.public_ip.dynamic else server.public_ip.id
        table.add_row("Public IP", f"{server.public_ip.address or ''} ({kind})")
    else:
        table.add_row("Public IP", "[dim]none[/dim]")
    for index, volume in sorted(server.volumes.items()):
        volume_id = volume.get("id", "") if isinstance(volume, dict) else str(volume)
        table.add_row(f"Volume {index}", volume_id)
    if server.tags:
        table.add_row("Tags", ", ".join(server.tags))

    console.print(table)


def complete_image(api: ComputeAPI, config: ProvisionerConfig, prefix: Optional[str] = None):
    """Print image labels matching prefix, one per line."""
    for label in sorted(complete_image_label(api, prefix or "")):
        console.print(label, highlight=False)
