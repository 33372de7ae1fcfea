"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Any, Callable, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from provisioner.api.base import APIError
from provisioner.api.client import HTTPComputeAPI
from provisioner.cli.commands import complete_image, create_server
from provisioner.config import load_config
from provisioner.errors import ProvisioningError
from provisioner.models.server import CommercialType, CreateServerArgs, random_server_name
from provisioner.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="provisionctl",
    help="Instance Provisioner - create compute servers from sparse descriptions",
    add_completion=False,
)

# Errors go to stderr so stdout stays usable for completion output
console = Console(stderr=True)


def _run_cli_command(
    handler: Callable[..., Any],
    config_path: Optional[Path],
    verbose: bool = False,
    **kwargs: Any,
):
    """Helper to run a CLI command with an API client and error handling."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValidationError) as e:
        console.print(f"[red]Error:[/red] invalid configuration: {e}")
        raise typer.Exit(1) from e

    setup_logging("INFO" if verbose else config.log_level)

    try:
        with HTTPComputeAPI(config.api) as api:
            return handler(api, config, **kwargs)
    except ProvisioningError as e:
        console.print(f"[red]Error:[/red] {e}")
        if e.argument:
            console.print(f"[dim]Argument:[/dim] {e.argument}")
        if e.hint:
            console.print(f"[yellow]Hint:[/yellow] {e.hint}")
        raise typer.Exit(1) from e
    except (APIError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command("create")
def create_command(
    image: str = typer.Option(..., "--image", "-i", help="Image ID or label of the server"),
    commercial_type: Optional[CommercialType] = typer.Option(
        None, "--type", "-t", help="Server commercial type"
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Server name"),
    root_volume: Optional[str] = typer.Option(
        None, "--root-volume", help="Local root volume of the server (e.g. l:20GB)"
    ),
    additional_volumes: Optional[List[str]] = typer.Option(
        None,
        "--additional-volume",
        "-v",
        help="Additional local or block volume (l:20GB, b:100GB or a volume UUID), repeatable",
    ),
    ip: str = typer.Option(
        "new",
        "--ip",
        help="Either an IP, an IP ID, 'new' to create a new IP, "
        "'dynamic' to use a dynamic IP or 'none' for no public IP",
    ),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Server tag, repeatable"),
    ipv6: bool = typer.Option(False, "--ipv6", help="Enable IPv6"),
    start: bool = typer.Option(False, "--start", help="Start the server after its creation"),
    security_group_id: Optional[str] = typer.Option(
        None, "--security-group-id", help="Security group ID to use for this server"
    ),
    placement_group_id: Optional[str] = typer.Option(
        None, "--placement-group-id", help="Placement group ID in which to create the server"
    ),
    bootscript_id: Optional[str] = typer.Option(
        None, "--bootscript-id", help="Bootscript ID to use, local boot if empty"
    ),
    zone: Optional[str] = typer.Option(None, "--zone", "-z", help="Zone to create the server in"),
    organization_id: Optional[str] = typer.Option(
        None, "--organization-id", help="Organization owning the server"
    ),
    wait: bool = typer.Option(False, "--wait", "-w", help="Wait for the server to be ready"),
    verbose: bool = typer.Option(False, "--verbose", help="Log remote calls"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
):
    """Create an instance server."""

    def handler(api, config, **kwargs):
        args = CreateServerArgs(
            zone=zone or config.defaults.zone,
            organization_id=organization_id or config.defaults.organization_id,
            image=image,
            commercial_type=(
                commercial_type.value if commercial_type else config.defaults.commercial_type
            ),
            name=name or random_server_name(),
            root_volume=root_volume,
            additional_volumes=additional_volumes or [],
            ip=ip,
            tags=tags or [],
            ipv6=ipv6,
            start=start,
            security_group_id=security_group_id,
            placement_group_id=placement_group_id,
            bootscript_id=bootscript_id,
        )
        return create_server(api, config, args, wait=wait)

    _run_cli_command(handler, config_path, verbose=verbose)


@app.command("complete-image")
def complete_image_command(
    prefix: Optional[str] = typer.Argument(None, help="Label prefix to complete"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
):
    """List marketplace image labels starting with a prefix."""
    _run_cli_command(complete_image, config_path, prefix=prefix)


def main():
    """Main entry point for CLI."""
    app()
