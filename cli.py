"""
CLI tool for running and inspecting the relay.

Provides commands for serving the application, listing the relay's
WebSocket events and polling a running relay's connection statistics.
"""

import httpx
import typer
import uvicorn
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from care_relay.api.ws.constants import InboundEvent, OutboundEvent
from care_relay.schemas.events import LoginData
from care_relay.schemas.messages import (
    ChatMessage,
    MessageReceivedPayload,
    ProfileDisclosureMessage,
    ProfileReceivedPayload,
)
from care_relay.settings import app_settings

EVENT_SCHEMAS: dict[InboundEvent | OutboundEvent, type[BaseModel]] = {
    InboundEvent.LOGIN: LoginData,
    InboundEvent.CHAT_MESSAGE: ChatMessage,
    InboundEvent.PROFILE_DISCLOSURE: ProfileDisclosureMessage,
    OutboundEvent.MESSAGE_RECEIVED: MessageReceivedPayload,
    OutboundEvent.PROFILE_RECEIVED: ProfileReceivedPayload,
}

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="relay-cli",
    help="Care Relay CLI - Run the relay and inspect its WebSocket protocol",
    add_completion=False,
)
console = Console()


def _describe_fields(model: type[BaseModel]) -> str:
    """Wire field names of a model, required ones highlighted."""
    parts = []
    for name, field in model.model_fields.items():
        wire_name = field.alias or name
        if field.is_required():
            parts.append(f"[green]{wire_name}[/green]")
        else:
            parts.append(f"[dim]{wire_name}?[/dim]")
    return ", ".join(parts)


@typer_app.command(name="events")
def events():
    """
    Display a table of the relay's WebSocket events.

    Shows every inbound and outbound event name with the fields of its
    `data` object. Optional fields are marked with `?`.

    Example:
        python cli.py events
    """
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]Relay WebSocket Events[/bold cyan]",
            border_style="cyan",
        )
    )
    console.print()

    table = Table(
        "Direction",
        "Event",
        "Data fields",
        title=f"Frames on {app_settings.WS_PATH}",
        show_lines=True,
    )

    for event, model in EVENT_SCHEMAS.items():
        direction = "in" if isinstance(event, InboundEvent) else "out"
        table.add_row(
            direction, f"[yellow]{event.value}[/yellow]", _describe_fields(model)
        )

    console.print(table)
    console.print()


@typer_app.command(name="stats")
def stats(
    url: str = typer.Option(
        f"http://localhost:{app_settings.PORT}",
        "--url",
        "-u",
        help="Base URL of a running relay",
    ),
    timeout: float = typer.Option(
        5.0, "--timeout", "-t", help="Request timeout in seconds"
    ),
):
    """
    Show connection statistics of a running relay.

    Polls the relay's /api/stats endpoint and prints bound identities per
    role, open sockets and uptime.

    Example:
        python cli.py stats --url http://localhost:5000
    """
    try:
        response = httpx.get(f"{url.rstrip('/')}/api/stats", timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        console.print(
            f"[red]✗[/red] Relay answered {e.response.status_code} "
            f"for [cyan]{e.request.url}[/cyan]"
        )
        raise typer.Exit(code=1)
    except httpx.HTTPError as e:
        console.print(f"[red]✗[/red] Could not reach relay at {url}: {e}")
        raise typer.Exit(code=1)

    data = response.json()
    connections = data["connections"]

    table = Table("Metric", "Value", title="Relay Statistics")
    table.add_row("Bound seekers", str(connections["seekerCount"]))
    table.add_row("Bound providers", str(connections["providerCount"]))
    table.add_row("Bound total", str(connections["totalCount"]))
    table.add_row("Open sockets", str(data["openConnections"]))
    table.add_row("Uptime (s)", f"{data['uptime']:.0f}")

    console.print()
    console.print(table)
    console.print()


@typer_app.command(name="serve")
def serve(
    host: str = typer.Option(app_settings.HOST, "--host", help="Bind address"),
    port: int = typer.Option(app_settings.PORT, "--port", help="Bind port"),
    reload: bool = typer.Option(
        False, "--reload", help="Restart on code changes"
    ),
):
    """
    Run the relay with uvicorn.

    Example:
        python cli.py serve --port 5000
    """
    uvicorn.run(
        "care_relay:application",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    typer_app()
