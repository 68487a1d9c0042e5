"""Command-line interface for Cook Mode."""
import asyncio
import logging
import shlex
import time

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .settings import CookModeSettings
from .wakelock import ProcessWakeLockProvider, ToggleControl, WakeLockSession
from .wakelock.types import StatusKind

console = Console()

STATUS_STYLES = {
    StatusKind.ACTIVE: "green",
    StatusKind.INACTIVE: "yellow",
    StatusKind.ERROR: "red",
}


class ConsoleStatusSink:
    """Print status changes to the terminal."""

    def __init__(self, console: Console):
        self.console = console

    def set_status(self, kind: StatusKind, text: str):
        if kind == StatusKind.HIDDEN:
            return
        style = STATUS_STYLES.get(kind, "white")
        self.console.print(f"[{style}]{text}[/]")


def make_provider(command) -> ProcessWakeLockProvider:
    return ProcessWakeLockProvider(shlex.split(command) if command else None)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose):
    """Cook Mode - keep the screen awake while cooking."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@main.command()
@click.option("--command", default=None, help="Inhibitor command to use instead of the platform default")
def probe(command):
    """Check whether this machine supports screen wake locks."""
    provider = make_provider(command)

    if provider.supports_wake_lock():
        console.print(f"[green]Wake lock supported[/] [dim]({' '.join(provider.command)})[/]")
    else:
        console.print(f"[red]{CookModeSettings().error_text}[/]")
        raise SystemExit(1)


@main.command()
@click.option("--minutes", default=0.0, help="Release after this many minutes (0 = until Ctrl-C)")
@click.option("--command", default=None, help="Inhibitor command to use instead of the platform default")
def hold(minutes, command):
    """Keep the screen awake from the terminal."""
    texts = CookModeSettings().status_texts
    control = ToggleControl()
    session = WakeLockSession(make_provider(command), control, ConsoleStatusSink(console), texts=texts)

    if not session.initialize():
        raise SystemExit(1)

    async def run_session():
        control.set_checked(True)
        await session.enable()
        deadline = time.monotonic() + minutes * 60 if minutes else None
        try:
            while session.is_held:
                if deadline is not None and time.monotonic() >= deadline:
                    break
                await asyncio.sleep(0.5)
        finally:
            session.handle_unload()

    try:
        asyncio.run(run_session())
    except KeyboardInterrupt:
        pass

    console.print("[dim]Cook Mode off[/]")


@main.command()
def settings():
    """Show the default Cook Mode settings."""
    table = Table(title="Cook Mode Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Default", style="green")
    for name, value in CookModeSettings().model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


@main.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8000, help="Port to run server on")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def web(host, port, reload):
    """Start the Cook Mode web service."""
    import uvicorn

    console.print(Panel.fit(
        f"[bold]Cook Mode[/]\n"
        f"[dim]Starting server at http://{host}:{port}[/]",
        border_style="green"
    ))

    uvicorn.run(
        "cook_mode.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    main()
