"""whatsapp-rest CLI entry point."""

from typing import Optional

import typer
from rich.console import Console

from whatsapp_rest.core.domain.errors import ConfigError

app = typer.Typer(
    name="whatsapp-rest",
    help="WhatsApp REST API - send and receive WhatsApp messages over HTTP",
    add_completion=True,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="HTTP port (default 3000)"),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML config file (overrides WHATSAPP_REST_CONFIG)"
    ),
):
    """Run the HTTP server and start the WhatsApp session."""
    import uvicorn

    from whatsapp_rest.api.server import create_app
    from whatsapp_rest.infrastructure.config.settings import load_settings

    try:
        settings = load_settings(config_path=config)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc.message}")
        raise typer.Exit(code=1) from exc

    updates = {}
    if host:
        updates["host"] = host
    if port:
        updates["port"] = port
    settings = settings.model_copy(update=updates)

    console.print(
        f"[bold green]Server running on[/bold green] "
        f"[cyan]http://localhost:{settings.port}[/cyan]"
    )
    console.print(f"API endpoints available at [cyan]http://localhost:{settings.port}/api[/cyan]")
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def version():
    """Show whatsapp-rest version."""
    from whatsapp_rest import __version__

    console.print(f"[bold blue]Version:[/bold blue] [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
