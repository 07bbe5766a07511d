"""Web server command."""

import click

from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the migration API server.

    Serves the JSON endpoints a front end uses to check, preview, run
    or skip the migration of this device's data.

    Examples:

        # Start on default port (8000)
        liftlog serve

        # Development mode with auto-reload
        liftlog serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting liftlog API server...", fg="green"))
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app() if not reload else "liftlog.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
