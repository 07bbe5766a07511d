"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click
import questionary

from ..clients.supabase import SupabaseGateway
from ..config import load_settings
from ..db import DeviceStorageRepository, LocalSnapshotStore, get_db_path
from ..errors import AuthenticationError, ConfigurationError


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_data_dir() -> Path:
    """Get the data directory path."""
    return load_settings().data_dir


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the device storage is initialized."""
    db_path = get_db_path(get_data_dir())
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Device storage not initialized. Run 'liftlog init' first."
        )
        ctx.exit(1)


def get_snapshot_store() -> LocalSnapshotStore:
    """Snapshot store over the configured device storage."""
    return LocalSnapshotStore(DeviceStorageRepository(get_db_path(get_data_dir())))


async def connect_gateway(
    ctx: click.Context, email: str | None, password: str | None
) -> SupabaseGateway:
    """Create a Supabase gateway and sign in.

    Prompts for whatever credentials were not given. Exits the command
    on configuration or sign-in errors.
    """
    try:
        gateway = SupabaseGateway.from_settings(load_settings())
    except ConfigurationError as e:
        echo_error(str(e))
        ctx.exit(1)

    if not email:
        email = await questionary.text("Email:").ask_async()
    if not password:
        password = await questionary.password("Password:").ask_async()

    if not email or not password:
        echo_error("Email and password are required to sign in.")
        ctx.exit(1)

    try:
        account_id = await gateway.sign_in(email, password)
    except AuthenticationError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_info(f"Signed in as {email} ({account_id})")
    return gateway


def credential_options(f):
    """Add --email/--password options (also read from the environment)."""
    f = click.option(
        "--password",
        envvar="LIFTLOG_PASSWORD",
        default=None,
        help="Account password (or LIFTLOG_PASSWORD)",
    )(f)
    f = click.option(
        "--email",
        envvar="LIFTLOG_EMAIL",
        default=None,
        help="Account email (or LIFTLOG_EMAIL)",
    )(f)
    return f


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(lines)
