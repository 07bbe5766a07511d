"""Initialize device storage command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Initialize liftlog device storage.

    This creates the data directory and the SQLite file that holds the
    local snapshot and the migration marker.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing liftlog in {data_dir}")

    await init_db(db_path)
    echo_success("Device storage initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Load data recorded before you had an account:")
    click.echo("     liftlog local import <snapshot.json>")
    click.echo()
    click.echo("  2. Move it to your account:")
    click.echo("     liftlog migrate run")
