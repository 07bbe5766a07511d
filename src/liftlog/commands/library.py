"""Exercise library commands."""

import click

from ..errors import GatewayError, ValidationError
from ..utils.exercise_utils import exercise_suggestions
from .base import (
    async_command,
    connect_gateway,
    credential_options,
    echo_error,
    echo_info,
    echo_success,
)


@click.group()
def library():
    """Browse or prune your account's exercise library."""
    pass


@library.command("list")
@credential_options
@click.option("--search", "-s", default="", help="Only names containing this text")
@click.option("--limit", "-n", default=10, type=int, help="Names to show (default: 10)")
@click.pass_context
@async_command
async def list_exercises(
    ctx: click.Context, email: str | None, password: str | None, search: str, limit: int
):
    """List exercises in your library, newest first."""
    gateway = await connect_gateway(ctx, email, password)
    try:
        entries = await gateway.get_exercise_library()
    except GatewayError as e:
        echo_error(str(e))
        ctx.exit(1)
    finally:
        await gateway.sign_out()

    names = exercise_suggestions([e.display_name for e in entries], search, limit)
    if not names:
        echo_info("No matching exercises." if search else "Your exercise library is empty.")
        return

    for name in names:
        click.echo(f"  - {name}")


@library.command("remove")
@click.argument("name")
@credential_options
@click.pass_context
@async_command
async def remove_exercise(
    ctx: click.Context, name: str, email: str | None, password: str | None
):
    """Remove NAME from your library.

    Exercises still used by a logged workout cannot be removed.
    """
    gateway = await connect_gateway(ctx, email, password)
    try:
        removed = await gateway.remove_exercise_from_library(name)
    except (ValidationError, GatewayError) as e:
        echo_error(str(e))
        ctx.exit(1)
    finally:
        await gateway.sign_out()

    if removed:
        echo_success(f"Removed {name} from your library.")
    else:
        echo_info(f"{name} is not in your library.")
