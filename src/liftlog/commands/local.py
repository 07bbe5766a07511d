"""Commands for the on-device (pre-account) data snapshot."""

import json

import click

from ..models.migration import LocalSnapshot
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_snapshot_store,
)


@click.group()
@click.pass_context
def local(ctx):
    """Inspect or load data stored on this device."""
    ensure_initialized(ctx)


@local.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--normalize",
    is_flag=True,
    help="Normalize workout exercise names and fill an empty library from them",
)
@click.pass_context
@async_command
async def import_snapshot(ctx: click.Context, path: str, normalize: bool):
    """Load a snapshot JSON file into device storage.

    PATH is a JSON object with "workouts", "bodyWeights" and
    "exerciseLibrary" arrays. Any existing snapshot is replaced.
    """
    try:
        with open(path) as f:
            snapshot = LocalSnapshot.from_dict(json.load(f))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        echo_error(f"Invalid snapshot file: {e}")
        ctx.exit(1)

    if normalize and snapshot.normalize_names():
        echo_info("Exercise names normalized")

    store = get_snapshot_store()
    await store.write_snapshot(snapshot)

    counts = snapshot.counts()
    echo_success(
        f"Imported {counts['workouts']} workouts, {counts['body_weights']} body weights "
        f"and {counts['exercises']} exercises"
    )

    unreadable = len(snapshot.unreadable_workouts) + len(snapshot.unreadable_body_weights)
    if unreadable:
        echo_warning(f"{unreadable} entries could not be read and will be reported when migrating")


@local.command("show")
@click.option("--limit", "-n", default=10, type=int, help="Workouts to list (default: 10)")
@click.pass_context
@async_command
async def show(ctx: click.Context, limit: int):
    """Show what is stored on this device."""
    store = get_snapshot_store()
    snapshot = await store.read_snapshot()

    if snapshot is None:
        echo_info("No local data on this device.")
        return

    counts = snapshot.counts()
    click.echo()
    click.echo(click.style("Local data", bold=True))
    click.echo("=" * 40)
    click.echo(f"Workouts:     {counts['workouts']}")
    click.echo(f"Body weights: {counts['body_weights']}")
    click.echo(f"Exercises:    {counts['exercises']}")

    if snapshot.workouts:
        click.echo()
        rows = [
            [w.date.isoformat(), w.exercise_name, str(w.reps), f"{w.weight:g}"]
            for w in snapshot.workouts[:limit]
        ]
        click.echo(format_table(["Date", "Exercise", "Reps", "Weight"], rows))
        if len(snapshot.workouts) > limit:
            click.echo(f"...and {len(snapshot.workouts) - limit} more")
