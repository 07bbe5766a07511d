"""Local-to-account migration commands."""

import click
import questionary

from ..models.migration import MigrationResult
from ..services.migration import MigrationService
from .base import (
    async_command,
    connect_gateway,
    credential_options,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    get_snapshot_store,
)


def _echo_result(result: MigrationResult) -> None:
    click.echo()
    click.echo(f"Exercises:    {result.exercises_migrated}")
    click.echo(f"Workouts:     {result.workouts_migrated}")
    click.echo(f"Body weights: {result.body_weights_migrated}")

    if result.errors:
        click.echo()
        click.echo(click.style(f"{len(result.errors)} error(s):", fg="yellow"))
        for line in result.error_preview():
            click.echo(f"  - {line}")


@click.group()
@click.pass_context
def migrate(ctx):
    """Move data recorded on this device to your account.

    Migration runs once per device. After a clean run (or a skip) it is
    not offered again.
    """
    ensure_initialized(ctx)


@migrate.command("status")
@async_command
async def status():
    """Show whether this device still needs to migrate."""
    store = get_snapshot_store()

    if await store.is_migration_needed():
        echo_info("Local data found. Run 'liftlog migrate run' to move it to your account.")
        return

    marker = await store.read_marker()
    if marker is None:
        echo_info("Nothing to migrate on this device.")
        return

    when = marker.migrated_at.isoformat() if marker.migrated_at else "unknown"
    if marker.skipped:
        echo_info(f"Migration skipped on {when}.")
    else:
        echo_success(f"Data migrated on {when}.")


@migrate.command("preview")
@async_command
async def preview():
    """Show what would be migrated."""
    store = get_snapshot_store()
    snapshot = await store.read_snapshot()

    if snapshot is None:
        echo_info("No local data to migrate.")
        return

    counts = snapshot.counts()
    click.echo()
    click.echo(click.style("Ready to migrate", bold=True))
    click.echo("=" * 40)
    click.echo(f"Workouts:     {counts['workouts']}")
    click.echo(f"Body weights: {counts['body_weights']}")
    click.echo(f"Exercises:    {counts['exercises']}")

    names = snapshot.canonical_exercise_names()
    if names:
        click.echo()
        click.echo("Exercise library after normalization:")
        for name in names:
            click.echo(f"  - {name}")


@migrate.command("run")
@credential_options
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@async_command
async def run(ctx: click.Context, email: str | None, password: str | None, yes: bool):
    """Migrate local data to your account.

    Exercises are added to your library, then workouts and body weights
    are uploaded one by one. Records that fail are reported and skipped.
    Local data is only cleared when everything made it across.
    """
    store = get_snapshot_store()

    if not await store.is_migration_needed():
        echo_info("No migration needed on this device.")
        return

    if not yes:
        proceed = await questionary.confirm(
            "Move the data stored on this device to your account?",
            default=True,
        ).ask_async()
        if not proceed:
            echo_info("Migration cancelled. Run 'liftlog migrate skip' to stop being asked.")
            return

    gateway = await connect_gateway(ctx, email, password)
    service = MigrationService(store, gateway)

    echo_info("Migrating...")
    try:
        result = await service.run_migration()
        completed = await service.complete_if_clean(result)
    finally:
        await gateway.sign_out()

    _echo_result(result)
    click.echo()

    if completed:
        echo_success("Migration complete. Local data cleared.")
    elif result.success:
        echo_warning(
            "Migration finished with errors. Local data was kept. "
            "Running again re-uploads every workout, so existing ones will be duplicated."
        )
    else:
        echo_error("Migration failed.")
        ctx.exit(1)


@migrate.command("skip")
@async_command
async def skip():
    """Keep local data on this device and stop offering migration."""
    service = MigrationService(get_snapshot_store())

    if not await service.is_migration_needed():
        echo_info("No migration needed on this device.")
        return

    await service.mark_skipped()
    echo_success("Migration skipped.")


@migrate.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@async_command
async def reset(yes: bool):
    """Forget that this device migrated (administrative)."""
    if not yes:
        proceed = await questionary.confirm(
            "Reset the migration marker? Migration will be offered again.",
            default=False,
        ).ask_async()
        if not proceed:
            return

    store = get_snapshot_store()
    await store.reset_marker()
    echo_success("Migration marker reset.")
