"""Account statistics command."""

import click

from ..errors import GatewayError
from ..services.stats import (
    body_weight_stats,
    progress_data,
    recent_workouts,
    workout_stats,
)
from .base import (
    async_command,
    connect_gateway,
    credential_options,
    echo_error,
    echo_info,
    format_table,
)


@click.command()
@credential_options
@click.option("--exercise", "-e", default=None, help="Show the volume trend for one exercise")
@click.option("--recent", "-n", default=5, type=int, help="Recent workouts to list (default: 5)")
@click.pass_context
@async_command
async def stats(
    ctx: click.Context,
    email: str | None,
    password: str | None,
    exercise: str | None,
    recent: int,
):
    """Show workout and body-weight statistics for your account."""
    gateway = await connect_gateway(ctx, email, password)

    try:
        workouts = await gateway.list_workouts()
        body_weights = await gateway.list_body_weights()
    except GatewayError as e:
        echo_error(str(e))
        ctx.exit(1)
    finally:
        await gateway.sign_out()

    ws = workout_stats(workouts)
    click.echo()
    click.echo(click.style("Workouts", bold=True))
    click.echo("=" * 40)
    click.echo(f"Total sets:       {ws.total_workouts}")
    click.echo(f"Total volume:     {ws.total_volume:,.1f} kg")
    click.echo(f"Average volume:   {ws.average_volume:,.1f} kg")
    click.echo(f"Unique exercises: {ws.unique_exercises}")

    latest = recent_workouts(workouts, limit=recent)
    if latest:
        click.echo()
        rows = [
            [w.date.isoformat(), w.exercise_name, str(w.reps), f"{w.weight:g}"]
            for w in latest
        ]
        click.echo(format_table(["Date", "Exercise", "Reps", "Weight"], rows))

    bs = body_weight_stats(body_weights)
    click.echo()
    click.echo(click.style("Body weight", bold=True))
    click.echo("=" * 40)
    if bs.total_entries == 0:
        echo_info("No body-weight entries yet.")
    else:
        click.echo(f"Current: {bs.current_weight:g} kg")
        click.echo(f"Change:  {bs.weight_change:+g} kg since {bs.initial_weight:g} kg")
        click.echo(f"Average: {bs.average_weight:.1f} kg over {bs.total_entries} entries")

    if exercise:
        points = progress_data(workouts, exercise)
        click.echo()
        click.echo(click.style(f"Volume trend: {exercise}", bold=True))
        click.echo("=" * 40)
        if not points:
            echo_info("No matching workouts.")
        for point in points:
            click.echo(f"  {point.date.isoformat()}  {point.exercise_name}: {point.value:g}")
