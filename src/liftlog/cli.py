"""CLI entry point for liftlog."""

import click

from .commands import init, library, local, migrate, serve, stats
from .config import configure_logging, load_settings


@click.group()
@click.version_option(version="0.1.0", prog_name="liftlog")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """liftlog: workout and body-weight tracking on Supabase.

    Moves data recorded on this device into your account, once, and
    summarizes what the account holds.

    Example usage:

        # Set up device storage
        liftlog init

        # Load and inspect data recorded before you had an account
        liftlog local import snapshot.json
        liftlog migrate preview

        # Move it to your account
        liftlog migrate run --email you@example.com

        # Find exercises already in your library
        liftlog library list --search bench
    """
    configure_logging(verbose=verbose, debug=load_settings().debug)


# Register commands
main.add_command(init)
main.add_command(library)
main.add_command(local)
main.add_command(migrate)
main.add_command(stats)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
