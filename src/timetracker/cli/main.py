"""Main CLI entry point."""

import click
from timetracker.storage.factories import LEDGER_PATH_ENVVAR, create_json_store
from timetracker.utils.logging_setup import setup_logging

# Import and register all commands at module level
from timetracker.cli.commands import (
    project,
    session,
    analyze,
    subprojects,
)


@click.group()
@click.option(
    "--ledger-path",
    type=click.Path(dir_okay=False),
    help=f"Path to time sheet file (overrides {LEDGER_PATH_ENVVAR} environment variable)",
    envvar=LEDGER_PATH_ENVVAR,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="TIMETRACKER_LOG_LEVEL",
    help="Verbosity of diagnostic output on stderr",
)
@click.pass_context
def cli(ctx, ledger_path: str | None, log_level: str):
    """Timetracker - Work time tracking application.

    Track work sessions of a project, including homeoffice days, and
    analyze the tracked time and its cost.
    """
    ctx.ensure_object(dict)

    # Resolve the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(log_level)
        ctx.obj["store"] = create_json_store(ledger_path=ledger_path)


# Register all commands
project.register_commands(cli)
session.register_commands(cli)
analyze.register_commands(cli)
subprojects.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
