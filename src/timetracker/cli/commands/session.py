"""Work session commands."""

import click
from timetracker.cli.error_handling import handle_domain_error
from timetracker.domain.errors import DomainError
from timetracker.domain.session import SessionService
from timetracker.utils.text_wrap import printable
from timetracker.utils.time_parser import DATETIME_FORMAT, format_timestamp

HOMEOFFICE_HELP = "Track that this work was done in homeoffice"


def _describe(action: str, description: str | None, timestamp) -> str:
    if description:
        return f"{action} working on {printable(description)} at {format_timestamp(timestamp)}"
    return f"{action} working at {format_timestamp(timestamp)}"


@click.command("start")
@click.argument("description", required=False, metavar="DESCRIPTION")
@click.option("--homeoffice", "-H", is_flag=True, help=HOMEOFFICE_HELP)
@click.pass_context
def start_session(ctx, description: str | None, homeoffice: bool):
    """Start working.

    Examples:
        timetracker start
        timetracker start "Design review" --homeoffice
    """
    service = SessionService(ctx.obj["store"])
    try:
        session = service.start(description=description, homeoffice=homeoffice)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(_describe("Start", description, session.start))


@click.command("stop")
@click.argument("description", required=False, metavar="DESCRIPTION")
@click.option("--homeoffice", "-H", is_flag=True, help=HOMEOFFICE_HELP)
@click.pass_context
def stop_session(ctx, description: str | None, homeoffice: bool):
    """Stop working.

    DESCRIPTION replaces the description given at start. Without it the
    original description is kept.
    """
    service = SessionService(ctx.obj["store"])
    try:
        session = service.stop(description=description, homeoffice=homeoffice)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(_describe("Stop", session.description, session.stop))


@click.command("switch")
@click.argument("description", required=False, metavar="DESCRIPTION")
@click.option("--homeoffice", "-H", is_flag=True, help=HOMEOFFICE_HELP)
@click.pass_context
def switch_session(ctx, description: str | None, homeoffice: bool):
    """Switch from one work session to the next.

    Stops the running session (DESCRIPTION applies to it) and starts a new
    one at the same time.
    """
    service = SessionService(ctx.obj["store"])
    try:
        stopped, started = service.switch(description=description, homeoffice=homeoffice)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(_describe("Stop", stopped.description, stopped.stop))
    click.echo(_describe("Start", None, started.start))


@click.command("add")
@click.option(
    "--start",
    "-b",
    "start_time",
    required=True,
    metavar="START-TIME",
    help=f'Start time of the work session, formatted as "{DATETIME_FORMAT}"',
)
@click.option(
    "--stop",
    "-e",
    "stop_time",
    metavar="STOP-TIME",
    help=f'Stop time of the work session, formatted as "{DATETIME_FORMAT}"',
)
@click.option(
    "--description", "-d", help="A description of what was done during this work session"
)
@click.option("--homeoffice", "-H", is_flag=True, help=HOMEOFFICE_HELP)
@click.pass_context
def add_session(
    ctx, start_time: str, stop_time: str | None, description: str | None, homeoffice: bool
):
    """Add a work session that was not tracked live.

    Examples:
        timetracker add --start "2024-01-15 09:00" --stop "2024-01-15 12:30"
        timetracker add -b "2024-01-16 13:00" -e "2024-01-16 17:00" -d "Reviews" -H
    """
    service = SessionService(ctx.obj["store"])
    try:
        session = service.insert_historical(
            start=start_time, stop=stop_time, description=description, homeoffice=homeoffice
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    stop_str = format_timestamp(session.stop) if session.stop is not None else "now"
    click.echo(f"Added work session {format_timestamp(session.start)} - {stop_str}")
    if session.description:
        click.echo(f"  Description: {printable(session.description)}")
    if session.homeoffice:
        click.echo("  Homeoffice: yes")


@click.command("edit")
@click.option("--id", "-i", "session_id", required=True, type=click.IntRange(min=0),
              help="ID of the work session to be edited (as shown by analyze)")
@click.option("--start", "-b", "start_time", metavar="START-TIME", help="New start time")
@click.option("--stop", "-e", "stop_time", metavar="STOP-TIME", help="New stop time")
@click.option("--description", "-d", help="New description")
@click.option("--homeoffice/--no-homeoffice", default=None, help="Set or clear homeoffice")
@click.pass_context
def edit_session(
    ctx,
    session_id: int,
    start_time: str | None,
    stop_time: str | None,
    description: str | None,
    homeoffice: bool | None,
):
    """Edit a recorded work session.

    Only the given fields are changed.

    Examples:
        timetracker edit --id 3 --stop "2024-01-15 18:00"
        timetracker edit -i 0 -d "Kickoff meeting" --homeoffice
    """
    if all(v is None for v in (start_time, stop_time, description, homeoffice)):
        click.echo("Error: Nothing to edit. Give at least one field to change.", err=True)
        ctx.exit(1)

    service = SessionService(ctx.obj["store"])
    try:
        session = service.edit(
            session_id,
            start=start_time,
            stop=stop_time,
            description=description,
            homeoffice=homeoffice,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    stop_str = format_timestamp(session.stop) if session.stop is not None else "now"
    click.echo(f"Edited work session: {format_timestamp(session.start)} - {stop_str}")


def register_commands(cli):
    """Register work session commands with main CLI."""
    cli.add_command(start_session)
    cli.add_command(stop_session)
    cli.add_command(switch_session)
    cli.add_command(add_session)
    cli.add_command(edit_session)
