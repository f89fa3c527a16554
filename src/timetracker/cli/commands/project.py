"""Project setup commands."""

import click
from timetracker.cli.error_handling import handle_domain_error
from timetracker.domain.errors import DomainError
from timetracker.domain.project import ProjectService
from timetracker.utils.rate_parser import parse_rate


def _parse_rate_or_exit(ctx, rate: str | None) -> float | None:
    if rate is None:
        return None
    try:
        return parse_rate(rate)
    except ValueError as e:
        click.echo(f"Error: Invalid rate: {e}", err=True)
        ctx.exit(1)


@click.command("init")
@click.argument("name", metavar="NAME")
@click.option("--rate", "-r", metavar="RATE", help="Hourly rate (e.g., 50 or 72.50)")
@click.option("--force", is_flag=True, help="Overwrite an existing time sheet")
@click.pass_context
def init_project(ctx, name: str, rate: str | None, force: bool):
    """Initialize a new project.

    Examples:
        timetracker init "Acme"
        timetracker init "Acme" --rate 50
    """
    store = ctx.obj["store"]
    service = ProjectService(store)
    hourly_rate = _parse_rate_or_exit(ctx, rate)

    try:
        service.init_project(name=name, hourly_rate=hourly_rate, force=force)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if hourly_rate is None:
        click.echo(f"Initializing project {name} without hourly rate")
    else:
        click.echo(f"Initializing project {name} with an hourly rate of {hourly_rate:.2f}€")


@click.command("config")
@click.option("--rate", "-r", metavar="RATE", help="New hourly rate")
@click.option("--clear-rate", is_flag=True, help="Stop tracking cost for this project")
@click.pass_context
def config_project(ctx, rate: str | None, clear_rate: bool):
    """Change settings for the project.

    Without options the current settings are shown.

    Examples:
        timetracker config --rate 65
        timetracker config --clear-rate
    """
    store = ctx.obj["store"]
    service = ProjectService(store)

    if rate is not None and clear_rate:
        click.echo("Error: --rate cannot be combined with --clear-rate.", err=True)
        ctx.exit(1)

    try:
        if rate is not None:
            time_sheet = service.set_hourly_rate(_parse_rate_or_exit(ctx, rate))
        elif clear_rate:
            time_sheet = service.set_hourly_rate(None)
        else:
            time_sheet = service.get_time_sheet()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Project: {time_sheet.project_name}")
    if time_sheet.hourly_rate is None:
        click.echo("Hourly rate: none")
    else:
        click.echo(f"Hourly rate: {time_sheet.hourly_rate:.2f}€")


def register_commands(cli):
    """Register project commands with main CLI."""
    cli.add_command(init_project)
    cli.add_command(config_project)
