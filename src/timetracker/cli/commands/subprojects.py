"""Subproject management commands."""

import click
from timetracker.cli.error_handling import handle_domain_error
from timetracker.domain.errors import DomainError
from timetracker.domain.subproject import SubprojectService


@click.group()
def subprojects_group():
    """Manage subprojects within the project."""
    pass


@subprojects_group.command("add")
@click.option("--name", "-n", required=True, help="A name identifier for the new subproject")
@click.option(
    "--description", "-d", required=True, help="A description for the new subproject"
)
@click.pass_context
def add_subproject(ctx, name: str, description: str):
    """Add a new subproject.

    Examples:
        timetracker subprojects add --name backend --description "API work"
    """
    service = SubprojectService(ctx.obj["store"])
    try:
        subproject = service.add_subproject(name=name, description=description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created subproject '{name}' (ID: {subproject.id})")


@subprojects_group.command("list")
@click.pass_context
def list_subprojects(ctx):
    """List all subprojects."""
    service = SubprojectService(ctx.obj["store"])
    try:
        subprojects = service.list_subprojects()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not subprojects:
        click.echo("No subprojects found.")
        return

    click.echo("\nSubprojects:")
    click.echo("-" * 60)
    for sub in subprojects:
        click.echo(f"ID: {sub.id:3d} | {sub.name:20s} | {sub.description}")


@subprojects_group.command("show")
@click.argument("subproject_id", type=click.IntRange(min=0), metavar="ID")
@click.pass_context
def show_subproject(ctx, subproject_id: int):
    """Show a single subproject."""
    service = SubprojectService(ctx.obj["store"])
    try:
        subproject = service.require_subproject(subproject_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"ID: {subproject.id}")
    click.echo(f"Name: {subproject.name}")
    click.echo(f"Description: {subproject.description}")


def register_commands(cli):
    """Register subproject commands with main CLI."""
    cli.add_command(subprojects_group, name="subprojects")
