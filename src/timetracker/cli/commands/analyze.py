"""Analyze command."""

import click
from timetracker.cli.error_handling import handle_domain_error
from timetracker.domain.analysis import AnalysisService
from timetracker.domain.entities import AnalysisReport, SessionRow
from timetracker.domain.errors import DomainError
from timetracker.utils.text_wrap import DESCRIPTION_WIDTH, printable
from timetracker.utils.time_parser import format_timestamp

# Column widths, in table order; the description column is last and unpadded
COLUMN_WIDTHS = {
    "ID": 5,
    "Start": 16,
    "Stop": 16,
    "Time [h]": 9,
    "Cost [€]": 10,
    "HO": 3,
}
RIGHT_ALIGNED = {"Time [h]", "Cost [€]"}


def _cell(title: str, value: str) -> str:
    width = COLUMN_WIDTHS.get(title)
    if width is None:
        return value
    if title in RIGHT_ALIGNED:
        return f"{value:>{width}}"
    return f"{value:<{width}}"


def _row_values(row: SessionRow, titles: tuple[str, ...]) -> dict[str, str]:
    values = {
        "ID": f"{row.id}*" if row.is_open else str(row.id),
        "Start": format_timestamp(row.start),
        "Stop": format_timestamp(row.stop),
        "Time [h]": f"{row.duration_hours:.2f}",
        "HO": "x" if row.homeoffice else "",
        "Description": printable(row.description_lines[0]),
    }
    if "Cost [€]" in titles:
        values["Cost [€]"] = f"{row.cost:.2f}"
    return values


def _display_report(report: AnalysisReport) -> None:
    """Print the report as fixed-width tables."""
    click.echo(f"{'Project':<20} {report.project_name}")
    if report.hourly_rate is not None:
        click.echo(f"{'Hourly Rate':<20} {report.hourly_rate:.2f}€")
    click.echo()

    header = " ".join(_cell(title, title) for title in report.titles)
    # Continuation lines of a description start below the description column
    indent = " " * (len(header) - len(report.titles[-1]))
    separator_width = len(indent) + DESCRIPTION_WIDTH

    click.echo(header)
    click.echo("-" * separator_width)
    if not report.rows:
        click.echo("No work sessions recorded.")
    for row in report.rows:
        values = _row_values(row, report.titles)
        click.echo(" ".join(_cell(title, values[title]) for title in report.titles).rstrip())
        for line in row.description_lines[1:]:
            click.echo(f"{indent}{printable(line)}")
    click.echo("-" * separator_width)
    if any(row.is_open for row in report.rows):
        click.echo(f"* still running, counted until {format_timestamp(report.evaluated_at)}")
    click.echo()

    click.echo(f"{'Total work time':<20} {report.total_hours:>12.2f}h")
    if report.total_cost is not None:
        click.echo(f"{'Total project cost':<20} {report.total_cost:>12.2f}€")

    if report.homeoffice_days:
        click.echo()
        click.echo("Homeoffice days")
        for entry in report.homeoffice_days:
            click.echo(f"    {entry.year:<16} {entry.days:>12d}")


@click.command("analyze")
@click.argument("project", required=False, metavar="PROJECT")
@click.pass_context
def analyze(ctx, project: str | None):
    """Analyze all tracked time for the project.

    Shows every work session with its duration (and cost if an hourly rate
    is configured), the totals and the number of homeoffice days per year.
    """
    service = AnalysisService(ctx.obj["store"])
    try:
        report = service.analyze(project=project)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _display_report(report)


def register_commands(cli):
    """Register analyze command with main CLI."""
    cli.add_command(analyze)
