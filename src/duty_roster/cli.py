"""CLI entry point for the duty roster generator."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .constants import EXCEL_DEFAULT_FILENAME
from .exceptions import RosterError
from .exporters import get_exporter, load_schedule_json
from .models import PinRequest
from .parser import RosterParser
from .scheduler import ConfigLoader, PinConfig, create_scheduler
from .scheduler.models import ScheduleResult

app = typer.Typer(
    name="duty-roster",
    help="Generate exam duty rosters for faculty and staff",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_pin_options(values: list[str]) -> list[PinRequest]:
    pins = []
    for value in values:
        try:
            pins.append(PinRequest.parse(value))
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--pin") from None
    return pins


@app.command()
def generate(
    roster_file: Annotated[
        Path,
        typer.Argument(help="Roster file (.xlsx, .xls or .csv) with Faculty and Staff columns"),
    ],
    days: Annotated[
        Optional[int],
        typer.Option("-d", "--days", help="Number of exam days"),
    ] = None,
    rooms: Annotated[
        Optional[int],
        typer.Option("-r", "--rooms", help="Number of rooms per day"),
    ] = None,
    pin: Annotated[
        Optional[list[str]],
        typer.Option("-p", "--pin", help="Pin a person to a day, as NAME:DAY (repeatable)"),
    ] = None,
    pins_file: Annotated[
        Optional[Path],
        typer.Option("--pins", help="Pins file (JSON or CSV with name,day columns)"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="JSON run file with days, rooms, seed, trials and pins"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible schedules"),
    ] = None,
    trials: Annotated[
        Optional[int],
        typer.Option("--trials", help="Generate several schedules and keep the best"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate a duty roster from a roster file."""
    _setup_logging(verbose)

    if not roster_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {roster_file}")
        raise typer.Exit(1)
    for path in (pins_file, config_file):
        if path is not None and not path.exists():
            console.print(f"[bold red]Error:[/bold red] File not found: {path}")
            raise typer.Exit(1)

    try:
        settings = ConfigLoader(config_file)
        pins = list(settings.pins)
        if pins_file:
            pins.extend(PinConfig(pins_file).get_pins())
        pins.extend(_parse_pin_options(pin or []))

        with console.status("[bold green]Loading roster..."):
            roster = RosterParser().parse(roster_file)

        run_days = days if days is not None else settings.days
        run_rooms = rooms if rooms is not None else settings.rooms
        run_seed = seed if seed is not None else settings.seed
        run_trials = trials if trials is not None else settings.trials

        console.print(f"\n[bold]Duty Roster for:[/bold] {roster_file.name}")
        console.print(f"  Faculty: {len(roster.primary)}")
        console.print(f"  Staff: {len(roster.secondary)}")
        console.print(f"  Grid: {run_days} days x {run_rooms} rooms")
        if pins:
            console.print(f"  Pins: {len(pins)}")

        with console.status("[bold green]Generating schedule..."):
            scheduler = create_scheduler(roster, run_days, run_rooms, pins=pins, seed=run_seed)
            if run_trials > 1:
                result = scheduler.schedule_best_of(run_trials)
            else:
                result = scheduler.schedule()
    except (RosterError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _show_summary(result, verbose)

    if output:
        exporter = get_exporter(format.value)

        if format == OutputFormat.csv:
            # CSV exports to directory
            output_path = output if output.is_dir() else output.parent / output.stem
        elif format == OutputFormat.excel and output.is_dir():
            output_path = output / EXCEL_DEFAULT_FILENAME
        else:
            suffix = ".xlsx" if format == OutputFormat.excel else f".{format.value}"
            output_path = output if output.suffix else output.with_suffix(suffix)

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(result, output_path)

        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


def _show_summary(result: ScheduleResult, verbose: bool) -> None:
    """Print duty counts, per-day staff coverage and findings."""
    console.print("\n[bold]Schedule Results:[/bold]")
    console.print(f"  Slots filled: {result.total_slots} of {result.days * result.rooms}")
    console.print(f"  Staff target: {result.config.get('secondary_duty_target')} duties each")
    if result.seed is not None:
        console.print(f"  Seed: {result.seed}")

    for title, duties in (
        ("Faculty Duties", result.primary_duties),
        ("Staff Duties", result.secondary_duties),
    ):
        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Count", style="green")
        for tally in duties:
            table.add_row(tally.name, str(tally.count))
        console.print(table)

    if verbose:
        coverage_table = Table(title="Staff per Day")
        coverage_table.add_column("Day", style="cyan")
        coverage_table.add_column("Staff", style="green")
        for day, count in sorted(result.statistics.secondary_by_day.items()):
            coverage_table.add_row(str(day), str(count))
        console.print(coverage_table)

        swaps = ", ".join(f"{phase}: {n}" for phase, n in result.statistics.swaps_by_phase.items())
        console.print(f"  Repair swaps: {swaps}")

    if result.unsatisfied_pins:
        console.print(f"\n[bold yellow]Unplaced pins ({len(result.unsatisfied_pins)}):[/bold yellow]")
        for p in result.unsatisfied_pins:
            console.print(f"  [yellow]• {p.name} on day {p.day}[/yellow]")

    if result.findings:
        console.print(f"\n[bold yellow]Findings ({len(result.findings)}):[/bold yellow]")
        for finding in result.findings:
            console.print(f"  [yellow]• {finding.kind.value}: {finding.message}[/yellow]")
    else:
        console.print("\n[bold green]✓ All checks passed[/bold green]")


@app.command()
def validate(
    roster_file: Annotated[
        Path,
        typer.Argument(help="Roster file to check"),
    ],
) -> None:
    """Validate a roster file without generating a schedule."""
    if not roster_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {roster_file}")
        raise typer.Exit(1)

    with console.status("[bold green]Validating file..."):
        validation = RosterParser().validate(roster_file)

    console.print(f"\n[bold]Validation Results for:[/bold] {roster_file.name}")

    if validation["valid"]:
        console.print("[bold green]✓ File is valid[/bold green]")
    else:
        console.print("[bold red]✗ File has issues[/bold red]")

    console.print(f"\n  Faculty: {validation['primary_count']}")
    console.print(f"  Staff: {validation['secondary_count']}")

    if validation["errors"]:
        console.print(f"\n[bold red]Errors ({len(validation['errors'])}):[/bold red]")
        for error in validation["errors"]:
            console.print(f"  [red]• {error}[/red]")

    if validation["warnings"]:
        console.print(f"\n[bold yellow]Warnings ({len(validation['warnings'])}):[/bold yellow]")
        for warning in validation["warnings"]:
            console.print(f"  [yellow]• {warning}[/yellow]")

    if not validation["valid"]:
        raise typer.Exit(1)


@app.command()
def stats(
    schedule_file: Annotated[
        Path,
        typer.Argument(help="Schedule JSON file from the generate command"),
    ],
) -> None:
    """Show duty statistics for an exported schedule."""
    if not schedule_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {schedule_file}")
        raise typer.Exit(1)

    try:
        data = load_schedule_json(schedule_file)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] Not a schedule file: {e}")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        console.print(f"[bold red]Error:[/bold red] Not a schedule file: {schedule_file}")
        raise typer.Exit(1)

    statistics = data.get("statistics", {})

    console.print(f"\n[bold]Statistics for:[/bold] {schedule_file.name}")
    console.print(f"  Generated: {data.get('generation_date', 'unknown')}")

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")

    overview_table.add_row("Days", str(data.get("days", 0)))
    overview_table.add_row("Rooms", str(data.get("rooms", 0)))
    overview_table.add_row("Slots", str(len(data.get("entries", []))))
    overview_table.add_row("Findings", str(len(data.get("findings", []))))

    console.print(overview_table)

    duty_table = Table(title="Duties by Population")
    duty_table.add_column("Population", style="cyan")
    duty_table.add_column("Average", style="green")
    duty_table.add_column("Min", style="green")
    duty_table.add_column("Max", style="green")

    for label, key in (("Faculty", "primary"), ("Staff", "secondary")):
        duty_table.add_row(
            label,
            str(statistics.get(f"{key}_avg", 0)),
            str(statistics.get(f"{key}_min", 0)),
            str(statistics.get(f"{key}_max", 0)),
        )

    console.print(duty_table)


if __name__ == "__main__":
    app()
