"""Command-line interface for the device scheduler."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import load_config
from .documents import SmarthomeError, load_input, save_output
from .scheduler import build_schedule
from .tariffs import expand_rates, rate_for_hour

console = Console()

ERR_MSG = "[red]ERR>>>[/red] "
SCS_MSG = "[green]DONE>>>[/green] "


def format_hours(hours: list[int]) -> str:
    """Collapse sorted hours into ranges, e.g. [0, 1, 2, 10] -> '0-2, 10'."""
    spans = []
    for hour in hours:
        if spans and hour == spans[-1][1] + 1:
            spans[-1][1] = hour
        else:
            spans.append([hour, hour])
    return ", ".join(f"{a}-{b}" if a != b else str(a) for a, b in spans)


def report_error(ctx, error: SmarthomeError):
    console.print(ERR_MSG + escape(str(error)))
    ctx.exit(1)


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True), help="Path to smarthome.yaml")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Smart home scheduling - run devices in the cheapest hours."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = load_config(Path(config_path) if config_path else None)
    except SmarthomeError as e:
        report_error(ctx, e)


@cli.command()
@click.option("--input", "input_path", type=click.Path(), help="Input document (JSON or YAML)")
@click.option("--output", "output_path", type=click.Path(), help="Output JSON file")
@click.option("--json", "as_json", is_flag=True, help="Also print the output document")
@click.pass_context
def run(ctx, input_path, output_path, as_json):
    """Schedule devices and write the output document."""
    settings = ctx.obj["settings"]
    source = Path(input_path) if input_path else settings.input_path
    target = Path(output_path) if output_path else settings.output_path

    try:
        data = load_input(source, settings.day)
        output = build_schedule(data, settings.day)
        written = save_output(output, target)
    except SmarthomeError as e:
        report_error(ctx, e)
        return

    if as_json:
        console.print_json(json.dumps(output.to_dict()))
    console.print(SCS_MSG + escape(f"Created '{written}'"))


@cli.command()
@click.option("--input", "input_path", type=click.Path(), help="Input document (JSON or YAML)")
@click.pass_context
def plan(ctx, input_path):
    """Show the schedule without writing it."""
    settings = ctx.obj["settings"]
    source = Path(input_path) if input_path else settings.input_path

    try:
        data = load_input(source, settings.day)
    except SmarthomeError as e:
        report_error(ctx, e)
        return

    output = build_schedule(data, settings.day)

    table = Table(title=f"Device Schedule (max {data.max_power:g} W)")
    table.add_column("Device", style="cyan")
    table.add_column("Mode")
    table.add_column("Power", justify="right")
    table.add_column("Hours")
    table.add_column("Cost", justify="right")

    for device in data.devices:
        hours = sorted(h for h, ids in output.schedule.items() if device.id in ids)
        if device.id in output.devices:
            cost = f"{output.devices[device.id]:.2f}"
            hours_text = format_hours(hours)
        else:
            cost = "-"
            hours_text = "[yellow]not scheduled[/yellow]"
        table.add_row(
            escape(device.name or device.id),
            device.policy.value,
            f"{device.power:g} W",
            hours_text,
            cost,
        )

    console.print(table)
    console.print(f"Total: [bold]{output.total_energy:.2f}[/bold]")


@cli.command()
@click.option("--input", "input_path", type=click.Path(), help="Input document (JSON or YAML)")
@click.pass_context
def rates(ctx, input_path):
    """Show the hourly price curve for the input tariff."""
    settings = ctx.obj["settings"]
    source = Path(input_path) if input_path else settings.input_path

    try:
        data = load_input(source, settings.day)
    except SmarthomeError as e:
        report_error(ctx, e)
        return

    hourly = expand_rates(data.rates, settings.day)

    table = Table(title="Hourly Rates")
    table.add_column("Hour", style="cyan", justify="right")
    table.add_column("Price", justify="right")

    for hour in range(settings.day.duration):
        try:
            price = f"{rate_for_hour(hourly, hour):g}"
        except ValueError:
            price = "[yellow]N/A[/yellow]"
        table.add_row(f"{hour:02d}:00", price)

    console.print(table)
    if len(hourly) != settings.day.duration:
        console.print(
            f"[yellow]Tariff expands to {len(hourly)} hourly entries, "
            f"expected {settings.day.duration}[/yellow]"
        )


if __name__ == "__main__":
    cli()
