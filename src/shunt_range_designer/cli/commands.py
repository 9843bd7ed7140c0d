"""
CLI commands for Shunt Range Designer using Click.

Provides the command-line front end: design a range set, inspect an
exported design and list the resistor catalog.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from shunt_range_designer.config import Config, get_config
from shunt_range_designer.core.designer import RangeDesigner
from shunt_range_designer.core.exceptions import ShuntDesignerError
from shunt_range_designer.core.models import DesignResult
from shunt_range_designer.export.json_export import (
    design_to_json,
    load_design,
    revalidate,
    save_design,
)
from shunt_range_designer.utils.constants import (
    APP_NAME,
    APP_VERSION,
    RESISTOR_VALUES,
    RESISTOR_TOLERANCES,
)
from shunt_range_designer.utils.formatting import (
    format_value,
    parse_value,
    resolution_permille,
)

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _parse_si(ctx, param, value):
    """Click callback: accept plain floats or SI-suffixed values."""
    if value is None:
        return None
    try:
        return parse_value(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _parse_overrides(ctx, param, values) -> Dict[int, float]:
    """Click callback: INDEX=VALUE pairs, e.g. 1=4.7k."""
    overrides: Dict[int, float] = {}
    for item in values:
        index_text, sep, value_text = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected INDEX=VALUE, got {item!r}")
        try:
            overrides[int(index_text)] = parse_value(value_text.rstrip("%"))
        except ValueError as e:
            raise click.BadParameter(f"{item!r}: {e}")
    return overrides


# Main CLI group
@click.group()
@click.version_option(APP_VERSION, prog_name=APP_NAME)
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Path to configuration file')
@click.option('--debug/--no-debug', default=False,
              help='Enable debug logging')
@click.pass_context
def cli(ctx, config, debug):
    """
    Shunt Range Designer - multi-range current measurement planner

    Selects one sense resistor per range from a standard catalog and checks
    that neighbouring ranges overlap. Run 'shunt-designer COMMAND --help'
    for details on each command.
    """
    ctx.ensure_object(dict)

    if config:
        ctx.obj['config'] = Config.load(Path(config))
    else:
        ctx.obj['config'] = get_config()

    level = logging.DEBUG if debug else ctx.obj['config'].logging.level
    logging.getLogger().setLevel(level)
    ctx.obj['debug'] = debug

    if debug:
        console.print("[yellow]Debug mode enabled[/yellow]")


# Design command
@cli.command()
@click.option('--ranges', '-n', 'num_ranges', type=int, help='Number of ranges (1-8)')
@click.option('--adc-bits', '-b', type=int, help='ADC bit depth (8-24)')
@click.option('--adc-resolution', '-r', callback=_parse_si,
              help='ADC resolution in V/LSB (e.g. 2.5u)')
@click.option('--bus-voltage', '-v', callback=_parse_si, help='Bus voltage in V')
@click.option('--max-current', '-I', callback=_parse_si, help='Maximum current in A')
@click.option('--min-current-na', type=float, help='Minimum current in nA (1-1000)')
@click.option('--hysteresis', '-H', type=float, help='Hysteresis factor (0-1)')
@click.option('--resistance', 'resistance_overrides', multiple=True, callback=_parse_overrides,
              metavar='INDEX=OHMS', help='Force a catalog resistance on a range (repeatable)')
@click.option('--tolerance', 'tolerance_overrides', multiple=True, callback=_parse_overrides,
              metavar='INDEX=PERCENT', help='Set a range tolerance grade (repeatable)')
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.option('--export', '-o', 'export_path', type=click.Path(),
              help='Write the design as JSON (file or directory)')
@click.option('--save', '-s', is_flag=True,
              help='Write the design as JSON into the configured export directory')
@click.pass_context
def design(ctx, num_ranges, adc_bits, adc_resolution, bus_voltage, max_current,
           min_current_na, hysteresis, resistance_overrides, tolerance_overrides,
           output_format, export_path, save):
    """
    Select sense resistors and validate range overlap.

    Unspecified parameters come from the configuration file.

    Examples:
        shunt-designer design
        shunt-designer design -n 4 -I 2 --hysteresis 0.05
        shunt-designer design --resistance 1=10 --tolerance 0=1 -o designs/
        shunt-designer design -n 4 --save
    """
    config: Config = ctx.obj['config']

    try:
        global_config = config.design.to_global_config(
            num_ranges=num_ranges,
            adc_bits=adc_bits,
            adc_resolution_volt_per_lsb=adc_resolution,
            bus_voltage=bus_voltage,
            max_current_target=max_current,
            min_current_target_nanoamp=min_current_na,
            hysteresis_factor=hysteresis,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e))

    designer = RangeDesigner(global_config, default_tolerance=config.design.tolerance_percent)

    try:
        for index, value in sorted(resistance_overrides.items()):
            designer.set_resistance(index, value)
        for index, value in sorted(tolerance_overrides.items()):
            designer.set_tolerance(index, value)
    except ShuntDesignerError as e:
        raise click.ClickException(str(e))

    result = designer.result

    if output_format == 'json':
        click.echo(design_to_json(result, indent=config.export.indent))
    else:
        _print_design(result)

    if save and not export_path:
        try:
            export_path = config.export.ensure_directory()
        except OSError as e:
            raise click.ClickException(f"Cannot create export directory: {e}")

    if export_path:
        try:
            written = save_design(result, export_path, indent=config.export.indent)
        except ShuntDesignerError as e:
            raise click.ClickException(str(e))
        err_console.print(f"[green]Design exported to {written}[/green]")


# Show command
@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--recompute', is_flag=True,
              help='Recompute ranges from the stored resistors instead of trusting stored values')
def show(path, recompute):
    """Display a previously exported design."""
    try:
        result = load_design(path)
    except ShuntDesignerError as e:
        raise click.ClickException(str(e))

    if recompute:
        result = revalidate(result)

    _print_design(result, title=f"Design: {Path(path).name}")


# Catalog command
@cli.command()
def catalog():
    """List the standard resistor values and tolerance grades."""
    table = Table(title="Resistor Catalog", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Resistance", justify="right", style="cyan")
    table.add_column("Ohms", justify="right")

    for index, value in enumerate(RESISTOR_VALUES):
        table.add_row(str(index), format_value(value, "Ω"), f"{value:g}")

    console.print(table)
    console.print("Tolerance grades: " + ", ".join(f"{t:g}%" for t in RESISTOR_TOLERANCES))


def _print_design(result: DesignResult, title: Optional[str] = None) -> None:
    """Render a design as a rich table plus a status panel."""
    cfg = result.global_config

    console.print(Panel.fit(
        f"[bold blue]{title or 'Shunt Range Design'}[/bold blue]\n"
        f"Ranges: {cfg.num_ranges} | ADC: {cfg.adc_bits} bit @ "
        f"{format_value(cfg.adc_resolution_volt_per_lsb, 'V')}/LSB "
        f"(full scale {format_value(cfg.full_scale_voltage, 'V')})\n"
        f"Bus: {format_value(cfg.bus_voltage, 'V')} | Target: "
        f"{format_value(cfg.min_current_target, 'A')} ~ {format_value(cfg.max_current_target, 'A')} | "
        f"Hysteresis: {cfg.hysteresis_factor:g}"
    ))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Range", justify="center", style="cyan")
    table.add_column("Shunt", justify="right")
    table.add_column("Tol.", justify="right")
    table.add_column("Theoretical", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Resolution", justify="right")
    table.add_column("Load", justify="right")
    table.add_column("Max Error", justify="right")
    table.add_column("Max Power", justify="right")
    table.add_column("Shunt Drop", justify="right")
    table.add_column("Valid", justify="center")

    for index, r in enumerate(result.ranges):
        valid = "[green]✓[/green]" if r.overlap.is_valid else "[red]✗[/red]"
        table.add_row(
            str(index + 1),
            format_value(r.resistance, "Ω"),
            f"{r.resistance_tolerance_percent:g}%",
            f"{format_value(r.theoretical_min_current, 'A')} ~ {format_value(r.theoretical_max_current, 'A')}",
            f"{format_value(r.down_threshold, 'A')} ~ {format_value(r.up_threshold, 'A')}",
            f"{format_value(r.current_resolution, 'A')} "
            f"({resolution_permille(r.current_resolution, cfg.max_current_target):.5f}‰)",
            f"{format_value(r.min_load_resistance, 'Ω')} ~ {format_value(r.max_load_resistance, 'Ω')}",
            f"{r.max_theoretical_error_percent:.4f}%",
            format_value(r.max_power_dissipation, "W"),
            format_value(r.shunt_voltage_drop, "V"),
            valid,
        )

    console.print(table)

    if result.is_valid:
        console.print("[green]All ranges overlap and reach the minimum current.[/green]")
    else:
        invalid = ", ".join(str(i + 1) for i in result.invalid_indices)
        console.print(f"[red]Invalid ranges: {invalid}[/red] - adjust resistors or global parameters.")


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()
