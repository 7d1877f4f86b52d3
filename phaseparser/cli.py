#!/usr/bin/env python3
"""
Command-line interface for encounter phase segmentation.
"""

import sys
import json
import click
import logging
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler
from rich.markup import escape

from .analyzer.ability_usage import AbilityUsageAnalyzer
from .analyzer.dispatcher import EventDispatcher
from .catalog.bosses import BOSSES, find_by_boss_id, get_boss_phases
from .catalog.loader import load_and_apply_catalog
from .config.settings import reload_settings
from .parser.reader import EncounterReport, read_encounter_report
from .segmentation.phases import segment
from .segmentation.scoping import (
    SELECTION_ALL_PHASES,
    SELECTION_CUSTOM_PHASE,
    phase_windows,
    resolve_selection,
)


# Set up rich console for pretty output
console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)


def format_timestamp(timestamp: int) -> str:
    """Format a millisecond offset as m:ss.mmm."""
    minutes, remainder = divmod(int(timestamp), 60000)
    seconds, millis = divmod(remainder, 1000)
    return f"{minutes}:{seconds:02d}.{millis:03d}"


def _load_report(report_file: str) -> EncounterReport:
    try:
        return read_encounter_report(report_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Failed to read report: {escape(str(e))}[/red]")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--catalog", "catalog_path", type=click.Path(exists=True), help="Custom phase catalog YAML file")
def cli(verbose, catalog_path):
    """Encounter Phase Parser - Loothing Guild Tracking System"""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = reload_settings()
    try:
        settings.validate()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    if verbose:
        settings.log_configuration()

    load_and_apply_catalog(catalog_path or settings.segmentation.catalog_path)


@cli.command()
@click.argument("report_file", type=click.Path(exists=True))
@click.option("--boss", type=int, help="Boss ID (defaults to the report's boss)")
@click.option("--format", type=click.Choice(["table", "json"]), default="table")
def phases(report_file, boss, format):
    """Segment the phase markers of an encounter report."""
    report = _load_report(report_file)
    boss_id = boss if boss is not None else report.boss_id

    boss_info = find_by_boss_id(boss_id)
    if boss_info is None:
        logger.warning(f"Boss {boss_id} is not in the phase catalog, no phases can be reported")

    result = segment(report.boundary_events, get_boss_phases(boss_id))

    if format == "json":
        click.echo(json.dumps({key: interval.to_dict() for key, interval in result.items()}, indent=2))
        return

    title = boss_info.name if boss_info else f"Boss {boss_id}"
    table = Table(title=f"[bold]{title} - Phases ({len(result)})[/bold]")
    table.add_column("Key", style="cyan", width=4)
    table.add_column("Name")
    table.add_column("Starts", style="green")
    table.add_column("Ends", style="red")
    table.add_column("Windows", justify="right")

    for key, interval in result.items():
        table.add_row(
            key,
            interval.name,
            ", ".join(format_timestamp(t) for t in interval.starts),
            ", ".join(format_timestamp(t) for t in interval.ends),
            str(len(phase_windows(interval))),
        )

    console.print(table)
    if not result:
        console.print("[yellow]No complete phases found[/yellow]")


@cli.command()
@click.option("--boss", type=int, help="Show the phases of one boss")
def catalog(boss):
    """List the bosses and phases in the catalog."""
    if boss is not None:
        boss_info = find_by_boss_id(boss)
        if boss_info is None:
            console.print(f"[red]Unknown boss: {boss}[/red]")
            sys.exit(1)

        table = Table(title=f"[bold]{boss_info.name}[/bold] ({boss_info.zone})")
        table.add_column("Key", style="cyan")
        table.add_column("Name")
        table.add_column("Difficulties", style="dim")
        for phase in boss_info.phases.values():
            difficulties = phase.metadata.get("difficulties") or []
            table.add_row(phase.key, phase.name, ", ".join(str(d) for d in difficulties))
        console.print(table)
        return

    table = Table(title="[bold]Known Bosses[/bold]")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Zone")
    table.add_column("Phases", justify="right")
    for boss_info in sorted(BOSSES.values(), key=lambda b: b.boss_id):
        table.add_row(str(boss_info.boss_id), boss_info.name, boss_info.zone, str(len(boss_info.phases)))
    console.print(table)


@cli.command()
@click.argument("report_file", type=click.Path(exists=True))
@click.option("--player", type=int, required=True, help="Source ID of the player to analyze")
@click.option("--cast", "cast_id", type=int, required=True, help="Ability ID of the cast")
@click.option("--damage", "damage_id", type=int, help="Ability ID of the damage events")
@click.option("--buff", "buff_id", type=int, help="Buff that should be active when casting")
@click.option("--phase", default=SELECTION_ALL_PHASES, help="Phase key, ALL, or CUSTOM (with --window)")
@click.option("--window", type=(int, int), default=None, help="START END of a custom window (with --phase CUSTOM)")
@click.option("--format", type=click.Choice(["table", "json"]), default="table")
def usage(report_file, player, cast_id, damage_id, buff_id, phase, window, format):
    """Count casts, damage and bad casts of an ability."""
    report = _load_report(report_file)
    if window is not None and phase != SELECTION_CUSTOM_PHASE:
        console.print(f"[red]--window requires --phase {SELECTION_CUSTOM_PHASE}[/red]")
        sys.exit(1)

    result = segment(report.boundary_events, get_boss_phases(report.boss_id))
    try:
        windows = resolve_selection(result, phase, report.start_time, report.end_time, custom=window)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    if not windows:
        logger.warning(f"Phase {phase} not found in this encounter")

    dispatcher = EventDispatcher(selected_player=player)
    analyzer = AbilityUsageAnalyzer(
        dispatcher,
        cast_ability_id=cast_id,
        damage_ability_id=damage_id,
        required_buff_id=buff_id,
    )
    dispatcher.run(report.combat_events, windows=windows)
    summary = analyzer.summary()
    summary["phase"] = phase

    if format == "json":
        click.echo(json.dumps(summary, indent=2))
        return

    table = Table(title=f"Ability {cast_id} ({phase})", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Casts", str(summary["casts"]))
    table.add_row("Bad Casts", str(summary["bad_casts"]))
    table.add_row("Damage", f"{summary['damage']:,}")
    table.add_row("Severity", summary["severity"] or "-")
    console.print(table)


def main():
    """Entry point for the phaseparser command."""
    cli()


if __name__ == "__main__":
    main()
