"""
Leaderboard CLI
Command-line interface for fetching and browsing the aggregate.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from leaderboard.config import get_settings
from leaderboard.main import configure_logging, run_pipeline
from leaderboard.report import (
    ALL_SOURCES,
    DEFAULT_LIMIT,
    filter_records,
    latest_update,
    load_artifact,
)


console = Console()


@click.group()
@click.option("--log-level", "-l", default=None, help="Logging level (default from settings)")
@click.pass_context
def cli(ctx, log_level: Optional[str]):
    """Benchmark leaderboard aggregator."""
    ctx.ensure_object(dict)
    configure_logging(log_level)


@cli.command()
@click.option("--config", "-c", "config_path", type=click.Path(path_type=Path), default=None,
              help="Source configuration JSON (default: settings.config_path)")
@click.option("--output", "-o", "output_path", type=click.Path(path_type=Path), default=None,
              help="Artifact destination (default: settings.output_path)")
def fetch(config_path: Optional[Path], output_path: Optional[Path]):
    """Fetch all sources and write the aggregate artifact."""
    result = asyncio.run(run_pipeline(config_path=config_path, output_path=output_path))

    color = {"success": "green", "partial": "yellow"}.get(result.status.value, "red")
    console.print(f"[{color}]{result.status.value}[/{color}]: {len(result.records)} rows written")
    for source, count in result.counts.items():
        console.print(f"   {source}: {count}")
    for failure in result.failures:
        console.print(f"   [yellow]{failure}[/yellow]")
    # Exit status stays 0 whatever the outcome


@cli.command()
@click.option("--data", "-d", "data_path", type=click.Path(path_type=Path), default=None,
              help="Artifact to read (default: settings.output_path)")
@click.option("--source", "-s", "sources", multiple=True, type=click.Choice(ALL_SOURCES),
              help="Only show these sources (repeatable)")
@click.option("--benchmark", "-b", "benchmarks", multiple=True,
              help="Only show these benchmarks (repeatable)")
@click.option("--limit", "-n", default=DEFAULT_LIMIT, help="Number of rows to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(data_path: Optional[Path], sources: tuple, benchmarks: tuple, limit: int, as_json: bool):
    """Show the aggregate as a table, highest values first."""
    records = load_artifact(data_path or get_settings().output_path)
    rows = filter_records(records, sources=sources or ALL_SOURCES, benchmarks=benchmarks, limit=limit)

    if as_json:
        click.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Leaderboard ({len(rows)} of {len(records)} rows)")
    table.add_column("Model", style="cyan")
    table.add_column("Benchmark")
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right", style="green")
    table.add_column("Source")
    table.add_column("URL", style="dim")

    for r in rows:
        value = r.get("value")
        table.add_row(
            str(r.get("model") or ""),
            str(r.get("benchmark") or ""),
            str(r.get("metric") or ""),
            "" if value is None else str(value),
            str(r.get("source") or ""),
            str(r.get("url") or ""),
        )

    console.print(table)
    console.print(f"[dim]Data last refreshed: {latest_update(records) or 'unknown'}. Rows: {len(records)}.[/dim]")


def main():
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
