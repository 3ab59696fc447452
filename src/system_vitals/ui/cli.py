"""CLI interface for system_vitals.

This module provides a Typer-based command-line interface that runs the
sampler and prints its readings.
"""

import time
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from system_vitals.accessors import snapshot
from system_vitals.config import get_settings
from system_vitals.models import MetricsSnapshot
from system_vitals.sampler import Sampler, initialize_system
from system_vitals.sensors import SensorAdapter
from system_vitals.state import MonitorState
from system_vitals.telemetry import configure_logging

app = typer.Typer(help="System Vitals - host CPU, memory and GPU utilization")
console = Console()


@app.callback()
def main() -> None:
    """Configure logging from settings before any command runs."""
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_dir=settings.log_dir if settings.log_to_file else None,
    )


def _render_table(result: MetricsSnapshot, history_seconds: int) -> Table:
    """Build a table with one row per metric."""
    table = Table(title=f"System vitals @ {result.taken_at.strftime('%H:%M:%S')} UTC")
    table.add_column("Metric", style="cyan")
    table.add_column("Current %", justify="right", style="bold")
    if history_seconds > 0:
        table.add_column(f"Last {history_seconds}s (newest first)", style="dim")

    for reading in result.readings:
        row = [reading.metric.value, str(reading.current)]
        if history_seconds > 0:
            row.append(" ".join(f"{value:.0f}" for value in reading.history))
        table.add_row(*row)
    return table


@app.command(name="snapshot")
def snapshot_command(
    seconds: int = typer.Option(0, "--seconds", "-s", min=0, help="History samples to include"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON instead of a table"),
) -> None:
    """Take one reading of every metric and print it.

    Examples:
        system-vitals snapshot
        system-vitals snapshot --json
    """
    settings = get_settings()
    state = MonitorState.from_settings(settings)
    adapter = SensorAdapter(gpu_enabled=settings.gpu_enabled)
    sampler = Sampler(state, adapter, interval_seconds=settings.sample_interval_seconds)

    try:
        # CPU utilization is a delta between two counter reads
        time.sleep(settings.sample_interval_seconds)
        sampler.tick()
    finally:
        adapter.close()

    result = snapshot(state, seconds)
    if json_output:
        console.print_json(result.model_dump_json())
    else:
        console.print(_render_table(result, seconds))


@app.command(name="watch")
def watch_command(
    history_seconds: int = typer.Option(
        10, "--history", min=0, help="History samples shown per metric"
    ),
    count: Optional[int] = typer.Option(
        None, "--count", "-n", min=1, help="Stop after this many refreshes"
    ),
) -> None:
    """Run the background sampler and print readings every interval.

    Press Ctrl+C to stop.

    Examples:
        system-vitals watch
        system-vitals watch --history 30 --count 5
    """
    settings = get_settings()
    state = MonitorState.from_settings(settings)
    sampler = initialize_system(state, settings=settings)

    refreshes = 0
    try:
        while count is None or refreshes < count:
            time.sleep(settings.sample_interval_seconds)
            console.print(_render_table(snapshot(state, history_seconds), history_seconds))
            refreshes += 1
    except KeyboardInterrupt:
        console.print("\n[dim]Stopping sampler...[/dim]")
    finally:
        sampler.stop(timeout=settings.sample_interval_seconds + 1.0)


if __name__ == "__main__":
    app()
