from __future__ import annotations

from typing import Any, Iterable

import typer

from models.view import ChartPayload
from services.axis import AxisLabelPlanner, auto_skip
from services.colors import color_for
from services.formatting import DateFormatter

# Closest terminal colors for the day palette.
_TERMINAL_COLORS = {
    "green": typer.colors.GREEN,
    "yellow": typer.colors.YELLOW,
    "purple": typer.colors.MAGENTA,
    "orange": typer.colors.BRIGHT_YELLOW,
    "blue": typer.colors.BLUE,
    "red": typer.colors.RED,
    "slate": typer.colors.BRIGHT_BLACK,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_view(
    payload: ChartPayload,
    formatter: DateFormatter,
    planner: AxisLabelPlanner,
    max_ticks: int = 12,
) -> None:
    echo_heading(payload.title)
    if not payload.values:
        typer.echo("No readings yet.")
        return

    for label, value, color_index, date in zip(
        payload.labels, payload.values, payload.point_colors, payload.tooltip_dates
    ):
        color = color_for(color_index)
        typer.secho(
            f"  {label:<26} {value:>6.1f} °C  [{color.name}]  {formatter.pretty_long_form(date)}",
            fg=_TERMINAL_COLORS.get(color.name),
        )

    ticks = planner.render_ticks(payload.tick_strategy, auto_skip(payload.labels, max_ticks))
    shown = [tick.label for tick in ticks if tick.label]
    typer.echo()
    echo_key_values([(payload.axis_title, ", ".join(shown) or "-")])


class TerminalSink:
    """Chart sink that prints every pushed view."""

    def __init__(self, formatter: DateFormatter, planner: AxisLabelPlanner, max_ticks: int = 12) -> None:
        self.formatter = formatter
        self.planner = planner
        self.max_ticks = max_ticks
        self.pushes = 0

    def push(self, payload: ChartPayload) -> None:
        self.pushes += 1
        if self.pushes > 1:
            typer.echo()
        render_view(payload, self.formatter, self.planner, self.max_ticks)
