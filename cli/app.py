from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import TerminalSink, render_view
from logging_config import configure_logging
from models.view import ViewMode
from services.axis import AxisLabelPlanner
from services.colors import DayColorAssigner
from services.controller import ChartSink, DashboardController, SnapshotSink
from services.feed import FeedClient
from services.formatting import DateFormatter, resolve_timezone
from services.poller import DashboardPoller
from services.store import ReadingStore
from services.windower import ViewWindower


@dataclass
class CLIState:
    config: CLIConfig
    formatter: DateFormatter


app = typer.Typer(
    help="Watch a live temperature feed from the terminal.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _build_controller(state: CLIState, sink: ChartSink, mode: ViewMode) -> DashboardController:
    tz = state.formatter.tz
    return DashboardController(
        sink=sink,
        store=ReadingStore(tz),
        windower=ViewWindower(
            formatter=state.formatter,
            assigner=DayColorAssigner(tz),
            recent_size=state.config.recent_size,
        ),
        planner=AxisLabelPlanner(state.formatter),
        mode=mode,
    )


def _build_client(config: CLIConfig) -> FeedClient:
    return FeedClient(
        latest_url=config.latest_url,
        history_url=config.history_url,
        timeout=config.request_timeout,
    )


async def _run_poller(poller: DashboardPoller, max_polls: Optional[int]) -> None:
    try:
        await poller.run(max_polls=max_polls)
    finally:
        await poller.client.aclose()


@app.callback()
def main(
    ctx: typer.Context,
    latest_url: Optional[str] = typer.Option(
        None,
        "--latest-url",
        help="URL of the latest-reading feed (defaults to FEED_LATEST_URL).",
    ),
    history_url: Optional[str] = typer.Option(
        None,
        "--history-url",
        help="URL of the history feed (defaults to FEED_HISTORY_URL).",
    ),
    poll_interval: Optional[float] = typer.Option(
        None,
        "--poll-interval",
        help="Seconds between polls of the latest reading.",
    ),
    timezone: Optional[str] = typer.Option(
        None,
        "--timezone",
        help="IANA time zone for labels and day colors (defaults to local time).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    config = load_config(
        latest_url=latest_url,
        history_url=history_url,
        poll_interval=poll_interval,
        timezone=timezone,
    )
    ctx.obj = CLIState(config=config, formatter=DateFormatter(resolve_timezone(config.timezone)))


@app.command("snapshot")
def snapshot_command(
    ctx: typer.Context,
    mode: ViewMode = typer.Option(ViewMode.recent, "--mode", "-m", help="Window to display."),
) -> None:
    """Load the history and latest reading once and print the view."""
    state = _get_state(ctx)
    sink = SnapshotSink()
    controller = _build_controller(state, sink, mode)
    poller = DashboardPoller(controller, _build_client(state.config), state.config.poll_interval)
    asyncio.run(_run_poller(poller, max_polls=1))

    payload = sink.latest or controller.refresh()
    typer.secho(
        "Live" if controller.live else "Reconnecting…",
        fg=typer.colors.GREEN if controller.live else typer.colors.YELLOW,
    )
    render_view(payload, state.formatter, controller.planner, state.config.max_ticks)


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    mode: ViewMode = typer.Option(ViewMode.recent, "--mode", "-m", help="Window to display."),
    polls: Optional[int] = typer.Option(
        None,
        "--polls",
        min=1,
        help="Stop after this many polls of the latest reading (default: run until interrupted).",
    ),
) -> None:
    """Poll the feed and print the view every time it changes."""
    state = _get_state(ctx)
    planner = AxisLabelPlanner(state.formatter)
    sink = TerminalSink(state.formatter, planner, state.config.max_ticks)
    controller = _build_controller(state, sink, mode)
    poller = DashboardPoller(controller, _build_client(state.config), state.config.poll_interval)
    typer.echo(f"Polling {state.config.latest_url} every {state.config.poll_interval}s ...")
    try:
        asyncio.run(_run_poller(poller, max_polls=polls))
    except KeyboardInterrupt:
        typer.echo("Stopped.")
