from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.api import current_payload, get_controller
from app.charts import build_temperature_figure
from models.view import ViewMode
from services.axis import auto_skip
from services.controller import DashboardController
from settings import get_settings


router = APIRouter(include_in_schema=False)


def _status_badge(controller: DashboardController) -> str:
    current = controller.status()
    text = "Live" if current.live else "Reconnecting…"
    if current.latest is None:
        return f"<p><strong>{text}</strong> · no readings yet</p>"
    formatter = controller.windower.formatter
    return (
        f"<p><strong>{text}</strong> · now "
        f"{formatter.now_label(current.latest.temperature)} °C at "
        f"{formatter.local_label(current.latest.date)}</p>"
    )


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    mode: Optional[ViewMode] = None,
    controller: DashboardController = Depends(get_controller),
) -> HTMLResponse:
    # A mode in the query only changes this page; POST /view/mode switches the dashboard.
    if mode is not None and mode is not controller.mode:
        payload = controller.preview(mode)
    else:
        payload = current_payload(controller)
    ticks = controller.planner.render_ticks(
        payload.tick_strategy, auto_skip(payload.labels, get_settings().max_ticks)
    )
    fig = build_temperature_figure(payload, ticks, controller.windower.formatter)
    chart_html = fig.to_html(full_html=False, include_plotlyjs="cdn")
    body = (
        "<!doctype html><html><head><meta charset='utf-8'>"
        f"<title>{payload.title}</title></head><body>"
        f"{_status_badge(controller)}"
        "<p><a href='/ui?mode=recent'>Last readings</a> · "
        "<a href='/ui?mode=full'>All history</a></p>"
        f"{chart_html}</body></html>"
    )
    return HTMLResponse(body)
