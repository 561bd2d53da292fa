"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.schemas import (
    AxisTickSchema,
    LatestReadingSchema,
    ModeChangeRequest,
    StatusResponse,
    ViewPointSchema,
    ViewResponse,
)
from models.view import ChartPayload
from services.axis import auto_skip
from services.colors import color_for
from services.controller import DashboardController, build_default_controller
from settings import get_settings

router = APIRouter()


def get_controller() -> DashboardController:
    return build_default_controller()


def current_payload(controller: DashboardController) -> ChartPayload:
    payload = getattr(controller.sink, "latest", None)
    if payload is None or payload.mode is not controller.mode:
        payload = controller.refresh()
    return payload


def present_view(controller: DashboardController, payload: ChartPayload) -> ViewResponse:
    formatter = controller.windower.formatter
    points = [
        ViewPointSchema(
            label=label,
            value=value,
            color_index=color_index,
            color=color_for(color_index).name,
            color_rgb=color_for(color_index).rgb,
            date=date,
            tooltip_title=formatter.pretty_long_form(date),
            tooltip_label=formatter.temperature_label(value),
        )
        for label, value, color_index, date in zip(
            payload.labels, payload.values, payload.point_colors, payload.tooltip_dates
        )
    ]
    selected = auto_skip(payload.labels, get_settings().max_ticks)
    ticks = [
        AxisTickSchema(index=tick.index, text=tick.label)
        for tick in controller.planner.render_ticks(payload.tick_strategy, selected)
    ]
    return ViewResponse(
        mode=payload.mode,
        title=payload.title,
        axis_title=payload.axis_title,
        tick_strategy=payload.tick_strategy,
        points=points,
        ticks=ticks,
    )


@router.get(
    "/view",
    response_model=ViewResponse,
    summary="Current chart view for the active window mode.",
)
async def get_view(
    controller: DashboardController = Depends(get_controller),
) -> ViewResponse:
    return present_view(controller, current_payload(controller))


@router.post(
    "/view/mode",
    response_model=ViewResponse,
    summary="Switch between the last readings and the full history.",
)
async def change_mode(
    request: ModeChangeRequest,
    controller: DashboardController = Depends(get_controller),
) -> ViewResponse:
    payload = controller.set_mode(request.mode)
    return present_view(controller, payload)


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Feed status and the most recent reading.",
)
async def get_status(
    controller: DashboardController = Depends(get_controller),
) -> StatusResponse:
    current = controller.status()
    formatter = controller.windower.formatter
    latest = None
    if current.latest is not None:
        latest = LatestReadingSchema(
            timestamp=current.latest.timestamp_raw,
            temperature=current.latest.temperature,
            display_temperature=formatter.now_label(current.latest.temperature),
            display_time=formatter.local_label(current.latest.date),
        )
    return StatusResponse(
        live=current.live,
        status_text="Live" if current.live else "Reconnecting…",
        mode=current.mode,
        reading_count=current.reading_count,
        latest=latest,
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /view for the chart data and /ui for the dashboard."}
