"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.view import TickStrategy, ViewMode


class ModeChangeRequest(BaseModel):
    """Body for switching between the recent and full windows."""

    mode: ViewMode


class ViewPointSchema(BaseModel):
    label: str
    value: float
    color_index: int = Field(..., ge=0, le=6)
    color: str
    color_rgb: str
    date: datetime
    tooltip_title: str = Field(..., description="Long-form local date, e.g. 'Friday 5th December 2025 07:00'.")
    tooltip_label: str


class AxisTickSchema(BaseModel):
    index: int = Field(..., ge=0, description="Position of the point the tick sits on.")
    text: str


class ViewResponse(BaseModel):
    """A fully computed chart view."""

    mode: ViewMode
    title: str
    axis_title: str
    tick_strategy: TickStrategy
    points: List[ViewPointSchema] = Field(default_factory=list)
    ticks: List[AxisTickSchema] = Field(default_factory=list)


class LatestReadingSchema(BaseModel):
    timestamp: str
    temperature: float
    display_temperature: str
    display_time: str


class StatusResponse(BaseModel):
    live: bool
    status_text: str
    mode: ViewMode
    reading_count: int = Field(..., ge=0)
    latest: Optional[LatestReadingSchema] = None
