"""X-axis tick selection and labelling."""

from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from models.view import Tick, TickStrategy, ViewMode
from services.formatting import DateFormatter, to_local
from services.store import parse_timestamp

DEFAULT_MAX_TICKS = 12


def auto_skip(labels: Sequence[str], max_ticks: int = DEFAULT_MAX_TICKS) -> List[Tick]:
    """Pick the ticks a renderer would actually show, at most ``max_ticks``."""
    if not labels:
        return []
    stride = max(1, math.ceil(len(labels) / max(1, max_ticks)))
    return [Tick(index=i, label=labels[i]) for i in range(0, len(labels), stride)]


class AxisLabelPlanner:
    def __init__(self, formatter: Optional[DateFormatter] = None) -> None:
        self.formatter = formatter or DateFormatter()

    @staticmethod
    def plan(mode: ViewMode) -> TickStrategy:
        if mode is ViewMode.full:
            return TickStrategy.month_decimated
        return TickStrategy.raw_labels

    def render(self, strategy: TickStrategy, tick_labels: Sequence[str]) -> List[str]:
        """Produce the text for each displayed tick.

        ``tick_labels`` must be the ticks the renderer keeps after its own
        skipping; month changes are detected between neighbours of this list.
        """
        if strategy is TickStrategy.raw_labels:
            return list(tick_labels)

        rendered: List[str] = []
        previous: Optional[datetime] = None
        for index, label in enumerate(tick_labels):
            current = self._parse(label)
            if current is None:
                rendered.append("")
            elif index == 0 or previous is None:
                rendered.append(self.formatter.month_year(current))
            elif self._month(current) != self._month(previous):
                rendered.append(self.formatter.month_year(current))
            else:
                rendered.append("")
            previous = current
        return rendered

    def render_ticks(self, strategy: TickStrategy, ticks: Sequence[Tick]) -> List[Tick]:
        texts = self.render(strategy, [tick.label for tick in ticks])
        return [Tick(index=tick.index, label=text) for tick, text in zip(ticks, texts)]

    def _parse(self, label: str) -> Optional[datetime]:
        try:
            return parse_timestamp(label, self.formatter.tz)
        except ValueError:
            return None

    def _month(self, value: datetime) -> Tuple[int, int]:
        local = to_local(value, self.formatter.tz)
        return local.year, local.month
