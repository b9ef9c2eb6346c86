from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from django.conf import settings

from .series import ChartSeriesSet
from .state import LegendGroup, ViewState

PROJECT_COLORS = ["#228B22", "#32CD32", "#00FF00", "#7CFC00", "#7FFF00", "#ADFF2F", "#98FB98", "#90EE90"]
PROJECT_BORDERS = ["#2E8B2E", "#3CBF3C", "#00CC00", "#72D700", "#73D700", "#9BDB2F", "#8EE48E", "#7BDEA7"]

LEGEND_ORDER = [
    LegendGroup.TARGET,
    LegendGroup.DURATION,
    LegendGroup.ATTENDANCE,
    LegendGroup.ABSENCE,
    LegendGroup.PROJECTS,
]

Dataset = Dict[str, Any]


class ChartTarget(Protocol):
    def load_library(self) -> None: ...
    def show(self) -> None: ...
    def hide(self) -> None: ...
    def draw(self, labels: List[str], datasets: List[Dataset], title: str) -> None: ...


def build_datasets(series: ChartSeriesSet, state: ViewState) -> List[Dataset]:
    """Chart.js datasets for one week, with visibility taken from the view state."""
    datasets: List[Dataset] = [
        {
            "label": LegendGroup.TARGET.value,
            "group": LegendGroup.TARGET.value,
            "data": series.target,
            "type": "line",
            "backgroundColor": "#808080",
            "borderColor": "#808080",
            "order": 0,
            "hidden": not state.is_visible(LegendGroup.TARGET),
        },
        {
            "label": LegendGroup.DURATION.value,
            "group": LegendGroup.DURATION.value,
            "data": series.duration,
            "backgroundColor": "#406b44",
            "borderColor": "#406b44",
            "borderWidth": 1,
            "stack": "Stack 0",
            "order": 1,
            "hidden": not state.is_visible(LegendGroup.DURATION),
        },
        {
            "label": LegendGroup.ATTENDANCE.value,
            "group": LegendGroup.ATTENDANCE.value,
            "data": series.attendance,
            "backgroundColor": "#90EE90",
            "borderColor": "#90EE90",
            "borderWidth": 1,
            "stack": "Stack 0",
            "order": 1,
            "hidden": not state.is_visible(LegendGroup.ATTENDANCE),
        },
        {
            "label": LegendGroup.ABSENCE.value,
            "group": LegendGroup.ABSENCE.value,
            "data": series.absence,
            "backgroundColor": "#D91656",
            "borderColor": "#D91656",
            "borderWidth": 1,
            "stack": "Stack 0",
            "order": 2,
            "hidden": not state.is_visible(LegendGroup.ABSENCE),
        },
    ]

    projects_hidden = not state.is_visible(LegendGroup.PROJECTS)
    # Start after the attendance and absence colours.
    for n, (name, values) in enumerate(series.projects.items(), start=1):
        datasets.append({
            "label": name,
            "group": LegendGroup.PROJECTS.value,
            "data": values,
            "backgroundColor": PROJECT_COLORS[n % len(PROJECT_COLORS)],
            "borderColor": PROJECT_BORDERS[n % len(PROJECT_BORDERS)],
            "borderWidth": 1.5,
            "stack": "Stack 0",
            "order": 1,
            "hidden": projects_hidden,
        })
    return datasets


def legend_items(datasets: List[Dataset]) -> List[Dict[str, Any]]:
    """One legend entry per group; all project datasets share "Projects"."""
    items = []
    for group in LEGEND_ORDER:
        members = [ds for ds in datasets if ds["group"] == group.value]
        if group == LegendGroup.PROJECTS:
            items.append({
                "text": group.value,
                "fillStyle": "rgba(128, 128, 128, 0.5)",
                "strokeStyle": "rgba(128, 128, 128, 1)",
                "lineWidth": 1,
                "hidden": all(ds["hidden"] for ds in members),
            })
            continue
        if not members:
            continue
        ds = members[0]
        items.append({
            "text": group.value,
            "fillStyle": ds["backgroundColor"],
            "strokeStyle": ds["borderColor"],
            "lineWidth": ds.get("borderWidth"),
            "hidden": ds["hidden"],
        })
    return items


def chart_options(title: str) -> Dict[str, Any]:
    return {
        "responsive": True,
        "maintainAspectRatio": True,
        "plugins": {
            "title": {"display": True, "text": title},
        },
        "scales": {
            "x": {
                "stacked": True,
                "title": {"display": True, "text": "Days"},
                "ticks": {"stepSize": 1, "maxRotation": 0, "minRotation": 0, "font": {"size": 9}},
                "grid": {"display": False},
            },
            "y": {
                "stacked": True,
                "title": {"display": True, "text": "Hours"},
                "grid": {"display": False},
            },
        },
    }


class ChartJsCanvas:
    """
    Server-side stand-in for the page's canvas.

    Holds the Chart.js configuration the page should draw. The first draw
    creates the chart; later draws replace labels, datasets and title in full.
    """

    def __init__(self) -> None:
        self.library_url: Optional[str] = None
        self.library_loads = 0
        self.visible = True
        self.config: Optional[Dict[str, Any]] = None
        self.draw_count = 0

    def load_library(self) -> None:
        self.library_url = getattr(settings, "CHART_JS_URL", None)
        self.library_loads += 1

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def draw(self, labels: List[str], datasets: List[Dataset], title: str) -> None:
        if self.config is None:
            self.config = {"type": "bar", "data": {}, "options": chart_options(title)}
        self.config["data"] = {"labels": labels, "datasets": datasets}
        self.config["options"]["plugins"]["title"]["text"] = title
        self.config["legend"] = legend_items(datasets)
        self.draw_count += 1

    def to_json(self) -> Dict[str, Any]:
        if not self.visible or self.config is None:
            return {"visible": False}
        return {"visible": True, "library": self.library_url, "chart": self.config}
