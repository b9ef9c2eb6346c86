from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


class ViewMode(str, enum.Enum):
    DURATION = "duration"
    ATTENDANCE_ABSENCE = "attendance_absence"
    PROJECTS = "projects"


class LegendGroup(str, enum.Enum):
    TARGET = "Target"
    DURATION = "Duration"
    ATTENDANCE = "Attendance"
    ABSENCE = "Absence"
    PROJECTS = "Projects"


class Direction(str, enum.Enum):
    OLDER = "older"
    NEWER = "newer"


# (clicked group, group currently visible) -> resulting view
LEGEND_TRANSITIONS: Dict[Tuple[LegendGroup, bool], ViewMode] = {
    (LegendGroup.DURATION, False): ViewMode.DURATION,
    (LegendGroup.DURATION, True): ViewMode.ATTENDANCE_ABSENCE,
    (LegendGroup.ATTENDANCE, False): ViewMode.ATTENDANCE_ABSENCE,
    (LegendGroup.ATTENDANCE, True): ViewMode.DURATION,
    (LegendGroup.PROJECTS, False): ViewMode.PROJECTS,
    (LegendGroup.PROJECTS, True): ViewMode.ATTENDANCE_ABSENCE,
}

# Which dataset groups each view shows.
VISIBLE_GROUPS: Dict[ViewMode, frozenset] = {
    ViewMode.DURATION: frozenset({LegendGroup.DURATION}),
    ViewMode.ATTENDANCE_ABSENCE: frozenset({LegendGroup.ATTENDANCE, LegendGroup.ABSENCE}),
    ViewMode.PROJECTS: frozenset({LegendGroup.PROJECTS, LegendGroup.ABSENCE}),
}

# The group whose legend item represents each view.
VIEW_OWNER = {
    LegendGroup.DURATION: ViewMode.DURATION,
    LegendGroup.ATTENDANCE: ViewMode.ATTENDANCE_ABSENCE,
    LegendGroup.PROJECTS: ViewMode.PROJECTS,
}


@dataclass
class ViewState:
    week_index: int = 0
    mode: ViewMode = ViewMode.ATTENDANCE_ABSENCE
    target_visible: bool = False
    user_id: Optional[int] = None

    def is_visible(self, group: LegendGroup) -> bool:
        if group == LegendGroup.TARGET:
            return self.target_visible
        return group in VISIBLE_GROUPS[self.mode]

    def to_session(self) -> Dict:
        return {
            "week_index": self.week_index,
            "mode": self.mode.value,
            "target_visible": self.target_visible,
            "user_id": self.user_id,
        }

    @classmethod
    def from_session(cls, data: Optional[Dict]) -> "ViewState":
        data = data or {}
        try:
            mode = ViewMode(data.get("mode", ViewMode.ATTENDANCE_ABSENCE.value))
        except ValueError:
            mode = ViewMode.ATTENDANCE_ABSENCE
        return cls(
            week_index=int(data.get("week_index") or 0),
            mode=mode,
            target_visible=bool(data.get("target_visible", False)),
            user_id=data.get("user_id"),
        )


def wrap_index(index: int, length: int) -> int:
    """Cyclic week index: one past either end wraps to the other end."""
    if length <= 0:
        return 0
    if index < 0:
        return length - 1
    if index >= length:
        return 0
    return index


def next_mode(state: ViewState, group: LegendGroup, visible: bool) -> ViewMode:
    return LEGEND_TRANSITIONS.get((group, visible), state.mode)

