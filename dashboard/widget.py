"""
Weekly timesheet chart: view state, legend toggling and week navigation.

The widget owns a `ViewState` and a rendering target. It reacts to three kinds
of input: a data fetch completing, a legend click, and prev/next navigation.
It also listens on the `selected_user_changed` signal so a user picker
elsewhere on the page can point it at another person.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from timetracking.aggregation import NO_DATA, ChartData, ChartResult

from .renderer import ChartTarget, build_datasets
from .series import ChartSeriesSet, build_series
from .signals import selected_user_changed
from .state import VIEW_OWNER, Direction, LegendGroup, ViewState, next_mode, wrap_index

logger = logging.getLogger(__name__)


Fetcher = Callable[[int], ChartResult]


class WeeklyChartWidget:
    def __init__(
        self,
        fetcher: Fetcher,
        target: ChartTarget,
        state: Optional[ViewState] = None,
        channel: str = "default",
    ):
        self.fetcher = fetcher
        self.target = target
        self.state = state or ViewState()
        self.channel = channel
        self.chart_data: ChartResult = NO_DATA
        self.library_loaded = False
        self.subscribed = False
        self._generation = 0

    # ----- lifecycle -----

    def mount(self) -> None:
        self.subscribe()
        self.load_library()
        self.refresh()

    def subscribe(self) -> None:
        if self.subscribed:
            return
        # Held weakly; a discarded widget drops off the channel.
        selected_user_changed.connect(self._on_selected_user)
        self.subscribed = True

    def unsubscribe(self) -> None:
        if self.subscribed:
            selected_user_changed.disconnect(self._on_selected_user)
            self.subscribed = False

    def load_library(self) -> None:
        if self.library_loaded:
            return
        self.target.load_library()
        self.library_loaded = True

    # ----- data -----

    def begin_request(self) -> int:
        self._generation += 1
        return self._generation

    def refresh(self) -> None:
        if not self.state.user_id:
            return
        generation = self.begin_request()
        try:
            result = self.fetcher(self.state.user_id)
        except Exception as e:
            # Leave whatever is drawn in place.
            logger.error(f"Error fetching chart data for user {self.state.user_id}: {e}")
            return
        self.on_data_arrival(result, generation)

    def on_data_arrival(self, result: ChartResult, generation: Optional[int] = None) -> bool:
        """Apply a fetch result; returns False when it was stale and dropped."""
        if generation is not None and generation != self._generation:
            logger.debug(f"Dropping stale chart response (generation {generation}, latest {self._generation})")
            return False
        self.chart_data = result
        self.state.week_index = 0
        if not self.week_count:
            self.target.hide()
            return True
        self.render()
        return True

    def resume(self, result: ChartResult) -> None:
        """Re-attach data to a restored state, keeping the current week."""
        self.chart_data = result
        if not self.week_count:
            self.target.hide()
            return
        self.render()

    def _on_selected_user(self, sender, user_id=None, channel=None, **kwargs) -> None:
        if channel is not None and channel != self.channel:
            return
        self.on_user_changed(user_id)

    def on_user_changed(self, user_id) -> None:
        self.state.user_id = user_id
        self.state.week_index = 0
        self.refresh()

    # ----- navigation -----

    @property
    def week_count(self) -> int:
        if isinstance(self.chart_data, ChartData):
            return len(self.chart_data.weeks)
        return 0

    def navigate(self, direction: Direction | str) -> None:
        if not self.week_count:
            return
        step = 1 if Direction(direction) == Direction.OLDER else -1
        self.state.week_index = wrap_index(self.state.week_index + step, self.week_count)
        self.render()

    # ----- legend -----

    def on_legend_click(self, label: str, hidden: Optional[bool] = None) -> None:
        try:
            group = LegendGroup(label)
        except ValueError:
            return
        if group == LegendGroup.TARGET:
            self.state.target_visible = not self.state.target_visible
        elif group in VIEW_OWNER:
            visible = self.state.mode == VIEW_OWNER[group] if hidden is None else not hidden
            self.state.mode = next_mode(self.state, group, visible)
        else:
            return
        if self.week_count:
            self.render()

    # ----- rendering -----

    def current_series(self) -> ChartSeriesSet:
        if not self.week_count:
            return ChartSeriesSet()
        self.state.week_index = wrap_index(self.state.week_index, self.week_count)
        return build_series(self.chart_data.weeks[self.state.week_index])

    def render(self) -> None:
        self.load_library()
        series = self.current_series()
        if series.is_empty:
            self.target.hide()
            return
        self.target.show()
        self.target.draw(series.labels, build_datasets(series, self.state), series.title)
