"""Per-day "view more" panels that gate the full leaderboard behind a one-time warning."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable

from day_stats.config import HEAVY_VIEW_WARNING

from .day_record import DayRecord, PlayerEntry
from .scheduling import ImmediateScheduler, Scheduler

logger = logging.getLogger(__name__)


class PanelState(enum.Enum):
    COLLAPSED = "collapsed"
    CONFIRMING = "confirming"
    LOADING = "loading"
    EXPANDED = "expanded"


StateListener = Callable[["DayDetailController", PanelState, PanelState], None]


class DayDetailController:
    """State machine for one day's leaderboard panel.

    COLLAPSED -> CONFIRMING -> LOADING -> EXPANDED -> COLLAPSED. The warning is only
    shown on the first open; the sort runs on the first load and is reused afterwards.
    """

    def __init__(self, record: DayRecord, group: "PanelGroup") -> None:
        self.record = record
        self.group = group
        self.state = PanelState.COLLAPSED
        self.acknowledged = False
        self._load_token = 0

    @property
    def day_number(self) -> int:
        return self.record.day_number

    @property
    def warning(self) -> str:
        return self.group.warning

    @property
    def players(self) -> tuple[PlayerEntry, ...] | None:
        """The full leaderboard, only while the panel is expanded."""
        if self.state is PanelState.EXPANDED:
            return self.record.sorted_players
        return None

    def open(self) -> PanelState:
        if self.state in (PanelState.LOADING, PanelState.EXPANDED, PanelState.CONFIRMING):
            return self.state
        if not self.acknowledged:
            self._set_state(PanelState.CONFIRMING)
            return self.state
        return self._reveal()

    def acknowledge(self) -> PanelState:
        if self.state is not PanelState.CONFIRMING:
            return self.state
        self.acknowledged = True
        return self._reveal()

    def decline(self) -> PanelState:
        if self.state is PanelState.CONFIRMING:
            self._set_state(PanelState.COLLAPSED)
        return self.state

    def close(self) -> PanelState:
        if self.state is PanelState.COLLAPSED:
            return self.state
        # any pending load for this panel is now stale
        self._load_token += 1
        self.group._release(self)
        self._set_state(PanelState.COLLAPSED)
        return self.state

    def toggle(self) -> PanelState:
        if self.state is PanelState.COLLAPSED:
            return self.open()
        return self.close()

    def _reveal(self) -> PanelState:
        self.group._claim(self)
        if self.record.has_sorted_players:
            self._set_state(PanelState.EXPANDED)
            return self.state

        self._load_token += 1
        token = self._load_token
        self._set_state(PanelState.LOADING)
        self.group.scheduler.defer(lambda: self._finish_load(token))
        return self.state

    def _finish_load(self, token: int) -> None:
        # the sort is memoized on the record even if this load turns out stale
        self.record.sorted_players  # noqa: B018
        if token != self._load_token or self.state is not PanelState.LOADING or self.group.active is not self:
            logger.debug("discarding stale leaderboard load for day %s", self.day_number)
            return
        self._set_state(PanelState.EXPANDED)

    def _set_state(self, new_state: PanelState) -> None:
        old_state = self.state
        if old_state is new_state:
            return
        self.state = new_state
        logger.debug("day %s panel %s -> %s", self.day_number, old_state.value, new_state.value)
        self.group._notify(self, old_state, new_state)

    def __repr__(self) -> str:
        return f"DayDetailController(day={self.day_number}, state={self.state.value})"


class PanelGroup:
    """Owns the controllers for the visible days and keeps at most one of them open."""

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        *,
        warning: str = HEAVY_VIEW_WARNING,
    ) -> None:
        self.scheduler = scheduler or ImmediateScheduler()
        self.warning = warning
        self.active: DayDetailController | None = None
        self._controllers: dict[int, DayDetailController] = {}
        self._listeners: list[StateListener] = []

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def controller_for(self, record: DayRecord) -> DayDetailController:
        controller = self._controllers.get(record.day_number)
        if controller is None:
            controller = DayDetailController(record, self)
            self._controllers[record.day_number] = controller
        return controller

    def attach(self, records: Iterable[DayRecord]) -> list[DayDetailController]:
        return [self.controller_for(record) for record in records]

    def get(self, day_number: int) -> DayDetailController | None:
        return self._controllers.get(day_number)

    def expanded(self) -> list[DayDetailController]:
        return [c for c in self._controllers.values() if c.state is PanelState.EXPANDED]

    def collapse_all(self) -> None:
        for controller in list(self._controllers.values()):
            controller.close()

    def reset(self) -> None:
        self.collapse_all()
        self._controllers.clear()
        self.active = None

    def _claim(self, controller: DayDetailController) -> None:
        previous = self.active
        if previous is not None and previous is not controller:
            previous.close()
        self.active = controller

    def _release(self, controller: DayDetailController) -> None:
        if self.active is controller:
            self.active = None

    def _notify(self, controller: DayDetailController, old_state: PanelState, new_state: PanelState) -> None:
        for listener in self._listeners:
            listener(controller, old_state, new_state)
