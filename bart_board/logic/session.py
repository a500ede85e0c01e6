"""Session state machine for the departure board.

Every change to what the user sees goes through :func:`transition`, which takes the
current :class:`SessionState` and one event and returns the next state plus the effects
(fetches, timers, quit) the driver must carry out. Results of those effects come back as
new events, so the function itself never performs I/O and never blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Union

from bart_board.config import AppConfig
from bart_board.data.models import DepartureBoard, Station
from bart_board.rendering.formatter import format_board
from bart_board.rendering.frame_data import FrameData
from bart_board.rendering.layout import compose_frame

LOADING_STATUS = "Loading BART stations..."
LOADED_STATUS = "Loaded"
LIVE_STATUS = "Live Tracking\n============="
REFRESHING_STATUS = "Refreshing stations..."
STATION_ERROR_STATUS = "Error loading stations"

UP_KEYS = frozenset({"up", "k", "w"})
DOWN_KEYS = frozenset({"down", "j", "s"})
REFRESH_KEYS = frozenset({"r", "R"})
QUIT_KEYS = frozenset({"q", "Q", "ctrl+c"})
SELECT_KEY = "enter"

SELECT = "select"
STARTUP = "startup"
TICK = "tick"

logger = logging.getLogger(__name__)


# Events


@dataclass(frozen=True)
class StationsFetched:
    stations: tuple[Station, ...]


@dataclass(frozen=True)
class StationsFetchFailed:
    error: str


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class TickElapsed:
    pass


@dataclass(frozen=True)
class DeparturesFetched:
    code: str
    title: str
    board: DepartureBoard
    reason: str = SELECT


@dataclass(frozen=True)
class DeparturesFetchFailed:
    code: str
    title: str
    error: str
    reason: str = SELECT


Event = Union[
    StationsFetched,
    StationsFetchFailed,
    KeyPressed,
    TickElapsed,
    DeparturesFetched,
    DeparturesFetchFailed,
]


# Effects


@dataclass(frozen=True)
class FetchStations:
    pass


@dataclass(frozen=True)
class FetchDepartures:
    code: str
    title: str
    reason: str = SELECT


@dataclass(frozen=True)
class ScheduleTick:
    delay: float


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[FetchStations, FetchDepartures, ScheduleTick, Quit]


@dataclass(frozen=True)
class SessionState:
    """Everything the board shows. Replaced wholesale by :func:`transition`."""

    stations: tuple[Station, ...] = ()
    cursor: int = 0
    locked_code: str | None = None
    locked_name: str | None = None
    board: DepartureBoard | None = None
    board_title: str = ""
    pane_error: str | None = None
    status: str = LOADING_STATUS
    last_error: str | None = None
    running: bool = True

    @property
    def tracking(self) -> bool:
        return self.locked_code is not None

    @property
    def picking(self) -> bool:
        return bool(self.stations) and not self.tracking

    @property
    def selected(self) -> Station | None:
        if not self.picking:
            return None
        return self.stations[self.cursor]


def _clamp(cursor: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(cursor, count - 1))


def _tracking_title(name: str) -> str:
    return f"{name} Departures"


def _on_stations_fetched(
    state: SessionState, event: StationsFetched, config: AppConfig
) -> tuple[SessionState, list[Effect]]:
    stations = tuple(event.stations)
    if not stations:
        return replace(state, stations=(), cursor=0, status=LOADED_STATUS, last_error=None), []

    state = replace(
        state,
        stations=stations,
        cursor=_clamp(state.cursor, len(stations)),
        status=LIVE_STATUS,
        last_error=None,
    )

    wanted = config.bart.station
    if not wanted:
        return state, []

    match = next((station for station in stations if station.matches(wanted)), None)
    if match is None:
        logger.info("Station %r not found; showing picker", wanted)
        return state, []

    logger.info("Locking onto %s (%s)", match.name, match.code)
    state = replace(
        state,
        stations=(),
        cursor=0,
        locked_code=match.code,
        locked_name=match.name,
        status=f"Tracking {match.name}",
    )
    return state, [FetchDepartures(match.code, _tracking_title(match.name), STARTUP)]


def _on_key(state: SessionState, key: str) -> tuple[SessionState, list[Effect]]:
    if key in QUIT_KEYS:
        return replace(state, running=False), [Quit()]

    if key in REFRESH_KEYS:
        # A station-list error with nothing behind it stays frozen until restart.
        if state.last_error is not None and not state.stations:
            return state, []
        refreshed = replace(
            state,
            stations=(),
            cursor=0,
            locked_code=None,
            locked_name=None,
            board=None,
            board_title="",
            pane_error=None,
            last_error=None,
            status=REFRESHING_STATUS,
        )
        return refreshed, [FetchStations()]

    if not state.picking:
        return state, []

    if key in UP_KEYS:
        return replace(state, cursor=_clamp(state.cursor - 1, len(state.stations))), []
    if key in DOWN_KEYS:
        return replace(state, cursor=_clamp(state.cursor + 1, len(state.stations))), []
    if key == SELECT_KEY and state.selected is not None:
        station = state.selected
        return state, [FetchDepartures(station.code, station.name, SELECT)]
    return state, []


def _on_tick(state: SessionState, config: AppConfig) -> tuple[SessionState, list[Effect]]:
    effects: list[Effect] = []
    if state.locked_code is not None:
        name = state.locked_name or state.locked_code
        effects.append(FetchDepartures(state.locked_code, _tracking_title(name), TICK))
    effects.append(ScheduleTick(config.bart.poll_interval_seconds))
    return state, effects


def _departure_error(event: DeparturesFetchFailed) -> str:
    code = event.code.upper()
    if event.reason == TICK:
        return f"Error refreshing departures for {code}: {event.error}"
    if event.reason == STARTUP:
        return f"Error fetching departures for {code}: {event.error}"
    return f"Error fetching departures: {event.error}"


def transition(
    state: SessionState, event: Event, config: AppConfig
) -> tuple[SessionState, list[Effect]]:
    """Apply one event; return the next state and the effects to run."""
    if isinstance(event, StationsFetched):
        return _on_stations_fetched(state, event, config)
    if isinstance(event, StationsFetchFailed):
        logger.warning("Station list fetch failed: %s", event.error)
        return replace(state, last_error=event.error, status=STATION_ERROR_STATUS), []
    if isinstance(event, KeyPressed):
        return _on_key(state, event.key)
    if isinstance(event, TickElapsed):
        return _on_tick(state, config)
    if isinstance(event, DeparturesFetched):
        return replace(state, board=event.board, board_title=event.title, pane_error=None), []
    if isinstance(event, DeparturesFetchFailed):
        logger.warning("Departure fetch for %s failed: %s", event.code, event.error)
        return replace(state, board=None, board_title=event.title, pane_error=_departure_error(event)), []
    raise TypeError(f"Unknown event: {event!r}")


@dataclass
class Session:
    """Holds the current state and renders frames from it."""

    config: AppConfig
    state: SessionState = field(default_factory=SessionState)

    @property
    def running(self) -> bool:
        return self.state.running

    def start(self) -> list[Effect]:
        """Effects to run once at launch: the station list and the first tick."""
        return [FetchStations(), ScheduleTick(self.config.bart.poll_interval_seconds)]

    def handle(self, event: Event) -> list[Effect]:
        self.state, effects = transition(self.state, event, self.config)
        return effects

    def departures_text(self) -> str:
        state = self.state
        if state.pane_error is not None:
            return state.pane_error
        if state.board is None:
            return ""
        return format_board(state.board, state.board_title)

    def render(self) -> str:
        state = self.state
        display = self.config.display
        data = FrameData(
            stations=() if state.tracking else state.stations,
            cursor=state.cursor,
            departures_text=self.departures_text(),
            status=state.status,
            error=state.last_error,
            column_width=display.column_width,
            cursor_marker=display.cursor_marker,
        )
        return compose_frame(data)


__all__ = [
    "DeparturesFetchFailed",
    "DeparturesFetched",
    "Effect",
    "Event",
    "FetchDepartures",
    "FetchStations",
    "KeyPressed",
    "Quit",
    "ScheduleTick",
    "Session",
    "SessionState",
    "StationsFetchFailed",
    "StationsFetched",
    "TickElapsed",
    "transition",
]
