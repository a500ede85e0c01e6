"""Background execution of fetch and timer effects.

Results are never applied here: each finished fetch or elapsed timer is turned into an
event and put on ``events`` for the main loop to hand to the session.
"""

from __future__ import annotations

import logging
import queue
import threading

from bart_board.data.bart_client import BartClient, FetchError
from bart_board.logic.session import (
    DeparturesFetchFailed,
    DeparturesFetched,
    Effect,
    Event,
    FetchDepartures,
    FetchStations,
    ScheduleTick,
    StationsFetchFailed,
    StationsFetched,
    TickElapsed,
)

logger = logging.getLogger(__name__)


def fetch_stations(client: BartClient) -> Event:
    """Run a station list fetch and wrap the outcome in an event."""
    try:
        stations = client.get_stations()
    except FetchError as exc:
        return StationsFetchFailed(error=str(exc))
    return StationsFetched(stations=tuple(stations))


def fetch_departures(client: BartClient, effect: FetchDepartures) -> Event:
    """Run a departure fetch and wrap the outcome in an event."""
    try:
        board = client.get_departures(effect.code)
    except FetchError as exc:
        return DeparturesFetchFailed(
            code=effect.code, title=effect.title, error=str(exc), reason=effect.reason
        )
    return DeparturesFetched(code=effect.code, title=effect.title, board=board, reason=effect.reason)


class FetchWorker:
    """Runs fetches on daemon threads and arms one-shot tick timers."""

    def __init__(self, client: BartClient, events: "queue.Queue[Event]") -> None:
        self._client = client
        self._events = events
        self._lock = threading.Lock()
        self._timers: set[threading.Timer] = set()
        self._stopped = threading.Event()

    def submit(self, effect: Effect) -> None:
        """Start an effect; returns immediately."""
        if self._stopped.is_set():
            return
        if isinstance(effect, FetchStations):
            self._spawn(fetch_stations, self._client)
        elif isinstance(effect, FetchDepartures):
            self._spawn(fetch_departures, self._client, effect)
        elif isinstance(effect, ScheduleTick):
            self._schedule_tick(effect.delay)
        else:
            raise TypeError(f"FetchWorker cannot run {effect!r}")

    def stop(self) -> None:
        """Cancel pending timers and drop results of fetches still in flight."""
        self._stopped.set()
        with self._lock:
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()

    def _post(self, event: Event) -> None:
        if not self._stopped.is_set():
            self._events.put(event)

    def _spawn(self, target, *args) -> None:
        def _run() -> None:
            event = target(*args)
            logger.debug("Fetch finished: %s", type(event).__name__)
            self._post(event)

        thread = threading.Thread(target=_run, daemon=True)
        thread.start()

    def _schedule_tick(self, delay: float) -> None:
        timer: threading.Timer

        def _fire() -> None:
            with self._lock:
                self._timers.discard(timer)
            self._post(TickElapsed())

        timer = threading.Timer(delay, _fire)
        timer.daemon = True
        with self._lock:
            self._timers.add(timer)
        timer.start()


__all__ = ["FetchWorker", "fetch_departures", "fetch_stations"]
