"""Event loop that connects the session, the worker and the terminal."""

from __future__ import annotations

import logging
import queue
from typing import Protocol

from bart_board.config import AppConfig
from bart_board.data.bart_client import BartClient
from bart_board.data.worker import FetchWorker
from bart_board.logic.session import Effect, Event, KeyPressed, Quit, Session

logger = logging.getLogger(__name__)


class Display(Protocol):
    def read_key(self) -> str | None: ...

    def render(self, frame: str) -> None: ...


def build_client(config: AppConfig) -> BartClient:
    return BartClient(
        api_key=config.bart.api_key,
        base_url=config.bart.base_url,
        timeout_seconds=config.bart.timeout_seconds,
    )


def _dispatch(effects: list[Effect], worker: FetchWorker) -> None:
    for effect in effects:
        if isinstance(effect, Quit):
            continue
        worker.submit(effect)


def _drain(events: "queue.Queue[Event]", session: Session, worker: FetchWorker) -> None:
    while session.running:
        try:
            event = events.get_nowait()
        except queue.Empty:
            return
        _dispatch(session.handle(event), worker)


def run(config: AppConfig, display: Display, client: BartClient | None = None) -> int:
    """Run until the user quits; returns the process exit status."""
    events: "queue.Queue[Event]" = queue.Queue()
    worker = FetchWorker(client or build_client(config), events)
    session = Session(config)
    logger.info("Starting board (station=%s)", config.bart.station)
    try:
        _dispatch(session.start(), worker)
        while session.running:
            _drain(events, session, worker)
            if not session.running:
                break
            display.render(session.render())
            key = display.read_key()
            if key is not None:
                _dispatch(session.handle(KeyPressed(key)), worker)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        worker.stop()
    logger.info("Board stopped")
    return 0


__all__ = ["Display", "build_client", "run"]
