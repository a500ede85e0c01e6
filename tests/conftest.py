from __future__ import annotations

import pytest

from bart_board.config import AppConfig, BartConfig, DisplayConfig, LoggingConfig
from bart_board.data.models import Departure, Station


def _make_config(station: str | None = None, poll_interval_seconds: float = 5.0) -> AppConfig:
    return AppConfig(
        bart=BartConfig(
            api_key="test-key",
            poll_interval_seconds=poll_interval_seconds,
            station=station,
        ),
        display=DisplayConfig(),
        log=LoggingConfig(),
    )


@pytest.fixture()
def make_config():
    return _make_config


@pytest.fixture()
def stations() -> list[Station]:
    return [
        Station("12th St. Oakland City Center", "12TH", "Oakland"),
        Station("Civic Center/UN Plaza", "CIVC", "San Francisco"),
        Station("Powell St.", "POWL", "San Francisco"),
    ]


@pytest.fixture()
def board() -> dict[str, list[Departure]]:
    return {
        "Richmond": [Departure("Richmond", "4", "2"), Departure("Richmond", "19", "2")],
        "Daly City": [Departure("Daly City", "Leaving", "1")],
    }
