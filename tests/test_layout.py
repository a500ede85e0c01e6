from __future__ import annotations

from bart_board.data.models import Station
from bart_board.rendering.frame_data import FrameData
from bart_board.rendering.layout import FOOTER, QUIT_HINT, SELECT_HINT, compose_frame


def _stations() -> tuple[Station, ...]:
    return (
        Station("Civic Center/UN Plaza", "CIVC", "San Francisco"),
        Station("Powell St.", "POWL", "San Francisco"),
    )


def test_error_frame_ignores_everything_else() -> None:
    data = FrameData(
        stations=(),
        cursor=0,
        departures_text="Richmond:\n   4 min | Platform 2",
        status="Error loading stations",
        error="BART API request failed: Status 500",
    )

    frame = compose_frame(data)

    assert frame == (
        "Error loading stations: BART API request failed: Status 500\n\n" + QUIT_HINT
    )


def test_error_frame_offers_refresh_when_stations_loaded() -> None:
    data = FrameData(stations=_stations(), cursor=0, departures_text="", status="Error", error="boom")

    frame = compose_frame(data)

    assert "Powell St." not in frame
    assert frame.endswith(FOOTER)


def test_two_column_frame_marks_cursor_row() -> None:
    data = FrameData(stations=_stations(), cursor=1, departures_text="", status="Live")

    lines = compose_frame(data).split("\n")

    assert lines[1].startswith("BART Stations:")
    assert lines[3].startswith("  Civic Center/UN Plaza, (CIVC)")
    assert lines[4].startswith("> Powell St., (POWL)")
    assert lines[1].endswith("Departures:")
    assert lines[3].endswith(SELECT_HINT)


def test_right_column_starts_at_fixed_offset() -> None:
    data = FrameData(
        stations=_stations(),
        cursor=0,
        departures_text="Title\n\nRichmond:\n   4 min | Platform 2\n",
        status="Live",
    )

    lines = compose_frame(data).split("\n")

    assert lines[1].index("Departures:") == 72
    assert lines[5].index("Richmond:") == 72
    assert lines[6][72:] == "   4 min | Platform 2"


def test_taller_right_column_sets_frame_height() -> None:
    departures = "\n".join(f"line {n}" for n in range(20))
    data = FrameData(stations=_stations(), cursor=0, departures_text=departures, status="Live")

    body = compose_frame(data).split(f"\n\n{FOOTER}")[0]
    lines = body.split("\n")

    assert len(lines) == 3 + 20
    assert lines[-1].strip() == "line 19"
    assert lines[-1].startswith(" " * 72)


def test_single_column_frame_when_no_stations() -> None:
    data = FrameData(
        stations=(),
        cursor=0,
        departures_text="Powell St. Departures\n\n",
        status="Tracking Powell St.",
    )

    frame = compose_frame(data)

    assert frame.startswith("Tracking Powell St.\n\nPowell St. Departures")
    assert frame.endswith(FOOTER)
    assert "BART Stations:" not in frame
