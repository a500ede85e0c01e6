"""Frame composer for the terminal board."""

from __future__ import annotations

from itertools import zip_longest

from bart_board.rendering.frame_data import FrameData

STATIONS_HEADER = "BART Stations:"
DEPARTURES_HEADER = "Departures:"
SELECT_HINT = "Press Enter to see departures"
QUIT_HINT = "Press 'q' to quit."
REFRESH_HINT = "Press 'r' to refresh"
FOOTER = f"{QUIT_HINT} {REFRESH_HINT}"
COLUMN_GAP = "  "


def _station_column(data: FrameData) -> list[str]:
    blank = " " * len(data.cursor_marker)
    lines = ["", STATIONS_HEADER, ""]
    for index, station in enumerate(data.stations):
        marker = data.cursor_marker if index == data.cursor else blank
        lines.append(f"{marker} {station.name}, ({station.code})")
    lines.append("")
    return lines


def _departure_column(data: FrameData) -> list[str]:
    text = data.departures_text or SELECT_HINT
    return ["", DEPARTURES_HEADER, ""] + text.split("\n")


def _compose_error(data: FrameData) -> str:
    footer = FOOTER if data.stations else QUIT_HINT
    return f"{data.status}: {data.error}\n\n{footer}"


def _compose_columns(data: FrameData) -> str:
    rows = zip_longest(_station_column(data), _departure_column(data), fillvalue="")
    body = "".join(
        f"{left:<{data.column_width}}{COLUMN_GAP}{right}\n" for left, right in rows
    )
    return f"{body}\n{FOOTER}"


def compose_frame(data: FrameData) -> str:
    """Compose the full-screen text for one redraw."""
    if data.error is not None:
        return _compose_error(data)
    if data.stations:
        return _compose_columns(data)
    return f"{data.status}\n\n{data.departures_text}\n\n{FOOTER}"


__all__ = ["compose_frame"]
