"""Data structures for rendering frames."""

from __future__ import annotations

from dataclasses import dataclass

from bart_board.data.models import Station


@dataclass(frozen=True)
class FrameData:
    """Frame data for the layout renderer."""

    stations: tuple[Station, ...]  # empty while tracking or loading
    cursor: int
    departures_text: str
    status: str
    error: str | None = None
    column_width: int = 70
    cursor_marker: str = ">"


__all__ = ["FrameData"]
