"""Plain-text formatting of a departure board."""

from __future__ import annotations

from bart_board.data.models import LEAVING, Departure, DepartureBoard


def format_departure(departure: Departure) -> str:
    """Format one estimate so single-digit minutes line up under two-digit ones."""
    if departure.minutes == LEAVING:
        return f" {LEAVING} | Platform {departure.platform}"
    if departure.minutes.isdecimal() and int(departure.minutes) < 10:
        return f"   {departure.minutes} min | Platform {departure.platform}"
    return f"  {departure.minutes} min | Platform {departure.platform}"


def format_board(board: DepartureBoard, title: str) -> str:
    """Render ``board`` under ``title``, destinations sorted, estimates in API order."""
    lines = [title, ""]
    for destination in sorted(board):
        lines.append(f"{destination}:")
        lines.extend(format_departure(departure) for departure in board[destination])
        lines.append("")
    return "\n".join(lines) + "\n"


__all__ = ["format_board", "format_departure"]
