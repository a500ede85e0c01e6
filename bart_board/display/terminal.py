"""curses output driver for the text board."""

from __future__ import annotations

import curses
import sys

WINDOW_TITLE = "BART Schedule"

KEY_NAMES = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_ENTER: "enter",
    10: "enter",
    13: "enter",
    3: "ctrl+c",
}


def decode_key(code: int) -> str | None:
    """Map a curses key code to the names the session understands."""
    if code < 0:
        return None
    if code in KEY_NAMES:
        return KEY_NAMES[code]
    if 32 <= code < 127:
        return chr(code)
    return None


class TerminalDisplay:
    """Full-screen text surface on the alternate screen.

    Use as a context manager; the terminal is restored on exit, including on errors.
    """

    def __init__(self, poll_timeout_ms: int = 250) -> None:
        self._poll_timeout_ms = poll_timeout_ms
        self._screen: curses.window | None = None

    def __enter__(self) -> "TerminalDisplay":
        sys.stdout.write(f"\x1b]0;{WINDOW_TITLE}\x07")
        sys.stdout.flush()
        screen = curses.initscr()
        try:
            curses.noecho()
            curses.raw()
            screen.keypad(True)
            screen.timeout(self._poll_timeout_ms)
            try:
                curses.curs_set(0)
            except curses.error:
                pass
        except curses.error:
            curses.endwin()
            raise
        self._screen = screen
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._screen is not None:
            self._screen.keypad(False)
            curses.noraw()
            curses.echo()
            curses.endwin()
            self._screen = None

    def read_key(self) -> str | None:
        """Wait up to the poll timeout for one keypress."""
        if self._screen is None:
            raise RuntimeError("TerminalDisplay is not open")
        return decode_key(self._screen.getch())

    def render(self, frame: str) -> None:
        """Replace the screen contents with ``frame``, clipped to the window."""
        if self._screen is None:
            raise RuntimeError("TerminalDisplay is not open")
        screen = self._screen
        height, width = screen.getmaxyx()
        screen.erase()
        for row, line in enumerate(frame.split("\n")[:height]):
            try:
                screen.addstr(row, 0, line[: max(0, width - 1)])
            except curses.error:
                # Writing the bottom-right cell raises after the text is drawn.
                pass
        screen.refresh()


__all__ = ["TerminalDisplay", "decode_key"]
