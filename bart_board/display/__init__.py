"""Display output adapters."""

from bart_board.display.terminal import TerminalDisplay, decode_key

__all__ = ["TerminalDisplay", "decode_key"]
