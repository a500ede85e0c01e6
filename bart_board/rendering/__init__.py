"""Text rendering for the terminal board."""

from bart_board.rendering.formatter import format_board, format_departure
from bart_board.rendering.frame_data import FrameData
from bart_board.rendering.layout import compose_frame

__all__ = ["FrameData", "compose_frame", "format_board", "format_departure"]
