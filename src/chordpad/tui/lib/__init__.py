from .geometry import Position, Rectangle, Size
from .screen import CellScreen, Lines, Printer, ScreenWriter, SubScreen, line_col, line_index

__all__ = [
    "Position",
    "Rectangle",
    "Size",
    "CellScreen",
    "Lines",
    "Printer",
    "ScreenWriter",
    "SubScreen",
    "line_col",
    "line_index",
]
