from .base import DEFAULT_STYLE, Buffer, BufferKind, StyledChars
from .file_buffer import FileBuffer, LogBuffer, split_line_breaks
from .line import Line

__all__ = [
    "DEFAULT_STYLE",
    "Buffer",
    "BufferKind",
    "StyledChars",
    "FileBuffer",
    "LogBuffer",
    "split_line_breaks",
    "Line",
]
