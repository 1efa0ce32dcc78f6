from .files import load_buffer, read_lines, save_buffer, write_lines

__all__ = ["load_buffer", "read_lines", "save_buffer", "write_lines"]
