from __future__ import annotations

import os
import typing
from pathlib import Path

from chordpad import errors
from chordpad.buffer.base import Buffer
from chordpad.buffer.file_buffer import FileBuffer
from chordpad.buffer.line import Line
from chordpad.logger import logger


DEFAULT_BACKUP_SUFFIX: typing.Final[str] = "~"


def read_lines(path: str | Path) -> list[str]:
    """Read a file as one record per line; the trailing newline is optional."""
    text = Path(path).read_text(encoding="utf-8")
    if not text:
        return []
    records = text.split("\n")
    if records[-1] == "":
        records.pop()
    return records


def write_lines(path: str | Path, records: typing.Iterable[str]) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        for record in records:
            f.write(record)
            f.write("\n")


def load_buffer(path: str | Path, read_only: bool = False) -> FileBuffer:
    filename = os.fspath(path)
    try:
        records = read_lines(filename)
    except FileNotFoundError:
        logger.info("new file", filename=filename)
        records = []
    return FileBuffer(
        [Line.from_string(record) for record in records],
        filename=filename,
        read_only=read_only,
    )


def save_buffer(buffer: Buffer, backup_suffix: str = DEFAULT_BACKUP_SUFFIX) -> None:
    if buffer.read_only:
        raise errors.ReadOnlyViolation(buffer.filename)
    if not buffer.filename:
        raise ValueError("Buffer has no filename")
    path = Path(buffer.filename)
    if backup_suffix and path.exists():
        path.replace(path.with_name(path.name + backup_suffix))
    write_lines(path, (str(line) for line in buffer.lines()))
    logger.info("saved buffer", filename=buffer.filename, lines=buffer.line_count())
