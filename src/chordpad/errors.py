from __future__ import annotations


class EditorError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class OutOfRange(EditorError, IndexError):
    pass


class LineTooShort(EditorError, IndexError):
    pass


class NoTransition(EditorError):
    """Raised when an event does not continue the current chord.

    The matcher has already been reset to its root state when this is raised.
    """

    def __init__(self, event_name: str) -> None:
        super().__init__(f"no known transition for event {event_name!r}")
        self.event_name = event_name


class ActionConflict(EditorError):
    def __init__(self, sequence: str, reason: str) -> None:
        super().__init__(f"cannot bind {sequence!r}: {reason}")
        self.sequence = sequence


class NoHighlightRegion(EditorError):
    def __init__(self) -> None:
        super().__init__("no highlight region")


class ReadOnlyViolation(EditorError):
    def __init__(self, name: str | None = None) -> None:
        target = name if name else "buffer"
        super().__init__(f"cannot save read only {target}")
