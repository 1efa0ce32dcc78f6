from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    x: int = 0
    y: int = 0

    def move_by(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def move_by_x(self, dx: int) -> Position:
        return Position(self.x + dx, self.y)


@dataclass(frozen=True)
class Size:
    w: int = 0
    h: int = 0

    def contains(self, p: Position) -> bool:
        return 0 <= p.x < self.w and 0 <= p.y < self.h


@dataclass(frozen=True)
class Rectangle:
    position: Position = Position()
    size: Size = Size()

    @property
    def bottom_right(self) -> Position:
        return Position(self.position.x + self.size.w, self.position.y + self.size.h)

    def intersect(self, other: Rectangle) -> Rectangle:
        br = self.bottom_right
        other_br = other.bottom_right
        x = max(self.position.x, other.position.x)
        y = max(self.position.y, other.position.y)
        right = min(br.x, other_br.x)
        bottom = min(br.y, other_br.y)
        return Rectangle(Position(x, y), Size(max(right - x, 0), max(bottom - y, 0)))
