from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Tuple

import numpy as np

from .shapes import SHAPES, Shape, ShapeKind, color_for, rotate_clockwise


@dataclass(frozen=True, eq=False)
class ActivePiece:
    kind: ShapeKind
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, kind: ShapeKind, cols: int) -> "ActivePiece":
        shape = SHAPES[kind]
        w = shape.shape[1]
        return cls(kind=kind, shape=shape, x=(cols - w) // 2, y=0)

    @property
    def color(self) -> str:
        return color_for(self.kind)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "ActivePiece":
        return replace(self, shape=rotate_clockwise(self.shape))

    def cells(self) -> Iterator[Tuple[int, int]]:
        for i, j in zip(*np.nonzero(self.shape)):
            yield self.x + int(j), self.y + int(i)
