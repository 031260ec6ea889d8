from __future__ import annotations

from enum import IntEnum
from typing import Dict

import numpy as np


class ShapeKind(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(rows) -> Shape:
    m = np.array(rows, dtype=np.bool_)
    m.flags.writeable = False
    return m


SHAPES: Dict[ShapeKind, Shape] = {
    ShapeKind.I: _frozen([[1, 1, 1, 1]]),
    ShapeKind.O: _frozen([[1, 1], [1, 1]]),
    ShapeKind.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    ShapeKind.S: _frozen([[1, 1, 0], [0, 1, 1]]),
    ShapeKind.Z: _frozen([[0, 1, 1], [1, 1, 0]]),
    ShapeKind.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    ShapeKind.L: _frozen([[0, 0, 1], [1, 1, 1]]),
}

COLORS: Dict[ShapeKind, str] = {
    ShapeKind.I: "#FF595E",
    ShapeKind.O: "#FFCA3A",
    ShapeKind.T: "#8AC926",
    ShapeKind.S: "#1982C4",
    ShapeKind.Z: "#6A4C93",
    ShapeKind.J: "#FF9671",
    ShapeKind.L: "#FFC75F",
}

MAX_SHAPE_WIDTH = max(s.shape[1] for s in SHAPES.values())
MAX_SHAPE_HEIGHT = max(s.shape[0] for s in SHAPES.values())


def rotate_clockwise(shape: Shape) -> Shape:
    """Return `shape` turned 90 degrees clockwise (transpose, then reverse each row)."""
    rotated = np.ascontiguousarray(shape.T[:, ::-1])
    rotated.flags.writeable = False
    return rotated


def color_for(kind: int) -> str:
    return COLORS[ShapeKind(kind)]
