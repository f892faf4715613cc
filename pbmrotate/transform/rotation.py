from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Tuple

from ..codec.errors import EmptyBitmap
from ..codec.types import Bitmap, Image

logger = logging.getLogger(__name__)

SNAP_EPSILON = 1e-9


def _to_grid(value: float) -> int:
    """Truncate toward zero, ignoring float noise around whole numbers."""
    nearest = round(value)
    if abs(value - nearest) < SNAP_EPSILON:
        return int(nearest)
    return int(value)


def degrees_to_radians(degrees: float, clockwise: bool = True) -> float:
    """Convert a command-line angle to the radians expected by the engine."""
    radians = math.radians(degrees)
    if clockwise:
        return -radians
    return radians


@dataclass(frozen=True)
class Canvas:
    """Size of the rotated grid and the offsets that make coordinates non-negative."""

    rows: int
    columns: int
    shift_x: int
    shift_y: int


class RotationEngine:
    """Rotates bitmaps around their origin with a 2D rotation matrix.

    Positive angles rotate counter-clockwise in (row, column) space. Pixels
    are placed in row-major source order, so when several source pixels map to
    one destination cell the last of them wins.
    """

    def __init__(self, angle: float) -> None:
        self.angle = angle
        self._cos = math.cos(angle)
        self._sin = math.sin(angle)

    def rotate_point(self, i: int, j: int) -> Tuple[int, int]:
        x = i * self._cos - j * self._sin
        y = i * self._sin + j * self._cos
        return _to_grid(x), _to_grid(y)

    def bounding_canvas(self, bitmap: Bitmap) -> Canvas:
        _require_pixels(bitmap)
        points = self._rotated_points(bitmap)
        (_, _), (x_min, y_min) = next(points)
        x_max, y_max = x_min, y_min
        for (_, _), (x, y) in points:
            if x < x_min:
                x_min = x
            elif x > x_max:
                x_max = x
            if y < y_min:
                y_min = y
            elif y > y_max:
                y_max = y
        shift_x = abs(x_min)
        shift_y = abs(y_min)
        return Canvas(
            rows=x_max + shift_x + 1,
            columns=y_max + shift_y + 1,
            shift_x=shift_x,
            shift_y=shift_y,
        )

    def rotate(self, bitmap: Bitmap) -> Bitmap:
        canvas = self.bounding_canvas(bitmap)
        rotated: Bitmap = [[0] * canvas.columns for _ in range(canvas.rows)]
        for (i, j), (x, y) in self._rotated_points(bitmap):
            rotated[x + canvas.shift_x][y + canvas.shift_y] = bitmap[i][j]
        logger.debug(
            "Rotated %dx%d bitmap by %.6f rad into %dx%d",
            len(bitmap[0]),
            len(bitmap),
            self.angle,
            canvas.columns,
            canvas.rows,
        )
        return rotated

    def rotate_image(self, image: Image) -> Image:
        """Rotate ``image`` in place and return it."""
        rotated = self.rotate(image.bitmap)
        image.bitmap = rotated
        image.header.height = len(rotated)
        image.header.width = len(rotated[0])
        return image

    def _rotated_points(self, bitmap: Bitmap) -> Iterator[Tuple[Tuple[int, int], Tuple[int, int]]]:
        for i, row in enumerate(bitmap):
            for j in range(len(row)):
                yield (i, j), self.rotate_point(i, j)


def _require_pixels(bitmap: Bitmap) -> None:
    if not bitmap or not bitmap[0]:
        raise EmptyBitmap("Cannot rotate an empty bitmap")


def rotate(bitmap: Bitmap, angle: float) -> Bitmap:
    """Return a rotated copy of ``bitmap``; ``angle`` is in radians."""
    return RotationEngine(angle).rotate(bitmap)


def rotate_image(image: Image, angle: float) -> Image:
    return RotationEngine(angle).rotate_image(image)
