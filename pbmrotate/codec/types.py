from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .errors import MalformedBitmap

Bitmap = List[List[int]]


@dataclass
class Header:
    """Dimensions and comments read from a P1 header."""

    width: int
    height: int
    comments: List[str] = field(default_factory=list)


@dataclass
class Image:
    """A decoded P1 image: one header and the row-major 0/1 grid it describes."""

    header: Header
    bitmap: Bitmap

    def validate(self) -> None:
        """Check that the grid matches the header dimensions."""
        if self.header.width <= 0 or self.header.height <= 0:
            raise MalformedBitmap(
                f"Dimensions must be positive, got {self.header.width}x{self.header.height}"
            )
        if len(self.bitmap) != self.header.height:
            raise MalformedBitmap(
                f"Header declares {self.header.height} rows but bitmap has {len(self.bitmap)}"
            )
        for index, row in enumerate(self.bitmap):
            if len(row) != self.header.width:
                raise MalformedBitmap(
                    f"Row {index} has {len(row)} pixels, header declares {self.header.width}"
                )
            for column, pixel in enumerate(row):
                if pixel not in (0, 1):
                    raise MalformedBitmap(f"Pixel at row {index}, column {column} is {pixel!r}, expected 0 or 1")

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height

    def count_set(self) -> int:
        """Return the number of 1-valued pixels."""
        return sum(sum(row) for row in self.bitmap)
