from __future__ import annotations

import io
import logging
from typing import BinaryIO

from .errors import InvalidPixelToken, MalformedBitmap
from .reader import WHITESPACE, ZERO, ByteCursor, HeaderReader
from .types import Bitmap, Header, Image

logger = logging.getLogger(__name__)

PIXEL_TOKENS = frozenset(b"01")


class BitmapDecoder:
    """Scans the pixel region that follows a parsed header."""

    def __init__(self, cursor: ByteCursor, header: Header) -> None:
        self.cursor = cursor
        self.header = header

    def read_bitmap(self) -> Bitmap:
        width = self.header.width
        height = self.header.height
        total = width * height
        # rows grow with the pixels read, never from the declared width alone
        bitmap: Bitmap = [[]]
        row = bitmap[0]
        count = 0
        while count < total:
            byte = self.cursor.read_byte()
            if byte is None:
                break
            if byte in WHITESPACE:
                continue
            if byte not in PIXEL_TOKENS:
                self.cursor.fail(
                    InvalidPixelToken(
                        f"Invalid pixel {chr(byte)!r} at row {len(bitmap) - 1}, column {len(row)}"
                    )
                )
                break
            row.append(byte - ZERO)
            count += 1
            if len(row) == width and len(bitmap) < height:
                row = []
                bitmap.append(row)
        if count < total:
            self.cursor.fail(MalformedBitmap(f"Pixel data ended after {count} of {total} pixels"))
        self.cursor.raise_for_error()
        return bitmap


def decode(stream: BinaryIO) -> Image:
    """Decode a P1 image from a binary stream."""
    cursor = ByteCursor(stream)
    header = HeaderReader(cursor).read_header()
    bitmap = BitmapDecoder(cursor, header).read_bitmap()
    image = Image(header, bitmap)
    image.validate()
    logger.debug("Decoded %dx%d image (%d bytes read)", header.width, header.height, cursor.offset)
    return image


def decode_bytes(data: bytes) -> Image:
    return decode(io.BytesIO(data))
