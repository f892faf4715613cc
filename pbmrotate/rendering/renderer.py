from __future__ import annotations

from typing import List

from PIL import Image, ImageOps

from ..codec.errors import EmptyBitmap
from ..codec.types import Bitmap


def image_to_bw_pixels(img: Image.Image, dither: bool) -> List[int]:
    if dither:
        data = img.convert("1").convert("L").tobytes()
        return [1 if p == 0 else 0 for p in data]
    data = img.convert("L").tobytes()
    avg = sum(data) / len(data) if data else 0
    threshold = int(max(0, min(255, avg - 13)))
    return [1 if p <= threshold else 0 for p in data]


def image_to_bitmap(img: Image.Image, dither: bool = True) -> Bitmap:
    """Convert any Pillow image into 0/1 rows, 1 meaning black."""
    pixels = image_to_bw_pixels(img, dither)
    width = img.width
    return [pixels[start : start + width] for start in range(0, len(pixels), width)]


def load_raster_bitmap(path: str, dither: bool = True) -> Bitmap:
    with Image.open(path) as img:
        img = ImageOps.exif_transpose(img)
        return image_to_bitmap(img, dither)


def bitmap_to_image(bitmap: Bitmap) -> Image.Image:
    """Render 0/1 rows as a mode "1" image, black where the bitmap holds 1."""
    if not bitmap or not bitmap[0]:
        raise EmptyBitmap("Cannot render an empty bitmap")
    width = len(bitmap[0])
    height = len(bitmap)
    data = bytes(0 if pixel else 255 for row in bitmap for pixel in row)
    return Image.frombytes("L", (width, height), data).convert("1")
