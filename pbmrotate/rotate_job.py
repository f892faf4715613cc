from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Set

from .codec import Header, Image, decode, encode_bytes
from .rendering import load_raster_bitmap
from .transform import degrees_to_radians, rotate_image

logger = logging.getLogger(__name__)

DEFAULT_ANGLE = 0.0
DEFAULT_CLOCKWISE = True
DEFAULT_DITHER = True

PBM_EXTENSIONS: Set[str] = {".pbm"}
RASTER_EXTENSIONS: Set[str] = {".png", ".jpg", ".jpeg", ".gif", ".bmp"}
SUPPORTED_EXTENSIONS: Set[str] = PBM_EXTENSIONS | RASTER_EXTENSIONS


@dataclass
class RotateSettings:
    angle: float = DEFAULT_ANGLE
    clockwise: bool = DEFAULT_CLOCKWISE
    dither: bool = DEFAULT_DITHER

    @property
    def radians(self) -> float:
        return degrees_to_radians(self.angle, self.clockwise)


class RotateJobBuilder:
    """Loads an input file, rotates it and produces the encoded result in memory."""

    def __init__(self, settings: Optional[RotateSettings] = None) -> None:
        self.settings = settings or RotateSettings()

    def build_from_file(self, path: str) -> Image:
        self._validate_input_path(path)
        image = self._load(path)
        logger.info("Rotating %s (%dx%d) by %s degrees", path, image.width, image.height, self.settings.angle)
        return rotate_image(image, self.settings.radians)

    def build_bytes(self, path: str) -> bytes:
        return encode_bytes(self.build_from_file(path))

    def _load(self, path: str) -> Image:
        if is_raster_path(path):
            bitmap = load_raster_bitmap(path, dither=self.settings.dither)
            header = Header(len(bitmap[0]), len(bitmap), [os.path.basename(path)])
            image = Image(header, bitmap)
            image.validate()
            return image
        with open(path, "rb") as handle:
            return decode(handle)

    @staticmethod
    def _validate_input_path(path: str) -> None:
        ext = os.path.splitext(path)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ValueError("Supported formats: " + ", ".join(sorted(SUPPORTED_EXTENSIONS)))
        if not os.path.isfile(path):
            raise FileNotFoundError(f"File not found: {path}")


def is_raster_path(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in RASTER_EXTENSIONS
