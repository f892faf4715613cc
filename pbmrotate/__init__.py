from .codec import Header, Image, PbmError, decode, decode_bytes, encode, encode_bytes
from .transform import RotationEngine, degrees_to_radians, rotate, rotate_image

__version__ = "0.1.0"

__all__ = [
    "decode",
    "decode_bytes",
    "degrees_to_radians",
    "encode",
    "encode_bytes",
    "Header",
    "Image",
    "PbmError",
    "rotate",
    "rotate_image",
    "RotationEngine",
]
