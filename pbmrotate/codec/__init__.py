from .decoder import BitmapDecoder, decode, decode_bytes
from .encoder import encode, encode_bytes
from .errors import (
    DecodeError,
    EmptyBitmap,
    InvalidFormatTag,
    InvalidPixelToken,
    IOFailure,
    MalformedBitmap,
    PbmError,
    UnexpectedCharacterInHeader,
    UnexpectedEndOfHeader,
)
from .reader import ByteCursor, HeaderReader, HeaderState, read_header
from .types import Bitmap, Header, Image

__all__ = [
    "Bitmap",
    "BitmapDecoder",
    "ByteCursor",
    "decode",
    "decode_bytes",
    "DecodeError",
    "EmptyBitmap",
    "encode",
    "encode_bytes",
    "Header",
    "HeaderReader",
    "HeaderState",
    "Image",
    "InvalidFormatTag",
    "InvalidPixelToken",
    "IOFailure",
    "MalformedBitmap",
    "PbmError",
    "read_header",
    "UnexpectedCharacterInHeader",
    "UnexpectedEndOfHeader",
]
