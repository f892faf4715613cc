from __future__ import annotations


class PbmError(Exception):
    """Base class for every error raised by pbmrotate."""


class DecodeError(PbmError, ValueError):
    """The input could not be decoded as a P1 bitmap."""


class InvalidFormatTag(DecodeError):
    pass


class UnexpectedEndOfHeader(DecodeError):
    pass


class UnexpectedCharacterInHeader(DecodeError):
    pass


class InvalidPixelToken(DecodeError):
    pass


class MalformedBitmap(DecodeError):
    pass


class EmptyBitmap(PbmError, ValueError):
    pass


class IOFailure(PbmError, OSError):
    pass
