from __future__ import annotations

import logging
from typing import BinaryIO, List

from .errors import IOFailure
from .reader import COMMENT_ENCODING
from .types import Image

logger = logging.getLogger(__name__)

FORMAT_TAG = "P1"


def _clean_comment(comment: str) -> str:
    return comment.replace("\n", " ").replace("\r", " ")


def _encode_comment(comment: str) -> bytes:
    try:
        return f"# {_clean_comment(comment)}".encode(COMMENT_ENCODING, errors="surrogateescape")
    except UnicodeEncodeError as exc:
        raise IOFailure(f"Comment {comment!r} cannot be encoded: {exc}") from exc


def encode_bytes(image: Image) -> bytes:
    """Render the canonical P1 text for an image.

    Rows are written as ``"<pixel> "`` per pixel followed by a newline, so
    every row carries a trailing space. Comments are written as UTF-8, with
    undecodable bytes from the input restored as they were read.
    """
    image.validate()
    lines: List[bytes] = [FORMAT_TAG.encode("ascii")]
    for comment in image.header.comments:
        lines.append(_encode_comment(comment))
    lines.append(f"{image.header.width} {image.header.height}".encode("ascii"))
    for row in image.bitmap:
        lines.append("".join("1 " if pixel else "0 " for pixel in row).encode("ascii"))
    return b"\n".join(lines) + b"\n"


def encode(image: Image, sink: BinaryIO) -> int:
    """Write the encoded image to ``sink`` and return the number of bytes written."""
    data = encode_bytes(image)
    try:
        written = sink.write(data)
        if hasattr(sink, "flush"):
            sink.flush()
    except OSError as exc:
        raise IOFailure(f"Failed writing output: {exc}") from exc
    if written is not None and written != len(data):
        raise IOFailure(f"Short write: {written} of {len(data)} bytes written")
    logger.debug("Encoded %dx%d image into %d bytes", image.header.width, image.header.height, len(data))
    return len(data)
