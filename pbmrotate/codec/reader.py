from __future__ import annotations

import enum
import logging
from typing import BinaryIO, Callable, Dict, List, Optional

from .errors import (
    InvalidFormatTag,
    IOFailure,
    MalformedBitmap,
    PbmError,
    UnexpectedCharacterInHeader,
    UnexpectedEndOfHeader,
)
from .types import Header

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024
WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")
DIGITS = frozenset(b"0123456789")
LINE_TERMINATORS = frozenset(b"\n\r")
COMMENT_START = ord("#")
ZERO = ord("0")
COMMENT_ENCODING = "utf-8"


class ByteCursor:
    """Hands out one byte at a time from a binary stream.

    The cursor keeps a sticky error: after the first failure every read
    returns ``None`` without touching the stream, and :meth:`raise_for_error`
    reports that first failure. End of stream also reads as ``None``.
    """

    def __init__(self, stream: BinaryIO, chunk_size: int = READ_CHUNK_SIZE) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer = b""
        self._pos = 0
        self._eof = False
        self._error: Optional[PbmError] = None
        self.offset = 0

    @property
    def error(self) -> Optional[PbmError]:
        return self._error

    def fail(self, error: PbmError) -> None:
        """Record ``error`` unless an earlier one is already recorded."""
        if self._error is None:
            self._error = error

    def raise_for_error(self) -> None:
        if self._error is not None:
            raise self._error

    def read_byte(self) -> Optional[int]:
        if self._error is not None:
            return None
        if self._pos >= len(self._buffer) and not self._fill():
            return None
        value = self._buffer[self._pos]
        self._pos += 1
        self.offset += 1
        return value

    def _fill(self) -> bool:
        if self._eof:
            return False
        try:
            chunk = self._stream.read(self._chunk_size)
        except OSError as exc:
            self.fail(IOFailure(f"Failed reading input: {exc}"))
            return False
        if isinstance(chunk, str):
            self.fail(IOFailure("Input stream must be opened in binary mode"))
            return False
        if not chunk:
            self._eof = True
            return False
        self._buffer = bytes(chunk)
        self._pos = 0
        return True


class HeaderState(enum.Enum):
    SKIPPING_WHITESPACE = "skipping_whitespace"
    NUMBER = "number"
    COMMENT = "comment"
    DONE = "done"


class HeaderReader:
    """State machine that reads the P1 tag, dimensions and comments.

    Each state has its own transition method that consumes bytes from the
    cursor and returns the next state. Failures are recorded on the cursor and
    leave the state unchanged, so :meth:`read_header` stops at the first one.
    """

    def __init__(self, cursor: ByteCursor) -> None:
        self.cursor = cursor
        self.state = HeaderState.SKIPPING_WHITESPACE
        self.return_state = HeaderState.SKIPPING_WHITESPACE
        self.value = 0
        self.numbers: List[int] = []
        self.comments: List[str] = []
        self._transitions: Dict[HeaderState, Callable[[], HeaderState]] = {
            HeaderState.SKIPPING_WHITESPACE: self._skip_whitespace,
            HeaderState.NUMBER: self._read_number,
            HeaderState.COMMENT: self._read_comment,
        }

    def read_header(self) -> Header:
        self.read_format_tag()
        while self.cursor.error is None and self.state is not HeaderState.DONE:
            self.step()
        self.cursor.raise_for_error()
        width, height = self.numbers
        if width == 0 or height == 0:
            raise MalformedBitmap(f"Dimensions must be positive, got {width}x{height}")
        logger.debug("Read header %dx%d with %d comment(s)", width, height, len(self.comments))
        return Header(width, height, list(self.comments))

    def read_format_tag(self) -> None:
        tag = [self.cursor.read_byte() for _ in range(3)]
        if tag[0] == ord("P") and tag[1] == ord("1") and tag[2] is not None and tag[2] in WHITESPACE:
            return
        seen = bytes(b for b in tag if b is not None)
        self.cursor.fail(InvalidFormatTag(f"Expected P1 format tag, got {seen!r}"))

    def step(self) -> HeaderState:
        """Run the transition for the current state and return the new state."""
        self.state = self._transitions[self.state]()
        return self.state

    def _skip_whitespace(self) -> HeaderState:
        byte = self.cursor.read_byte()
        while byte is not None and byte in WHITESPACE:
            byte = self.cursor.read_byte()
        if byte is None:
            return self._end_of_stream()
        if byte in DIGITS:
            self.value = byte - ZERO
            return HeaderState.NUMBER
        if byte == COMMENT_START:
            self.return_state = HeaderState.SKIPPING_WHITESPACE
            return HeaderState.COMMENT
        return self._unexpected(byte)

    def _read_number(self) -> HeaderState:
        byte = self.cursor.read_byte()
        while byte is not None and byte in DIGITS:
            self.value = self.value * 10 + (byte - ZERO)
            byte = self.cursor.read_byte()
        if byte is None:
            return self._end_of_stream()
        if byte in WHITESPACE:
            self.numbers.append(self.value)
            self.value = 0
            if len(self.numbers) == 2:
                return HeaderState.DONE
            return HeaderState.SKIPPING_WHITESPACE
        if byte == COMMENT_START:
            # the number is not finished yet; digits after the comment extend it
            self.return_state = HeaderState.NUMBER
            return HeaderState.COMMENT
        return self._unexpected(byte)

    def _read_comment(self) -> HeaderState:
        text = bytearray()
        byte = self.cursor.read_byte()
        while byte is not None and byte not in LINE_TERMINATORS:
            text.append(byte)
            byte = self.cursor.read_byte()
        if byte is None:
            return self._end_of_stream()
        if text and text[0] in WHITESPACE:
            del text[0]
        self.comments.append(text.decode(COMMENT_ENCODING, errors="surrogateescape"))
        return self.return_state

    def _end_of_stream(self) -> HeaderState:
        self.cursor.fail(
            UnexpectedEndOfHeader(f"Unexpected end of stream in header after {self.cursor.offset} bytes")
        )
        return self.state

    def _unexpected(self, byte: int) -> HeaderState:
        self.cursor.fail(
            UnexpectedCharacterInHeader(
                f"Unexpected character {chr(byte)!r} in header at offset {self.cursor.offset - 1}"
            )
        )
        return self.state


def read_header(stream: BinaryIO) -> Header:
    """Read only the header of a P1 stream."""
    return HeaderReader(ByteCursor(stream)).read_header()
