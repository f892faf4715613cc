import io

import pytest

from pbmrotate.codec import (
    ByteCursor,
    HeaderReader,
    HeaderState,
    InvalidFormatTag,
    IOFailure,
    MalformedBitmap,
    UnexpectedCharacterInHeader,
    UnexpectedEndOfHeader,
    read_header,
)


class BrokenStream:
    def read(self, size=-1):
        raise OSError("device unplugged")


def _reader(data):
    return HeaderReader(ByteCursor(io.BytesIO(data)))


def test_read_header_basic(sample_pbm):
    header = read_header(io.BytesIO(sample_pbm))
    assert header.width == 7
    assert header.height == 5
    assert header.comments == ["test.pbm"]


def test_comments_between_numbers_keep_order():
    header = read_header(io.BytesIO(b"P1\n#first\n7 # width\n#  indented\n5\n"))
    assert (header.width, header.height) == (7, 5)
    assert header.comments == ["first", "width", " indented"]


def test_comment_inside_number_continues_number():
    header = read_header(io.BytesIO(b"P1\n1#split\n2 3 "))
    assert (header.width, header.height) == (12, 3)
    assert header.comments == ["split"]


def test_crlf_line_endings():
    header = read_header(io.BytesIO(b"P1\r\n# c\r\n2 1\r\n1 0\r\n"))
    assert (header.width, header.height) == (2, 1)
    assert header.comments == ["c"]


def test_header_stops_after_height():
    cursor = ByteCursor(io.BytesIO(b"P1 3 4\n# later\n"))
    HeaderReader(cursor).read_header()
    assert cursor.read_byte() == ord("#")


@pytest.mark.parametrize("data", [b"P2\n7 5\n", b"P1x7 5\n", b"p1\n7 5\n", b"P1", b""])
def test_invalid_format_tag(data):
    with pytest.raises(InvalidFormatTag):
        read_header(io.BytesIO(data))


@pytest.mark.parametrize("data", [b"P1\n7", b"P1\n7 ", b"P1\n7 5", b"P1\n# never ends", b"P1\n"])
def test_unexpected_end_of_header(data):
    with pytest.raises(UnexpectedEndOfHeader):
        read_header(io.BytesIO(data))


@pytest.mark.parametrize("data", [b"P1\n7x5\n", b"P1\n-7 5\n", b"P1\n7.5 5\n", b"P1\n0x7 5\n", b"P1\nseven 5\n"])
def test_unexpected_character_in_header(data):
    with pytest.raises(UnexpectedCharacterInHeader):
        read_header(io.BytesIO(data))


@pytest.mark.parametrize("data", [b"P1\n0 5\n", b"P1\n7 0\n"])
def test_zero_dimensions_rejected(data):
    with pytest.raises(MalformedBitmap):
        read_header(io.BytesIO(data))


def test_read_error_is_reported_as_io_failure():
    with pytest.raises(IOFailure):
        read_header(BrokenStream())


def test_cursor_error_is_sticky():
    stream = io.BytesIO(b"abc")
    cursor = ByteCursor(stream)
    assert cursor.read_byte() == ord("a")
    first = UnexpectedEndOfHeader("first")
    cursor.fail(first)
    cursor.fail(UnexpectedCharacterInHeader("second"))
    assert cursor.error is first
    assert cursor.read_byte() is None
    assert cursor.read_byte() is None
    with pytest.raises(UnexpectedEndOfHeader, match="first"):
        cursor.raise_for_error()


def test_cursor_reads_across_chunks():
    cursor = ByteCursor(io.BytesIO(b"abcdef"), chunk_size=4)
    data = []
    byte = cursor.read_byte()
    while byte is not None:
        data.append(byte)
        byte = cursor.read_byte()
    assert bytes(data) == b"abcdef"
    assert cursor.offset == 6
    assert cursor.error is None


def test_step_whitespace_to_number_to_whitespace():
    reader = _reader(b"  12 ")
    assert reader.step() is HeaderState.NUMBER
    assert reader.value == 1
    assert reader.step() is HeaderState.SKIPPING_WHITESPACE
    assert reader.numbers == [12]


def test_step_comment_returns_to_previous_state():
    reader = _reader(b"# hi\n")
    assert reader.step() is HeaderState.COMMENT
    assert reader.return_state is HeaderState.SKIPPING_WHITESPACE
    assert reader.step() is HeaderState.SKIPPING_WHITESPACE
    assert reader.comments == ["hi"]


def test_step_second_number_finishes():
    reader = _reader(b"3 4\n")
    reader.step()
    reader.step()
    reader.step()
    assert reader.step() is HeaderState.DONE
    assert reader.numbers == [3, 4]


def test_step_failure_keeps_state():
    reader = _reader(b"  ?")
    assert reader.step() is HeaderState.SKIPPING_WHITESPACE
    assert isinstance(reader.cursor.error, UnexpectedCharacterInHeader)
