import pytest

from wirebin.binary.codecs.cursor import Cursor
from wirebin.binary.errors import BinaryDataError, OutOfData


def test_peek_does_not_advance_consume_does():
    cur = Cursor(b"\x01\x02")
    assert cur.peek_byte() == 1
    assert cur.tell() == 0
    assert cur.consume_byte() == 1
    assert cur.consume_byte() == 2
    assert cur.tell() == 2 and cur.eof()


def test_empty_buffer_raises_out_of_data_without_moving():
    cur = Cursor(b"")
    with pytest.raises(OutOfData):
        cur.peek_byte()
    with pytest.raises(OutOfData):
        cur.consume_byte()
    assert cur.tell() == 0


def test_take_underrun_leaves_offset():
    cur = Cursor(b"\xAA\xBB\xCC")
    cur.consume_byte()
    with pytest.raises(OutOfData):
        cur.take(3)
    assert cur.tell() == 1
    assert cur.take(2) == b"\xBB\xCC"


def test_out_of_data_is_a_value_error():
    assert issubclass(OutOfData, BinaryDataError)
    assert issubclass(OutOfData, ValueError)


def test_seek_bounds():
    cur = Cursor(b"abc")
    cur.seek(3)
    assert cur.remaining() == 0
    with pytest.raises(ValueError):
        cur.seek(4)
    with pytest.raises(ValueError):
        Cursor(b"abc", pos=-1)


def test_skip_past_end():
    cur = Cursor(b"abc")
    with pytest.raises(OutOfData):
        cur.skip(4)
    cur.skip(2)
    assert cur.peek(1) == b"c"


def test_rewind_on_error():
    cur = Cursor(b"\x80\x80")
    with pytest.raises(OutOfData):
        with cur.rewind_on_error():
            cur.consume_byte()
            cur.consume_byte()
            cur.consume_byte()
    assert cur.tell() == 0


def test_buffer_is_a_snapshot():
    data = bytearray(b"\x05")
    cur = Cursor(data)
    data[0] = 9
    assert cur.peek_byte() == 5


def test_negative_lengths_rejected():
    cur = Cursor(b"abcdef")
    cur.skip(2)
    with pytest.raises(ValueError):
        cur.take(-2)
    with pytest.raises(ValueError):
        cur.peek(-1)
    with pytest.raises(ValueError):
        cur.skip(-1)
    assert cur.tell() == 2
    assert cur.take(4) == b"cdef"
