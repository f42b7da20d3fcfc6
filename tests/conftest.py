# tests/conftest.py
import pytest

from cursorparsec.Cursor import Cursor, LineCursor, SourcePos
from cursorparsec.Parsec import Error, Ok, Reply


def assert_reply_eq(res1: Reply, res2: Reply):
    """
    Deep comparison of two replies.
    """
    assert res1.ok == res2.ok, "Reply mismatch: Ok vs Error"
    assert res1.cursor.marker() == res2.cursor.marker(), (
        f"Cursor mismatch: {res1.cursor!r} != {res2.cursor!r}"
    )
    if isinstance(res1, Ok):
        assert res1.value == res2.value
    else:
        assert isinstance(res2, Error)
        assert res1.error == res2.error


@pytest.fixture
def cursor():
    def _make(input_data):
        return Cursor(input_data)

    return _make


@pytest.fixture
def line_cursor():
    def _make(input_data):
        return LineCursor(input_data, 0, SourcePos(1, 1, "test"))

    return _make
