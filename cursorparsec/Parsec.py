from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, Generic, Tuple, TypeVar, Union

from .Cursor import Cursor, make_cursor
from .Error import Message, ParseError, ParseFailure

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')
O = TypeVar('O')
C = TypeVar('C')

# Deferred error: built only when somebody looks at it
LazyError = Callable[[], ParseError]


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful reply: the value and the cursor after it."""
    value: T
    cursor: Cursor

    ok = True

    def consumed_since(self, start: Cursor) -> bool:
        return self.cursor.marker() != start.marker()

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Error:
    """
    Failed reply: the cursor where parsing stopped and a deferred ParseError.

    The cursor is what the consumption rule looks at; if it differs from the
    cursor the parser started on, the failure is consumptive.
    """
    cursor: Cursor
    thunk: LazyError

    ok = False

    @cached_property
    def error(self) -> ParseError:
        return self.thunk()

    def consumed_since(self, start: Cursor) -> bool:
        return self.cursor.marker() != start.marker()

    def at(self, cursor: Cursor) -> 'Error':
        """The same failure, reported at another cursor."""
        return Error(cursor, self.thunk)

    def unwrap(self) -> Any:
        raise ParseFailure(self.error, self.cursor.pos)


Reply = Union[Ok[T], Error]


def _flatten(value: Any, joined: bool) -> Tuple[Any, ...]:
    return value if joined else (value,)


class Parsec(Generic[T]):
    """
    A parser: a pure function from a Cursor to a reply.

    Parsers hold no mutable state. Building one runs nothing; composing
    them builds new parsers; only `parse` (or calling the parser on a
    cursor) does any work.
    """
    __slots__ = ("parse_fn", "joined")

    def __init__(self, parse_fn: Callable[[Cursor], Reply[T]], joined: bool = False):
        self.parse_fn = parse_fn
        # True for parsers built by `&`, whose tuple values get flattened
        self.joined = joined

    def __call__(self, cursor: Cursor) -> Reply[T]:
        return self.parse_fn(cursor)

    def parse(self, input_data: Any, cursor: type = Cursor, source_name: str = "") -> Reply[T]:
        """
        Run the parser once over `input_data`.

        `input_data` is any indexable sequence (str, bytes, list of tokens)
        or a Cursor left by an earlier parse. `cursor` picks the Cursor
        class built for a fresh input.
        """
        return self(make_cursor(input_data, cursor, source_name))

    # Sequencing (*>)
    def then(self, other: 'Parsec[U]') -> 'Parsec[U]':
        def parse(cursor: Cursor) -> Reply[U]:
            reply = self(cursor)
            if not reply.ok:
                return reply
            return other(reply.cursor)
        return Parsec(parse)

    # Sequencing (<*)
    def skip(self, other: 'Parsec[Any]') -> 'Parsec[T]':
        def parse(cursor: Cursor) -> Reply[T]:
            first = self(cursor)
            if not first.ok:
                return first
            second = other(first.cursor)
            if not second.ok:
                return second
            return Ok(first.value, second.cursor)
        return Parsec(parse)

    def pair_with(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        def parse(cursor: Cursor) -> Reply[Tuple[T, U]]:
            first = self(cursor)
            if not first.ok:
                return first
            second = other(first.cursor)
            if not second.ok:
                return second
            return Ok((first.value, second.value), second.cursor)
        return Parsec(parse)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        def parse(cursor: Cursor) -> Reply[U]:
            reply = self(cursor)
            if not reply.ok:
                return reply
            return f(reply.value)(reply.cursor)
        return Parsec(parse)

    def satisfy(self, predicate: Callable[[T], bool]) -> 'Parsec[T]':
        """
        Keep the value only if `predicate` accepts it.

        A rejected value fails where self stopped, so the failure is
        consumptive whenever self consumed anything.
        """
        def parse(cursor: Cursor) -> Reply[T]:
            reply = self(cursor)
            if not reply.ok:
                return reply
            if not predicate(reply.value):
                return Error(reply.cursor, lambda: ParseError(Message("failed satisfy")))
            return reply
        return Parsec(parse)

    def between(self, open: 'Parsec[O]', close: 'Parsec[C]') -> 'Parsec[T]':
        return open.then(self).skip(close)

    # Alternative (<|>)
    def or_(self, other: 'Parsec[T]') -> 'Parsec[T]':
        """
        Try self; try `other` from the same cursor only if self failed
        without consuming input.
        """
        def parse(cursor: Cursor) -> Reply[T]:
            reply = self(cursor)
            if reply.ok or reply.consumed_since(cursor):
                return reply
            return other(cursor)
        return Parsec(parse)

    def try_(self) -> 'Parsec[T]':
        """On failure, rewind to the starting cursor so `|` may try an alternative."""
        def parse(cursor: Cursor) -> Reply[T]:
            reply = self(cursor)
            if reply.ok:
                return reply
            return reply.at(cursor)
        return Parsec(parse)

    def transform(self, f: Callable[[T], U]) -> 'Parsec[U]':
        def parse(cursor: Cursor) -> Reply[U]:
            reply = self(cursor)
            if not reply.ok:
                return reply
            return Ok(f(reply.value), reply.cursor)
        return Parsec(parse)

    map = transform

    # Error annotation
    def add_context(self, msg: str) -> 'Parsec[T]':
        """On failure, add `msg` as an outer frame, keeping the original cause."""
        def parse(cursor: Cursor) -> Reply[T]:
            reply = self(cursor)
            if reply.ok:
                return reply
            return Error(reply.cursor, lambda: reply.error.with_context(Message(msg)))
        return Parsec(parse)

    def replace_message(self, msg: str) -> 'Parsec[T]':
        """On failure, report only `msg`, dropping the original cause."""
        def parse(cursor: Cursor) -> Reply[T]:
            reply = self(cursor)
            if reply.ok:
                return reply
            return Error(reply.cursor, lambda: ParseError(Message(msg)))
        return Parsec(parse)

    label = replace_message

    # Operator sugar

    def __rshift__(self, other: Union['Parsec[U]', Callable[[T], 'Parsec[U]']]) -> 'Parsec[U]':
        """`p >> q` sequences two parsers; `p >> f` binds."""
        if isinstance(other, Parsec):
            return self.then(other)
        return self.bind(other)

    def __lshift__(self, other: 'Parsec[Any]') -> 'Parsec[T]':
        return self.skip(other)

    def __or__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        return self.or_(other)

    def __and__(self, other: 'Parsec[Any]') -> 'Parsec[Tuple[Any, ...]]':
        """Join into a tuple; chained `&` gives one flat tuple."""
        left, right = self, other
        def parse(cursor: Cursor) -> Reply[Tuple[Any, ...]]:
            first = left(cursor)
            if not first.ok:
                return first
            second = right(first.cursor)
            if not second.ok:
                return second
            value = _flatten(first.value, left.joined) + _flatten(second.value, right.joined)
            return Ok(value, second.cursor)
        return Parsec(parse, joined=True)

    def __xor__(self, msg: str) -> 'Parsec[T]':
        return self.add_context(msg)

    def __mod__(self, msg: str) -> 'Parsec[T]':
        return self.replace_message(msg)
