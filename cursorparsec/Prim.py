from typing import Any, Callable, Optional, Protocol, Tuple, TypeVar

from .Cursor import Cursor, make_cursor
from .Error import END_OF_INPUT, AtomMismatch, Message, ParseError
from .Parsec import Error, Ok, Parsec, Reply, T

ItemType = TypeVar('ItemType', contravariant=True)


class Accumulator(Protocol[ItemType]):
    """Anything repetition can collect into: lists, deques, custom builders."""

    def append(self, item: ItemType) -> None:
        ...


def success(value: T) -> Parsec[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(cursor: Cursor) -> Reply[T]:
        return Ok(value, cursor)
    return Parsec(parse)


pure = success


def fail(error: Any) -> Parsec[Any]:
    """A parser that always fails, without consuming input, with a message or ParseError."""
    if isinstance(error, ParseError):
        def thunk() -> ParseError:
            return error
    else:
        def thunk() -> ParseError:
            return ParseError(Message(str(error)))

    def parse(cursor: Cursor) -> Reply[Any]:
        return Error(cursor, thunk)
    return Parsec(parse)


def unexpected() -> Parsec[Any]:
    return fail("unexpected")


def eof() -> Parsec[None]:
    """Succeeds, consuming nothing, only at the end of input."""
    def parse(cursor: Cursor) -> Reply[None]:
        if cursor.is_empty():
            return Ok(None, cursor)
        found = cursor.head()
        return Error(cursor, lambda: ParseError(AtomMismatch(END_OF_INPUT, found)))
    return Parsec(parse)


def token(test_tok: Callable[[Any], bool], expected: Any = "<token>") -> Parsec[Any]:
    """
    Parse a single symbol accepted by `test_tok`.

    A rejected symbol fails without consuming input; the error expects
    `expected` and reports the symbol (or end of input) that was found.
    """
    def parse(cursor: Cursor) -> Reply[Any]:
        if cursor.is_empty():
            return Error(cursor, lambda: ParseError(AtomMismatch(expected, END_OF_INPUT)))
        tok = cursor.head()
        if not test_tok(tok):
            return Error(cursor, lambda: ParseError(AtomMismatch(expected, tok)))
        return Ok(tok, cursor.advance(1))
    return Parsec(parse)


def any_token() -> Parsec[Any]:
    """Accepts any single symbol."""
    return token(lambda _: True, "any token")


def try_parse(parser: Parsec[T]) -> Parsec[T]:
    """Try a parser, turning a consumptive failure into a non-consumptive one."""
    return parser.try_()


def look_ahead(parser: Parsec[T]) -> Parsec[T]:
    """Run `parser` and rewind, whether it succeeded or failed."""
    def parse(cursor: Cursor) -> Reply[T]:
        reply = parser(cursor)
        if reply.ok:
            return Ok(reply.value, cursor)
        return reply.at(cursor)
    return Parsec(parse)


def not_followed_by(parser: Parsec[Any]) -> Parsec[None]:
    """Succeeds, consuming nothing, only if `parser` fails here."""
    def parse(cursor: Cursor) -> Reply[None]:
        reply = parser(cursor)
        if not reply.ok:
            return Ok(None, cursor)
        value = reply.value
        return Error(cursor, lambda: ParseError(Message(f"not_followed_by: unexpected {value!r}")))
    return Parsec(parse)


def lazy(factory: Callable[[], Parsec[T]]) -> Parsec[T]:
    """
    Defer building a parser until it runs.

    Breaks the eager recursion of self-referencing grammar functions such
    as `expr -> factor -> expr`. The factory is called on every run.
    """
    def parse(cursor: Cursor) -> Reply[T]:
        return factory()(cursor)
    return Parsec(parse)


def add_context(parser: Parsec[T], msg: str) -> Parsec[T]:
    return parser.add_context(msg)


def replace_message(parser: Parsec[T], msg: str) -> Parsec[T]:
    return parser.replace_message(msg)


def join(*parsers: Parsec[Any]) -> Parsec[Tuple[Any, ...]]:
    """Run parsers in sequence and return all their values as one tuple."""
    def parse(cursor: Cursor) -> Reply[Tuple[Any, ...]]:
        values = []
        for p in parsers:
            reply = p(cursor)
            if not reply.ok:
                return reply
            values.append(reply.value)
            cursor = reply.cursor
        return Ok(tuple(values), cursor)
    return Parsec(parse, joined=True)


def no_progress_error() -> ParseError:
    return ParseError(Message("many: parser succeeded without consuming input"))


def _repeat(p: Parsec[Any], start: Cursor, cursor: Cursor, acc: Any, keep: bool) -> Reply[Any]:
    """
    Shared loop of the many-family.

    Stops at the first failure that consumed nothing and succeeds with what
    was collected. A failure after consuming input fails the whole
    repetition. A success that consumed nothing would loop forever, so it
    fails immediately instead, at `start` and without consuming input.
    """
    while True:
        reply = p(cursor)
        if not reply.ok:
            if reply.consumed_since(cursor):
                return reply
            return Ok(acc, cursor)
        if not reply.consumed_since(cursor):
            return Error(start, no_progress_error)
        if keep:
            acc.append(reply.value)
        cursor = reply.cursor


def _many_accum(p: Parsec[Any], init: Callable[[], Any], keep: bool = True) -> Parsec[Any]:
    def parse(cursor: Cursor) -> Reply[Any]:
        return _repeat(p, cursor, cursor, init() if keep else None, keep)
    return Parsec(parse)


def _many1_accum(p: Parsec[Any], init: Callable[[], Any], keep: bool = True) -> Parsec[Any]:
    def parse(cursor: Cursor) -> Reply[Any]:
        first = p(cursor)
        if not first.ok:
            return first
        acc = None
        if keep:
            acc = init()
            acc.append(first.value)
        return _repeat(p, cursor, first.cursor, acc, keep)
    return Parsec(parse)


def many(p: Parsec[T], into: Callable[[], Accumulator[T]] = list) -> Parsec[Any]:
    """Parse zero or more occurrences of `p`, collected into `into()` (a list by default)."""
    return _many_accum(p, into)


def many1(p: Parsec[T], into: Callable[[], Accumulator[T]] = list) -> Parsec[Any]:
    """Parse one or more occurrences of `p`."""
    return _many1_accum(p, into)


def skip_many(p: Parsec[Any]) -> Parsec[None]:
    """Skips zero or more occurrences of `p`."""
    return _many_accum(p, list, keep=False)


def skip_many1(p: Parsec[Any]) -> Parsec[None]:
    """Skips one or more occurrences of `p`."""
    return _many1_accum(p, list, keep=False)


def run_parser(parser: Parsec[T],
               input_data: Any,
               cursor: type = Cursor,
               source_name: str = "") -> Tuple[Optional[T], Optional[ParseError]]:
    """Run a parser and return `(value, None)` or `(None, error)`."""
    reply = parser(make_cursor(input_data, cursor, source_name))
    if reply.ok:
        return reply.value, None
    return None, reply.error
