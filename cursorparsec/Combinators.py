import logging
from typing import Any, Callable, Iterable, List, Optional

from .Cursor import Cursor
from .Error import Message, ParseError
from .Parsec import Error, Ok, Parsec, Reply, T
from .Prim import no_progress_error, fail, many, many1, pure, try_parse

log = logging.getLogger("cursorparsec")

BinOp = Callable[[T, T], T]


# 1. choice: Tries parsers in order until one succeeds
def choice(parsers: Iterable[Parsec[T]]) -> Parsec[T]:
    """
    Applies a list of parsers in order until one succeeds.
    Each alternative is only tried if the previous ones failed without consuming input.
    """
    parsers = list(parsers)
    if not parsers:
        return fail("empty choice")
    result = parsers[0]
    for p in parsers[1:]:
        result = result | p
    return result


# 2. count: Parses n occurrences of a parser
def count(n: int, p: Parsec[T]) -> Parsec[List[T]]:
    """Parses exactly n occurrences of p; fails with p's error if fewer match."""
    if n <= 0:
        return pure([])

    def parse(cursor: Cursor) -> Reply[List[T]]:
        results = []
        for _ in range(n):
            reply = p(cursor)
            if not reply.ok:
                return reply
            results.append(reply.value)
            cursor = reply.cursor
        return Ok(results, cursor)
    return Parsec(parse)


# 3. between: Parses an opening parser, a main parser, and a closing parser
def between(open: Parsec[Any], close: Parsec[Any], p: Parsec[T]) -> Parsec[T]:
    """Parses 'open', then 'p', then 'close', returning the result of 'p'."""
    return p.between(open, close)


# 4. option: Tries a parser, returning a default value on failure
def option(x: T, p: Parsec[T]) -> Parsec[T]:
    """Tries p; returns x if p fails without consuming input."""
    return p | pure(x)


# 5. optionMaybe: Tries a parser, returning Optional[T]
def option_maybe(p: Parsec[T]) -> Parsec[Optional[T]]:
    """Tries p; returns None if it fails without consuming input."""
    return p | pure(None)


# 6. optional: Tries a parser, discarding the result
def optional(p: Parsec[Any]) -> Parsec[None]:
    return skip(p) | pure(None)


# 7. skip: Parses p, discarding the result
def skip(p: Parsec[Any]) -> Parsec[None]:
    return p.then(pure(None))


# 8. sepBy: Parses zero or more occurrences separated by a separator
def sep_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    """Parses zero or more occurrences of p separated by sep."""
    return sep_by1(p, sep) | pure([])


# 9. sepBy1: Parses one or more occurrences separated by a separator
def sep_by1(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    """
    Parses one or more occurrences of p separated by sep.
    A separator that is not followed by p fails the whole parse if the separator consumed input.
    """
    rest = many(sep.then(p))

    def parse(cursor: Cursor) -> Reply[List[T]]:
        first = p(cursor)
        if not first.ok:
            return first
        more = rest(first.cursor)
        if not more.ok:
            return more
        return Ok([first.value] + more.value, more.cursor)
    return Parsec(parse)


# 10. endBy: Parses zero or more occurrences, each ended by a separator
def end_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return many(p.skip(sep))


# 11. endBy1: Parses one or more occurrences, each ended by a separator
def end_by1(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return many1(p.skip(sep))


# 12. sepEndBy: Zero or more occurrences separated and optionally ended by a separator
def sep_end_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return sep_end_by1(p, sep) | pure([])


# 13. sepEndBy1: One or more occurrences separated and optionally ended by a separator
def sep_end_by1(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    """
    Parses one or more p separated by sep, allowing one trailing sep.
    Iterative, so long lists do not grow the call stack.
    """
    def parse(start: Cursor) -> Reply[List[T]]:
        first = p(start)
        if not first.ok:
            return first
        results = [first.value]
        cursor = first.cursor
        while True:
            sep_reply = sep(cursor)
            if not sep_reply.ok:
                if sep_reply.consumed_since(cursor):
                    return sep_reply
                return Ok(results, cursor)
            item = p(sep_reply.cursor)
            if not item.ok:
                if item.consumed_since(sep_reply.cursor):
                    return item
                # trailing separator
                return Ok(results, sep_reply.cursor)
            if not item.consumed_since(cursor):
                return Error(start, no_progress_error)
            results.append(item.value)
            cursor = item.cursor
    return Parsec(parse)


def _till(p: Parsec[T], end: Parsec[Any], start: Cursor, cursor: Cursor, results: List[T]) -> Reply[List[T]]:
    while True:
        end_reply = end(cursor)
        if end_reply.ok:
            return Ok(results, end_reply.cursor)
        if end_reply.consumed_since(cursor):
            return end_reply
        item = p(cursor)
        if not item.ok:
            return Error(item.cursor,
                         lambda: item.error.with_context(Message("many_till: neither item nor end matched")))
        if not item.consumed_since(cursor):
            return Error(start, no_progress_error)
        results.append(item.value)
        cursor = item.cursor


# 14. manyTill: Parses p zero or more times until end succeeds
def many_till(p: Parsec[T], end: Parsec[Any]) -> Parsec[List[T]]:
    """
    Applies p zero or more times until end succeeds, returning p's results.
    End is tried first on every round; its value is discarded.
    """
    def parse(cursor: Cursor) -> Reply[List[T]]:
        return _till(p, end, cursor, cursor, [])
    return Parsec(parse)


# 15. many1Till: Parses p one or more times until end succeeds
def many1_till(p: Parsec[T], end: Parsec[Any]) -> Parsec[List[T]]:
    def parse(cursor: Cursor) -> Reply[List[T]]:
        first = p(cursor)
        if not first.ok:
            return first
        return _till(p, end, cursor, first.cursor, [first.value])
    return Parsec(parse)


# 16. chainl1: Left-associative operator chain
def chainl1(p: Parsec[T], op: Parsec[BinOp]) -> Parsec[T]:
    """
    Parses one or more p separated by op, folding op's functions from the left,
    so 1+2+3 becomes ((1+2)+3).

    The chain ends at the first op that fails without consuming input. An op
    that fails after consuming input, or an op not followed by p, fails the chain.
    """
    def parse(cursor: Cursor) -> Reply[T]:
        first = p(cursor)
        if not first.ok:
            return first
        acc = first.value
        cursor = first.cursor
        while True:
            op_reply = op(cursor)
            if not op_reply.ok:
                if op_reply.consumed_since(cursor):
                    return op_reply
                return Ok(acc, cursor)
            operand = p(op_reply.cursor)
            if not operand.ok:
                return operand
            acc = op_reply.value(acc, operand.value)
            cursor = operand.cursor
    return Parsec(parse)


# 17. chainl: Left-associative operator chain with a default value
def chainl(p: Parsec[T], op: Parsec[BinOp], x: T) -> Parsec[T]:
    """Like chainl1; returns x if no p could be parsed without consuming input."""
    return chainl1(p, op) | pure(x)


# 18. chainr1: Right-associative operator chain
def chainr1(p: Parsec[T], op: Parsec[BinOp]) -> Parsec[T]:
    """
    Parses one or more p separated by op, folding from the right,
    so 2^3^2 becomes 2^(3^2). Scans iteratively, then folds.
    """
    def parse(cursor: Cursor) -> Reply[T]:
        first = p(cursor)
        if not first.ok:
            return first
        operands = [first.value]
        funcs = []
        cursor = first.cursor
        while True:
            op_reply = op(cursor)
            if not op_reply.ok:
                if op_reply.consumed_since(cursor):
                    return op_reply
                break
            operand = p(op_reply.cursor)
            if not operand.ok:
                return operand
            funcs.append(op_reply.value)
            operands.append(operand.value)
            cursor = operand.cursor

        acc = operands[-1]
        for f, left in zip(reversed(funcs), reversed(operands[:-1])):
            acc = f(left, acc)
        return Ok(acc, cursor)
    return Parsec(parse)


# 19. chainr: Right-associative operator chain with a default value
def chainr(p: Parsec[T], op: Parsec[BinOp], x: T) -> Parsec[T]:
    return chainr1(p, op) | pure(x)


# 20. parserTrace: Debugging parser that logs the remaining input
def parser_trace(label_str: str) -> Parsec[None]:
    def parse(cursor: Cursor) -> Reply[None]:
        if log.isEnabledFor(logging.DEBUG):
            rest = cursor.peek(31)
            preview = f"{rest[:30]!r}{'...' if len(rest) > 30 else ''}"
            log.debug("%s: %s at %s", label_str, preview, cursor.pos)
        return Ok(None, cursor)
    return Parsec(parse)


# 21. parserTraced: Debugging parser that traces execution and backtracking
def parser_traced(label_str: str, p: Parsec[T]) -> Parsec[T]:
    """
    Logs on entry, and again if p fails, in which case the failure is
    reported without consuming input.
    """
    def on_failure(cursor: Cursor) -> Reply[T]:
        log.debug("%s backtracked at %s", label_str, cursor.pos)
        return Error(cursor, lambda: ParseError(Message(f"{label_str} backtracked and parser failed")))

    return parser_trace(label_str) >> (try_parse(p) | Parsec(on_failure))
