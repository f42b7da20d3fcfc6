from typing import Any, Callable, Iterable, Sequence

from .Cursor import Cursor
from .Error import END_OF_INPUT, AtomMismatch, LiteralMismatch, ParseError
from .Parsec import Error, Ok, Parsec, Reply
from .Prim import any_token, many, many1, skip_many, skip_many1, token


# Core function: Succeeds if the character satisfies a predicate
def char_satisfy(f: Callable[[Any], bool], expected: str = "<char_satisfy>") -> Parsec[str]:
    """
    Parses one character for which f returns True.
    Faster than any_char().satisfy(f) and fails without consuming input.
    """
    return token(f, expected)


satisfy = char_satisfy


# Helper function: Parses a single character
def char(c: str) -> Parsec[str]:
    """Matches one symbol equal to c; also works for bytes (pass an int) and token lists."""
    return token(lambda x: x == c, c)


# 1. anyChar: Parses any character
def any_char() -> Parsec[str]:
    return any_token()


# 2. oneOf: Parses any character in the provided collection
def one_of(cs: Iterable[str]) -> Parsec[str]:
    """Matches one symbol from cs. The error names the whole set."""
    allowed = frozenset(cs)
    return char_satisfy(lambda c: c in allowed, f"<one of {''.join(sorted(allowed))}>")


# 3. noneOf: Parses any character not in the provided collection
def none_of(cs: Iterable[str]) -> Parsec[str]:
    forbidden = frozenset(cs)
    return char_satisfy(lambda c: c not in forbidden, f"<none of {''.join(sorted(forbidden))}>")


# 4. string: Parses a specific string
def string(s: Sequence[Any]) -> Parsec[Any]:
    """
    Matches the symbols of s one by one and returns s.

    Works over any input whose symbols compare equal to the items of s, so
    `string("ab")` also matches a list of characters. On a mismatch the
    cursor is left where it was, so `string("two") | string("three")` needs
    no try_parse. The deepest error names the first diverging symbol; the
    frame above it gives the longest matched prefix plus that symbol.
    """
    def parse(cursor: Cursor) -> Reply[Any]:
        window = cursor.peek(len(s))
        for i, expected in enumerate(s):
            if i >= len(window):
                found = END_OF_INPUT
                break
            if window[i] != expected:
                found = window[i]
                break
        else:
            return Ok(s, cursor.advance(len(s)))
        seen = window[:i + 1]

        def thunk() -> ParseError:
            return ParseError(AtomMismatch(expected, found), LiteralMismatch(s, seen))
        return Error(cursor, thunk)
    return Parsec(parse)


# 5. letter: Parses an alphabetic character
def letter() -> Parsec[str]:
    return char_satisfy(str.isalpha, "<letter>")


# 6. digit: Parses an ASCII digit
def digit() -> Parsec[str]:
    """Only 0-9; other Unicode digits are rejected, unlike str.isdigit."""
    return char_satisfy(lambda c: '0' <= c <= '9', "<digit>")


# 7. hexDigit: Parses a hexadecimal digit
def hex_digit() -> Parsec[str]:
    return char_satisfy(lambda c: c in "0123456789abcdefABCDEF", "<hexadecimal digit>")


# 8. octDigit: Parses an octal digit
def oct_digit() -> Parsec[str]:
    return char_satisfy(lambda c: c in "01234567", "<octal digit>")


# 9. space: Parses a whitespace character
def space() -> Parsec[str]:
    return char_satisfy(str.isspace, "<space>")


# 10. spaces: Skips zero or more whitespace characters
def spaces() -> Parsec[None]:
    return skip_many(space())


# 11. spaces1: Skips one or more whitespace characters
def spaces1() -> Parsec[None]:
    return skip_many1(space())


# 12. newline: Parses a newline character
def newline() -> Parsec[str]:
    """LF only. See end_of_line for CRLF input."""
    return char('\n')


# 13. crlf: Parses a carriage return followed by a newline
def crlf() -> Parsec[str]:
    """A lone '\\r' fails after consuming it."""
    return char('\r').then(char('\n'))


# 14. endOfLine: Parses either a newline or a crlf
def end_of_line() -> Parsec[str]:
    """LF or CRLF; the value is always '\\n'."""
    return newline() | crlf()


# 15. tab: Parses a tab character
def tab() -> Parsec[str]:
    return char('\t')


# 16. upper: Parses an uppercase letter
def upper() -> Parsec[str]:
    return char_satisfy(str.isupper, "<uppercase>")


# 17. lower: Parses a lowercase letter
def lower() -> Parsec[str]:
    return char_satisfy(str.islower, "<lowercase>")


# 18. alphaNum: Parses an alphanumeric character
def alpha_num() -> Parsec[str]:
    return char_satisfy(str.isalnum, "<letter or digit>")


# 19. manyChars: Zero or more characters joined into a string
def many_chars(p: Parsec[str]) -> Parsec[str]:
    """many(p) with the characters joined, so many_chars(digit()) on "53242k" gives "53242"."""
    return many(p).map("".join)


# 20. many1Chars: One or more characters joined into a string
def many1_chars(p: Parsec[str]) -> Parsec[str]:
    return many1(p).map("".join)
