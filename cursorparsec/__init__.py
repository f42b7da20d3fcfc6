# Core
from .Cursor import Cursor, LineCursor, SourcePos
from .Error import (
    END_OF_INPUT, AtomMismatch, LiteralMismatch, Message, ParseError, ParseFailure
)
from .Parsec import Parsec, Ok, Error, Reply
from .Prim import (
    run_parser, success, pure, fail, unexpected, eof, token, any_token,
    try_parse, look_ahead, not_followed_by, lazy, join,
    add_context, replace_message,
    many, many1, skip_many, skip_many1,
)

# Combinators
from .Combinators import (
    choice, count, between, option, option_maybe, optional, skip,
    sep_by, sep_by1, end_by, end_by1, sep_end_by, sep_end_by1,
    many_till, many1_till, chainl, chainl1, chainr, chainr1,
    parser_trace, parser_traced
)

# Characters
from .Char import (
    char, char_satisfy, satisfy, string, any_char, one_of, none_of,
    letter, digit, hex_digit, oct_digit, alpha_num, upper, lower,
    space, spaces, spaces1, newline, crlf, end_of_line, tab,
    many_chars, many1_chars
)

# Numbers
from .Numeric import natural, int_, signed_int
