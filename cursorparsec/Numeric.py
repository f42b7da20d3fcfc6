from .Char import char, digit
from .Combinators import option
from .Parsec import Parsec
from .Prim import many1, pure


def _to_int(digits) -> int:
    return int("".join(digits))


# Parses an unsigned decimal integer
def natural() -> Parsec[int]:
    return many1(digit()).map(_to_int)


int_ = natural


# Parses a decimal integer with an optional leading sign
def signed_int() -> Parsec[int]:
    sign = option(1, (char('-') >> pure(-1)) | (char('+') >> pure(1)))
    return sign.bind(lambda s: natural().map(lambda n: s * n))
