"""
Reads comma separated lines into lists of fields.

Usage:
    python examples/csv_reader.py data.csv
"""
import sys

from cursorparsec.Char import char, char_satisfy, end_of_line, string
from cursorparsec.Combinators import end_by, sep_by1
from cursorparsec.Prim import eof, many, run_parser

# A quoted field may hold commas, newlines and doubled quotes
quoted_char = char_satisfy(lambda c: c != '"', "<quoted char>") | string('""').map(lambda _: '"')
quoted_field = many(quoted_char).between(char('"'), char('"')).map("".join)

plain_field = many(char_satisfy(lambda c: c not in ',\r\n"', "<field char>")).map("".join)

field = quoted_field | plain_field
csv_line = sep_by1(field, char(','))
csv_file = end_by(csv_line, end_of_line()) << eof()


def read_csv(text: str):
    if text and not text.endswith("\n"):
        text += "\n"
    return run_parser(csv_file, text)


if __name__ == "__main__":
    with open(sys.argv[1]) as f:
        rows, err = read_csv(f.read())

    if err:
        print("Parsing Failed:", err)
        sys.exit(1)
    for row in rows:
        print(row)
