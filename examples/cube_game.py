"""
Parses puzzle input of the form

    Game 1: 3 blue, 4 red; 1 red, 2 green, 6 blue
    Game 2: 1 blue, 2 green

and reports which games are possible with 12 red, 13 green and 14 blue cubes.
"""
import sys
from collections import namedtuple

from cursorparsec.Char import char, newline, space, spaces, string
from cursorparsec.Combinators import choice, sep_by1, sep_end_by1
from cursorparsec.Numeric import int_
from cursorparsec.Prim import eof, run_parser

Cube = namedtuple("Cube", "count colour")
Game = namedtuple("Game", "number cubes")

colour = choice([string("red"), string("green"), string("blue")])

# Same shape written with named methods and with operators
cube = int_().skip(space()).pair_with(colour).map(lambda p: Cube(*p))
cube_sep = (char(',') | char(';')) << spaces()
game = ((string("Game ") >> int_()) & (string(": ") >> sep_by1(cube, cube_sep))).map(lambda t: Game(*t))

all_games = sep_end_by1(game, newline()) << eof()

LIMITS = {"red": 12, "green": 13, "blue": 14}


def possible(g: Game) -> bool:
    return all(c.count <= LIMITS[c.colour] for c in g.cubes)


if __name__ == "__main__":
    games, err = run_parser(all_games, sys.stdin.read())
    if err:
        print("Parsing Failed:", err)
        sys.exit(1)
    print(sum(g.number for g in games if possible(g)))
