from cursorparsec.Char import char, char_satisfy, string
from cursorparsec.Combinators import sep_by1
from cursorparsec.Numeric import int_
from cursorparsec.Prim import many, run_parser


class TimeMany:
    def setup(self):
        self.parser = many(char("a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_many_small(self):
        run_parser(self.parser, self.small)

    def time_many_medium(self):
        run_parser(self.parser, self.medium)

    def time_many_large(self):
        run_parser(self.parser, self.large)


class TimeLeafParsers:
    def setup(self):
        self.literal = string("dsavg3@#()HRJNDI")
        self.integer = int_()
        self.csv = sep_by1(many(char_satisfy(lambda c: c != ",")), char(","))
        self.csv_input = ("a, bc, def, ghij, jklmnop, qrestuvwxyz, dsiadisandiosndioni, "
                          "daiondidsajhio dhsiofsdhuihrfsdfhdsifhniosdafoisadfni")

    def time_string(self):
        run_parser(self.literal, "dsavg3@#()HRJNDI")

    def time_integer(self):
        run_parser(self.integer, "23554567")

    def time_integer_error(self):
        # Failure path: the error thunk is forced by run_parser
        run_parser(self.integer, "X")

    def time_csv_line(self):
        run_parser(self.csv, self.csv_input)
