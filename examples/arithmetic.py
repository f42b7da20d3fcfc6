from cursorparsec.Char import char, spaces
from cursorparsec.Combinators import chainl1, chainr1
from cursorparsec.Numeric import int_
from cursorparsec.Prim import eof, lazy, pure, run_parser


# Helper functions for the calculation
def add(x, y): return x + y
def sub(x, y): return x - y
def mul(x, y): return x * y
def div(x, y):
    if y == 0: raise ValueError("Division by zero")
    return x / y  # float division
def power(x, y): return x ** y


def lexeme(p):
    return p << spaces()


def symbol(c):
    return lexeme(char(c))


# Operators, one parser per precedence level
add_op = (symbol('+') >> pure(add)) | (symbol('-') >> pure(sub))
mul_op = (symbol('*') >> pure(mul)) | (symbol('/') >> pure(div))
pow_op = symbol('^') >> pure(power)


# expr   := term (('+' | '-') term)*
# term   := factor (('*' | '/') factor)*
# factor := atom ('^' factor)?
# atom   := int | '(' expr ')'
def expression():
    # lazy: expression is defined in terms of atom, and atom uses expression
    atom = lexeme(int_()) | lazy(expression).between(symbol('('), symbol(')'))
    factor = chainr1(atom, pow_op)
    term = chainl1(factor, mul_op)
    return chainl1(term, add_op)


parser = spaces() >> expression() << eof()

if __name__ == "__main__":
    test_cases = [
        "2 + 3",            # 5
        "2 * 3",            # 6
        "2 + 3 * 4",        # 14 (Precedence check)
        "(2 + 3) * 4",      # 20 (Parens check)
        "2 ^ 3 ^ 2",        # 512 (Right associativity)
        "10 / 2 + 3",       # 8.0
        "10 / (2 - 2)",     # Runtime error
        "2 +",              # Parse error
    ]

    print(f"{'Expression':<20} | {'Result':<10}")
    print("-" * 35)

    for expr_str in test_cases:
        try:
            result, err = run_parser(parser, expr_str)

            if err:
                print(f"{expr_str:<20} | Error: {err.message()}")
            else:
                print(f"{expr_str:<20} | {result}")

        except ValueError as e:
            print(f"{expr_str:<20} | Runtime Error: {e}")
