import logging

from hypothesis import given, strategies as st

from cursorparsec.Char import (
    any_char, char, digit, letter, many1_chars, many_chars, space, spaces, string, upper,
)
from cursorparsec.Combinators import (
    between, chainl, chainl1, chainr1, choice, count, end_by, end_by1, many1_till,
    many_till, option, option_maybe, optional, parser_trace, parser_traced, sep_by,
    sep_by1, sep_end_by, sep_end_by1, skip,
)
from cursorparsec.Error import Message
from cursorparsec.Numeric import int_
from cursorparsec.Prim import (
    eof, join, look_ahead, many, many1, not_followed_by, pure, run_parser, skip_many,
    skip_many1, success, try_parse,
)


def run(parser, input_str):
    return run_parser(parser, input_str)


# --- Sequencing ---

def test_then_exhausts_input():
    reply = char('a').then(char('b')).parse("ab")
    assert reply.value == 'b'
    assert reply.cursor.is_empty()


def test_skip_and_pair_with():
    assert run(char('a').skip(char('b')), "ab")[0] == 'a'
    assert run(char('a') << char('b'), "ab")[0] == 'a'
    assert run(char('a').pair_with(char('b')), "ab")[0] == ('a', 'b')

    # Fails with whichever side failed first
    _, err = run(char('a').pair_with(char('b')), "ax")
    assert err.message() == "Expected 'b', found 'x'"


def test_and_flattens_tuples():
    p = char('a') & char('b') & char('c')
    assert run(p, "abc")[0] == ('a', 'b', 'c')

    q = char('a') & (char('b') & char('c'))
    assert run(q, "abc")[0] == ('a', 'b', 'c')

    assert run(join(char('x'), digit(), char('y')), "x1y")[0] == ('x', '1', 'y')


def test_satisfy_method():
    even = int_().satisfy(lambda n: n % 2 == 0)
    assert run(even, "42")[0] == 42

    reply = even.parse("43x")
    assert not reply.ok
    assert reply.error.message() == "failed satisfy"
    # Rejected after consuming "43": the failure is consumptive
    assert reply.cursor.marker() == 2
    assert run(even | pure(0), "43")[0] is None


def test_between():
    p = char('y').between(char('x'), char('z'))
    reply = p.parse("xyz")
    assert reply.value == 'y'
    assert eof()(reply.cursor).ok

    assert run(char('Y').between(char('x'), char('z')), "xyz")[0] is None

    bangs = many1(char('!')).between(char('x'), char('z'))
    assert run(bangs, "x!!!!!!!z")[0] == list("!!!!!!!")

    p2 = between(char('('), char(')'), string("foo"))
    assert run(p2, "(foo)")[0] == "foo"
    assert run(p2, "(foo")[0] is None


# --- Choice ---

def test_or_picks_second_branch():
    reply = (char('a') | char('b')).parse("ba")
    assert reply.value == 'b'
    assert reply.cursor.rest == "a"


def test_choice_basic():
    p = choice([char('a'), char('b'), char('c')])
    assert run(p, "a")[0] == "a"
    assert run(p, "b")[0] == "b"
    assert run(p, "c")[0] == "c"

    res, err = run(p, "d")
    assert res is None
    # The last alternative reports
    assert err.message() == "Expected 'c', found 'd'"


def test_choice_empty():
    res, err = run(choice([]), "input")
    assert res is None
    assert err.deepest == Message("empty choice")


def test_choice_with_try():
    numbers = choice([
        try_parse(string("two") >> spaces() >> success(2)),
        try_parse(string("three") >> spaces() >> success(3)),
        try_parse(string("ten") >> spaces() >> success(10)),
    ])
    reply = many1(numbers).parse("two threeten two  tenEND")
    assert reply.value == [2, 3, 10, 2, 10]
    assert reply.cursor.rest == "END"


# --- Count ---

@given(st.integers(min_value=0, max_value=20))
def test_count(n):
    input_str = "a" * n + "b"
    p = count(n, char('a'))
    res, err = run(p, input_str)

    assert res == ['a'] * n
    assert err is None


def test_count_ints():
    reply = count(5, int_().skip(optional(space()))).parse("1 2 3 4 5 6 7")
    assert reply.value == [1, 2, 3, 4, 5]
    assert reply.cursor.rest == "6 7"

    # Only two left
    assert not count(3, int_().skip(optional(space())))(reply.cursor).ok


def test_count_fail():
    res, err = run(count(3, char('a')), "aa")
    assert res is None
    assert err is not None


# --- Option ---

def test_option():
    p = option("default", string("foo"))
    assert run(p, "foo")[0] == "foo"
    assert run(p, "bar")[0] == "default"


def test_option_maybe():
    p = option_maybe(int_())
    assert run(p, "123")[0] == 123
    reply = p.parse("X")
    assert reply.ok and reply.value is None


def test_option_maybe_propagates_consumed_failure():
    p = option_maybe(char('a') >> char('b'))
    assert not p.parse("ac").ok


def test_skip():
    assert run(skip(string("abc")), "abc") == (None, None)


# --- Repetition ---

def test_many_digits():
    reply = many(digit()).parse("53242k")
    assert reply.value == list("53242")
    assert reply.cursor.rest == "k"

    reply = many_chars(digit()).parse("53242k")
    assert reply.value == "53242"
    assert reply.cursor.rest == "k"
    assert many_chars(digit()).parse("k").value == ""
    assert not many1_chars(digit()).parse("k").ok


def test_many_into_custom_accumulator():
    class Counter:
        def __init__(self):
            self.n = 0

        def append(self, _):
            self.n += 1

    reply = many(char('a'), into=Counter).parse("aaab")
    assert reply.value.n == 3
    assert many1(char('a'), into=Counter).parse("aab").value.n == 2


def test_many_rejects_zero_width_parser():
    reply = many(optional(char('a'))).parse("b")
    assert not reply.ok
    assert "without consuming input" in reply.error.message()

    # Earlier items consumed input; the failure is still reported at the start
    reply = many(optional(char('a'))).parse("ab")
    assert not reply.ok
    assert reply.cursor.marker() == 0
    assert (many(optional(char('a'))) | pure("alt")).parse("ab").value == "alt"
    assert many1(optional(char('a'))).parse("aab").cursor.marker() == 0
    assert skip_many(optional(char('a'))).parse("ab").cursor.marker() == 0


def test_till_and_sep_end_by_reject_zero_width_at_start():
    reply = many_till(optional(char('a')), char('!')).parse("ab")
    assert not reply.ok
    assert reply.cursor.marker() == 0
    assert "without consuming input" in reply.error.message()

    reply = sep_end_by1(optional(char('a')), optional(char(','))).parse("ab")
    assert not reply.ok
    assert reply.cursor.marker() == 0


def test_many1():
    reply = many1(upper()).parse("HELLOworld")
    assert "".join(reply.value) == "HELLO"
    assert reply.cursor.rest == "world"

    assert run(many1(upper()), "helloWORLD")[0] is None


def test_skip_many():
    reply = skip_many(space()).parse("   x")
    assert reply.value is None
    assert reply.cursor.rest == "x"
    assert not skip_many1(space()).parse("x").ok
    assert skip_many1(space()).parse(" x").cursor.rest == "x"


def test_sep_by():
    spaced_ints = sep_by(int_(), space())
    assert run(spaced_ints, "1 2 3 4 5")[0] == [1, 2, 3, 4, 5]

    reply = spaced_ints.parse("1 2 3 4x")
    assert reply.value == [1, 2, 3, 4]
    assert reply.cursor.rest == "x"

    reply = spaced_ints.parse("!1 2")
    assert reply.value == []
    assert reply.cursor.marker() == 0

    assert not sep_by1(int_(), space()).parse("!1 2").ok


def test_sep_by_dangling_separator_fails():
    # The separator consumed ',' and then no element followed
    assert not sep_by(char('a'), char(',')).parse("a,a,").ok


def test_sep_by1_complex_separator():
    p = sep_by1(any_char(), optional(space()) >> int_())
    assert "".join(run(p, "a 1b2c 3y 123z")[0]) == "abcyz"


def test_end_by():
    p = end_by(char('a'), char(';'))
    assert run(p, "a;a;")[0] == ['a', 'a']
    assert run(p, "")[0] == []
    assert run(end_by1(char('a'), char(';')), "")[0] is None


def test_sep_end_by():
    p = sep_end_by(char('a'), char(';'))

    assert run(p, "a;a")[0] == ['a', 'a']
    assert run(p, "a;a;")[0] == ['a', 'a']
    assert run(p, "")[0] == []


def test_many_till():
    nums_till_excl = many_till(int_() << optional(space()), char('!'))

    reply = nums_till_excl.parse("1 2 3 4 5!...")
    assert reply.value == [1, 2, 3, 4, 5]
    assert reply.cursor.rest == "..."

    reply = nums_till_excl.parse("!nothing")
    assert reply.value == []
    assert reply.cursor.rest == "nothing"

    assert not nums_till_excl.parse("nothing").ok


def test_many1_till():
    nums_till_excl1 = many1_till(int_() << optional(space()), char('!'))
    assert not nums_till_excl1.parse("!nothing").ok

    reply = nums_till_excl1.parse("1 2 3 4 5!...")
    assert reply.value == [1, 2, 3, 4, 5]
    assert reply.cursor.rest == "..."


def test_many_till_comment():
    comment = string("/*") >> many1_till(any_char(), try_parse(string("*/")))
    reply = comment.parse("/*inside comment*/!")
    assert "".join(reply.value) == "inside comment"
    assert reply.cursor.rest == "!"


# --- Lookahead ---

def test_look_ahead_does_not_consume():
    reply = look_ahead(string("abc")).parse("abcd")
    assert reply.value == "abc"
    assert reply.cursor.marker() == 0

    failed = look_ahead(char('a') >> char('x')).parse("abcd")
    assert not failed.ok
    assert failed.cursor.marker() == 0


def test_not_followed_by():
    keyword_let = string("let") << not_followed_by(letter())

    assert run(keyword_let, "let ")[0] == "let"

    reply = keyword_let.parse("lets")
    assert not reply.ok
    assert "not_followed_by" in reply.error.message()


def test_look_ahead_and_not_followed_by_together():
    def spelled(word, num):
        return try_parse(look_ahead(string(word)) >> char(word[0]) >> success(num))

    words = choice([spelled(w, i) for i, w in enumerate(
        ["zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"])])
    number = digit().map(int) | words
    filler = many(not_followed_by(number) >> letter())
    number_between_letters = number.between(filler, filler)

    reply = many1(number_between_letters).parse("x5KZ4threeXtwone0Y")
    assert reply.value == [5, 4, 3, 2, 1, 0]
    assert reply.cursor.is_empty()


# --- Expression Chains (Associativity) ---

def test_chainl1_associativity():
    def sub(x, y): return x - y

    num = digit().map(int)
    op = char('-').map(lambda _: sub)

    res, _ = run(chainl1(num, op), "9-3-2")
    assert res == 4  # (9-3)-2


def test_chainl1_dangling_operator_fails():
    num = digit().map(int)
    op = char('+') >> pure(lambda x, y: x + y)
    assert run(chainl1(num, op), "1+")[0] is None


def test_chainl_default():
    num = digit().map(int)
    op = char('+') >> pure(lambda x, y: x + y)
    assert run(chainl(num, op, 0), "x")[0] == 0
    assert run(chainl(num, op, 0), "1+2")[0] == 3


def test_chainr1_associativity():
    def power(x, y): return x ** y

    num = digit().map(int)
    op = char('^').map(lambda _: power)

    res, _ = run(chainr1(num, op), "2^3^2")
    assert res == 512  # 2^(3^2)


# --- Tracing ---

def test_parser_traced_logs(caplog):
    p = parser_traced("digit", digit())
    with caplog.at_level(logging.DEBUG, logger="cursorparsec"):
        assert run(p, "1")[0] == "1"
        reply = p.parse("x")

    assert not reply.ok
    assert reply.cursor.marker() == 0
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("digit: 'x'") for m in messages)
    assert any("digit backtracked" in m for m in messages)


def test_parser_trace_consumes_nothing():
    reply = (parser_trace("here") >> char('a')).parse("a")
    assert reply.value == 'a'
