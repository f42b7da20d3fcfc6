# tests/test_laws.py
from hypothesis import given, strategies as st

from cursorparsec.Char import digit
from cursorparsec.Cursor import Cursor
from cursorparsec.Prim import many, pure

# Strategy to generate arbitrary values
vals = st.integers() | st.text()


def run_p(p, input_str=""):
    """Helper to run a parser from a fresh cursor"""
    return p(Cursor(input_str))


# 1. Left Identity: return a >>= f  === f a
@given(vals)
def test_monad_left_identity(v):
    f = lambda x: pure(x)

    res_lhs = run_p(pure(v).bind(f))
    res_rhs = run_p(f(v))

    assert res_lhs.value == res_rhs.value
    assert res_lhs.cursor.marker() == res_rhs.cursor.marker()


# 2. Right Identity: m >>= return === m
@given(vals)
def test_monad_right_identity(v):
    m = pure(v)
    assert run_p(m.bind(pure)).value == run_p(m).value


# 3. Associativity: (m >>= f) >>= g === m >>= (\x -> f x >>= g)
@given(st.integers())
def test_monad_associativity(v):
    m = pure(v)
    f = lambda x: pure(x + 1)
    g = lambda y: pure(y * 2)

    lhs = m.bind(f).bind(g)
    rhs = m.bind(lambda x: f(x).bind(g))

    assert run_p(lhs).value == run_p(rhs).value


# 4. Functor composition: transform(f).transform(g) === transform(g . f)
@given(st.text(alphabet="0123456789ab", max_size=8))
def test_functor_composition(text):
    p = many(digit())
    f = lambda ds: "".join(ds)
    g = lambda s: len(s)

    lhs = run_p(p.transform(f).transform(g), text)
    rhs = run_p(p.transform(lambda x: g(f(x))), text)

    assert lhs.value == rhs.value
    assert lhs.cursor.marker() == rhs.cursor.marker()


# 5. Functor identity: map(id) === id
@given(st.text(alphabet="01x", max_size=8))
def test_functor_identity(text):
    p = many(digit())
    assert run_p(p.map(lambda x: x), text).value == run_p(p, text).value
