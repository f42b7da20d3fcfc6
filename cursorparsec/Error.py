from dataclasses import dataclass
from typing import Any, Tuple, Union


class _EndOfInput:
    """Sentinel standing in for the symbol found (or expected) at end of input."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "end of input"

    def __reduce__(self):
        return (_EndOfInput, ())


END_OF_INPUT = _EndOfInput()


def _show_atom(atom: Any) -> str:
    if atom is END_OF_INPUT:
        return "end of input"
    if isinstance(atom, str):
        return f"'{atom}'"
    return repr(atom)


def _show_literal(literal: Any) -> str:
    if literal is END_OF_INPUT:
        return "end of input"
    return f'"{literal}"'


@dataclass(frozen=True)
class AtomMismatch:
    """Expected one symbol, found another (or end of input)."""
    expected: Any
    found: Any

    def __str__(self) -> str:
        return f"Expected {_show_atom(self.expected)}, found {_show_atom(self.found)}"


@dataclass(frozen=True)
class LiteralMismatch:
    """Expected a literal run of symbols, found a divergent one."""
    expected: Any
    found: Any

    def __str__(self) -> str:
        return f"Expected {_show_literal(self.expected)}, found {_show_literal(self.found)}"


@dataclass(frozen=True)
class Message:
    """A free-form diagnostic."""
    text: str

    def __str__(self) -> str:
        return self.text


ErrorContent = Union[AtomMismatch, LiteralMismatch, Message]


class ParseError:
    """
    A non-empty chain of error contents.

    The first entry is the deepest cause, found where parsing actually broke
    down. Later entries are context added by enclosing parsers, so the chain
    reads deepest -> outermost. A ParseError is never modified once built;
    `with_context` returns a new one.
    """
    __slots__ = ("contents",)

    def __init__(self, *contents: ErrorContent):
        if not contents:
            raise ValueError("ParseError needs at least one error content")
        self.contents: Tuple[ErrorContent, ...] = tuple(
            Message(c) if isinstance(c, str) else c for c in contents
        )

    # Construction helpers

    @classmethod
    def expected_atom(cls, expected: Any, found: Any) -> 'ParseError':
        return cls(AtomMismatch(expected, found))

    @classmethod
    def expected_literal(cls, expected: Any, found: Any) -> 'ParseError':
        return cls(LiteralMismatch(expected, found))

    @classmethod
    def from_message(cls, text: str) -> 'ParseError':
        return cls(Message(text))

    def with_context(self, content: Union[ErrorContent, str]) -> 'ParseError':
        """A new error with `content` added as the outermost frame."""
        return ParseError(*self.contents, content)

    # Inspection

    @property
    def deepest(self) -> ErrorContent:
        return self.contents[0]

    @property
    def outermost(self) -> ErrorContent:
        return self.contents[-1]

    def message(self) -> str:
        """The deepest error, rendered."""
        return str(self.deepest)

    def message_top(self) -> str:
        """The outermost error, rendered."""
        return str(self.outermost)

    def message_stack(self) -> str:
        """Every frame, deepest first, one per line."""
        return "\n".join(str(c) for c in self.contents)

    def __len__(self) -> int:
        return len(self.contents)

    def __iter__(self):
        return iter(self.contents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.contents == other.contents

    def __hash__(self) -> int:
        return hash(self.contents)

    def __str__(self) -> str:
        return self.message_stack()

    def __repr__(self) -> str:
        return f"ParseError{self.contents!r}"


class ParseFailure(Exception):
    """Raised by `unwrap()` when a caller wants a failed parse as an exception."""

    def __init__(self, error: ParseError, position: Any = None) -> None:
        self.error = error
        self.position = position
        super().__init__(str(error))

    def __str__(self) -> str:
        if self.position is None:
            return f"Parse error: {self.error.message_stack()}"
        return f"Parse error at {self.position}: {self.error.message_stack()}"
