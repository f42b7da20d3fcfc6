from dataclasses import dataclass, field, replace
from typing import Any, Generic, Optional, Sequence, TypeVar

S = TypeVar('S')  # Symbol type of the underlying input

# '\n' as it appears in str and bytes input
_NEWLINES = ('\n', 10, b'\n')


@dataclass(frozen=True)
class SourcePos:
    """Represents a line/column position in the input stream."""
    line: int = 1
    column: int = 1
    name: str = ""

    def update(self, symbol: Any) -> 'SourcePos':
        """Position after consuming one symbol."""
        if symbol in _NEWLINES:
            return SourcePos(self.line + 1, 1, self.name)
        return SourcePos(self.line, self.column + 1, self.name)

    def update_many(self, symbols: Sequence[Any]) -> 'SourcePos':
        """Position after consuming a run of symbols."""
        if isinstance(symbols, (str, bytes)):
            nl = '\n' if isinstance(symbols, str) else b'\n'
            newlines = symbols.count(nl)
            if newlines == 0:
                return SourcePos(self.line, self.column + len(symbols), self.name)
            tail = len(symbols) - symbols.rfind(nl)
            return SourcePos(self.line + newlines, tail, self.name)
        pos = self
        for symbol in symbols:
            pos = pos.update(symbol)
        return pos

    def __str__(self) -> str:
        prefix = f"{self.name} " if self.name else ""
        return f"{prefix}line {self.line}, column {self.column}"


@dataclass(frozen=True)
class Cursor(Generic[S]):
    """
    An immutable view over the remaining input.

    The underlying sequence is shared between every cursor derived from the
    same input; only the offset changes, so advancing is O(1).
    """
    data: Sequence[S] = field(repr=False)
    offset: int = 0

    def is_empty(self) -> bool:
        return self.offset >= len(self.data)

    def head(self) -> Optional[S]:
        """The next symbol, or None at end of input."""
        if self.offset >= len(self.data):
            return None
        return self.data[self.offset]

    def peek(self, n: int) -> Sequence[S]:
        """Up to n upcoming symbols without moving."""
        return self.data[self.offset:self.offset + n]

    def advance(self, n: int = 1) -> 'Cursor[S]':
        """A cursor n symbols further on. Never moves past the end of input."""
        if n <= 0:
            return self
        return replace(self, offset=min(self.offset + n, len(self.data)))

    def marker(self) -> int:
        """Opaque position marker; equal markers mean nothing was consumed in between."""
        return self.offset

    def slice_from(self, marker: int) -> Sequence[S]:
        """Input consumed between `marker` and this cursor."""
        return self.data[marker:self.offset]

    @property
    def rest(self) -> Sequence[S]:
        return self.data[self.offset:]

    @property
    def pos(self) -> Any:
        return self.offset

    def __repr__(self) -> str:
        preview = self.rest[:20]
        return f"{type(self).__name__}(offset={self.offset}, rest={preview!r})"


@dataclass(frozen=True, repr=False)
class LineCursor(Cursor[S]):
    """A Cursor that also tracks the line and column of its position."""
    source_pos: SourcePos = field(default_factory=SourcePos)

    def advance(self, n: int = 1) -> 'LineCursor[S]':
        if n <= 0:
            return self
        end = min(self.offset + n, len(self.data))
        consumed = self.data[self.offset:end]
        return replace(self, offset=end, source_pos=self.source_pos.update_many(consumed))

    @property
    def pos(self) -> SourcePos:
        return self.source_pos


def make_cursor(input_data: Any, cursor: type = Cursor, source_name: str = "") -> Cursor:
    """Build a fresh cursor for a top-level parse, or pass an existing one through."""
    if isinstance(input_data, Cursor):
        return input_data
    if issubclass(cursor, LineCursor):
        return cursor(input_data, 0, SourcePos(name=source_name))
    return cursor(input_data)
