"""
Row enumeration: live cursor views, immutable snapshots and callback loops.

``as_enumerable`` yields the cursor itself for each row; the element is only
valid until the next one is requested. ``read_all_records`` yields
``RowSnapshot`` copies that stay valid. Both are single-pass and exhaust the
cursor.
"""
import logging
from collections.abc import Callable, Iterator
from typing import Any

from dbreader.cursor import RowCursor
from dbreader.exceptions import ColumnNotFoundError
from dbreader.utils import casefold_equal

from libb import attrdict

logger = logging.getLogger(__name__)


class RowSnapshot:
    """Immutable copy of every field value at one cursor position.

    Values are indexed by ordinal or by field name (case-insensitive).
    """

    __slots__ = ('_names', '_values')

    def __init__(self, names: tuple[str, ...], values: tuple) -> None:
        if len(names) != len(values):
            raise ValueError('names must be same length as values')
        object.__setattr__(self, '_names', tuple(names))
        object.__setattr__(self, '_values', tuple(values))

    @classmethod
    def from_cursor(cls, reader: RowCursor) -> 'RowSnapshot':
        names = tuple(reader.get_name(i) for i in range(reader.field_count))
        return cls(names, reader.get_values())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError('RowSnapshot is immutable')

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            return self._values[self.index(key)]
        return self._values[key]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, RowSnapshot):
            return self._names == other._names and self._values == other._values
        if isinstance(other, tuple):
            return self._values == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._names, self._values))

    def __repr__(self) -> str:
        fields = ', '.join(f'{n}={v!r}' for n, v in zip(self._names, self._values))
        return f'RowSnapshot({fields})'

    def index(self, name: str) -> int:
        for i, field in enumerate(self._names):
            if casefold_equal(field, name):
                return i
        raise ColumnNotFoundError(name, list(self._names))

    def get(self, name: str, default: Any = None) -> Any:
        try:
            return self[name]
        except ColumnNotFoundError:
            return default

    def keys(self) -> tuple[str, ...]:
        return self._names

    def values(self) -> tuple:
        return self._values

    def to_dict(self) -> dict[str, Any]:
        return dict(zip(self._names, self._values))

    def to_attrdict(self) -> attrdict:
        return attrdict(self.to_dict())


def as_enumerable(reader: RowCursor) -> Iterator[RowCursor]:
    """Lazily yield the cursor once per row.

    Every element is the same cursor object; advancing to the next element
    replaces the values the previous one exposed. Extract what you need
    before requesting the next row, or use read_all_records.
    """
    while reader.advance():
        yield reader


def read_all_records(reader: RowCursor) -> Iterator[RowSnapshot]:
    """Lazily yield an immutable snapshot of each row."""
    while reader.advance():
        yield RowSnapshot.from_cursor(reader)


def read_all(reader: RowCursor, action: Callable[[RowCursor], Any]) -> int:
    """Advance through every row calling ``action(reader)``.

    Returns the number of rows processed. An exception from the cursor or
    the action stops the loop and propagates.
    """
    count = 0
    while reader.advance():
        action(reader)
        count += 1
    logger.debug(f'Processed {count} rows')
    return count
