"""
Row cursor contract and its DB-API 2.0 implementation.

``RowCursor`` is the forward-only, single-pass cursor every helper in this
package reads from. Subclasses provide ``advance``, ``field_count``,
``get_name`` and ``get_value``; every other primitive has a default built on
those four. ``Cursor`` adapts an executed PEP-249 cursor (sqlite3, psycopg).
"""
import datetime
import decimal
import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from dbreader.exceptions import ColumnNotFoundError, CursorStateError
from dbreader.exceptions import ValidationError
from dbreader.options import ReaderOptions
from dbreader.types import Column, as_boolean, as_buffer, as_datetime
from dbreader.types import as_decimal, as_double, as_guid, as_integer
from dbreader.types import as_string, columns_from_cursor_description
from dbreader.utils import casefold_equal, get_dialect_name

logger = logging.getLogger(__name__)


class RowCursor(ABC):
    """Forward-only cursor over a result set.

    Not thread-safe: a cursor must be driven from one logical sequence of
    calls at a time.
    """

    options: ReaderOptions | None = None

    @abstractmethod
    def advance(self) -> bool:
        """Move to the next row. Returns False once the result set is exhausted.
        """

    @property
    @abstractmethod
    def field_count(self) -> int:
        """Number of fields in the current result set."""

    @abstractmethod
    def get_name(self, ordinal: int) -> str:
        """Name of the field at ``ordinal``."""

    @abstractmethod
    def get_value(self, ordinal: int) -> Any:
        """Raw value at ``ordinal`` on the current row, None for SQL NULL."""

    def get_ordinal(self, name: str) -> int:
        """Resolve a field name to its ordinal.

        An exact match wins; otherwise the first case-insensitive match is
        used. Raises ColumnNotFoundError when no field matches.
        """
        names = [self.get_name(i) for i in range(self.field_count)]
        if name in names:
            return names.index(name)
        for i, field in enumerate(names):
            if casefold_equal(field, name):
                return i
        raise ColumnNotFoundError(name, names)

    def get_values(self) -> tuple:
        return tuple(self.get_value(i) for i in range(self.field_count))

    def is_null(self, ordinal: int) -> bool:
        return self.get_value(ordinal) is None

    def next_result(self) -> bool:
        """Move to the next result set, if the source has one."""
        return False

    @property
    def columns(self) -> list[Column]:
        return [Column.from_cursor_description((self.get_name(i),), 'generic')
                for i in range(self.field_count)]

    def get_string(self, ordinal: int) -> str:
        return as_string(self.get_value(ordinal), self.get_name(ordinal))

    def get_boolean(self, ordinal: int) -> bool:
        return as_boolean(self.get_value(ordinal), self.get_name(ordinal))

    def get_byte(self, ordinal: int) -> int:
        return as_integer(self.get_value(ordinal), 'byte', self.get_name(ordinal))

    def get_int16(self, ordinal: int) -> int:
        return as_integer(self.get_value(ordinal), 'int16', self.get_name(ordinal))

    def get_int32(self, ordinal: int) -> int:
        return as_integer(self.get_value(ordinal), 'int32', self.get_name(ordinal))

    def get_int64(self, ordinal: int) -> int:
        return as_integer(self.get_value(ordinal), 'int64', self.get_name(ordinal))

    def get_decimal(self, ordinal: int) -> decimal.Decimal:
        return as_decimal(self.get_value(ordinal), self.get_name(ordinal))

    def get_double(self, ordinal: int) -> float:
        return as_double(self.get_value(ordinal), self.get_name(ordinal))

    def get_float(self, ordinal: int) -> float:
        return as_double(self.get_value(ordinal), self.get_name(ordinal))

    def get_datetime(self, ordinal: int) -> datetime.datetime:
        return as_datetime(self.get_value(ordinal), self.get_name(ordinal))

    def get_guid(self, ordinal: int) -> uuid.UUID:
        return as_guid(self.get_value(ordinal), self.get_name(ordinal))

    def get_bytes(self, ordinal: int, data_offset: int, buffer: bytearray | None,
                  buffer_offset: int, length: int) -> int:
        """Chunked read of a binary field.

        With ``buffer`` None, returns the total length of the field. Otherwise
        copies up to ``length`` bytes starting at ``data_offset`` of the field
        into ``buffer`` at ``buffer_offset`` and returns the number copied;
        0 once ``data_offset`` is past the end of the data.
        """
        data = as_buffer(self.get_value(ordinal), self.get_name(ordinal))
        if buffer is None:
            return len(data)
        if data_offset < 0 or buffer_offset < 0 or length < 0:
            raise ValidationError('Offsets and length must not be negative')
        if buffer_offset + length > len(buffer):
            raise ValidationError(
                f'Buffer of {len(buffer)} bytes cannot hold {length} bytes '
                f'at offset {buffer_offset}')
        count = max(0, min(length, len(data) - data_offset))
        buffer[buffer_offset:buffer_offset + count] = data[data_offset:data_offset + count]
        return count


def IterChunk(cursor: Any, size: int = 5000) -> Iterator[tuple]:
    """Iterate through cursor results in chunks."""
    while True:
        chunked = cursor.fetchmany(size)
        if not chunked:
            break
        yield from chunked


class Cursor(RowCursor):
    """Row cursor over an executed DB-API 2.0 cursor.

    Rows are pulled lazily with ``fetchmany(options.fetch_size)``. The
    wrapped cursor is never closed here.
    """

    def __init__(self, cursor: Any, options: ReaderOptions | None = None) -> None:
        """Initialize cursor wrapper.

        Args:
            cursor: The underlying DB-API cursor, already executed
            options: Reader options, defaults to ReaderOptions()
        """
        self.dbapi_cursor = cursor
        self.options = options or ReaderOptions()
        self.dialect = get_dialect_name(cursor, default='generic')
        self._reset()

    def _reset(self) -> None:
        description = self.dbapi_cursor.description
        self._description = description
        self._names = [desc[0] for desc in description] if description else []
        self._rows = IterChunk(self.dbapi_cursor, self.options.fetch_size) if description else iter(())
        self._current: tuple | None = None
        self._columns: list[Column] | None = None

    @property
    def field_count(self) -> int:
        return len(self._names)

    @property
    def columns(self) -> list[Column]:
        if self._columns is None:
            self._columns = columns_from_cursor_description(self._description, self.dialect)
        return self._columns

    def advance(self) -> bool:
        row = next(self._rows, None)
        if row is None:
            self._current = None
            return False
        self._current = tuple(row.values()) if isinstance(row, dict) else tuple(row)
        return True

    def next_result(self) -> bool:
        """Move to the next result set.

        Returns False for drivers that don't support multiple result sets.
        """
        nextset = getattr(self.dbapi_cursor, 'nextset', None)
        if nextset is None or not nextset():
            return False
        self._reset()
        logger.debug(f'Moved to next result set with {self.field_count} fields')
        return True

    def get_name(self, ordinal: int) -> str:
        self._check_ordinal(ordinal)
        return self._names[ordinal]

    def get_value(self, ordinal: int) -> Any:
        self._check_ordinal(ordinal)
        if self._current is None:
            raise CursorStateError('No current row; call advance() first')
        return self._current[ordinal]

    def get_values(self) -> tuple:
        if self._current is None:
            raise CursorStateError('No current row; call advance() first')
        return self._current

    def _check_ordinal(self, ordinal: int) -> None:
        if not 0 <= ordinal < len(self._names):
            raise IndexError(f'Ordinal {ordinal} out of range for {len(self._names)} fields')


def wrap_cursor(cursor: Any, options: ReaderOptions | None = None) -> RowCursor:
    """Return ``cursor`` as a RowCursor, wrapping DB-API cursors."""
    if isinstance(cursor, RowCursor):
        return cursor
    return Cursor(cursor, options)
