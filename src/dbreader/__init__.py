"""
Row reader helpers for DB-API cursors: safe typed getters, ordinal lookup,
chunked binary reads, object filling and table materialization.

Wrap an executed cursor and read from it:

    cursor = connection.execute('select id, name, photo from person')
    reader = dbreader.wrap_cursor(cursor)
    for row in dbreader.as_enumerable(reader):
        name = dbreader.get_safe_string(row, 'name')
        photo = dbreader.get_bytes(row, 'photo')

The library never opens, executes or closes connections or cursors.
"""
__version__ = '0.1.0'

from dbreader.accessors import field_exists, get_safe, get_safe_boolean
from dbreader.accessors import get_safe_byte, get_safe_datetime
from dbreader.accessors import get_safe_datetime_offset, get_safe_decimal
from dbreader.accessors import get_safe_double, get_safe_float, get_safe_guid
from dbreader.accessors import get_safe_guid_or_empty, get_safe_int16
from dbreader.accessors import get_safe_int32, get_safe_int64, get_safe_string
from dbreader.accessors import get_safe_value, ordinal_of
from dbreader.binary import get_bytes, read_bytes_presized
from dbreader.binary import read_bytes_streaming
from dbreader.cursor import Cursor, RowCursor, wrap_cursor
from dbreader.exceptions import ColumnNotFoundError, CursorStateError
from dbreader.exceptions import DatabaseError, TypeConversionError
from dbreader.exceptions import ValidationError
from dbreader.fill import fill, writable_members
from dbreader.options import ReaderOptions, iterdict_data_loader
from dbreader.options import pandas_numpy_data_loader
from dbreader.options import pandas_pyarrow_data_loader
from dbreader.records import RowSnapshot, as_enumerable, read_all
from dbreader.records import read_all_records
from dbreader.table import read_dataset, read_table
from dbreader.types import EMPTY_GUID, Column, get_adapter_registry

adapter_registry = get_adapter_registry()

__all__ = [
    'Cursor',
    'RowCursor',
    'wrap_cursor',
    'ReaderOptions',
    'ordinal_of',
    'field_exists',
    'get_safe',
    'get_safe_value',
    'get_safe_string',
    'get_safe_boolean',
    'get_safe_byte',
    'get_safe_decimal',
    'get_safe_double',
    'get_safe_float',
    'get_safe_int16',
    'get_safe_int32',
    'get_safe_int64',
    'get_safe_datetime',
    'get_safe_datetime_offset',
    'get_safe_guid',
    'get_safe_guid_or_empty',
    'get_bytes',
    'read_bytes_streaming',
    'read_bytes_presized',
    'as_enumerable',
    'read_all_records',
    'read_all',
    'read_table',
    'read_dataset',
    'fill',
    'writable_members',
    'RowSnapshot',
    'Column',
    'EMPTY_GUID',
    'adapter_registry',
    'iterdict_data_loader',
    'pandas_numpy_data_loader',
    'pandas_pyarrow_data_loader',
    'DatabaseError',
    'ColumnNotFoundError',
    'CursorStateError',
    'TypeConversionError',
    'ValidationError',
]
