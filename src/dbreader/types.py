"""
Consolidated type handling for row readers.

This module provides:
- Value decoders: read a stored value as a requested type, or fail
- Column: Column metadata from cursor descriptions
- resolve_type: Resolve database type codes to Python types
- AdapterRegistry: sqlite adapters/converters for date and time columns
"""
import datetime
import decimal
import logging
import sqlite3
import uuid
from typing import Any, Self

import dateutil.parser
from dbreader.exceptions import TypeConversionError

logger = logging.getLogger(__name__)

EMPTY_GUID = uuid.UUID(int=0)

INTEGER_RANGES: dict[str, tuple[int, int]] = {
    'byte': (0, 2**8 - 1),
    'int16': (-2**15, 2**15 - 1),
    'int32': (-2**31, 2**31 - 1),
    'int64': (-2**63, 2**63 - 1),
}


# Value decoders - stored value -> requested Python type

def _mismatch(value: Any, target: str, column: str | None) -> TypeConversionError:
    where = f'column {column!r}' if column else 'value'
    if value is None:
        return TypeConversionError(f'Cannot read NULL {where} as {target}')
    return TypeConversionError(
        f'Cannot read {where} of type {type(value).__name__} as {target}')


def as_string(value: Any, column: str | None = None) -> str:
    if isinstance(value, str):
        return value
    raise _mismatch(value, 'string', column)


def as_boolean(value: Any, column: str | None = None) -> bool:
    """Read a boolean. Integer 0/1 is accepted since sqlite stores booleans
    as INTEGER.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in {0, 1}:
        return bool(value)
    raise _mismatch(value, 'boolean', column)


def as_integer(value: Any, width: str, column: str | None = None) -> int:
    """Read an integer of the given width ('byte', 'int16', 'int32', 'int64').

    Values outside the width raise instead of wrapping.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise _mismatch(value, width, column)
    low, high = INTEGER_RANGES[width]
    if not low <= value <= high:
        raise TypeConversionError(
            f'Value {value} of column {column!r} is out of range for {width}')
    return value


def as_decimal(value: Any, column: str | None = None) -> decimal.Decimal:
    """Read a decimal.

    sqlite has no decimal storage class: NUMERIC columns come back as int
    or float, which are taken through their shortest repr.
    """
    if isinstance(value, decimal.Decimal):
        return value
    if isinstance(value, bool):
        raise _mismatch(value, 'decimal', column)
    if isinstance(value, int):
        return decimal.Decimal(value)
    if isinstance(value, float):
        return decimal.Decimal(repr(value))
    raise _mismatch(value, 'decimal', column)


def as_double(value: Any, column: str | None = None) -> float:
    if isinstance(value, float):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    raise _mismatch(value, 'double', column)


def as_datetime(value: Any, column: str | None = None) -> datetime.datetime:
    """Read a datetime. ISO 8601 text is accepted for sqlite TEXT storage.
    """
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, bytes):
        value = value.decode()
    if isinstance(value, str):
        try:
            return dateutil.parser.isoparse(value)
        except ValueError as exc:
            raise TypeConversionError(
                f'Cannot parse {value!r} of column {column!r} as datetime') from exc
    raise _mismatch(value, 'datetime', column)


def as_guid(value: Any, column: str | None = None) -> uuid.UUID:
    """Read a GUID from a native UUID, its text form or its 16 raw bytes.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        if isinstance(value, str):
            return uuid.UUID(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return uuid.UUID(bytes=bytes(value))
    except ValueError as exc:
        raise TypeConversionError(
            f'Cannot parse column {column!r} as guid') from exc
    raise _mismatch(value, 'guid', column)


def as_buffer(value: Any, column: str | None = None) -> memoryview:
    """Byte view over a binary value without copying it."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return memoryview(value).cast('B')
    raise _mismatch(value, 'bytes', column)


# Type Resolution - Database type codes -> Python types

from psycopg.postgres import types as pg_types

_oid = lambda x: pg_types.get(x).oid

postgres_types: dict[int, type] = {}

for v in [_oid('"char"'), _oid('bpchar'), _oid('character varying'), _oid('character'),
          _oid('json'), _oid('name'), _oid('text'), _oid('varchar')]:
    postgres_types[v] = str

for v in [_oid('int2'), _oid('int4'), _oid('int8')]:
    postgres_types[v] = int

for v in [_oid('float4'), _oid('float8')]:
    postgres_types[v] = float

postgres_types[_oid('numeric')] = decimal.Decimal
postgres_types[_oid('uuid')] = uuid.UUID
postgres_types[_oid('date')] = datetime.date

for v in [_oid('time'), _oid('timetz')]:
    postgres_types[v] = datetime.time

for v in [_oid('timestamp'), _oid('timestamptz')]:
    postgres_types[v] = datetime.datetime

postgres_types[_oid('bool')] = bool

for v in [_oid('bytea'), _oid('jsonb')]:
    postgres_types[v] = bytes


sqlite_types: dict[str, type] = {
    'INTEGER': int,
    'INT': int,
    'BIGINT': int,
    'SMALLINT': int,
    'REAL': float,
    'FLOAT': float,
    'DOUBLE': float,
    'TEXT': str,
    'VARCHAR': str,
    'BLOB': bytes,
    'NUMERIC': decimal.Decimal,
    'DECIMAL': decimal.Decimal,
    'BOOLEAN': bool,
    'DATE': datetime.date,
    'DATETIME': datetime.datetime,
    'TIMESTAMP': datetime.datetime,
    'TIME': datetime.time,
    'UUID': uuid.UUID,
}


def resolve_type(
    db_type: str,
    type_code: Any,
    column_name: str | None = None,
) -> type:
    """Resolve database type code to Python type.

    Priority:
    1. Direct type code lookup
    2. Column name patterns
    3. Default to str

    Args:
        db_type: Database type ('postgresql', 'sqlite', or anything else)
        type_code: Database-specific type code
        column_name: Optional column name for pattern matching

    Returns
        Python type
    """
    if isinstance(type_code, type):
        return type_code

    if db_type == 'postgresql':
        if type_code in postgres_types:
            return postgres_types[type_code]
    elif db_type == 'sqlite':
        if isinstance(type_code, str):
            base_type = type_code.split('(')[0].strip().upper()
            if base_type in sqlite_types:
                return sqlite_types[base_type]

    if column_name:
        name_lower = column_name.lower()

        if name_lower.endswith('_id') or name_lower == 'id':
            return int

        if name_lower.endswith(('_datetime', '_at', '_timestamp')) or name_lower == 'timestamp':
            return datetime.datetime

        if name_lower.endswith('_date') or name_lower == 'date':
            return datetime.date

        if (name_lower.startswith('is_') or name_lower.endswith('_flag') or
                name_lower in {'active', 'enabled', 'disabled'}):
            return bool

    return str


# Column - Metadata from cursor descriptions

class Column:
    """Result column metadata."""

    def __init__(self,
                 name: str,
                 type_code: Any,
                 python_type: type | None = None,
                 display_size: int | None = None,
                 internal_size: int | None = None,
                 precision: int | None = None,
                 scale: int | None = None,
                 nullable: bool | None = None):
        self.name = name
        self.type_code = type_code
        self.python_type = python_type
        self.display_size = display_size
        self.internal_size = internal_size
        self.precision = precision
        self.scale = scale
        self.nullable = nullable

    @classmethod
    def from_cursor_description(cls, description_item: Any, dialect: str) -> Self:
        """Create a Column from one cursor description item.

        Works for psycopg ``Column`` objects (attribute access) and plain
        7-item DB-API tuples alike.
        """
        if hasattr(description_item, 'name'):
            column_info = {
                'name': description_item.name,
                'type_code': getattr(description_item, 'type_code', None),
                'display_size': getattr(description_item, 'display_size', None),
                'internal_size': getattr(description_item, 'internal_size', None),
                'precision': getattr(description_item, 'precision', None),
                'scale': getattr(description_item, 'scale', None),
                'nullable': getattr(description_item, 'null_ok', None),
            }
        else:
            item = tuple(description_item) + (None,) * 7
            column_info = {
                'name': item[0],
                'type_code': item[1],
                'display_size': item[2],
                'internal_size': item[3],
                'precision': item[4],
                'scale': item[5],
                'nullable': item[6],
            }

        column_info['python_type'] = resolve_type(
            dialect, column_info['type_code'], column_name=column_info['name'])
        return cls(**column_info)

    def __repr__(self) -> str:
        return (f'Column(name={self.name!r}, type_code={self.type_code!r}, '
                f'python_type={self.python_type.__name__ if self.python_type else None})')

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'type_code': self.type_code,
            'python_type': self.python_type.__name__ if self.python_type else None,
            'display_size': self.display_size,
            'internal_size': self.internal_size,
            'precision': self.precision,
            'scale': self.scale,
            'nullable': self.nullable
        }

    @staticmethod
    def get_names(columns: list[Self]) -> list[str]:
        return [col.name for col in columns]

    @staticmethod
    def get_column_types_dict(columns: list[Self]) -> dict[str, dict]:
        return {col.name: col.to_dict() for col in columns}


def columns_from_cursor_description(description: Any, dialect: str) -> list[Column]:
    """Create Column objects from a cursor description."""
    if description is None:
        return []
    return [Column.from_cursor_description(desc, dialect) for desc in description]


# SQLite Adapters - Database value converters

def convert_date(val: bytes) -> datetime.date:
    """Convert ISO 8601 date string to date object."""
    return dateutil.parser.isoparse(val.decode()).date()


def convert_datetime(val: bytes) -> datetime.datetime:
    """Convert ISO 8601 datetime string to datetime object."""
    return dateutil.parser.isoparse(val.decode())


class AdapterRegistry:
    """Registry for database-specific type adapters."""

    def sqlite(self) -> None:
        """Register ISO 8601 adapters and converters with the sqlite3 module.

        Converters only apply to connections opened with
        ``detect_types=sqlite3.PARSE_DECLTYPES``.
        """
        sqlite3.register_adapter(datetime.datetime, lambda v: v.isoformat())
        sqlite3.register_adapter(datetime.date, lambda v: v.isoformat())
        sqlite3.register_adapter(decimal.Decimal, str)
        sqlite3.register_adapter(uuid.UUID, str)
        sqlite3.register_converter('date', convert_date)
        sqlite3.register_converter('datetime', convert_datetime)
        sqlite3.register_converter('timestamp', convert_datetime)
        logger.debug('Registered sqlite date/datetime adapters')


def get_adapter_registry() -> AdapterRegistry:
    """Get the adapter registry."""
    return AdapterRegistry()
