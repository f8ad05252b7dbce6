"""
Ordinal resolution and safe typed getters.

All getters come in two call forms sharing one function:

- nullable: ``get_safe_int32(reader, 'qty')`` returns None for SQL NULL
- defaulted: ``get_safe_int32(reader, 'qty', 0)`` returns the default instead

The column name is resolved on every call. An unknown column raises
ColumnNotFoundError; a value of the wrong storage type raises
TypeConversionError from the cursor's typed getter.
"""
import datetime
import decimal
import logging
import uuid
from typing import Any, TypeVar

from dbreader.cursor import RowCursor
from dbreader.types import EMPTY_GUID
from dbreader.utils import casefold_equal

logger = logging.getLogger(__name__)

T = TypeVar('T')


def ordinal_of(reader: RowCursor, name: str) -> int:
    """Return the ordinal of the first field named ``name`` (case-insensitive), or -1.
    """
    for i in range(reader.field_count):
        if casefold_equal(reader.get_name(i), name):
            return i
    return -1


def field_exists(reader: RowCursor, name: str) -> bool:
    return ordinal_of(reader, name) >= 0


def get_safe(reader: RowCursor, name: str, getter: str, default: T | None = None) -> T | None:
    """Read ``name`` with the cursor method ``getter``, returning ``default`` for NULL.
    """
    ordinal = reader.get_ordinal(name)
    if reader.is_null(ordinal):
        return default
    return getattr(reader, getter)(ordinal)


def get_safe_value(reader: RowCursor, name: str, default: Any = None) -> Any:
    return get_safe(reader, name, 'get_value', default)


def get_safe_string(reader: RowCursor, name: str, default: str | None = '') -> str | None:
    """Read a string column. NULL reads as the empty string unless another
    default (including None) is given.
    """
    return get_safe(reader, name, 'get_string', default)


def get_safe_boolean(reader: RowCursor, name: str, default: bool | None = None) -> bool | None:
    return get_safe(reader, name, 'get_boolean', default)


def get_safe_byte(reader: RowCursor, name: str, default: int | None = None) -> int | None:
    return get_safe(reader, name, 'get_byte', default)


def get_safe_int16(reader: RowCursor, name: str, default: int | None = None) -> int | None:
    return get_safe(reader, name, 'get_int16', default)


def get_safe_int32(reader: RowCursor, name: str, default: int | None = None) -> int | None:
    return get_safe(reader, name, 'get_int32', default)


def get_safe_int64(reader: RowCursor, name: str, default: int | None = None) -> int | None:
    return get_safe(reader, name, 'get_int64', default)


def get_safe_decimal(reader: RowCursor, name: str,
                     default: decimal.Decimal | None = None) -> decimal.Decimal | None:
    return get_safe(reader, name, 'get_decimal', default)


def get_safe_double(reader: RowCursor, name: str, default: float | None = None) -> float | None:
    return get_safe(reader, name, 'get_double', default)


def get_safe_float(reader: RowCursor, name: str, default: float | None = None) -> float | None:
    return get_safe(reader, name, 'get_float', default)


def get_safe_datetime(reader: RowCursor, name: str,
                      default: datetime.datetime | None = None) -> datetime.datetime | None:
    return get_safe(reader, name, 'get_datetime', default)


def get_safe_guid(reader: RowCursor, name: str, default: uuid.UUID | None = None) -> uuid.UUID | None:
    return get_safe(reader, name, 'get_guid', default)


def get_safe_guid_or_empty(reader: RowCursor, name: str) -> uuid.UUID:
    """Read a GUID column, NULL reading as the all-zero GUID."""
    return get_safe(reader, name, 'get_guid', EMPTY_GUID)


def get_safe_datetime_offset(reader: RowCursor, name: str,
                             default: datetime.datetime | None = None) -> datetime.datetime | None:
    """Read a datetime column as an aware datetime at UTC offset zero.

    NULL and ``datetime.min`` both count as no value and return ``default``.
    Naive values keep their wall-clock fields; aware values are converted
    to UTC. An aware value whose UTC instant falls before ``datetime.min``
    cannot be represented and also returns ``default``.
    """
    value = get_safe(reader, name, 'get_datetime')
    if value is None or value.replace(tzinfo=None) == datetime.datetime.min:
        return default
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    try:
        return value.astimezone(datetime.timezone.utc)
    except OverflowError:
        logger.debug(f'{name!r} value {value} is out of range at UTC')
        return default
