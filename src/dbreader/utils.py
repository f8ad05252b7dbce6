"""Low-level cursor utilities with no internal dependencies.

These utilities work with any DB-API cursor or connection and have no
imports from other dbreader modules, making them safe to import without
circular dependency concerns.
"""
import logging
from typing import Any

logger = logging.getLogger(__name__)


def get_dialect_name(obj: Any, default: str | None = None) -> str | None:
    """Get dialect name for a DB-API cursor or connection.

    Cursors are resolved through their ``connection`` attribute. Returns
    ``default`` when the dialect cannot be determined and a default is given.
    """
    if hasattr(obj, 'dialect'):
        dialect = obj.dialect
        if isinstance(dialect, str):
            return dialect.lower()
        return str(dialect.name).lower()

    type_name = f'{type(obj).__module__}.{type(obj).__name__}'
    if 'psycopg' in type_name:
        return 'postgresql'
    if 'sqlite3' in type_name:
        return 'sqlite'

    connection = getattr(obj, 'connection', None)
    if connection is not None and connection is not obj:
        return get_dialect_name(connection, default)

    if default is not None:
        logger.debug(f'Cannot determine dialect for {type(obj)}, using {default}')
        return default
    raise AttributeError(f'Cannot determine dialect for {type(obj)}')


def casefold_equal(left: str | None, right: str | None) -> bool:
    """Compare two names case-insensitively, independent of locale.
    """
    if left is None or right is None:
        return False
    return left.casefold() == right.casefold()
