"""
Row reader exception classes.
"""


class DatabaseError(Exception):
    """Base class for all dbreader errors.
    """


class ColumnNotFoundError(DatabaseError, LookupError):
    """Column name does not exist on the current result set.
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        message = f'Column not found: {name!r}'
        if self.available:
            message += f' (available: {", ".join(self.available)})'
        super().__init__(message)


class TypeConversionError(DatabaseError, TypeError):
    """Stored value cannot be read as the requested type.
    """


class CursorStateError(DatabaseError):
    """Cursor is not positioned on a row.
    """


class ValidationError(DatabaseError, ValueError):
    """Error in option or argument validation.
    """
