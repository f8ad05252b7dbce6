from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pandas as pd
import pyarrow as pa
from dbreader.exceptions import ValidationError
from dbreader.types import Column

from libb import ConfigOptions

__all__ = [
    'ReaderOptions',
    'BINARY_STRATEGIES',
    'pandas_numpy_data_loader',
    'pandas_pyarrow_data_loader',
    'iterdict_data_loader',
]

BINARY_STRATEGIES = ('stream', 'presized')


def _row_values(row, names) -> tuple:
    """Values of one row in column order.

    Dict rows are looked up by name; any other row (RowSnapshot, tuple)
    is taken by position, so repeated column names keep every value.
    """
    if isinstance(row, dict):
        return tuple(row[name] for name in names)
    return tuple(row)


def iterdict_data_loader(data, columns, **kwargs) -> list[dict]:
    """Minimal data loader.

    Accepts additional keyword arguments for compatibility with other data
    loaders, but doesn't use them. Rows with repeated column names keep
    the last value, as a dict can hold only one.
    """
    if not data:
        return []
    return [row.to_dict() if hasattr(row, 'to_dict') else row for row in data]


def _empty_dataframe(columns) -> pd.DataFrame:
    """Create empty DataFrame with column metadata."""
    df = pd.DataFrame(columns=Column.get_names(columns))
    df.attrs['column_types'] = Column.get_column_types_dict(columns)
    return df


def pandas_numpy_data_loader(data, columns, **kwargs) -> pd.DataFrame:
    """Standard pandas DataFrame loader using NumPy.

    Always returns a DataFrame, never None, with columns preserved for empty results.
    Includes type information in the DataFrame.attrs attribute.
    """
    if not data:
        return _empty_dataframe(columns)

    names = Column.get_names(columns)
    records = [_row_values(row, names) for row in data]
    df = pd.DataFrame(records, columns=names)
    df.attrs['column_types'] = Column.get_column_types_dict(columns)
    return df


def pandas_pyarrow_data_loader(data, columns, **kwargs) -> pd.DataFrame:
    """PyArrow-based pandas DataFrame loader.

    Always returns a DataFrame, never None, with columns preserved for empty results.
    """
    if not data:
        return _empty_dataframe(columns)

    column_names = Column.get_names(columns)
    records = [_row_values(row, column_names) for row in data]
    columns_data = [[record[i] for record in records] for i in range(len(column_names))]
    df = pa.table(columns_data, names=column_names).to_pandas(types_mapper=pd.ArrowDtype)
    df.attrs['column_types'] = Column.get_column_types_dict(columns)
    return df


@dataclass
class ReaderOptions(ConfigOptions):
    """Options

    supported binary strategies: `stream`, `presized`

    - fetch_size: rows pulled per driver fetchmany call (default: 5000)
    - binary_strategy: default strategy for get_bytes (default: stream)
    - stream_chunk_size: chunk size of the stream strategy (default: 8192)
    - presized_chunk_size: chunk size of the presized strategy (default: 1024)
    - data_loader: callable(rows, columns, **kwargs) used by read_table
    """
    fetch_size: int = 5000
    binary_strategy: str = 'stream'
    stream_chunk_size: int = 8192
    presized_chunk_size: int = 1024
    data_loader: Callable[..., Any] | None = None

    def __post_init__(self):
        if self.binary_strategy not in BINARY_STRATEGIES:
            raise ValidationError(f'binary_strategy must be one of: {list(BINARY_STRATEGIES)}')
        for name in ('fetch_size', 'stream_chunk_size', 'presized_chunk_size'):
            if getattr(self, name) <= 0:
                raise ValidationError(f'{name} must be positive')
        if self.data_loader is None:
            self.data_loader = pandas_numpy_data_loader
