"""
Materialize cursor results into in-memory tables.
"""
import logging
from typing import Any

from dbreader.cursor import RowCursor
from dbreader.options import pandas_numpy_data_loader
from dbreader.records import read_all_records

logger = logging.getLogger(__name__)


def _data_loader(reader: RowCursor, data_loader):
    if data_loader is not None:
        return data_loader
    options = getattr(reader, 'options', None)
    if options is not None and options.data_loader is not None:
        return options.data_loader
    return pandas_numpy_data_loader


def read_table(reader: RowCursor, data_loader=None, **kwargs: Any) -> Any:
    """Read the remaining rows of the current result set into a table.

    The table is built by ``data_loader(rows, columns, **kwargs)`` from a
    list of RowSnapshot rows and the cursor's column metadata; by default a
    pandas DataFrame with column types in ``df.attrs['column_types']``.
    """
    loader = _data_loader(reader, data_loader)
    columns = reader.columns
    data = list(read_all_records(reader))
    logger.debug(f'Read {len(data)} rows with {len(columns)} columns')
    return loader(data, columns, **kwargs)


def read_dataset(reader: RowCursor, data_loader=None, **kwargs: Any) -> list[Any]:
    """Read every result set into a list of tables, one per result set.

    Drivers without multiple result sets produce a single table.
    """
    tables = [read_table(reader, data_loader, **kwargs)]
    while reader.next_result():
        tables.append(read_table(reader, data_loader, **kwargs))
    logger.debug(f'Read {len(tables)} result sets')
    return tables
