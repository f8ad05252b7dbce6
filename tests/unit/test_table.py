"""
Tests for read_table and read_dataset.
"""
import pandas as pd
from dbreader.cursor import Cursor
from dbreader.options import ReaderOptions, iterdict_data_loader
from dbreader.table import read_dataset, read_table


def test_read_table_dataframe(make_cursor):
    """Test the default loader builds a DataFrame with every row"""
    reader = make_cursor(['id', 'name'], [(1, 'Alice'), (2, 'Bob')])
    df = read_table(reader)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ['id', 'name']
    assert df['name'].tolist() == ['Alice', 'Bob']
    assert df.attrs['column_types']['id']['python_type'] == 'int'
    assert not reader.advance()


def test_read_table_remaining_rows(make_cursor):
    """Test rows already consumed are not part of the table"""
    reader = make_cursor(['id'], [(1,), (2,), (3,)])
    reader.advance()
    assert read_table(reader, iterdict_data_loader) == [{'id': 2}, {'id': 3}]


def test_read_table_loader_from_options(make_cursor):
    """Test the data loader defaults from the reader options"""
    options = ReaderOptions(data_loader=iterdict_data_loader)
    reader = make_cursor(['id'], [(1,)], options)
    assert read_table(reader) == [{'id': 1}]


def test_read_table_repeated_column_names(make_cursor):
    """Test repeated column names keep every value"""
    df = read_table(make_cursor(['id', 'id'], [(1, 2), (3, 4)]))
    assert list(df.columns) == ['id', 'id']
    assert df.values.tolist() == [[1, 2], [3, 4]]


def test_read_table_empty(make_cursor):
    """Test an empty result set keeps its schema"""
    df = read_table(make_cursor(['id', 'name'], []))
    assert list(df.columns) == ['id', 'name']
    assert df.empty


def test_read_dataset_multiple_result_sets(make_dbapi_cursor):
    """Test one table per result set, in order"""
    dbapi = make_dbapi_cursor(
        (['a'], [(1,), (2,)]),
        (['b', 'c'], [(3, 'x')]),
        (['d'], []),
    )
    tables = read_dataset(Cursor(dbapi))
    assert len(tables) == 3
    assert tables[0]['a'].tolist() == [1, 2]
    assert tables[1].to_dict('records') == [{'b': 3, 'c': 'x'}]
    assert list(tables[2].columns) == ['d']
    assert tables[2].empty


def test_read_dataset_single_result_set(make_cursor):
    """Test sources without multiple result sets give one table"""
    tables = read_dataset(make_cursor(['id'], [(1,)]), iterdict_data_loader)
    assert tables == [[{'id': 1}]]


if __name__ == '__main__':
    __import__('pytest').main([__file__])
