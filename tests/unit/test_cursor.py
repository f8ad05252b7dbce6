"""
Tests for the DB-API Cursor wrapper and the RowCursor defaults.
"""
import pytest
from dbreader.cursor import Cursor, RowCursor, wrap_cursor
from dbreader.exceptions import ColumnNotFoundError, CursorStateError
from dbreader.exceptions import TypeConversionError, ValidationError
from dbreader.options import ReaderOptions


def test_advance_fetches_in_chunks(make_dbapi_cursor):
    """Test rows are pulled lazily with fetchmany(fetch_size)"""
    dbapi = make_dbapi_cursor((['id'], [(i,) for i in range(5)]))
    reader = Cursor(dbapi, ReaderOptions(fetch_size=2))
    assert dbapi.fetch_sizes == []
    values = []
    while reader.advance():
        values.append(reader.get_int32(0))
    assert values == [0, 1, 2, 3, 4]
    assert dbapi.fetch_sizes == [2, 2, 2, 2]
    assert not reader.advance()


def test_field_metadata(make_dbapi_cursor):
    """Test field names, ordinals and column metadata"""
    reader = Cursor(make_dbapi_cursor((['Id', 'user_id', 'Name'], [])))
    assert reader.field_count == 3
    assert reader.get_name(2) == 'Name'
    assert reader.get_ordinal('Name') == 2
    assert reader.get_ordinal('name') == 2
    assert [col.name for col in reader.columns] == ['Id', 'user_id', 'Name']
    assert reader.columns[1].python_type is int
    assert reader.dialect == 'generic'


def test_get_ordinal_prefers_exact_match(make_dbapi_cursor):
    """Test an exact name beats an earlier case-insensitive match"""
    reader = Cursor(make_dbapi_cursor((['name', 'Name'], [])))
    assert reader.get_ordinal('Name') == 1
    assert reader.get_ordinal('NAME') == 0


def test_get_ordinal_unknown(make_dbapi_cursor):
    """Test unknown names raise ColumnNotFoundError"""
    reader = Cursor(make_dbapi_cursor((['id'], [])))
    with pytest.raises(ColumnNotFoundError, match='missing'):
        reader.get_ordinal('missing')


def test_no_current_row(make_dbapi_cursor):
    """Test reading before advance() or after exhaustion fails"""
    reader = Cursor(make_dbapi_cursor((['id'], [(1,)])))
    with pytest.raises(CursorStateError):
        reader.get_value(0)
    assert reader.advance()
    assert reader.get_values() == (1,)
    assert not reader.advance()
    with pytest.raises(CursorStateError):
        reader.get_values()


def test_ordinal_out_of_range(make_dbapi_cursor):
    """Test ordinals outside the field range raise IndexError"""
    reader = Cursor(make_dbapi_cursor((['id'], [(1,)])))
    reader.advance()
    with pytest.raises(IndexError):
        reader.get_value(1)
    with pytest.raises(IndexError):
        reader.get_value(-1)
    with pytest.raises(IndexError):
        reader.get_name(3)


def test_typed_getters_reject_null(make_dbapi_cursor):
    """Test raw typed getters do not read NULL"""
    reader = Cursor(make_dbapi_cursor((['id'], [(None,)])))
    reader.advance()
    assert reader.is_null(0)
    with pytest.raises(TypeConversionError, match='NULL'):
        reader.get_int32(0)


def test_dict_rows(make_dbapi_cursor):
    """Test rows produced by dict row factories are read by position"""
    reader = Cursor(make_dbapi_cursor((['id', 'name'], [{'id': 1, 'name': 'a'}])))
    reader.advance()
    assert reader.get_values() == (1, 'a')


def test_next_result(make_dbapi_cursor):
    """Test moving through multiple result sets"""
    dbapi = make_dbapi_cursor((['a'], [(1,), (2,)]), (['b', 'c'], [(3, 4)]))
    reader = Cursor(dbapi)
    assert reader.advance()
    assert reader.next_result()
    assert reader.field_count == 2
    assert reader.get_name(0) == 'b'
    with pytest.raises(CursorStateError):
        reader.get_value(0)
    assert reader.advance()
    assert reader.get_values() == (3, 4)
    assert not reader.advance()
    assert not reader.next_result()


def test_next_result_unsupported(make_dbapi_cursor):
    """Test drivers without nextset report no further result sets"""
    dbapi = make_dbapi_cursor((['a'], [(1,)]))
    dbapi.nextset = None
    assert not Cursor(dbapi).next_result()


def test_no_result_set(make_dbapi_cursor):
    """Test a cursor without a description has no fields and no rows"""
    reader = Cursor(make_dbapi_cursor())
    assert reader.field_count == 0
    assert not reader.advance()
    assert reader.columns == []


def test_cursor_not_closed(make_dbapi_cursor):
    """Test the wrapper never closes the underlying cursor"""
    dbapi = make_dbapi_cursor((['a'], [(1,)]))
    reader = Cursor(dbapi)
    while reader.advance():
        pass
    assert not dbapi.closed


def test_wrap_cursor(make_dbapi_cursor, make_cursor):
    """Test wrap_cursor wraps DB-API cursors and passes RowCursors through"""
    reader = make_cursor(['a'], [])
    assert wrap_cursor(reader) is reader
    wrapped = wrap_cursor(make_dbapi_cursor((['a'], [])))
    assert isinstance(wrapped, Cursor)
    assert isinstance(wrapped, RowCursor)


class TestGetBytesPrimitive:

    @pytest.fixture
    def reader(self, make_dbapi_cursor):
        reader = Cursor(make_dbapi_cursor((['data'], [(b'0123456789',)])))
        reader.advance()
        return reader

    def test_length_query(self, reader):
        """Test a None buffer returns the total length"""
        assert reader.get_bytes(0, 0, None, 0, 0) == 10

    def test_copies_into_buffer(self, reader):
        """Test bytes land at the buffer offset"""
        buffer = bytearray(8)
        assert reader.get_bytes(0, 2, buffer, 3, 4) == 4
        assert bytes(buffer) == b'\x00\x00\x002345\x00'

    def test_short_and_empty_reads(self, reader):
        """Test reads past the end are short, then zero"""
        buffer = bytearray(8)
        assert reader.get_bytes(0, 6, buffer, 0, 8) == 4
        assert reader.get_bytes(0, 10, buffer, 0, 8) == 0
        assert reader.get_bytes(0, 50, buffer, 0, 8) == 0

    @pytest.mark.parametrize('wrap', [bytearray, memoryview])
    def test_chunked_reads_of_buffer_values(self, make_dbapi_cursor, wrap):
        """Test bytearray and memoryview values are read chunk by chunk"""
        data = bytes(range(256)) * 12
        reader = Cursor(make_dbapi_cursor((['data'], [(wrap(data),)])))
        reader.advance()
        out = bytearray()
        buffer = bytearray(1024)
        count = reader.get_bytes(0, 0, buffer, 0, len(buffer))
        while count:
            out += buffer[:count]
            count = reader.get_bytes(0, len(out), buffer, 0, len(buffer))
        assert bytes(out) == data
        assert reader.get_bytes(0, 0, None, 0, 0) == len(data)

    def test_invalid_arguments(self, reader):
        """Test undersized buffers and negative offsets are rejected"""
        with pytest.raises(ValidationError):
            reader.get_bytes(0, 0, bytearray(2), 0, 4)
        with pytest.raises(ValidationError):
            reader.get_bytes(0, -1, bytearray(4), 0, 4)


if __name__ == '__main__':
    __import__('pytest').main([__file__])
