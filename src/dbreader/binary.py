"""
Chunked reads of large binary columns.

Two strategies read a whole binary field through the cursor's chunked
``get_bytes(ordinal, data_offset, buffer, buffer_offset, length)`` primitive:

- stream: append fixed-size chunks to an accumulator until a short read
- presized: ask for the total length first, then fill an exact-size buffer

The stream strategy stops on the first read shorter than the chunk size, so
a field whose length is an exact multiple of the chunk size costs one more
primitive call, which returns 0.
"""
import io
import logging

from dbreader.cursor import RowCursor
from dbreader.exceptions import ValidationError
from dbreader.options import BINARY_STRATEGIES

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 8192
PRESIZED_CHUNK_SIZE = 1024


def read_bytes_streaming(reader: RowCursor, ordinal: int,
                         chunk_size: int = STREAM_CHUNK_SIZE) -> bytes:
    """Read a binary field by appending chunks until a short read."""
    if reader.is_null(ordinal):
        return b''
    buffer = bytearray(chunk_size)
    output = io.BytesIO()
    offset = 0
    while True:
        count = reader.get_bytes(ordinal, offset, buffer, 0, chunk_size)
        output.write(buffer[:count])
        offset += count
        if count < chunk_size:
            break
    logger.debug(f'Read {offset} bytes from field {ordinal} in streaming mode')
    return output.getvalue()


def read_bytes_presized(reader: RowCursor, ordinal: int,
                        chunk_size: int = PRESIZED_CHUNK_SIZE) -> bytes:
    """Read a binary field into a buffer sized from the reported length."""
    if reader.is_null(ordinal):
        return b''
    length = reader.get_bytes(ordinal, 0, None, 0, 0)
    buffer = bytearray(length)
    bytes_read = 0
    while bytes_read < length:
        count = reader.get_bytes(ordinal, bytes_read, buffer, bytes_read,
                                 min(chunk_size, length - bytes_read))
        if count <= 0:
            raise ValidationError(
                f'Field {ordinal} ended after {bytes_read} of {length} reported bytes')
        bytes_read += count
    logger.debug(f'Read {bytes_read} bytes from field {ordinal} in presized mode')
    return bytes(buffer)


def get_bytes(reader: RowCursor, column: int | str, strategy: str | None = None,
              chunk_size: int | None = None) -> bytes:
    """Read a whole binary column by ordinal or name.

    ``strategy`` and ``chunk_size`` default from the reader's options, or
    from the module constants when the reader carries none. NULL reads as
    ``b''``.
    """
    options = getattr(reader, 'options', None)
    if strategy is None:
        strategy = options.binary_strategy if options else 'stream'
    if strategy not in BINARY_STRATEGIES:
        raise ValidationError(f'strategy must be one of: {list(BINARY_STRATEGIES)}')
    if chunk_size is not None and chunk_size <= 0:
        raise ValidationError('chunk_size must be positive')

    ordinal = reader.get_ordinal(column) if isinstance(column, str) else column

    if strategy == 'stream':
        if chunk_size is None:
            chunk_size = options.stream_chunk_size if options else STREAM_CHUNK_SIZE
        return read_bytes_streaming(reader, ordinal, chunk_size)
    if chunk_size is None:
        chunk_size = options.presized_chunk_size if options else PRESIZED_CHUNK_SIZE
    return read_bytes_presized(reader, ordinal, chunk_size)
