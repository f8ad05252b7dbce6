"""
Test values fixtures for reader tests.

Provides one row of values covering every typed getter, ensuring consistent
test values across different test modules.
"""
import datetime
import decimal
import math
import uuid

import pytest

PERSON_COLUMNS = [
    'Id', 'Name', 'Nickname', 'Age', 'Level', 'Rank', 'Population',
    'Score', 'Ratio', 'Balance', 'Active', 'Born', 'Token',
]


@pytest.fixture(scope='module')
def value_dict():
    """Return a dictionary of test values for all major types"""
    return {
        'Id': 1,
        'Name': 'Alice',
        'Nickname': None,
        'Age': 42,
        'Level': 255,
        'Rank': -32768,
        'Population': 9223372036854775807,
        'Score': math.pi,
        'Ratio': 0.5,
        'Balance': decimal.Decimal('9876.54'),
        'Active': True,
        'Born': datetime.datetime(2023, 5, 15, 14, 30, 45),
        'Token': uuid.UUID('12345678-1234-5678-1234-567812345678'),
    }


@pytest.fixture
def person_cursor(make_cursor, value_dict):
    """ListCursor positioned on one fully populated row and one all-NULL row."""
    reader = make_cursor(PERSON_COLUMNS, [
        tuple(value_dict[name] for name in PERSON_COLUMNS),
        (2,) + (None,) * (len(PERSON_COLUMNS) - 1),
    ])
    return reader
