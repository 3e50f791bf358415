"""
Tests the indexer.callnumber_fields functions.
"""

import pytest

from indexer import callnumber_fields as cnf
from utils.callnumbers import LCCallNumber, DeweyCallNumber


# FIXTURES AND TEST DATA

@pytest.fixture
def local_callnumber_record(make_record):
    return make_record([
        ('001', 'rec0001'),
        ('952', ['o', 'QA76.73 .P98', '2', 'lcc']),
        ('952', ['o', '519.283 B123', '2', 'ddc']),
        ('952', ['o', 'QA76.73 .P98', '2', 'lcc']),
        ('952', ['o', 'PZ7 .S5', '2', 'LCC']),
        ('952', ['o', 'HD30 .A1', '2', 'xyz', '2', 'lcc']),
    ])


# TESTS

def test_get_call_number_by_type(local_callnumber_record):
    """
    `get_call_number_by_type` should return unique call numbers from
    fields whose type subfield exactly matches the call type.
    """
    result = cnf.get_call_number_by_type(local_callnumber_record, '952o',
                                         '2', 'lcc')
    assert result == ['QA76.73 .P98', 'HD30 .A1']


def test_get_call_number_by_type_as_list(local_callnumber_record):
    """
    `get_call_number_by_type_as_list` should keep duplicate call
    numbers.
    """
    result = cnf.get_call_number_by_type_as_list(local_callnumber_record,
                                                 '952o', '2', 'lcc')
    assert result == ['QA76.73 .P98', 'QA76.73 .P98', 'HD30 .A1']


def test_get_call_number_by_type_no_subfields_in_spec(make_record):
    """
    `get_call_number_by_type` should join all subfields of a matching
    field if the field spec token names none.
    """
    record = make_record([('952', ['o', 'QA76', 'p', '.P98', '2', 'lcc'])])
    result = cnf.get_call_number_by_type(record, '952', '2', 'lcc')
    assert result == ['QA76 .P98 lcc']


@pytest.mark.parametrize('fparams, expected', [
    ([('050', ['a', 'QA76.73', 'b', '.P98 2001'])],
     LCCallNumber('QA76.73 .P98 2001').shelf_key()),
    ([('090', ['a', 'Local 123']), ('050', ['a', 'QA76.73', 'b', '.P98'])],
     LCCallNumber('QA76.73 .P98').shelf_key()),
    ([('090', ['a', 'Local 123']), ('050', ['a', 'Another 1'])],
     LCCallNumber('Local 123').shelf_key()),
    ([('245', ['a', 'No call numbers'])], ''),
])
def test_get_lc_sortable(fparams, expected, make_record):
    """
    `get_lc_sortable` should return the shelf key of the first valid LC
    call number, else the shelf key of the first value found, else the
    shelf key of an empty call number.
    """
    record = make_record(fparams)
    assert cnf.get_lc_sortable(record, '099ab:090ab:050ab') == expected


def test_get_lc_sortable_equals_shelf_key_for_single_valid_value(make_record):
    """
    For a record with one valid LC number, `get_lc_sortable` should
    equal that number's shelf key.
    """
    record = make_record([('050', ['a', 'M12.B12', 'b', 'B3 1921'])])
    assert cnf.get_lc_sortable(record, '050ab') == \
        'M!0000000012!B12!B3!0000001921'


@pytest.mark.parametrize('call_type, expected', [
    ('lcc', LCCallNumber('QA76.73 .P98').shelf_key()),
    ('LCC', LCCallNumber('PZ7 .S5').shelf_key()),
    ('nlm', None),
])
def test_get_lc_sortable_by_type(call_type, expected,
                                 local_callnumber_record):
    """
    `get_lc_sortable_by_type` should return the shelf key of the first
    field with a matching call type, or None.
    """
    assert cnf.get_lc_sortable_by_type(local_callnumber_record, '952o', '2',
                                       call_type) == expected


def test_get_dewey_sortable_by_type(local_callnumber_record):
    """
    `get_dewey_sortable_by_type` should return the Dewey shelf key of
    the first field with a matching call type.
    """
    result = cnf.get_dewey_sortable_by_type(local_callnumber_record, '952o',
                                            '2', 'ddc')
    assert result == DeweyCallNumber('519.283 B123').shelf_key()


@pytest.mark.parametrize('classification, precision, expected', [
    ('519.283', '0.1', '519.200'),
    ('519.283', '1', '519.000'),
    ('519.283', '10', '510.000'),
    ('519.283', '100', '500.000'),
    ('5.5', '1', '005.000'),
    ('519', '0.01', '519.000'),
])
def test_floor_dewey_class(classification, precision, expected):
    """
    `floor_dewey_class` should floor the classification to the given
    precision and zero-pad it.
    """
    assert cnf.floor_dewey_class(classification, precision) == expected


@pytest.mark.parametrize('precision, expected', [
    ('0.1', ['519.200', '005.100']),
    ('100', ['500.000', '000.000']),
    ('0', None),
    ('junk', None),
    ('Infinity', None),
    ('NaN', None),
])
def test_get_dewey_number(precision, expected, make_record):
    """
    `get_dewey_number` should floor every valid Dewey number to the
    given precision, skipping invalid ones; None if there are none or
    the precision is unusable.
    """
    record = make_record([
        ('082', ['a', '519.283 B123']),
        ('082', ['a', 'Not Dewey']),
        ('083', ['a', '005.133']),
    ])
    assert cnf.get_dewey_number(record, '082a:083a', precision) == expected


def test_get_dewey_number_no_valid_numbers(make_record):
    """
    `get_dewey_number` should return None when no valid Dewey numbers
    are found, e.g. when a class number has more than three digits.
    """
    record = make_record([('082', ['a', 'Not Dewey']),
                          ('082', ['a', '1234.5 B1'])])
    assert cnf.get_dewey_number(record, '082a', '1') is None
    assert cnf.get_dewey_searchable(record, '082a') is None
    assert cnf.get_dewey_sortable(record, '082a') is None


def test_get_dewey_searchable(make_record):
    """
    `get_dewey_searchable` should return valid Dewey numbers upper-
    cased and with spaces removed.
    """
    record = make_record([
        ('082', ['a', '519.283 b123']),
        ('082', ['a', 'Not Dewey']),
    ])
    assert cnf.get_dewey_searchable(record, '082a') == ['519.283B123']
    assert cnf.get_dewey_searchable(record, '083a') is None


def test_get_dewey_sortable(make_record):
    """
    `get_dewey_sortable` should return the shelf key of the first valid
    Dewey number, or None.
    """
    record = make_record([
        ('082', ['a', 'Not Dewey']),
        ('082', ['a', '519.283 B123']),
        ('083', ['a', '005.133']),
    ])
    assert cnf.get_dewey_sortable(record, '082a:083a') == \
        '0000000519.283!B!0000000123'
    assert cnf.get_dewey_sortable(record, '099a') is None


def test_get_dewey_sortables(make_record):
    """
    `get_dewey_sortables` should return shelf keys for every value,
    valid or not, or None if there are no values.
    """
    record = make_record([
        ('082', ['a', '519.283 B123']),
        ('082', ['a', 'Not Dewey']),
    ])
    assert cnf.get_dewey_sortables(record, '082a') == [
        '0000000519.283!B!0000000123',
        DeweyCallNumber('Not Dewey').shelf_key(),
    ]
    assert cnf.get_dewey_sortables(record, '083a') is None
