"""
Extract call number data (LC and Dewey classification, shelf keys)
from MARC records for indexing.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_FLOOR

from utils.callnumbers import LCCallNumber, DeweyCallNumber,\
                              shelf_key_or_none
from utils.helpers import unique
from .fieldspec import parse_field_spec, iter_data_fields, join_subfields,\
                       get_field_list

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


def _iter_call_numbers_by_type(record, field_spec, call_type_sf, call_type):
    """
    Yield call number strings from each data field `field_spec`
    selects whose `call_type_sf` subfield (which may repeat) exactly
    equals `call_type`. Each call number is the token's subfields, or
    all subfields if the token names none, joined with spaces.
    """
    for token in parse_field_spec(field_spec):
        for field in iter_data_fields(record, token.tag):
            if call_type in field.get_subfields(*call_type_sf):
                yield join_subfields(field, token.subfields)


def get_call_number_by_type(record, field_spec, call_type_sf, call_type):
    """
    Return the call numbers of type `call_type` as a list without
    duplicates, in the order found. See `_iter_call_numbers_by_type`.
    """
    return unique(_iter_call_numbers_by_type(record, field_spec,
                                             call_type_sf, call_type))


def get_call_number_by_type_as_list(record, field_spec, call_type_sf,
                                    call_type):
    """
    Like `get_call_number_by_type`, but duplicates are kept.
    """
    return list(_iter_call_numbers_by_type(record, field_spec, call_type_sf,
                                           call_type))


def get_lc_sortable(record, field_spec):
    """
    Return the shelf key of the first valid LC call number `field_spec`
    selects. If none are valid, the shelf key of the first value found
    is used instead; if nothing is found, the result is the shelf key
    of an empty call number (an empty string).
    """
    first_call = ''
    for value in get_field_list(record, field_spec):
        call_number = LCCallNumber(value)
        if call_number.is_valid():
            return shelf_key_or_none(call_number)
        first_call = first_call or value
    return shelf_key_or_none(LCCallNumber(first_call))


def _sortable_by_type(call_class, record, field_spec, call_type_sf,
                      call_type):
    for call in _iter_call_numbers_by_type(record, field_spec, call_type_sf,
                                           call_type):
        return shelf_key_or_none(call_class(call))
    return None


def get_lc_sortable_by_type(record, field_spec, call_type_sf, call_type):
    """
    Return the LC shelf key for the first field `field_spec` selects
    whose type subfield matches `call_type`, or None.
    """
    return _sortable_by_type(LCCallNumber, record, field_spec, call_type_sf,
                             call_type)


def get_dewey_sortable_by_type(record, field_spec, call_type_sf, call_type):
    """
    Return the Dewey shelf key for the first field `field_spec`
    selects whose type subfield matches `call_type`, or None.
    """
    return _sortable_by_type(DeweyCallNumber, record, field_spec,
                             call_type_sf, call_type)


def _valid_dewey_numbers(record, field_spec):
    for value in get_field_list(record, field_spec):
        call_number = DeweyCallNumber(value)
        if call_number.is_valid():
            yield call_number


def floor_dewey_class(classification, precision):
    """
    Round a Dewey `classification` string down to the given
    `precision` (a decimal string: '100', '10', '1', '0.1', etc.) and
    render it with three integer digits and three decimal places:

    >>> floor_dewey_class('519.283', '0.1')
    '519.200'
    >>> floor_dewey_class('519.283', '100')
    '500.000'
    """
    precision = Decimal(precision)
    quotient = Decimal(classification) / precision
    floored = quotient.to_integral_value(rounding=ROUND_FLOOR) * precision
    return '{:07.3f}'.format(floored)


def get_dewey_number(record, field_spec, precision):
    """
    Return a list of the valid Dewey numbers `field_spec` selects,
    each floored to `precision` (see `floor_dewey_class`), or None if
    there are none.
    """
    try:
        value = Decimal(precision)
        if not value.is_finite() or value <= 0:
            raise InvalidOperation
    except InvalidOperation:
        logger.warning('Invalid Dewey precision: {}'.format(precision))
        return None
    numbers = [floor_dewey_class(cn.classification(), precision)
               for cn in _valid_dewey_numbers(record, field_spec)]
    return unique(numbers) or None


def get_dewey_searchable(record, field_spec):
    """
    Return the valid Dewey numbers `field_spec` selects, upper-cased
    and with spaces removed, or None if there are none.
    """
    values = [str(cn).upper().replace(' ', '')
              for cn in _valid_dewey_numbers(record, field_spec)]
    return unique(values) or None


def get_dewey_sortable(record, field_spec):
    """
    Return the shelf key of the first valid Dewey number `field_spec`
    selects, or None.
    """
    for call_number in _valid_dewey_numbers(record, field_spec):
        return shelf_key_or_none(call_number)
    return None


def get_dewey_sortables(record, field_spec):
    """
    Return shelf keys for every value `field_spec` selects, valid
    Dewey numbers or not, for use in browse lists. None if there are no
    values.
    """
    keys = [shelf_key_or_none(DeweyCallNumber(value))
            for value in get_field_list(record, field_spec)]
    return [k for k in keys if k is not None] or None
