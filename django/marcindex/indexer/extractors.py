"""
Functions that extract index values from MARC records: publishers,
publication dates, illustration status, facet values, and the latest
transaction date.

Each function takes a pymarc Record and has no side effects beyond
logging.
"""
import logging
from datetime import datetime

import pytz
from django.conf import settings

from utils.helpers import unique
from . import stringparsers as sp
from .fieldspec import iter_data_fields, get_field_list

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


EPOCH = datetime(1970, 1, 1, tzinfo=pytz.utc)

F005_FORMAT = '%Y%m%d%H%M%S.%f'


# PUBLICATION INFO

def _collect_260_264(record, parse_field):
    """
    Apply `parse_field` (field -> list of values) to 260 fields and to
    264 fields. 260 values come first. 264 values only come from
    publication statements (2nd indicator 1) or, if there are none,
    copyright statements (2nd indicator 4). Duplicates are removed.
    """
    values = []
    for field in iter_data_fields(record, '260'):
        values.extend(parse_field(field))

    by_ind2 = {settings.MARCDATA.F264_PUBLICATION_IND2: [],
               settings.MARCDATA.F264_COPYRIGHT_IND2: []}
    for field in iter_data_fields(record, '264'):
        if field.indicator2 in by_ind2:
            by_ind2[field.indicator2].extend(parse_field(field))
    values.extend(by_ind2[settings.MARCDATA.F264_PUBLICATION_IND2] or
                  by_ind2[settings.MARCDATA.F264_COPYRIGHT_IND2])
    return unique(values)


def get_publishers(record):
    """
    Return publisher names from 260$b and 264$b. Repeated $b within a
    field are trimmed and the non-empty ones joined with spaces into
    one name.
    """
    def _publisher(field):
        parts = (v.strip() for v in field.get_subfields('b'))
        name = ' '.join(p for p in parts if p)
        return [name] if name else []
    return _collect_260_264(record, _publisher)


def get_dates(record):
    """
    Return publication years from 260$c and 264$c, each cleaned by
    `stringparsers.clean_date`. Values that don't reduce to a plausible
    year are dropped.
    """
    def _dates(field):
        cleaned = (sp.clean_date(v) for v in field.get_subfields('c'))
        return [d for d in cleaned if d is not None]
    return _collect_260_264(record, _dates)


def get_first_date(record):
    """
    Return the earliest year from `get_dates`, or None.
    """
    earliest = None
    for date_str in get_dates(record):
        try:
            year = int(date_str)
        except ValueError:
            logger.warning('Skipping non-numeric date "{}"'.format(date_str))
            continue
        if earliest is None or year < int(earliest):
            earliest = date_str
    return earliest


# PHYSICAL DESCRIPTION

def _fixed_field_has_code(data, positions, codes):
    start, end = positions
    chunk = (data or '').lower()[start:end + 1]
    return any(c in codes for c in chunk)


def is_illustrated(record, marcdata=settings.MARCDATA):
    """
    Return 'Illustrated' or 'Not Illustrated'.

    Language material (leader/06 'a') is illustrated if the 008/18-21
    or any 006/01-04 contains an illustration code. Any record is
    illustrated if a 300$b mentions 'ill.' or 'illus.'.
    """
    leader = str(record.leader)
    if leader[6:7] == marcdata.LANGUAGE_MATERIAL_TYPE:
        fields_008 = record.get_fields('008')
        if fields_008 and _fixed_field_has_code(
                fields_008[0].data, marcdata.F008_ILLUSTRATION_POSITIONS,
                marcdata.ILLUSTRATION_CODES):
            return marcdata.ILLUSTRATED_LABEL
        for field in record.get_fields('006'):
            if _fixed_field_has_code(field.data,
                                     marcdata.F006_ILLUSTRATION_POSITIONS,
                                     marcdata.ILLUSTRATION_CODES):
                return marcdata.ILLUSTRATED_LABEL

    for field in iter_data_fields(record, '300'):
        for desc in field.get_subfields('b'):
            desc = desc.lower()
            if any(term in desc for term in marcdata.ILLUSTRATION_TERMS):
                return marcdata.ILLUSTRATED_LABEL
    return marcdata.NOT_ILLUSTRATED_LABEL


# FACETS

def normalize_trailing_punctuation(record, field_spec):
    """
    Return the values `field_spec` selects with trailing periods and
    whitespace removed (periods ending an initial are kept), or None if
    there are no values.
    """
    values = [sp.strip_trailing_punctuation(v)
              for v in get_field_list(record, field_spec)]
    return unique(v for v in values if v) or None


# TRANSACTION DATES

def _localize(naive_dt):
    return pytz.timezone(settings.TIME_ZONE).localize(naive_dt)


def parse_005_date(data):
    """
    Parse a 005 (date and time of latest transaction) value, e.g.
    '20200315142233.0'. Returns a timezone-aware datetime, or None if
    the value can't be parsed.
    """
    try:
        return _localize(datetime.strptime((data or '').strip(), F005_FORMAT))
    except ValueError:
        return None


def expand_two_digit_year(yy, now=None):
    """
    Expand a two-digit year into the 100-year window that starts 80
    years before `now` (default: the current date).
    """
    now = now or datetime.now()
    window_start = now.year - 80
    year = window_start - (window_start % 100) + yy
    if year < window_start:
        year += 100
    return year


def parse_008_date(data, now=None):
    """
    Parse the date entered on file (008/00-05, 'yymmdd'). Returns a
    timezone-aware datetime, or None if the value can't be parsed.
    """
    data = data or ''
    if len(data) < 6 or not data[:6].isdigit():
        return None
    year = expand_two_digit_year(int(data[0:2]), now)
    try:
        return _localize(datetime(year, int(data[2:4]), int(data[4:6])))
    except ValueError:
        return None


def get_latest_transaction(record, now=None):
    """
    Return the date `record` was last changed, as an aware datetime.

    The 005 is used if it parses; otherwise the 008/00-05 date entered
    on file; otherwise the Unix epoch, which sorts before any real
    date.
    """
    for field_spec, parse in (('005', parse_005_date),
                              ('008', lambda d: parse_008_date(d, now))):
        values = get_field_list(record, field_spec)
        if values:
            parsed = parse(values[0])
            if parsed is not None:
                return parsed
            logger.debug('Unparseable {} date: "{}"'.format(field_spec,
                                                            values[0]))
    return EPOCH
