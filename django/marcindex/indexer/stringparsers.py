"""
Contains string parsing and cleanup functions used by the indexer.
"""
import logging
import re
from datetime import date

from django.conf import settings

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


# DATES
# Patterns used by `clean_date`, tried in order. Each is a pair:
# (regex, function that turns the match into a year string or None).

DATE_PATTERNS = (
    (r'\[([12]\d{3})\]', lambda m: m.group(1)),
    (r'[12]\d{3} \[?i\.\s?e\.\s?([12]\d{3})', lambda m: m.group(1)),
    (r'\[([12]\d{3})', lambda m: m.group(1)),
    (r'\d+ ?[Bb]\.? ?[Cc]\.?', lambda m: None),
    (r'(20|19|18|17|16|15)\d\d', lambda m: m.group(0)),
    (r'l\d{3}', lambda m: m.group(0).replace('l', '1')),
    (r'\[19\](\d\d)', lambda m: '19{}'.format(m.group(1))),
    (r'[12]\d{2}[\-?]', lambda m: re.sub(r'[\-?]', '0', m.group(0))),
)

EARLIEST_YEAR = 500


def clean_date(data, this_year=None):
    """
    Reduce a MARC date string (e.g. from 260$c) to a bare four-digit
    year string, e.g.:

    '[1985]' => '1985'
    'c1985.' => '1985'
    '1971 [i.e. 1972]' => '1972'
    '[19]85' => '1985'
    '198-?' => '1980'

    Returns None if no plausible year can be found. Years before 500 or
    more than one year in the future aren't plausible, nor are BC
    dates.
    """
    if not data:
        return None
    this_year = this_year or date.today().year
    year = None
    for pattern, convert in DATE_PATTERNS:
        match = re.search(pattern, data)
        if match:
            year = convert(match)
            break
    if year is None:
        return None
    if not (EARLIEST_YEAR <= int(year) <= this_year + 1):
        logger.debug('Discarding implausible date "{}" ({})'.format(data,
                                                                   year))
        return None
    return year


# DATA UTILITIES

def strip_trailing_punctuation(data,
                               punct_re=settings.MARCDATA.TRAILING_PUNCTUATION_REGEX):
    """
    Strip trailing periods and whitespace from `data`, except for a
    period that ends an initial, e.g. 'Smith, John A.' is unchanged
    but 'History.' becomes 'History'.
    """
    return re.sub(punct_re, '', data)


def sanitize_fulltext(data,
                      bad_chars_re=settings.MARCDATA.FULLTEXT_BAD_CHARS_REGEX):
    """
    Replace each run of characters that aren't allowed in an XML 1.0
    document with a single space, so that extracted full text can be
    posted to Solr.
    """
    return re.sub(bad_chars_re, ' ', data)
