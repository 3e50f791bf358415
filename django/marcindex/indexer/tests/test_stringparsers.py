"""
Tests the indexer.stringparsers functions.
"""

import pytest

from indexer import stringparsers as sp


# TESTS

@pytest.mark.parametrize('data, expected', [
    ('1985', '1985'),
    ('c1985.', '1985'),
    ('[1985]', '1985'),
    ('[1985?]', '1985'),
    ('1971 [i.e. 1972]', '1972'),
    ('p1999, c1998.', '1999'),
    ('[19]85', '1985'),
    ('198-?', '1980'),
    ('l885', '1885'),
    ('350 B.C.', None),
    ('n.d.', None),
    ('', None),
    (None, None),
    ('2999', None),
    ('[1234]', '1234'),
    ('[0450]', None),
])
def test_clean_date(data, expected):
    """
    `clean_date` should reduce a date string to a bare four-digit year
    or return None if there's no plausible year.
    """
    assert sp.clean_date(data, this_year=2020) == expected


def test_clean_date_allows_next_year():
    """
    `clean_date` should accept a year one past the current year, but
    not two.
    """
    assert sp.clean_date('2021', this_year=2020) == '2021'
    assert sp.clean_date('2022', this_year=2020) is None


@pytest.mark.parametrize('data, expected', [
    ('History.', 'History'),
    ('History. ', 'History'),
    ('History...', 'History'),
    ('History', 'History'),
    ('Smith, John A.', 'Smith, John A.'),
    ('U.S.', 'U.S.'),
    ('Smith, John A. ', 'Smith, John A.'),
    ('Maps.  ', 'Maps'),
    ('20th century', '20th century'),
])
def test_strip_trailing_punctuation(data, expected):
    """
    `strip_trailing_punctuation` should remove trailing periods and
    whitespace unless the period follows an initial.
    """
    assert sp.strip_trailing_punctuation(data) == expected


@pytest.mark.parametrize('data, expected', [
    ('plain text', 'plain text'),
    ('tab\tand\nnewline\r', 'tab\tand\nnewline\r'),
    ('bad{}char'.format(chr(0x0b)), 'bad char'),
    ('bad{}{}run'.format(chr(0x00), chr(0x1f)), 'bad run'),
    ('nonchar{}end'.format(chr(0xfffe)), 'nonchar end'),
    ('accented {}'.format(chr(0xe9)), 'accented {}'.format(chr(0xe9))),
    ('astral {}'.format(chr(0x1f600)), 'astral {}'.format(chr(0x1f600))),
])
def test_sanitize_fulltext(data, expected):
    """
    `sanitize_fulltext` should replace each run of characters not
    allowed in XML with a single space.
    """
    assert sp.sanitize_fulltext(data) == expected
