"""
Parse "field specs" and use them to pull values out of MARC records.

A field spec is a colon-separated list of `tag[subfields]` tokens,
such as `100a:700a` or `260bc:264b`. Each token names a MARC tag and,
optionally, the subfield codes wanted from that tag.
"""
import logging
from collections import namedtuple

from utils.helpers import unique

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


SpecToken = namedtuple('SpecToken', ['tag', 'subfields'])


def parse_field_spec(field_spec):
    """
    Split `field_spec` into a list of SpecToken(tag, subfields)
    tuples. `subfields` is a string of subfield codes, which is empty
    if the token names only a tag. Tokens that are too short to name a
    tag are skipped (with a warning).
    """
    tokens = []
    for token in (field_spec or '').split(':'):
        token = token.strip()
        if len(token) < 3:
            if token:
                logger.warning('Skipping invalid field spec token "{}" in '
                               'field spec "{}"'.format(token, field_spec))
            continue
        tokens.append(SpecToken(token[:3], token[3:]))
    return tokens


def is_control_tag(tag):
    return tag.isdigit() and int(tag) < 10


def iter_data_fields(record, tag):
    """
    Yield each data (non-control) field on `record` matching `tag`.
    """
    for field in record.get_fields(tag):
        if not field.is_control_field():
            yield field


def iter_subfield_values(field, codes=None):
    """
    Yield each subfield value on `field` whose code is in `codes`, in
    field order. All subfields are yielded if `codes` is empty.
    """
    for code, value in field:
        if not codes or code in codes:
            yield value


def join_subfields(field, codes=None):
    """
    Return the values of the given subfields (all subfields, if
    `codes` is empty) on `field` joined with single spaces.
    """
    return ' '.join(iter_subfield_values(field, codes)).strip()


def iter_token_values(record, token):
    """
    Yield the raw (unstripped) values a single SpecToken selects from
    `record`.
    """
    if is_control_tag(token.tag):
        for field in record.get_fields(token.tag):
            if field.is_control_field():
                yield field.data
        return

    for field in iter_data_fields(record, token.tag):
        if len(token.subfields) == 1:
            for value in iter_subfield_values(field, token.subfields):
                yield value
        else:
            yield join_subfields(field, token.subfields)


def get_field_list(record, field_spec):
    """
    Return the list of values from `record` that `field_spec` selects.

    - A control field token gives that field's data.
    - A data field token with one subfield code gives one value per
      occurrence of that subfield.
    - A data field token with no subfield codes, or several, gives one
      value per field: the selected subfields joined with spaces.

    Values are stripped, empty values are dropped, and duplicates are
    removed (first occurrence wins).
    """
    values = []
    for token in parse_field_spec(field_spec):
        for value in iter_token_values(record, token):
            value = (value or '').strip()
            if value:
                values.append(value)
    return unique(values)


def get_first_field_value(record, field_spec):
    """
    Return the first value `field_spec` selects from `record`, or None.
    """
    values = get_field_list(record, field_spec)
    return values[0] if values else None
