"""
Classify call number strings as Library of Congress or Dewey Decimal
call numbers and generate sortable shelf keys for them.
"""
import re
import logging

from utils.helpers import NormalizedCallNumber, CallNumberError

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


class CallNumber(object):
    """
    Base class for call number types. Subclasses set `kind` (the
    NormalizedCallNumber kind used to build shelf keys) and
    `valid_regex`, which must match the start of a valid call number
    and capture its classification portion.
    """
    kind = None
    valid_regex = None

    def __init__(self, call):
        self.raw = call or ''
        self.call = self.raw.strip()
        self._match = None
        if self.valid_regex is not None:
            self._match = re.match(self.valid_regex, self.call)

    def __str__(self):
        return self.raw

    def is_valid(self):
        return self._match is not None

    def classification(self):
        """
        Return the classification portion of a valid call number, or
        None if the call number isn't valid.
        """
        if self.is_valid():
            return self._get_classification(self._match)
        return None

    def _get_classification(self, match):
        return match.group(0)

    def shelf_key(self):
        """
        Return a string that sorts this call number correctly relative
        to other call numbers of the same type. The shelf key of an
        empty call number is an empty string. Raises CallNumberError if
        the call number can't be normalized.
        """
        if not self.call:
            return ''
        return NormalizedCallNumber(self.call, self.kind).normalize()


class LCCallNumber(CallNumber):
    """
    A Library of Congress call number, e.g. `QA76.73 .P98 2001`. Valid
    LC call numbers start with one to three class letters (the first
    one not I, O, W, X, or Y) followed by a class number.
    """
    kind = 'lc'
    valid_regex = r'^([A-HJ-NP-VZ][A-Z]{0,2})\s*(\d+(\.\d+)?)'

    def __init__(self, call):
        super(LCCallNumber, self).__init__(call)
        if self._match is None:
            self._match = re.match(self.valid_regex, self.call.upper())

    def _get_classification(self, match):
        return '{}{}'.format(match.group(1).upper(), match.group(2))


class DeweyCallNumber(CallNumber):
    """
    A Dewey Decimal call number, e.g. `519.283 B123`. Valid Dewey call
    numbers start with a one- to three-digit class number with an
    optional decimal part.
    """
    kind = 'dewey'
    valid_regex = r'^\d{1,3}(\.\d+)?(?!\d)'


def shelf_key_or_none(call_number):
    """
    Return the shelf key for a CallNumber object, or None (logging a
    warning) if it can't be normalized.
    """
    try:
        return call_number.shelf_key()
    except CallNumberError as e:
        logger.warning('{}'.format(e))
        return None
