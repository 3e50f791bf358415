"""
Get data constants and helper functions to use while processing MARC.
"""

from .punctuation import TRAILING_PUNCTUATION_REGEX, FULLTEXT_BAD_CHARS_REGEX
from .codes import LANGUAGE_MATERIAL_TYPE, ILLUSTRATION_CODES,\
                   F008_ILLUSTRATION_POSITIONS, F006_ILLUSTRATION_POSITIONS,\
                   ILLUSTRATION_TERMS, ILLUSTRATED_LABEL,\
                   NOT_ILLUSTRATED_LABEL, F264_PUBLICATION_IND2,\
                   F264_COPYRIGHT_IND2
