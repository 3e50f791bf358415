"""
Get regexes for helping clean up punctuation in MARC data.
"""

# Regular Expression for matching trailing periods and whitespace on
# facet values. A period that follows a lone capital letter (e.g. the
# initial in "Smith, John A.") is left alone.
TRAILING_PUNCTUATION_REGEX = r'(?<!\b[A-Z])[.\s]*$'

# Regular Expression for matching characters that are not allowed in
# XML 1.0 documents, i.e. anything outside of tab, newline, carriage
# return, and the legal Unicode ranges.
FULLTEXT_BAD_CHARS_REGEX = (r'[^\u0009\u000A\u000D\u0020-\uD7FF'
                            r'\uE000-\uFFFD\U00010000-\U0010FFFF]+')
