"""
Coded values from MARC 21 fixed fields that the indexer looks for.
"""

# Leader/06 (type of record) value for language material.
LANGUAGE_MATERIAL_TYPE = 'a'

# 008/18-21 and 006/01-04 (books) codes that indicate illustrations.
ILLUSTRATION_CODES = 'abcdefghijklmop'

# Character positions holding illustration codes, as (start, end)
# inclusive pairs.
F008_ILLUSTRATION_POSITIONS = (18, 21)
F006_ILLUSTRATION_POSITIONS = (1, 4)

# Substrings in 300$b (other physical details) that indicate
# illustrations.
ILLUSTRATION_TERMS = ('ill.', 'illus.')

ILLUSTRATED_LABEL = 'Illustrated'
NOT_ILLUSTRATED_LABEL = 'Not Illustrated'

# 264 second indicator values for the statements we care about.
F264_PUBLICATION_IND2 = '1'
F264_COPYRIGHT_IND2 = '4'
