"""
Exceptions raised by the indexer app.
"""


class IndexerFatalError(Exception):
    """
    Raised when the indexer can't continue at all: e.g., when a
    required external resource (the tracker database, a temp file) is
    unavailable or the configuration is unusable. Per-record problems
    should never raise this; those are logged and skipped.
    """
    pass
