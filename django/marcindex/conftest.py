"""
Contains all shared pytest fixtures and hooks
"""

import pytest
from datetime import datetime, timedelta

import pytz


# General utility fixtures

@pytest.fixture(scope='module')
def mytempdir(tmpdir_factory):
    """
    Module-level fixture for creating a temporary dir for testing
    purposes.
    """
    return tmpdir_factory.mktemp('data')


@pytest.fixture(scope='module')
def make_tmpfile(mytempdir):
    """
    Module-level factory fixture for creating a data file in a temp
    directory. Pass the `data` to write along with the `filename`;
    returns a full absolute path to the written file. Pass `data` as
    bytes to write a binary file.
    """
    def make(data, filename):
        path = mytempdir.join(filename)
        mode = 'wb' if isinstance(data, bytes) else 'w'
        with open(str(path), mode) as fh:
            fh.write(data)
        return path
    return make


@pytest.fixture
def fake_clock():
    """
    Pytest fixture that returns a clock factory. Each call to the clock
    the factory returns gives a UTC datetime `step` seconds later than
    the previous one, starting at `start`.
    """
    def _make_clock(start=datetime(2020, 1, 1, 12, tzinfo=pytz.utc),
                    step=60):
        state = {'now': start - timedelta(seconds=step)}

        def _clock():
            state['now'] += timedelta(seconds=step)
            return state['now']
        return _clock
    return _make_clock


@pytest.fixture
def fake_solr_conn():
    """
    Pytest fixture that returns a stand-in for a pysolr.Solr
    connection, which records the documents added and the commits
    made.
    """
    class FakeSolr(object):
        def __init__(self):
            self.added = []
            self.add_calls = 0
            self.commits = 0

        def add(self, docs, commit=True, **kwargs):
            self.add_calls += 1
            self.added.extend(docs)

        def commit(self, **kwargs):
            self.commits += 1
    return FakeSolr()
