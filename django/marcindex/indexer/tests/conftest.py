"""
Contains pytest fixtures shared by indexer app tests.
"""

import subprocess
import time

import pymarc
import pytest
from pymarc.field import Subfield


BOOK_LEADER = '00000nam a2200000 a 4500'


@pytest.fixture
def params_to_fields():
    """
    Pytest fixture for creating a list of pymarc Field objects given a
    list of parameter tuples: (tag, contents, indicators).

    `indicators` is optional. If the MARC tag is 001 to 009, then a
    control field is created from `contents`. Otherwise `contents` is
    used as a flat list of subfield codes and values, and `indicators`
    defaults to blank, blank.
    """
    def _make_field(tag, contents, indicators='  '):
        if int(tag) < 10:
            return pymarc.Field(tag=tag, data=contents)
        subfields = [Subfield(code=code, value=value)
                     for code, value in zip(contents[0::2], contents[1::2])]
        return pymarc.Field(tag=tag, indicators=list(indicators),
                            subfields=subfields)

    def _make_fields(fparams):
        return [_make_field(*fp) for fp in fparams]
    return _make_fields


@pytest.fixture
def make_record(params_to_fields):
    """
    Pytest fixture for making a pymarc Record. Pass a list of field
    parameter tuples (see `params_to_fields`) and, optionally, a
    `leader` string; the leader defaults to a book record's.
    """
    def _make_record(fparams, leader=BOOK_LEADER):
        record = pymarc.Record(leader=leader)
        record.add_field(*params_to_fields(fparams))
        return record
    return _make_record


@pytest.fixture
def fake_popen():
    """
    Pytest fixture returning a factory for fake subprocess.Popen
    callables. Each fake records the commands it's asked to run (in
    `calls`) without starting a process.

    `stdout` is returned as the process output. `returncode` is the
    exit status. If `hang` is True, `communicate` always times out
    until the process is killed; with `block` also True, each of those
    calls waits out its timeout first, as a real process would. If
    `write_file` is given, it's called with the command args, so a test
    can emulate a tool that writes an output file. The fake processes
    started are kept in `procs`.
    """
    def _make(stdout=b'', returncode=0, hang=False, block=False,
              write_file=None):
        calls, procs = [], []

        class FakeProcess(object):
            def __init__(self, args, **kwargs):
                self.args = args
                self.returncode = None
                self.killed = False
                calls.append(args)
                procs.append(self)
                if write_file is not None:
                    write_file(args)

            def communicate(self, timeout=None):
                if hang and not self.killed:
                    if block:
                        time.sleep(timeout or 0)
                    raise subprocess.TimeoutExpired(self.args, timeout)
                self.returncode = -9 if self.killed else returncode
                return (stdout, b'')

            def kill(self):
                self.killed = True

        FakeProcess.calls = calls
        FakeProcess.procs = procs
        return FakeProcess
    return _make
