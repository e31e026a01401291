"""
Shared test fixtures and utilities for the sprig test suite.
"""

from unittest.mock import Mock

import pytest

from sprig.dsl import run_tree


@pytest.fixture
def run_quietly():
    """Run a root body without printing and return its Report.

    Usage:
        def test_something(run_quietly):
            report = run_quietly("calc", lambda spec: spec.it("adds", lambda ctx: True))
            assert report.result.succeeded == 1
    """

    def run(title, body, **options):
        options.setdefault("auto_print", False)
        return run_tree(title, body, **options)

    return run


@pytest.fixture
def calls():
    """Ordered record of callback invocations.

    `calls.record(name)` returns a zero-argument callback that appends `name`
    to `calls.order` when invoked.
    """
    recorder = Mock()
    recorder.order = []

    def record(name, returns=None):
        def callback(*_args):
            recorder.order.append(name)
            return returns

        return callback

    recorder.record = record
    return recorder
