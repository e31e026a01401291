"""
sprig execution components.

This package provides the tree executor and the expectation machinery used
by leaf test bodies.
"""

from sprig.execution.expectations import (
    Expectation,
    ExpectationBuilder,
    TestContext,
    evaluate_expectations,
)
from sprig.execution.runner import execute_run, execute_scope, execute_tests

__all__ = [
    "execute_run",
    "execute_scope",
    "execute_tests",
    "Expectation",
    "ExpectationBuilder",
    "TestContext",
    "evaluate_expectations",
]
