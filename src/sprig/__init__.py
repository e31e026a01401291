"""
sprig - A lightweight in-process BDD test engine for interactive sessions

sprig lets you declare nested `describe`/`context`/`group`/`it` suites with
setup and teardown hooks, runs them synchronously and prints a hierarchical
pass/fail/pending report.
"""

from importlib.metadata import version

from sprig.dsl import (
    context,
    describe,
    fcontext,
    fdescribe,
    fgroup,
    ftest,
    group,
    run_tree,
    test,
    xcontext,
    xdescribe,
    xgroup,
    xtest,
)
from sprig.exceptions import SprigError, StructuralError
from sprig.execution import TestContext
from sprig.matchers import (
    Matcher,
    be,
    be_close_to,
    be_empty,
    be_false,
    be_none,
    be_true,
    contain,
    equal,
    have_count,
    log,
    pass_comparison,
    raise_error,
    succeed,
)
from sprig.reporting import Report, ReportFormat, TestResult
from sprig.structure import ScopeBuilder
from sprig.tester import Tester

__version__ = version("sprig")

__all__ = [
    "__version__",
    "describe",
    "fdescribe",
    "xdescribe",
    "context",
    "fcontext",
    "xcontext",
    "group",
    "fgroup",
    "xgroup",
    "test",
    "ftest",
    "xtest",
    "run_tree",
    "ScopeBuilder",
    "TestContext",
    "Tester",
    "Report",
    "ReportFormat",
    "TestResult",
    "SprigError",
    "StructuralError",
    "Matcher",
    "equal",
    "be",
    "be_true",
    "be_false",
    "be_none",
    "be_close_to",
    "be_empty",
    "pass_comparison",
    "have_count",
    "contain",
    "raise_error",
    "succeed",
    "log",
]
