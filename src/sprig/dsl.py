"""Root-level declarations that capture, execute and report a test tree.

Calling one of these functions is what runs a test file: the body is captured
into a fresh tree, the tree is executed once, and a single report is printed
and returned. Nested scopes are declared through the `ScopeBuilder` each body
receives, never through these functions.

Example:

    def calculator(spec):
        spec.it("adds", lambda ctx: 1 + 1 == 2)
        spec.it("subtracts", lambda ctx: 2 - 1 == 0)

    describe("calculator", calculator)

The root scope always renders and executes as a top-level scope, whichever
function declared it. Called while another run is capturing, these functions
add a child scope to the scope being captured instead of starting a new run;
called while a run is executing, they raise `DeclarationWhileExecutingError`.
"""

import sys
from contextvars import ContextVar
from typing import TextIO

from sprig.core.nodes import Scope
from sprig.core.types import Mark, ScopeBody, ScopeKind
from sprig.exceptions import ErrorLevel
from sprig.execution.runner import execute_run
from sprig.reporting.format import DEFAULT_FORMAT, ReportFormat
from sprig.reporting.render import Report
from sprig.structure.builder import RunSession

_active_session: ContextVar[RunSession | None] = ContextVar("sprig.active_session", default=None)


def active_session() -> RunSession | None:
    """Session of the run capturing or executing in the current context, if any."""
    return _active_session.get()


def run_tree(
    title: str,
    body: ScopeBody,
    mark: Mark = Mark.NONE,
    *,
    report_format: ReportFormat = DEFAULT_FORMAT,
    output: TextIO | None = None,
    auto_print: bool = True,
    error_level: ErrorLevel = ErrorLevel.USER,
) -> Report | ScopeBody:
    """
    Capture `body` into a new tree, execute it and report.

    When another run is capturing, `body` becomes a describe scope under the
    scope being captured and is returned; the options are ignored.

    Params:
        title: Title of the root scope
        body: Callable receiving the root `ScopeBuilder`
        mark: Focus or pending marking of the root scope
        report_format: Tokens used to render the report
        output: Stream the report is written to. Defaults to `sys.stdout`.
        auto_print: Write the report to `output` when True
        error_level: Detail level of structural error messages

    Returns:
        The run's Report, or `body` when nested in another run

    Raises:
        StructuralError: If the tree is malformed; nothing is printed
        DeclarationWhileExecutingError: If called while a run is executing
    """
    return _declare(
        "run_tree",
        ScopeKind.DESCRIBE,
        mark,
        title,
        body,
        report_format=report_format,
        output=output,
        auto_print=auto_print,
        error_level=error_level,
    )


def _declare(
    declaration: str, kind: ScopeKind, mark: Mark, title: str, body: ScopeBody, **options
) -> Report | ScopeBody:
    session = _active_session.get()
    if session is not None:
        session.declare_scope(session.current_scope, kind, mark, title, body, declaration)
        return body
    return _run(title, body, mark, **options)


def _run(
    title: str,
    body: ScopeBody,
    mark: Mark,
    report_format: ReportFormat = DEFAULT_FORMAT,
    output: TextIO | None = None,
    auto_print: bool = True,
    error_level: ErrorLevel = ErrorLevel.USER,
) -> Report:
    root = Scope(kind=ScopeKind.TOP_LEVEL, title=title, mark=mark)
    session = RunSession(root, error_level=error_level)

    token = _active_session.set(session)
    try:
        session.capture(root, body)
        result = execute_run(session, report_format)
    finally:
        _active_session.reset(token)

    report = Report.from_result(title, result)
    if auto_print:
        print(report.text, end="", file=output if output is not None else sys.stdout)
    return report


def _root(name: str, kind: ScopeKind, mark: Mark):
    def declare(title: str, body: ScopeBody | None = None, **options) -> Report | ScopeBody:
        if body is None:
            return lambda fn: _declare(name, kind, mark, title, fn, **options)
        return _declare(name, kind, mark, title, body, **options)

    declare.__name__ = declare.__qualname__ = name
    declare.__doc__ = f"Run a tree whose root is marked {mark.value}; see `run_tree`."
    declare.__test__ = False  # keep pytest from collecting `test`, `ftest`, `xtest`
    return declare


describe = _root("describe", ScopeKind.DESCRIBE, Mark.NONE)
fdescribe = _root("fdescribe", ScopeKind.DESCRIBE, Mark.FOCUSED)
xdescribe = _root("xdescribe", ScopeKind.DESCRIBE, Mark.PENDING)

context = _root("context", ScopeKind.CONTEXT, Mark.NONE)
fcontext = _root("fcontext", ScopeKind.CONTEXT, Mark.FOCUSED)
xcontext = _root("xcontext", ScopeKind.CONTEXT, Mark.PENDING)

group = _root("group", ScopeKind.GROUP, Mark.NONE)
fgroup = _root("fgroup", ScopeKind.GROUP, Mark.FOCUSED)
xgroup = _root("xgroup", ScopeKind.GROUP, Mark.PENDING)

test = _root("test", ScopeKind.DESCRIBE, Mark.NONE)
ftest = _root("ftest", ScopeKind.DESCRIBE, Mark.FOCUSED)
xtest = _root("xtest", ScopeKind.DESCRIBE, Mark.PENDING)
