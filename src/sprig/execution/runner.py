"""
Single-pass execution of a captured test tree.

The run resolves focus once from the root, propagates focus and pending
markings top-down, then walks the tree in declaration order. Hooks accumulate
from the root down: `before_each` and `subject_action` hooks run root to leaf,
`after_each` hooks run leaf to root.

Leaf tests run in one of two modes:
    - Per-test: every test gets its own run of the hooks.
    - Group batch (GROUP scopes): the hooks run once around all the tests of
      the group. This trades isolation between those tests for speed.
"""

import logging

from sprig.core.nodes import Hook, LeafTest, Scope
from sprig.core.types import HookKind, ScopeKind
from sprig.exceptions import SprigError, TooManySubjectActionsError
from sprig.execution.expectations import TestContext, evaluate_expectations
from sprig.reporting.format import DEFAULT_FORMAT, ReportFormat
from sprig.reporting.render import leaf_title, line_output, scope_title
from sprig.reporting.result import TestResult
from sprig.structure.builder import RunSession

logger = logging.getLogger(__name__)


def execute_run(session: RunSession, fmt: ReportFormat = DEFAULT_FORMAT) -> TestResult:
    """
    Execute every test captured by `session`.

    Steps:
    1. Decide whether focus mode is on from the root's active focus
    2. Propagate focus and pending markings from the root
    3. Walk the tree with declarations frozen

    Params:
        session: Session whose capture phase has finished
        fmt: Report tokens used to render lines

    Returns:
        Accumulated result of the whole tree

    Raises:
        StructuralError: If the tree is malformed; the run is aborted
    """
    root = session.root
    is_anything_focused = root.has_active_focus()
    logger.debug(
        "Executing %r: %d tests, focus mode %s",
        root.title,
        root.count_tests(),
        "on" if is_anything_focused else "off",
    )
    root.propagate(False, False)

    session.executing = True
    try:
        return execute_scope(root, is_anything_focused, fmt=fmt)
    finally:
        session.executing = False


def execute_scope(
    scope: Scope,
    is_anything_focused: bool,
    level: int = 0,
    inherited_hooks: tuple[Hook, ...] = (),
    fmt: ReportFormat = DEFAULT_FORMAT,
) -> TestResult:
    """
    Execute one scope and everything below it.

    Params:
        scope: Scope to execute
        is_anything_focused: Whether focus mode is on for the run
        level: Indentation level of the scope's title line
        inherited_hooks: Hooks of all enclosing scopes, root first
        fmt: Report tokens used to render lines

    Returns:
        Title line, leaf test results and child scope results, in that order
    """
    hooks = inherited_hooks + tuple(scope.hooks)

    result = TestResult.line(
        line_output(scope_title(scope, fmt), level, fmt.blank_marker, fmt)
    )
    result += execute_tests(
        scope.tests,
        is_anything_focused,
        level + 1,
        hooks,
        in_group=scope.kind is ScopeKind.GROUP,
        fmt=fmt,
        scope_path=scope.path,
    )
    for child in scope.children:
        result += execute_scope(child, is_anything_focused, level + 1, hooks, fmt)
    return result


def execute_tests(
    tests: list[LeafTest],
    is_anything_focused: bool,
    level: int,
    hooks: tuple[Hook, ...],
    in_group: bool = False,
    fmt: ReportFormat = DEFAULT_FORMAT,
    scope_path: tuple[str, ...] = (),
) -> TestResult:
    if in_group:
        return _execute_batch(tests, is_anything_focused, level, hooks, fmt, scope_path)
    return sum(
        (
            _execute_batch([test], is_anything_focused, level, hooks, fmt, scope_path)
            for test in tests
        ),
        TestResult(),
    )


def _execute_batch(
    tests: list[LeafTest],
    is_anything_focused: bool,
    level: int,
    hooks: tuple[Hook, ...],
    fmt: ReportFormat,
    scope_path: tuple[str, ...],
) -> TestResult:
    """
    Run `tests` between a single run of the hooks.

    When none of the tests should execute, all of them render pending and no
    hook runs. Otherwise tests that should not execute still render pending
    between the shared hooks. The `after_each` hooks run even when a setup
    hook or a structural error aborts the batch.

    Raises:
        TooManySubjectActionsError: If more than one subject action applies
    """
    if not any(test.should_execute(is_anything_focused) for test in tests):
        return sum((_pending(test, level, fmt) for test in tests), TestResult())

    before_each = [hook for hook in hooks if hook.kind is HookKind.BEFORE_EACH]
    subject_actions = [hook for hook in hooks if hook.kind is HookKind.SUBJECT_ACTION]
    after_each = [hook for hook in hooks if hook.kind is HookKind.AFTER_EACH]

    if len(subject_actions) > 1:
        raise TooManySubjectActionsError(len(subject_actions), scope_path)

    logger.debug(
        "Running %d before_each, %d subject_action for %d tests",
        len(before_each),
        len(subject_actions),
        len(tests),
    )
    result = TestResult()
    try:
        for hook in before_each:
            hook.run()
        for hook in subject_actions:
            hook.run()

        for test in tests:
            if test.should_execute(is_anything_focused):
                result += _execute_test(test, level, fmt)
            else:
                result += _pending(test, level, fmt)
    finally:
        for hook in reversed(after_each):
            hook.run()

    return result


def _pending(test: LeafTest, level: int, fmt: ReportFormat) -> TestResult:
    return TestResult.pending_test(
        line_output(leaf_title(test, fmt), level, fmt.pending_marker, fmt)
    )


def _execute_test(test: LeafTest, level: int, fmt: ReportFormat) -> TestResult:
    context = TestContext(test=test, active=True)
    raised = False
    returned = None
    try:
        returned = test.body(context)
    except SprigError:
        raise
    except Exception as e:
        raised = True
        logger.warning(
            "Test %r (line %s) raised %s: %s", test.title, test.line, type(e).__name__, e
        )
    finally:
        context.active = False

    expectations_passed, failure_lines = evaluate_expectations(context.expectations)
    success = not raised and returned is not False and expectations_passed
    logger.debug("Test %r %s", test.title, "succeeded" if success else "failed")

    marker = fmt.success_marker if success else fmt.failure_marker
    return TestResult.executed_test(
        line_output(leaf_title(test, fmt), level, marker, fmt), success, failure_lines
    )
