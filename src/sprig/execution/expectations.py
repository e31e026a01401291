"""
Expectations registered by leaf test bodies.

A leaf body receives a `TestContext` and calls `ctx.expect(actual)` followed by
`.to(matcher)`, `.to_not(matcher)` or `.not_to(matcher)`. Expectations are
collected while the body runs and evaluated once it returns, so an actual
value given as a callable is only invoked at evaluation time.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any

from sprig.core.nodes import LeafTest
from sprig.exceptions import DeclarationContext, ExpectOutsideTestError, SprigError
from sprig.matchers import Matcher

logger = logging.getLogger(__name__)


@dataclass
class Expectation:
    """One actual-vs-matcher check with the source line it was written on."""

    actual: Any
    matcher: Matcher
    line: int | None = None
    negated: bool = False

    def passed(self) -> bool:
        """
        Evaluate the matcher against the actual value.

        A matcher that raises counts as a failed expectation. sprig's own
        structural errors are not caught.

        Returns:
            Matcher outcome, inverted for negated expectations
        """
        try:
            outcome = self.matcher.evaluate(self.actual)
        except SprigError:
            raise
        except Exception as e:
            logger.warning(
                "Matcher %r raised on line %s: %s", self.matcher.description, self.line, e
            )
            return False
        return outcome != self.negated


def evaluate_expectations(expectations: list[Expectation]) -> tuple[bool, tuple[int, ...]]:
    """Evaluate every expectation once, in registration order.

    Returns:
        Whether all passed, and the source lines of those that did not
    """
    all_passed = True
    failed_lines = []
    for expectation in expectations:
        if not expectation.passed():
            all_passed = False
            if expectation.line is not None:
                failed_lines.append(expectation.line)
    return all_passed, tuple(failed_lines)


class ExpectationBuilder:
    """Returned by `expect()`; registers the expectation once a matcher is given."""

    def __init__(self, context: "TestContext", actual: Any, line: int | None):
        self._context = context
        self._actual = actual
        self._line = line

    def to(self, matcher: Matcher) -> None:
        self._context.register(Expectation(self._actual, matcher, self._line))

    def to_not(self, matcher: Matcher) -> None:
        """Register an expectation that passes only when the matcher fails."""
        self._context.register(Expectation(self._actual, matcher, self._line, negated=True))

    def not_to(self, matcher: Matcher) -> None:
        self.to_not(matcher)


@dataclass
class TestContext:
    """
    Handle passed to a leaf test body while it executes.

    Replaces a process-wide "current test" pointer: expectations find their
    owning test through the context they were created from. The context is
    only open while its test body runs.
    """

    __test__ = False  # not a pytest test class

    test: LeafTest
    expectations: list[Expectation] = field(default_factory=list)
    active: bool = False

    def expect(self, actual: Any, line: int | None = None) -> ExpectationBuilder:
        """
        Capture the actual value of an expectation.

        Params:
            actual: Value under test, or a zero-argument callable for matchers
                such as `raise_error` and `succeed`
            line: Source line reported on failure. Defaults to the caller's line.

        Returns:
            Builder whose `to`/`to_not`/`not_to` registers the expectation
        """
        if line is None:
            frame = inspect.currentframe()
            caller = frame.f_back if frame is not None else None
            line = caller.f_lineno if caller is not None else None
        return ExpectationBuilder(self, actual, line)

    def register(self, expectation: Expectation) -> None:
        if not self.active:
            raise ExpectOutsideTestError(
                DeclarationContext(declaration="expect", source_line=expectation.line)
            )
        self.expectations.append(expectation)
