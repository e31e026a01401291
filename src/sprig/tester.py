"""Flat, non-nested test collection with explicit execution.

`Tester` collects tests through `add_test` and its focused and pending
variants, then runs them all with `execute_tests()`. Output lines are
numbered in declaration order:

    . Test 1: adds numbers
    F Test 2: subtracts numbers -> returns the difference
    > Test 3: divides numbers

    Executed 3 tests | 1 succeeded | 1 failed | 1 pending
"""

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from sprig.core.types import HookBody, Mark
from sprig.exceptions import SprigError
from sprig.reporting.format import DEFAULT_FORMAT, ReportFormat
from sprig.reporting.render import summary_line
from sprig.reporting.result import TestResult

logger = logging.getLogger(__name__)


@dataclass
class FlatTest:
    """A single flat test: optional setup blocks and a boolean check."""

    description: str
    expected_behavior: str
    then: Callable[[], bool]
    given: HookBody | None = None
    when: HookBody | None = None
    mark: Mark = Mark.NONE

    def execute(self) -> bool:
        if self.given is not None:
            self.given()
        if self.when is not None:
            self.when()
        return bool(self.then())


class Tester:
    """
    Collector and runner for flat tests.

    Params:
        report_format: Tokens used to render the report
        output: Stream the report is written to. Defaults to `sys.stdout`.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self, report_format: ReportFormat = DEFAULT_FORMAT, output: TextIO | None = None
    ):
        self._tests: list[FlatTest] = []
        self._format = report_format
        self._output = output

    @property
    def tests(self) -> list[FlatTest]:
        return list(self._tests)

    @property
    def has_focused_test(self) -> bool:
        return any(test.mark is Mark.FOCUSED for test in self._tests)

    def add_test(
        self,
        description: str,
        expected_behavior: str,
        then: Callable[[], bool],
        given: HookBody | None = None,
        when: HookBody | None = None,
    ) -> None:
        """
        Add a test.

        Params:
            description: Text shown for the test
            expected_behavior: Text shown after the description when the test fails
            then: Check that decides success; must return True to pass
            given: Optional setup block run first
            when: Optional action block run after `given`
        """
        self._add(description, expected_behavior, then, given, when, Mark.NONE)

    def fadd_test(
        self,
        description: str,
        expected_behavior: str,
        then: Callable[[], bool],
        given: HookBody | None = None,
        when: HookBody | None = None,
    ) -> None:
        """Add a focused test. Once any test is focused, unfocused tests are pending."""
        self._add(description, expected_behavior, then, given, when, Mark.FOCUSED)

    def xadd_test(
        self,
        description: str,
        expected_behavior: str,
        then: Callable[[], bool],
        given: HookBody | None = None,
        when: HookBody | None = None,
    ) -> None:
        """Add a pending test. Pending tests are reported but never executed."""
        self._add(description, expected_behavior, then, given, when, Mark.PENDING)

    def execute_tests(self, auto_print: bool = True) -> str:
        """
        Execute every collected test in order.

        Params:
            auto_print: Write the report to the output stream when True

        Returns:
            The report text, whether or not it was printed
        """
        result = self.run()
        text = result.description + summary_line(result)
        if auto_print:
            print(text, end="", file=self._output if self._output is not None else sys.stdout)
        return text

    def run(self) -> TestResult:
        focus_mode = self.has_focused_test
        return sum(
            (
                self._execute(test, number, focus_mode)
                for number, test in enumerate(self._tests, start=1)
            ),
            TestResult(),
        )

    def _add(self, description, expected_behavior, then, given, when, mark) -> None:
        self._tests.append(
            FlatTest(
                description=description,
                expected_behavior=expected_behavior,
                then=then,
                given=given,
                when=when,
                mark=mark,
            )
        )

    def _execute(self, test: FlatTest, number: int, focus_mode: bool) -> TestResult:
        fmt = self._format
        description = test.description or fmt.missing_description
        is_pending = test.mark is Mark.PENDING or (focus_mode and test.mark is not Mark.FOCUSED)

        if is_pending:
            return TestResult.pending_test(f"{fmt.pending_marker} Test {number}: {description}\n")

        try:
            success = test.execute()
        except SprigError:
            raise
        except Exception as e:
            logger.warning("Test %d (%r) raised %s: %s", number, description, type(e).__name__, e)
            success = False

        if success:
            line = f"{fmt.success_marker} Test {number}: {description}\n"
        else:
            expected = test.expected_behavior or fmt.missing_expected_behavior
            line = f"{fmt.failure_marker} Test {number}: {description} -> {expected}\n"
        return TestResult.executed_test(line, success)
