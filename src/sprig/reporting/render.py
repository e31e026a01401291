"""
Rendering of test tree lines and end-of-run text.

Every rendered line is `marker + indent * level + text + newline`, where the
marker is a single outcome character (blank for scopes). The end-of-run text
is a pure function of the final `TestResult`, so results combined from
separate subtrees render exactly like a result obtained in one pass.
"""

import inflection
from pydantic import BaseModel, ConfigDict

from sprig.core.nodes import LeafTest, Scope
from sprig.reporting.format import DEFAULT_FORMAT, ReportFormat
from sprig.reporting.result import TestResult


def pluralize(noun: str, count: int) -> str:
    return noun if count == 1 else inflection.pluralize(noun)


def line_output(
    text: str, level: int, first_character: str, fmt: ReportFormat = DEFAULT_FORMAT
) -> str:
    return first_character + fmt.indent * level + text + "\n"


def marked_title(
    text: str,
    acting_focused: bool,
    acting_pending: bool,
    fmt: ReportFormat = DEFAULT_FORMAT,
) -> str:
    """Prefix `text` with the pending or focus token; pending wins over focus."""
    if acting_pending:
        return fmt.pending_prefix + text
    if acting_focused:
        return fmt.focused_prefix + text
    return text


def scope_title(scope: Scope, fmt: ReportFormat = DEFAULT_FORMAT) -> str:
    title = scope.title or fmt.empty_title
    return marked_title(
        fmt.scope_prefix(scope.kind) + title,
        scope.acting_focused,
        scope.acting_pending,
        fmt,
    )


def leaf_title(test: LeafTest, fmt: ReportFormat = DEFAULT_FORMAT) -> str:
    title = test.title or fmt.empty_title
    return marked_title(
        fmt.test_prefix + title, test.acting_focused, test.acting_pending, fmt
    )


def failure_lines_output(failure_lines: tuple[int, ...] | list[int]) -> str:
    """Render the failing assertion lines, or an empty string when there are none."""
    if not failure_lines:
        return ""
    numbers = ", ".join(str(line) for line in failure_lines)
    return f"\nFailed on {pluralize('line', len(failure_lines))}: [{numbers}]\n"


def summary_line(result: TestResult) -> str:
    """
    Render the end-of-run counts.

    The failed count is always derived from the other three so it cannot
    disagree with them.

    Params:
        result: Final accumulated result of the run

    Returns:
        Summary text, starting with a blank line
    """
    return (
        f"\nExecuted {result.total} {pluralize('test', result.total)}"
        f" | {result.succeeded} succeeded"
        f" | {result.total - result.succeeded - result.pending} failed"
        f" | {result.pending} pending\n"
    )


def render_report(result: TestResult) -> str:
    return result.description + failure_lines_output(result.failure_lines) + summary_line(result)


class Report(BaseModel):
    """Final outcome of one run: the accumulated result and its rendered text."""

    model_config = ConfigDict(frozen=True)

    title: str
    result: TestResult
    text: str

    @classmethod
    def from_result(cls, title: str, result: TestResult) -> "Report":
        return cls(title=title, result=result, text=render_report(result))

    @property
    def succeeded(self) -> bool:
        """True when no executed test failed. Pending tests do not count as failures."""
        return self.result.failed == 0

    def __str__(self) -> str:
        return self.text
