"""
Matcher predicates for `expect(...).to(...)` assertions.

A matcher wraps an evaluation function from an actual value to a boolean.
New matchers are made by writing a factory function that returns `Matcher`:

    def be_even() -> Matcher:
        return Matcher(lambda actual: actual % 2 == 0, "be even")

Matchers compose with `&`, `|` and `~`.
"""

import math
from collections.abc import Callable
from typing import Any

from attrs import frozen

_MISSING = object()


@frozen
class Matcher:
    """Predicate evaluated against the actual value captured by `expect`."""

    evaluator: Callable[[Any], bool]
    description: str = ""

    def evaluate(self, actual: Any) -> bool:
        return bool(self.evaluator(actual))

    def __and__(self, other: "Matcher") -> "Matcher":
        return Matcher(
            lambda actual: self.evaluate(actual) and other.evaluate(actual),
            f"({self.description} and {other.description})",
        )

    def __or__(self, other: "Matcher") -> "Matcher":
        return Matcher(
            lambda actual: self.evaluate(actual) or other.evaluate(actual),
            f"({self.description} or {other.description})",
        )

    def __invert__(self) -> "Matcher":
        return Matcher(lambda actual: not self.evaluate(actual), f"not {self.description}")


def equal(expected: Any) -> Matcher:
    """Validate that the actual value equals `expected`.

    Example:
        ctx.expect("value").to(equal("value"))
    """
    return Matcher(lambda actual: actual == expected, f"equal {expected!r}")


def be_true() -> Matcher:
    return Matcher(lambda actual: actual is True, "be True")


def be_false() -> Matcher:
    return Matcher(lambda actual: actual is False, "be False")


def be_none() -> Matcher:
    return Matcher(lambda actual: actual is None, "be None")


def be(expected: Any) -> Matcher:
    """Validate that the actual value is the same object as `expected`."""
    return Matcher(lambda actual: actual is expected, f"be {expected!r}")


def be_close_to(expected: float, max_delta: float = 0.0001) -> Matcher:
    """Validate that the actual number is within `max_delta` of `expected`.

    Params:
        expected: Target value.
        max_delta: Largest allowed absolute difference. Defaults to 0.0001.
    """
    return Matcher(
        lambda actual: math.fabs(actual - expected) <= max_delta,
        f"be close to {expected!r} (+/- {max_delta})",
    )


def pass_comparison(comparison: Callable[[Any, Any], bool], expected: Any) -> Matcher:
    """Validate `comparison(actual, expected)`.

    Example:
        ctx.expect(5).to(pass_comparison(operator.le, 10))
    """
    return Matcher(
        lambda actual: comparison(actual, expected),
        f"pass {getattr(comparison, '__name__', 'comparison')} with {expected!r}",
    )


def have_count(expected_count: int) -> Matcher:
    return Matcher(lambda actual: len(actual) == expected_count, f"have count {expected_count}")


def contain(expected: Any = _MISSING, *, where: Callable[[Any], bool] | None = None) -> Matcher:
    """Validate that a collection contains `expected` or an element matching `where`.

    Params:
        expected: Element that must be present (compared with `in`).
        where: Predicate that at least one element must satisfy.

    Raises:
        ValueError: If neither or both of `expected` and `where` are given.
    """
    if (expected is _MISSING) == (where is None):
        raise ValueError("contain() takes exactly one of an expected value or `where=`")
    if where is not None:
        return Matcher(lambda actual: any(where(item) for item in actual), "contain matching element")
    return Matcher(lambda actual: expected in actual, f"contain {expected!r}")


def be_empty() -> Matcher:
    return Matcher(lambda actual: len(actual) == 0, "be empty")


def raise_error(
    error_type: type[BaseException] | None = None,
    *,
    error: BaseException | None = None,
    verifier: Callable[[BaseException], bool] | None = None,
) -> Matcher:
    """Validate that calling the actual value raises.

    The actual value must be a zero-argument callable. Without arguments, any
    `Exception` passes. `error_type` narrows the accepted class, `error`
    requires an equal exception of the same type, and `verifier` receives the
    raised exception for custom checks.

    Example:
        ctx.expect(lambda: int("x")).to(raise_error(ValueError))
    """

    def evaluate(actual: Callable[[], Any]) -> bool:
        try:
            actual()
        except Exception as raised:
            if error is not None:
                return type(raised) is type(error) and raised.args == error.args
            if error_type is not None and not isinstance(raised, error_type):
                return False
            if verifier is not None:
                return verifier(raised)
            return True
        return False

    expected_name = error_type.__name__ if error_type else type(error).__name__ if error else "error"
    return Matcher(evaluate, f"raise {expected_name}")


def succeed() -> Matcher:
    """Validate that the actual zero-argument callable returns a truthy value."""
    return Matcher(lambda actual: bool(actual()), "succeed")


def log() -> Matcher:
    """
    Debugging helper that always passes.

    The actual callable runs while expectations are evaluated, after every
    `before_each` and the `subject_action` of the test have run. Printing from
    here shows the state the other expectations see.
    """

    def evaluate(actual: Callable[[], Any]) -> bool:
        actual()
        return True

    return Matcher(evaluate, "log")
