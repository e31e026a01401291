"""
Result accumulator for test runs.

`TestResult` is an additive record: counts add up, rendered text and failure
lines concatenate in order. `TestResult()` is the identity, so partial
results for sibling subtrees combine with `+` (or `sum(..., TestResult())`)
while keeping declaration order.
"""

from pydantic import BaseModel, ConfigDict, computed_field


class TestResult(BaseModel):
    """Counts, rendered text and failing assertion lines for part of a run."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(frozen=True)

    description: str = ""
    total: int = 0
    succeeded: int = 0
    pending: int = 0
    failure_lines: tuple[int, ...] = ()

    @computed_field
    @property
    def failed(self) -> int:
        return self.total - self.succeeded - self.pending

    def __add__(self, other: "TestResult") -> "TestResult":
        if not isinstance(other, TestResult):
            return NotImplemented
        return TestResult(
            description=self.description + other.description,
            total=self.total + other.total,
            succeeded=self.succeeded + other.succeeded,
            pending=self.pending + other.pending,
            failure_lines=self.failure_lines + other.failure_lines,
        )

    @classmethod
    def line(cls, description: str) -> "TestResult":
        """A result holding only rendered text, such as a scope title."""
        return cls(description=description)

    @classmethod
    def pending_test(cls, description: str) -> "TestResult":
        return cls(description=description, total=1, pending=1)

    @classmethod
    def executed_test(
        cls, description: str, success: bool, failure_lines: tuple[int, ...] = ()
    ) -> "TestResult":
        return cls(
            description=description,
            total=1,
            succeeded=1 if success else 0,
            failure_lines=failure_lines,
        )
