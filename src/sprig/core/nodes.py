"""
Test tree node classes for sprig.

A run is a tree of `Scope` nodes. Each scope owns ordered hooks, ordered leaf
tests and ordered child scopes. Nodes are mutated only while their declaring
body is being captured and are treated as frozen once execution begins.
"""

from dataclasses import dataclass, field

from sprig.core.types import HookBody, HookKind, Mark, ScopeKind, TestBody


@dataclass
class Hook:
    """A zero-argument side-effecting callback attached to a scope."""

    kind: HookKind
    body: HookBody

    def run(self) -> None:
        self.body()


@dataclass
class LeafTest:
    """
    The smallest unit of work; produces exactly one outcome per run.

    The acting flags combine the author's own mark with what the enclosing
    scope propagated, so a test inside a pending scope is pending even when it
    is individually focused.
    """

    title: str
    body: TestBody
    mark: Mark = Mark.NONE
    line: int | None = None
    under_focus: bool = False
    under_pending: bool = False

    @property
    def acting_focused(self) -> bool:
        return self.mark is Mark.FOCUSED or self.under_focus

    @property
    def acting_pending(self) -> bool:
        return self.mark is Mark.PENDING or self.under_pending

    def propagate(self, parent_focused: bool, parent_pending: bool) -> None:
        self.under_focus = parent_focused
        self.under_pending = parent_pending

    def should_execute(self, is_anything_focused: bool) -> bool:
        """Decide whether this test runs in the current focus mode.

        Params:
            is_anything_focused: True when any scope or test in the run is focused.

        Returns:
            False when pending; the acting focus flag in focus mode; True otherwise.
        """
        if self.acting_pending:
            return False
        if is_anything_focused:
            return self.acting_focused
        return True


@dataclass
class Scope:
    """Named node of the test tree grouping hooks, leaf tests and child scopes."""

    kind: ScopeKind
    title: str
    mark: Mark = Mark.NONE
    hooks: list[Hook] = field(default_factory=list)
    tests: list[LeafTest] = field(default_factory=list)
    children: list["Scope"] = field(default_factory=list)
    parent: "Scope | None" = field(default=None, repr=False)
    under_focus: bool = False
    under_pending: bool = False

    @property
    def acting_focused(self) -> bool:
        return self.mark is Mark.FOCUSED or self.under_focus

    @property
    def acting_pending(self) -> bool:
        return self.mark is Mark.PENDING or self.under_pending

    @property
    def path(self) -> tuple[str, ...]:
        """Titles from the root scope down to this one."""
        titles = []
        node: Scope | None = self
        while node is not None:
            titles.append(node.title)
            node = node.parent
        return tuple(reversed(titles))

    def add_hook(self, hook: Hook) -> None:
        self.hooks.append(hook)

    def add_test(self, test: LeafTest) -> None:
        self.tests.append(test)

    def add_child(self, scope: "Scope") -> None:
        scope.parent = self
        self.children.append(scope)

    def has_active_focus(self) -> bool:
        """
        Report whether anything under this scope turns focus mode on.

        A pending scope never contributes focus, even when it or one of its
        descendants is marked focused.

        Returns:
            True if this scope, one of its tests, or a child scope is focused
        """
        if self.acting_pending:
            return False
        return (
            self.acting_focused
            or any(test.acting_focused for test in self.tests)
            or any(child.has_active_focus() for child in self.children)
        )

    def propagate(self, parent_focused: bool, parent_pending: bool) -> None:
        """
        Push inherited focus and pending state down the tree.

        Stores the parent's acting flags on this scope, then hands this
        scope's own acting flags to every leaf test and child scope.

        Params:
            parent_focused: Acting focus flag of the parent scope
            parent_pending: Acting pending flag of the parent scope
        """
        self.under_focus = parent_focused
        self.under_pending = parent_pending

        for test in self.tests:
            test.propagate(self.acting_focused, self.acting_pending)
        for child in self.children:
            child.propagate(self.acting_focused, self.acting_pending)

    def count_tests(self) -> int:
        return len(self.tests) + sum(child.count_tests() for child in self.children)
