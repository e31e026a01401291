"""
Capture-phase construction of the test tree.

A `RunSession` owns the stack of scopes whose bodies are currently being
captured and the flag that freezes the tree once execution starts. Every
scope body receives a `ScopeBuilder` bound to its own scope; the builder is
the only way to add scopes, hooks and leaf tests, and it refuses to do so
once that body has returned or while the run is executing.
"""

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

from sprig.core.nodes import Hook, LeafTest, Scope
from sprig.core.types import HookBody, HookKind, Mark, ScopeBody, ScopeKind, TestBody
from sprig.exceptions import (
    DeclarationContext,
    DeclarationWhileExecutingError,
    ErrorLevel,
    OutsideScopeError,
)

logger = logging.getLogger(__name__)

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def caller_location() -> tuple[str | None, int | None]:
    """Find the first stack frame outside the sprig package.

    Returns:
        File name and line number of the user code that made the declaration
    """
    frame = sys._getframe(1)
    while frame is not None:
        filename = os.path.abspath(frame.f_code.co_filename)
        if not filename.startswith(_PACKAGE_DIR + os.sep):
            return frame.f_code.co_filename, frame.f_lineno
        frame = frame.f_back
    return None, None


class RunSession:
    """
    State of one run: the scope tree, the capture stack and the executing flag.

    One session is created per root-level declaration and discarded after its
    report is produced.
    """

    def __init__(self, root: Scope, error_level: ErrorLevel = ErrorLevel.USER):
        self.root = root
        self.error_level = error_level
        self.executing = False
        self._stack: list[Scope] = []

    @property
    def current_scope(self) -> Scope | None:
        return self._stack[-1] if self._stack else None

    def capture(self, scope: Scope, body: ScopeBody) -> None:
        """
        Run `body` with `scope` as the current scope.

        Params:
            scope: Scope receiving the declarations made by `body`
            body: Callable receiving the `ScopeBuilder` for `scope`
        """
        logger.debug("Capturing %s %r", scope.kind.value, scope.title)
        self._stack.append(scope)
        try:
            body(ScopeBuilder(self, scope))
        finally:
            self._stack.pop()

    def declare_scope(
        self,
        parent: Scope | None,
        kind: ScopeKind,
        mark: Mark,
        title: str,
        body: ScopeBody,
        declaration: str,
    ) -> Scope:
        """
        Add a child scope to `parent` and capture its body.

        Params:
            parent: Scope receiving the child; must be the scope being captured
            kind: Kind of the new scope
            mark: Focus or pending marking of the new scope
            title: Title of the new scope
            body: Callable receiving the `ScopeBuilder` for the new scope
            declaration: Name of the declaration function, for error messages

        Returns:
            The new child scope
        """
        self.ensure_can_declare(parent, declaration)
        child = Scope(kind=kind, title=title, mark=mark)
        parent.add_child(child)
        self.capture(child, body)
        return child

    def ensure_can_declare(self, scope: Scope | None, declaration: str) -> None:
        """
        Check that `scope` may receive a new declaration right now.

        Params:
            scope: Scope the declaration targets
            declaration: Name of the declaration function, for error messages

        Raises:
            DeclarationWhileExecutingError: If the run is executing
            OutsideScopeError: If `scope` is not the scope currently being captured
        """
        if self.executing:
            raise DeclarationWhileExecutingError(
                declaration, self._context(scope, declaration), self.error_level
            )
        if scope is None or self.current_scope is not scope:
            raise OutsideScopeError(
                declaration, self._context(scope, declaration), self.error_level
            )

    def _context(self, scope: Scope | None, declaration: str) -> DeclarationContext:
        source_file, source_line = caller_location()
        return DeclarationContext(
            declaration=declaration,
            scope_path=scope.path if scope is not None else (),
            source_file=source_file,
            source_line=source_line,
        )


class ScopeBuilder:
    """
    Declaration surface handed to a scope body.

    Every declaration method can be called directly with a body or used as a
    decorator by leaving the body out:

        def calculator(spec):
            @spec.it("adds")
            def _(ctx):
                ctx.expect(1 + 1).to(equal(2))

        describe("calculator", calculator)
    """

    def __init__(self, session: RunSession, scope: Scope):
        self._session = session
        self._scope = scope

    @property
    def scope(self) -> Scope:
        return self._scope

    # Scopes

    def describe(self, title: str, body: ScopeBody | None = None):
        return self._declare_scope(ScopeKind.DESCRIBE, Mark.NONE, title, body, "describe")

    def fdescribe(self, title: str, body: ScopeBody | None = None):
        return self._declare_scope(ScopeKind.DESCRIBE, Mark.FOCUSED, title, body, "fdescribe")

    def xdescribe(self, title: str, body: ScopeBody | None = None):
        return self._declare_scope(ScopeKind.DESCRIBE, Mark.PENDING, title, body, "xdescribe")

    def context(self, title: str, body: ScopeBody | None = None):
        return self._declare_scope(ScopeKind.CONTEXT, Mark.NONE, title, body, "context")

    def fcontext(self, title: str, body: ScopeBody | None = None):
        return self._declare_scope(ScopeKind.CONTEXT, Mark.FOCUSED, title, body, "fcontext")

    def xcontext(self, title: str, body: ScopeBody | None = None):
        return self._declare_scope(ScopeKind.CONTEXT, Mark.PENDING, title, body, "xcontext")

    def group(self, title: str | ScopeBody = "", body: ScopeBody | None = None):
        """
        Declare a group scope.

        Leaf tests directly inside a group share one run of the applicable
        `before_each`, `subject_action` and `after_each` hooks instead of one
        run per test. Use it only to cut down expensive setup: a test that
        changes state read by a later test in the same group affects it.

        The title may be omitted: `spec.group(body)`.
        """
        title, body = _untitled(title, body)
        return self._declare_scope(ScopeKind.GROUP, Mark.NONE, title, body, "group")

    def fgroup(self, title: str | ScopeBody = "", body: ScopeBody | None = None):
        title, body = _untitled(title, body)
        return self._declare_scope(ScopeKind.GROUP, Mark.FOCUSED, title, body, "fgroup")

    def xgroup(self, title: str | ScopeBody = "", body: ScopeBody | None = None):
        title, body = _untitled(title, body)
        return self._declare_scope(ScopeKind.GROUP, Mark.PENDING, title, body, "xgroup")

    # Leaf tests

    def it(self, title: str, body: TestBody | None = None):
        """
        Declare a leaf test.

        The body receives a `TestContext` when the run executes. The test
        fails if the body raises, returns False, or registers an expectation
        that does not pass.
        """
        return self._declare_test(Mark.NONE, title, body, "it")

    def fit(self, title: str, body: TestBody | None = None):
        return self._declare_test(Mark.FOCUSED, title, body, "fit")

    def xit(self, title: str, body: TestBody | None = None):
        return self._declare_test(Mark.PENDING, title, body, "xit")

    # Hooks

    def before_each(self, body: HookBody):
        """Run `body` before each test of this scope, after outer `before_each` hooks."""
        return self._declare_hook(HookKind.BEFORE_EACH, body, "before_each")

    def subject_action(self, body: HookBody):
        """
        Run `body` after every `before_each` and before each test.

        At most one subject action may apply to a test, counting every
        enclosing scope.
        """
        return self._declare_hook(HookKind.SUBJECT_ACTION, body, "subject_action")

    def after_each(self, body: HookBody):
        """Run `body` after each test of this scope, before outer `after_each` hooks."""
        return self._declare_hook(HookKind.AFTER_EACH, body, "after_each")

    # Internals

    def _declare_scope(
        self,
        kind: ScopeKind,
        mark: Mark,
        title: str,
        body: ScopeBody | None,
        declaration: str,
    ) -> Any:
        if body is None:
            return _decorator(
                lambda fn: self._declare_scope(kind, mark, title, fn, declaration)
            )

        self._session.declare_scope(self._scope, kind, mark, title, body, declaration)
        return body

    def _declare_test(
        self, mark: Mark, title: str, body: TestBody | None, declaration: str
    ) -> Any:
        if body is None:
            return _decorator(lambda fn: self._declare_test(mark, title, fn, declaration))

        self._session.ensure_can_declare(self._scope, declaration)
        _, line = caller_location()
        self._scope.add_test(LeafTest(title=title, body=body, mark=mark, line=line))
        logger.debug("Declared %s %r in %r", declaration, title, self._scope.title)
        return body

    def _declare_hook(self, kind: HookKind, body: HookBody, declaration: str) -> HookBody:
        self._session.ensure_can_declare(self._scope, declaration)
        self._scope.add_hook(Hook(kind=kind, body=body))
        return body


def _untitled(title: str | ScopeBody, body: ScopeBody | None) -> tuple[str, ScopeBody | None]:
    if callable(title) and body is None:
        return "", title
    return title, body


def _decorator(declare: Callable[[Callable], Any]) -> Callable[[Callable], Callable]:
    def decorator(fn: Callable) -> Callable:
        declare(fn)
        return fn

    return decorator
