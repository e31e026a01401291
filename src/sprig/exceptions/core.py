"""
Exception classes for sprig test declaration and execution.

This module defines the structural error types raised when a test tree is
authored incorrectly. Assertion failures are never raised through these
classes; they are recorded on the owning leaf test instead.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Declaration kind and scope path only
    DEVELOPER = "developer"  # Also include the Python source location


@dataclass
class DeclarationContext:
    """
    Context information for structural error messages.

    Captures where a misplaced declaration happened in both test-tree terms
    (declaration kind, scope path) and Python source terms (file, line).

    Params:
        declaration: Name of the declaration function (e.g. "before_each")
        scope_path: Titles from the root scope down to the offending scope
        source_file: Python file containing the declaration call
        source_line: Line number of the declaration call
    """

    declaration: str | None = None
    scope_path: tuple[str, ...] = ()
    source_file: str | None = None
    source_line: int | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.declaration:
            lines.append(f"  declaration: {self.declaration}()")

        if self.scope_path:
            lines.append(f"  in {' > '.join(self.scope_path)}")

        if error_level == ErrorLevel.DEVELOPER:
            if self.source_file and self.source_line:
                lines.append(f"  at {self.source_file}:{self.source_line}")

        return "\n".join(lines)


class SprigError(Exception):
    """Base exception for all sprig errors."""

    pass


class StructuralError(SprigError):
    """
    Raised when a test tree is authored incorrectly.

    Structural errors abort the whole run. They describe mistakes in how the
    tests are written, not outcomes of the code under test.
    """

    def __init__(
        self,
        message: str,
        context: DeclarationContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Primary error message
            context: DeclarationContext with source location information
            error_level: Level of detail to show in error message
        """
        self.context = context
        self.error_level = error_level

        if context:
            location_info = context.format_location(error_level)
            full_message = f"{message}\n{location_info}" if location_info else message
        else:
            full_message = message

        super().__init__(full_message)


class OutsideScopeError(StructuralError):
    """Raised when a hook, test or scope is declared with no enclosing scope."""

    def __init__(
        self,
        declaration: str,
        context: DeclarationContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            declaration: Name of the declaration function that was called
            context: Optional source location of the call
            error_level: Level of detail to show in error message
        """
        self.declaration = declaration
        super().__init__(
            f"`{declaration}` must be declared inside a `describe`, `context` or `group` body "
            "that is still being captured",
            context,
            error_level,
        )


class DeclarationWhileExecutingError(StructuralError):
    """Raised when new structure is declared while the run is executing."""

    def __init__(
        self,
        declaration: str,
        context: DeclarationContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            declaration: Name of the declaration function that was called
            context: Optional source location of the call
            error_level: Level of detail to show in error message
        """
        self.declaration = declaration
        super().__init__(
            f"Tried to add `{declaration}` while tests are executing. "
            "This is usually a test block declared inside an `it` body.",
            context,
            error_level,
        )


class TooManySubjectActionsError(StructuralError):
    """Raised when more than one subject action applies to a single test."""

    def __init__(self, count: int, scope_path: tuple[str, ...] = ()):
        """
        Initialize the exception.

        Params:
            count: Number of subject actions reachable from the test
            scope_path: Titles from the root scope down to the scope being run
        """
        self.count = count
        super().__init__(
            f"Only one `subject_action` per test, found {count}",
            DeclarationContext(declaration="subject_action", scope_path=scope_path),
        )


class ExpectOutsideTestError(StructuralError):
    """Raised when an expectation is registered outside an executing test."""

    def __init__(self, context: DeclarationContext | None = None):
        """
        Initialize the exception.

        Params:
            context: Optional source location of the `expect` call
        """
        super().__init__("`expect` must be called inside an executing `it` body", context)
