"""
Tests for structural errors and their context formatting.

This module tests DeclarationContext, ErrorLevel and how exceptions format
messages based on error level (user vs developer).
"""

from sprig.exceptions import (
    DeclarationContext,
    DeclarationWhileExecutingError,
    ErrorLevel,
    ExpectOutsideTestError,
    OutsideScopeError,
    SprigError,
    StructuralError,
    TooManySubjectActionsError,
)


class TestDeclarationContext:
    """Tests for DeclarationContext formatting."""

    def test_user_level_hides_source_location(self):
        ctx = DeclarationContext(
            declaration="before_each",
            scope_path=("calc", "adding"),
            source_file="/work/calc_tests.py",
            source_line=12,
        )
        formatted = ctx.format_location(ErrorLevel.USER)

        assert "before_each()" in formatted
        assert "calc > adding" in formatted
        assert "calc_tests.py" not in formatted

    def test_developer_level_shows_source_location(self):
        ctx = DeclarationContext(
            declaration="it",
            source_file="/work/calc_tests.py",
            source_line=12,
        )
        formatted = ctx.format_location(ErrorLevel.DEVELOPER)

        assert "/work/calc_tests.py:12" in formatted

    def test_empty_context_formats_to_empty_string(self):
        assert DeclarationContext().format_location(ErrorLevel.DEVELOPER) == ""


class TestHierarchy:
    """All structural errors share one catchable base."""

    def test_structural_errors_are_sprig_errors(self):
        for error in (
            OutsideScopeError("it"),
            DeclarationWhileExecutingError("describe"),
            TooManySubjectActionsError(2),
            ExpectOutsideTestError(),
        ):
            assert isinstance(error, StructuralError)
            assert isinstance(error, SprigError)


class TestMessages:
    def test_outside_scope_names_declaration(self):
        error = OutsideScopeError("before_each")
        assert "`before_each`" in str(error)
        assert error.declaration == "before_each"

    def test_context_is_appended_to_message(self):
        error = DeclarationWhileExecutingError(
            "it", DeclarationContext(declaration="it", scope_path=("calc",))
        )
        message = str(error)
        assert message.startswith("Tried to add `it` while tests are executing")
        assert "\n  declaration: it()" in message
        assert "in calc" in message

    def test_too_many_subject_actions_reports_count_and_scope(self):
        error = TooManySubjectActionsError(3, ("calc", "nested"))
        assert error.count == 3
        assert "found 3" in str(error)
        assert "calc > nested" in str(error)
