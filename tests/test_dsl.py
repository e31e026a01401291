"""
Tests for the root-level declaration functions.

Each call captures, executes and reports one tree. These tests cover printing,
the decorator form and how the root's marking reaches the whole tree.
"""

import io

import pytest

from sprig import context, describe, fdescribe, group, test, xdescribe
from sprig.dsl import active_session
from sprig.exceptions import DeclarationWhileExecutingError, StructuralError
from sprig.reporting import Report


class TestRootRuns:
    """A root declaration runs its tree immediately."""

    def test_prints_report_and_returns_it(self, capsys):
        report = describe("calc", lambda spec: spec.it("adds", lambda ctx: True))

        out = capsys.readouterr().out
        assert isinstance(report, Report)
        assert out == report.text
        assert out.startswith(" Test: calc\n.   It: adds\n")

    def test_root_always_renders_as_top_level(self):
        for declare in (describe, group, test):
            report = declare("root", lambda spec: None, auto_print=False)
            assert report.text.startswith(" Test: root\n")

    def test_decorator_form(self, capsys):
        @describe("decorated")
        def decorated(spec):
            spec.it("works", lambda ctx: True)

        assert isinstance(decorated, Report)
        assert decorated.result.succeeded == 1
        assert capsys.readouterr().out.startswith(" Test: decorated\n")

    def test_output_stream(self, capsys):
        stream = io.StringIO()
        describe("streamed", lambda spec: spec.it("a", lambda ctx: True), output=stream)

        assert stream.getvalue().startswith(" Test: streamed\n")
        assert capsys.readouterr().out == ""

    def test_auto_print_disabled(self, capsys):
        report = describe("quiet", lambda spec: None, auto_print=False)
        assert capsys.readouterr().out == ""
        assert report.text == (
            " Test: quiet\n\nExecuted 0 tests | 0 succeeded | 0 failed | 0 pending\n"
        )


class TestRootMarks:
    def test_pending_root_makes_everything_pending(self, calls):
        def body(spec):
            spec.before_each(calls.record("setup"))
            spec.it("a", calls.record("a"))
            spec.describe("inner", lambda spec: spec.it("b", calls.record("b")))

        report = xdescribe("skipped", body, auto_print=False)

        assert calls.order == []
        assert report.result.pending == 2
        assert report.text.startswith(
            " X-Test: skipped\n"
            ">   X-It: a\n"
            "    X-Describe: inner\n"
            ">      X-It: b\n"
        )

    def test_focused_root_prefix(self):
        report = fdescribe("focused", lambda spec: spec.it("a", lambda ctx: True), auto_print=False)
        assert report.text.startswith(" F-Test: focused\n.   F-It: a\n")
        assert report.result.succeeded == 1


class TestStructuralErrors:
    def test_error_propagates_and_nothing_is_printed(self, capsys):
        def body(spec):
            spec.it("nests", lambda ctx: spec.it("inner", lambda ctx: True))

        with pytest.raises(DeclarationWhileExecutingError):
            describe("broken", body)
        assert capsys.readouterr().out == ""

    def test_root_declaration_inside_test_body_prints_nothing(self, capsys):
        def body(spec):
            spec.it("declares", lambda ctx: context("inner", lambda spec: None))

        with pytest.raises(DeclarationWhileExecutingError):
            describe("broken", body)
        assert capsys.readouterr().out == ""
        assert active_session() is None


class TestActiveRun:
    """Root declarations made while a run is capturing join that run."""

    def test_one_report_for_nested_root_declarations(self, capsys):
        def body(spec):
            spec.it("a", lambda ctx: True)
            context("when nested", lambda spec: spec.it("b", lambda ctx: True))
            test("also nested", lambda spec: spec.it("c", lambda ctx: True))

        report = describe("outer", body)

        out = capsys.readouterr().out
        assert out == report.text
        assert out.count("Executed") == 1
        assert "    Context: when nested\n.      It: b\n" in out
        assert "    Describe: also nested\n.      It: c\n" in out
        assert report.result.total == 3

    def test_nested_marks_apply(self):
        def body(spec):
            xdescribe("skipped", lambda spec: spec.it("b", lambda ctx: True))
            spec.it("a", lambda ctx: True)

        report = describe("outer", body, auto_print=False)

        assert "    X-Describe: skipped\n>      X-It: b\n" in report.text
        assert report.result.pending == 1

    def test_nested_decorator_returns_function(self):
        returned = []

        def body(spec):
            @describe("inner")
            def inner(spec):
                spec.it("b", lambda ctx: True)

            returned.append(inner)

        describe("outer", body, auto_print=False)
        assert callable(returned[0])
        assert returned[0].__name__ == "inner"

    def test_session_is_cleared_after_runs(self):
        assert active_session() is None
        seen = []
        describe("outer", lambda spec: seen.append(active_session()), auto_print=False)
        assert seen[0] is not None
        assert active_session() is None

    def test_builder_of_outer_run_rejects_nested_root_scope_body(self):
        def body(spec):
            outer = spec
            describe("nested", lambda spec: outer.it("late", lambda ctx: True))

        with pytest.raises(StructuralError):
            describe("outer", body, auto_print=False)
