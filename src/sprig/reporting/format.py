"""
Report formatting configuration.

`ReportFormat` holds every fixed token used when rendering a run. The default
instance reproduces the standard console layout; callers may pass a modified
copy (`attrs.evolve(DEFAULT_FORMAT, indent="  ")`) to a root declaration or
to `Tester`.
"""

from attrs import field, frozen

from sprig.core.types import ScopeKind


def _default_scope_prefixes() -> dict[ScopeKind, str]:
    return {
        ScopeKind.TOP_LEVEL: "Test: ",
        ScopeKind.DESCRIBE: "Describe: ",
        ScopeKind.CONTEXT: "Context: ",
        ScopeKind.GROUP: "Group: ",
    }


@frozen
class ReportFormat:
    """Fixed text tokens of a rendered report."""

    indent: str = "   "
    blank_marker: str = " "
    success_marker: str = "."
    failure_marker: str = "F"
    pending_marker: str = ">"
    focused_prefix: str = "F-"
    pending_prefix: str = "X-"
    test_prefix: str = "It: "
    scope_prefixes: dict[ScopeKind, str] = field(factory=_default_scope_prefixes, hash=False)
    empty_title: str = ""
    missing_description: str = "(description not provided)"
    missing_expected_behavior: str = "(expected behavior not provided)"

    def scope_prefix(self, kind: ScopeKind) -> str:
        return self.scope_prefixes[kind]


DEFAULT_FORMAT = ReportFormat()
