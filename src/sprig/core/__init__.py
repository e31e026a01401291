"""
Core sprig components.

This package provides the test tree node classes and the enums used to
describe scopes, hooks and markings.
"""

from sprig.core.nodes import Hook, LeafTest, Scope
from sprig.core.types import (
    HookBody,
    HookKind,
    Mark,
    ScopeBody,
    ScopeKind,
    TestBody,
)

__all__ = [
    "Hook",
    "LeafTest",
    "Scope",
    "Mark",
    "ScopeKind",
    "HookKind",
    "HookBody",
    "TestBody",
    "ScopeBody",
]
