"""
Core type definitions for sprig.

This module contains the enums and callable aliases shared by the test tree,
the capture layer and the executor.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any


class Mark(Enum):
    """Author-declared marking of a scope or leaf test."""

    NONE = "none"
    FOCUSED = "focused"
    PENDING = "pending"


class ScopeKind(Enum):
    """Kind of a scope node. Only GROUP changes how leaf tests execute."""

    TOP_LEVEL = "top_level"
    DESCRIBE = "describe"
    CONTEXT = "context"
    GROUP = "group"


class HookKind(Enum):
    """Position of a hook relative to the leaf tests it wraps."""

    BEFORE_EACH = "before_each"
    SUBJECT_ACTION = "subject_action"
    AFTER_EACH = "after_each"


HookBody = Callable[[], Any]

# Receives the TestContext of the running test. Returning False fails the test.
TestBody = Callable[[Any], Any]

# Receives the ScopeBuilder of the scope being captured.
ScopeBody = Callable[[Any], Any]
