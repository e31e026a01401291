"""
Built-in matchers for sprig expectations.
"""

from sprig.matchers.core import (
    Matcher,
    be,
    be_close_to,
    be_empty,
    be_false,
    be_none,
    be_true,
    contain,
    equal,
    have_count,
    log,
    pass_comparison,
    raise_error,
    succeed,
)

__all__ = [
    "Matcher",
    "equal",
    "be",
    "be_true",
    "be_false",
    "be_none",
    "be_close_to",
    "be_empty",
    "pass_comparison",
    "have_count",
    "contain",
    "raise_error",
    "succeed",
    "log",
]
