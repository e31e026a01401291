"""
sprig test tree construction.

This package provides the capture session and the declaration builder used
while scope bodies run.
"""

from sprig.structure.builder import RunSession, ScopeBuilder, caller_location

__all__ = [
    "RunSession",
    "ScopeBuilder",
    "caller_location",
]
