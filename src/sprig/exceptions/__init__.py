"""
sprig exception classes.

This package provides all exception types used throughout sprig for
consistent structural error handling and reporting.
"""

from sprig.exceptions.core import (
    DeclarationContext,
    DeclarationWhileExecutingError,
    ErrorLevel,
    ExpectOutsideTestError,
    OutsideScopeError,
    SprigError,
    StructuralError,
    TooManySubjectActionsError,
)

__all__ = [
    "SprigError",
    "StructuralError",
    "OutsideScopeError",
    "DeclarationWhileExecutingError",
    "TooManySubjectActionsError",
    "ExpectOutsideTestError",
    "DeclarationContext",
    "ErrorLevel",
]
