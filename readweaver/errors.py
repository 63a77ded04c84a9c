#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Exception types raised by the assembly engines and configuration layer.

Structural and configuration errors (InvalidInputError, UnknownMethodError,
ConfigValidationError) are fatal to a run. AlternateAssemblyFailure is only
ever raised and caught inside the engines while exploring alternate paths.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Optional


class ReadWeaverError(Exception):
    """Base class for all ReadWeaver errors."""
    pass


class InvalidInputError(ReadWeaverError):
    """Raised when reads are neither text, a list of sequences nor a mapping."""
    pass


class UnknownMethodError(ReadWeaverError):
    """
    Raised when a method name is not recognised for its family.
    
    Attributes:
        family: Method family ('overlap', 'layout', 'consensus', 'error_filter', 'euler')
        method: The offending method name
    """
    
    def __init__(self, family: str, method: str, choices: Optional[tuple] = None):
        self.family = family
        self.method = method
        self.choices = tuple(choices) if choices else ()
        message = f"Unknown {family} method {method!r}"
        if self.choices:
            message += f" (expected one of: {', '.join(self.choices)})"
        super().__init__(message)


class ConfigValidationError(ReadWeaverError, ValueError):
    """Raised when configuration validation fails."""
    pass


class RecursionDepthError(ReadWeaverError):
    """Raised when the recursive Eulerian walk would exceed its depth guard."""
    pass


class AlternateAssemblyFailure(ReadWeaverError):
    """
    Wraps an exception raised while reconstructing one alternate assembly.
    
    Attributes:
        label: Human-readable marker of the perturbed branch
        cause: The original exception
    """
    
    def __init__(self, label: str, cause: BaseException):
        self.label = label
        self.cause = cause
        super().__init__(f"Alternate assembly {label} failed: {cause}")


__all__ = [
    'ReadWeaverError',
    'InvalidInputError',
    'UnknownMethodError',
    'ConfigValidationError',
    'RecursionDepthError',
    'AlternateAssemblyFailure',
]

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
