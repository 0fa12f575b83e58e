"""
This module defines the exception hierarchy for the package. Numeric degeneracies
that would otherwise surface as NaN-bearing vectors (normalizing a zero-length
direction, two bodies sharing the same position) are raised as
DegenerateVectorError at the point where they occur, and the optional runtime guard
of the Simulation raises NonFiniteStateError when a step leaves non-finite state
behind.
"""

from __future__ import annotations


class EulerGravError(Exception):
    pass


class DegenerateVectorError(EulerGravError, ValueError):
    pass


class NonFiniteStateError(EulerGravError, ArithmeticError):
    pass


__all__ = ["EulerGravError", "DegenerateVectorError", "NonFiniteStateError"]
