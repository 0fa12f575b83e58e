"""
This module defines Force, an immutable constant external influence applied to a Body
in addition to gravity.

A Force is a unit direction paired with a scalar magnitude. The constructor copies and
normalizes whatever direction it receives, so callers do not need to pre-normalize,
and a zero-length direction raises DegenerateVectorError. The magnitude may be any
float: zero disables the force and a negative value reverses its effective direction.
Instances expose read-only properties only and the stored direction array is flagged
non-writeable, which makes it safe to share one Force between many bodies.
"""

from __future__ import annotations
import numpy as np
from numpy.typing import ArrayLike, NDArray
from .vector import vec3, normalize









class Force:
    __slots__ = ("_direction", "_magnitude")

    def __init__(self, direction: ArrayLike, magnitude: float) -> None:
        unit = normalize(vec3(direction))
        unit.setflags(write=False)
        object.__setattr__(self, "_direction", unit)
        object.__setattr__(self, "_magnitude", float(magnitude))

    def __setattr__(self, name: str, value) -> None:
        raise AttributeError(f"Force is immutable, cannot set {name!r}")

    def __reduce__(self):
        return (Force, (self._direction.copy(), self._magnitude))

    @property
    def direction(self) -> NDArray[np.floating]:
        return self._direction

    @property
    def magnitude(self) -> float:
        return self._magnitude

    def vector(self) -> NDArray[np.floating]:
        return self._direction * self._magnitude

    def __repr__(self) -> str:
        d = self._direction
        return (f"Force(direction=({d[0]:.6g}, {d[1]:.6g}, {d[2]:.6g}), "
                f"magnitude={self._magnitude})")
