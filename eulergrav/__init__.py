"""
This initialization file exposes the public API of the gravitational point-mass
kernel through a single namespace.

It re-exports the Body and Force entities, the Universe configuration with its default
constants, the Simulation driver context, the state validator, the vector helpers and
the exception hierarchy, so users can import any of them directly from the package root.
"""

from .errors import EulerGravError, DegenerateVectorError, NonFiniteStateError
from .vector import vec3, length, normalize
from .universe import (
    Universe,
    GRAVITY_CONSTANT,
    SCALED_GRAVITY_CONSTANT,
    TIME_STEP,
)

from .force import Force
from .body import Body
from .simulation import Simulation
from .validation import StateValidator
from .physics_utils import (
    center_of_mass,
    center_of_mass_velocity,
    remove_center_of_mass_velocity,
)


__version__ = "1.0.0"


__all__ = [
    "EulerGravError",
    "DegenerateVectorError",
    "NonFiniteStateError",
    "vec3",
    "length",
    "normalize",
    "Universe",
    "GRAVITY_CONSTANT",
    "SCALED_GRAVITY_CONSTANT",
    "TIME_STEP",
    "Force",
    "Body",
    "Simulation",
    "StateValidator",
    "center_of_mass",
    "center_of_mass_velocity",
    "remove_center_of_mass_velocity",
]
