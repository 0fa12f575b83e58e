"""
This module defines the Body class, a point mass advanced by explicit Euler steps.

A Body owns its mass, a position and a velocity stored as numpy arrays of shape (3,),
and an ordered list of attached external Force objects. update_velocity accumulates the
pairwise gravitational term from every other body plus every attached force, scales the
sum by the step length once and adds it to the velocity in place; update_position then
advances the position by velocity * time. Within one step the velocity pass must be
completed for every body, against positions from the same prior step, before any
position is advanced. update_velocity only reads the other bodies, so the velocity pass
may run in any order. The Simulation class enforces this ordering for callers that do
not drive the loop themselves.

The gravitational term deliberately multiplies by the masses of both bodies
(G * m_other * m_self / d^2), so a body of zero mass neither pulls nor is pulled; only
its attached forces move it.
"""

from __future__ import annotations
import math
from typing import Iterable, Tuple
import numpy as np
from numpy.typing import ArrayLike, NDArray
from .errors import DegenerateVectorError
from .force import Force
from .universe import GRAVITY_CONSTANT
from .vector import vec3, normalize




class Body:
	__slots__ = ("_mass", "_pos", "_vel", "_forces")

	def __init__(
		self,
		mass: float = 0.0,
		position: ArrayLike | None = None,
		velocity: ArrayLike | None = None,
	) -> None:
		self._mass = float(mass)
		self._pos = vec3(position)
		self._vel = vec3(velocity)
		self._forces: list[Force] = []

	@property
	def mass(self) -> float:
		return self._mass
	@mass.setter
	def mass(self, v: float) -> None:
		self._mass = float(v)

	@property
	def position(self) -> NDArray[np.floating]:
		return self._pos
	@position.setter
	def position(self, v: ArrayLike) -> None:
		self._pos = vec3(v, dtype=self._pos.dtype)

	@property
	def velocity(self) -> NDArray[np.floating]:
		return self._vel
	@velocity.setter
	def velocity(self, v: ArrayLike) -> None:
		self._vel = vec3(v, dtype=self._vel.dtype)

	@property
	def forces(self) -> Tuple[Force, ...]:
		return tuple(self._forces)

	def set_forces(self, forces: Iterable[Force]) -> None:
		new = list(forces)
		for f in new:
			if not isinstance(f, Force):
				raise TypeError(f"expected Force, got {type(f).__name__}")
		self._forces = new

	def add_force(self, force: Force) -> None:
		if not isinstance(force, Force):
			raise TypeError(f"expected Force, got {type(force).__name__}")
		self._forces.append(force)

	def remove_force(self, force: Force) -> None:
		for i, f in enumerate(self._forces):
			if f is force:
				del self._forces[i]
				return
		raise ValueError(f"{force!r} is not attached to this body")

	def clear_forces(self) -> None:
		self._forces.clear()

	def calculate_euclidean_distance(self, other: "Body") -> float:
		d = other._pos - self._pos
		return math.sqrt(float(d[0] * d[0] + d[1] * d[1] + d[2] * d[2]))

	def calculate_manhattan_distance(self, other: "Body") -> float:
		return float(np.sum(np.abs(self._pos - other._pos)))

	def update_velocity(
		self,
		bodies: Iterable["Body"],
		time: float,
		gravity_constant: float = GRAVITY_CONSTANT,
	) -> NDArray[np.floating]:
		return self.apply_acceleration(self.acceleration(bodies, gravity_constant), time)

	def apply_acceleration(self, acceleration: NDArray[np.floating], time: float) -> NDArray[np.floating]:
		delta = acceleration * time
		self._vel += delta
		return delta

	def acceleration(
		self,
		bodies: Iterable["Body"],
		gravity_constant: float = GRAVITY_CONSTANT,
	) -> NDArray[np.floating]:
		"""Summed gravitational and external term; reads state only, never mutates."""
		G = float(gravity_constant)
		acceleration = np.zeros(3, dtype=self._vel.dtype)

		for body in bodies:
			if body is self:
				continue
			dist2 = self.calculate_euclidean_distance(body) ** 2
			if dist2 == 0.0:
				raise DegenerateVectorError(
					f"coincident bodies at {self._pos.tolist()}: direction of attraction is undefined"
				)
			direction = normalize(body._pos - self._pos)
			acceleration += direction * (G * body._mass * self._mass / dist2)

		for force in self._forces:
			acceleration += force.direction * force.magnitude
		return acceleration

	def update_position(self, time: float) -> None:
		self._pos += self._vel * time

	def astype(self, dtype) -> None:
		self._pos = self._pos.astype(dtype, copy=False)
		self._vel = self._vel.astype(dtype, copy=False)

	def __repr__(self) -> str:
		p = self._pos
		v = self._vel
		return (f"Body(mass={self._mass}, position=({p[0]}, {p[1]}, {p[2]}), "
				f"velocity=({v[0]}, {v[1]}, {v[2]}), forces={len(self._forces)})")
