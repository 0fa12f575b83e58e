"""
This module implements Simulation, a small driver context that owns a collection of
bodies together with the Universe configuration they are advanced under.

Bodies are addressed by stable integer handles (their insertion index), never by value,
so two bodies with identical state remain distinct. step() performs one explicit Euler
step in two passes: every body's velocity is updated against the positions of the
previous step, and only once that pass has completed are positions advanced. The
Universe is copied on construction, so changing one simulation's gravitational constant
or time step never affects another. Optional features mirror the configuration:
single-precision storage (fast_float32) and a runtime guard that checks for non-finite
state after each step. Diagnostics cover the center of mass, linear momentum and kinetic
energy; snapshot and restore copy the numeric state while forces stay attached.
"""

from __future__ import annotations
import logging
from typing import Iterable, Tuple
import numpy as np
from .body import Body
from .errors import NonFiniteStateError
from .physics_utils import (
	center_of_mass as _center_of_mass,
	center_of_mass_velocity as _center_of_mass_velocity,
	remove_center_of_mass_velocity as _remove_cm_velocity,
)
from .universe import Universe
from .validation import StateValidator


logger = logging.getLogger(__name__)




class Simulation:

	def __init__(
		self,
		bodies: Iterable[Body] | None = None,
		universe: Universe | None = None,
	) -> None:
		self.universe = universe.copy() if universe is not None else Universe()
		self._bodies: list[Body] = []
		self.steps_taken: int = 0
		self._dtype = np.float64
		for b in bodies or ():
			self.add_body(b)
		if self.universe.fast_float32:
			self.set_fast_mode(True)

	@property
	def bodies(self) -> Tuple[Body, ...]:
		return tuple(self._bodies)

	@property
	def n_bodies(self) -> int:
		return len(self._bodies)

	@property
	def G(self) -> float:
		return float(self.universe.gravity_constant)

	def add_body(self, body: Body) -> int:
		for b in self._bodies:
			if b is body:
				raise ValueError(f"{body!r} is already part of this simulation")
		body.astype(self._dtype)
		self._bodies.append(body)
		return len(self._bodies) - 1

	def body(self, handle: int) -> Body:
		if handle < 0 or handle >= len(self._bodies):
			raise IndexError(f"no body with handle {handle}")
		return self._bodies[handle]

	def step(self, dt: float | None = None) -> None:
		if dt is None:
			dt = self.universe.time_step
		dt = float(dt)
		G = self.G

		# evaluated in full before anything is written, so a raise leaves the step untouched
		accelerations = [body.acceleration(self._bodies, gravity_constant=G) for body in self._bodies]
		for body, acc in zip(self._bodies, accelerations):
			body.apply_acceleration(acc, dt)
		# barrier: no position moves until every velocity is updated
		for body in self._bodies:
			body.update_position(dt)

		self.steps_taken += 1
		logger.debug("step %d: dt=%g n_bodies=%d", self.steps_taken, dt, len(self._bodies))

		if self.universe.enable_runtime_guard:
			self._check_state()

	def run(self, n_steps: int, dt: float | None = None) -> None:
		n_steps = int(n_steps)
		if n_steps < 0:
			raise ValueError(f"n_steps must be non-negative, got {n_steps}")
		for _ in range(n_steps):
			self.step(dt)

	def _check_state(self) -> None:
		bad = StateValidator.invalid_indices(self._bodies)
		if bad:
			StateValidator.report_invalid_state(f"after step {self.steps_taken}", self._bodies)
			raise NonFiniteStateError(
				f"non-finite state in bodies {bad} after step {self.steps_taken}"
			)

	def set_fast_mode(self, float32: bool = True) -> None:
		self._dtype = np.float32 if float32 else np.float64
		for b in self._bodies:
			b.astype(self._dtype)
		self.universe.fast_float32 = bool(float32)

	def masses(self) -> np.ndarray:
		return np.array([b.mass for b in self._bodies], dtype=np.float64)

	def positions(self) -> np.ndarray:
		if not self._bodies:
			return np.empty((0, 3), dtype=np.float64)
		return np.stack([b.position for b in self._bodies]).astype(np.float64)

	def velocities(self) -> np.ndarray:
		if not self._bodies:
			return np.empty((0, 3), dtype=np.float64)
		return np.stack([b.velocity for b in self._bodies]).astype(np.float64)

	def center_of_mass(self) -> np.ndarray:
		return _center_of_mass(self.masses(), self.positions())

	def center_of_mass_velocity(self) -> np.ndarray:
		return _center_of_mass_velocity(self.masses(), self.velocities())

	def total_momentum(self) -> np.ndarray:
		m = self.masses()
		if m.size == 0:
			return np.zeros(3, dtype=np.float64)
		return np.sum(m[:, None] * self.velocities(), axis=0)

	def kinetic_energy(self) -> float:
		m = self.masses()
		v = self.velocities()
		return 0.5 * float(np.sum(m * np.sum(v * v, axis=1)))

	def remove_center_of_mass_velocity(self) -> None:
		new_vel = _remove_cm_velocity(self.masses(), self.velocities())
		for b, v in zip(self._bodies, new_vel):
			b.velocity = v

	def snapshot(self) -> dict:
		return {
			"masses": self.masses(),
			"positions": self.positions(),
			"velocities": self.velocities(),
			"steps_taken": self.steps_taken,
			"universe": self.universe.copy(),
		}

	def restore(self, state: dict) -> None:
		masses = np.asarray(state["masses"], dtype=np.float64)
		positions = np.asarray(state["positions"], dtype=np.float64)
		velocities = np.asarray(state["velocities"], dtype=np.float64)
		n = len(self._bodies)
		if masses.shape != (n,) or positions.shape != (n, 3) or velocities.shape != (n, 3):
			raise ValueError(
				f"snapshot holds {masses.size} bodies, simulation has {n}"
			)

		for b, m, p, v in zip(self._bodies, masses, positions, velocities):
			b.mass = m
			b.position = p
			b.velocity = v
		self.steps_taken = int(state.get("steps_taken", 0))
		if "universe" in state:
			self.universe = state["universe"].copy()
			self.set_fast_mode(self.universe.fast_float32)

	def __repr__(self) -> str:
		return f"Simulation(n_bodies={len(self._bodies)}, steps_taken={self.steps_taken}, universe={self.universe})"
