import numpy as np

"""
This module provides mass-weighted reductions over stacked body state: the center of
mass, the center-of-mass velocity and remove_center_of_mass_velocity, which subtracts the
latter from every velocity so the system's net momentum vanishes. Single bodies and a
zero total mass are handled by returning the input unchanged (or the plain mean, for
the center of mass), so massless test particles never cause a division by zero.
"""

def center_of_mass(masses: np.ndarray, positions: np.ndarray) -> np.ndarray:
	if positions.size == 0:
		return np.zeros(3, dtype=float)
	total_mass = float(np.sum(masses))
	if total_mass == 0:
		return np.mean(positions, axis=0)
	return np.sum(masses[:, None] * positions, axis=0) / total_mass


def center_of_mass_velocity(masses: np.ndarray, velocities: np.ndarray) -> np.ndarray:
	total_mass = float(np.sum(masses))
	if total_mass == 0 or velocities.size == 0:
		return np.zeros(3, dtype=float)
	return np.sum(masses[:, None] * velocities, axis=0) / total_mass


def remove_center_of_mass_velocity(
	masses: np.ndarray, velocities: np.ndarray
) -> np.ndarray:
	if len(masses) <= 1:
		return velocities.copy()
	return velocities - center_of_mass_velocity(masses, velocities)
