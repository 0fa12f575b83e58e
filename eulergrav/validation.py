"""
This module provides validation utilities for body states.

The StateValidator class offers static methods that check a single body or a whole
collection for finite mass, position and velocity components, and a reporter that logs
the offending values. Zero and negative masses are accepted: the kernel places no
restriction on them, and a negative mass simply inverts the pull it exerts. Only
non-finite values, which can never be recovered by further stepping, count as invalid.
"""

from __future__ import annotations
import logging
import math
from typing import Iterable, Sequence, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
	from .body import Body


logger = logging.getLogger(__name__)



class StateValidator:
	@staticmethod
	def body_is_valid(body: "Body") -> bool:
		if not math.isfinite(body.mass):
			return False
		if body.position.shape != (3,) or body.velocity.shape != (3,):
			return False
		if not np.all(np.isfinite(body.position)):
			return False
		if not np.all(np.isfinite(body.velocity)):
			return False
		return True

	@staticmethod
	def state_is_valid(bodies: Iterable["Body"]) -> bool:
		for b in bodies:
			if not StateValidator.body_is_valid(b):
				return False
		return True

	@staticmethod
	def invalid_indices(bodies: Sequence["Body"]) -> list[int]:
		return [i for i, b in enumerate(bodies) if not StateValidator.body_is_valid(b)]

	@staticmethod
	def report_invalid_state(label: str, bodies: Sequence["Body"]) -> None:
		bad = StateValidator.invalid_indices(bodies)
		if not bad:
			return
		logger.warning("[invalid] %s: %d of %d bodies", label, len(bad), len(bodies))
		for i in bad:
			b = bodies[i]
			logger.warning(
				"  body[%d] mass=%r position=%s velocity=%s",
				i, b.mass, b.position.tolist(), b.velocity.tolist(),
			)
