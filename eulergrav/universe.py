from __future__ import annotations
import os
from dataclasses import dataclass, replace as _replace
from typing import Final

"""
This configuration module replaces process-wide mutable constants with an explicit
Universe value. The Universe dataclass carries the gravitational constant, the default
time step and the numeric switches read by the Simulation; each Simulation owns its own
copy so several simulations can run side by side in one process with different
settings. Module-level defaults are Final and may be overridden once at import time
through the EULERGRAV_GRAVITY_CONSTANT and EULERGRAV_TIME_STEP environment variables.
"""




def _parse_env_float(name: str, default: float) -> float:
	env_val = os.getenv(name, "")
	if env_val.strip() != "":
		try:
			return float(env_val)
		except ValueError:
			raise ValueError(f"{name} must be a float, got {env_val!r}") from None
	return default


# SI value; some older releases shipped the scaled SCALED_GRAVITY_CONSTANT instead
GRAVITY_CONSTANT: Final[float] = _parse_env_float("EULERGRAV_GRAVITY_CONSTANT", 6.67259e-11)
SCALED_GRAVITY_CONSTANT: Final[float] = 0.667259
TIME_STEP: Final[float] = _parse_env_float("EULERGRAV_TIME_STEP", 0.01)


@dataclass
class Universe:
	gravity_constant: float = GRAVITY_CONSTANT
	time_step: float = TIME_STEP
	fast_float32: bool = False
	enable_runtime_guard: bool = False

	@classmethod
	def from_env(cls) -> "Universe":
		return cls(
			gravity_constant=_parse_env_float("EULERGRAV_GRAVITY_CONSTANT", GRAVITY_CONSTANT),
			time_step=_parse_env_float("EULERGRAV_TIME_STEP", TIME_STEP),
		)

	def copy(self) -> "Universe":
		return _replace(self)

	def replace(self, **changes) -> "Universe":
		return _replace(self, **changes)


__all__ = ["Universe", "GRAVITY_CONSTANT", "SCALED_GRAVITY_CONSTANT", "TIME_STEP"]
