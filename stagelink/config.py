"""Configuration of the speaking/hearing field geometry."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass

from .geometry import InvalidGeometryError


@dataclass
class AreaConfig:
    """Shape of the sectors derived from a performer's position and heading.

    Each performer gets a left and a right sector per role.  A sector of
    ``spread`` radians sits on one side of the heading ray, so the two sides
    together cover ``2 * spread`` around the heading.  Hearing sectors are
    centered ``ear_offset`` away from the performer, perpendicular to the
    heading.
    """

    speaking_radius: float = 10.0
    speaking_spread: float = math.pi / 3
    hearing_radius: float = 10.0
    hearing_spread: float = math.pi / 2
    ear_offset: float = 0.0

    def __post_init__(self) -> None:
        for name in ("speaking_radius", "hearing_radius", "ear_offset"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value < 0.0:
                raise InvalidGeometryError(f"{name} must be a finite non-negative number (got {value!r})")
            setattr(self, name, value)
        for name in ("speaking_spread", "hearing_spread"):
            value = float(getattr(self, name))
            if not (0.0 < value <= math.pi):
                raise InvalidGeometryError(f"{name} must lie in (0, pi] (got {value!r})")
            setattr(self, name, value)


_AREA_CONFIG = AreaConfig()


def get_area_config() -> AreaConfig:
    return copy.deepcopy(_AREA_CONFIG)


def set_area_config(config: AreaConfig) -> None:
    global _AREA_CONFIG
    _AREA_CONFIG = copy.deepcopy(config)


__all__ = ["AreaConfig", "get_area_config", "set_area_config"]
