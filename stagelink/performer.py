"""Performers and the fields they speak into and hear from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .config import AreaConfig, get_area_config
from .geometry import Position, Sector, Vector, _finite
from .types import PerformerId


@dataclass(frozen=True)
class Heading:
    """Facing direction in radians, counterclockwise from the +x axis."""

    angle: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "angle", _finite(self.angle, "heading"))

    def direction(self) -> Vector:
        return Vector.from_angle(self.angle)


@dataclass(frozen=True)
class Performer:
    id: PerformerId
    position: Position
    heading: Heading

    @classmethod
    def at(cls, performer_id: PerformerId, x: float, y: float, heading: float) -> "Performer":
        return cls(performer_id, Position(x, y), Heading(heading))


def _side_sectors(
    left_center: Position,
    right_center: Position,
    angle: float,
    radius: float,
    spread: float,
) -> Tuple[Sector, Sector]:
    ahead = Vector.from_angle(angle)
    left = Sector(left_center, radius, start=Vector.from_angle(angle + spread), end=ahead)
    right = Sector(right_center, radius, start=ahead, end=Vector.from_angle(angle - spread))
    return left, right


def speaking_areas(performer: Performer, config: Optional[AreaConfig] = None) -> Tuple[Sector, Sector]:
    """Return the ``(left, right)`` speaking sectors of ``performer``."""

    config = config or get_area_config()
    return _side_sectors(
        performer.position,
        performer.position,
        performer.heading.angle,
        config.speaking_radius,
        config.speaking_spread,
    )


def hearing_areas(performer: Performer, config: Optional[AreaConfig] = None) -> Tuple[Sector, Sector]:
    """Return the ``(left, right)`` hearing sectors of ``performer``.

    The left ear sits on the counterclockwise side of the heading.
    """

    config = config or get_area_config()
    offset = performer.heading.direction().normal().scaled(config.ear_offset)
    return _side_sectors(
        performer.position.translated(offset),
        performer.position.translated(-offset),
        performer.heading.angle,
        config.hearing_radius,
        config.hearing_spread,
    )


__all__ = ["Heading", "Performer", "speaking_areas", "hearing_areas"]
