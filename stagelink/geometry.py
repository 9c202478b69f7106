"""Planar vector helpers and circular-sector predicates.

A :class:`Sector` is a radius-bounded wedge whose angular span runs clockwise
from its ``start`` boundary vector to its ``end`` boundary vector.  Spans are
limited to at most half a turn: containment is evaluated as the intersection
of two half-planes and a disc.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

_EPS = 1e-12


class InvalidGeometryError(ValueError):
    """Raised when coordinates, angles or sector parameters are not usable."""


def _finite(value: object, what: str) -> float:
    number = float(value)  # type: ignore[arg-type]
    if not math.isfinite(number):
        raise InvalidGeometryError(f"{what} must be finite (got {value!r})")
    return number


@dataclass(frozen=True)
class Vector:
    """2D displacement."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _finite(self.x, "vector x"))
        object.__setattr__(self, "y", _finite(self.y, "vector y"))

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector":
        return cls(length * math.cos(angle), length * math.sin(angle))

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        return self.x * other.y - self.y * other.x

    def normal(self) -> "Vector":
        """Rotate by +90 degrees (counterclockwise)."""

        return Vector(-self.y, self.x)

    def inverse_normal(self) -> "Vector":
        """Rotate by -90 degrees (clockwise)."""

        return Vector(self.y, -self.x)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def direction(self) -> "Vector":
        """Unit vector along ``self``; the zero vector stays zero."""

        norm = self.magnitude()
        if norm <= _EPS:
            return Vector(0.0, 0.0)
        return Vector(self.x / norm, self.y / norm)

    def scaled(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _finite(self.x, "position x"))
        object.__setattr__(self, "y", _finite(self.y, "position y"))

    def translated(self, offset: Vector) -> "Position":
        return Position(self.x + offset.x, self.y + offset.y)

    def distance_to(self, other: "Position") -> float:
        return displacement(self, other).magnitude()


@dataclass(frozen=True)
class Sector:
    """Wedge of ``radius`` around ``center`` spanning clockwise from ``start`` to ``end``."""

    center: Position
    radius: float
    start: Vector
    end: Vector

    def __post_init__(self) -> None:
        radius = _finite(self.radius, "sector radius")
        if radius < 0.0:
            raise InvalidGeometryError(f"sector radius must be non-negative (got {radius!r})")
        object.__setattr__(self, "radius", radius)


def displacement(a: Position, b: Position) -> Vector:
    """Vector pointing from ``a`` to ``b``."""

    return Vector(b.x - a.x, b.y - a.y)


def clockwise_of(v: Vector, ref: Vector) -> bool:
    """Return ``True`` when turning from ``ref`` to ``v`` is a clockwise turn.

    Collinear vectors (including zero vectors) count as clockwise, so points
    lying exactly on a sector boundary are inside it.
    """

    return v.inverse_normal().dot(ref) <= 0.0


def _within_span(sector: Sector, offset: Vector) -> bool:
    return clockwise_of(offset, sector.start) and clockwise_of(sector.end, offset)


def sector_contains(sector: Sector, point: Position) -> bool:
    """Open-radius, closed-boundary containment test.

    The center itself is contained whenever the radius is positive.
    """

    offset = displacement(sector.center, point)
    return _within_span(sector, offset) and offset.magnitude() < sector.radius


def _covers(sector: Sector, point: Position) -> bool:
    offset = displacement(sector.center, point)
    return _within_span(sector, offset) and offset.magnitude() <= sector.radius


Segment = Tuple[Position, Position]


def _radial_edges(sector: Sector) -> List[Segment]:
    return [
        (sector.center, sector.center.translated(boundary.direction().scaled(sector.radius)))
        for boundary in (sector.start, sector.end)
    ]


def _orientation(a: Position, b: Position, c: Position) -> float:
    return displacement(a, b).cross(displacement(a, c))


def _on_segment(a: Position, b: Position, p: Position) -> bool:
    return (
        min(a.x, b.x) - _EPS <= p.x <= max(a.x, b.x) + _EPS
        and min(a.y, b.y) - _EPS <= p.y <= max(a.y, b.y) + _EPS
    )


def _segments_cross(first: Segment, second: Segment) -> bool:
    p1, p2 = first
    q1, q2 = second
    d1 = _orientation(q1, q2, p1)
    d2 = _orientation(q1, q2, p2)
    d3 = _orientation(p1, p2, q1)
    d4 = _orientation(p1, p2, q2)
    if ((d1 > _EPS and d2 < -_EPS) or (d1 < -_EPS and d2 > _EPS)) and (
        (d3 > _EPS and d4 < -_EPS) or (d3 < -_EPS and d4 > _EPS)
    ):
        return True
    if abs(d1) <= _EPS and _on_segment(q1, q2, p1):
        return True
    if abs(d2) <= _EPS and _on_segment(q1, q2, p2):
        return True
    if abs(d3) <= _EPS and _on_segment(p1, p2, q1):
        return True
    if abs(d4) <= _EPS and _on_segment(p1, p2, q2):
        return True
    return False


def _segment_meets_arc(segment: Segment, sector: Sector) -> bool:
    p, q = segment
    d = displacement(p, q)
    f = displacement(sector.center, p)
    a = d.dot(d)
    if a <= _EPS:
        return False
    b = 2.0 * f.dot(d)
    c = f.dot(f) - sector.radius * sector.radius
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return False
    root = math.sqrt(disc)
    for t in ((-b - root) / (2.0 * a), (-b + root) / (2.0 * a)):
        if -_EPS <= t <= 1.0 + _EPS:
            hit = p.translated(d.scaled(t))
            if _within_span(sector, displacement(sector.center, hit)):
                return True
    return False


def _circle_crossings(a: Sector, b: Sector) -> Optional[List[Position]]:
    between = displacement(a.center, b.center)
    dist = between.magnitude()
    if dist <= _EPS:
        return None
    if dist > a.radius + b.radius + _EPS or dist < abs(a.radius - b.radius) - _EPS:
        return None
    along = (a.radius * a.radius - b.radius * b.radius + dist * dist) / (2.0 * dist)
    height = math.sqrt(max(a.radius * a.radius - along * along, 0.0))
    unit = between.direction()
    base = a.center.translated(unit.scaled(along))
    lift = unit.normal().scaled(height)
    return [base.translated(lift), base.translated(-lift)]


def _arcs_meet(a: Sector, b: Sector) -> bool:
    crossings = _circle_crossings(a, b)
    if not crossings:
        return False
    return any(
        _within_span(a, displacement(a.center, point)) and _within_span(b, displacement(b.center, point))
        for point in crossings
    )


def sectors_intersect(a: Sector, b: Sector) -> bool:
    """Return ``True`` when the closed sectors ``a`` and ``b`` share a point.

    Both sectors are convex, so they meet exactly when one holds a point of the
    other's boundary: a center, a radial edge or an arc.  Zero-radius sectors
    reduce to their centers; concentric sectors always share the center.
    """

    if _covers(a, b.center) or _covers(b, a.center):
        return True
    if a.radius <= 0.0 or b.radius <= 0.0:
        return False
    edges_a = _radial_edges(a)
    edges_b = _radial_edges(b)
    if any(_segments_cross(ea, eb) for ea in edges_a for eb in edges_b):
        return True
    if any(_segment_meets_arc(edge, b) for edge in edges_a):
        return True
    if any(_segment_meets_arc(edge, a) for edge in edges_b):
        return True
    return _arcs_meet(a, b)


__all__ = [
    "InvalidGeometryError",
    "Vector",
    "Position",
    "Sector",
    "displacement",
    "clockwise_of",
    "sector_contains",
    "sectors_intersect",
]
