"""
Ray class for representing rays in 3D space.

Ray(t) = origin + t * direction
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Vec3, Point3


@dataclass(frozen=True)
class Ray:
    """A half-line with an origin and a (not necessarily unit) direction."""

    origin: Point3
    direction: Vec3

    def at(self, t: float) -> Point3:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
