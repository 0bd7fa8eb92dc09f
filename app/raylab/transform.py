from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from app.raylab.geometry import Vec2, deg_to_rad, unit


@dataclass(frozen=True)
class Pose2:
    """Placement of an element: center plus the angle of its forward normal.

    In local coordinates the forward normal is +x and the element's surface
    runs along the local y axis.
    """

    pos: Vec2
    theta: float  # radians

    @classmethod
    def from_degrees(cls, x: float, y: float, rotation: float) -> "Pose2":
        return cls(pos=Vec2(float(x), float(y)), theta=deg_to_rad(float(rotation)))

    def normal(self) -> Vec2:
        return unit(self.theta)

    def tangent(self) -> Vec2:
        return self.normal().perp()

    def endpoints(self, width: float) -> Tuple[Vec2, Vec2]:
        half = self.tangent() * (width / 2)
        return self.pos + half, self.pos - half

    def world_to_local(self, p: Vec2) -> Vec2:
        """(distance along the normal, height along the surface) of `p`."""
        return self.dir_world_to_local(p - self.pos)

    def dir_world_to_local(self, d: Vec2) -> Vec2:
        return Vec2(d.dot(self.normal()), d.dot(self.tangent()))

    def dir_local_to_world(self, d: Vec2) -> Vec2:
        return self.normal() * d.x + self.tangent() * d.y
