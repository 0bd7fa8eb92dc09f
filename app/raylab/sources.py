from __future__ import annotations

from dataclasses import dataclass
from typing import List

from app.raylab.geometry import deg_to_rad, unit
from app.raylab.rays import Ray
from app.raylab.transform import Pose2


@dataclass(frozen=True)
class RaySource:
    """Single ray along the forward normal."""

    id: str
    pose: Pose2
    color: str

    def emit(self) -> List[Ray]:
        return [Ray(start=self.pose.pos, direction=self.pose.normal(), color=self.color)]


@dataclass(frozen=True)
class BeamSource:
    """Parallel rays spread evenly across `width`, centered on the pose."""

    id: str
    pose: Pose2
    color: str
    width: float
    ray_count: int

    def emit(self) -> List[Ray]:
        d = self.pose.normal()
        u = d.perp()
        n = self.ray_count
        spacing = self.width / (n - 1) if n > 1 else 0.0
        start = -self.width / 2 if n > 1 else 0.0
        rays = []
        for i in range(n):
            off = start + i * spacing
            rays.append(Ray(start=self.pose.pos + u * off, direction=d, color=self.color))
        return rays


@dataclass(frozen=True)
class PointSource:
    """Fan of `ray_count` rays covering `spread` degrees around the pose direction."""

    id: str
    pose: Pose2
    color: str
    spread: float  # degrees
    ray_count: int

    def emit(self) -> List[Ray]:
        n = self.ray_count
        spread = deg_to_rad(self.spread)
        if n > 1:
            first = self.pose.theta - spread / 2
            step = spread / (n - 1)
        else:
            first = self.pose.theta
            step = 0.0
        return [Ray(start=self.pose.pos, direction=unit(first + i * step), color=self.color) for i in range(n)]
