from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from app.raylab.geometry import FORWARD_EPS, PARALLEL_EPS, Vec2, ray_segment_intersection, unit
from app.raylab.rays import Ray
from app.raylab.transform import Pose2


MIRROR_ATTENUATION = 0.9
LENS_ATTENUATION = 0.95


@dataclass(frozen=True)
class Hit:
    t: float
    point: Vec2
    element: "Surface"


@dataclass(frozen=True)
class Surface:
    """Flat finite segment centered on the pose, perpendicular to its normal."""

    id: str
    pose: Pose2
    width: float

    def segment(self) -> Tuple[Vec2, Vec2]:
        return self.pose.endpoints(self.width)

    def intersect(
        self,
        ray: Ray,
        parallel_eps: float = PARALLEL_EPS,
        forward_eps: float = FORWARD_EPS,
    ) -> Optional[Hit]:
        q1, q2 = self.segment()
        res = ray_segment_intersection(ray.start, ray.direction, q1, q2, parallel_eps, forward_eps)
        if res is None:
            return None
        t, p = res
        return Hit(t=t, point=p, element=self)


@dataclass(frozen=True)
class Mirror(Surface):
    def reflect(self, d: Vec2) -> Vec2:
        n = self.pose.normal()
        return (d - n * (2.0 * d.dot(n))).normalized()


@dataclass(frozen=True)
class Blocker(Surface):
    pass


@dataclass(frozen=True)
class ThinLens(Surface):
    f: float  # signed: > 0 converging, < 0 diverging

    def __post_init__(self):
        if self.f == 0:
            raise ValueError(f"lens {self.id!r} has zero focal length")

    def transmit(self, p_world: Vec2, rd_world: Vec2) -> Vec2:
        # Paraxial thin lens: tan(out) = tan(in) - y/f, angles measured from the
        # forward normal. The outgoing ray always leaves on the normal's side.
        p_l = self.pose.world_to_local(p_world)
        d_l = self.pose.dir_world_to_local(rd_world)
        theta_in = math.atan2(d_l.y, d_l.x)
        theta_out = math.atan(math.tan(theta_in) - p_l.y / self.f)
        return self.pose.dir_local_to_world(unit(theta_out)).normalized()
