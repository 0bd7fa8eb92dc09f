from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, Tuple


PARALLEL_EPS = 1e-5
FORWARD_EPS = 1e-3


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __add__(self, o: "Vec2") -> "Vec2":
        return Vec2(self.x + o.x, self.y + o.y)

    def __sub__(self, o: "Vec2") -> "Vec2":
        return Vec2(self.x - o.x, self.y - o.y)

    def __mul__(self, s: float) -> "Vec2":
        return Vec2(self.x * s, self.y * s)

    __rmul__ = __mul__

    def dot(self, o: "Vec2") -> float:
        return self.x * o.x + self.y * o.y

    def cross(self, o: "Vec2") -> float:
        """Z component of the 3D cross product."""
        return self.x * o.y - self.y * o.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vec2":
        n = self.norm()
        if n == 0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / n, self.y / n)

    def perp(self) -> "Vec2":
        return Vec2(-self.y, self.x)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def as_list(self) -> list:
        return [self.x, self.y]


def rotate(v: Vec2, theta: float) -> Vec2:
    c = math.cos(theta)
    s = math.sin(theta)
    return Vec2(c * v.x - s * v.y, s * v.x + c * v.y)


def unit(theta: float) -> Vec2:
    return Vec2(math.cos(theta), math.sin(theta))


def deg_to_rad(deg: float) -> float:
    return deg * math.pi / 180.0


def rad_to_deg(rad: float) -> float:
    return rad * 180.0 / math.pi


def distance(a: Vec2, b: Vec2) -> float:
    return (a - b).norm()


def ray_segment_intersection(
    p: Vec2,
    r: Vec2,
    q1: Vec2,
    q2: Vec2,
    parallel_eps: float = PARALLEL_EPS,
    forward_eps: float = FORWARD_EPS,
) -> Optional[Tuple[float, Vec2]]:
    """Intersect the ray ``p + t r`` with the segment ``q1 + u (q2 - q1)``.

    `r` need not be normalized; `t` is expressed in units of `r`.
    Returns ``(t, point)`` when ``t > forward_eps`` and ``0 <= u <= 1``,
    otherwise None. Rays (nearly) parallel to the segment never hit it.
    """

    s = q2 - q1
    rxs = r.cross(s)
    if abs(rxs) < parallel_eps:
        return None

    qp = q1 - p
    t = qp.cross(s) / rxs
    u = qp.cross(r) / rxs

    if t > forward_eps and 0.0 <= u <= 1.0:
        return t, Vec2(p.x + t * r.x, p.y + t * r.y)
    return None
