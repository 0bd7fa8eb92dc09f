from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.raylab.geometry import Vec2


DEFAULT_RAY_COLOR = "#fff"


@dataclass(frozen=True)
class Ray:
    start: Vec2
    direction: Vec2  # unit length, or zero for a degenerate ray
    intensity: float = 1.0
    color: str = DEFAULT_RAY_COLOR

    def advance(self, start: Vec2, direction: Vec2, attenuation: float) -> "Ray":
        """Continue this ray from `start`, keeping its color."""
        return Ray(
            start=start,
            direction=direction.normalized(),
            intensity=self.intensity * attenuation,
            color=self.color,
        )


@dataclass(frozen=True)
class RaySegment:
    """One drawable piece of a ray path."""

    start: Vec2
    end: Vec2
    color: str
    intensity: float = 1.0
    element_id: Optional[str] = None  # surface the segment ends on; None if the ray escaped

    @property
    def escaped(self) -> bool:
        return self.element_id is None

    def length(self) -> float:
        return (self.end - self.start).norm()
