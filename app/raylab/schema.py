from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


MAX_BOUNCES = 50
ESCAPE_DISTANCE = 3000.0


class ElementType(str, Enum):
    RAY_SOURCE = "SOURCE"
    BEAM_SOURCE = "BEAM"  # parallel rays
    POINT_SOURCE = "POINT"  # fan of rays
    CONVEX_LENS = "CONVEX_LENS"
    CONCAVE_LENS = "CONCAVE_LENS"
    MIRROR = "MIRROR"
    BLOCKER = "BLOCKER"

    @property
    def is_source(self) -> bool:
        return self in SOURCE_TYPES


SOURCE_TYPES = frozenset({ElementType.RAY_SOURCE, ElementType.BEAM_SOURCE, ElementType.POINT_SOURCE})


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class OpticalElement(_CamelModel):
    id: str
    type: ElementType
    x: float
    y: float
    rotation: float = Field(default=0.0, description="Angle (degrees) of the forward normal; 0 points along +x.")
    width: float = Field(
        default=100.0,
        ge=0.0,
        description="Surface length for lenses/mirrors/blockers; beam span for beam sources.",
    )
    focal_length: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Focal distance magnitude for lenses; sign follows the lens type.",
    )
    ray_count: Optional[int] = Field(default=None, ge=1, description="Rays emitted by a source.")
    spread: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=360.0,
        description="Fan width (degrees) of a point source, centered on rotation.",
    )
    color: Optional[str] = None


class SettingsModel(_CamelModel):
    max_bounces: int = Field(default=MAX_BOUNCES, ge=0, le=500)
    escape_distance: float = Field(
        default=ESCAPE_DISTANCE,
        gt=0.0,
        description="Length of the segment drawn for a ray that hits nothing.",
    )
    forward_epsilon: float = Field(default=1e-3, gt=0.0)
    parallel_epsilon: float = Field(default=1e-5, gt=0.0)


class Scene(_CamelModel):
    elements: List[OpticalElement] = Field(default_factory=list)
    settings: SettingsModel = Field(default_factory=SettingsModel)


class SegmentModel(_CamelModel):
    start: List[float]
    end: List[float]
    color: str
    intensity: float
    element_id: Optional[str] = None


class NewElementRequest(_CamelModel):
    type: ElementType
    x: float
    y: float
    id: Optional[str] = None
