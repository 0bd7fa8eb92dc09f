from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from app.raylab.analysis import estimate_focus, summarize
from app.raylab.elements import LENS_ATTENUATION, MIRROR_ATTENUATION, Blocker, Hit, Mirror, Surface, ThinLens
from app.raylab.rays import DEFAULT_RAY_COLOR, Ray, RaySegment
from app.raylab.schema import ElementType, OpticalElement, Scene, SegmentModel, SettingsModel
from app.raylab.sources import BeamSource, PointSource, RaySource
from app.raylab.transform import Pose2


logger = logging.getLogger(__name__)

DEFAULT_FOCAL_LENGTH = 100.0
DEFAULT_BEAM_WIDTH = 40.0

Source = Union[RaySource, BeamSource, PointSource]


def _source(el: OpticalElement) -> Source:
    pose = Pose2.from_degrees(el.x, el.y, el.rotation)
    color = el.color or DEFAULT_RAY_COLOR
    count = int(el.ray_count or 1)
    if el.type == ElementType.BEAM_SOURCE:
        width = float(el.width or DEFAULT_BEAM_WIDTH)
        return BeamSource(id=el.id, pose=pose, color=color, width=width, ray_count=count)
    if el.type == ElementType.POINT_SOURCE:
        return PointSource(id=el.id, pose=pose, color=color, spread=float(el.spread or 0.0), ray_count=count)
    return RaySource(id=el.id, pose=pose, color=color)


def _surface(el: OpticalElement) -> Surface:
    pose = Pose2.from_degrees(el.x, el.y, el.rotation)
    width = float(el.width)
    if el.type == ElementType.MIRROR:
        return Mirror(id=el.id, pose=pose, width=width)
    if el.type == ElementType.BLOCKER:
        return Blocker(id=el.id, pose=pose, width=width)
    if el.type in (ElementType.CONVEX_LENS, ElementType.CONCAVE_LENS):
        f = float(el.focal_length if el.focal_length is not None else DEFAULT_FOCAL_LENGTH)
        if el.type == ElementType.CONCAVE_LENS:
            f = -f
        return ThinLens(id=el.id, pose=pose, width=width, f=f)
    raise TypeError(f"element {el.id!r} of type {el.type!r} is not an optical surface")


def build_elements(elements: Iterable[OpticalElement]) -> Tuple[List[Source], List[Surface]]:
    """Split a scene snapshot into emitters and surfaces, keeping scene order."""
    sources: List[Source] = []
    surfaces: List[Surface] = []
    for el in elements:
        if el.type.is_source:
            sources.append(_source(el))
        else:
            surfaces.append(_surface(el))
    return sources, surfaces


def closest_hit(
    ray: Ray,
    surfaces: Sequence[Surface],
    parallel_eps: float,
    forward_eps: float,
) -> Optional[Hit]:
    best: Optional[Hit] = None
    for s in surfaces:
        h = s.intersect(ray, parallel_eps, forward_eps)
        if h is None:
            continue
        if best is None or h.t < best.t:
            best = h
    return best


def resolve_interaction(ray: Ray, hit: Hit) -> Optional[Ray]:
    """Outgoing ray after `ray` strikes `hit.element`, or None if absorbed."""
    elem = hit.element
    if isinstance(elem, Mirror):
        return ray.advance(hit.point, elem.reflect(ray.direction), MIRROR_ATTENUATION)
    if isinstance(elem, ThinLens):
        return ray.advance(hit.point, elem.transmit(hit.point, ray.direction), LENS_ATTENUATION)
    if isinstance(elem, Blocker):
        return None
    raise TypeError(f"cannot resolve interaction with {type(elem).__name__}")


def trace_rays(
    elements: Sequence[OpticalElement],
    settings: Optional[SettingsModel] = None,
) -> List[RaySegment]:
    """Propagate every emitted ray through the scene and return the drawable segments."""
    settings = settings or SettingsModel()
    max_bounces = int(settings.max_bounces)
    escape = float(settings.escape_distance)
    parallel_eps = float(settings.parallel_epsilon)
    forward_eps = float(settings.forward_epsilon)

    sources, surfaces = build_elements(elements)

    queue: Deque[Tuple[Ray, int]] = deque()
    for src in sources:
        for ray in src.emit():
            queue.append((ray, 0))
    emitted = len(queue)

    segments: List[RaySegment] = []
    dropped = 0
    while queue:
        ray, bounce = queue.popleft()
        if bounce >= max_bounces:
            dropped += 1
            continue

        hit = closest_hit(ray, surfaces, parallel_eps, forward_eps)
        if hit is None:
            end = ray.start + ray.direction * escape
            segments.append(RaySegment(start=ray.start, end=end, color=ray.color, intensity=ray.intensity))
            continue

        segments.append(
            RaySegment(
                start=ray.start,
                end=hit.point,
                color=ray.color,
                intensity=ray.intensity,
                element_id=hit.element.id,
            )
        )
        nxt = resolve_interaction(ray, hit)
        if nxt is not None:
            queue.append((nxt, bounce + 1))

    logger.debug(
        "traced %d rays against %d surfaces: %d segments, %d dropped at bounce cap",
        emitted,
        len(surfaces),
        len(segments),
        dropped,
    )
    return segments


def simulate_scene(scene: Scene) -> Dict:
    segments = trace_rays(scene.elements, scene.settings)

    focus = estimate_focus(segments)
    analysis = summarize(segments)
    if focus is None:
        analysis["focus"] = None
        analysis["spot_rms"] = None
    else:
        fp, rms = focus
        analysis["focus"] = [fp.x, fp.y]
        analysis["spot_rms"] = rms

    return {
        "segments": [
            SegmentModel(
                start=s.start.as_list(),
                end=s.end.as_list(),
                color=s.color,
                intensity=s.intensity,
                element_id=s.element_id,
            ).model_dump(by_alias=True)
            for s in segments
        ],
        "analysis": analysis,
    }
