"""Scene editing helpers for the hosting application.

Every function returns a new `Scene`; the scene passed in is never modified,
so a snapshot handed to the tracer stays valid while the host keeps editing.
"""

from __future__ import annotations

import uuid
from typing import Optional

from app.raylab.schema import ElementType, OpticalElement, Scene

DEFAULT_ELEMENT_COLOR = "#22d3ee"


def default_scene() -> Scene:
    """Starting layout of the lab: a three-ray beam aimed at a convex lens."""
    return Scene(
        elements=[
            OpticalElement(
                id="source-1",
                type=ElementType.BEAM_SOURCE,
                x=150,
                y=300,
                rotation=0,
                width=60,
                ray_count=3,
                spread=0,
                color=DEFAULT_ELEMENT_COLOR,
            ),
            OpticalElement(
                id="lens-1",
                type=ElementType.CONVEX_LENS,
                x=400,
                y=300,
                rotation=90,
                width=120,
                focal_length=150,
            ),
        ]
    )


def new_element(
    element_type: ElementType,
    x: float,
    y: float,
    element_id: Optional[str] = None,
) -> OpticalElement:
    """Element dropped at (x, y) with the lab's creation defaults."""
    kind = ElementType(element_type)
    return OpticalElement(
        id=element_id or uuid.uuid4().hex[:9],
        type=kind,
        x=x,
        y=y,
        rotation=90 if kind == ElementType.MIRROR else 0,
        width=100,
        focal_length=150,
        ray_count=3 if kind == ElementType.BEAM_SOURCE else 1,
        spread=20 if kind == ElementType.BEAM_SOURCE else 45,
        color=DEFAULT_ELEMENT_COLOR,
    )


def _index(scene: Scene, element_id: str) -> int:
    for i, el in enumerate(scene.elements):
        if el.id == element_id:
            return i
    raise KeyError(element_id)


def add_element(scene: Scene, element: OpticalElement) -> Scene:
    if any(el.id == element.id for el in scene.elements):
        raise ValueError(f"duplicate element id {element.id!r}")
    return scene.model_copy(update={"elements": [*scene.elements, element]})


def update_element(scene: Scene, element_id: str, **changes) -> Scene:
    """Replace one element with a copy carrying `changes`, re-validated.

    Changes may use attribute names (``focal_length``) or wire names
    (``focalLength``).
    """
    i = _index(scene, element_id)
    if changes.get("id", element_id) != element_id:
        raise ValueError("element ids are immutable")

    aliases = {name: info.alias or name for name, info in OpticalElement.model_fields.items()}
    known = set(aliases.values())
    data = scene.elements[i].model_dump(by_alias=True)
    for key, value in changes.items():
        alias = aliases.get(key, key)
        if alias not in known:
            raise ValueError(f"unknown element field {key!r}")
        data[alias] = value
    updated = OpticalElement.model_validate(data)

    elements = list(scene.elements)
    elements[i] = updated
    return scene.model_copy(update={"elements": elements})


def remove_element(scene: Scene, element_id: str) -> Scene:
    i = _index(scene, element_id)
    return scene.model_copy(update={"elements": scene.elements[:i] + scene.elements[i + 1 :]})
