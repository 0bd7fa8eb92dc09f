from __future__ import annotations

import logging

from fastapi import FastAPI

from app.raylab.scene import default_scene, new_element
from app.raylab.schema import NewElementRequest, OpticalElement, Scene
from app.raylab.simulate import simulate_scene


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Ray Lab 2D")


@app.post("/api/simulate")
def api_simulate(scene: Scene):
    out = simulate_scene(scene)
    logger.info(
        "simulated %d elements -> %d segments",
        len(scene.elements),
        out["analysis"]["segment_count"],
    )
    return out


@app.get("/api/scene/default", response_model=Scene, response_model_by_alias=True)
def api_default_scene():
    return default_scene()


@app.post("/api/elements", response_model=OpticalElement, response_model_by_alias=True)
def api_new_element(req: NewElementRequest):
    return new_element(req.type, req.x, req.y, element_id=req.id)
