"""GET /api/v1/map — static dungeon layout (fetch once per level)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from delve.api.dependencies import get_engine_manager
from delve.api.engine_manager import EngineManager
from delve.api.schemas import MapResponse
from delve.utils.encoding import run_length_encode

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Simulation not initialized yet.")

    return MapResponse(
        cols=snapshot.cols,
        rows=snapshot.rows,
        grid=run_length_encode(snapshot.tiles),
        rooms=[[r.x1, r.y1, r.x2, r.y2] for r in snapshot.rooms],
    )
