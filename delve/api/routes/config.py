"""GET /api/v1/config — expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from delve.api.dependencies import get_engine_manager
from delve.api.engine_manager import EngineManager
from delve.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        world_seed=cfg.world_seed,
        grid_cols=cfg.grid_cols,
        grid_rows=cfg.grid_rows,
        max_rooms=cfg.max_rooms,
        vision_range=cfg.vision_range,
        tick_seconds=cfg.tick_seconds,
        monster_interval_seconds=cfg.monster_interval_seconds,
        max_ticks=cfg.max_ticks,
        tick_rate=manager.tick_rate,
    )
