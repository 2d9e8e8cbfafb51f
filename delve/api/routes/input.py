"""POST /api/v1/input — queue one player movement intent."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from delve.api.dependencies import get_engine_manager
from delve.api.engine_manager import EngineManager
from delve.api.schemas import InputRequest, InputResponse
from delve.engine.action_queue import InputQueueFull

router = APIRouter()


@router.post("/input", response_model=InputResponse)
def submit_input(
    body: InputRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> InputResponse:
    try:
        accepted = manager.submit_input(body.dx, body.dy)
    except InputQueueFull as exc:
        raise HTTPException(status_code=429, detail=f"Input backlog full: {exc}") from exc
    if not accepted:
        raise HTTPException(status_code=409, detail="Player has been defeated; reset to play again.")
    snapshot = manager.get_snapshot()
    return InputResponse(accepted=True, tick=snapshot.tick if snapshot else 0)
