"""GET /api/v1/state — actors, fog-of-war layers and the message feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from delve.api.dependencies import get_engine_manager
from delve.api.engine_manager import EngineManager
from delve.api.schemas import ActorSchema, EventSchema, WorldStateResponse
from delve.core.models import Entity
from delve.utils.encoding import run_length_encode

router = APIRouter()


def _serialize_actor(e: Entity) -> ActorSchema:
    stats = e.stats
    return ActorSchema(
        id=e.id,
        kind=e.kind,
        name=e.name,
        x=e.pos.x,
        y=e.pos.y,
        hp=stats.hp if stats else None,
        max_hp=stats.max_hp if stats else None,
        defense=stats.defense if stats else None,
        power=stats.power if stats else None,
        is_player=e.is_player,
        shown=e.shown,
        state=e.ai_state.name,
        vision_range=e.viewshed.range if e.viewshed else None,
    )


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    all_actors: bool = Query(False, description="Include monsters outside the player's view"),
    manager: EngineManager = Depends(get_engine_manager),
) -> WorldStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    player = snapshot.player
    actors = [
        _serialize_actor(e)
        for _, e in sorted(snapshot.entities.items())
        if not e.is_player and (all_actors or e.shown)
    ]

    events = [
        EventSchema(tick=ev.tick, category=ev.category, message=ev.message, entity_ids=list(ev.entity_ids))
        for ev in manager.event_log.since_tick(since_tick)
    ]

    return WorldStateResponse(
        tick=snapshot.tick,
        status=snapshot.status.name,
        player=_serialize_actor(player) if player is not None else None,
        actors=actors,
        revealed=run_length_encode(snapshot.revealed),
        visible=run_length_encode(snapshot.visible),
        events=events,
    )
