"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Actors ---

class ActorSchema(BaseModel):
    id: int
    kind: str
    name: str
    x: int
    y: int
    hp: int | None = None
    max_hp: int | None = None
    defense: int | None = None
    power: int | None = None
    is_player: bool = False
    shown: bool = False
    state: str = "IDLE"
    vision_range: int | None = None


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)


# --- Responses ---

class MapResponse(BaseModel):
    cols: int
    rows: int
    grid: list[int] = Field(description="Run-length encoded tile kinds: [value, count, value, count, ...]")
    rooms: list[list[int]] = Field(default_factory=list, description="Room rectangles as [x1, y1, x2, y2]")


class WorldStateResponse(BaseModel):
    tick: int
    status: str
    player: ActorSchema | None = None
    actors: list[ActorSchema] = Field(default_factory=list)
    revealed: list[int] = Field(default_factory=list, description="Run-length encoded revealed flags")
    visible: list[int] = Field(default_factory=list, description="Run-length encoded visible flags")
    events: list[EventSchema] = Field(default_factory=list)


class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int


class InputRequest(BaseModel):
    dx: int = Field(..., ge=-1, le=1)
    dy: int = Field(..., ge=-1, le=1)


class InputResponse(BaseModel):
    accepted: bool
    tick: int


class SimulationConfigResponse(BaseModel):
    world_seed: int
    grid_cols: int
    grid_rows: int
    max_rooms: int
    vision_range: int
    tick_seconds: float
    monster_interval_seconds: float
    max_ticks: int
    tick_rate: float
