"""Tests for player movement (bump-to-attack) and the monster brain."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from delve.actions.base import MeleeIntent, MoveIntent
from delve.actions.move import PlayerMoveAction
from delve.ai.brain import MonsterBrain
from delve.config import SimulationConfig
from delve.core.enums import AIState
from delve.core.models import Vector2
from delve.systems.occupancy import index_actors
from delve.systems.visibility import update_viewsheds
from tests.helpers.arena import DungeonArena, corridor_grid, wall


def _prepare(arena: DungeonArena) -> None:
    index_actors(arena.world)
    update_viewsheds(arena.world)


# ---------------------------------------------------------------------------
# Player movement
# ---------------------------------------------------------------------------

class TestPlayerMove:
    def test_move_into_free_cell(self):
        arena = DungeonArena()
        p = arena.add_player((5, 5))
        _prepare(arena)
        assert PlayerMoveAction.apply(MoveIntent(1, 1), arena.world) == []
        assert p.pos == Vector2(6, 6)
        assert p.viewshed.dirty

    def test_no_intent_is_noop(self):
        arena = DungeonArena()
        p = arena.add_player((5, 5))
        _prepare(arena)
        assert PlayerMoveAction.apply(None, arena.world) == []
        assert p.pos == Vector2(5, 5)

    def test_bump_to_attack(self):
        arena = DungeonArena()
        p = arena.add_player((5, 5))
        m = arena.add_monster((6, 5))
        _prepare(arena)
        intents = PlayerMoveAction.apply(MoveIntent(1, 0), arena.world)
        assert intents == [MeleeIntent(attacker_id=p.id, target_id=m.id)]
        assert p.pos == Vector2(5, 5)

    def test_wall_stops_player(self):
        arena = DungeonArena()
        p = arena.add_player((1, 1))
        _prepare(arena)
        assert PlayerMoveAction.apply(MoveIntent(-1, 0), arena.world) == []
        assert p.pos == Vector2(1, 1)

    def test_off_map_target_ignored(self):
        arena = DungeonArena()
        p = arena.add_player((0, 3))
        _prepare(arena)
        assert PlayerMoveAction.apply(MoveIntent(-1, 0), arena.world) == []
        assert p.pos == Vector2(0, 3)

    def test_obstacle_without_stats_is_not_attacked(self):
        arena = DungeonArena()
        p = arena.add_player((5, 5))
        arena.add_obstacle((5, 6))
        _prepare(arena)
        assert PlayerMoveAction.apply(MoveIntent(0, 1), arena.world) == []
        assert p.pos == Vector2(5, 5)

    def test_malformed_delta_dropped(self):
        arena = DungeonArena()
        p = arena.add_player((5, 5))
        _prepare(arena)
        assert not MoveIntent(2, 0).valid
        assert PlayerMoveAction.apply(MoveIntent(2, 0), arena.world) == []
        assert p.pos == Vector2(5, 5)


# ---------------------------------------------------------------------------
# Monster brain
# ---------------------------------------------------------------------------

class TestMonsterBrain:
    def test_adjacent_monster_attacks(self):
        arena = DungeonArena()
        p = arena.add_player((5, 5))
        m = arena.add_monster((6, 6))
        _prepare(arena)
        intents = MonsterBrain(arena.config).think(arena.world)
        assert intents == [MeleeIntent(attacker_id=m.id, target_id=p.id)]
        assert m.ai_state == AIState.ATTACKING
        assert m.pos == Vector2(6, 6)

    def test_visible_player_is_pursued_one_step(self):
        arena = DungeonArena()
        arena.add_player((2, 5))
        m = arena.add_monster((7, 5))
        _prepare(arena)
        assert MonsterBrain(arena.config).think(arena.world) == []
        assert m.ai_state == AIState.PURSUING
        assert m.pos == Vector2(6, 5)
        assert arena.grid.blocked[arena.grid.xy_to_index(6, 5)]
        assert m.viewshed.dirty

    def test_hidden_player_leaves_monster_idle(self):
        arena = DungeonArena(cols=20, rows=12)
        wall(arena.grid, *[(8, y) for y in range(1, 11)])
        arena.add_player((4, 5))
        m = arena.add_monster((12, 5))
        _prepare(arena)
        assert MonsterBrain(arena.config).think(arena.world) == []
        assert m.ai_state == AIState.IDLE
        assert m.pos == Vector2(12, 5)

    def test_shown_monster_losing_sight_redirties_viewshed(self):
        arena = DungeonArena(cols=20, rows=12)
        wall(arena.grid, *[(8, y) for y in range(1, 11)])
        arena.add_player((4, 5))
        m = arena.add_monster((12, 5))
        _prepare(arena)
        m.shown = True
        m.viewshed.dirty = False
        MonsterBrain(arena.config).think(arena.world)
        assert m.viewshed.dirty
        assert m.ai_state == AIState.IDLE

    def test_unshown_monster_keeps_clean_viewshed(self):
        arena = DungeonArena(cols=20, rows=12)
        wall(arena.grid, *[(8, y) for y in range(1, 11)])
        arena.add_player((4, 5))
        m = arena.add_monster((12, 5))
        _prepare(arena)
        m.shown = False
        m.viewshed.dirty = False
        MonsterBrain(arena.config).think(arena.world)
        assert not m.viewshed.dirty

    def test_out_of_range_player_leaves_monster_idle(self):
        arena = DungeonArena(cols=30, rows=8)
        arena.add_player((2, 3))
        m = arena.add_monster((20, 3), vision=8)
        _prepare(arena)
        MonsterBrain(arena.config).think(arena.world)
        assert m.ai_state == AIState.IDLE

    def test_claimed_cell_blocks_later_monsters(self):
        arena = DungeonArena(grid=corridor_grid(10))
        arena.add_player((1, 2))
        front = arena.add_monster((5, 2))
        back = arena.add_monster((6, 2))
        _prepare(arena)
        MonsterBrain(arena.config).think(arena.world)
        assert front.pos == Vector2(4, 2)
        assert back.pos == Vector2(6, 2)
        assert front.pos != back.pos

    def test_custom_melee_range(self):
        config = SimulationConfig(melee_range=3.0)
        arena = DungeonArena()
        p = arena.add_player((2, 5))
        m = arena.add_monster((4, 5))
        _prepare(arena)
        intents = MonsterBrain(config).think(arena.world)
        assert intents == [MeleeIntent(m.id, p.id)]
