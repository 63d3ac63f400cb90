from __future__ import annotations

import random

import pytest

from game.party import events as ev
from game.party.drawing import GROUND_STRIPE_C, STRIPE_SPACING, DrawCommand, background_commands
from game.party.engine import JUMP, MOVE_RIGHT, PAUSE, GameEngine
from game.party.entities import OBSTACLE, PLAYER, Collectible, Obstacle, Vec2
from game.party.levels import LEVEL_CONFIGS
from game.party.physics import FRAME_MS, ground_level
from helpers import collectible_on_player, pit_under_player, power_up_on_player


def _types(result) -> list[str]:
    return [e.type for e in result.events]


# ----------------------------
# Scenarios
# ----------------------------

def test_last_present_completes_level_one(engine: GameEngine) -> None:
    assert LEVEL_CONFIGS[0].required.presents == 8
    c = engine.state.collectibles
    c.presents, c.cakes, c.balloons = 7, 5, 5
    collectible_on_player(engine, "present")

    result = engine.update(FRAME_MS)

    assert (result.state.collectibles.presents, result.state.collectibles.cakes,
            result.state.collectibles.balloons) == (8, 5, 5)
    assert result.level_complete
    assert not result.run_over
    assert not result.victory
    assert ev.LEVEL_COMPLETE in _types(result)


def test_two_of_three_thresholds_is_not_enough(engine: GameEngine) -> None:
    c = engine.state.collectibles
    c.presents, c.cakes, c.balloons = 7, 5, 4
    collectible_on_player(engine, "present")

    result = engine.update(FRAME_MS)

    assert result.state.collectibles.presents == 8
    assert not result.level_complete


def test_last_life_lost_ends_the_run(engine: GameEngine) -> None:
    engine.player.lives = 1
    pit_under_player(engine)

    result = engine.update(FRAME_MS)

    assert result.state.lives == 0
    assert result.run_over
    assert _types(result) == [ev.DAMAGE, ev.RUN_OVER]


def test_shield_then_obstacle_100ms_later(engine: GameEngine) -> None:
    power_up_on_player(engine, "shield")
    first = engine.update(FRAME_MS)
    assert ev.POWER_UP in _types(first)

    pit_under_player(engine)
    result = engine.update(100)

    assert result.state.lives == 3
    shield = [p for p in result.state.active_power_ups if p.type == "shield"]
    assert len(shield) == 1
    assert shield[0].remaining_time == pytest.approx(7900)
    assert ev.DAMAGE not in _types(result)


def test_second_speed_pickup_resets_duration(engine: GameEngine) -> None:
    power_up_on_player(engine, "speed")
    engine.update(FRAME_MS)
    engine.update(1000)
    assert engine.power_ups.get("speed").remaining_time == 4000

    power_up_on_player(engine, "speed")
    result = engine.update(FRAME_MS)

    speeds = [p for p in result.state.active_power_ups if p.type == "speed"]
    assert len(speeds) == 1
    assert speeds[0].remaining_time == 5000
    assert result.score == 100


# ----------------------------
# Frame pipeline
# ----------------------------

def test_damage_only_once_while_overlapping(engine: GameEngine) -> None:
    pit_under_player(engine)
    pit_under_player(engine)
    first = engine.update(FRAME_MS)
    second = engine.update(FRAME_MS)

    assert _types(first).count(ev.DAMAGE) == 1
    assert ev.DAMAGE not in _types(second)
    assert engine.state.lives == 2


def test_obstacles_persist_after_hitting_the_player(engine: GameEngine) -> None:
    pit = pit_under_player(engine)
    engine.update(FRAME_MS)
    assert pit.active
    assert pit in engine.entities


def test_consumed_entities_are_removed_same_frame(engine: GameEngine) -> None:
    item = collectible_on_player(engine, "cake")
    engine.update(FRAME_MS)
    assert not item.active
    assert item not in engine.entities
    assert engine.player in engine.entities


def test_jump_event_and_superjump_impulse(engine: GameEngine) -> None:
    result = engine.update(FRAME_MS, {JUMP})
    assert ev.JUMP in _types(result)
    assert engine.player.velocity.y == pytest.approx(-11.5)

    # airborne: holding jump does nothing
    result = engine.update(FRAME_MS, {JUMP})
    assert ev.JUMP not in _types(result)

    other = GameEngine(level=1, rng=random.Random(0))
    power_up_on_player(other, "superjump")
    other.update(FRAME_MS)
    other.update(FRAME_MS, {JUMP})
    assert other.player.velocity.y == pytest.approx(-17.5)


def test_speed_buff_moves_player_faster(engine: GameEngine) -> None:
    x0 = engine.player.position.x
    engine.update(FRAME_MS, {MOVE_RIGHT})
    assert engine.player.position.x == pytest.approx(x0 + 5)

    power_up_on_player(engine, "speed")
    engine.update(FRAME_MS)
    x1 = engine.player.position.x
    engine.update(FRAME_MS, {MOVE_RIGHT})
    assert engine.player.position.x == pytest.approx(x1 + 7.5)


def test_off_stage_entities_are_removed_same_frame(engine: GameEngine) -> None:
    gone = [
        Collectible(position=Vec2(-23, 300), subtype="cake"),
        Obstacle(position=Vec2(-18, 300), subtype="confetti"),
        Obstacle(position=Vec2(-46, ground_level(engine.stage_height, 8)), subtype="pit"),
    ]
    # right edge still at +1 after this frame
    kept = Collectible(position=Vec2(-21, 200), subtype="balloon")
    for entity in gone + [kept]:
        engine.add_entity(entity)

    engine.update(FRAME_MS)

    for entity in gone:
        assert not entity.active
        assert entity not in engine.entities
    assert kept.active
    assert kept in engine.entities


def test_spawning_follows_game_time(engine: GameEngine) -> None:
    for _ in range(100):  # ~1.67 s
        engine.update(FRAME_MS)
    kinds = [e.kind for e in engine.entities if e.kind != PLAYER]
    assert len(kinds) == 1  # one collectible, first obstacle due at 3 s


def test_obstacle_count_never_exceeds_level_cap(engine: GameEngine) -> None:
    cap = engine.level_config.max_obstacles
    for _ in range(60 * 60):
        engine.update(FRAME_MS)
        engine.player.lives = 3  # keep the run alive
        if engine.status != "running":
            break
        assert sum(1 for e in engine.entities if e.kind == OBSTACLE) <= cap


# ----------------------------
# Pause and terminal states
# ----------------------------

def test_pause_freezes_time_spawning_and_decay(engine: GameEngine) -> None:
    engine.power_ups.activate("shield", 8000)
    engine.update(FRAME_MS, {PAUSE})
    assert engine.state.paused
    t = engine.state.game_time

    for _ in range(200):
        engine.update(FRAME_MS, {PAUSE})  # held, not re-pressed
    assert engine.state.paused
    assert engine.state.game_time == t
    assert engine.power_ups.get("shield").remaining_time == 8000
    assert engine.entities == [engine.player]

    engine.update(FRAME_MS)
    engine.update(FRAME_MS, {PAUSE})  # fresh press resumes and runs this frame
    assert not engine.state.paused
    assert engine.power_ups.get("shield").remaining_time == pytest.approx(8000 - FRAME_MS)


def test_pause_keeps_counters_and_positions(engine: GameEngine) -> None:
    engine.state.collectibles.cakes = 4
    engine.pause()
    x = engine.player.position.x
    engine.update(500, {MOVE_RIGHT})
    engine.resume()
    assert engine.state.collectibles.cakes == 4
    assert engine.player.position.x == x


def test_terminal_state_is_sticky(engine: GameEngine) -> None:
    engine.player.lives = 1
    pit_under_player(engine)
    engine.update(FRAME_MS)
    t = engine.state.game_time

    again = engine.update(FRAME_MS)
    assert again.run_over
    assert again.events == []
    assert engine.state.game_time == t


def test_run_over_wins_over_level_complete_in_same_frame(engine: GameEngine) -> None:
    c = engine.state.collectibles
    c.presents, c.cakes, c.balloons = 7, 5, 5
    engine.player.lives = 1
    collectible_on_player(engine, "present")
    pit_under_player(engine)

    result = engine.update(FRAME_MS)
    assert result.run_over
    assert not result.level_complete


def test_final_level_completion_is_victory() -> None:
    engine = GameEngine(level=3, rng=random.Random(0))
    req = engine.level_config.required
    c = engine.state.collectibles
    c.presents, c.cakes, c.balloons = req.presents, req.cakes, req.balloons - 1
    collectible_on_player(engine, "balloon")

    result = engine.update(FRAME_MS)
    assert result.level_complete
    assert result.victory
    assert _types(result)[-2:] == [ev.LEVEL_COMPLETE, ev.VICTORY]


def test_next_level_carries_score_only(engine: GameEngine) -> None:
    engine.state.score = 420
    engine.state.collectibles.presents = 8
    engine.player.lives = 1

    nxt = engine.next_level()
    assert nxt.state.level == 2
    assert nxt.level_config.name == "Party Time"
    assert nxt.state.score == 420
    assert nxt.state.collectibles.presents == 0
    assert nxt.player.lives == 3
    assert nxt.entities == [nxt.player]


@pytest.mark.parametrize("requested,expected", [(0, 1), (1, 1), (3, 3), (99, 3)])
def test_level_number_is_clamped(requested: int, expected: int) -> None:
    engine = GameEngine(level=requested)
    assert engine.level_config.level_number == expected
    assert engine.state.level == expected


def test_result_state_is_a_snapshot(engine: GameEngine) -> None:
    result = engine.update(FRAME_MS)
    result.state.score = 9999
    result.state.collectibles.cakes = 50
    assert engine.state.score == 0
    assert engine.state.collectibles.cakes == 0


def test_lives_mirror_player(engine: GameEngine) -> None:
    pit_under_player(engine)
    result = engine.update(FRAME_MS)
    assert result.state.lives == engine.player.lives == 2


# ----------------------------
# Rendering
# ----------------------------

class RecordingSurface:
    def __init__(self) -> None:
        self.commands: list[DrawCommand] = []

    def draw(self, cmd: DrawCommand) -> None:
        self.commands.append(cmd)


def test_render_draws_background_and_entities(engine: GameEngine) -> None:
    surface = RecordingSurface()
    engine.render(surface)
    base = len(surface.commands)
    assert base > 0

    collectible_on_player(engine, "present")
    surface = RecordingSurface()
    engine.render(surface)
    assert len(surface.commands) > base
    assert all(0.0 <= c.alpha <= 1.0 for c in surface.commands)


def test_invulnerable_player_flickers_with_game_time(engine: GameEngine) -> None:
    pit_under_player(engine)
    alphas = set()
    for _ in range(30):
        engine.update(FRAME_MS)
        surface = RecordingSurface()
        engine.render(surface)
        head = [c for c in surface.commands if c.color == (255, 182, 193)]
        alphas.add(head[0].alpha)
    assert alphas == {0.5, 1.0}


def _stripes(commands) -> list[float]:
    return [c.x for c in commands if c.color == GROUND_STRIPE_C]


def test_ground_scrolls_at_level_background_speed() -> None:
    slow = _stripes(background_commands(1, 1200, 600, scroll_speed=1.0, game_time=5 * FRAME_MS))
    fast = _stripes(background_commands(3, 1200, 600, scroll_speed=2.0, game_time=5 * FRAME_MS))
    assert slow[0] == pytest.approx(-5)
    assert fast[0] == pytest.approx(-10)
    assert slow[1] - slow[0] == pytest.approx(STRIPE_SPACING)
    assert slow[-1] + STRIPE_SPACING >= 1200


def test_ground_scroll_freezes_while_paused(engine: GameEngine) -> None:
    engine.update(FRAME_MS)
    engine.pause()
    before = RecordingSurface()
    engine.render(before)
    engine.update(500)
    after = RecordingSurface()
    engine.render(after)
    assert _stripes(before.commands) == _stripes(after.commands)
    assert _stripes(before.commands)[0] == pytest.approx(-engine.level_config.background_speed)
