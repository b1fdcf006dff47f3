import random

import pytest

from dinorun import game as g
from dinorun.storage import load_high_score, save_high_score
from dinorun.types import (
    BASE_HEIGHT,
    BASE_WIDTH,
    BOSS_THRESHOLD_SCORE,
    CACTUS_DIMENSIONS,
    COLLISION_OFFSET,
    DAY_DURATION,
    FADE_DURATION,
    GROUND_HEIGHT,
    INITIAL_BOSS_HP,
    MAX_OBSTACLES,
    NIGHT_DURATION,
    OBSTACLE_SPEED,
    PRE_BOSS_THRESHOLD,
    RUN_FRAME_HEIGHT,
    SCREEN_SHAKE_DURATION,
    SCREEN_SHAKE_INTENSITY,
    GRAVITY,
    MeteorState,
    Rect,
    Vector2,
    WindowState,
)


@pytest.fixture
def window():
    return WindowState(width=1600, height=900, scale_factor=1.0)


@pytest.fixture
def game(tmp_path):
    return g.new_game_state(tmp_path / "hs.bin", None, random.Random(7))


def test_new_game_state_loads_high_score(tmp_path):
    path = tmp_path / "hs.bin"
    save_high_score(42, path)
    state = g.new_game_state(path, None, random.Random(1))
    assert state.high_score == 42
    assert state.boss_hp == INITIAL_BOSS_HP
    assert all(c.active for c in state.clouds)
    assert not any(o.active for o in state.obstacles.obstacles)
    assert state.obstacles.next_spawn_time in (1.0, 2.0)
    assert state.pause_menu.is_paused is False
    assert state.pause_menu.continue_button.width > 0


def test_reset_game_saves_beaten_high_score(game):
    game.score = 50
    game.high_score = 10
    game.game_over = True
    game.boss_active = True
    g.reset_game(game)
    assert game.high_score == 50
    assert load_high_score(game.high_score_path) == 50
    assert game.score == 0
    assert game.game_over is False
    assert game.boss_active is False
    assert game.base_position.y == BASE_HEIGHT - GROUND_HEIGHT - RUN_FRAME_HEIGHT


def test_init_meteors_range(game):
    game.meteors[0].active = True
    g.init_meteors(game)
    assert 0.5 <= game.next_meteor_spawn_time <= 1.5
    assert all(m.state is MeteorState.INACTIVE and not m.active for m in game.meteors)


def test_spawn_cloud_at_bounds(game):
    before = [c.position.x for c in game.clouds]
    g.spawn_cloud_at(game, 10, 123.0)
    g.spawn_cloud_at(game, -1, 123.0)
    assert [c.position.x for c in game.clouds] == before
    g.spawn_cloud_at(game, 1, 321.0)
    assert game.clouds[1].position.x == 321.0
    assert 20 <= game.clouds[1].position.y <= 120


def test_spawn_obstacle_places_at_right_edge(game, window):
    g.spawn_obstacle(game, window)
    active = [o for o in game.obstacles.obstacles if o.active]
    assert len(active) == 1
    obs = active[0]
    dims = CACTUS_DIMENSIONS[obs.type]
    assert obs.rect.x == window.width
    assert obs.rect.width == dims.width
    assert obs.collision_rect.x == obs.rect.x + COLLISION_OFFSET
    assert obs.collision_rect.width == obs.rect.width - 2 * COLLISION_OFFSET


def test_spawn_obstacle_pool_is_bounded(game, window):
    for _ in range(MAX_OBSTACLES + 3):
        g.spawn_obstacle(game, window)
    assert sum(o.active for o in game.obstacles.obstacles) == MAX_OBSTACLES


def test_spawn_meteor(game, window):
    g.spawn_meteor(game, window)
    meteor = next(m for m in game.meteors if m.active)
    assert meteor.state is MeteorState.FALLING
    assert 100 <= meteor.rect.width <= 160
    assert meteor.rect.width == meteor.rect.height
    assert meteor.position.y < 0


def test_update_obstacles_moves_and_collides(game, window):
    game.obstacles.next_spawn_time = 100.0
    g.spawn_obstacle(game, window)
    obs = next(o for o in game.obstacles.obstacles if o.active)
    game.rect = Rect(0, 0, 1, 1)
    g.update_obstacles(game, window, 0.1)
    assert obs.rect.x == pytest.approx(window.width - OBSTACLE_SPEED * 0.1)
    assert game.game_over is False
    game.rect = Rect(obs.collision_rect.x, obs.collision_rect.y, 5, 5)
    g.update_obstacles(game, window, 0.0)
    assert game.game_over is True


def test_update_obstacles_removes_offscreen(game, window):
    game.obstacles.next_spawn_time = 100.0
    g.spawn_obstacle(game, window)
    obs = next(o for o in game.obstacles.obstacles if o.active)
    obs.rect.x = -obs.rect.width - 1
    game.rect = Rect(1000, 0, 1, 1)
    g.update_obstacles(game, window, 0.0)
    assert obs.active is False


def test_no_spawning_before_boss_in_story_mode(game, window):
    game.is_story_mode = True
    game.score = PRE_BOSS_THRESHOLD
    game.obstacles.next_spawn_time = 0.0
    game.rect = Rect(0, 0, 1, 1)
    g.update_obstacles(game, window, 1.0)
    assert not any(o.active for o in game.obstacles.obstacles)


def test_update_score(game):
    game.high_score = 0
    g.update_score(game, 0.05)
    assert game.score == 0
    g.update_score(game, 0.06)
    assert game.score == 1
    assert game.high_score == 1
    assert game.score_timer == 0.0


def test_update_physics_jump_and_land(game):
    window = WindowState(width=800, height=450, scale_factor=0.5)
    ground = BASE_HEIGHT - GROUND_HEIGHT - RUN_FRAME_HEIGHT
    game.is_jumping = True
    game.base_jump_velocity = 0.0
    game.base_position.y = ground - 10
    g.update_physics(game, window, 0.016)
    assert game.base_position.y == pytest.approx(ground - 10 + GRAVITY)
    assert game.is_jumping is True
    game.base_position.y = ground - 1
    g.update_physics(game, window, 0.016)
    assert game.base_position.y == ground
    assert game.is_jumping is False
    assert game.screen_position.y == pytest.approx(ground * 0.5)
    assert game.rect.y == game.screen_position.y


def test_update_boss_fight_starts_boss(game, window):
    game.is_story_mode = True
    game.score = BOSS_THRESHOLD_SCORE
    g.update_boss_fight(game, window, 0.0)
    assert game.boss_active is True
    assert game.screen_shake_timer == SCREEN_SHAKE_DURATION
    assert game.screen_shake_intensity == SCREEN_SHAKE_INTENSITY


def test_update_boss_fight_ignored_outside_story(game, window):
    game.score = BOSS_THRESHOLD_SCORE
    g.update_boss_fight(game, window, 0.0)
    assert game.boss_active is False


def _boss_game(game):
    game.is_story_mode = True
    game.boss_active = True
    game.next_meteor_spawn_time = 100.0
    game.rect = Rect(1000, 0, 10, 10)
    return game


def test_meteor_hits_ground(game, window):
    _boss_game(game)
    meteor = game.meteors[0]
    meteor.active = True
    meteor.state = MeteorState.FALLING
    meteor.position = Vector2(1200, 699)
    meteor.rect = Rect(1200, 699, 100, 100)
    g.update_meteors(game, window, 0.01)
    assert meteor.state is MeteorState.IMPACT
    assert meteor.position.y == window.height - GROUND_HEIGHT - 100
    assert game.screen_shake_timer == g.IMPACT_SHAKE_DURATION
    assert meteor.collision_rect.height == 25


def _passed_meteor(game):
    meteor = game.meteors[0]
    meteor.active = True
    meteor.state = MeteorState.IMPACT
    meteor.position = Vector2(-200, 700)
    meteor.rect = Rect(-200, 700, 100, 100)
    meteor.collision_rect = Rect(-190, 775, 80, 25)
    return meteor


def test_meteor_passing_player_damages_boss(game, window):
    _boss_game(game)
    game.boss_hp = 5
    meteor = _passed_meteor(game)
    g.update_meteors(game, window, 0.01)
    assert game.boss_hp == 4
    assert meteor.has_dealt_damage is True
    g.update_meteors(game, window, 0.01)
    assert game.boss_hp == 4


def test_last_meteor_wins_game(game, window):
    _boss_game(game)
    game.boss_hp = 1
    _passed_meteor(game)
    g.update_meteors(game, window, 0.01)
    assert game.boss_hp == 0
    assert game.game_won is True
    assert game.game_over is True


def test_day_night_cycle(game):
    game.score = g.NIGHT_SCORE_THRESHOLD
    game.day_cycle_timer = DAY_DURATION
    g.update_day_night(game, 0.0)
    assert game.is_night and game.night_mode_active
    g.update_day_night(game, FADE_DURATION / 2)
    assert game.night_alpha == pytest.approx(0.5)
    g.update_day_night(game, NIGHT_DURATION)
    assert game.night_alpha == 1.0
    g.update_day_night(game, NIGHT_DURATION)
    assert game.is_night is False
    assert game.night_mode_active is False
    assert game.day_cycle_timer == 0.0


def test_no_night_below_score(game):
    game.score = 10
    g.update_day_night(game, DAY_DURATION + 1)
    assert game.is_night is False
    assert game.day_cycle_timer == pytest.approx(DAY_DURATION + 1)


def test_update_clouds_wraps(game, window):
    game.cloud_texture_width = 100.0
    cloud = game.clouds[0]
    cloud.position.x = -1000.0
    cloud.speed = 50.0
    g.update_clouds(game, window, 0.1)
    assert cloud.position.x == BASE_WIDTH


def test_spawn_cloud(game, window):
    game.clouds[0].active = False
    g.spawn_cloud(game, window)
    assert game.clouds[0].active
    assert game.clouds[0].position.x == window.width
    game.clouds[1].active = False
    g.spawn_cloud(game, None)
    assert BASE_WIDTH <= game.clouds[1].position.x <= 2 * BASE_WIDTH
    before = [c.position.x for c in game.clouds]
    g.spawn_cloud(game, window)
    assert [c.position.x for c in game.clouds] == before