"""Game rules: spawning, movement, collisions, the boss fight and the day cycle."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any

from .menu import init_pause_menu
from .sound import play_meteor_impact_sound
from .storage import load_high_score, save_high_score
from .types import (
    BASE_HEIGHT,
    BASE_WIDTH,
    BOSS_THRESHOLD_SCORE,
    CACTUS_DIMENSIONS,
    CLOUD_MAX_ALPHA,
    CLOUD_MAX_SPEED,
    CLOUD_MIN_ALPHA,
    CLOUD_MIN_SPEED,
    COLLISION_OFFSET,
    DAY_DURATION,
    DEFAULT_HIGH_SCORE_PATH,
    FADE_DURATION,
    GRAVITY,
    GROUND_HEIGHT,
    INITIAL_BOSS_HP,
    INITIAL_PLAYER_HP,
    JUMP_CHARGE_FORCE,
    MAX_JUMP_CHARGE_TIME,
    MAX_SPAWN_INTERVAL,
    METEOR_ANIM_DELAY,
    METEOR_FALL_SPEED_X,
    METEOR_FALL_SPEED_Y,
    METEOR_GROUND_LIFETIME,
    METEOR_IMPACT_FRAMES,
    METEOR_SPAWN_INTERVAL_MAX,
    METEOR_SPAWN_INTERVAL_MIN,
    MIN_SPAWN_INTERVAL,
    NIGHT_DURATION,
    OBSTACLE_SPEED,
    PRE_BOSS_THRESHOLD,
    SCREEN_SHAKE_DURATION,
    SCREEN_SHAKE_INTENSITY,
    BIRD_ANIM_DELAY,
    Cloud,
    GameState,
    MeteorState,
    ObstacleType,
    Rect,
    Vector2,
    WindowState,
)

NIGHT_SCORE_THRESHOLD = 200
METEOR_FADE_TIME = 3.0
IMPACT_SHAKE_DURATION = 0.3
IMPACT_SHAKE_INTENSITY = 8.0
SCORE_INTERVAL = 0.1
INITIAL_CLOUD_SPAWN_TIME = 3.0
BOSS_FIRST_METEOR_DELAY = 0.3


def _obstacle_spawn_interval(rng: random.Random) -> float:
    return float(rng.randint(int(MIN_SPAWN_INTERVAL), int(MAX_SPAWN_INTERVAL)))


def _randomize_cloud(game: GameState, cloud: Cloud, x_position: float) -> None:
    rng = game.rng
    cloud.position = Vector2(x_position, float(rng.randint(20, 120)))
    cloud.speed = CLOUD_MIN_SPEED + rng.randint(0, 100) / 100.0 * (CLOUD_MAX_SPEED - CLOUD_MIN_SPEED)
    cloud.scale = 0.5 + rng.randint(0, 100) / 100.0 * 0.3
    cloud.alpha = CLOUD_MIN_ALPHA + rng.randint(0, 100) / 100.0 * (CLOUD_MAX_ALPHA - CLOUD_MIN_ALPHA)
    cloud.active = True


def new_game_state(
    high_score_path: str | Path = DEFAULT_HIGH_SCORE_PATH,
    sounds: Any = None,
    rng: random.Random | None = None,
) -> GameState:
    """A fresh game with the stored high score loaded and everything placed."""
    game = GameState(
        high_score_path=Path(high_score_path),
        sounds=sounds,
        rng=rng if rng is not None else random.Random(),
    )
    game.base_position = Vector2(
        BASE_WIDTH * 0.1, BASE_HEIGHT - GROUND_HEIGHT - game.run_frame_height
    )
    init_obstacles(game)
    game.high_score = load_high_score(game.high_score_path)
    game.boss_hp = INITIAL_BOSS_HP
    game.hp = INITIAL_PLAYER_HP
    game.sound_played = False
    init_meteors(game)
    init_clouds(game)
    init_pause_menu(game, WindowState(width=int(BASE_WIDTH), height=int(BASE_HEIGHT)))
    return game


def reset_game(game: GameState) -> None:
    """Start a new run, storing a beaten high score first."""
    if game.score > game.high_score:
        game.high_score = game.score
        save_high_score(game.high_score, game.high_score_path)
    game.base_position.y = BASE_HEIGHT - GROUND_HEIGHT - game.run_frame_height
    game.is_jumping = False
    game.score = 0
    game.game_over = False
    game.game_won = False
    game.sound_played = False

    spacing = BASE_WIDTH / len(game.clouds)
    for index, cloud in enumerate(game.clouds):
        _randomize_cloud(game, cloud, spacing * index + game.rng.randint(-50, 50))

    for obstacle in game.obstacles.obstacles:
        obstacle.active = False
    game.night_mode_active = False

    game.boss_active = False
    game.boss_hp = INITIAL_BOSS_HP
    game.screen_shake_timer = 0.0
    game.screen_shake_intensity = 0.0

    init_meteors(game)


def init_obstacles(game: GameState) -> None:
    for obstacle in game.obstacles.obstacles:
        obstacle.active = False
    game.obstacles.spawn_timer = 0.0
    game.obstacles.next_spawn_time = _obstacle_spawn_interval(game.rng)


def init_meteors(game: GameState) -> None:
    for meteor in game.meteors:
        meteor.active = False
        meteor.state = MeteorState.INACTIVE
        meteor.has_dealt_damage = False
    game.meteor_spawn_timer = 0.0
    game.next_meteor_spawn_time = (
        game.rng.randint(int(METEOR_SPAWN_INTERVAL_MIN * 100), int(METEOR_SPAWN_INTERVAL_MAX * 100))
        / 100.0
    )


def init_clouds(game: GameState) -> None:
    """Scatter every cloud across the base width."""
    for cloud in game.clouds:
        cloud.active = False
    game.cloud_spawn_timer = 0.0
    game.next_cloud_spawn_time = INITIAL_CLOUD_SPAWN_TIME
    for index in range(len(game.clouds)):
        spawn_cloud_at(game, index, float(game.rng.randint(0, int(BASE_WIDTH))))


def spawn_cloud_at(game: GameState, index: int, x_position: float) -> None:
    """Place the cloud at the index; an index out of range is ignored."""
    if 0 <= index < len(game.clouds):
        _randomize_cloud(game, game.clouds[index], x_position)


def spawn_obstacle(game: GameState, window: WindowState) -> None:
    """Activate a free obstacle of random type at the right edge."""
    obstacle = next((o for o in game.obstacles.obstacles if not o.active), None)
    if obstacle is None:
        return
    obstacle.active = True
    obstacle.type = ObstacleType(game.rng.randint(0, ObstacleType.BIRD))
    dims = CACTUS_DIMENSIONS[obstacle.type]
    scale = window.scale_factor
    ground_y = window.height - GROUND_HEIGHT * scale
    y_pos = ground_y - dims.height * scale + dims.y_offset * scale
    obstacle.rect = Rect(float(window.width), y_pos, dims.width * scale, dims.height * scale)
    offset = COLLISION_OFFSET * scale
    obstacle.collision_rect = Rect(
        obstacle.rect.x + offset,
        obstacle.rect.y + offset,
        obstacle.rect.width - 2 * offset,
        obstacle.rect.height - 2 * offset,
    )
    if obstacle.type is ObstacleType.BIRD:
        obstacle.current_frame = 0
        obstacle.frame_time = 0.0
    obstacle.has_passed_player = False


def spawn_meteor(game: GameState, window: WindowState) -> None:
    """Activate a free meteor above and to the right of the screen."""
    meteor = next((m for m in game.meteors if not m.active), None)
    if meteor is None:
        return
    rng = game.rng
    meteor.active = True
    meteor.state = MeteorState.FALLING
    meteor.current_frame = 0
    meteor.frame_time = 0.0
    meteor.impact_time = 0.0
    meteor.has_dealt_damage = False

    pattern = rng.randint(0, 2)
    if pattern == 0:
        x = window.width + rng.randint(50, 250)
        y = -rng.randint(100, 300)
    elif pattern == 1:
        x = window.width * 0.7 + rng.randint(-100, 100)
        y = -rng.randint(200, 400)
    else:
        x = window.width + rng.randint(50, 150)
        y = -rng.randint(50, 150)
    meteor.position = Vector2(float(x), float(y))
    size = float(rng.randint(100, 160))
    meteor.rect = Rect(meteor.position.x, meteor.position.y, size, size)
    meteor.collision_rect = Rect()


def update_meteors(game: GameState, window: WindowState, delta_time: float) -> None:
    """Spawn, move and age meteors; apply boss damage and player hits."""
    if not game.is_story_mode or not game.boss_active or game.game_over or game.game_won:
        return
    game.meteor_spawn_timer += delta_time
    if game.meteor_spawn_timer >= game.next_meteor_spawn_time:
        spawn_meteor(game, window)
        game.meteor_spawn_timer = 0.0
        game.next_meteor_spawn_time = (
            METEOR_SPAWN_INTERVAL_MIN
            + (METEOR_SPAWN_INTERVAL_MAX - METEOR_SPAWN_INTERVAL_MIN) * game.rng.randint(0, 100) / 100.0
        )
    ground_y = window.height - GROUND_HEIGHT * window.scale_factor
    boss_just_defeated = False
    for meteor in game.meteors:
        if not meteor.active:
            continue
        meteor.frame_time += delta_time
        if meteor.state is MeteorState.FALLING:
            meteor.position.x -= METEOR_FALL_SPEED_X * delta_time
            meteor.position.y += METEOR_FALL_SPEED_Y * delta_time
            meteor.rect.x = meteor.position.x
            meteor.rect.y = meteor.position.y
            if meteor.position.y >= ground_y - meteor.rect.height:
                meteor.state = MeteorState.IMPACT
                meteor.position.y = ground_y - meteor.rect.height
                meteor.rect.y = meteor.position.y
                meteor.current_frame = 0
                meteor.frame_time = 0.0
                game.screen_shake_timer = IMPACT_SHAKE_DURATION
                game.screen_shake_intensity = IMPACT_SHAKE_INTENSITY
                meteor.collision_rect = Rect(
                    meteor.position.x + 10,
                    meteor.position.y + meteor.rect.height - 25,
                    meteor.rect.width - 20,
                    25,
                )
                play_meteor_impact_sound(game)
        elif meteor.state is MeteorState.IMPACT:
            meteor.position.x -= OBSTACLE_SPEED * window.scale_factor * delta_time
            meteor.rect.x = meteor.position.x
            meteor.collision_rect.x = meteor.position.x + 10
            if not meteor.has_dealt_damage and meteor.position.x + meteor.rect.width < game.base_position.x:
                if game.boss_hp > 0:
                    game.boss_hp -= 1
                    if game.boss_hp <= 0 and not game.game_won:
                        game.boss_hp = 0
                        boss_just_defeated = True
                meteor.has_dealt_damage = True
            game.boss_hp = max(game.boss_hp, 0)
            if meteor.impact_time < 1.0 and meteor.frame_time >= METEOR_ANIM_DELAY * 1.5:
                meteor.frame_time = 0.0
                if meteor.current_frame < METEOR_IMPACT_FRAMES - 1:
                    meteor.current_frame += 1
            meteor.impact_time += delta_time
            if meteor.impact_time > METEOR_GROUND_LIFETIME + METEOR_FADE_TIME:
                meteor.active = False
            if game.rect.collides(meteor.collision_rect):
                if game.boss_hp > 1:
                    game.game_over = True
                    break
                if game.boss_hp == 1 and not meteor.has_dealt_damage:
                    game.boss_hp = 0
                    meteor.has_dealt_damage = True
                    boss_just_defeated = True
    if boss_just_defeated and not game.game_won:
        game.game_won = True
        game.game_over = True


def update_obstacles(game: GameState, window: WindowState, delta_time: float) -> None:
    """Spawn obstacles on a timer, move them and check for a hit."""
    if game.game_over or game.game_won:
        return
    pool = game.obstacles
    if not (game.is_story_mode and game.score >= PRE_BOSS_THRESHOLD):
        pool.spawn_timer += delta_time
        if pool.spawn_timer >= pool.next_spawn_time:
            spawn_obstacle(game, window)
            pool.spawn_timer = 0.0
            pool.next_spawn_time = _obstacle_spawn_interval(game.rng)
    for obstacle in pool.obstacles:
        if not obstacle.active:
            continue
        obstacle.rect.x -= OBSTACLE_SPEED * window.scale_factor * delta_time
        obstacle.collision_rect.x = obstacle.rect.x + COLLISION_OFFSET * window.scale_factor
        if obstacle.type is ObstacleType.BIRD:
            obstacle.frame_time += delta_time
            if obstacle.frame_time >= BIRD_ANIM_DELAY:
                obstacle.frame_time = 0.0
                obstacle.current_frame ^= 1
        if obstacle.rect.x + obstacle.rect.width < 0:
            obstacle.active = False
        if game.rect.collides(obstacle.collision_rect):
            game.game_over = True
            break


def spawn_cloud(game: GameState, window: WindowState | None) -> None:
    """Activate a free cloud at the right edge, or off-screen when there is no window."""
    cloud = next((c for c in game.clouds if not c.active), None)
    if cloud is None:
        return
    if window is not None:
        x = float(window.width)
    else:
        x = BASE_WIDTH * (1.0 + game.rng.randint(0, 100) / 100.0)
    _randomize_cloud(game, cloud, x)


def update_clouds(game: GameState, window: WindowState, delta_time: float) -> None:
    """Drift clouds left, recycling those that leave the screen."""
    for cloud in game.clouds:
        if not cloud.active:
            continue
        cloud.position.x -= cloud.speed * delta_time
        if cloud.position.x + game.cloud_texture_width * cloud.scale < -100:
            _randomize_cloud(game, cloud, BASE_WIDTH)


def update_boss_fight(game: GameState, window: WindowState, delta_time: float) -> None:
    """Start the boss at the score threshold and run the meteor shower."""
    if not game.is_story_mode or game.game_over:
        return
    if not game.boss_active and game.score >= BOSS_THRESHOLD_SCORE:
        game.boss_active = True
        game.screen_shake_timer = SCREEN_SHAKE_DURATION
        game.screen_shake_intensity = SCREEN_SHAKE_INTENSITY
        game.meteor_spawn_timer = 0.0
        game.next_meteor_spawn_time = BOSS_FIRST_METEOR_DELAY
    if game.screen_shake_timer > 0:
        game.screen_shake_timer -= delta_time
        if game.screen_shake_timer <= 0:
            game.screen_shake_intensity = 0.0
    if game.boss_active:
        update_meteors(game, window, delta_time)


def update_score(game: GameState, delta_time: float) -> None:
    """Add a point every tenth of a second."""
    game.score_timer += delta_time
    if game.score_timer >= SCORE_INTERVAL:
        game.score += 1
        game.score_timer = 0.0
        if game.score > game.high_score:
            game.high_score = game.score


def update_physics(game: GameState, window: WindowState, delta_time: float) -> None:
    """Advance the jump and place the player on screen."""
    if game.is_jumping:
        if game.is_jump_charging and game.jump_charge_time < MAX_JUMP_CHARGE_TIME:
            game.jump_charge_time += delta_time
            progress = game.jump_charge_time / MAX_JUMP_CHARGE_TIME
            extra = JUMP_CHARGE_FORCE * (1.0 - progress)
            game.base_jump_velocity += extra * delta_time * 60.0
        game.base_jump_velocity += GRAVITY
        game.base_position.y += game.base_jump_velocity
        height = game.crouch_frame_height if game.is_crouching else game.run_frame_height
        ground_level = BASE_HEIGHT - GROUND_HEIGHT - height
        if game.base_position.y >= ground_level:
            game.base_position.y = ground_level
            game.is_jumping = False
            game.base_jump_velocity = 0.0
    scale = window.scale_factor
    game.screen_position = Vector2(game.base_position.x * scale, game.base_position.y * scale)
    game.rect.x = game.screen_position.x
    game.rect.y = game.screen_position.y


def update_day_night(game: GameState, delta_time: float) -> None:
    """Run the day timer and fade the night in and out."""
    if not game.is_night:
        game.day_cycle_timer += delta_time
        if game.score >= NIGHT_SCORE_THRESHOLD and game.day_cycle_timer >= DAY_DURATION:
            game.night_mode_active = True
            game.night_cycle_timer = 0.0
            game.night_alpha = 0.0
            game.is_night = True
    if game.night_mode_active:
        game.night_cycle_timer += delta_time
        timer = game.night_cycle_timer
        if timer < FADE_DURATION:
            game.night_alpha = timer / FADE_DURATION
        elif timer < FADE_DURATION + NIGHT_DURATION:
            game.night_alpha = 1.0
        elif timer < FADE_DURATION + NIGHT_DURATION + FADE_DURATION:
            game.night_alpha = 1.0 - (timer - FADE_DURATION - NIGHT_DURATION) / FADE_DURATION
        else:
            game.night_mode_active = False
            game.night_cycle_timer = 0.0
            game.night_alpha = 0.0
            game.is_night = False
            game.day_cycle_timer = 0.0