"""Drawing of the running game: player, obstacles, meteors, clouds and overlays."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path

import pygame

from .menu import BLACK, DARKGRAY, LIGHTGRAY, _draw_text, _measure_text, draw_pause_menu
from .types import (
    BASE_HEIGHT,
    FADE_DISTANCE,
    FRAME_DELAY,
    GROUND_HEIGHT,
    INITIAL_BOSS_HP,
    LIGHT_RADIUS,
    METEOR_GROUND_LIFETIME,
    NIGHT_ALPHA,
    GameState,
    MeteorState,
    ObstacleType,
    Rect,
    Vector2,
    WindowState,
)

WHITE = (255, 255, 255)
RED = (230, 41, 55)
ORANGE = (255, 161, 0)
GREEN = (0, 228, 48)
YELLOW = (253, 249, 0)
BOSS_HP_FILL = (0, 220, 40)
BOSS_HP_BACKGROUND = (40, 40, 40, 220)

_METEOR_FADE_TIME = 3.0
_LIGHT_STEPS = 64

_FALLING_FRAMES = (Rect(2158, 6, 110, 120), Rect(2275, 6, 110, 120))
_IMPACT_FRAMES = (Rect(2392, 34, 103, 68), Rect(2497, 34, 129, 74), Rect(2643, 34, 90, 51))

_OBSTACLE_SOURCES = {
    ObstacleType.CACTUS_1: Rect(446, 0, 34, 68),
    ObstacleType.CACTUS_2: Rect(480, 0, 68, 68),
    ObstacleType.CACTUS_3: Rect(548, 0, 102, 68),
    ObstacleType.CACTUS_4: Rect(650, 0, 50, 94),
    ObstacleType.CACTUS_5: Rect(700, 0, 100, 94),
    ObstacleType.CACTUS_6: Rect(800, 0, 150, 95),
}


@dataclass
class Assets:
    """The images the game draws from."""

    sprite_sheet: pygame.Surface
    cloud_texture: pygame.Surface

    @classmethod
    def load(cls, directory: str | Path) -> Assets:
        """Load the sprite sheet and the cloud image from a directory."""
        directory = Path(directory)
        sprite_path = directory / "sprite.png"
        cloud_path = directory / "clouds.png"
        for path in (sprite_path, cloud_path):
            if not path.is_file():
                raise FileNotFoundError(f"image file not found: {path}")
        return cls(
            sprite_sheet=pygame.image.load(str(sprite_path)),
            cloud_texture=pygame.image.load(str(cloud_path)),
        )


def _blit_region(
    surface: pygame.Surface,
    sheet: pygame.Surface,
    source: Rect,
    dest: Rect,
    alpha: int = 255,
) -> None:
    """Draw part of a sheet stretched into a destination rectangle."""
    region = pygame.Rect(
        int(source.x), int(source.y), int(source.width), int(source.height)
    ).clip(sheet.get_rect())
    width, height = int(dest.width), int(dest.height)
    if region.width <= 0 or region.height <= 0 or width <= 0 or height <= 0:
        return
    image = pygame.transform.scale(sheet.subsurface(region), (width, height))
    if alpha < 255:
        image.set_alpha(max(0, alpha))
    surface.blit(image, (int(dest.x), int(dest.y)))


def apply_screen_shake(game: GameState, rng: random.Random) -> Vector2:
    """A random offset while the screen shakes, otherwise none."""
    if game.screen_shake_timer <= 0 or game.screen_shake_intensity <= 0:
        return Vector2(0.0, 0.0)
    limit = int(game.screen_shake_intensity)
    return Vector2(float(rng.randint(-limit, limit)), float(rng.randint(-limit, limit)))


def update_animation(game: GameState, window: WindowState, delta_time: float) -> None:
    """Flip the player's running or crouching frame on a timer."""
    game.frame_time += delta_time
    if game.frame_time >= FRAME_DELAY:
        game.frame_time = 0.0
        game.current_frame ^= 1
        frame = game.current_frame_rect
        game.base_size.x = frame.width
        game.base_size.y = frame.height


def draw_clouds(
    surface: pygame.Surface, window: WindowState, game: GameState, assets: Assets
) -> None:
    """Draw every active cloud, scaled to the window and faded by its alpha."""
    scale = window.scale_factor
    texture = assets.cloud_texture
    for cloud in game.clouds:
        if not cloud.active:
            continue
        factor = cloud.scale * scale
        width = int(texture.get_width() * factor)
        height = int(texture.get_height() * factor)
        if width <= 0 or height <= 0:
            continue
        image = pygame.transform.scale(texture, (width, height))
        image.set_alpha(int(255 * cloud.alpha))
        surface.blit(image, (int(cloud.position.x * scale), int(cloud.position.y * scale)))


def draw_meteors(
    surface: pygame.Surface, game: GameState, assets: Assets, shake_offset: Vector2
) -> None:
    """Draw falling and landed meteors; landed ones fade out at the end of their life."""
    for meteor in game.meteors:
        if not meteor.active:
            continue
        alpha = 255
        if meteor.state is MeteorState.FALLING:
            source = _FALLING_FRAMES[0 if meteor.current_frame == 0 else 1]
        elif meteor.state is MeteorState.IMPACT:
            source = _IMPACT_FRAMES[min(max(meteor.current_frame, 0), len(_IMPACT_FRAMES) - 1)]
            if meteor.impact_time > METEOR_GROUND_LIFETIME:
                fade = 1.0 - (meteor.impact_time - METEOR_GROUND_LIFETIME) / _METEOR_FADE_TIME
                alpha = int(255 * fade)
        else:
            continue
        dest = Rect(
            meteor.rect.x + shake_offset.x,
            meteor.rect.y + shake_offset.y,
            meteor.rect.width,
            meteor.rect.height,
        )
        _blit_region(surface, assets.sprite_sheet, source, dest, alpha)


def draw_boss_hp(surface: pygame.Surface, window: WindowState, game: GameState) -> None:
    """Draw the boss health bar along the bottom of the screen."""
    if not game.is_story_mode or not game.boss_active:
        return
    scale = window.scale_factor
    bar_width = 500 * scale
    bar_height = 36 * scale
    start_x = (window.width - bar_width) / 2
    start_y = window.height - bar_height - 30 * scale
    radius = int(min(bar_width, bar_height) * 0.5 / 2)
    outline = pygame.Rect(int(start_x), int(start_y), int(bar_width), int(bar_height))

    background = pygame.Surface((max(1, outline.width), max(1, outline.height)), pygame.SRCALPHA)
    pygame.draw.rect(background, BOSS_HP_BACKGROUND, background.get_rect(), border_radius=radius)
    surface.blit(background, outline.topleft)

    hp_percent = game.boss_hp / float(INITIAL_BOSS_HP)
    fill_width = int(bar_width * hp_percent)
    if hp_percent > 0.5:
        color = BOSS_HP_FILL
    elif hp_percent > 0.2:
        color = ORANGE
    else:
        color = RED
    if fill_width > 0:
        fill = pygame.Rect(outline.x, outline.y, fill_width, outline.height)
        pygame.draw.rect(surface, color, fill, border_radius=radius)
    pygame.draw.rect(surface, BLACK, outline, width=1, border_radius=radius)


def _draw_night(surface: pygame.Surface, window: WindowState, game: GameState) -> None:
    alpha = int(game.night_alpha * NIGHT_ALPHA)
    mask = pygame.Surface((max(1, window.width), max(1, window.height)), pygame.SRCALPHA)
    mask.fill((0, 0, 0, alpha))
    center = (
        int(game.screen_position.x + game.rect.width / 2),
        int(game.screen_position.y + game.rect.height / 2),
    )
    radius = (LIGHT_RADIUS + FADE_DISTANCE) * window.scale_factor
    for step in range(_LIGHT_STEPS, 0, -1):
        ring_radius = max(1, int(radius * step / _LIGHT_STEPS))
        pygame.draw.circle(mask, (0, 0, 0, int(alpha * step / _LIGHT_STEPS)), center, ring_radius)
    surface.blit(mask, (0, 0))


def _draw_centered(
    surface: pygame.Surface,
    window: WindowState,
    text: str,
    y: float,
    size: float,
    color: tuple[int, ...],
) -> None:
    width = _measure_text(text, size)
    _draw_text(surface, text, (window.width - width) // 2, y, size, color)


def _draw_win_screen(surface: pygame.Surface, window: WindowState) -> None:
    surface.fill(BLACK)
    font_size = int(100 * window.scale_factor)
    _draw_centered(surface, window, "YOU WON!", window.height // 2 - font_size // 2, font_size, YELLOW)
    _draw_centered(
        surface,
        window,
        "Press SPACE to return to menu",
        window.height // 2 + font_size // 2 + 20,
        30,
        LIGHTGRAY,
    )


def draw_game(
    surface: pygame.Surface, window: WindowState, game: GameState, assets: Assets
) -> None:
    """Draw one frame of the running game with all its overlays."""
    surface.fill(WHITE)
    draw_clouds(surface, window, game, assets)

    shake = apply_screen_shake(game, game.rng)
    scale = window.scale_factor
    ground_y = (BASE_HEIGHT - GROUND_HEIGHT) * scale
    pygame.draw.rect(
        surface, DARKGRAY, pygame.Rect(0, int(ground_y), window.width, int(GROUND_HEIGHT * scale))
    )

    frame = game.current_frame_rect
    player = Rect(
        game.screen_position.x + shake.x,
        game.screen_position.y + shake.y,
        frame.width * scale,
        frame.height * scale,
    )
    _blit_region(surface, assets.sprite_sheet, frame, player)

    for obstacle in game.obstacles.obstacles:
        if not obstacle.active:
            continue
        if obstacle.type is ObstacleType.BIRD:
            source = Rect(260 + obstacle.current_frame * 93, 0, 93, 80)
        else:
            source = _OBSTACLE_SOURCES[obstacle.type]
        dest = Rect(
            obstacle.rect.x + shake.x,
            obstacle.rect.y + shake.y,
            obstacle.rect.width,
            obstacle.rect.height,
        )
        _blit_region(surface, assets.sprite_sheet, source, dest)

    boss_fight = game.is_story_mode and game.boss_active
    if boss_fight:
        draw_meteors(surface, game, assets, shake)
    if game.night_mode_active and game.night_alpha > 0:
        _draw_night(surface, window, game)
    if boss_fight:
        draw_boss_hp(surface, window, game)

    if game.game_over and not game.game_won:
        _draw_centered(
            surface, window, "GAME OVER - Press SPACE to restart", window.height // 2, 40, RED
        )

    _draw_centered(surface, window, f"SCORE: {game.score}", 20, 40, BLACK)
    _draw_centered(surface, window, f"HIGH SCORE: {game.high_score}", 70, 30, DARKGRAY)
    if game.score == game.high_score and game.score > 0:
        _draw_centered(surface, window, "NEW HIGH SCORE!", 110, 30, GREEN)
    if game.pause_menu.is_paused:
        draw_pause_menu(surface, window, game)

    if (boss_fight and game.boss_hp <= 0) or game.game_won:
        _draw_win_screen(surface, window)