import random

import pygame
import pytest

from dinorun.draw import (
    BOSS_HP_FILL,
    ORANGE,
    Assets,
    apply_screen_shake,
    draw_boss_hp,
    draw_clouds,
    draw_game,
    draw_meteors,
    update_animation,
)
from dinorun.game import new_game_state
from dinorun.menu import DARKGRAY
from dinorun.types import FRAME_DELAY, MeteorState, Rect, Vector2
from dinorun.window import create_window_state, rescale_game

SPRITE_COLOR = (255, 0, 0)
CLOUD_COLOR = (0, 0, 255)
WHITE = (255, 255, 255)


@pytest.fixture
def state(tmp_path):
    window = create_window_state()
    game = new_game_state(tmp_path / "hs.bin", rng=random.Random(5))
    rescale_game(game, window)
    return window, game


@pytest.fixture
def assets():
    sheet = pygame.Surface((3000, 200))
    sheet.fill(SPRITE_COLOR)
    cloud = pygame.Surface((100, 50))
    cloud.fill(CLOUD_COLOR)
    return Assets(sprite_sheet=sheet, cloud_texture=cloud)


@pytest.fixture
def surface():
    s = pygame.Surface((1600, 900))
    s.fill(WHITE)
    return s


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


def test_assets_load_round_trip(tmp_path):
    pygame.image.save(pygame.Surface((30, 20)), str(tmp_path / "sprite.png"))
    pygame.image.save(pygame.Surface((12, 8)), str(tmp_path / "clouds.png"))
    loaded = Assets.load(tmp_path)
    assert loaded.sprite_sheet.get_size() == (30, 20)
    assert loaded.cloud_texture.get_size() == (12, 8)


def test_assets_load_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Assets.load(tmp_path)


def test_no_shake_without_timer(state):
    _, game = state
    game.screen_shake_timer = 0.0
    game.screen_shake_intensity = 8.0
    assert apply_screen_shake(game, random.Random(1)) == Vector2(0.0, 0.0)


def test_shake_within_intensity(state):
    _, game = state
    game.screen_shake_timer = 1.0
    game.screen_shake_intensity = 8.0
    for seed in range(30):
        offset = apply_screen_shake(game, random.Random(seed))
        assert abs(offset.x) <= 8 and abs(offset.y) <= 8


def test_animation_toggles_frame(state):
    window, game = state
    update_animation(game, window, FRAME_DELAY / 2)
    assert game.current_frame == 0
    update_animation(game, window, FRAME_DELAY)
    assert game.current_frame == 1
    assert game.frame_time == 0.0
    assert game.base_size == Vector2(game.run_frames[1].width, game.run_frames[1].height)


def test_animation_uses_crouch_frames(state):
    window, game = state
    game.is_crouching = True
    update_animation(game, window, FRAME_DELAY)
    assert game.base_size.x == game.crouch_frames[1].width
    assert game.base_size.y == game.crouch_frames[1].height


def test_draw_clouds(state, assets, surface):
    window, game = state
    for cloud in game.clouds:
        cloud.active = False
    cloud = game.clouds[0]
    cloud.active = True
    cloud.position = Vector2(10, 10)
    cloud.scale = 1.0
    cloud.alpha = 1.0
    draw_clouds(surface, window, game, assets)
    assert rgb(surface, (20, 20)) == CLOUD_COLOR
    assert rgb(surface, (500, 500)) == WHITE


def test_draw_falling_meteor_with_offset(state, assets, surface):
    _, game = state
    meteor = game.meteors[0]
    meteor.active = True
    meteor.state = MeteorState.FALLING
    meteor.rect = Rect(10, 10, 50, 50)
    draw_meteors(surface, game, assets, Vector2(100, 0))
    assert rgb(surface, (130, 30)) == SPRITE_COLOR
    assert rgb(surface, (30, 30)) == WHITE


def test_inactive_meteor_not_drawn(state, assets, surface):
    _, game = state
    game.meteors[0].rect = Rect(10, 10, 50, 50)
    draw_meteors(surface, game, assets, Vector2())
    assert rgb(surface, (30, 30)) == WHITE


def test_landed_meteor_fades(state, assets, surface):
    _, game = state
    meteor = game.meteors[0]
    meteor.active = True
    meteor.state = MeteorState.IMPACT
    meteor.impact_time = 11.5
    meteor.rect = Rect(10, 10, 50, 50)
    draw_meteors(surface, game, assets, Vector2())
    red, green, _ = rgb(surface, (30, 30))
    assert red == 255
    assert 0 < green < 255


def test_boss_hp_hidden_outside_story(state, surface):
    window, game = state
    game.boss_active = True
    draw_boss_hp(surface, window, game)
    assert rgb(surface, (800, 852)) == WHITE


def test_boss_hp_full(state, surface):
    window, game = state
    game.is_story_mode = True
    game.boss_active = True
    draw_boss_hp(surface, window, game)
    assert rgb(surface, (800, 852)) == BOSS_HP_FILL


def test_boss_hp_low_is_orange(state, surface):
    window, game = state
    game.is_story_mode = True
    game.boss_active = True
    game.boss_hp = 3
    draw_boss_hp(surface, window, game)
    assert rgb(surface, (620, 852)) == ORANGE
    assert rgb(surface, (800, 852)) != ORANGE


def test_draw_game_ground(state, assets, surface):
    window, game = state
    draw_game(surface, window, game, assets)
    assert rgb(surface, (5, 850)) == DARKGRAY
    assert rgb(surface, (5, 400)) == WHITE


def test_draw_game_won_clears_black(state, assets, surface):
    window, game = state
    game.game_won = True
    game.game_over = True
    draw_game(surface, window, game, assets)
    assert rgb(surface, (0, 0)) == (0, 0, 0)
    assert rgb(surface, (5, 850)) == (0, 0, 0)


def test_draw_game_night_darkens_far_pixels(state, assets, surface):
    window, game = state
    game.night_mode_active = True
    game.night_alpha = 1.0
    draw_game(surface, window, game, assets)
    assert rgb(surface, (1590, 300)) == (0, 0, 0)


def test_draw_game_pause_overlay(state, assets, surface):
    window, game = state
    game.pause_menu.is_paused = True
    draw_game(surface, window, game, assets)
    color = rgb(surface, (5, 400))
    assert all(0 < channel < 255 for channel in color)