"""The game window and its main loop."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import pygame

from .controls import InputController, InputSnapshot, QuitRequested
from .draw import Assets, draw_game, update_animation
from .game import (
    new_game_state,
    update_boss_fight,
    update_clouds,
    update_day_night,
    update_obstacles,
    update_physics,
    update_score,
)
from .menu import draw_menu, draw_resolution_menu
from .sound import SoundBank, play_game_over_sound, play_win_sound
from .types import (
    BASE_HEIGHT,
    BASE_WIDTH,
    DEFAULT_HIGH_SCORE_PATH,
    GameScreen,
    GameState,
    Vector2,
    WindowState,
)
from .window import create_window_state, rescale_game

TARGET_FPS = 60
TITLE = "DinoGame"


class PygameDisplay:
    """A pygame window that the game resizes and switches to fullscreen."""

    def __init__(self, width: int, height: int, title: str = TITLE) -> None:
        if not pygame.display.get_init():
            pygame.display.init()
        pygame.display.set_caption(title)
        self.width = width
        self.height = height
        self.fullscreen = False
        self.surface = pygame.display.set_mode((width, height))

    def _apply(self) -> None:
        flags = pygame.FULLSCREEN if self.fullscreen else 0
        self.surface = pygame.display.set_mode((self.width, self.height), flags)

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._apply()

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self._apply()

    def monitor_size(self) -> tuple[int, int]:
        sizes = pygame.display.get_desktop_sizes()
        if not sizes:
            return self.width, self.height
        width, height = sizes[0]
        return width, height


def update_frame(window: WindowState, game: GameState, delta_time: float) -> None:
    """Advance the game by one frame while a run is on screen."""
    if window.game_screen is not GameScreen.PLAYING:
        return
    if not game.game_over and not game.pause_menu.is_paused:
        update_physics(game, window, delta_time)
        update_score(game, delta_time)
        update_obstacles(game, window, delta_time)
        update_boss_fight(game, window, delta_time)
        update_clouds(game, window, delta_time)
        if game.game_won:
            window.game_screen = GameScreen.GAME_OVER
            play_win_sound(game)
        if game.game_over and not game.game_won:
            play_game_over_sound(game)
        update_day_night(game, delta_time)
    update_animation(game, window, delta_time)


def _poll_input() -> InputSnapshot | None:
    """Read this frame's input, or None when the window should close."""
    left_click = space = f11 = o_key = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return None
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            left_click = True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return None
            space = space or event.key == pygame.K_SPACE
            f11 = f11 or event.key == pygame.K_F11
            o_key = o_key or event.key == pygame.K_o
    keys = pygame.key.get_pressed()
    x, y = pygame.mouse.get_pos()
    return InputSnapshot(
        mouse_position=Vector2(float(x), float(y)),
        left_click=left_click,
        w_down=bool(keys[pygame.K_w]),
        s_down=bool(keys[pygame.K_s]),
        space_pressed=space,
        f11_pressed=f11,
        o_pressed=o_key,
    )


def _load_sounds(directory: Path) -> SoundBank | None:
    try:
        return SoundBank.load(directory)
    except (FileNotFoundError, pygame.error):
        return None


def _run(display: PygameDisplay, window: WindowState, game: GameState, assets: Assets) -> None:
    clock = pygame.time.Clock()
    controller = InputController()
    while True:
        delta_time = clock.tick(TARGET_FPS) / 1000.0
        inputs = _poll_input()
        if inputs is None:
            return
        try:
            controller.handle(window, game, inputs, display)
        except QuitRequested:
            return
        update_frame(window, game, delta_time)
        surface = display.surface
        if window.game_screen is GameScreen.MENU:
            draw_menu(surface, window)
        elif window.game_screen is GameScreen.RESOLUTION:
            draw_resolution_menu(surface, window, inputs.mouse_position)
        else:
            draw_game(surface, window, game, assets)
        pygame.display.flip()


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    parser = argparse.ArgumentParser(prog="dinorun", description="A side-scrolling dinosaur runner.")
    parser.add_argument(
        "--resources", type=Path, default=Path("resources"), help="directory of images and sounds"
    )
    parser.add_argument(
        "--high-score", type=Path, default=DEFAULT_HIGH_SCORE_PATH, help="high score file"
    )
    args = parser.parse_args(argv)

    pygame.init()
    sounds: SoundBank | None = None
    try:
        display = PygameDisplay(int(BASE_WIDTH), int(BASE_HEIGHT))
        assets = Assets.load(args.resources)
        sounds = _load_sounds(args.resources)
        window = create_window_state()
        game = new_game_state(args.high_score, sounds)
        game.cloud_texture_width = float(assets.cloud_texture.get_width())
        rescale_game(game, window)
        _run(display, window, game, assets)
    finally:
        if sounds is not None:
            sounds.unload()
        pygame.quit()
    return 0