"""Player input: menu clicks, resolution choices, jumping, crouching and pausing."""

from __future__ import annotations

from dataclasses import dataclass, field

from .game import reset_game
from .menu import pause_menu_buttons
from .sound import play_jump_sound, stop_all_sounds
from .types import (
    BASE_HEIGHT,
    FAST_FALL_VELOCITY,
    GROUND_HEIGHT,
    JUMP_FORCE,
    GameScreen,
    GameState,
    Rect,
    Vector2,
    WindowState,
)
from .window import (
    Display,
    change_resolution,
    handle_fullscreen_toggle,
    rescale_game,
    update_scale_factor,
)


@dataclass(frozen=True)
class InputSnapshot:
    """The input state read for one frame."""

    mouse_position: Vector2 = field(default_factory=lambda: Vector2(-1.0, -1.0))
    left_click: bool = False
    w_down: bool = False
    s_down: bool = False
    space_pressed: bool = False
    f11_pressed: bool = False
    o_pressed: bool = False


class QuitRequested(Exception):
    """Raised when the player picks Quit from the main menu."""


def is_button_hovered(rect: Rect, mouse_pos: Vector2) -> bool:
    return rect.contains_point(mouse_pos)


def is_button_hovered_scaled(rect: Rect, scale: float, mouse_pos: Vector2) -> bool:
    scaled = Rect(rect.x * scale, rect.y * scale, rect.width * scale, rect.height * scale)
    return scaled.contains_point(mouse_pos)


def handle_pause_menu_input(
    window: WindowState, game: GameState, inputs: InputSnapshot, display: Display
) -> None:
    """Track hover over the pause buttons and act on a click."""
    continue_button, main_menu_button = pause_menu_buttons(window)
    pause = game.pause_menu
    pause.continue_hovered = is_button_hovered(continue_button, inputs.mouse_position)
    pause.main_menu_hovered = is_button_hovered(main_menu_button, inputs.mouse_position)
    if not inputs.left_click:
        return
    if pause.continue_hovered:
        pause.is_paused = False
    elif pause.main_menu_hovered:
        pause.is_paused = False
        reset_game(game)
        window.game_screen = GameScreen.MENU
        window.width = display.width
        window.height = display.height
        update_scale_factor(window)


class InputController:
    """Turns each frame's input into changes to the window and game state."""

    def __init__(self) -> None:
        self.was_w_pressed = False

    def handle(
        self, window: WindowState, game: GameState, inputs: InputSnapshot, display: Display
    ) -> None:
        if game.pause_menu.is_paused:
            handle_pause_menu_input(window, game, inputs, display)
            return
        if window.game_screen is GameScreen.MENU:
            self._handle_main_menu(window, game, inputs)
            return
        if window.game_screen is GameScreen.RESOLUTION:
            self._handle_resolution_menu(window, game, inputs, display)
            return
        self._handle_play(window, game, inputs, display)

    @staticmethod
    def _handle_main_menu(window: WindowState, game: GameState, inputs: InputSnapshot) -> None:
        menu = window.menu
        mouse = inputs.mouse_position
        menu.play_hovered = is_button_hovered(menu.play_button.rect, mouse)
        menu.story_hovered = is_button_hovered(menu.story_button.rect, mouse)
        menu.quit_hovered = is_button_hovered(menu.quit_button.rect, mouse)
        menu.resolution_hovered = is_button_hovered(menu.resolution_button.rect, mouse)
        if not inputs.left_click:
            return
        if menu.play_hovered or menu.story_hovered:
            window.game_screen = GameScreen.PLAYING
            game.is_story_mode = menu.story_hovered and not menu.play_hovered
            reset_game(game)
        elif menu.quit_hovered:
            raise QuitRequested
        elif menu.resolution_hovered:
            window.game_screen = GameScreen.RESOLUTION

    @staticmethod
    def _handle_resolution_menu(
        window: WindowState, game: GameState, inputs: InputSnapshot, display: Display
    ) -> None:
        if not inputs.left_click:
            return
        last = len(window.resolutions) - 1
        for index, choice in enumerate(window.resolutions):
            if is_button_hovered(choice.rect, inputs.mouse_position):
                if index == last:
                    change_resolution(window, game, 0, 0, True, display)
                else:
                    change_resolution(window, game, choice.width, choice.height, False, display)
                break
        back = Rect(window.width // 2 - 100, window.height - 100, 200, 50)
        if is_button_hovered(back, inputs.mouse_position):
            window.game_screen = GameScreen.MENU

    def _handle_play(
        self, window: WindowState, game: GameState, inputs: InputSnapshot, display: Display
    ) -> None:
        is_w_pressed = inputs.w_down
        was_crouching = game.is_crouching

        if inputs.left_click:
            last = len(window.resolutions) - 1
            for index, choice in enumerate(window.resolutions):
                if choice.rect.contains_point(inputs.mouse_position):
                    if index == last:
                        handle_fullscreen_toggle(window, display)
                    else:
                        if window.is_fullscreen:
                            handle_fullscreen_toggle(window, display)
                        window.width = choice.width
                        window.height = choice.height
                        display.set_size(window.width, window.height)
                    rescale_game(game, window)
                    break

        if inputs.f11_pressed:
            handle_fullscreen_toggle(window, display)
        if game.game_won and inputs.space_pressed:
            stop_all_sounds(game)
            window.game_screen = GameScreen.MENU
            reset_game(game)
            return
        if game.game_over and not game.game_won and inputs.space_pressed:
            stop_all_sounds(game)
            reset_game(game)
            window.game_screen = GameScreen.PLAYING
            return

        game.is_crouching = inputs.s_down
        if not game.is_jumping and game.is_crouching != was_crouching:
            height = game.crouch_frame_height if game.is_crouching else game.run_frame_height
            game.base_position.y = BASE_HEIGHT - GROUND_HEIGHT - height
            game.current_frame = 0
            game.frame_time = 0.0
            frame = game.crouch_frames[0] if game.is_crouching else game.run_frames[0]
            game.base_size.x = frame.width
            game.base_size.y = height

        if not game.is_jumping and not game.is_crouching:
            if not self.was_w_pressed and is_w_pressed:
                game.is_jumping = True
                game.is_jump_charging = True
                game.jump_charge_time = 0.0
                game.base_jump_velocity = JUMP_FORCE
                play_jump_sound(game)
        if self.was_w_pressed and not is_w_pressed:
            game.is_jump_charging = False
        self.was_w_pressed = is_w_pressed

        if game.is_crouching and game.is_jumping:
            game.base_jump_velocity = FAST_FALL_VELOCITY

        if window.game_screen is GameScreen.PLAYING:
            if inputs.o_pressed:
                game.pause_menu.is_paused = not game.pause_menu.is_paused
            if game.pause_menu.is_paused:
                handle_pause_menu_input(window, game, inputs, display)