"""Window sizing, scaling and resolution handling."""

from __future__ import annotations

from dataclasses import dataclass

from .menu import _measure_text, init_menu_buttons
from .types import (
    BASE_HEIGHT,
    BASE_WIDTH,
    CACTUS_DIMENSIONS,
    COLLISION_OFFSET,
    GROUND_HEIGHT,
    NUM_RESOLUTIONS,
    GameScreen,
    GameState,
    Rect,
    ResolutionButton,
    Vector2,
    WindowState,
)

_RESOLUTION_PRESETS = (
    ("1280x720", 1280, 720),
    ("1600x900", 1600, 900),
    ("1920x1080", 1920, 1080),
    ("Fullscreen", 0, 0),
)


@dataclass
class Display:
    """The screen the game draws to: its size, fullscreen flag and monitor."""

    width: int = int(BASE_WIDTH)
    height: int = int(BASE_HEIGHT)
    monitor_width: int = 1920
    monitor_height: int = 1080
    fullscreen: bool = False

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen

    def monitor_size(self) -> tuple[int, int]:
        return self.monitor_width, self.monitor_height


def create_window_state() -> WindowState:
    """A window state at the base resolution showing the main menu."""
    window = WindowState()
    window.is_fullscreen = False
    window.resolutions = [
        ResolutionButton(text=text, text_width=_measure_text(text, 20), width=width, height=height)
        for text, width, height in _RESOLUTION_PRESETS
    ]
    update_resolution_button_positions(window)
    window.game_screen = GameScreen.MENU
    init_menu_buttons(window)
    return window


def update_scale_factor(window: WindowState) -> None:
    window.scale_factor = window.height / BASE_HEIGHT


def rescale_game(game: GameState, window: WindowState) -> None:
    """Recompute every on-screen size and position after a window change."""
    update_scale_factor(window)
    scale = window.scale_factor
    game.screen_position = Vector2(game.base_position.x * scale, game.base_position.y * scale)
    frame = game.current_frame_rect
    game.rect = Rect(
        game.screen_position.x,
        game.screen_position.y,
        frame.width * scale,
        frame.height * scale,
    )
    ground_y = window.height - GROUND_HEIGHT * scale
    offset = COLLISION_OFFSET * scale
    for obstacle in game.obstacles.obstacles:
        if not obstacle.active:
            continue
        dims = CACTUS_DIMENSIONS[obstacle.type]
        obstacle.rect.width = dims.width * scale
        obstacle.rect.height = dims.height * scale
        obstacle.rect.y = ground_y - dims.height * scale + dims.y_offset * scale
        obstacle.collision_rect = Rect(
            obstacle.rect.x + offset,
            obstacle.rect.y + offset,
            obstacle.rect.width - 2 * offset,
            obstacle.rect.height - 2 * offset,
        )
    update_button_positions(window)
    update_resolution_button_positions(window)
    init_menu_buttons(window)


def change_resolution(
    window: WindowState,
    game: GameState,
    width: int,
    height: int,
    fullscreen: bool,
    display: Display,
) -> None:
    """Switch to fullscreen or to a fixed window size, then rescale."""
    if fullscreen:
        if not window.is_fullscreen:
            handle_fullscreen_toggle(window, display)
    else:
        if window.is_fullscreen:
            handle_fullscreen_toggle(window, display)
        window.width = width
        window.height = height
        display.set_size(width, height)
    rescale_game(game, window)


def handle_fullscreen_toggle(window: WindowState, display: Display) -> None:
    """Enter fullscreen at the monitor's size, or leave it."""
    if window.is_fullscreen:
        display.toggle_fullscreen()
        display.set_size(window.width, window.height)
    else:
        monitor_width, monitor_height = display.monitor_size()
        display.set_size(monitor_width, monitor_height)
        display.toggle_fullscreen()
        window.width = monitor_width
        window.height = monitor_height
    window.is_fullscreen = not window.is_fullscreen


def update_button_positions(window: WindowState) -> None:
    """Stack the resolution buttons in the top-right corner."""
    width = 120.0
    height = 30.0
    start_x = window.width - width - 20
    start_y = 20.0
    for index, choice in enumerate(window.resolutions[:NUM_RESOLUTIONS]):
        choice.rect = Rect(start_x, start_y + index * (height + 10), width, height)


def update_resolution_button_positions(window: WindowState) -> None:
    """Stack the resolution buttons in the centre of the window."""
    width = 200.0
    height = 50.0
    spacing = 20.0
    total_height = NUM_RESOLUTIONS * height + (NUM_RESOLUTIONS - 1) * spacing
    start_x = window.width // 2 - width / 2
    start_y = window.height // 2 - total_height / 2
    for index, choice in enumerate(window.resolutions[:NUM_RESOLUTIONS]):
        choice.rect = Rect(start_x, start_y + index * (height + spacing), width, height)