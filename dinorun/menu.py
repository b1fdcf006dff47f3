"""Main menu, resolution menu and pause menu layout and drawing."""

from __future__ import annotations

from functools import lru_cache

import pygame

from .types import (
    NUM_RESOLUTIONS,
    GameState,
    MenuButton,
    Rect,
    Vector2,
    WindowState,
)

RAYWHITE = (245, 245, 245)
DARKGRAY = (80, 80, 80)
LIGHTGRAY = (200, 200, 200)
SKYBLUE = (102, 191, 255)
DARKBLUE = (0, 82, 172)
BLACK = (0, 0, 0)

_BUTTON_WIDTH = 200.0
_BUTTON_HEIGHT = 50.0
_BUTTON_SPACING = 20.0
_PAUSE_OVERLAY_ALPHA = 150


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _font_size(size: float) -> int:
    return max(1, int(size))


def _measure_text(text: str, font_size: float) -> int:
    """Width in pixels of the text drawn at the given size."""
    if not text:
        return 0
    return _font(_font_size(font_size)).size(text)[0]


def _draw_text(
    surface: pygame.Surface,
    text: str,
    x: float,
    y: float,
    font_size: float,
    color: tuple[int, ...],
) -> None:
    if not text:
        return
    rendered = _font(_font_size(font_size)).render(text, True, color)
    surface.blit(rendered, (int(x), int(y)))


def _pg_rect(rect: Rect) -> pygame.Rect:
    return pygame.Rect(int(rect.x), int(rect.y), int(rect.width), int(rect.height))


def _effective_scale(window: WindowState) -> float:
    return window.scale_factor if window.scale_factor > 0 else 1.0


def _resolution_back_button(window: WindowState) -> Rect:
    return Rect(window.width // 2 - 100, window.height - 100, 200, 50)


def init_menu_buttons(window: WindowState) -> None:
    """Lay out the main menu buttons for the current window size."""
    scale = _effective_scale(window)
    width = _BUTTON_WIDTH * scale
    height = _BUTTON_HEIGHT * scale
    spacing = _BUTTON_SPACING * scale
    x = window.width // 2 - width / 2
    start_y = window.height * 0.40
    text_size = 30 * scale

    def button(index: int, text: str) -> MenuButton:
        rect = Rect(x, start_y + index * (height + spacing), width, height)
        return MenuButton(rect=rect, text=text, text_width=_measure_text(text, text_size))

    window.menu.play_button = button(0, "Play")
    window.menu.story_button = button(1, "Story Mode")
    window.menu.resolution_button = button(2, "Resolution")
    window.menu.quit_button = button(3, "Quit")


def pause_menu_buttons(window: WindowState) -> tuple[Rect, Rect]:
    """The continue and main-menu button rectangles, centred in the window."""
    scale = _effective_scale(window)
    width = _BUTTON_WIDTH * scale
    height = _BUTTON_HEIGHT * scale
    spacing = _BUTTON_SPACING * scale
    total_height = 2 * height + spacing
    start_x = (window.width - width) / 2
    start_y = (window.height - total_height) / 2
    continue_button = Rect(start_x, start_y, width, height)
    main_menu_button = Rect(start_x, start_y + height + spacing, width, height)
    return continue_button, main_menu_button


def init_pause_menu(game: GameState, window: WindowState) -> None:
    """Place the pause menu buttons and clear the paused flag."""
    continue_button, main_menu_button = pause_menu_buttons(window)
    game.pause_menu.continue_button = continue_button
    game.pause_menu.main_menu_button = main_menu_button
    game.pause_menu.is_paused = False


def draw_menu(surface: pygame.Surface, window: WindowState) -> None:
    """Draw the title screen with its four buttons."""
    surface.fill(RAYWHITE)
    scale = window.scale_factor
    title = "DINO GAME"
    title_size = 60 * scale
    title_width = _measure_text(title, title_size)
    _draw_text(
        surface,
        title,
        window.width // 2 - title_width // 2,
        150 * scale,
        title_size,
        DARKGRAY,
    )
    text_size = 30 * scale
    menu = window.menu
    entries = (
        (menu.play_button, menu.play_hovered),
        (menu.story_button, menu.story_hovered),
        (menu.resolution_button, menu.resolution_hovered),
        (menu.quit_button, menu.quit_hovered),
    )
    for button, hovered in entries:
        pygame.draw.rect(surface, SKYBLUE if hovered else LIGHTGRAY, _pg_rect(button.rect))
        _draw_text(
            surface,
            button.text,
            button.rect.x + (button.rect.width - button.text_width) / 2,
            button.rect.y + 10 * scale,
            text_size,
            DARKBLUE,
        )


def draw_resolution_menu(
    surface: pygame.Surface, window: WindowState, mouse_pos: Vector2
) -> None:
    """Draw the resolution choices and the back button."""
    surface.fill(RAYWHITE)
    title = "RESOLUTION SETTINGS"
    _draw_text(
        surface,
        title,
        window.width // 2 - _measure_text(title, 40) // 2,
        100,
        40,
        DARKGRAY,
    )
    for choice in window.resolutions[:NUM_RESOLUTIONS]:
        color = SKYBLUE if choice.rect.contains_point(mouse_pos) else LIGHTGRAY
        rect = _pg_rect(choice.rect)
        pygame.draw.rect(surface, color, rect)
        pygame.draw.rect(surface, DARKGRAY, rect, width=2)
        _draw_text(
            surface,
            choice.text,
            choice.rect.x + (choice.rect.width - choice.text_width) / 2,
            choice.rect.y + 15,
            20,
            BLACK,
        )
    back = _resolution_back_button(window)
    back_text = "Back"
    rect = _pg_rect(back)
    pygame.draw.rect(surface, SKYBLUE if back.contains_point(mouse_pos) else LIGHTGRAY, rect)
    pygame.draw.rect(surface, DARKGRAY, rect, width=2)
    _draw_text(
        surface,
        back_text,
        back.x + (back.width - _measure_text(back_text, 30)) / 2,
        back.y + 10,
        30,
        DARKBLUE,
    )


def draw_pause_menu(surface: pygame.Surface, window: WindowState, game: GameState) -> None:
    """Darken the screen and draw the pause menu buttons over it."""
    scale = _effective_scale(window)
    text_size = 30 * scale
    overlay = pygame.Surface((max(0, window.width), max(0, window.height)), pygame.SRCALPHA)
    overlay.fill((*BLACK, _PAUSE_OVERLAY_ALPHA))
    surface.blit(overlay, (0, 0))

    continue_button, main_menu_button = pause_menu_buttons(window)
    entries = (
        (continue_button, "Continue", game.pause_menu.continue_hovered),
        (main_menu_button, "Main Menu", game.pause_menu.main_menu_hovered),
    )
    for rect, label, hovered in entries:
        pygame.draw.rect(surface, SKYBLUE if hovered else LIGHTGRAY, _pg_rect(rect))
        text_width = _measure_text(label, text_size)
        _draw_text(
            surface,
            label,
            rect.x + (rect.width - text_width) / 2,
            rect.y + 10 * scale,
            text_size,
            DARKBLUE,
        )