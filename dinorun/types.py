"""Shared game constants and the state records the game works on."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any

NUM_RESOLUTIONS = 4
GROUND_HEIGHT = 100
FRAME_DELAY = 0.15
GRAVITY = 1.8
JUMP_FORCE = -5.0
MAX_JUMP_CHARGE_TIME = 0.3
JUMP_CHARGE_FORCE = -4.5
FAST_FALL_VELOCITY = 20.0
MAX_OBSTACLES = 7
MIN_SPAWN_INTERVAL = 1.5
MAX_SPAWN_INTERVAL = 2.0
OBSTACLE_SPEED = 700.0
BIRD_ANIM_DELAY = 0.2
COLLISION_OFFSET = 3
DAY_DURATION = 20.0
NIGHT_DURATION = 10.0
FADE_DURATION = 0.2
LIGHT_RADIUS = 400.0
NIGHT_ALPHA = 255
FADE_DISTANCE = 100.0
BOSS_THRESHOLD_SCORE = 100
BOSS_HP_MAX = 3
SCREEN_SHAKE_DURATION = 1.0
SCREEN_SHAKE_INTENSITY = 10.0
PRE_BOSS_THRESHOLD = BOSS_THRESHOLD_SCORE - 20
MAX_METEORS = 15
METEOR_SPAWN_INTERVAL_MIN = 0.5
METEOR_SPAWN_INTERVAL_MAX = 1.5
METEOR_FALL_SPEED_X = 700.0
METEOR_FALL_SPEED_Y = 1000.0
METEOR_ANIM_DELAY = 0.08
METEOR_GROUND_LIFETIME = 10.0
METEOR_IMPACT_FRAMES = 3
MAX_CLOUDS = 4
CLOUD_MIN_SPEED = 50.0
CLOUD_MAX_SPEED = 150.0
CLOUD_MIN_ALPHA = 0.5
CLOUD_MAX_ALPHA = 0.9
CLOUD_SPAWN_INTERVAL_MIN = 2.0
CLOUD_SPAWN_INTERVAL_MAX = 5.0

BASE_WIDTH = 1600.0
BASE_HEIGHT = 900.0

INITIAL_BOSS_HP = 10
INITIAL_PLAYER_HP = 100
RUN_FRAME_HEIGHT = 94.0
CROUCH_FRAME_HEIGHT = 60.0
DEFAULT_HIGH_SCORE_PATH = Path("highscore.bin")


@dataclass
class Vector2:
    """A 2D point or size."""

    x: float = 0.0
    y: float = 0.0


BASE_RESOLUTION = Vector2(BASE_WIDTH, BASE_HEIGHT)


@dataclass
class Rect:
    """An axis-aligned rectangle."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def collides(self, other: Rect) -> bool:
        """Return True if the two rectangles overlap."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )

    def contains_point(self, point: Vector2) -> bool:
        """Return True if the point lies inside (right and bottom edges excluded)."""
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )


class GameScreen(Enum):
    MENU = 0
    PLAYING = 1
    GAME_OVER = 2
    RESOLUTION = 3


class ObstacleType(IntEnum):
    CACTUS_1 = 0
    CACTUS_2 = 1
    CACTUS_3 = 2
    CACTUS_4 = 3
    CACTUS_5 = 4
    CACTUS_6 = 5
    BIRD = 6


class MeteorState(Enum):
    FALLING = 0
    IMPACT = 1
    INACTIVE = 2


@dataclass(frozen=True)
class ObstacleDimensions:
    width: float
    height: float
    y_offset: float = 0.0


CACTUS_DIMENSIONS: dict[ObstacleType, ObstacleDimensions] = {
    ObstacleType.CACTUS_1: ObstacleDimensions(34, 68, 0),
    ObstacleType.CACTUS_2: ObstacleDimensions(68, 68, 0),
    ObstacleType.CACTUS_3: ObstacleDimensions(102, 68, 0),
    ObstacleType.CACTUS_4: ObstacleDimensions(50, 94, 0),
    ObstacleType.CACTUS_5: ObstacleDimensions(100, 94, 0),
    ObstacleType.CACTUS_6: ObstacleDimensions(150, 95, 0),
    ObstacleType.BIRD: ObstacleDimensions(93, 80, -61),
}


@dataclass
class MenuButton:
    rect: Rect = field(default_factory=Rect)
    text: str = ""
    text_width: int = 0


@dataclass
class MenuState:
    play_button: MenuButton = field(default_factory=MenuButton)
    story_button: MenuButton = field(default_factory=MenuButton)
    quit_button: MenuButton = field(default_factory=MenuButton)
    resolution_button: MenuButton = field(default_factory=MenuButton)
    play_hovered: bool = False
    story_hovered: bool = False
    quit_hovered: bool = False
    resolution_hovered: bool = False


@dataclass
class ResolutionButton:
    rect: Rect = field(default_factory=Rect)
    text: str = ""
    text_width: int = 0
    width: int = 0
    height: int = 0


@dataclass
class Obstacle:
    rect: Rect = field(default_factory=Rect)
    collision_rect: Rect = field(default_factory=Rect)
    active: bool = False
    type: ObstacleType = ObstacleType.CACTUS_1
    current_frame: int = 0
    frame_time: float = 0.0
    has_passed_player: bool = False


@dataclass
class ObstaclePool:
    obstacles: list[Obstacle] = field(
        default_factory=lambda: [Obstacle() for _ in range(MAX_OBSTACLES)]
    )
    spawn_timer: float = 0.0
    next_spawn_time: float = 0.0


@dataclass
class PauseMenuState:
    continue_button: Rect = field(default_factory=Rect)
    main_menu_button: Rect = field(default_factory=Rect)
    continue_hovered: bool = False
    main_menu_hovered: bool = False
    is_paused: bool = False


@dataclass
class Meteor:
    position: Vector2 = field(default_factory=Vector2)
    rect: Rect = field(default_factory=Rect)
    collision_rect: Rect = field(default_factory=Rect)
    state: MeteorState = MeteorState.INACTIVE
    current_frame: int = 0
    frame_time: float = 0.0
    impact_time: float = 0.0
    active: bool = False
    has_dealt_damage: bool = False


@dataclass
class Cloud:
    position: Vector2 = field(default_factory=Vector2)
    speed: float = 0.0
    scale: float = 0.0
    alpha: float = 0.0
    active: bool = False


def _run_frames() -> tuple[Rect, Rect]:
    return (Rect(1514, -4, 88, 94), Rect(1602, -4, 88, 94))


def _crouch_frames() -> tuple[Rect, Rect]:
    return (Rect(1866, 34, 118, 60), Rect(1984, 34, 118, 60))


@dataclass
class GameState:
    """Everything that changes while a run is played."""

    rect: Rect = field(default_factory=Rect)
    screen_position: Vector2 = field(default_factory=Vector2)
    base_position: Vector2 = field(
        default_factory=lambda: Vector2(
            BASE_WIDTH * 0.1, BASE_HEIGHT - GROUND_HEIGHT - RUN_FRAME_HEIGHT
        )
    )
    base_size: Vector2 = field(default_factory=lambda: Vector2(88, 94))
    base_jump_velocity: float = 0.0
    is_jumping: bool = False
    is_crouching: bool = False
    is_jump_charging: bool = False
    jump_charge_time: float = 0.0
    run_frames: tuple[Rect, Rect] = field(default_factory=_run_frames)
    crouch_frames: tuple[Rect, Rect] = field(default_factory=_crouch_frames)
    current_frame: int = 0
    frame_time: float = 0.0
    run_frame_height: float = RUN_FRAME_HEIGHT
    crouch_frame_height: float = CROUCH_FRAME_HEIGHT
    score: int = 0
    high_score: int = 0
    score_timer: float = 0.0
    obstacles: ObstaclePool = field(default_factory=ObstaclePool)
    game_over: bool = False
    night_mode_active: bool = False
    night_cycle_timer: float = 0.0
    is_night: bool = False
    day_cycle_timer: float = 0.0
    night_alpha: float = 0.0
    pause_menu: PauseMenuState = field(default_factory=PauseMenuState)
    is_story_mode: bool = False
    boss_active: bool = False
    boss_hp: int = INITIAL_BOSS_HP
    screen_shake_timer: float = 0.0
    screen_shake_intensity: float = 0.0
    meteors: list[Meteor] = field(
        default_factory=lambda: [Meteor() for _ in range(MAX_METEORS)]
    )
    meteor_spawn_timer: float = 0.0
    next_meteor_spawn_time: float = 0.0
    hp: int = INITIAL_PLAYER_HP
    game_won: bool = False
    sounds: Any = None
    sound_played: bool = False
    cloud_texture_width: float = 0.0
    clouds: list[Cloud] = field(
        default_factory=lambda: [Cloud() for _ in range(MAX_CLOUDS)]
    )
    cloud_spawn_timer: float = 0.0
    next_cloud_spawn_time: float = 0.0
    high_score_path: Path = DEFAULT_HIGH_SCORE_PATH
    rng: random.Random = field(default_factory=random.Random)

    @property
    def current_frame_rect(self) -> Rect:
        """The sprite frame currently shown for the player."""
        frames = self.crouch_frames if self.is_crouching else self.run_frames
        return frames[self.current_frame]


@dataclass
class WindowState:
    """Window size, scaling and the menu layout."""

    width: int = int(BASE_WIDTH)
    height: int = int(BASE_HEIGHT)
    is_fullscreen: bool = False
    scale_factor: float = 0.0
    resolutions: list[ResolutionButton] = field(
        default_factory=lambda: [ResolutionButton() for _ in range(NUM_RESOLUTIONS)]
    )
    menu: MenuState = field(default_factory=MenuState)
    game_screen: GameScreen = GameScreen.MENU