"""Game sound effects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pygame

from .types import GameState

_SOUND_FILES = {
    "jump": "jump.wav",
    "game_over": "fail.wav",
    "win": "win.wav",
    "meteor_impact": "meteor.wav",
}


class Playable(Protocol):
    def play(self) -> object: ...

    def stop(self) -> object: ...


@dataclass
class SoundBank:
    """The four sound effects the game plays."""

    jump: Playable
    game_over: Playable
    win: Playable
    meteor_impact: Playable

    @classmethod
    def load(cls, directory: str | Path) -> SoundBank:
        """Start the audio device and load the sounds from a directory."""
        directory = Path(directory)
        paths = {name: directory / filename for name, filename in _SOUND_FILES.items()}
        for path in paths.values():
            if not path.is_file():
                raise FileNotFoundError(f"sound file not found: {path}")
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        return cls(**{name: pygame.mixer.Sound(str(path)) for name, path in paths.items()})

    def _all(self) -> tuple[Playable, ...]:
        return (self.jump, self.game_over, self.win, self.meteor_impact)

    def unload(self) -> None:
        """Stop every sound and close the audio device."""
        for sound in self._all():
            sound.stop()
        if pygame.mixer.get_init():
            pygame.mixer.quit()


def play_jump_sound(game: GameState) -> None:
    if game.sounds is not None:
        game.sounds.jump.play()


def play_game_over_sound(game: GameState) -> None:
    """Play the game-over sound once per run."""
    if not game.sound_played:
        if game.sounds is not None:
            game.sounds.game_over.play()
        game.sound_played = True


def play_win_sound(game: GameState) -> None:
    """Play the win sound once per run."""
    if not game.sound_played:
        if game.sounds is not None:
            game.sounds.win.play()
        game.sound_played = True


def play_meteor_impact_sound(game: GameState) -> None:
    if game.sounds is not None:
        game.sounds.meteor_impact.play()


def stop_all_sounds(game: GameState) -> None:
    if game.sounds is not None:
        for sound in game.sounds._all():
            sound.stop()