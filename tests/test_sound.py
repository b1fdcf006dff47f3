import pytest

from dinorun.sound import (
    SoundBank,
    play_game_over_sound,
    play_jump_sound,
    play_meteor_impact_sound,
    play_win_sound,
    stop_all_sounds,
)
from dinorun.types import GameState


class FakeSound:
    def __init__(self):
        self.plays = 0
        self.stops = 0

    def play(self):
        self.plays += 1

    def stop(self):
        self.stops += 1


@pytest.fixture
def bank():
    return SoundBank(FakeSound(), FakeSound(), FakeSound(), FakeSound())


@pytest.fixture
def game(bank):
    return GameState(sounds=bank)


def test_jump_sound_plays_every_time(game, bank):
    play_jump_sound(game)
    play_jump_sound(game)
    assert bank.jump.plays == 2
    assert game.sound_played is False


def test_game_over_sound_plays_once(game, bank):
    play_game_over_sound(game)
    play_game_over_sound(game)
    assert bank.game_over.plays == 1
    assert game.sound_played is True


def test_win_sound_blocked_after_game_over_sound(game, bank):
    play_game_over_sound(game)
    play_win_sound(game)
    assert bank.win.plays == 0


def test_win_sound_plays_once(game, bank):
    play_win_sound(game)
    play_win_sound(game)
    assert bank.win.plays == 1


def test_meteor_sound_plays(game, bank):
    play_meteor_impact_sound(game)
    assert bank.meteor_impact.plays == 1


def test_stop_all_stops_each_sound(game, bank):
    stop_all_sounds(game)
    assert [s.stops for s in (bank.jump, bank.game_over, bank.win, bank.meteor_impact)] == [1, 1, 1, 1]


def test_unload_stops_each_sound(bank):
    bank.unload()
    assert all(s.stops == 1 for s in (bank.jump, bank.game_over, bank.win, bank.meteor_impact))


def test_game_over_flag_set_without_sounds():
    game = GameState()
    play_game_over_sound(game)
    assert game.sound_played is True


def test_load_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SoundBank.load(tmp_path / "missing")