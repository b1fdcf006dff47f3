import pytest

from dinorun.storage import load_high_score, save_high_score


@pytest.mark.parametrize("score", [0, 1, 250, 2**31 - 1, -7])
def test_round_trip(tmp_path, score):
    path = tmp_path / "highscore.bin"
    save_high_score(score, path)
    assert load_high_score(path) == score


def test_missing_file_gives_zero(tmp_path):
    assert load_high_score(tmp_path / "nothing.bin") == 0


def test_short_file_gives_zero(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(b"\x01\x02")
    assert load_high_score(path) == 0


def test_file_holds_four_little_endian_bytes(tmp_path):
    path = tmp_path / "highscore.bin"
    save_high_score(5, path)
    assert path.read_bytes() == b"\x05\x00\x00\x00"


def test_extra_bytes_are_ignored(tmp_path):
    path = tmp_path / "long.bin"
    path.write_bytes(b"\x05\x00\x00\x00trailing")
    assert load_high_score(path) == 5


def test_save_overwrites(tmp_path):
    path = tmp_path / "highscore.bin"
    save_high_score(10, path)
    save_high_score(3, path)
    assert load_high_score(path) == 3


def test_unwritable_path_is_skipped(tmp_path):
    path = tmp_path / "no" / "such" / "dir" / "highscore.bin"
    save_high_score(42, path)
    assert not path.exists()
    assert load_high_score(path) == 0