# dinorun

A side-scrolling runner built on pygame: jump over cacti, duck under birds and
last as long as you can. The score goes up by one every tenth of a second.

Once the score reaches 200 and a 20-second day has passed, night falls: the
screen fades to black over 0.2 seconds, stays dark for 10 seconds with only a
circle of light around the dinosaur, then fades back to day.

**Story mode** adds a boss fight. At a score of 80 no new cacti or birds are
spawned; at 100 the boss appears, the screen shakes and meteors start to fall
from the upper right. A meteor that lands and rolls past the dinosaur takes one
point off the boss's ten-point health bar. Touching a landed meteor ends the
run while the boss has more than one point left; with one point left, it
finishes the boss instead. Draining the bar wins the game.

## Installing

```
pip install .
```

## Playing

```
dinorun [--resources DIR] [--high-score FILE]
```

| Option         | Default         | Meaning                                  |
|----------------|-----------------|------------------------------------------|
| `--resources`  | `resources`     | Directory holding the images and sounds. |
| `--high-score` | `highscore.bin` | File the high score is read from and written to. |

The resources directory must hold `sprite.png` (the sprite sheet) and
`clouds.png`; the game stops with `FileNotFoundError` if either is missing.
It may also hold `jump.wav`, `fail.wav`, `win.wav` and `meteor.wav`; if any of
them is missing or no audio device can be opened, the game runs without sound.

The high score file holds one little-endian 32-bit integer. A missing or
short file counts as a high score of 0.

### Controls

| Key / action  | Effect                                                        |
|---------------|---------------------------------------------------------------|
| `W`           | Jump. Holding it during the first 0.3 s makes the jump higher. |
| `S`           | Crouch. While in the air, drop fast.                          |
| `O`           | Pause or resume; the pause menu has **Continue** and **Main Menu**. |
| `F11`         | Switch fullscreen on or off.                                  |
| `Space`       | After a game over, start a new run. After a win, go back to the menu. |
| `Esc`         | Close the game.                                               |
| Mouse click   | Choose a menu entry or a resolution.                          |

The main menu has **Play**, **Story Mode**, **Resolution** and **Quit**. The
resolution screen offers 1280x720, 1600x900, 1920x1080 and Fullscreen, and a
**Back** button. The game is laid out for 1600x900 and scales to the window
height.

## Using the modules

The game rules run without a window:

- `dinorun.game.new_game_state(high_score_path, sounds, rng)` builds a
  `GameState`; pass a `random.Random` for repeatable runs and `None` for
  `sounds` to play silently.
- `dinorun.window.create_window_state()` builds a `WindowState`, and
  `rescale_game(game, window)` lays the player and obstacles out for it.
- `dinorun.app.update_frame(window, game, delta_time)` advances one frame:
  physics, score, obstacles, the boss fight, clouds and the day/night cycle.
- `dinorun.controls.InputController().handle(window, game, inputs, display)`
  applies one frame of input, given as an `InputSnapshot`, with a
  `dinorun.window.Display` standing in for the screen. Choosing **Quit**
  raises `QuitRequested`.
- `dinorun.storage.load_high_score(path)` and `save_high_score(high_score, path)`
  read and write the high score file.

## What it does not do

- No images or sounds come with the package; supply them in the resources
  directory.
- The high score shown during play follows the score as soon as it is beaten,
  and the file is written only when a run is reset with a score above that
  shown high score. In practice a new best score is therefore seldom written
  to the file, and the next session may start from the older value.

## Running the tests

```
pip install .[test]
pytest
```