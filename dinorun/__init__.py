"""A side-scrolling dinosaur runner on pygame, with a day/night cycle and a story-mode meteor boss fight."""

__version__ = "0.1.0"