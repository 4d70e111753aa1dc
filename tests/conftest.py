import os

# Headless Pygame for every test module.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import logging
import numpy as np
import pygame
import pytest

from host import FrameHost


class FixedRng:
    """Stand-in generator whose uniform draws always return `value`."""
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self, size=None):
        self.calls += 1
        if size is None:
            return self.value
        return np.full(size, self.value, dtype=np.float64)


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def host():
    return FrameHost()


@pytest.fixture
def pygame_fonts():
    pygame.font.init()
    yield
    # Fonts are re-initialized by every renderer, nothing to tear down.


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
