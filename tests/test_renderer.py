import logging

import numpy as np
import pygame
import pytest

from constants import GLYPH_COUNT, THEME_SETTINGS
from grid import ColumnGrid
from renderer import FrameRenderer
from state import RainState


@pytest.fixture
def setup(pygame_fonts):
    state = RainState()
    rng = np.random.default_rng(3)
    grid = ColumnGrid(rng)
    grid.rebuild(200, 100, "high")
    renderer = FrameRenderer(state, grid, rng)
    target = pygame.Surface((200, 100))
    return state, grid, renderer, target


def test_frame_advances_every_column(setup):
    state, grid, renderer, target = setup
    assert grid.columns == 10

    color = renderer.render_frame(0, target)

    assert color == "#00ff00"
    assert grid.drops.tolist() == [2] * 10


def test_visible_surface_is_replaced_by_buffer(setup):
    state, grid, renderer, target = setup
    target.fill((255, 0, 0))

    renderer.render_frame(0, target)

    assert np.array_equal(
        pygame.surfarray.array3d(target), pygame.surfarray.array3d(renderer.buffer)
    )


def test_previous_frames_fade_by_trail_alpha(setup):
    state, grid, renderer, target = setup
    renderer.ensure_buffer((200, 100)).fill((255, 255, 255))

    renderer.render_frame(0, target)

    # Bottom-right corner is far below every glyph of this frame.
    r, g, b, _ = target.get_at((199, 99))
    assert 230 < r < 255
    assert r == g == b


def test_buffer_is_reused_until_size_changes(setup):
    state, grid, renderer, target = setup
    renderer.render_frame(0, target)
    first = renderer.buffer
    renderer.render_frame(50, target)
    assert renderer.buffer is first

    bigger = pygame.Surface((300, 120))
    renderer.render_frame(100, bigger)
    assert renderer.buffer is not first
    assert renderer.buffer.get_size() == (300, 120)


def test_cycle_theme_color_follows_timestamp(setup):
    state, grid, renderer, target = setup
    state.select_theme("cycle")
    palette = THEME_SETTINGS["cycle"]["colors"]

    assert renderer.render_frame(0, target) == palette[0]
    assert renderer.render_frame(250, target) == palette[1]


def test_glyph_images_are_cached_per_color(setup):
    state, grid, renderer, target = setup
    glyphs = renderer.glyphs_for("#ffb000")
    assert len(glyphs) == GLYPH_COUNT
    assert renderer.glyphs_for("#ffb000") is glyphs
    assert renderer.glyphs_for("#00f6ff") is not glyphs


def test_same_seed_draws_same_pixels(pygame_fonts):
    surfaces = []
    for _ in range(2):
        rng = np.random.default_rng(11)
        grid = ColumnGrid(rng)
        grid.rebuild(240, 120, "medium")
        renderer = FrameRenderer(RainState(), grid, rng)
        target = pygame.Surface((240, 120))
        for timestamp in range(0, 1000, 50):
            renderer.render_frame(timestamp, target)
        surfaces.append(pygame.surfarray.array3d(target))
    assert np.array_equal(surfaces[0], surfaces[1])


def test_glyph_baseline_sits_on_drop_row(setup):
    state, grid, renderer, target = setup
    ascent = renderer.font.get_ascent()
    assert ascent > 0

    assert renderer.glyph_position(3, 5) == (60, 5 * 20 - ascent)
    # A drop restarted at row 0 is drawn just above the top edge.
    x, y = renderer.glyph_position(0, 0)
    assert y + ascent == 0
    assert y < 0


def test_missing_glyph_font_is_logged(setup, monkeypatch, caplog):
    state, grid, renderer, target = setup
    monkeypatch.setattr(pygame.font, "match_font", lambda name: None)

    with caplog.at_level(logging.WARNING):
        font = renderer.font

    assert "glyph fonts" in caplog.text
    assert font.size("A")[1] > 0
    assert len(renderer.glyphs_for("#00ff00")) == GLYPH_COUNT
