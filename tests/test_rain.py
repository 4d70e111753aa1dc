import numpy as np
import pygame
import pytest

from constants import THEME_SETTINGS
from rain import MatrixRain
from scheduler import SchedulerState


@pytest.fixture
def make_rain(host, pygame_fonts):
    def factory(size=(1200, 700), params=None, **kwargs):
        params = {"seed": 1, **(params or {})}
        return MatrixRain(pygame.Surface(size), host, params, **kwargs)
    return factory


def test_initial_grid_matches_screen(make_rain):
    rain = make_rain()
    assert rain.state.width == 1200
    assert rain.grid.columns == 60
    assert rain.renderer.buffer.get_size() == (1200, 700)


def test_quality_selection_rebuilds(make_rain):
    rain = make_rain()
    rain.set_quality("medium")
    assert rain.grid.columns == 40
    rain.set_quality("auto")
    assert rain.state.active_quality == "medium"
    assert rain.grid.columns == 40
    rain.set_quality("low")
    assert rain.grid.columns == 30


def test_resize_rebuilds_with_density_step(make_rain):
    rain = make_rain(params={"quality": "medium"})
    new_screen = pygame.Surface((2400, 700))
    rain.resize(2400, 700, screen=new_screen)
    assert rain.screen is new_screen
    assert rain.grid.column_width == 60
    assert rain.grid.columns == 40


def test_theme_change_needs_no_rebuild(make_rain):
    rain = make_rain()
    drops = rain.grid.drops
    rain.set_theme("amber")
    assert rain.grid.drops is drops
    assert rain.state.theme == "amber"


def test_bounded_run_publishes_outputs(host, make_rain):
    colors, readouts = [], []
    rain = make_rain(
        size=(400, 300), params={"speed_ms": 16, "theme": "cycle"},
        on_fps=readouts.append, on_color=colors.append,
    )
    rain.start(0)
    for timestamp in range(20, 620, 20):
        host.dispatch(timestamp)
    rain.stop()

    assert rain.scheduler.status is SchedulerState.STOPPED
    assert host.pending == 0
    assert rain.scheduler.frames_drawn == 30
    assert readouts == ["FPS: 50"]
    assert rain.fps_text == "FPS: 50"
    palette = THEME_SETTINGS["cycle"]["colors"]
    assert colors[0] == palette[0]
    assert colors[-1] == palette[3]
    assert rain.color == colors[-1]


def test_speed_controls(make_rain):
    rain = make_rain()
    assert rain.speed_up() == 40
    assert rain.speed_down() == 50
    for _ in range(30):
        rain.speed_down()
    assert rain.state.speed == 200


def test_auto_downgrade_rebuilds_grid(host, make_rain):
    rain = make_rain(params={"quality": "auto", "speed_ms": 16})
    assert rain.grid.columns == 60
    rain.start(0)
    for timestamp in range(100, 1600, 100):
        host.dispatch(timestamp)
    assert rain.state.active_quality == "low"
    assert rain.grid.columns == 30


def test_same_seed_same_animation(host, pygame_fonts):
    rains = [MatrixRain(pygame.Surface((300, 200)), host, {"seed": 99, "speed_ms": 16})
             for _ in range(2)]
    for rain in rains:
        rain.start(0)
    for timestamp in range(20, 2000, 20):
        host.dispatch(timestamp)
    assert np.array_equal(rains[0].grid.drops, rains[1].grid.drops)
    assert np.array_equal(
        pygame.surfarray.array3d(rains[0].screen), pygame.surfarray.array3d(rains[1].screen)
    )


def test_invalid_config_is_rejected(host, pygame_fonts):
    with pytest.raises(ValueError):
        MatrixRain(pygame.Surface((100, 100)), host, {"theme": "pink"})
