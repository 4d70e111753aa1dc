# main.py
"""
Main entry point for the Matrix Rain animation.

This script orchestrates the entire animation lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the display and builds the rain controller and its controls.
4. Runs the frame loop until the user quits or `max_frames` is reached.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import setup_logging, load_config
import cProfile
import pstats
import io


def create_display(display_params: dict):
    """Opens the Pygame window described by the "display" config section."""
    import pygame
    from constants import DEFAULT_WINDOW_SIZE

    pygame.init()
    if display_params.get('fullscreen', False):
        display_info = pygame.display.Info()
        size = (display_info.current_w, display_info.current_h)
        screen = pygame.display.set_mode(size, pygame.FULLSCREEN)
    else:
        size = (
            display_params.get('width', DEFAULT_WINDOW_SIZE[0]),
            display_params.get('height', DEFAULT_WINDOW_SIZE[1]),
        )
        screen = pygame.display.set_mode(size, pygame.RESIZABLE)
    pygame.display.set_caption(display_params.get('caption', "Matrix Rain"))
    logging.info(f"Display initialized ({size[0]}x{size[1]}).")
    return screen


def main(config_path: str = 'config.json'):
    """
    The main function to run the animation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Matrix Rain Starting ---")

    rain_params = config.get('rain', {})
    display_params = config.get('display', {})
    run_params = config.get('run_control', {})

    import pygame
    from host import PygameFrameHost
    from rain import MatrixRain
    from controls import ControlSurface
    from constants import DEFAULT_FPS_CAP

    # --- Component Initialization ---
    screen = create_display(display_params)
    host = PygameFrameHost(fps_cap=display_params.get('fps_cap', DEFAULT_FPS_CAP))
    try:
        rain = MatrixRain(screen, host, rain_params)
    except ValueError as e:
        logging.critical(f"Invalid rain configuration: {e}")
        pygame.quit()
        return
    controls = ControlSurface(rain, host)

    log_throttle = run_params.get('log_throttle_frames', 600)
    max_frames = run_params.get('max_frames', 0)

    def log_progress(cycle: int):
        # Hot loops must throttle logs
        if cycle % log_throttle == 0:
            logging.info(
                f"Loop cycle {cycle} | drawn frames: {rain.scheduler.frames_drawn} | "
                f"{rain.fps_text or 'FPS: --'} | quality: {rain.state.active_quality}"
            )

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    rain.start(host.now())
    if profiler is not None:
        profiler.enable()
    host.run(controls, max_cycles=max_frames, on_cycle=log_progress)
    if profiler is not None:
        profiler.disable()

    rain.stop()
    pygame.quit()
    logging.info("Animation loop finished.")

    if profiler is not None:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20) # Print top 20 slowest functions
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Matrix Rain Shutting Down ---")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else 'config.json')
