import argparse
import logging
import random

import numpy as np
import pygame
from matplotlib import pyplot as plt

from config import (
    BLACK,
    BODY_SIZE,
    DEFAULT_CONFIG,
    FOOD_COLOR,
    FOOD_SIZE,
    FPS,
    HEAD_SIZE,
    SNAKE_BODY_COLOR,
    SNAKE_HEAD_COLOR,
    WINDOW_SIZE,
)
from simulation import Simulation
from snake import Direction

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Arrow keys plus WASD
KEY_BINDINGS = {
    Direction.UP: (pygame.K_UP, pygame.K_w),
    Direction.DOWN: (pygame.K_DOWN, pygame.K_s),
    Direction.LEFT: (pygame.K_LEFT, pygame.K_a),
    Direction.RIGHT: (pygame.K_RIGHT, pygame.K_d),
}


def read_pressed_keys(keys):
    """Directions whose key is currently held, from a pygame.key.get_pressed() style lookup."""
    return {direction for direction, codes in KEY_BINDINGS.items() if any(keys[code] for code in codes)}


def arena_to_screen(pos, window_bound, arena_bound):
    """
    Centre of cell `pos` in coordinates centred on the window.

    e.g. arena_to_screen(0, 100, 10) == -45.0
    """
    tile = window_bound / arena_bound
    return pos / arena_bound * window_bound - window_bound / 2 + tile / 2


def cell_rect(position, size, window_size, arena_width, arena_height):
    """pygame (left, top, width, height) for a sprite of relative `size` on a grid cell."""
    width = size / arena_width * window_size
    height = size / arena_height * window_size
    # pygame has its origin at the top left with y growing downwards
    centre_x = window_size / 2 + arena_to_screen(position.x, window_size, arena_width)
    centre_y = window_size / 2 - arena_to_screen(position.y, window_size, arena_height)
    return (centre_x - width / 2, centre_y - height / 2, width, height)


def draw_snake(surface, simulation, window_size=WINDOW_SIZE):
    config = simulation.config
    body = simulation.snake.get_body()
    for segment in body[1:]:
        pygame.draw.rect(surface, SNAKE_BODY_COLOR,
                         cell_rect(segment, BODY_SIZE, window_size, config.arena_width, config.arena_height))
    pygame.draw.rect(surface, SNAKE_HEAD_COLOR,
                     cell_rect(body[0], HEAD_SIZE, window_size, config.arena_width, config.arena_height))


def draw_food(surface, simulation, window_size=WINDOW_SIZE):
    config = simulation.config
    for position in simulation.food_positions():
        pygame.draw.rect(surface, FOOD_COLOR,
                         cell_rect(position, FOOD_SIZE, window_size, config.arena_width, config.arena_height))


def game_loop(screen, clock, simulation, window_size=WINDOW_SIZE):
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return

        dt = clock.tick(FPS) / 1000.0
        simulation.frame(read_pressed_keys(pygame.key.get_pressed()), dt)

        screen.fill(BLACK)
        draw_snake(screen, simulation, window_size)
        draw_food(screen, simulation, window_size)
        pygame.display.flip()


def headless_loop(simulation, num_ticks, rng=None, turn_chance=0.2):
    """
    Run the simulation without a window, holding a random arrow key now and then.

    One frame per tick. Returns the snake length after every tick.
    """
    rng = rng if rng is not None else random.Random()
    directions = list(Direction)
    lengths = []
    held = set()
    for _ in range(num_ticks):
        if rng.random() < turn_chance:
            held = {rng.choice(directions)}
        simulation.frame(held, simulation.config.movement_rate)
        lengths.append(simulation.snake_length)
    return lengths


def plot_lengths(lengths, filename):
    plt.figure()
    plt.plot(lengths)
    plt.title('Snake length per tick')
    plt.xlabel('Tick')
    plt.ylabel('Segments')
    plt.savefig(filename)
    plt.close()


def build_parser():
    parser = argparse.ArgumentParser(description="Grid snake")
    parser.add_argument("--width", type=int, help="Arena width in cells.")
    parser.add_argument("--height", type=int, help="Arena height in cells.")
    parser.add_argument("--food", type=int, help="Food placed at startup.")
    parser.add_argument("--rate", type=float, help="Seconds between movement ticks.")
    parser.add_argument("--seed", type=int, help="Seed for food placement (and headless input).")
    parser.add_argument("--start-direction", choices=[d.name.lower() for d in Direction],
                        help="Starting heading of the snake.")
    parser.add_argument("--headless", action="store_true", help="Run without a window using random input.")
    parser.add_argument("--ticks", type=int, default=500, help="Ticks to simulate in --headless mode.")
    parser.add_argument("--plot", help="Save a plot of snake length per tick to this file (--headless only).")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS,
                        help="Logging level.")
    return parser


def config_from_args(args):
    start = Direction[args.start_direction.upper()] if args.start_direction else None
    return DEFAULT_CONFIG.with_overrides(
        arena_width=args.width,
        arena_height=args.height,
        food_amount=args.food,
        movement_rate=args.rate,
        seed=args.seed,
        starting_direction=start,
    )


def run(argv=None):
    """Parse arguments, run the game (or the headless simulation) and return the Simulation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=args.log_level,
    )

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    simulation = Simulation(config)

    if args.headless:
        logger.info("Running headless for %d ticks", args.ticks)
        lengths = headless_loop(simulation, args.ticks, rng=random.Random(args.seed))
        print(f"Ticks: {simulation.tick_count}, Final length: {simulation.snake_length}, "
              f"Food eaten: {simulation.foods_eaten}, Mean length: {np.mean(lengths) if lengths else 0:.2f}")
        snapshot = simulation.snapshot()
        print(f"Head at {snapshot.body[0]} heading {snapshot.direction.name}, food at {snapshot.foods}")
        print(simulation.render_text())
        if args.plot:
            plot_lengths(lengths, args.plot)
            print(f"Length plot saved to {args.plot}")
        return simulation

    if args.plot:
        print("Warning: --plot is ignored without --headless.")

    pygame.init()
    screen = pygame.display.set_mode((WINDOW_SIZE, WINDOW_SIZE))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()
    try:
        game_loop(screen, clock, simulation)
    finally:
        pygame.quit()
    return simulation


def main(argv=None):
    run(argv)


if __name__ == "__main__":
    main()
