"""Per-frame and fixed-tick scheduling around the snake and its food."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import DEFAULT_CONFIG, GameConfig
from food import FoodManager, GrowthCoordinator
from snake import Direction, Position, Snake, World, resolve_input

logger = logging.getLogger(__name__)


@dataclass
class SimulationSnapshot:
    tick: int
    direction: Direction
    body: List[Tuple[int, int]]
    foods: List[Tuple[int, int]]
    last_segment_position: Optional[Tuple[int, int]]


class Simulation:
    """
    One snake in an arena, driven by two clocks.

    Every frame: resolve input, then (after any due ticks) run growth and food
    spawning. Every `movement_rate` seconds of accumulated frame time: move the
    snake, then check the head against food.
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config
        self.world = World()
        self.snake = Snake(self.world, Position(*config.head_start), config.starting_direction)
        self.snake.grow(Position(*config.body_start))
        self.food = FoodManager(
            self.world,
            config.arena_width,
            config.arena_height,
            rng=random.Random(config.seed),
        )
        self.growth = GrowthCoordinator()
        self.tick_count = 0
        self.foods_eaten = 0
        self._accumulator = 0.0

        self.food.request_spawn(config.food_amount)
        logger.info(
            "Simulation started: arena %dx%d, %d food, tick every %.3fs, heading %s",
            config.arena_width,
            config.arena_height,
            config.food_amount,
            config.movement_rate,
            config.starting_direction.name,
        )

    @property
    def snake_length(self):
        return len(self.snake)

    def food_positions(self) -> List[Position]:
        return self.food.get_positions()

    def handle_input(self, pressed) -> bool:
        return self.snake.steer(resolve_input(pressed))

    def tick(self) -> int:
        self.snake.advance()
        self.tick_count += 1
        eaten = self.food.check_collision(self.snake)
        self.foods_eaten += eaten
        logger.debug("Tick %d: head at %s", self.tick_count, self.snake.get_head_position())
        return eaten

    def react(self):
        self.growth.apply(self.snake, self.food)
        self.food.spawn_queued()

    def update(self, dt: float) -> int:
        if dt < 0:
            raise ValueError(f"Frame time must be non-negative, got {dt}")
        self._accumulator += dt
        ticks = 0
        while self._accumulator >= self.config.movement_rate:
            self._accumulator -= self.config.movement_rate
            self.tick()
            ticks += 1
        self.react()
        return ticks

    def frame(self, pressed, dt: float) -> int:
        self.handle_input(pressed)
        return self.update(dt)

    def snapshot(self) -> SimulationSnapshot:
        last = self.snake.last_segment_position
        return SimulationSnapshot(
            tick=self.tick_count,
            direction=self.snake.direction,
            body=[position.as_tuple() for position in self.snake.get_body()],
            foods=[position.as_tuple() for position in self.food_positions()],
            last_segment_position=last.as_tuple() if last is not None else None,
        )

    def render_text(self) -> str:
        """
        Returns a string representation of the arena with:
        . = empty cell
        * = food
        o = snake body
        H = snake head
        (0,0) is at the bottom left. Anything outside the arena is left out.
        """
        width, height = self.config.arena_width, self.config.arena_height
        board = [['.' for _ in range(width)] for _ in range(height)]

        def place(position, char):
            if 0 <= position.x < width and 0 <= position.y < height:
                board[position.y][position.x] = char

        for position in self.food_positions():
            place(position, '*')
        body = self.snake.get_body()
        for position in body[1:]:
            place(position, 'o')
        place(body[0], 'H')

        # Rows top to bottom
        return "\n".join(''.join(board[y]) for y in range(height - 1, -1, -1))
