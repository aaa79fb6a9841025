"""Startup parameters for the snake simulation."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from snake import Direction

# Arena dimensions (cells)
ARENA_WIDTH = 10
ARENA_HEIGHT = 10

FOOD_AMOUNT = 3
MOVEMENT_RATE = 0.2  # seconds per tick
STARTING_DIRECTION = Direction.UP
HEAD_START = (3, 3)
BODY_START = (3, 2)

# Runner only
WINDOW_SIZE = 800
FPS = 60

# Colors
BLACK = (0, 0, 0)
SNAKE_HEAD_COLOR = (102, 102, 255)
SNAKE_BODY_COLOR = (102, 255, 102)
FOOD_COLOR = (255, 102, 102)

# Relative sprite sizes, as a fraction of one cell
HEAD_SIZE = 0.8
BODY_SIZE = 0.6
FOOD_SIZE = 0.4


@dataclass(frozen=True)
class GameConfig:
    """Configuration for one simulation run."""

    # Arena
    arena_width: int = ARENA_WIDTH
    arena_height: int = ARENA_HEIGHT

    # Snake
    starting_direction: Direction = STARTING_DIRECTION
    head_start: Tuple[int, int] = HEAD_START
    body_start: Tuple[int, int] = BODY_START

    # Food / timing
    food_amount: int = FOOD_AMOUNT
    movement_rate: float = MOVEMENT_RATE
    seed: Optional[int] = None

    def __post_init__(self):
        if self.arena_width <= 0 or self.arena_height <= 0:
            raise ValueError(
                f"Arena dimensions must be positive, got {self.arena_width}x{self.arena_height}"
            )
        if self.food_amount < 0:
            raise ValueError(f"food_amount must be non-negative, got {self.food_amount}")
        if self.movement_rate <= 0:
            raise ValueError(f"movement_rate must be positive, got {self.movement_rate}")
        # The body segment must sit on a cell next to the head
        dx = self.head_start[0] - self.body_start[0]
        dy = self.head_start[1] - self.body_start[1]
        if abs(dx) + abs(dy) != 1:
            raise ValueError(
                f"body_start {self.body_start} must be adjacent to head_start {self.head_start}"
            )

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a copy with the non-None overrides applied (and validated)."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


DEFAULT_CONFIG = GameConfig()
