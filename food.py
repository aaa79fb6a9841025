import logging
import random
from typing import List

from snake import Position

logger = logging.getLogger(__name__)


class FoodManager:
    """
    Owns the food entities in the world and the two event queues around them.

    spawn_requests counts queued "place one food" requests; growth_events counts
    foods eaten whose growth has not been applied yet.
    """

    def __init__(self, world, arena_width=10, arena_height=10, rng=None):
        self.world = world
        self.arena_width = arena_width
        self.arena_height = arena_height
        self.rng = rng if rng is not None else random.Random()
        self.foods: List[int] = []
        self.spawn_requests = 0
        self.growth_events = 0

    def request_spawn(self, count=1):
        self.spawn_requests += count

    def randomize_position(self):
        # Upper bounds are inclusive, so food can land one cell past the arena edge
        return Position(
            self.rng.randint(0, self.arena_width),
            self.rng.randint(0, self.arena_height),
        )

    def spawn_queued(self) -> List[int]:
        spawned = []
        while self.spawn_requests > 0:
            self.spawn_requests -= 1
            position = self.randomize_position()
            handle = self.world.spawn(position)
            self.foods.append(handle)
            spawned.append(handle)
            logger.debug("Spawned food %d at %s", handle, position)
        return spawned

    def get_positions(self) -> List[Position]:
        return [self.world.position(handle) for handle in self.foods]

    def check_collision(self, snake) -> int:
        """Eat every food on the head's cell. Body segments never collide with food."""
        head_position = snake.get_head_position()
        eaten = [handle for handle in self.foods if self.world.position(handle) == head_position]
        for handle in eaten:
            self.foods.remove(handle)
            self.world.despawn(handle)
            self.growth_events += 1
            logger.debug("Food %d eaten at %s", handle, head_position)
        return len(eaten)


class GrowthCoordinator:
    def __init__(self):
        self.dropped = 0

    def apply(self, snake, food_manager) -> bool:
        """Turn one pending growth event into a new tail segment plus a respawn request."""
        if food_manager.growth_events == 0:
            return False

        position = snake.last_segment_position
        if position is None:
            # Nothing has moved yet, so there is no cell to grow into
            self.dropped += food_manager.growth_events
            logger.debug("Dropping %d growth event(s) before the first move", food_manager.growth_events)
            food_manager.growth_events = 0
            return False

        food_manager.growth_events -= 1
        snake.grow(position)
        food_manager.request_spawn()
        return True
