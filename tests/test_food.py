"""
Tests for food.py - spawning, head/food collision and growth.
"""

import os
import random
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from food import FoodManager, GrowthCoordinator
from snake import Direction, Position, Snake, World


def make_world_and_snake():
    world = World()
    snake = Snake(world, Position(3, 3), Direction.UP)
    snake.grow(Position(3, 2))
    return world, snake


def place_food(manager, position):
    handle = manager.world.spawn(position)
    manager.foods.append(handle)
    return handle


class TestSpawn:
    def test_spawn_drains_queue(self):
        world = World()
        manager = FoodManager(world, rng=random.Random(1))
        manager.request_spawn(3)
        spawned = manager.spawn_queued()
        assert len(spawned) == 3
        assert manager.spawn_requests == 0
        assert manager.foods == spawned
        assert manager.spawn_queued() == []

    def test_positions_use_inclusive_bounds(self):
        world = World()
        manager = FoodManager(world, arena_width=2, arena_height=3, rng=random.Random(0))
        manager.request_spawn(500)
        manager.spawn_queued()
        xs = {p.x for p in manager.get_positions()}
        ys = {p.y for p in manager.get_positions()}
        assert xs == {0, 1, 2}
        assert ys == {0, 1, 2, 3}

    def test_food_may_spawn_on_the_snake(self):
        """A 0x0 arena puts every food on (0,0), here under the snake's body."""
        world = World()
        snake = Snake(world, Position(1, 0), Direction.LEFT)
        snake.grow(Position(0, 0))
        manager = FoodManager(world, arena_width=0, arena_height=0, rng=random.Random(3))
        manager.request_spawn(2)

        spawned = manager.spawn_queued()
        assert len(spawned) == 2
        assert manager.get_positions() == [Position(0, 0), Position(0, 0)]

        # Lying under the body is not a collision
        assert manager.check_collision(snake) == 0
        assert manager.foods == spawned

        snake.advance()
        assert snake.get_head_position() == Position(0, 0)
        assert manager.check_collision(snake) == 2
        assert manager.foods == []

    def test_same_seed_same_positions(self):
        first = FoodManager(World(), rng=random.Random(7))
        second = FoodManager(World(), rng=random.Random(7))
        for manager in (first, second):
            manager.request_spawn(5)
            manager.spawn_queued()
        assert first.get_positions() == second.get_positions()


class TestCollision:
    def test_head_on_food_eats_it(self):
        world, snake = make_world_and_snake()
        manager = FoodManager(world)
        handle = place_food(manager, Position(3, 3))
        assert manager.check_collision(snake) == 1
        assert handle not in world
        assert manager.foods == []
        assert manager.growth_events == 1
        # No respawn on the same tick
        assert manager.spawn_requests == 0

    def test_body_on_food_is_not_a_collision(self):
        world, snake = make_world_and_snake()
        manager = FoodManager(world)
        place_food(manager, Position(3, 2))
        assert manager.check_collision(snake) == 0
        assert manager.growth_events == 0
        assert len(manager.foods) == 1

    def test_only_matching_food_is_eaten(self):
        world, snake = make_world_and_snake()
        manager = FoodManager(world)
        place_food(manager, Position(0, 0))
        eaten = place_food(manager, Position(3, 3))
        place_food(manager, Position(9, 9))
        manager.check_collision(snake)
        assert eaten not in manager.foods
        assert manager.get_positions() == [Position(0, 0), Position(9, 9)]


class TestGrowth:
    def test_growth_after_a_move(self):
        world, snake = make_world_and_snake()
        manager = FoodManager(world)
        place_food(manager, Position(3, 4))
        snake.advance()
        manager.check_collision(snake)

        assert GrowthCoordinator().apply(snake, manager) is True
        assert snake.get_body() == [Position(3, 4), Position(3, 3), Position(3, 2)]
        assert manager.growth_events == 0
        assert manager.spawn_requests == 1

    def test_growth_before_first_move_is_dropped(self):
        world, snake = make_world_and_snake()
        manager = FoodManager(world)
        place_food(manager, Position(3, 3))
        manager.check_collision(snake)

        growth = GrowthCoordinator()
        assert growth.apply(snake, manager) is False
        assert len(snake) == 2
        assert growth.dropped == 1
        assert manager.spawn_requests == 0

        # Not retried once a tail position exists
        snake.advance()
        assert growth.apply(snake, manager) is False
        assert len(snake) == 2

    def test_no_pending_events_is_a_no_op(self):
        world, snake = make_world_and_snake()
        manager = FoodManager(world)
        snake.advance()
        assert GrowthCoordinator().apply(snake, manager) is False
        assert len(snake) == 2

    def test_one_segment_per_pass(self):
        world, snake = make_world_and_snake()
        manager = FoodManager(world)
        place_food(manager, Position(3, 4))
        place_food(manager, Position(3, 4))
        snake.advance()
        assert manager.check_collision(snake) == 2

        growth = GrowthCoordinator()
        assert growth.apply(snake, manager) is True
        assert len(snake) == 3
        assert manager.growth_events == 1
        assert growth.apply(snake, manager) is True
        assert len(snake) == 4
        assert manager.spawn_requests == 2
