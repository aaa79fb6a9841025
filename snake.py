import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


class Direction(Enum):
    # (dx, dy) with y growing upwards
    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self):
        return self.value[0]

    @property
    def dy(self):
        return self.value[1]

    def opposite(self):
        return Direction((-self.dx, -self.dy))

    @staticmethod
    def between(start, end):
        """Direction of a single-cell step from start to end, or None if they are not adjacent."""
        try:
            return Direction((end.x - start.x, end.y - start.y))
        except ValueError:
            return None


# Key priority when several directions are held at once: first match wins
INPUT_PRIORITY = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def moved(self, direction):
        return Position(self.x + direction.dx, self.y + direction.dy)

    def as_tuple(self):
        return (self.x, self.y)


class World:
    """
    Flat store of simulated entities.

    Entities are integer handles handed out in increasing order and never reused;
    every live entity has exactly one Position.
    """

    def __init__(self):
        self._positions: Dict[int, Position] = {}
        self._next_handle = 0

    def spawn(self, position: Position) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._positions[handle] = position
        return handle

    def despawn(self, handle: int):
        del self._positions[handle]

    def position(self, handle: int) -> Position:
        return self._positions[handle]

    def set_position(self, handle: int, position: Position):
        if handle not in self._positions:
            raise KeyError(handle)
        self._positions[handle] = position

    def __contains__(self, handle):
        return handle in self._positions

    def __len__(self):
        return len(self._positions)


class SegmentChain:
    """Handles of the snake's body, head first. Index i follows index i-1."""

    def __init__(self, handles: Iterable[int] = ()):
        self._handles: List[int] = list(handles)

    def append(self, handle: int):
        self._handles.append(handle)

    @property
    def head(self) -> int:
        return self._handles[0]

    def __getitem__(self, index):
        return self._handles[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._handles)

    def __len__(self):
        return len(self._handles)


def resolve_input(pressed) -> Optional[Direction]:
    """Pick the held direction with the highest priority, or None if nothing is held."""
    for direction in INPUT_PRIORITY:
        if direction in pressed:
            return direction
    return None


class Snake:
    def __init__(self, world: World, head_position: Position, direction: Direction):
        self.world = world
        self.chain = SegmentChain([world.spawn(head_position)])
        self.direction = direction  # committed heading, read by advance()
        # Pre-move tail cell from the latest tick; None until the chain has moved with a follower
        self.last_segment_position: Optional[Position] = None

    @property
    def head(self) -> int:
        return self.chain.head

    def get_head_position(self) -> Position:
        return self.world.position(self.head)

    def get_body(self) -> List[Position]:
        return [self.world.position(handle) for handle in self.chain]

    def __len__(self):
        return len(self.chain)

    @property
    def travel_direction(self) -> Direction:
        # The first follower always sits on the cell the head just left, so the
        # neck-to-head step is the heading of the last move.
        if len(self.chain) < 2:
            return self.direction
        neck = self.world.position(self.chain[1])
        travelled = Direction.between(neck, self.get_head_position())
        return travelled if travelled is not None else self.direction

    def steer(self, candidate: Optional[Direction]) -> bool:
        if candidate is None:
            return False
        # Prevent snake from reversing directly
        if candidate == self.travel_direction.opposite():
            return False
        self.direction = candidate
        return True

    def advance(self):
        snapshot = [self.world.position(handle) for handle in self.chain]

        self.world.set_position(self.head, snapshot[0].moved(self.direction))
        for handle, previous in zip(self.chain[1:], snapshot):
            self.world.set_position(handle, previous)

        self.last_segment_position = snapshot[-1] if len(snapshot) > 1 else None

    def grow(self, position: Position) -> int:
        handle = self.world.spawn(position)
        self.chain.append(handle)
        logger.debug("Appended segment %d at %s, length now %d", handle, position, len(self.chain))
        return handle
