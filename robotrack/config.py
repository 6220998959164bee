"""Track dimensions, simulation limits, compass directions and obstacle layouts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

TRACK_WIDTH = 16
TRACK_HEIGHT = 16
NUMBER_ROBOTS = 4
MAX_STEP = 180
MAX_WATCHDOG = 1000
STEP_DELAY = 0.5
CHECK_START_ZONE = True
CHECK_COLLISION = True
DEBUG_PAUSE = False


class Direction(IntEnum):
    """Compass heading of a robot on the track."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def right(self) -> "Direction":
        """Heading after a quarter turn clockwise."""
        return Direction((self.value + 1) % 4)

    def left(self) -> "Direction":
        """Heading after a quarter turn anticlockwise."""
        return Direction((self.value - 1) % 4)

    def delta(self) -> tuple[int, int]:
        """Unit move (dx, dy) for one step in this heading."""
        return _DELTAS[self]


_DELTAS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}


@dataclass(frozen=True)
class TrackConfig:
    """Which obstacle families are placed on the track."""

    simple: bool = True
    line: bool = False
    l_shape: bool = False


_LEVELS = {
    0: TrackConfig(simple=False, line=False, l_shape=False),
    1: TrackConfig(simple=True, line=False, l_shape=False),
    2: TrackConfig(simple=True, line=True, l_shape=False),
    3: TrackConfig(simple=True, line=True, l_shape=True),
}


def level_config(level: int) -> TrackConfig:
    """Return the obstacle layout of a difficulty level from 0 to 3."""
    try:
        return _LEVELS[level]
    except KeyError:
        raise ValueError(f"unknown level {level!r}; expected 0 to 3") from None