"""Default driving algorithms for the four robots, one per starting corner."""

from __future__ import annotations

from typing import Callable

from robotrack.config import Direction
from robotrack.simulation import RobotController

Algorithm = Callable[[RobotController], object]


def _face(robot: RobotController, heading: Direction) -> None:
    while robot.direction() != heading:
        robot.turn_right()


def _zigzag_once(robot: RobotController) -> None:
    robot.advance()
    robot.advance()
    robot.turn_left()
    robot.turn_left()
    robot.advance()
    robot.advance()
    robot.advance()


def algorithm_sw(robot: RobotController) -> None:
    """Robot starting south-west: face east and zigzag until on its goal."""
    _face(robot, Direction.EAST)
    while not robot.arrived():
        _zigzag_once(robot)


def algorithm_nw(robot: RobotController) -> None:
    """Robot starting north-west: face south and zigzag forever."""
    _face(robot, Direction.SOUTH)
    while True:
        _zigzag_once(robot)


def algorithm_ne(robot: RobotController) -> None:
    """Robot starting north-east: face west and zigzag forever."""
    _face(robot, Direction.WEST)
    while True:
        _zigzag_once(robot)


def algorithm_se(robot: RobotController) -> None:
    """Robot starting south-east: face north and zigzag forever."""
    _face(robot, Direction.NORTH)
    while True:
        _zigzag_once(robot)


def default_algorithms() -> list[Algorithm]:
    """The four algorithms in robot order: SW, NW, NE, SE."""
    return [algorithm_sw, algorithm_nw, algorithm_ne, algorithm_se]