"""Grid track simulator on which four robots race to the opposite corner."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, NoReturn, TextIO

from robotrack.config import (
    CHECK_COLLISION,
    CHECK_START_ZONE,
    DEBUG_PAUSE,
    MAX_STEP,
    MAX_WATCHDOG,
    NUMBER_ROBOTS,
    STEP_DELAY,
    TRACK_HEIGHT,
    TRACK_WIDTH,
    Direction,
    TrackConfig,
)

Point = tuple[int, int]


class Cell(Enum):
    """Content of one square of the track."""

    EMPTY = 0
    OBSTACLE = 1
    ROBOT = 2
    TRAJECTORY = 3


class Status(Enum):
    """State of a robot; the value is the label shown in the status lines."""

    EN_ROUTE = "En-route"
    ARRIVED = "AU BUT !"
    STOPPED = "ARRET: %"


@dataclass
class Robot:
    """Position and state of one robot."""

    number: int
    position: Point
    initial: Point
    final: Point
    direction: Direction
    status: Status = Status.EN_ROUTE
    step: int = 0
    rank: int = -1
    watchdog: int = 0


class SimulationOver(Exception):
    """Raised when the simulation reaches its end."""


_ARROWS = {
    Direction.NORTH: "^",
    Direction.EAST: ">",
    Direction.SOUTH: "V",
    Direction.WEST: "<",
}
_DIRECTION_LETTERS = {
    Direction.NORTH: "N",
    Direction.EAST: "E",
    Direction.SOUTH: "S",
    Direction.WEST: "W",
}
_CELL_SYMBOLS = {
    Cell.EMPTY: " ",
    Cell.TRAJECTORY: ".",
    Cell.OBSTACLE: "o",
}

_END_ALL_DONE = "  *** FIN DE SIMULATION : Robots arrives/arretes ***  "


def _obstacle_seeds(config: TrackConfig) -> list[Point]:
    seeds: list[Point] = []
    if config.simple:
        seeds.append((1, 5))
    if config.line:
        seeds += [(2, 5), (3, 5), (4, 5)]
    if config.l_shape:
        seeds += [(4, 4), (4, 3), (4, 2)]
    if config.simple:
        seeds.append((6, 6))
    if config.line:
        seeds.append((6, 7))
    if config.l_shape:
        seeds.append((7, 6))
    return seeds


def _add(a: Point, b: Point) -> Point:
    return a[0] + b[0], a[1] + b[1]


class Simulation:
    """Shared track, robots and the step scheduler that drives them."""

    def __init__(
        self,
        config: TrackConfig | None = None,
        output: TextIO | None = None,
        pause: Callable[[], object] | None = None,
        step_delay: float = STEP_DELAY,
        max_steps: int = MAX_STEP,
    ) -> None:
        self.config = config if config is not None else TrackConfig()
        self.output = output if output is not None else sys.stdout
        self.pause = pause if pause is not None else (lambda: None)
        self.step_delay = step_delay
        self.max_steps = max_steps
        self.width = TRACK_WIDTH + 2
        self.height = TRACK_HEIGHT + 2
        self.grid = [[Cell.EMPTY] * self.height for _ in range(self.width)]
        self.robots = [
            Robot(0, (1, 1), (1, 1), (TRACK_WIDTH, TRACK_HEIGHT), Direction.WEST),
            Robot(1, (1, TRACK_HEIGHT), (1, TRACK_HEIGHT), (TRACK_WIDTH, 1), Direction.NORTH),
            Robot(
                2,
                (TRACK_WIDTH, TRACK_HEIGHT),
                (TRACK_WIDTH, TRACK_HEIGHT),
                (1, 1),
                Direction.EAST,
            ),
            Robot(3, (TRACK_WIDTH, 1), (TRACK_WIDTH, 1), (1, TRACK_HEIGHT), Direction.SOUTH),
        ]
        self.arrived_count = 0
        self.arrived_snapshot = 0
        self.stopped_count = 0
        self.outcome: str | None = None
        self._move_lock = threading.RLock()
        self._print_lock = threading.Lock()
        self._print_counter = NUMBER_ROBOTS
        self._mode = 0
        self._barrier: threading.Barrier | None = None
        self.refresh_map()

    # ----- map -----

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def place_obstacle(self, x: int, y: int) -> None:
        """Place an obstacle and its three quarter-turn images about the centre."""
        if not self._inside(x, y):
            raise ValueError(f"point ({x}, {y}) is off the track")
        last = self.width - 1
        self.grid[x][y] = Cell.OBSTACLE
        self.grid[last - y][x] = Cell.OBSTACLE
        self.grid[last - x][last - y] = Cell.OBSTACLE
        self.grid[y][last - x] = Cell.OBSTACLE

    def refresh_map(self) -> None:
        """Lay obstacles and borders, clear the free squares and mark the robots."""
        for x, y in _obstacle_seeds(self.config):
            self.place_obstacle(x, y)
        for x in range(self.width):
            self.place_obstacle(x, 0)
        for x in range(1, self.width - 1):
            column = self.grid[x]
            for y in range(1, self.height - 1):
                if column[y] not in (Cell.OBSTACLE, Cell.TRAJECTORY):
                    column[y] = Cell.EMPTY
        for robot in self.robots:
            x, y = robot.position
            self.grid[x][y] = Cell.ROBOT

    def cell_symbol(self, x: int, y: int, mode: int) -> str:
        """Character shown for a square; mode 1 names robots, mode 0 shows their state."""
        cell = self.grid[x][y]
        if cell is not Cell.ROBOT:
            return _CELL_SYMBOLS[cell]
        found = [robot for robot in self.robots if robot.position == (x, y)]
        if not found:
            return "?"
        robot = found[-1]
        if mode:
            return chr(ord("a") + robot.number)
        if robot.status is Status.EN_ROUTE:
            return _ARROWS[robot.direction]
        if robot.status is Status.ARRIVED:
            return chr(ord("0") + robot.rank)
        return "%"

    def render(self, mode: int) -> str:
        """Text picture of the track followed by one status line per robot."""
        rows = [
            "".join(f"{self.cell_symbol(x, y, mode)} " for x in range(self.width)) + "\n"
            for y in reversed(range(self.height))
        ]
        statuses = [
            f"\n rob[{r.number}]-step[{r.step:03d}]-pos[{r.position[0]:02d}-{r.position[1]:02d}]"
            f" statut[{r.status.value}] rang [{r.rank:02d}] dir[{_DIRECTION_LETTERS[r.direction]}]"
            for r in self.robots
        ]
        return "".join(rows) + "".join(statuses) + "\n"

    # ----- geometry -----

    def point_ahead(self, number: int) -> Point:
        """Square in front of a robot."""
        robot = self.robots[number]
        return _add(robot.position, robot.direction.delta())

    def cell_ahead(self, number: int) -> Cell:
        """Content of the square in front of a robot; off the track counts as obstacle."""
        x, y = self.point_ahead(number)
        if not self._inside(x, y):
            return Cell.OBSTACLE
        return self.grid[x][y]

    # ----- actions -----

    def advance(self, number: int) -> None:
        """Move one square forward; running into a robot stops both."""
        robot = self.robots[number]
        robot.watchdog = 0
        with self._move_lock:
            if robot.status is not Status.STOPPED:
                ahead = self.cell_ahead(number)
                if ahead in (Cell.EMPTY, Cell.TRAJECTORY):
                    x, y = robot.position
                    self.grid[x][y] = Cell.TRAJECTORY
                    robot.position = self.point_ahead(number)
                elif ahead is Cell.ROBOT and CHECK_COLLISION:
                    target = self.point_ahead(number)
                    robot.status = Status.STOPPED
                    self.stopped_count += 1
                    for other in self.robots:
                        if other.number != number and other.position == target:
                            other.status = Status.STOPPED
                            self.stopped_count += 1
        self._schedule(number)

    def turn_right(self, number: int) -> None:
        """Quarter turn clockwise."""
        robot = self.robots[number]
        robot.watchdog = 0
        if robot.status is not Status.STOPPED:
            robot.direction = robot.direction.right()
        self._schedule(number)

    def turn_left(self, number: int) -> None:
        """Quarter turn anticlockwise."""
        robot = self.robots[number]
        robot.watchdog = 0
        if robot.status is not Status.STOPPED:
            robot.direction = robot.direction.left()
        self._schedule(number)

    def burst_balloon_and_stop(self, number: int) -> NoReturn:
        """Finish a robot's run, ranked if on its goal, then idle until the end."""
        robot = self.robots[number]
        robot.watchdog = 0
        on_goal = self.arrived(number)
        with self._move_lock:
            if on_goal:
                self.arrived_count += 1
                robot.rank = self.arrived_snapshot + 1
                robot.status = Status.ARRIVED
            else:
                robot.status = Status.STOPPED
                self.stopped_count += 1
            if robot.position == robot.initial:
                self._park(number)
        while True:
            self._schedule(number)

    # ----- questions -----

    def can_advance(self, number: int) -> bool:
        """Whether the square ahead is free."""
        self._watchdog_tick(number)
        return self.cell_ahead(number) in (Cell.EMPTY, Cell.TRAJECTORY)

    def arrived(self, number: int) -> bool:
        """Whether the robot stands on its goal."""
        self._watchdog_tick(number)
        robot = self.robots[number]
        return robot.position == robot.final

    def direction(self, number: int) -> Direction:
        """Current heading."""
        self._watchdog_tick(number)
        return self.robots[number].direction

    def pos_x(self, number: int) -> int:
        """Current column."""
        self._watchdog_tick(number)
        return self.robots[number].position[0]

    def pos_y(self, number: int) -> int:
        """Current row."""
        self._watchdog_tick(number)
        return self.robots[number].position[1]

    # ----- scheduling -----

    def _watchdog_tick(self, number: int) -> None:
        robot = self.robots[number]
        robot.watchdog += 1
        if robot.watchdog > MAX_WATCHDOG:
            robot.watchdog = 0
            self._schedule(number)

    def _park(self, number: int) -> None:
        robot = self.robots[number]
        x, y = robot.position
        self.grid[x][y] = Cell.TRAJECTORY
        robot.position = (
            0 if robot.initial[0] < 8 else TRACK_WIDTH + 1,
            0 if robot.initial[1] < 8 else TRACK_HEIGHT + 1,
        )
        if robot.status is not Status.STOPPED:
            robot.status = Status.STOPPED
            self.stopped_count += 1
        x, y = robot.position
        self.grid[x][y] = Cell.ROBOT

    def _schedule(self, number: int) -> None:
        robot = self.robots[number]
        with self._move_lock:
            if robot.status is Status.EN_ROUTE:
                robot.step += 1
                if robot.step > 9 and robot.position == robot.initial:
                    self._park(number)
                if CHECK_START_ZONE:
                    for other in self.robots:
                        if (
                            robot.position == other.initial
                            and other.number != number
                            and robot.position != robot.final
                        ):
                            self._park(number)
                self.refresh_map()
        self._map_print()
        if robot.step > self.max_steps:
            self._finish(
                f" FIN DE SIMULATION : Nombre d'iteration maximal atteint ({self.max_steps})"
            )
        if self._barrier is not None:
            try:
                self._barrier.wait()
            except threading.BrokenBarrierError:
                raise SimulationOver(self.outcome or "simulation aborted") from None

    def _map_print(self) -> None:
        with self._print_lock:
            self._print_counter += 1
            if self._print_counter < NUMBER_ROBOTS:
                return
            self._print_counter = 0
            self.arrived_snapshot = self.arrived_count
        for _ in range(2):
            with self._print_lock:
                self._mode = (self._mode + 1) % 2
                self.output.write(self.render(self._mode))
                self.output.flush()
            if self.step_delay:
                time.sleep(self.step_delay / 2)
        if self.arrived_count + self.stopped_count >= NUMBER_ROBOTS:
            self._finish(_END_ALL_DONE)
        if DEBUG_PAUSE:
            self.pause()

    def _finish(self, message: str) -> NoReturn:
        first = False
        with self._print_lock:
            if self.outcome is None:
                self.outcome = message.strip()
                self.output.write(message)
                self.output.flush()
                first = True
        if first:
            self.pause()
        if self._barrier is not None:
            self._barrier.abort()
        raise SimulationOver(self.outcome)

    # ----- driving -----

    def controller(self, number: int) -> "RobotController":
        """Handle through which an algorithm drives one robot."""
        if not 0 <= number < NUMBER_ROBOTS:
            raise ValueError(f"no robot number {number}")
        return RobotController(self, number)

    def run(self, algorithms: Iterable[Callable[["RobotController"], object]]) -> str | None:
        """Run one algorithm per robot in lock step and return the closing message."""
        algorithms = list(algorithms)
        if len(algorithms) != NUMBER_ROBOTS:
            raise ValueError(f"expected {NUMBER_ROBOTS} algorithms, got {len(algorithms)}")
        barrier = threading.Barrier(NUMBER_ROBOTS)
        errors: list[BaseException] = []

        def drive(number: int, algorithm: Callable[[RobotController], object]) -> None:
            try:
                algorithm(self.controller(number))
                self.burst_balloon_and_stop(number)
            except SimulationOver:
                pass
            except BaseException as exc:  # noqa: BLE001 - reported by run()
                errors.append(exc)
                barrier.abort()

        self._barrier = barrier
        try:
            self._map_print()
            self.pause()
            threads = [
                threading.Thread(target=drive, args=(number, algorithm), daemon=True)
                for number, algorithm in enumerate(algorithms)
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()
        finally:
            self._barrier = None
        if errors:
            raise errors[0]
        return self.outcome


@dataclass(frozen=True)
class RobotController:
    """The commands and questions available to one robot's algorithm."""

    simulation: Simulation
    number: int

    def can_advance(self) -> bool:
        return self.simulation.can_advance(self.number)

    def direction(self) -> Direction:
        return self.simulation.direction(self.number)

    def pos_x(self) -> int:
        return self.simulation.pos_x(self.number)

    def pos_y(self) -> int:
        return self.simulation.pos_y(self.number)

    def arrived(self) -> bool:
        return self.simulation.arrived(self.number)

    def advance(self) -> None:
        self.simulation.advance(self.number)

    def turn_right(self) -> None:
        self.simulation.turn_right(self.number)

    def turn_left(self) -> None:
        self.simulation.turn_left(self.number)

    def burst_balloon_and_stop(self) -> NoReturn:
        self.simulation.burst_balloon_and_stop(self.number)