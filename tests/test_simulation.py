import io

import pytest

from robotrack.config import (
    MAX_WATCHDOG,
    TRACK_HEIGHT,
    TRACK_WIDTH,
    Direction,
    level_config,
)
from robotrack.simulation import (
    Cell,
    Simulation,
    SimulationOver,
    Status,
)


def make(level=1, **kwargs):
    kwargs.setdefault("step_delay", 0)
    return Simulation(config=level_config(level), output=io.StringIO(), **kwargs)


def test_initial_robots():
    sim = make()
    assert [r.position for r in sim.robots] == [
        (1, 1),
        (1, TRACK_HEIGHT),
        (TRACK_WIDTH, TRACK_HEIGHT),
        (TRACK_WIDTH, 1),
    ]
    assert [r.direction for r in sim.robots] == [
        Direction.WEST,
        Direction.NORTH,
        Direction.EAST,
        Direction.SOUTH,
    ]
    assert all(r.status is Status.EN_ROUTE and r.rank == -1 for r in sim.robots)
    for robot in sim.robots:
        x, y = robot.position
        assert sim.grid[x][y] is Cell.ROBOT


def test_border_is_walled():
    sim = make(0)
    last = TRACK_WIDTH + 1
    for i in range(TRACK_WIDTH + 2):
        assert sim.grid[i][0] is Cell.OBSTACLE
        assert sim.grid[i][last] is Cell.OBSTACLE
        assert sim.grid[0][i] is Cell.OBSTACLE
        assert sim.grid[last][i] is Cell.OBSTACLE


def test_level_zero_interior_has_no_obstacles():
    sim = make(0)
    interior = [
        sim.grid[x][y]
        for x in range(1, TRACK_WIDTH + 1)
        for y in range(1, TRACK_HEIGHT + 1)
    ]
    assert Cell.OBSTACLE not in interior


def test_level_obstacles():
    assert make(1).grid[1][5] is Cell.OBSTACLE
    assert make(1).grid[6][6] is Cell.OBSTACLE
    assert make(2).grid[3][5] is Cell.OBSTACLE
    assert make(3).grid[4][4] is Cell.OBSTACLE
    assert make(1).grid[4][4] is Cell.EMPTY


@pytest.mark.parametrize("level", [0, 1, 2, 3])
def test_obstacles_are_rotation_symmetric(level):
    sim = make(level)
    last = TRACK_WIDTH + 1
    for x in range(last + 1):
        for y in range(last + 1):
            if sim.grid[x][y] is Cell.OBSTACLE:
                assert sim.grid[last - y][x] is Cell.OBSTACLE


def test_place_obstacle_off_track_rejected():
    sim = make()
    with pytest.raises(ValueError):
        sim.place_obstacle(TRACK_WIDTH + 2, 3)


def test_cell_symbols():
    sim = make(0)
    assert sim.cell_symbol(1, 1, 0) == "<"
    assert sim.cell_symbol(1, 1, 1) == "a"
    assert sim.cell_symbol(TRACK_WIDTH, 1, 1) == "d"
    assert sim.cell_symbol(0, 0, 0) == "o"
    assert sim.cell_symbol(5, 5, 0) == " "


def test_render_layout():
    sim = make()
    text = sim.render(0)
    lines = text.split("\n")
    map_lines = lines[: TRACK_HEIGHT + 2]
    assert all(len(line) == 2 * (TRACK_WIDTH + 2) for line in map_lines)
    assert map_lines[0] == "o " * (TRACK_WIDTH + 2)
    assert map_lines[1][2] == "^"
    assert " rob[0]-step[000]-pos[01-01] statut[En-route] rang [-1] dir[W]" in text


def test_turns_change_heading_and_count_steps():
    sim = make()
    sim.turn_right(0)
    assert sim.robots[0].direction is Direction.NORTH
    sim.turn_left(0)
    sim.turn_left(0)
    assert sim.robots[0].direction is Direction.SOUTH
    assert sim.robots[0].step == 3


def test_wall_blocks_advance():
    sim = make(0)
    assert not sim.can_advance(0)
    sim.advance(0)
    assert sim.robots[0].position == (1, 1)


def test_obstacle_blocks_advance():
    sim = make(1)
    sim.turn_right(0)
    for _ in range(3):
        assert sim.can_advance(0)
        sim.advance(0)
    assert sim.robots[0].position == (1, 4)
    assert sim.cell_ahead(0) is Cell.OBSTACLE
    assert not sim.can_advance(0)
    sim.advance(0)
    assert sim.robots[0].position == (1, 4)


def test_advance_leaves_trajectory():
    sim = make(0)
    sim.turn_right(0)
    sim.advance(0)
    assert sim.robots[0].position == (1, 2)
    assert sim.grid[1][1] is Cell.TRAJECTORY
    assert sim.grid[1][2] is Cell.ROBOT


def test_collision_stops_both_robots():
    sim = make(0)
    sim.turn_right(0)
    while sim.robots[0].position[1] < TRACK_HEIGHT - 1:
        sim.advance(0)
    assert sim.cell_ahead(0) is Cell.ROBOT
    sim.advance(0)
    assert sim.robots[0].status is Status.STOPPED
    assert sim.robots[1].status is Status.STOPPED
    assert sim.stopped_count == 2
    assert sim.robots[0].position == (1, TRACK_HEIGHT - 1)


def test_return_to_start_parks_robot():
    sim = make(0)
    for _ in range(9):
        sim.advance(0)
    assert sim.robots[0].status is Status.EN_ROUTE
    sim.advance(0)
    assert sim.robots[0].position == (0, 0)
    assert sim.robots[0].status is Status.STOPPED
    assert sim.grid[0][0] is Cell.ROBOT


def test_entering_other_start_zone_parks_robot():
    sim = make(0)
    sim.turn_right(1)
    sim.advance(1)
    assert sim.robots[1].position == (2, TRACK_HEIGHT)
    sim.turn_right(0)
    for _ in range(TRACK_HEIGHT - 1):
        sim.advance(0)
    assert sim.robots[0].status is Status.STOPPED
    assert sim.robots[0].position == (0, 0)
    assert sim.stopped_count == 1


def test_watchdog_forces_a_step():
    sim = make()
    for _ in range(MAX_WATCHDOG):
        sim.pos_x(0)
    assert sim.robots[0].step == 0
    assert sim.robots[0].watchdog == MAX_WATCHDOG
    sim.pos_y(0)
    assert sim.robots[0].step == 1
    assert sim.robots[0].watchdog == 0


def test_step_limit_ends_simulation():
    sim = make(max_steps=3)
    for _ in range(3):
        sim.turn_right(0)
    with pytest.raises(SimulationOver):
        sim.turn_right(0)
    assert "maximal" in sim.outcome
    assert "maximal" in sim.output.getvalue()


def _stop_others(sim, keep):
    for robot in sim.robots:
        if robot.number != keep:
            robot.status = Status.STOPPED
    sim.stopped_count = len(sim.robots) - 1


def test_burst_at_start_parks_robot():
    sim = make()
    _stop_others(sim, 0)
    with pytest.raises(SimulationOver):
        sim.burst_balloon_and_stop(0)
    assert sim.robots[0].status is Status.STOPPED
    assert sim.robots[0].position == (0, 0)
    assert sim.stopped_count == 4


def test_controller_delegates():
    sim = make()
    robot = sim.controller(2)
    assert robot.direction() is Direction.EAST
    assert (robot.pos_x(), robot.pos_y()) == (TRACK_WIDTH, TRACK_HEIGHT)
    assert not robot.arrived()
    robot.turn_left()
    assert sim.robots[2].direction is Direction.NORTH


def test_controller_rejects_unknown_robot():
    with pytest.raises(ValueError):
        make().controller(4)


def test_run_needs_four_algorithms():
    with pytest.raises(ValueError):
        make().run([lambda robot: None])


def test_run_until_all_stopped():
    sim = make()
    outcome = sim.run([lambda robot: None] * 4)
    assert "FIN DE SIMULATION" in outcome
    assert all(r.status is Status.STOPPED for r in sim.robots)
    assert sim.robots[0].position == (0, 0)
    assert sim.robots[2].position == (TRACK_WIDTH + 1, TRACK_HEIGHT + 1)


def _spin(robot):
    while True:
        robot.turn_right()


def test_run_until_step_limit():
    sim = make(max_steps=5)
    outcome = sim.run([_spin] * 4)
    assert "maximal" in outcome


def test_run_reports_algorithm_error():
    def broken(robot):
        raise RuntimeError("boom")

    sim = make()
    with pytest.raises(RuntimeError, match="boom"):
        sim.run([broken, _spin, _spin, _spin])