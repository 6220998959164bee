# robotrack

A small console simulator for teaching basic algorithms. Four robots start
in the four corners of a 16 × 16 track and each must reach the opposite
corner. A robot is driven by a short program that can only ask simple
questions (can I advance? which way am I facing? where am I? have I
arrived?) and take simple actions (advance, turn right, turn left, burst
the balloon and stop).

## Installation

```
pip install .
```

## Running

```
robotrack
```

Options:

- `--level {0,1,2,3}`: obstacle layout, from an empty track (0) to single
  obstacles, lines and L-shaped walls (3); default 1
- `--delay SECONDS`: time between two simulation steps; default 0.5
- `--max-steps N`: step count after which the simulation is stopped;
  default 180
- `--no-pause`: do not wait for Enter at the start and at the end

The command returns exit status 1 once the simulation has come to its end.

## The track

After every round of actions the track is printed twice, alternating
between two views. In one view each robot is shown by its letter (`a` to
`d` for robots 0 to 3); in the other by its state:

- `^ > V <`: a robot on its way, shown by the direction it faces
- `1`, `2`, …: a robot that has arrived, shown by its finishing rank
- `%`: a stopped robot

`o` marks an obstacle and `.` a cell a robot has already crossed. Each
picture is followed by one status line per robot with its step count,
position, state, rank and heading.

## Rules

- All robots move in lock step: each action (advance, turn) takes one step,
  and no robot starts its next step before the others have finished theirs.
- Advancing into an obstacle or the edge does nothing. Advancing into
  another robot stops both robots.
- A robot that comes back to its own starting cell after more than nine
  steps, or enters another robot's starting cell that is not its own goal,
  is parked on the edge of the track and stops.
- A robot that asks more than 1000 questions in a row without acting loses
  a step.
- The simulation ends when every robot has arrived or stopped, or when a
  robot goes over the step limit.

## Writing your own robot programs

A robot program is a function that takes a `RobotController` and drives it
with `can_advance()`, `direction()`, `pos_x()`, `pos_y()`, `arrived()`,
`advance()`, `turn_right()`, `turn_left()` and `burst_balloon_and_stop()`:

```python
from robotrack.algorithms import default_algorithms
from robotrack.config import Direction, level_config
from robotrack.simulation import Simulation


def go_east(robot):
    while robot.direction() is not Direction.EAST:
        robot.turn_right()
    while not robot.arrived():
        if robot.can_advance():
            robot.advance()
        else:
            robot.turn_left()


algorithms = default_algorithms()
algorithms[0] = go_east

simulation = Simulation(level_config(1), step_delay=0.1)
print(simulation.run(algorithms))
```

`Simulation.run` takes exactly four programs, runs them until the end and
returns the closing message. `Simulation` also accepts `output` (a text
stream, standard output by default), `pause` (a function called at the
start and end; by default it does nothing) and `max_steps`.

Robot 0 starts in the south-west corner, robot 1 in the north-west, robot 2
in the north-east and robot 3 in the south-east. When a program returns,
the robot bursts its balloon and stops: it has arrived if it stands on its
goal cell and has stopped otherwise.

The programs in `robotrack.algorithms` (`algorithm_sw`, `algorithm_nw`,
`algorithm_ne`, `algorithm_se`, all returned in order by
`default_algorithms()`) are simple zigzag starting points for your own.

## What it does not do

The command always runs the four built-in programs; robot programs of your
own are run from Python code as shown above. There is no graphical display:
the track is drawn as text only.