# quadctl

Building blocks for controlling a four-legged walking robot.

## Modules

- `quadctl.reference`: reference velocity generators producing
  `ReferenceVelocity` records (x/y velocity and yaw rate).
  - `JoystickReferenceVelocityGenerator` takes joystick axes through
    `on_joy(axes)`, scales the configured axes, and on each
    `reference_velocity(time, dt)` call moves the reference towards that
    target by at most `ramped_velocity * dt` per component.
  - `TwistReferenceVelocityGenerator` returns the last values passed to
    `on_twist(linear_x, linear_y, angular_z)` unchanged.
  - `make_reference_generator(config)` builds one of them from the
    `reference_generator/type` setting (`"joystick"` or `"twist"`) and
    raises `ValueError` for any other type.
- `quadctl.cpg`: `CentralPatternGenerator`, a per-leg phase oscillator.
  `step(dt)` advances its clock and `reset()` sets it back to zero.
  `compute_phases()` returns the leg phases in radians.
  `leg_heights()` gives cubic swing heights: rising over the first quarter
  of the cycle, falling over the second, and zero during stance.
  `observation()` returns the cosines of the four phases followed by their
  sines. `make_central_pattern_generator(config)` reads
  `bob_controller/cpg/period`, `swing_height` and `time_offsets`.
- `quadctl.static`: `StaticController`, which holds a stand or sit pose.
  `change_controller("STAND" | "SIT", t)` starts a linear blend from the
  measured joint angles towards the target pose over `interpolation_time`.
  `command(t, dt)` returns a list of `JointCommand` records.
  `StaticController.from_config(config, state_provider)` reads the
  `static_controller/...` and `joint_names` settings. `pack_commands`
  pairs joint names with angles and PD gains.
- `quadctl.markers`: the robot `State` record. `build_markers` and
  `height_markers` turn a 3xN matrix of sampled points into sphere
  `Marker` records, split over four legs, for measured and reconstructed
  terrain heights.
- `quadctl.observation`: helpers for building a policy's input.
  - `generate_sampling_positions()` returns a 3x52 ring pattern.
  - `sample_footholds(state, pattern)` rotates the pattern by the base yaw
    and places it around each foot.
  - `height_observation(sampled, base_height, scale)` clamps base-relative
    heights to [-1, 1] and scales them.
  - `HistoryBuffer` is a fixed-size ring buffer whose `ordered()` output
    starts from the most recent item.

The configuration functions accept either flat keys such as
`"static_controller/kp"` or nested mappings.

## Example

```python
from quadctl.cpg import CentralPatternGenerator
from quadctl.reference import JoystickReferenceVelocityGenerator

cpg = CentralPatternGenerator(period=0.6, swing_height=0.1,
                              time_offsets=[0.0, 0.3, 0.3, 0.0])
cpg.step(0.02)
heights = cpg.leg_heights()   # four foot swing heights
obs = cpg.observation()       # cos/sin of the four leg phases

joy = JoystickReferenceVelocityGenerator(ramped_velocity=1.0)
joy.on_joy([0.5, 0.0, 0.2])
ref = joy.reference_velocity(time=0.0, dt=0.1)  # ramps towards the stick
```

## What this package does not do

It has no leg inverse kinematics and no controller that runs a learned
policy: nothing here turns foot heights into joint angles or produces
commands from a neural network. It does not talk to a robot or middleware
either. It does not subscribe to topics, publish markers or transforms, or
provide a command-line program. You supply the robot state and you send
out the returned `JointCommand` and `Marker` records yourself.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Running the tests

```
pytest
```