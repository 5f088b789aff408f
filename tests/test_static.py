import numpy as np
import pytest

from quadctl.static import JointCommand, StaticController, pack_commands

NAMES = [f"joint_{i}" for i in range(12)]
STAND = [0.1 * i for i in range(12)]
SIT = [-0.2 * i for i in range(12)]


def _state(joints):
    return [0.0] * 12 + list(joints)


def _controller(joints=None, interpolation_time=1.0):
    joints = [0.5] * 12 if joints is None else joints
    return StaticController(
        lambda: _state(joints),
        kp=80.0,
        kd=2.0,
        rate=400.0,
        stand_joint_angles=STAND,
        sit_joint_angles=SIT,
        joint_names=NAMES,
        interpolation_time=interpolation_time,
    )


def _positions(commands):
    return np.array([c.desired_position for c in commands])


def test_pack_commands_fields():
    commands = pack_commands(["a", "b"], [1.0, 2.0], 3.0, 4.0)
    assert commands == [
        JointCommand("a", 1.0, 3.0, 4.0, 0.0, 0.0),
        JointCommand("b", 2.0, 3.0, 4.0, 0.0, 0.0),
    ]


def test_pack_commands_length_mismatch():
    with pytest.raises(ValueError):
        pack_commands(["a"], [1.0, 2.0], 1.0, 1.0)


def test_default_is_sit():
    ctrl = _controller()
    commands = ctrl.command(0.0, 0.01)
    np.testing.assert_allclose(_positions(commands), SIT)
    assert [c.joint_name for c in commands] == NAMES
    assert all(c.kp == 80.0 and c.kd == 2.0 for c in commands)


def test_interpolation_to_stand():
    start = [0.5] * 12
    ctrl = _controller(start)
    ctrl.change_controller("STAND", 0.0)
    assert ctrl.interpolating
    half = _positions(ctrl.command(0.0, 0.5))
    np.testing.assert_allclose(half, (np.array(start) + np.array(STAND)) / 2)
    assert ctrl.interpolating
    final = _positions(ctrl.command(0.5, 0.5))
    np.testing.assert_allclose(final, STAND)
    assert not ctrl.interpolating
    np.testing.assert_allclose(_positions(ctrl.command(1.0, 0.01)), STAND)


def test_interpolation_clamps_alpha():
    ctrl = _controller()
    ctrl.change_controller("SIT", 0.0)
    np.testing.assert_allclose(_positions(ctrl.command(0.0, 5.0)), SIT)
    assert not ctrl.interpolating


def test_interpolation_starts_from_measured_joints():
    start = [0.3 * i for i in range(12)]
    ctrl = _controller(start, interpolation_time=10.0)
    ctrl.change_controller("STAND", 0.0)
    first = _positions(ctrl.command(0.0, 0.0))
    np.testing.assert_allclose(first, start)


def test_unsupported_change_raises():
    ctrl = _controller()
    with pytest.raises(ValueError):
        ctrl.change_controller("WALK", 0.0)
    assert ctrl.controller_type == "SIT"


def test_is_supported():
    ctrl = _controller()
    assert ctrl.is_supported("STAND")
    assert ctrl.is_supported("SIT")
    assert not ctrl.is_supported("BOB")


def test_rate_and_stability():
    ctrl = _controller()
    assert ctrl.rate() == 400.0
    assert ctrl.check_stability() is True


def test_from_config_nested():
    config = {
        "static_controller": {
            "kp": 50,
            "kd": 1,
            "rate": 200,
            "interpolation_time": 2.0,
            "stand_controller": {"joint_angles": STAND},
            "sit_controller": {"joint_angles": SIT},
        },
        "joint_names": NAMES,
    }
    ctrl = StaticController.from_config(config, lambda: _state([0.0] * 12))
    assert ctrl.rate() == 200.0
    commands = ctrl.command(0.0, 0.01)
    assert commands[0].kp == 50.0
    np.testing.assert_allclose(_positions(commands), SIT)


def test_from_config_flat_keys():
    config = {
        "static_controller/kp": 10,
        "static_controller/kd": 0.5,
        "static_controller/rate": 100,
        "static_controller/interpolation_time": 1.0,
        "static_controller/stand_controller/joint_angles": STAND,
        "static_controller/sit_controller/joint_angles": SIT,
        "joint_names": NAMES,
    }
    ctrl = StaticController.from_config(config, lambda: _state([0.0] * 12))
    assert ctrl.interpolation_time == 1.0
    assert ctrl.kd == 0.5


def test_from_config_missing_key():
    with pytest.raises(KeyError):
        StaticController.from_config({"joint_names": NAMES}, lambda: _state([0.0] * 12))