import pytest

from quadctl.reference import (
    JoystickReferenceVelocityGenerator,
    ReferenceVelocity,
    TwistReferenceVelocityGenerator,
    make_reference_generator,
)


def test_twist_returns_latest_message():
    gen = TwistReferenceVelocityGenerator()
    assert gen.reference_velocity(0.0, 0.1) == ReferenceVelocity()
    gen.on_twist(0.4, -0.2, 0.7)
    assert gen.reference_velocity(1.0, 0.1) == ReferenceVelocity(0.4, -0.2, 0.7)


def test_joystick_starts_at_zero():
    gen = JoystickReferenceVelocityGenerator(ramped_velocity=1.0)
    assert gen.reference_velocity(0.0, 0.1) == ReferenceVelocity()


def test_joystick_step_is_limited_by_ramp():
    ramp, dt = 0.5, 0.1
    gen = JoystickReferenceVelocityGenerator(ramped_velocity=ramp)
    gen.on_joy([1.0, -1.0, 1.0])
    ref = gen.reference_velocity(0.0, dt)
    assert ref.velocity_x == pytest.approx(ramp * dt)
    assert ref.velocity_y == pytest.approx(-ramp * dt)
    assert ref.yaw_rate == pytest.approx(ramp * dt)


def test_joystick_converges_to_scaled_axes():
    gen = JoystickReferenceVelocityGenerator(
        ramped_velocity=2.0, x_index=3, y_index=0, yaw_index=1,
        x_scale=0.5, y_scale=2.0, yaw_scale=-1.0,
    )
    axes = [0.3, 0.4, 0.9, 0.8]
    gen.on_joy(axes)
    for _ in range(100):
        ref = gen.reference_velocity(0.0, 0.05)
    assert ref.velocity_x == pytest.approx(axes[3] * 0.5)
    assert ref.velocity_y == pytest.approx(axes[0] * 2.0)
    assert ref.yaw_rate == pytest.approx(axes[1] * -1.0)


def test_joystick_never_overshoots():
    gen = JoystickReferenceVelocityGenerator(ramped_velocity=10.0)
    gen.on_joy([0.25, 0.0, 0.0])
    ref = gen.reference_velocity(0.0, 1.0)
    assert ref.velocity_x == pytest.approx(0.25)
    assert ref.velocity_y == 0.0


def test_factory_joystick_flat_keys():
    prefix = "reference_generator/joystick/"
    config = {
        "reference_generator/type": "joystick",
        prefix + "topic": "/joy",
        prefix + "ramped_velocity": 3.0,
        prefix + "x_index": 1,
        prefix + "y_index": 0,
        prefix + "yaw_index": 2,
        prefix + "x_scale": 1.0,
        prefix + "y_scale": 1.0,
        prefix + "yaw_scale": 1.0,
    }
    gen = make_reference_generator(config)
    assert isinstance(gen, JoystickReferenceVelocityGenerator)
    assert gen.ramped_velocity == 3.0
    assert gen.x_index == 1
    assert gen.topic == "/joy"


def test_factory_twist_nested():
    config = {"reference_generator": {"type": "twist", "twist": {"topic": "/cmd_vel"}}}
    gen = make_reference_generator(config)
    assert isinstance(gen, TwistReferenceVelocityGenerator)
    assert gen.topic == "/cmd_vel"


def test_factory_unknown_type():
    with pytest.raises(ValueError):
        make_reference_generator({"reference_generator/type": "keyboard"})


def test_factory_missing_key():
    with pytest.raises(KeyError):
        make_reference_generator({"reference_generator/type": "twist"})