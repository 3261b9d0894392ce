import random

import pytest

from wheel import Frame, RestEvent, SpinEvent, Wheel, fit_geometry
from wheel_config import WheelConfig
from wheel_gesture import PointerEvent


@pytest.fixture
def events():
    return {"spin": [], "rest": []}


@pytest.fixture
def wheel(events):
    config = WheelConfig.from_dict({"items": [{"label": label} for label in "ABCD"]})
    w = Wheel(
        config,
        on_spin=events["spin"].append,
        on_rest=events["rest"].append,
        rng=random.Random(1234),
    )
    w.resize(200, 200)
    return w


def run_until_rest(wheel, dt=1 / 60, limit=5000):
    wheel.tick(0.0)
    for _ in range(limit):
        if wheel.tick(dt):
            return True
    return False


def test_resize_fits_wheel_into_container(wheel):
    assert wheel.geometry.center == (100, 100)
    assert wheel.geometry.size == pytest.approx(200)
    assert wheel.geometry.radius == pytest.approx(95)


def test_fit_geometry_uses_smallest_side_and_offset():
    geometry = fit_geometry(400, 200, radius=1.0, offset=(0.0, 0.0))
    assert geometry.center == (200, 100)
    assert geometry.radius == pytest.approx(100)
    shifted = fit_geometry(200, 200, radius=1.0, offset=(0.0, 0.1))
    assert shifted.center == (100, pytest.approx(120))
    assert fit_geometry(0, 100, radius=1.0, offset=(0, 0)).radius == 0


def test_spin_adds_jittered_impulse_and_reports_it(wheel, events):
    wheel.spin(100)
    assert 85 <= wheel.velocity <= 115
    assert wheel.direction == 1
    [event] = events["spin"]
    assert event == SpinEvent(direction=1, velocity=wheel.velocity)


def test_spin_is_clamped_to_max_speed(wheel):
    wheel.spin(1000)
    assert wheel.velocity == 250
    wheel.spin(-5000)
    assert wheel.velocity == -250
    assert wheel.direction == -1


def test_spin_ignores_junk_impulse(wheel, events):
    wheel.spin("fast")
    assert wheel.velocity == 0
    assert len(events["spin"]) == 1


@pytest.mark.parametrize("impulse", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_impulse_keeps_the_wheel_spinning(wheel, events, impulse):
    wheel.spin(100)
    velocity = wheel.velocity
    wheel.spin(impulse)
    assert wheel.velocity == velocity
    assert wheel.direction == 1
    assert run_until_rest(wheel)
    assert len(events["rest"]) == 1


def test_huge_impulse_clamps_to_max_speed(wheel):
    wheel.spin(1e308)
    assert wheel.velocity == 250
    wheel.spin(-1e308)
    wheel.spin(-1e308)
    assert wheel.velocity == -250


def test_spin_is_ignored_while_dragging(wheel, events):
    wheel.pointer_down(PointerEvent(100, 20, 0))
    wheel.spin(200)
    assert wheel.velocity == 0
    assert events["spin"] == []
    for _ in range(100):
        wheel.tick(1 / 60)
    assert events["rest"] == []
    wheel.pointer_up(PointerEvent(100, 20, 900))
    wheel.spin(100)
    assert wheel.velocity > 0


def test_rest_fires_exactly_once_with_the_indicated_item(wheel, events):
    wheel.spin(100)
    assert run_until_rest(wheel)
    for _ in range(200):
        assert not wheel.tick(1 / 60)
    [rest] = events["rest"]
    assert isinstance(rest, RestEvent)
    assert rest.item is wheel.current_item()
    assert rest.item.label in "ABCD"


def test_rest_happens_in_expected_time(wheel):
    wheel.spin(100)
    velocity = wheel.velocity
    wheel.tick(0.0)
    elapsed = 0.0
    while not wheel.tick(0.01):
        elapsed += 0.01
    assert elapsed <= velocity / 35 + 0.01


def test_each_spin_gets_its_own_rest(wheel, events):
    for _ in range(3):
        wheel.spin(60)
        run_until_rest(wheel)
    assert len(events["rest"]) == 3


def test_empty_wheel_rests_with_no_item(events):
    wheel = Wheel(on_rest=events["rest"].append)
    wheel.spin(50)
    run_until_rest(wheel)
    assert events["rest"] == [RestEvent(item=None)]


def test_pointer_down_outside_does_not_drag(wheel):
    assert not wheel.pointer_down(PointerEvent(1, 1, 0))
    assert not wheel.is_dragging


def test_pointer_down_stops_spin_without_rest_event(wheel, events):
    wheel.spin(200)
    wheel.tick(0.0)
    wheel.tick(0.1)
    assert wheel.pointer_down(PointerEvent(100, 20, 0))
    assert wheel.velocity == 0
    assert wheel.is_dragging
    wheel.tick(0.1)
    assert events["rest"] == []


def test_non_interactive_wheel_ignores_pointer(wheel):
    wheel.set_is_interactive(False)
    assert not wheel.pointer_down(PointerEvent(100, 20, 0))
    wheel.pointer_move(PointerEvent(100, 30, 1))
    assert wheel.cursor is None


def test_drag_follows_pointer_and_flick_spins(wheel, events):
    wheel.set_rotation(0)
    wheel.pointer_down(PointerEvent(100, 20, 1000))
    wheel.pointer_move(PointerEvent(140, 30, 1010))
    wheel.pointer_move(PointerEvent(180, 100, 1030))
    assert wheel.rotation == pytest.approx(90)
    wheel.pointer_up(PointerEvent(180, 100, 1040))
    assert not wheel.is_dragging
    [event] = events["spin"]
    assert event.direction == 1
    assert event.velocity > 0
    assert len(event.drag_samples) == 2


def test_ticks_do_not_move_a_dragged_wheel(wheel):
    wheel.pointer_down(PointerEvent(100, 20, 0))
    wheel.pointer_move(PointerEvent(180, 100, 10))
    rotation = wheel.rotation
    wheel.tick(0.5)
    assert wheel.rotation == rotation


def test_release_after_holding_still_does_not_spin(wheel, events):
    wheel.pointer_down(PointerEvent(100, 20, 0))
    wheel.pointer_move(PointerEvent(180, 100, 10))
    wheel.pointer_up(PointerEvent(180, 100, 900))
    assert events["spin"] == []
    assert wheel.velocity == 0


def test_cursor_affordance(wheel):
    assert wheel.cursor is None
    wheel.pointer_move(PointerEvent(100, 100, 0))
    assert wheel.cursor == "grab"
    wheel.pointer_down(PointerEvent(100, 50, 0))
    assert wheel.cursor == "grabbing"
    wheel.pointer_up(PointerEvent(100, 50, 1))
    wheel.pointer_move(PointerEvent(0, 0, 2))
    assert wheel.cursor is None


def test_set_items_keeps_motion(wheel):
    wheel.spin(100)
    wheel.tick(0.0)
    wheel.tick(0.2)
    rotation, velocity = wheel.rotation, wheel.velocity
    old_segments = wheel.segments
    wheel.set_items([{"label": "X", "weight": 3}, {"label": "Y"}])
    assert (wheel.rotation, wheel.velocity) == (rotation, velocity)
    assert wheel.segments is not old_segments
    assert [s.width for s in wheel.segments] == pytest.approx([270, 90])


def test_lowering_max_speed_clamps_running_wheel(wheel):
    wheel.spin(200)
    wheel.set_max_speed(50)
    assert wheel.velocity == 50


def test_frame_listener_receives_snapshot(wheel):
    frames = []
    wheel.add_frame_listener(frames.append)
    wheel.tick(0.0)
    [frame] = frames
    assert isinstance(frame, Frame)
    assert frame.segments == wheel.segments
    assert frame.current_item.label == "A"
    wheel.remove_frame_listener(frames.append)
    wheel.tick(0.0)
    assert len(frames) == 1


def test_pointer_angle_picks_winner(wheel):
    wheel.set_pointer_angle(180)
    assert wheel.current_item().label == "C"


def test_non_callable_callbacks_are_ignored(wheel):
    wheel.set_on_spin("nope")
    wheel.set_on_rest(42)
    wheel.spin(10)
    assert run_until_rest(wheel)
