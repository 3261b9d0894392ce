import pytest

from wheel_geometry import Point
from wheel_gesture import DragSample, GestureRecognizer, SampleRing, recent_samples, release_velocity

CENTER = Point(100, 100)


def sample(distance, t):
    return DragSample(distance=distance, x=0, y=0, timestamp_ms=t)


def test_ring_keeps_most_recent_samples_newest_first():
    ring = SampleRing(capacity=3)
    for t in range(5):
        ring.push(sample(t, t))
    assert len(ring) == 3
    assert [s.timestamp_ms for s in ring] == [4, 3, 2]
    ring.clear()
    assert len(ring) == 0
    assert list(ring) == []


def test_ring_default_capacity_is_fifty():
    ring = SampleRing()
    for t in range(120):
        ring.push(sample(1, t))
    assert len(ring) == 50
    assert next(iter(ring)).timestamp_ms == 119


def test_release_ignores_stale_samples():
    recognizer = GestureRecognizer()
    session = recognizer.drag_start(Point(100, 0), CENTER, rotation=0)
    session.samples.push(sample(10, 0))
    session.samples.push(sample(-5, 260))

    velocity, used = recognizer.drag_end(now_ms=300)

    assert velocity == pytest.approx(-7.5)
    assert [s.distance for s in used] == [-5]
    assert not recognizer.is_dragging


def test_recent_window_is_strict():
    ring = SampleRing()
    ring.push(sample(1, 50))
    ring.push(sample(2, 51))
    assert [s.distance for s in recent_samples(ring, now_ms=300)] == [2]
    assert release_velocity([sample(2, 0), sample(4, 0)]) == pytest.approx(9)


def test_drag_move_slaves_rotation_to_pointer():
    recognizer = GestureRecognizer()
    recognizer.drag_start(Point(100, 0), CENTER, rotation=30)
    rotation = recognizer.drag_move(Point(200, 100), CENTER, timestamp_ms=10)
    assert rotation == pytest.approx(120)
    rotation = recognizer.drag_move(Point(100, 200), CENTER, timestamp_ms=20)
    assert rotation == pytest.approx(210)


def test_anchor_survives_wraparound():
    recognizer = GestureRecognizer()
    recognizer.drag_start(Point(200, 100), CENTER, rotation=300)
    # Pointer goes from 90 to 180: rotation follows from 300 to 30.
    assert recognizer.drag_move(Point(100, 200), CENTER, timestamp_ms=1) == pytest.approx(30)


def test_clockwise_moves_record_positive_distance():
    recognizer = GestureRecognizer()
    session = recognizer.drag_start(Point(100, 0), CENTER, rotation=0)
    recognizer.drag_move(Point(200, 100), CENTER, timestamp_ms=10)
    [recorded] = list(session.samples)
    assert recorded.distance == pytest.approx(2 ** 0.5 * 100)
    assert (recorded.x, recorded.y) == (200, 100)


def test_anticlockwise_moves_record_negative_distance():
    recognizer = GestureRecognizer()
    session = recognizer.drag_start(Point(100, 0), CENTER, rotation=0)
    recognizer.drag_move(Point(0, 100), CENTER, timestamp_ms=10)
    assert next(iter(session.samples)).distance < 0


def test_flick_produces_release_velocity_in_drag_direction():
    recognizer = GestureRecognizer()
    recognizer.drag_start(Point(100, 0), CENTER, rotation=0)
    recognizer.drag_move(Point(110, 1), CENTER, timestamp_ms=1000)
    recognizer.drag_move(Point(120, 3), CENTER, timestamp_ms=1016)
    velocity, used = recognizer.drag_end(now_ms=1030)
    assert velocity > 0
    assert len(used) == 2


def test_holding_still_before_release_gives_no_spin():
    recognizer = GestureRecognizer()
    recognizer.drag_start(Point(100, 0), CENTER, rotation=0)
    recognizer.drag_move(Point(150, 10), CENTER, timestamp_ms=0)
    velocity, used = recognizer.drag_end(now_ms=1000)
    assert velocity == 0
    assert used == []


def test_events_without_a_drag_are_ignored():
    recognizer = GestureRecognizer()
    assert recognizer.drag_move(Point(1, 1), CENTER, timestamp_ms=0) is None
    assert recognizer.drag_end(now_ms=0) == (0.0, [])
