import pytest

from cubismrig.target_point import TargetPoint

STEP = 1.0 / 30.0
TOLERANCE = 0.001


def test_set_does_not_move_before_update():
    tp = TargetPoint()
    tp.set(0.5, -0.3)
    assert tp.x() == 0
    assert tp.y() == 0


def test_first_update_only_initialises():
    tp = TargetPoint()
    tp.set(1.0, 0.0)
    tp.update(STEP)
    assert tp.x() == 0
    assert tp.y() == 0


def test_update_moves_toward_target():
    tp = TargetPoint()
    tp.set(1.0, 0.0)
    tp.update(STEP)
    for _ in range(60):
        tp.update(STEP)
    assert tp.x() > 0


def test_update_reaches_target():
    tp = TargetPoint()
    tp.set(1.0, 0.0)
    tp.update(STEP)
    for _ in range(300):
        tp.update(STEP)
    assert tp.x() == pytest.approx(1.0, abs=TOLERANCE)


def test_no_movement_when_at_target():
    tp = TargetPoint()
    tp.set(0, 0)
    tp.update(STEP)
    for _ in range(10):
        tp.update(STEP)
    assert tp.x() == pytest.approx(0, abs=TOLERANCE)
    assert tp.y() == pytest.approx(0, abs=TOLERANCE)


def test_direction_change():
    tp = TargetPoint()
    tp.set(1.0, 0.0)
    tp.update(STEP)
    for _ in range(60):
        tp.update(STEP)
    positive_x = tp.x()

    tp.set(-1.0, 0.0)
    for _ in range(120):
        tp.update(STEP)
    assert tp.x() < positive_x


def test_vertical_target_leaves_x_alone():
    tp = TargetPoint()
    tp.set(0.0, -1.0)
    tp.update(STEP)
    for _ in range(30):
        tp.update(STEP)
    assert tp.y() < 0
    assert tp.x() == 0