import pytest

from cubismrig.matrix import Matrix44, ModelMatrix, ViewMatrix, multiply

IDENTITY = [
    1, 0, 0, 0,
    0, 1, 0, 0,
    0, 0, 1, 0,
    0, 0, 0, 1,
]


def approx(value):
    return pytest.approx(value, abs=0.001)


# --- Matrix44 ---


def test_new_matrix_is_identity():
    assert Matrix44().tr == IDENTITY


def test_load_identity():
    m = Matrix44()
    m.tr[0] = 5
    m.tr[12] = 100
    m.load_identity()
    assert m.tr == IDENTITY


def test_scale_and_translate_accessors():
    m = Matrix44()
    m.tr[0] = 2.5
    m.tr[5] = 3.0
    m.tr[12] = 10.0
    m.tr[13] = 20.0
    assert m.scale_x() == 2.5
    assert m.scale_y() == 3.0
    assert m.translate_x() == 10.0
    assert m.translate_y() == 20.0


def test_transform_xy():
    m = Matrix44()
    m.scale(2, 3)
    m.translate(10, 20)
    assert m.transform_x(5) == approx(20)
    assert m.transform_y(5) == approx(35)


def test_invert_transform_xy():
    m = Matrix44()
    m.scale(2, 3)
    m.translate(10, 20)
    assert m.invert_transform_x(20) == approx(5)
    assert m.invert_transform_y(35) == approx(5)


def test_translate():
    m = Matrix44()
    m.translate(5, 10)
    assert (m.translate_x(), m.translate_y()) == (5, 10)


def test_translate_relative():
    m = Matrix44()
    m.translate(10, 20)
    m.translate_relative(5, 5)
    assert m.translate_x() == approx(15)
    assert m.translate_y() == approx(25)


def test_scale():
    m = Matrix44()
    m.scale(3, 4)
    assert (m.scale_x(), m.scale_y()) == (3, 4)


def test_scale_relative():
    m = Matrix44()
    m.scale(2, 3)
    m.scale_relative(2, 2)
    assert m.scale_x() == approx(4)
    assert m.scale_y() == approx(6)


def test_multiply_identity():
    assert multiply(Matrix44().tr, Matrix44().tr) == IDENTITY


def test_multiply_translate_scale():
    tm = Matrix44()
    tm.translate(10, 20)
    sm = Matrix44()
    sm.scale(2, 3)
    result = Matrix44(multiply(tm.tr, sm.tr))
    assert result.scale_x() == approx(2)
    assert result.scale_y() == approx(3)
    assert result.translate_x() == approx(20)
    assert result.translate_y() == approx(60)


def test_multiply_rejects_short_input():
    with pytest.raises(ValueError):
        multiply([1, 2, 3], IDENTITY)


def test_invert_identity():
    inv = Matrix44().inverted()
    assert inv.scale_x() == approx(1)
    assert inv.scale_y() == approx(1)
    assert inv.translate_x() == approx(0)
    assert inv.translate_y() == approx(0)


def test_invert_scaled_translated():
    m = Matrix44()
    m.scale(2, 4)
    m.translate(10, 20)
    inv = m.inverted()
    assert inv.scale_x() == approx(0.5)
    assert inv.scale_y() == approx(0.25)
    assert inv.translate_x() == approx(-5)
    assert inv.translate_y() == approx(-5)


def test_invert_round_trip():
    m = Matrix44()
    m.scale(2, 4)
    m.translate(10, 20)
    product = multiply(m.inverted().tr, m.tr)
    assert product == pytest.approx(IDENTITY, abs=1e-9)


def test_invert_degenerate_returns_identity():
    m = Matrix44()
    m.scale(0, 0)
    inv = m.inverted()
    assert inv.scale_x() == approx(1)
    assert inv.scale_y() == approx(1)


def test_set_matrix():
    m = Matrix44()
    m.set_matrix([
        2, 0, 0, 0,
        0, 3, 0, 0,
        0, 0, 1, 0,
        10, 20, 0, 1,
    ])
    assert (m.scale_x(), m.scale_y()) == (2, 3)
    assert (m.translate_x(), m.translate_y()) == (10, 20)


def test_set_matrix_rejects_short_input():
    with pytest.raises(ValueError):
        Matrix44().set_matrix([1, 0, 0])


# --- ModelMatrix ---


def test_new_model_matrix():
    m = ModelMatrix(100, 200)
    assert m.scale_x() == approx(0.01)
    assert m.scale_y() == approx(0.01)


def test_model_matrix_set_width():
    m = ModelMatrix(100, 200)
    m.set_width(50)
    assert m.scale_x() == approx(0.5)
    assert m.scale_y() == approx(0.5)


def test_model_matrix_set_height():
    m = ModelMatrix(100, 200)
    m.set_height(4)
    assert m.scale_x() == approx(0.02)


def test_model_matrix_set_position():
    m = ModelMatrix(100, 200)
    m.set_position(5, 10)
    assert (m.translate_x(), m.translate_y()) == (5, 10)


def test_model_matrix_center_position():
    m = ModelMatrix(100, 200)
    m.set_center_position(0, 0)
    assert m.translate_x() == approx(-0.5)
    assert m.translate_y() == approx(-1.0)


def test_model_matrix_edges():
    m = ModelMatrix(100, 200)
    m.set_width(50)  # scale 0.5: 50 wide, 100 tall
    m.right(100)
    m.bottom(300)
    assert m.translate_x() == approx(50)
    assert m.translate_y() == approx(200)
    m.left(7)
    m.top(9)
    assert m.translate_x() == approx(7)
    assert m.translate_y() == approx(9)


def test_model_matrix_setup_from_layout():
    m = ModelMatrix(100, 200)
    m.setup_from_layout({"width": 50, "center_x": 400, "center_y": 300})
    assert m.scale_x() == approx(0.5)
    assert m.translate_x() == approx(375)
    assert m.translate_y() == approx(250)


def test_model_matrix_layout_applies_sizing_before_position():
    m = ModelMatrix(100, 200)
    m.setup_from_layout({"center_x": 400, "width": 50})
    assert m.translate_x() == approx(375)


# --- ViewMatrix ---


def test_new_view_matrix_has_zero_scale_bounds():
    v = ViewMatrix()
    assert (v.max_scale, v.min_scale) == (0, 0)
    assert v.tr == IDENTITY


def test_view_matrix_set_screen_rect():
    v = ViewMatrix()
    v.set_screen_rect(-1, 1, -2, 2)
    assert (v.screen_left, v.screen_right) == (-1, 1)
    assert (v.screen_bottom, v.screen_top) == (-2, 2)


def test_view_matrix_set_max_screen_rect():
    v = ViewMatrix()
    v.set_max_screen_rect(-3, 3, -4, 4)
    assert (v.max_left, v.max_right, v.max_bottom, v.max_top) == (-3, 3, -4, 4)


def test_view_matrix_set_max_min_scale():
    v = ViewMatrix()
    v.max_scale = 5
    v.min_scale = 0.5
    assert (v.max_scale, v.min_scale) == (5, 0.5)


def test_view_matrix_is_max_min_scale():
    v = ViewMatrix()
    v.max_scale = 2
    v.min_scale = 0.5
    v.scale(2, 2)
    assert v.is_max_scale()
    v.scale(0.5, 0.5)
    assert v.is_min_scale()
    assert not v.is_max_scale()


def test_view_matrix_adjust_scale():
    v = ViewMatrix()
    v.max_scale = 5
    v.min_scale = 0.5
    v.scale(1, 1)
    v.adjust_scale(0, 0, 2)
    assert v.scale_x() == approx(2)
    v.adjust_scale(0, 0, 0.5)
    assert v.scale_x() == approx(1)


def test_view_matrix_adjust_scale_clamp_max():
    v = ViewMatrix()
    v.max_scale = 2
    v.min_scale = 0.5
    v.scale(1, 1)
    v.adjust_scale(0, 0, 5)
    assert v.scale_x() == approx(2)


def test_view_matrix_adjust_scale_clamp_min():
    v = ViewMatrix()
    v.max_scale = 5
    v.min_scale = 1
    v.scale(2, 2)
    v.adjust_scale(0, 0, 0.1)
    assert v.scale_x() == approx(1.0)


def test_view_matrix_adjust_translate_within_bounds():
    v = ViewMatrix()
    v.set_screen_rect(-1, 1, -1, 1)
    v.set_max_screen_rect(-2, 2, -2, 2)
    v.adjust_translate(0.5, 0)
    assert v.translate_x() == approx(0.5)
    assert v.translate_y() == approx(0)


def test_view_matrix_adjust_translate_clamped():
    v = ViewMatrix()
    v.set_screen_rect(-1, 1, -1, 1)
    v.set_max_screen_rect(-2, 2, -2, 2)
    v.adjust_translate(5, 0)
    assert v.translate_x() == approx(1)
    v.adjust_translate(0, -5)
    assert v.translate_y() == approx(-1)