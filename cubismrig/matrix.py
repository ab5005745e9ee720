"""4x4 transformation matrices for model placement and view control.

Matrices are stored column-major in 16 floats::

    tr[0]  tr[4]  tr[8]   tr[12]      | scale_x  0        0   translate_x |
    tr[1]  tr[5]  tr[9]   tr[13]      | 0        scale_y  0   translate_y |
    tr[2]  tr[6]  tr[10]  tr[14]      | 0        0        1   tz          |
    tr[3]  tr[7]  tr[11]  tr[15]      | 0        0        0   1           |
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

EPSILON = 0.00001

_IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)


def _translation(x: float, y: float) -> list[float]:
    return [
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        x, y, 0.0, 1.0,
    ]


def _scaling(x: float, y: float) -> list[float]:
    return [
        x, 0.0, 0.0, 0.0,
        0.0, y, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ]


def multiply(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Return the 16-element product of ``a`` and ``b`` in the stored layout."""
    if len(a) < 16 or len(b) < 16:
        raise ValueError("matrices must have 16 elements")
    return [
        sum(a[k + i * 4] * b[j + k * 4] for k in range(4))
        for i in range(4)
        for j in range(4)
    ]


class Matrix44:
    """A 4x4 matrix, initialised to the identity."""

    def __init__(self, tr: Sequence[float] | None = None) -> None:
        self.tr: list[float] = list(_IDENTITY)
        if tr is not None:
            self.set_matrix(tr)

    def load_identity(self) -> None:
        """Reset to the identity matrix."""
        self.tr = list(_IDENTITY)

    def set_matrix(self, tr: Sequence[float]) -> None:
        """Copy 16 elements from ``tr``."""
        if len(tr) < 16:
            raise ValueError("a matrix needs 16 elements")
        self.tr = [float(v) for v in tr[:16]]

    def scale_x(self) -> float:
        """Scaling factor along X."""
        return self.tr[0]

    def scale_y(self) -> float:
        """Scaling factor along Y."""
        return self.tr[5]

    def translate_x(self) -> float:
        """Translation along X."""
        return self.tr[12]

    def translate_y(self) -> float:
        """Translation along Y."""
        return self.tr[13]

    def transform_x(self, src: float) -> float:
        """Map an X coordinate through the matrix."""
        return self.tr[0] * src + self.tr[12]

    def transform_y(self, src: float) -> float:
        """Map a Y coordinate through the matrix."""
        return self.tr[5] * src + self.tr[13]

    def invert_transform_x(self, src: float) -> float:
        """Map an X coordinate back through the matrix."""
        return (src - self.tr[12]) / self.tr[0]

    def invert_transform_y(self, src: float) -> float:
        """Map a Y coordinate back through the matrix."""
        return (src - self.tr[13]) / self.tr[5]

    def translate_relative(self, x: float, y: float) -> None:
        """Apply a translation on the left: ``m = T * m``."""
        self.tr = multiply(_translation(x, y), self.tr)

    def translate(self, x: float, y: float) -> None:
        """Set the absolute translation."""
        self.tr[12] = x
        self.tr[13] = y

    def scale_relative(self, x: float, y: float) -> None:
        """Apply a scaling on the left: ``m = S * m``."""
        self.tr = multiply(_scaling(x, y), self.tr)

    def scale(self, x: float, y: float) -> None:
        """Set the absolute scale."""
        self.tr[0] = x
        self.tr[5] = y

    def multiply_by_matrix(self, other: Matrix44) -> None:
        """Multiply by ``other`` on the left: ``m = other * m``."""
        self.tr = multiply(other.tr, self.tr)

    def inverted(self) -> Matrix44:
        """The inverse matrix, or the identity if this one is singular."""
        t = self.tr
        r00, r10, r20 = t[0], t[1], t[2]
        r01, r11, r21 = t[4], t[5], t[6]
        r02, r12, r22 = t[8], t[9], t[10]
        tx, ty, tz = t[12], t[13], t[14]

        det = (
            r00 * (r11 * r22 - r12 * r21)
            - r01 * (r10 * r22 - r12 * r20)
            + r02 * (r10 * r21 - r11 * r20)
        )
        if abs(det) < EPSILON:
            return Matrix44()

        inv_det = 1.0 / det
        inv00 = (r11 * r22 - r12 * r21) * inv_det
        inv01 = -(r01 * r22 - r02 * r21) * inv_det
        inv02 = (r01 * r12 - r02 * r11) * inv_det
        inv10 = -(r10 * r22 - r12 * r20) * inv_det
        inv11 = (r00 * r22 - r02 * r20) * inv_det
        inv12 = -(r00 * r12 - r02 * r10) * inv_det
        inv20 = (r10 * r21 - r11 * r20) * inv_det
        inv21 = -(r00 * r21 - r01 * r20) * inv_det
        inv22 = (r00 * r11 - r01 * r10) * inv_det

        return Matrix44([
            inv00, inv10, inv20, 0.0,
            inv01, inv11, inv21, 0.0,
            inv02, inv12, inv22, 0.0,
            -(inv00 * tx + inv01 * ty + inv02 * tz),
            -(inv10 * tx + inv11 * ty + inv12 * tz),
            -(inv20 * tx + inv21 * ty + inv22 * tz),
            1.0,
        ])


class ModelMatrix(Matrix44):
    """Places a model of known width and height in logical coordinates.

    A new matrix is scaled so that the model is 2.0 units tall.
    """

    def __init__(self, width: float, height: float) -> None:
        super().__init__()
        self.width = width
        self.height = height
        self.set_height(2.0)

    def set_width(self, w: float) -> None:
        """Scale uniformly so the model is ``w`` wide."""
        factor = w / self.width
        self.scale(factor, factor)

    def set_height(self, h: float) -> None:
        """Scale uniformly so the model is ``h`` tall."""
        factor = h / self.height
        self.scale(factor, factor)

    def set_position(self, x: float, y: float) -> None:
        """Set the absolute position."""
        self.translate(x, y)

    def set_center_position(self, x: float, y: float) -> None:
        """Centre the model at ``(x, y)``; call after sizing."""
        self.center_x(x)
        self.center_y(y)

    def top(self, y: float) -> None:
        """Put the top edge at ``y``."""
        self.set_y(y)

    def bottom(self, y: float) -> None:
        """Put the bottom edge at ``y``."""
        self.tr[13] = y - self.height * self.scale_y()

    def left(self, x: float) -> None:
        """Put the left edge at ``x``."""
        self.set_x(x)

    def right(self, x: float) -> None:
        """Put the right edge at ``x``."""
        self.tr[12] = x - self.width * self.scale_x()

    def center_x(self, x: float) -> None:
        """Put the horizontal centre at ``x``."""
        self.tr[12] = x - self.width * self.scale_x() / 2.0

    def center_y(self, y: float) -> None:
        """Put the vertical centre at ``y``."""
        self.tr[13] = y - self.height * self.scale_y() / 2.0

    def set_x(self, x: float) -> None:
        """Set the absolute X position."""
        self.tr[12] = x

    def set_y(self, y: float) -> None:
        """Set the absolute Y position."""
        self.tr[13] = y

    def setup_from_layout(self, layout: Mapping[str, float]) -> None:
        """Apply sizing keys first, then positioning keys, from ``layout``."""
        sizing = {"width": self.set_width, "height": self.set_height}
        positioning = {
            "x": self.set_x,
            "y": self.set_y,
            "center_x": self.center_x,
            "center_y": self.center_y,
            "top": self.top,
            "bottom": self.bottom,
            "left": self.left,
            "right": self.right,
        }
        for key, value in layout.items():
            if key in sizing:
                sizing[key](value)
        for key, value in layout.items():
            if key in positioning:
                positioning[key](value)


class ViewMatrix(Matrix44):
    """Camera matrix whose moves and zooms are kept within screen limits."""

    def __init__(self) -> None:
        super().__init__()
        self.screen_left = 0.0
        self.screen_right = 0.0
        self.screen_top = 0.0
        self.screen_bottom = 0.0
        self.max_left = 0.0
        self.max_right = 0.0
        self.max_top = 0.0
        self.max_bottom = 0.0
        self.max_scale = 0.0
        self.min_scale = 0.0

    def adjust_translate(self, x: float, y: float) -> None:
        """Translate by ``(x, y)``, clamped to the maximum screen rectangle."""
        t = self.tr
        if t[0] * self.max_left + (t[12] + x) > self.screen_left:
            x = self.screen_left - t[0] * self.max_left - t[12]
        if t[0] * self.max_right + (t[12] + x) < self.screen_right:
            x = self.screen_right - t[0] * self.max_right - t[12]
        if t[5] * self.max_top + (t[13] + y) < self.screen_top:
            y = self.screen_top - t[5] * self.max_top - t[13]
        if t[5] * self.max_bottom + (t[13] + y) > self.screen_bottom:
            y = self.screen_bottom - t[5] * self.max_bottom - t[13]
        self.tr = multiply(_translation(x, y), self.tr)

    def adjust_scale(self, cx: float, cy: float, scale: float) -> None:
        """Zoom by ``scale`` around ``(cx, cy)``, clamped to the scale limits."""
        target = scale * self.tr[0]
        if target < self.min_scale:
            if self.tr[0] > 0:
                scale = self.min_scale / self.tr[0]
        elif target > self.max_scale:
            if self.tr[0] > 0:
                scale = self.max_scale / self.tr[0]

        self.tr = multiply(_translation(-cx, -cy), self.tr)
        self.tr = multiply(_scaling(scale, scale), self.tr)
        self.tr = multiply(_translation(cx, cy), self.tr)

    def set_screen_rect(self, left: float, right: float, bottom: float, top: float) -> None:
        """Set the logical screen boundaries."""
        self.screen_left = left
        self.screen_right = right
        self.screen_bottom = bottom
        self.screen_top = top

    def set_max_screen_rect(self, left: float, right: float, bottom: float, top: float) -> None:
        """Set the furthest boundaries the view may move to."""
        self.max_left = left
        self.max_right = right
        self.max_bottom = bottom
        self.max_top = top

    def is_max_scale(self) -> bool:
        """Whether the current scale is at or above the maximum."""
        return self.scale_x() >= self.max_scale

    def is_min_scale(self) -> bool:
        """Whether the current scale is at or below the minimum."""
        return self.scale_x() <= self.min_scale