"""Smoothed face direction that accelerates toward and eases into a target."""

from __future__ import annotations

import math

FRAME_RATE = 30
EPSILON = 0.01
FACE_PARAM_MAX_V = 40.0 / 10.0
MAX_V_PER_FRAME = FACE_PARAM_MAX_V * 1.0 / FRAME_RATE
TIME_TO_MAX_SPEED = 0.15


class TargetPoint:
    """Tracks where the model is facing, moving it smoothly toward a target."""

    def __init__(self) -> None:
        self._face_target_x = 0.0
        self._face_target_y = 0.0
        self._face_x = 0.0
        self._face_y = 0.0
        self._face_vx = 0.0
        self._face_vy = 0.0
        self._last_time_seconds = 0.0
        self._user_time_seconds = 0.0

    def update(self, delta_time_seconds: float) -> None:
        """Advance the face direction by ``delta_time_seconds``."""
        self._user_time_seconds += delta_time_seconds

        if self._last_time_seconds == 0.0:
            self._last_time_seconds = self._user_time_seconds
            return

        delta_time_weight = (self._user_time_seconds - self._last_time_seconds) * FRAME_RATE
        self._last_time_seconds = self._user_time_seconds

        frame_to_max_speed = TIME_TO_MAX_SPEED * FRAME_RATE
        max_a = delta_time_weight * MAX_V_PER_FRAME / frame_to_max_speed

        dx = self._face_target_x - self._face_x
        dy = self._face_target_y - self._face_y
        if abs(dx) <= EPSILON and abs(dy) <= EPSILON:
            return

        d = math.hypot(dx, dy)

        vx = MAX_V_PER_FRAME * dx / d
        vy = MAX_V_PER_FRAME * dy / d

        ax = vx - self._face_vx
        ay = vy - self._face_vy
        a = math.hypot(ax, ay)
        if a < -max_a or a > max_a:
            ax *= max_a / a
            ay *= max_a / a

        self._face_vx += ax
        self._face_vy += ay

        # Largest speed from which the remaining distance can still be braked to zero.
        max_v = 0.5 * (math.sqrt(max_a * max_a + 16.0 * max_a * d - 8.0 * max_a * d) - max_a)
        cur_v = math.hypot(self._face_vx, self._face_vy)
        if cur_v > max_v:
            self._face_vx *= max_v / cur_v
            self._face_vy *= max_v / cur_v

        self._face_x += self._face_vx
        self._face_y += self._face_vy

    def set(self, x: float, y: float) -> None:
        """Set the target direction; each coordinate in [-1, 1]."""
        self._face_target_x = x
        self._face_target_y = y

    def x(self) -> float:
        """Current horizontal direction."""
        return self._face_x

    def y(self) -> float:
        """Current vertical direction."""
        return self._face_y