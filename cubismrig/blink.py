"""Automatic eye blinking."""

from __future__ import annotations

import random
from collections.abc import Iterable
from enum import IntEnum
from typing import Any

from .ids import INVALID_HANDLE, CubismIdManager, is_valid_handle


class EyeState(IntEnum):
    """Phases of a blink."""

    FIRST = 0
    INTERVAL = 1
    CLOSING = 2
    CLOSED = 3
    OPENING = 4


class BlinkManager:
    """Drives the eye-open parameters through periodic blinks."""

    def __init__(
        self,
        core: Any,
        model_ptr: int,
        ids: Iterable[str],
        rng: random.Random | None = None,
    ) -> None:
        self.core = core
        self.model_ptr = model_ptr
        self.ids = list(ids)
        self.id_manager: CubismIdManager | None = None
        self._handles: list[int] = [INVALID_HANDLE] * len(self.ids)
        self._rng = rng or random.Random()
        self.state = EyeState.FIRST
        self.interval = 4.0
        self.closing = 0.1
        self.opening = 0.15
        self.current_time = 0.0
        self.state_start_time = 0.0
        self.next_blinking_time = 0.0

    def set_id_manager(self, id_manager: CubismIdManager | None) -> None:
        """Use ``id_manager`` to address the blink parameters by index."""
        self.id_manager = id_manager
        if id_manager is None:
            self._handles = [INVALID_HANDLE] * len(self.ids)
        else:
            self._handles = [id_manager.get_parameter_id(pid) for pid in self.ids]

    def determine_next_blinking_timing(self) -> float:
        """Pick the time of the next blink, at random after the current time."""
        return self.current_time + self._rng.random() * (2.0 * self.interval - 1.0)

    def update(self, delta: float) -> None:
        """Advance by ``delta`` seconds and write the eye-open value."""
        self.current_time += delta

        if self.state is EyeState.FIRST:
            self.state = EyeState.INTERVAL
            self.next_blinking_time = self.determine_next_blinking_timing()
            value = 1.0
        elif self.state is EyeState.INTERVAL:
            if self.current_time >= self.next_blinking_time:
                self.state = EyeState.CLOSING
                self.state_start_time = self.current_time
            value = 1.0
        elif self.state is EyeState.CLOSING:
            t = (self.current_time - self.state_start_time) / self.closing
            if t >= 1:
                self.state = EyeState.CLOSED
                self.state_start_time = self.current_time
            value = 1.0 - t
        elif self.state is EyeState.CLOSED:
            t = (self.current_time - self.state_start_time) / self.closing
            if t >= 1:
                self.state = EyeState.OPENING
                self.state_start_time = self.current_time
            value = 0.0
        else:
            t = (self.current_time - self.state_start_time) / self.opening
            if t >= 1:
                t = 1.0
                self.state = EyeState.INTERVAL
                self.next_blinking_time = self.determine_next_blinking_timing()
            value = t

        for pid, handle in zip(self.ids, self._handles):
            if self.id_manager is not None and is_valid_handle(handle):
                self.core.set_parameter_value_by_index(self.model_ptr, handle, value)
            else:
                self.core.set_parameter_value(self.model_ptr, pid, value)