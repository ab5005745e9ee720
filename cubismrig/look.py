"""Head and eye following of a drag target."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ids import CubismIdManager, is_valid_handle


@dataclass
class LookParameterData:
    """Coefficients of one parameter: ``fx*x + fy*y + fxy*x*y``."""

    parameter_id: str
    factor_x: float = 0.0
    factor_y: float = 0.0
    factor_xy: float = 0.0


class LookManager:
    """Adds the target-following offsets to model parameters every update."""

    def __init__(
        self,
        core: Any,
        model_ptr: int,
        parameters: list[LookParameterData] | None = None,
        id_manager: CubismIdManager | None = None,
    ) -> None:
        self.core = core
        self.model_ptr = model_ptr
        self.parameters = [] if parameters is None else parameters
        self.id_manager = id_manager
        self._drag_x = 0.0
        self._drag_y = 0.0

    def set_target(self, drag_x: float, drag_y: float) -> None:
        """Set the target point; each coordinate in [-1, 1], centre (0, 0)."""
        self._drag_x = drag_x
        self._drag_y = drag_y

    def target(self) -> tuple[float, float]:
        """The current target point."""
        return self._drag_x, self._drag_y

    def update(self, delta_time_seconds: float) -> None:
        """Add each parameter's offset for the current target."""
        drag_xy = self._drag_x * self._drag_y
        for data in self.parameters:
            value = (
                data.factor_x * self._drag_x
                + data.factor_y * self._drag_y
                + data.factor_xy * drag_xy
            )
            if self.id_manager is not None:
                handle = self.id_manager.get_parameter_id(data.parameter_id)
                if not is_valid_handle(handle):
                    continue
                current = self.core.get_parameter_value_by_index(self.model_ptr, handle)
                self.core.set_parameter_value_by_index(self.model_ptr, handle, current + value)
            else:
                current = self.core.get_parameter_value(self.model_ptr, data.parameter_id)
                self.core.set_parameter_value(self.model_ptr, data.parameter_id, current + value)