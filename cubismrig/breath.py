"""Sine-wave breathing applied on top of the current parameter values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .ids import CubismIdManager, is_valid_handle


@dataclass
class BreathParameterData:
    """One parameter's breathing wave: ``offset + peak * sin(2πt / cycle)``."""

    parameter_id: str
    offset: float = 0.0
    peak: float = 0.0
    cycle: float = 1.0
    weight: float = 1.0


def default_breath_parameters() -> list[BreathParameterData]:
    """The standard set of breathing waves."""
    return [
        BreathParameterData("ParamAngleX", offset=0.0, peak=15.0, cycle=6.5345, weight=1.0),
        BreathParameterData("ParamAngleY", offset=0.0, peak=8.0, cycle=3.5345, weight=1.0),
        BreathParameterData("ParamAngleZ", offset=0.0, peak=10.0, cycle=5.5345, weight=1.0),
        BreathParameterData("ParamBodyAngleX", offset=0.0, peak=4.0, cycle=15.5345, weight=1.0),
        BreathParameterData("ParamBreath", offset=0.0, peak=0.5, cycle=3.2345, weight=1.0),
    ]


class BreathManager:
    """Adds the breathing waves to model parameters every update."""

    def __init__(
        self,
        core: Any,
        model_ptr: int,
        parameters: list[BreathParameterData] | None = None,
        id_manager: CubismIdManager | None = None,
    ) -> None:
        self.core = core
        self.model_ptr = model_ptr
        self.parameters = default_breath_parameters() if parameters is None else parameters
        self.id_manager = id_manager
        self.current_time = 0.0

    def update(self, delta_time_seconds: float) -> None:
        """Advance by ``delta_time_seconds`` and add each wave's weighted value."""
        self.current_time += delta_time_seconds
        t = self.current_time * 2.0 * math.pi

        for data in self.parameters:
            value = data.offset + data.peak * math.sin(t / data.cycle)
            if self.id_manager is not None:
                handle = self.id_manager.get_parameter_id(data.parameter_id)
                if not is_valid_handle(handle):
                    continue
                current = self.core.get_parameter_value_by_index(self.model_ptr, handle)
                self.core.set_parameter_value_by_index(
                    self.model_ptr, handle, current + value * data.weight
                )
            else:
                current = self.core.get_parameter_value(self.model_ptr, data.parameter_id)
                self.core.set_parameter_value(
                    self.model_ptr, data.parameter_id, current + value * data.weight
                )