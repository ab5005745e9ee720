"""The data layer of a loaded model: parameters, drawables and metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .core import Core
from .drawable import ConstantFlag, DynamicFlag, Moc, Parameter, Vector2
from .ids import CubismIdManager, is_valid_handle


@dataclass
class DrawableInfo:
    """Cached drawable data, with the texture resolved to a file path."""

    id: str
    texture: str = ""
    vertex_positions: list[Vector2] = field(default_factory=list)
    vertex_uvs: list[Vector2] = field(default_factory=list)
    vertex_indices: list[int] = field(default_factory=list)
    constant_flag: ConstantFlag = field(default_factory=ConstantFlag)
    dynamic_flag: DynamicFlag = field(default_factory=DynamicFlag)
    opacity: float = 0.0
    masks: list[int] = field(default_factory=list)


class CubismModel:
    """Wraps an engine model handle with parameter access and cached data."""

    def __init__(self, core: Core, moc: Moc, id_manager: CubismIdManager) -> None:
        self.core = core
        self.moc = moc
        self.id_manager = id_manager

        self.opacity = 1.0
        self.version = 0
        self.textures: list[str] = []
        self.sorted_indices: list[int] = []
        self.drawables: list[DrawableInfo] = []
        self.drawables_map: dict[str, DrawableInfo] = {}
        self.hit_areas: list[Any] = []
        self.groups: list[Any] = []

        self.physics: Any = None
        self.pose: Any = None
        self.cdi: Any = None
        self.expressions: list[Any] = []
        self.user_data: Any = None

        self._saved_parameters: dict[str, float] | None = None

    def model_ptr(self) -> int:
        """Engine handle of the model."""
        return self.moc.model_ptr

    # ---- parameters ----

    def get_parameters(self) -> list[Parameter]:
        """Every parameter of the model."""
        return self.core.get_parameters(self.moc.model_ptr)

    def get_parameter_value(self, parameter_id: str) -> float:
        """Current value of a parameter by id."""
        return self.core.get_parameter_value(self.moc.model_ptr, parameter_id)

    def set_parameter_value(self, parameter_id: str, value: float) -> None:
        """Set a parameter by id."""
        self.core.set_parameter_value(self.moc.model_ptr, parameter_id, value)

    def _modify(self, parameter_id: str, compute) -> None:
        handle = self.id_manager.get_parameter_id(parameter_id)
        if not is_valid_handle(handle):
            return
        ptr = self.moc.model_ptr
        current = self.core.get_parameter_value_by_index(ptr, handle)
        self.core.set_parameter_value_by_index(ptr, handle, compute(current))

    def add_parameter_value(self, parameter_id: str, value: float, weight: float) -> None:
        """Add ``value * weight`` to a parameter; unknown ids are ignored."""
        self._modify(parameter_id, lambda current: current + value * weight)

    def multiply_parameter_value(self, parameter_id: str, value: float, weight: float) -> None:
        """Multiply a parameter by ``value``, blended by ``weight``."""
        self._modify(parameter_id, lambda current: current * (1.0 + (value - 1.0) * weight))

    def set_parameter_value_with_weight(self, parameter_id: str, value: float, weight: float) -> None:
        """Move a parameter toward ``value`` by the fraction ``weight``."""
        self._modify(parameter_id, lambda current: current + (value - current) * weight)

    def save_parameters(self) -> None:
        """Remember the current parameter values."""
        if self._saved_parameters is None:
            self._saved_parameters = {}
        for parameter in self.get_parameters():
            self._saved_parameters[parameter.id] = parameter.current

    def load_parameters(self) -> None:
        """Restore the remembered parameter values, if any were saved."""
        if self._saved_parameters is None:
            return
        ptr = self.moc.model_ptr
        for parameter_id, value in self._saved_parameters.items():
            handle = self.id_manager.get_parameter_id(parameter_id)
            if is_valid_handle(handle):
                self.core.set_parameter_value_by_index(ptr, handle, value)

    # ---- engine updates ----

    def update(self) -> None:
        """Recompute the model from its parameters."""
        self.core.update(self.moc.model_ptr)

    def get_dynamic_flags(self) -> list[DynamicFlag]:
        """Dynamic flags of every drawable."""
        return self.core.get_dynamic_flags(self.moc.model_ptr)

    def get_sorted_drawable_indices(self) -> list[int]:
        """Drawable indices in drawing order."""
        return self.core.get_sorted_drawable_indices(self.moc.model_ptr)

    def get_opacities(self) -> list[float]:
        """Opacity of every drawable."""
        return self.core.get_opacities(self.moc.model_ptr)

    def get_vertex_positions(self) -> list[list[Vector2]]:
        """Vertex positions of every drawable."""
        return self.core.get_vertex_positions(self.moc.model_ptr)

    def close(self) -> None:
        """Release the model's resources."""
        self.moc.close()