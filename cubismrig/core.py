"""The model engine interface and the logic shared by every engine backend.

A backend supplies the raw per-model arrays (the underscore methods); the
public methods of :class:`Core` build parameters, drawables and draw order on
top of them.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import MutableSequence, Sequence
from os import PathLike
from pathlib import Path

from .drawable import (
    Drawable,
    DynamicFlag,
    Moc,
    Parameter,
    Vector2,
    parse_constant_flag,
    parse_dynamic_flag,
)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_major_version(version: str) -> int:
    """Return the major number of a version string such as ``"5.0.0"``."""
    major = version.split(".", 1)[0]
    if not _INTEGER.fullmatch(major):
        raise ValueError(f"invalid version format: {version!r}")
    return int(major)


def sort_by_orders(orders: Sequence[int]) -> list[int]:
    """Return drawable indices ordered by ascending sort order, stably."""
    return sorted(range(len(orders)), key=orders.__getitem__)


class Core(ABC):
    """Access to a model engine, addressed by model handle."""

    # ---- backend primitives ----

    @abstractmethod
    def _read_version(self) -> str:
        """Version of the engine as a dotted string."""

    @abstractmethod
    def _has_moc_consistency(self, data: bytes) -> bool:
        """Whether ``data`` is a well-formed moc."""

    @abstractmethod
    def _revive_moc(self, data: bytes) -> int:
        """Revive a moc from ``data``; return its handle, or 0 on failure."""

    @abstractmethod
    def _sizeof_model(self, moc_ptr: int) -> int:
        """Bytes needed for a model of the moc, or 0 on failure."""

    @abstractmethod
    def _initialize_model(self, moc_ptr: int, buffer: bytearray) -> int:
        """Build a model in ``buffer``; return its handle, or 0 on failure."""

    @abstractmethod
    def _update_model(self, model_ptr: int) -> None:
        """Recompute the model from its parameters."""

    @abstractmethod
    def _read_canvas_info(self, model_ptr: int) -> tuple[Vector2, Vector2, float]:
        """Canvas size, origin and pixels per unit."""

    @abstractmethod
    def _reset_drawable_dynamic_flags(self, model_ptr: int) -> None:
        """Clear the per-update dynamic flags of every drawable."""

    @abstractmethod
    def _parameter_ids(self, model_ptr: int) -> Sequence[str]:
        """Parameter ids in model order."""

    @abstractmethod
    def _parameter_minimum_values(self, model_ptr: int) -> Sequence[float]:
        """Parameter minimums in model order."""

    @abstractmethod
    def _parameter_maximum_values(self, model_ptr: int) -> Sequence[float]:
        """Parameter maximums in model order."""

    @abstractmethod
    def _parameter_default_values(self, model_ptr: int) -> Sequence[float]:
        """Parameter defaults in model order."""

    @abstractmethod
    def _parameter_values(self, model_ptr: int) -> MutableSequence[float]:
        """Live, writable parameter values in model order."""

    @abstractmethod
    def _part_ids(self, model_ptr: int) -> Sequence[str]:
        """Part ids in model order."""

    @abstractmethod
    def _part_opacities(self, model_ptr: int) -> MutableSequence[float]:
        """Live, writable part opacities in model order."""

    @abstractmethod
    def _drawable_ids(self, model_ptr: int) -> Sequence[str]:
        """Drawable ids in model order."""

    @abstractmethod
    def _drawable_constant_flags(self, model_ptr: int) -> Sequence[int]:
        """Raw constant-flag bytes per drawable."""

    @abstractmethod
    def _drawable_dynamic_flags(self, model_ptr: int) -> Sequence[int]:
        """Raw dynamic-flag bytes per drawable."""

    @abstractmethod
    def _drawable_texture_indices(self, model_ptr: int) -> Sequence[int]:
        """Texture index per drawable."""

    @abstractmethod
    def _drawable_opacities(self, model_ptr: int) -> Sequence[float]:
        """Opacity per drawable."""

    @abstractmethod
    def _drawable_masks(self, model_ptr: int) -> Sequence[Sequence[int]]:
        """Indices of the masking drawables, per drawable."""

    @abstractmethod
    def _drawable_vertex_positions(self, model_ptr: int) -> Sequence[Sequence[Vector2]]:
        """Vertex positions per drawable."""

    @abstractmethod
    def _drawable_vertex_uvs(self, model_ptr: int) -> Sequence[Sequence[Vector2]]:
        """Texture coordinates per drawable."""

    @abstractmethod
    def _drawable_indices(self, model_ptr: int) -> Sequence[Sequence[int]]:
        """Triangle vertex indices per drawable."""

    @abstractmethod
    def _drawable_sort_orders(self, model_ptr: int) -> Sequence[int]:
        """Sort key per drawable (render order or draw order)."""

    # ---- public interface ----

    def load_moc(self, path: str | PathLike[str]) -> Moc:
        """Read a moc3 file and build a model from it."""
        data = Path(path).read_bytes()
        if not self._has_moc_consistency(data):
            raise ValueError("moc3 is not consistent")
        moc_ptr = self._revive_moc(data)
        if moc_ptr == 0:
            raise ValueError("failed to revive moc3")
        size = self._sizeof_model(moc_ptr)
        if size == 0:
            raise ValueError("failed to get size of model")
        buffer = bytearray(size)
        model_ptr = self._initialize_model(moc_ptr, buffer)
        if model_ptr == 0:
            raise ValueError("failed to initialize model")
        return Moc(moc_ptr=moc_ptr, moc_buffer=data, model_ptr=model_ptr, model_buffer=buffer)

    def get_version(self) -> str:
        """Version of the engine."""
        return self._read_version()

    def get_dynamic_flags(self, model_ptr: int) -> list[DynamicFlag]:
        """Decoded dynamic flags of every drawable."""
        return [parse_dynamic_flag(flag) for flag in self._drawable_dynamic_flags(model_ptr)]

    def get_opacities(self, model_ptr: int) -> list[float]:
        """Opacity of every drawable."""
        return list(self._drawable_opacities(model_ptr))

    def get_vertex_positions(self, model_ptr: int) -> list[list[Vector2]]:
        """Vertex positions of every drawable."""
        return [list(positions) for positions in self._drawable_vertex_positions(model_ptr)]

    def get_drawables(self, model_ptr: int) -> list[Drawable]:
        """Full description of every drawable; costly, meant for load time."""
        rows = zip(
            self._drawable_ids(model_ptr),
            self._drawable_texture_indices(model_ptr),
            self._drawable_vertex_positions(model_ptr),
            self._drawable_vertex_uvs(model_ptr),
            self._drawable_indices(model_ptr),
            self._drawable_constant_flags(model_ptr),
            self._drawable_dynamic_flags(model_ptr),
            self._drawable_opacities(model_ptr),
            self._drawable_masks(model_ptr),
            strict=True,
        )
        return [
            Drawable(
                id=drawable_id,
                texture=texture,
                vertex_positions=list(positions),
                vertex_uvs=list(uvs),
                vertex_indices=list(indices),
                constant_flag=parse_constant_flag(constant),
                dynamic_flag=parse_dynamic_flag(dynamic),
                opacity=opacity,
                masks=list(masks),
            )
            for drawable_id, texture, positions, uvs, indices, constant, dynamic, opacity, masks in rows
        ]

    def get_parameters(self, model_ptr: int) -> list[Parameter]:
        """Every parameter with its range, default and current value."""
        rows = zip(
            self._parameter_ids(model_ptr),
            self._parameter_minimum_values(model_ptr),
            self._parameter_maximum_values(model_ptr),
            self._parameter_default_values(model_ptr),
            self._parameter_values(model_ptr),
            strict=True,
        )
        return [
            Parameter(id=pid, minimum=lo, maximum=hi, default=default, current=current)
            for pid, lo, hi, default, current in rows
        ]

    def get_parameter_ids(self, model_ptr: int) -> list[str]:
        """Parameter ids in model order."""
        return list(self._parameter_ids(model_ptr))

    def _parameter_index(self, model_ptr: int, parameter_id: str) -> int | None:
        for index, pid in enumerate(self._parameter_ids(model_ptr)):
            if pid == parameter_id:
                return index
        return None

    def get_parameter_value(self, model_ptr: int, parameter_id: str) -> float:
        """Current value of a parameter by id; 0.0 if there is none."""
        index = self._parameter_index(model_ptr, parameter_id)
        if index is None:
            return 0.0
        return self._parameter_values(model_ptr)[index]

    def set_parameter_value(self, model_ptr: int, parameter_id: str, value: float) -> None:
        """Set a parameter by id; unknown ids are ignored."""
        index = self._parameter_index(model_ptr, parameter_id)
        if index is not None:
            self._parameter_values(model_ptr)[index] = value

    def get_parameter_value_by_index(self, model_ptr: int, index: int) -> float:
        """Current value of a parameter by index; 0.0 when out of range."""
        values = self._parameter_values(model_ptr)
        if not 0 <= index < len(values):
            return 0.0
        return values[index]

    def set_parameter_value_by_index(self, model_ptr: int, index: int, value: float) -> None:
        """Set a parameter by index; out-of-range indices are ignored."""
        values = self._parameter_values(model_ptr)
        if 0 <= index < len(values):
            values[index] = value

    def get_parameter_count(self, model_ptr: int) -> int:
        """Number of parameters."""
        return len(self._parameter_ids(model_ptr))

    def get_parameter_values(self, model_ptr: int) -> list[float]:
        """Snapshot of all parameter values."""
        return list(self._parameter_values(model_ptr))

    def get_parameter_minimum_values(self, model_ptr: int) -> list[float]:
        """Minimum of every parameter."""
        return list(self._parameter_minimum_values(model_ptr))

    def get_parameter_maximum_values(self, model_ptr: int) -> list[float]:
        """Maximum of every parameter."""
        return list(self._parameter_maximum_values(model_ptr))

    def get_parameter_default_values(self, model_ptr: int) -> list[float]:
        """Default of every parameter."""
        return list(self._parameter_default_values(model_ptr))

    def get_part_ids(self, model_ptr: int) -> list[str]:
        """Part ids in model order."""
        return list(self._part_ids(model_ptr))

    def get_part_opacities(self, model_ptr: int) -> list[float]:
        """Snapshot of all part opacities."""
        return list(self._part_opacities(model_ptr))

    def set_part_opacity(self, model_ptr: int, part_id: str, value: float) -> None:
        """Set a part's opacity by id; unknown ids are ignored."""
        for index, pid in enumerate(self._part_ids(model_ptr)):
            if pid == part_id:
                self._part_opacities(model_ptr)[index] = value
                return

    def set_part_opacity_by_index(self, model_ptr: int, index: int, value: float) -> None:
        """Set a part's opacity by index; out-of-range indices are ignored."""
        opacities = self._part_opacities(model_ptr)
        if 0 <= index < len(opacities):
            opacities[index] = value

    def get_part_opacity_by_index(self, model_ptr: int, index: int) -> float:
        """A part's opacity by index; 0.0 when out of range."""
        opacities = self._part_opacities(model_ptr)
        if not 0 <= index < len(opacities):
            return 0.0
        return opacities[index]

    def get_sorted_drawable_indices(self, model_ptr: int) -> list[int]:
        """Drawable indices in the order they are to be drawn."""
        return sort_by_orders(self._drawable_sort_orders(model_ptr))

    def get_canvas_info(self, model_ptr: int) -> tuple[Vector2, Vector2, float]:
        """Canvas size, origin and pixels per unit."""
        return self._read_canvas_info(model_ptr)

    def update(self, model_ptr: int) -> None:
        """Reset dynamic flags, then recompute the model."""
        self._reset_drawable_dynamic_flags(model_ptr)
        self._update_model(model_ptr)