"""A model engine that keeps every model in memory.

Moc files for this engine are UTF-8 JSON documents of the form::

    {
      "parameters": [{"id": str, "minimum": num, "maximum": num, "default": num}],
      "parts": [{"id": str, "opacity": num}],
      "drawables": [{
          "id": str, "texture": int, "part": int, "opacity": num,
          "constant_flags": int, "order": int,
          "positions": [[x, y], ...], "uvs": [[u, v], ...],
          "indices": [int, ...], "masks": [int, ...]
      }],
      "canvas": {"size": [w, h], "origin": [x, y], "pixels_per_unit": num}
    }

Parameters are stored but do not deform meshes. A drawable's opacity is its
own opacity scaled by the opacity of the part it belongs to, and an update
raises the visibility and opacity change flags accordingly.
"""

from __future__ import annotations

import itertools
import json
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from typing import Any

from .core import Core
from .drawable import Vector2, parse_dynamic_flag

_VISIBLE = 1
_VISIBILITY_DID_CHANGE = 2
_OPACITY_DID_CHANGE = 4


@dataclass(frozen=True)
class _ParameterSpec:
    id: str
    minimum: float
    maximum: float
    default: float


@dataclass(frozen=True)
class _PartSpec:
    id: str
    opacity: float


@dataclass(frozen=True)
class _DrawableSpec:
    id: str
    texture: int
    part: int
    opacity: float
    constant_flags: int
    order: int
    positions: tuple[Vector2, ...]
    uvs: tuple[Vector2, ...]
    indices: tuple[int, ...]
    masks: tuple[int, ...]


@dataclass(frozen=True)
class _MocSpec:
    parameters: tuple[_ParameterSpec, ...]
    parts: tuple[_PartSpec, ...]
    drawables: tuple[_DrawableSpec, ...]
    canvas_size: Vector2
    canvas_origin: Vector2
    pixels_per_unit: float


@dataclass
class _ModelState:
    spec: _MocSpec
    parameter_values: list[float]
    part_opacities: list[float]
    drawable_opacities: list[float]
    dynamic_flags: list[int]


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} must be a number")
    return float(value)


def _integer(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer")
    return value


def _string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string")
    return value


def _vector(value: Any, what: str) -> Vector2:
    if not isinstance(value, list) or len(value) != 2:
        raise ValueError(f"{what} must be a pair of numbers")
    return Vector2(_number(value[0], what), _number(value[1], what))


def _entries(doc: dict[str, Any], key: str) -> list[dict[str, Any]]:
    entries = doc.get(key, [])
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ValueError(f"{key} must be a list of objects")
    return entries


def _parse_parameter(entry: dict[str, Any]) -> _ParameterSpec:
    pid = _string(entry.get("id"), "parameter id")
    minimum = _number(entry.get("minimum"), "parameter minimum")
    maximum = _number(entry.get("maximum"), "parameter maximum")
    default = _number(entry.get("default", minimum), "parameter default")
    if not minimum <= default <= maximum:
        raise ValueError(f"parameter {pid!r} has an inconsistent range")
    return _ParameterSpec(pid, minimum, maximum, default)


def _parse_part(entry: dict[str, Any]) -> _PartSpec:
    return _PartSpec(
        _string(entry.get("id"), "part id"),
        _number(entry.get("opacity", 1.0), "part opacity"),
    )


def _parse_drawable(entry: dict[str, Any], index: int, part_count: int, drawable_count: int) -> _DrawableSpec:
    did = _string(entry.get("id"), "drawable id")
    positions = entry.get("positions", [])
    uvs = entry.get("uvs", [])
    if not isinstance(positions, list) or not isinstance(uvs, list):
        raise ValueError(f"drawable {did!r} vertices must be lists")
    if len(positions) != len(uvs):
        raise ValueError(f"drawable {did!r} has mismatched positions and uvs")
    indices = entry.get("indices", [])
    masks = entry.get("masks", [])
    if not isinstance(indices, list) or not isinstance(masks, list):
        raise ValueError(f"drawable {did!r} indices and masks must be lists")
    if len(indices) % 3:
        raise ValueError(f"drawable {did!r} indices do not form triangles")
    vertex_indices = tuple(_integer(i, "vertex index") for i in indices)
    if any(not 0 <= i < len(positions) for i in vertex_indices):
        raise ValueError(f"drawable {did!r} has a vertex index out of range")
    mask_indices = tuple(_integer(m, "mask index") for m in masks)
    if any(not 0 <= m < drawable_count for m in mask_indices):
        raise ValueError(f"drawable {did!r} has a mask out of range")
    part = _integer(entry.get("part", -1), "drawable part")
    if not -1 <= part < part_count:
        raise ValueError(f"drawable {did!r} refers to an unknown part")
    constant_flags = _integer(entry.get("constant_flags", 0), "constant flags")
    if not 0 <= constant_flags <= 0xFF:
        raise ValueError(f"drawable {did!r} constant flags do not fit a byte")
    return _DrawableSpec(
        id=did,
        texture=_integer(entry.get("texture", 0), "texture index"),
        part=part,
        opacity=_number(entry.get("opacity", 1.0), "drawable opacity"),
        constant_flags=constant_flags,
        order=_integer(entry.get("order", index), "drawable order"),
        positions=tuple(_vector(p, "vertex position") for p in positions),
        uvs=tuple(_vector(uv, "vertex uv") for uv in uvs),
        indices=vertex_indices,
        masks=mask_indices,
    )


def _parse_spec(data: bytes) -> _MocSpec:
    doc = json.loads(data.decode("utf-8"))
    if not isinstance(doc, dict):
        raise ValueError("moc document must be an object")
    parameters = tuple(_parse_parameter(e) for e in _entries(doc, "parameters"))
    parts = tuple(_parse_part(e) for e in _entries(doc, "parts"))
    drawable_entries = _entries(doc, "drawables")
    drawables = tuple(
        _parse_drawable(e, index, len(parts), len(drawable_entries))
        for index, e in enumerate(drawable_entries)
    )
    canvas = doc.get("canvas", {})
    if not isinstance(canvas, dict):
        raise ValueError("canvas must be an object")
    return _MocSpec(
        parameters=parameters,
        parts=parts,
        drawables=drawables,
        canvas_size=_vector(canvas.get("size", [0, 0]), "canvas size"),
        canvas_origin=_vector(canvas.get("origin", [0, 0]), "canvas origin"),
        pixels_per_unit=_number(canvas.get("pixels_per_unit", 1.0), "pixels per unit"),
    )


class MemoryCore(Core):
    """An engine whose models live entirely in Python objects."""

    def __init__(self, version: str = "5.0.0") -> None:
        self._version = version
        self._handles = itertools.count(1)
        self._mocs: dict[int, _MocSpec] = {}
        self._models: dict[int, _ModelState] = {}

    # ---- public engine interface ----

    def load_moc(self, path):
        """Read a moc document from *path* and instantiate a model from it."""
        return super().load_moc(path)

    def get_version(self) -> str:
        """Return the engine version string."""
        return self._version

    def get_dynamic_flags(self, model_ptr: int):
        """Return the parsed dynamic flags of every drawable."""
        return [parse_dynamic_flag(flags) for flags in self._model(model_ptr).dynamic_flags]

    def get_opacities(self, model_ptr: int) -> list[float]:
        """Return the effective opacity of every drawable."""
        return list(self._model(model_ptr).drawable_opacities)

    def get_vertex_positions(self, model_ptr: int):
        """Return the vertex positions of every drawable."""
        self._model(model_ptr)
        return super().get_vertex_positions(model_ptr)

    def get_drawables(self, model_ptr: int):
        """Return full information on every drawable."""
        self._model(model_ptr)
        return super().get_drawables(model_ptr)

    def get_parameters(self, model_ptr: int):
        """Return every parameter with its range and current value."""
        self._model(model_ptr)
        return super().get_parameters(model_ptr)

    def get_parameter_ids(self, model_ptr: int) -> list[str]:
        """Return the parameter ids in model order."""
        return [p.id for p in self._model(model_ptr).spec.parameters]

    def get_parameter_value(self, model_ptr: int, parameter_id: str) -> float:
        """Return a parameter value by id, or 0.0 for an unknown id."""
        state = self._model(model_ptr)
        for spec, value in zip(state.spec.parameters, state.parameter_values):
            if spec.id == parameter_id:
                return value
        return 0.0

    def set_parameter_value(self, model_ptr: int, parameter_id: str, value: float) -> None:
        """Set a parameter value by id; unknown ids are ignored."""
        state = self._model(model_ptr)
        for index, spec in enumerate(state.spec.parameters):
            if spec.id == parameter_id:
                state.parameter_values[index] = value
                return

    def get_parameter_value_by_index(self, model_ptr: int, index: int) -> float:
        """Return a parameter value by index, or 0.0 when out of range."""
        values = self._model(model_ptr).parameter_values
        if not 0 <= index < len(values):
            return 0.0
        return values[index]

    def set_parameter_value_by_index(self, model_ptr: int, index: int, value: float) -> None:
        """Set a parameter value by index; out-of-range indices are ignored."""
        values = self._model(model_ptr).parameter_values
        if 0 <= index < len(values):
            values[index] = value

    def get_parameter_count(self, model_ptr: int) -> int:
        """Return the number of parameters in the model."""
        return len(self._model(model_ptr).parameter_values)

    def get_parameter_values(self, model_ptr: int):
        """Return the live parameter values."""
        self._model(model_ptr)
        return super().get_parameter_values(model_ptr)

    def get_part_ids(self, model_ptr: int) -> list[str]:
        """Return the part ids in model order."""
        return [p.id for p in self._model(model_ptr).spec.parts]

    def get_part_opacities(self, model_ptr: int):
        """Return the live part opacities."""
        self._model(model_ptr)
        return super().get_part_opacities(model_ptr)

    def set_part_opacity(self, model_ptr: int, part_id: str, value: float) -> None:
        """Set a part opacity by id; unknown ids are ignored."""
        state = self._model(model_ptr)
        for index, spec in enumerate(state.spec.parts):
            if spec.id == part_id:
                state.part_opacities[index] = value
                return

    def set_part_opacity_by_index(self, model_ptr: int, index: int, value: float) -> None:
        """Set a part opacity by index; out-of-range indices are ignored."""
        opacities = self._model(model_ptr).part_opacities
        if 0 <= index < len(opacities):
            opacities[index] = value

    def get_part_opacity_by_index(self, model_ptr: int, index: int) -> float:
        """Return a part opacity by index, or 0.0 when out of range."""
        opacities = self._model(model_ptr).part_opacities
        if not 0 <= index < len(opacities):
            return 0.0
        return opacities[index]

    def get_sorted_drawable_indices(self, model_ptr: int):
        """Return drawable indices ordered by their draw order."""
        self._model(model_ptr)
        return super().get_sorted_drawable_indices(model_ptr)

    def get_canvas_info(self, model_ptr: int):
        """Return the canvas size, origin and pixels per unit."""
        spec = self._model(model_ptr).spec
        return spec.canvas_size, spec.canvas_origin, spec.pixels_per_unit

    def update(self, model_ptr: int) -> None:
        """Reset the change flags and recompute drawable state."""
        self._model(model_ptr)
        super().update(model_ptr)

    # ---- internal helpers ----

    def _model(self, model_ptr: int) -> _ModelState:
        try:
            return self._models[model_ptr]
        except KeyError:
            raise KeyError(f"unknown model handle {model_ptr}") from None

    @staticmethod
    def _effective_opacities(state: _ModelState) -> list[float]:
        return [
            d.opacity * (state.part_opacities[d.part] if d.part >= 0 else 1.0)
            for d in state.spec.drawables
        ]

    # ---- backend primitives ----

    def _read_version(self) -> str:
        return self._version

    def _has_moc_consistency(self, data: bytes) -> bool:
        try:
            _parse_spec(data)
        except (ValueError, TypeError):
            return False
        return True

    def _revive_moc(self, data: bytes) -> int:
        try:
            spec = _parse_spec(data)
        except (ValueError, TypeError):
            return 0
        handle = next(self._handles)
        self._mocs[handle] = spec
        return handle

    def _sizeof_model(self, moc_ptr: int) -> int:
        spec = self._mocs.get(moc_ptr)
        if spec is None:
            return 0
        values = len(spec.parameters) + len(spec.parts) + 2 * len(spec.drawables)
        return 4 * (values + 1)

    def _initialize_model(self, moc_ptr: int, buffer: bytearray) -> int:
        spec = self._mocs.get(moc_ptr)
        if spec is None:
            return 0
        state = _ModelState(
            spec=spec,
            parameter_values=[p.default for p in spec.parameters],
            part_opacities=[p.opacity for p in spec.parts],
            drawable_opacities=[],
            dynamic_flags=[],
        )
        state.drawable_opacities = self._effective_opacities(state)
        state.dynamic_flags = [_VISIBLE if o > 0.0 else 0 for o in state.drawable_opacities]
        handle = next(self._handles)
        self._models[handle] = state
        return handle

    def _update_model(self, model_ptr: int) -> None:
        state = self._model(model_ptr)
        opacities = self._effective_opacities(state)
        for index, (old, new) in enumerate(zip(state.drawable_opacities, opacities)):
            flags = state.dynamic_flags[index]
            was_visible = bool(flags & _VISIBLE)
            visible = new > 0.0
            flags = (flags | _VISIBLE) if visible else (flags & ~_VISIBLE)
            if visible != was_visible:
                flags |= _VISIBILITY_DID_CHANGE
            if new != old:
                flags |= _OPACITY_DID_CHANGE
            state.dynamic_flags[index] = flags
        state.drawable_opacities = opacities

    def _read_canvas_info(self, model_ptr: int) -> tuple[Vector2, Vector2, float]:
        spec = self._model(model_ptr).spec
        return spec.canvas_size, spec.canvas_origin, spec.pixels_per_unit

    def _reset_drawable_dynamic_flags(self, model_ptr: int) -> None:
        state = self._model(model_ptr)
        state.dynamic_flags = [flags & _VISIBLE for flags in state.dynamic_flags]

    def _parameter_ids(self, model_ptr: int) -> Sequence[str]:
        return [p.id for p in self._model(model_ptr).spec.parameters]

    def _parameter_minimum_values(self, model_ptr: int) -> Sequence[float]:
        return [p.minimum for p in self._model(model_ptr).spec.parameters]

    def _parameter_maximum_values(self, model_ptr: int) -> Sequence[float]:
        return [p.maximum for p in self._model(model_ptr).spec.parameters]

    def _parameter_default_values(self, model_ptr: int) -> Sequence[float]:
        return [p.default for p in self._model(model_ptr).spec.parameters]

    def _parameter_values(self, model_ptr: int) -> MutableSequence[float]:
        return self._model(model_ptr).parameter_values

    def _part_ids(self, model_ptr: int) -> Sequence[str]:
        return [p.id for p in self._model(model_ptr).spec.parts]

    def _part_opacities(self, model_ptr: int) -> MutableSequence[float]:
        return self._model(model_ptr).part_opacities

    def _drawable_ids(self, model_ptr: int) -> Sequence[str]:
        return [d.id for d in self._model(model_ptr).spec.drawables]

    def _drawable_constant_flags(self, model_ptr: int) -> Sequence[int]:
        return [d.constant_flags for d in self._model(model_ptr).spec.drawables]

    def _drawable_dynamic_flags(self, model_ptr: int) -> Sequence[int]:
        return list(self._model(model_ptr).dynamic_flags)

    def _drawable_texture_indices(self, model_ptr: int) -> Sequence[int]:
        return [d.texture for d in self._model(model_ptr).spec.drawables]

    def _drawable_opacities(self, model_ptr: int) -> Sequence[float]:
        return list(self._model(model_ptr).drawable_opacities)

    def _drawable_masks(self, model_ptr: int) -> Sequence[Sequence[int]]:
        return [d.masks for d in self._model(model_ptr).spec.drawables]

    def _drawable_vertex_positions(self, model_ptr: int) -> Sequence[Sequence[Vector2]]:
        return [d.positions for d in self._model(model_ptr).spec.drawables]

    def _drawable_vertex_uvs(self, model_ptr: int) -> Sequence[Sequence[Vector2]]:
        return [d.uvs for d in self._model(model_ptr).spec.drawables]

    def _drawable_indices(self, model_ptr: int) -> Sequence[Sequence[int]]:
        return [d.indices for d in self._model(model_ptr).spec.drawables]

    def _drawable_sort_orders(self, model_ptr: int) -> Sequence[int]:
        return [d.order for d in self._model(model_ptr).spec.drawables]