# cubismrig

This package provides the pieces needed to drive a Cubism-style 2D model from Python. It covers model parameters and parts, drawable data, automatic blinking, breathing, look-following, a smoothed face direction, and the 4x4 matrices used to place a model and control the view. It has no dependencies outside the standard library.

## Modules

- `cubismrig.drawable` holds the plain data records `Vector2`, `ConstantFlag`, `DynamicFlag`, `Drawable`, `Parameter` and `Moc`.
  - `parse_constant_flag(flag)` and `parse_dynamic_flag(flag)` decode the per-drawable flag bytes.
  - `Moc.close()` drops the buffers and zeroes the handles. Calling it more than once does nothing.
- `cubismrig.core` holds `Core`, the abstract engine interface, along with two helpers.
  - A backend implements the underscore primitives, such as the raw id, value and opacity arrays and the moc/model creation steps.
  - `Core` builds the public methods on top of those primitives. These are `load_moc`, `get_parameters`, `get_drawables`, `get_parameter_value`, `set_parameter_value`, their `..._by_index` forms, the part opacity accessors, `get_sorted_drawable_indices`, `get_canvas_info` and `update`.
  - Unknown ids and out-of-range indices are ignored when setting. When reading, they return `0.0`.
  - `load_moc` raises `ValueError` when the moc is not consistent or a model cannot be built from it.
  - `parse_major_version(version)` returns the leading integer of a dotted version string. It raises `ValueError` when that part is not an integer.
  - `sort_by_orders(orders)` returns indices sorted stably by ascending order.
- `cubismrig.memory_core` holds `MemoryCore`, a `Core` whose models live entirely in Python objects.
  - Its moc files are UTF-8 JSON documents that list `parameters`, `parts`, `drawables` and an optional `canvas`. The module docstring gives the full layout.
  - Parameters are stored but do not deform meshes.
  - A drawable's opacity is its own opacity times that of its part.
  - `update()` sets the visibility and opacity change flags to match.
  - An unknown model handle raises `KeyError`.
- `cubismrig.ids` holds `CubismIdManager`, which maps parameter and part ids to their indices ("handles").
  - `INVALID_HANDLE` (`-1`) is returned for ids it does not know.
  - `is_valid_handle(handle)` checks a handle.
- `cubismrig.blink` holds `EyeState` and `BlinkManager`.
  - `BlinkManager` cycles the eye-open parameters through interval, closing, closed and opening phases.
  - The timing defaults are a 4.0 s interval, 0.1 s closing and 0.15 s opening.
  - You may pass a `random.Random` as `rng` to make blink timing reproducible.
- `cubismrig.breath` holds `BreathParameterData`, `default_breath_parameters()` and `BreathManager`.
  - On each update the manager adds `offset + peak * sin(2πt / cycle)`, scaled by `weight`, to each parameter.
- `cubismrig.look` holds `LookParameterData` and `LookManager`.
  - On each update the manager adds `factor_x*x + factor_y*y + factor_xy*x*y` for the target set with `set_target`.
  - `target()` returns the current target.
- `cubismrig.matrix` holds the matrix types and one helper function.
  - `Matrix44` is a 4x4 matrix stored column-major.
  - `ModelMatrix` sizes and positions a model of known width and height. `setup_from_layout` applies the sizing keys first, then the positioning keys.
  - `ViewMatrix` translates and zooms, clamped to the screen rectangle and the scale limits.
  - `multiply(a, b)` returns the product of two 16-element matrices.
  - `Matrix44.inverted()` returns the identity for a singular matrix.
- `cubismrig.target_point` holds `TargetPoint`, a face direction that accelerates toward a target and eases into it.
- `cubismrig.cubism_model` holds `DrawableInfo` and `CubismModel`.
  - `CubismModel` joins a core, a `Moc` and a `CubismIdManager`.
  - Through the core it offers parameter access, including `add_parameter_value`, `multiply_parameter_value` and `set_parameter_value_with_weight`.
  - `save_parameters()` and `load_parameters()` save and restore parameter values.
  - It also provides `update()`, drawable queries and `close()`.

The blink, breath and look managers each take a core and a model handle. They read and write parameters through the core. If they have a `CubismIdManager`, they address parameters by index; otherwise they address them by id.
- `BlinkManager` receives its id manager through `set_id_manager`.
- `BreathManager` and `LookManager` accept `id_manager=` or the `id_manager` attribute.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Example

```python
import json
from pathlib import Path

from cubismrig.cubism_model import CubismModel
from cubismrig.ids import CubismIdManager
from cubismrig.memory_core import MemoryCore

doc = {
    "parameters": [{"id": "ParamBreath", "minimum": 0, "maximum": 1, "default": 0}],
    "parts": [{"id": "PartBody", "opacity": 1.0}],
    "drawables": [{
        "id": "Body", "part": 0,
        "positions": [[0, 0], [1, 0], [0, 1]],
        "uvs": [[0, 0], [1, 0], [0, 1]],
        "indices": [0, 1, 2],
    }],
}
path = Path("body.moc3.json")
path.write_text(json.dumps(doc))

core = MemoryCore()
moc = core.load_moc(path)
ids = CubismIdManager(core.get_parameter_ids(moc.model_ptr), core.get_part_ids(moc.model_ptr))
model = CubismModel(core, moc, ids)

model.add_parameter_value("ParamBreath", 0.5, 1.0)
print(model.get_parameter_value("ParamBreath"))          # 0.5

core.set_part_opacity(moc.model_ptr, "PartBody", 0.5)
model.update()
print(model.get_opacities())                             # [0.5]
print(model.get_dynamic_flags()[0].opacity_did_change)   # True
```

Placing a model with a matrix:

```python
from cubismrig.matrix import ModelMatrix

matrix = ModelMatrix(100, 200)
matrix.setup_from_layout({"width": 50, "center_x": 400, "center_y": 300})
print(matrix.translate_x(), matrix.translate_y())  # 375.0 250.0
```

## What this package does not do

- It does not read model settings files, motions, expressions, physics, pose or user data. It does not play motions or sounds.
- It does not render anything, and it has no window or command.
- The only engine included is `MemoryCore`, which uses its own JSON moc format and does not deform meshes from parameters. To use any other engine, subclass `Core` and implement its underscore primitives.

## Tests

```
pytest
```