"""Plain data records describing drawables, parameters and loaded moc data."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vector2:
    """A two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class ConstantFlag:
    """Flags of a drawable that never change after the model is loaded."""

    blend_additive: bool = False
    blend_multiplicative: bool = False
    is_double_sided: bool = False
    is_inverted_mask: bool = False


@dataclass(frozen=True)
class DynamicFlag:
    """Flags of a drawable that are refreshed on every model update."""

    is_visible: bool = False
    visibility_did_change: bool = False
    opacity_did_change: bool = False
    draw_order_did_change: bool = False
    render_order_did_change: bool = False
    vertex_positions_did_change: bool = False
    blend_color_did_change: bool = False


def parse_constant_flag(flag: int) -> ConstantFlag:
    """Decode a constant-flag bit field."""
    return ConstantFlag(
        blend_additive=bool(flag & 1),
        blend_multiplicative=bool(flag & 2),
        is_double_sided=bool(flag & 4),
        is_inverted_mask=bool(flag & 8),
    )


def parse_dynamic_flag(flag: int) -> DynamicFlag:
    """Decode a dynamic-flag bit field."""
    return DynamicFlag(
        is_visible=bool(flag & 1),
        visibility_did_change=bool(flag & 2),
        opacity_did_change=bool(flag & 4),
        draw_order_did_change=bool(flag & 8),
        render_order_did_change=bool(flag & 16),
        vertex_positions_did_change=bool(flag & 32),
        blend_color_did_change=bool(flag & 64),
    )


@dataclass
class Drawable:
    """Everything known about one drawable mesh of a model."""

    id: str
    texture: int = 0
    vertex_positions: list[Vector2] = field(default_factory=list)
    vertex_uvs: list[Vector2] = field(default_factory=list)
    vertex_indices: list[int] = field(default_factory=list)
    constant_flag: ConstantFlag = field(default_factory=ConstantFlag)
    dynamic_flag: DynamicFlag = field(default_factory=DynamicFlag)
    opacity: float = 0.0
    masks: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Parameter:
    """A model parameter with its range, default and current value."""

    id: str
    minimum: float = 0.0
    maximum: float = 0.0
    default: float = 0.0
    current: float = 0.0


@dataclass
class Moc:
    """Handles and buffers of a revived moc and the model built from it."""

    moc_ptr: int = 0
    moc_buffer: bytes = b""
    model_ptr: int = 0
    model_buffer: bytearray = field(default_factory=bytearray)
    closed: bool = field(default=False, init=False)

    def close(self) -> None:
        """Release the buffers; further calls do nothing."""
        if self.closed:
            return
        self.moc_buffer = b""
        self.model_buffer = bytearray()
        self.moc_ptr = 0
        self.model_ptr = 0
        self.closed = True