"""Mapping of parameter and part ids to their array indices.

A handle is simply the index of the id in the engine's arrays, so a lookup
by handle avoids scanning the id list on every access.
"""

from __future__ import annotations

from collections.abc import Iterable

INVALID_HANDLE = -1


def is_valid_handle(handle: int) -> bool:
    """Whether ``handle`` refers to an existing entry (a non-negative index)."""
    return handle >= 0


class CubismIdManager:
    """Resolves parameter and part ids to handles in constant time."""

    def __init__(
        self,
        parameter_ids: Iterable[str] | None = None,
        part_ids: Iterable[str] | None = None,
    ) -> None:
        self._parameter_ids = {pid: index for index, pid in enumerate(parameter_ids or ())}
        self._part_ids = {pid: index for index, pid in enumerate(part_ids or ())}

    def get_parameter_id(self, parameter_id: str) -> int:
        """Handle of a parameter, or ``INVALID_HANDLE`` if it is unknown."""
        return self._parameter_ids.get(parameter_id, INVALID_HANDLE)

    def get_part_id(self, part_id: str) -> int:
        """Handle of a part, or ``INVALID_HANDLE`` if it is unknown."""
        return self._part_ids.get(part_id, INVALID_HANDLE)

    def parameter_count(self) -> int:
        """Number of distinct parameter ids."""
        return len(self._parameter_ids)

    def part_count(self) -> int:
        """Number of distinct part ids."""
        return len(self._part_ids)