import pytest

from cubismrig.ids import INVALID_HANDLE, CubismIdManager, is_valid_handle


@pytest.mark.parametrize(
    ("handle", "expected"),
    [(INVALID_HANDLE, False), (0, True), (5, True), (-1, False)],
)
def test_handle_is_valid(handle, expected):
    assert is_valid_handle(handle) is expected


def test_new_manager_counts():
    manager = CubismIdManager(["ParamA", "ParamB", "ParamC"], ["PartA", "PartB"])
    assert manager.parameter_count() == 3
    assert manager.part_count() == 2


@pytest.mark.parametrize(
    ("parameter_id", "expected"),
    [
        ("ParamEyeLOpen", 0),
        ("ParamEyeROpen", 1),
        ("ParamMouthOpen", 2),
        ("NonExistent", INVALID_HANDLE),
    ],
)
def test_get_parameter_id(parameter_id, expected):
    manager = CubismIdManager(["ParamEyeLOpen", "ParamEyeROpen", "ParamMouthOpen"], None)
    assert manager.get_parameter_id(parameter_id) == expected


def test_get_part_id():
    manager = CubismIdManager(None, ["PartArmL", "PartArmR"])
    assert manager.get_part_id("PartArmL") == 0
    assert manager.get_part_id("PartArmR") == 1
    assert manager.get_part_id("NonExistent") == INVALID_HANDLE


def test_empty_manager():
    manager = CubismIdManager()
    assert manager.parameter_count() == 0
    assert manager.part_count() == 0
    assert manager.get_parameter_id("anything") == INVALID_HANDLE


def test_handle_as_index():
    parameter_ids = ["A", "B", "C", "D", "E"]
    manager = CubismIdManager(parameter_ids, None)
    for index, pid in enumerate(parameter_ids):
        assert manager.get_parameter_id(pid) == index


def test_parameter_and_part_namespaces_are_separate():
    manager = CubismIdManager(["Shared"], ["Other", "Shared"])
    assert manager.get_parameter_id("Shared") == 0
    assert manager.get_part_id("Shared") == 1
    assert manager.get_parameter_id("Other") == INVALID_HANDLE