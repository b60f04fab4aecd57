from __future__ import annotations

import pytest

from settings import read_bool


def test_read_bool_accepts_json_booleans() -> None:
    assert read_bool({"generate_on_save": True}, "generate_on_save", False) is True
    assert read_bool({"generate_on_save": False}, "generate_on_save", True) is False


def test_read_bool_falls_back_to_default() -> None:
    assert read_bool({}, "generate_on_save", False) is False


@pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
def test_read_bool_rejects_non_booleans(value) -> None:
    with pytest.raises(RuntimeError, match="generate_on_save"):
        read_bool({"generate_on_save": value}, "generate_on_save", False)
