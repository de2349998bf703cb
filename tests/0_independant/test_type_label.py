# tests/0_independant/test_type_label.py

from typing import Any

import pytest
from typing_extensions import NotRequired, TypedDict

import srdn.utils as mod_utils


class Inner(TypedDict, total=False):
    flag: bool


@pytest.mark.parametrize(
    ("expected_type", "label"),
    [
        (str, "str"),
        (list[str], "list[str]"),
        (NotRequired[bool], "bool"),
        (bool | Inner, "bool | object"),
        (Inner, "object"),
        (dict[str, Any], "dict"),
    ],
)
def test_type_label(expected_type: Any, label: str) -> None:
    # --- execute and verify ---
    assert mod_utils.type_label(expected_type) == label
