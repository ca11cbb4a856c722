"""Tests for JSON output."""

import json

import orjson
import pytest

from shon.render import to_json
from shon.values import Number


def test_to_json_indents():
    assert to_json({"a": [1, True, None]}) == '{\n  "a": [\n    1,\n    true,\n    null\n  ]\n}'

def test_to_json_writes_numbers_verbatim():
    assert to_json([Number("42"), Number("1.50"), Number("-1e3")]) == "[\n  42,\n  1.50,\n  -1e3\n]"
    assert json.loads(to_json({"n": Number("7")})) == {"n": 7}

def test_to_json_plain_strings_stay_strings():
    assert to_json("42") == '"42"'

@pytest.mark.parametrize("text", ["+5", "1.", "01", "1-2", ".5"])
def test_to_json_rejects_invalid_number_literals(text):
    with pytest.raises(orjson.JSONEncodeError):
        to_json([Number(text)])

def test_to_json_rejects_unknown_types():
    with pytest.raises(orjson.JSONEncodeError):
        to_json(object())
