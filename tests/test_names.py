import pytest

from shaderrefl.errors import MalformedNameError
from shaderrefl.names import PathStep, parse_variable_path, strip_array_zero


def test_indexed_structure_path() -> None:
    path = parse_variable_path("lights[2].colour")

    assert path.steps == (PathStep("lights", 2),)
    assert path.steps[0].is_array
    assert path.leaf == "colour"


def test_nested_structure_path() -> None:
    path = parse_variable_path("material.layers[0].scale")

    assert path.steps == (PathStep("material"), PathStep("layers", 0))
    assert not path.steps[0].is_array
    assert path.leaf == "scale"


def test_plain_name_has_no_steps() -> None:
    path = parse_variable_path("exposure")

    assert path.steps == ()
    assert path.leaf == "exposure"


def test_strip_array_zero() -> None:
    assert strip_array_zero("weights[0]") == ("weights", True)
    assert strip_array_zero("weights[1]") == ("weights[1]", False)
    assert strip_array_zero("weights") == ("weights", False)
    assert strip_array_zero("[0]") == ("[0]", False)


@pytest.mark.parametrize(
    "name, message",
    [
        ("bones[3]", "naked array"),
        ("a[1]b", "naked array"),
        ("a..b", "empty name segment"),
        ("a[x].b", "decimal number"),
        ("a[1.b", "expected ']'"),
        ("a]b", "unbalanced"),
        (".a", "empty name segment"),
    ],
)
def test_malformed_names(name: str, message: str) -> None:
    with pytest.raises(MalformedNameError, match=message) as excinfo:
        parse_variable_path(name)

    assert excinfo.value.name == name
    assert isinstance(excinfo.value, ValueError)
