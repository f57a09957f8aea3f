import numpy as np
import pandas as pd
import pytest

from tilde.schema import Field, Schema, infer_field


def test_field():
    field = Field("x", "float64")
    assert field.name == "x"
    assert field.dtype == "float64"
    assert field.levels is None
    assert field.is_numeric
    assert not field.is_categorical

    field = Field("g", "categorical", ["b", "a"])
    assert field.levels == ("b", "a")
    assert field.is_categorical
    assert not field.is_numeric
    assert field == Field("g", "categorical", ("b", "a"))
    assert field != Field("g", "categorical", ("a", "b"))

    assert Field("b", "boolean").is_numeric
    assert Field("s", "string").is_string


def test_field_errors():
    with pytest.raises(ValueError, match="non-empty string"):
        Field("", "float64")

    with pytest.raises(ValueError, match="'complex128' is not a valid type"):
        Field("x", "complex128")

    with pytest.raises(ValueError, match="requires levels"):
        Field("g", "categorical")

    with pytest.raises(ValueError, match="not distinct"):
        Field("g", "categorical", ["a", "a"])

    with pytest.raises(ValueError, match="Only categorical fields have levels"):
        Field("x", "float64", levels=["a"])


def test_schema():
    schema = Schema([Field("y", "float64"), Field("x", "int32"), Field("g", "categorical", [])])
    assert len(schema) == 3
    assert schema.names == ["y", "x", "g"]
    assert schema["x"] == Field("x", "int32")
    assert schema[0] == Field("y", "float64")
    assert schema.index_of("g") == 2
    assert "x" in schema
    assert "z" not in schema
    assert [field.name for field in schema] == ["y", "x", "g"]
    assert schema == Schema(list(schema))
    assert schema != Schema(list(schema)[::-1])

    with pytest.raises(KeyError, match="'z' is not a field"):
        schema["z"]


def test_schema_errors():
    with pytest.raises(ValueError, match="'x' is duplicated"):
        Schema([Field("x", "float64"), Field("x", "int64")])

    with pytest.raises(ValueError, match="must be of class Field"):
        Schema(["x"])


def test_schema_from_dataframe():
    data = pd.DataFrame(
        {
            "a": np.array([1, 2, 3], dtype="int8"),
            "b": np.array([1, 2, 3], dtype="int64"),
            "c": np.array([1, 2, 3], dtype="float32"),
            "d": [1.0, np.nan, 3.0],
            "e": [True, False, True],
            "f": pd.Categorical(["lo", "hi", "lo"], categories=["lo", "hi"]),
            "g": ["b", "a", None],
            "h": pd.array([1, None, 3], dtype="Int64"),
            "i": np.array([1, 2, 3], dtype="uint8"),
        }
    )
    schema = Schema.from_dataframe(data)
    assert schema.names == list("abcdefghi")
    assert [field.dtype for field in schema] == [
        "int8",
        "int64",
        "float32",
        "float64",
        "boolean",
        "categorical",
        "categorical",
        "int64",
        "int16",
    ]
    assert schema["f"].levels == ("lo", "hi")
    assert schema["g"].levels == ("a", "b")


def test_schema_from_dataframe_errors():
    with pytest.raises(ValueError, match="must be a pandas.DataFrame"):
        Schema.from_dataframe({"x": [1, 2]})

    with pytest.raises(ValueError, match="unrecognized type"):
        infer_field("t", pd.Series(pd.date_range("2020-01-01", periods=3)))


def test_schema_from_dataframe_mixed_levels():
    schema = Schema.from_dataframe(pd.DataFrame({"g": ["a", 1, "b", None]}))
    assert schema["g"].levels == (1, "a", "b")

    schema = Schema.from_dataframe(pd.DataFrame({"g": [10, 2, "2"]}, dtype=object))
    assert schema["g"].levels == (10, 2, "2")


def test_schema_from_dataframe_column_labels():
    with pytest.raises(ValueError, match="Column labels must be strings, got \\[0, 1\\]"):
        Schema.from_dataframe(pd.DataFrame({0: [1.0, 2.0], 1: [3.0, 4.0]}))
