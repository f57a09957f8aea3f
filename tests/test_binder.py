import numpy as np
import pandas as pd
import pytest

from tilde import bind, parse
from tilde.binder import BoundFormula, TermPlan
from tilde.errors import (
    BindError,
    DuplicateResponseInPredictors,
    ParseError,
    TermTypeError,
    UnknownFunction,
    UnresolvedColumn,
)
from tilde.schema import Field, Schema
from tilde.terms import Function, Interaction, Variable


@pytest.fixture(scope="module")
def schema():
    return Schema(
        [
            Field("y", "float64"),
            Field("a", "float64"),
            Field("b", "int32"),
            Field("c", "boolean"),
            Field("g", "categorical", ["A", "B", "C"]),
            Field("h", "categorical", ["u", "v"]),
            Field("s", "string"),
        ]
    )


def names(bound):
    return bound.output_schema.names


def test_bind_dot():
    schema = Schema([Field(name, "float64") for name in ["y", "a", "b", "c"]])
    bound = bind("y ~ .", schema)
    assert bound.terms == [Variable("a"), Variable("b"), Variable("c")]
    assert names(bound) == ["y", "a", "b", "c"]


def test_bind_dot_skips_strings(schema):
    bound = bind("y ~ .", schema)
    assert [term.name for term in bound.terms] == ["a", "b", "c", "g", "h"]


def test_bind_dot_skips_used_columns(schema):
    bound = bind("y ~ log(a) + .", schema)
    assert bound.terms == [
        Function("log", Variable("a")),
        Variable("b"),
        Variable("c"),
        Variable("g"),
        Variable("h"),
    ]
    assert names(bound) == ["y", "log(a)", "b", "c", "g", "h"]

    # The expansion takes the place of the wildcard
    bound = bind("y ~ b + . + log(a)", schema)
    assert [term.name for term in bound.terms] == ["b", "c", "g", "h", "log(a)"]


def test_bind_dot_exclusions(schema):
    bound = bind("y ~ . - a - g", schema)
    assert [term.name for term in bound.terms] == ["b", "c", "h"]

    bound = bind("y ~ . - a + a", schema)
    assert [term.name for term in bound.terms] == ["b", "c", "g", "h", "a"]


def test_bind_dot_one_sided():
    schema = Schema([Field("y", "float64"), Field("a", "float64")])
    bound = bind("~ .", schema)
    assert bound.response_plan is None
    assert names(bound) == ["y", "a"]


def test_bind_is_pure(schema):
    formula = parse("y ~ . + log(a)")
    assert bind(formula, schema) == bind(formula, schema)
    assert formula.has_dot
    assert formula == parse("y ~ . + log(a)")


def test_bind_unresolved_column(schema):
    with pytest.raises(UnresolvedColumn, match="'zz' is not present") as error:
        bind("y ~ a + zz", schema)
    assert error.value.name == "zz"

    with pytest.raises(UnresolvedColumn) as error:
        bind("y ~ exp(a::q)", schema)
    assert error.value.name == "q"

    # The response is checked first
    with pytest.raises(UnresolvedColumn) as error:
        bind("r ~ zz", schema)
    assert error.value.name == "r"


def test_bind_duplicate_response(schema):
    with pytest.raises(DuplicateResponseInPredictors, match="'y' is also used as a predictor"):
        bind("y ~ a + y", schema)

    bound = bind("y ~ a + y - y", schema)
    assert names(bound) == ["y", "a"]


def test_bind_numeric_types(schema):
    bound = bind("y ~ a + b + c", schema)
    assert bound.output_schema == Schema(
        [
            Field("y", "float64"),
            Field("a", "float64"),
            Field("b", "int32"),
            Field("c", "boolean"),
        ]
    )


def test_bind_categorical(schema):
    bound = bind("y ~ g", schema)
    assert bound.output_schema["g"] == Field("g", "categorical", ["A", "B", "C"])


def test_bind_functions(schema):
    bound = bind("y ~ log(b) + exp(a::b)", schema)
    assert bound.output_schema["log(b)"] == Field("log(b)", "float64")
    assert bound.output_schema["exp(a::b)"] == Field("exp(a::b)", "float64")
    assert bound.function("log") is np.log


def test_bind_extra_functions(schema):
    with pytest.raises(UnknownFunction, match="'foo' is not available"):
        bind("y ~ foo(a)", schema)

    bound = bind("y ~ foo(a)", schema, extra_functions={"foo": np.negative})
    assert bound.function("foo") is np.negative
    assert names(bound) == ["y", "foo(a)"]

    with pytest.raises(ValueError, match="'foo' is not callable"):
        bind("y ~ foo(a)", schema, extra_functions={"foo": 1})


def test_bind_interactions(schema):
    assert names(bind("y ~ a::b", schema)) == ["y", "a::b"]
    assert names(bind("y ~ g::a", schema)) == ["y", "g[A]::a", "g[B]::a", "g[C]::a"]
    assert names(bind("y ~ a::g", schema)) == ["y", "a::g[A]", "a::g[B]", "a::g[C]"]
    assert names(bind("y ~ g::h", schema)) == [
        "y",
        "g[A]::h[u]",
        "g[A]::h[v]",
        "g[B]::h[u]",
        "g[B]::h[v]",
        "g[C]::h[u]",
        "g[C]::h[v]",
    ]
    assert all(field.dtype == "float64" for field in bind("y ~ g::h", schema).output_schema)


def test_bind_intercept(schema):
    bound = bind("y ~ 1 + a", schema)
    assert names(bound) == ["y", "Intercept", "a"]
    assert bound.output_schema["Intercept"] == Field("Intercept", "float64")


def test_bind_term_types(schema):
    with pytest.raises(TermTypeError, match="must be numeric"):
        bind("y ~ log(g)", schema)

    with pytest.raises(TermTypeError, match="of type string"):
        bind("y ~ s", schema)

    with pytest.raises(TermTypeError, match="of type string"):
        bind("y ~ s::a", schema)

    # A string column can be a plain response
    bound = bind("s ~ a", schema)
    assert bound.output_schema["s"] == Field("s", "string")


def test_bind_plans(schema):
    bound = bind("g ~ log(a) + h::a + 1", schema)
    assert isinstance(bound, BoundFormula)
    assert bound.response_plan == TermPlan(Variable("g"), [schema["g"]], [schema["g"]])

    plan = bound.predictor_plans[1]
    assert plan.term == Interaction(Variable("h"), Variable("a"))
    assert plan.sources == (schema["a"], schema["h"])
    assert plan.name == "h::a"

    assert [field.name for field in bound.sources] == ["a", "g", "h"]
    assert all(plan.term.kind not in ("dot", "crossing") for plan in bound.plans)


def test_bind_output_name_collision():
    schema = Schema([Field("y", "float64"), Field("Intercept", "float64")])
    with pytest.raises(BindError, match="'Intercept' is duplicated"):
        bind("y ~ 1 + Intercept", schema)


def test_bind_dataframe():
    data = pd.DataFrame({"y": [1.0, 2.0], "x": [1, 2], "g": ["a", "b"]})
    bound = bind("y ~ x + g", data)
    assert bound.output_schema == Schema(
        [Field("y", "float64"), Field("x", "int64"), Field("g", "categorical", ["a", "b"])]
    )


def test_bind_method(schema):
    assert parse("y ~ a").bind(schema) == bind("y ~ a", schema)


def test_bind_errors(schema):
    with pytest.raises(ParseError):
        bind("y ~ a +", schema)

    with pytest.raises(ValueError, match="must be a Formula or a string"):
        bind(Variable("a"), schema)
