import pytest

from tilde.errors import ParseError
from tilde.expr import Binary, Call, Chain, Literal, Period, QuotedName, Variable
from tilde.parser import Parser
from tilde.scanner import Scanner
from tilde.token import Token


def parse(x):
    return Parser(Scanner(x).scan()).parse()


def var(name):
    return Variable(Token("IDENTIFIER", name))


TILDE = Token("TILDE", "~")
PLUS = Token("PLUS", "+")
MINUS = Token("MINUS", "-")


def test_parse_variable():
    assert parse("y ~ x") == Binary(var("y"), TILDE, var("x"))


def test_parse_one_sided():
    assert parse("~ x") == Binary(None, TILDE, var("x"))


def test_parse_quoted_name():
    p = parse("`my y` ~ x")
    assert p == Binary(QuotedName(Token("BQNAME", "`my y`")), TILDE, var("x"))


def test_parse_addition_is_left_associative():
    p = parse("y ~ a + b - c")
    assert p == Binary(var("y"), TILDE, Binary(Binary(var("a"), PLUS, var("b")), MINUS, var("c")))


def test_parse_interaction():
    p = parse("y ~ a::b::c")
    chain = Chain(Token("COLON_COLON", "::"), [var("a"), var("b"), var("c")])
    assert p == Binary(var("y"), TILDE, chain)


def test_parse_crossing():
    p = parse("y ~ a && b")
    chain = Chain(Token("AMP_AMP", "&&"), [var("a"), var("b")])
    assert p == Binary(var("y"), TILDE, chain)


def test_parse_call():
    assert parse("y ~ log(x)") == Binary(var("y"), TILDE, Call(var("log"), var("x")))
    assert parse("log(y) ~ x") == Binary(Call(var("log"), var("y")), TILDE, var("x"))

    p = parse("y ~ exp(a::b)")
    chain = Chain(Token("COLON_COLON", "::"), [var("a"), var("b")])
    assert p == Binary(var("y"), TILDE, Call(var("exp"), chain))

    p = parse("y ~ sqrt(abs(x))")
    assert p == Binary(var("y"), TILDE, Call(var("sqrt"), Call(var("abs"), var("x"))))


def test_parse_period_and_literals():
    assert parse("y ~ .") == Binary(var("y"), TILDE, Period())
    p = parse("y ~ 1 + x - 0")
    assert p == Binary(var("y"), TILDE, Binary(Binary(Literal(1), PLUS, var("x")), MINUS, Literal(0)))


@pytest.mark.parametrize(
    "code, message",
    [
        ("y ~ a::b && c", "can't be mixed"),
        ("y ~ a && b::c", "can't be mixed"),
        ("y ~ 2", "only 0 or 1"),
        ("y ~ 1.0", "only 0 or 1"),
        ("y ~ log()", "Expect an argument"),
        ("y ~ log(a && b)", "not allowed within a function call"),
        ("y ~ log(.)", "'.' can only be used"),
        ("y ~ log(a", "Expect '\\)'"),
        ("y ~", "Expect a variable name"),
        ("y ~ a +", "Expect a variable name"),
        ("y ~ a b", "Unexpected 'b' at position 6"),
        ("y ~ (a)", "Expect a variable name or a function call at position 4"),
        (". ~ a", "'.' can only be used"),
        ("y ~ a::.", "'.' can only be used"),
    ],
)
def test_parse_errors(code, message):
    with pytest.raises(ParseError, match=message):
        parse(code)
