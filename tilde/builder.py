"""Programmatic construction of formulas.

Everything that can be written in the formula language can be built with these functions and
both ways give equal formulas::

    >>> from tilde import builder as b, parse
    >>> f = b.formula(b.crossing(b.variable("a"), b.variable("b")), response=b.variable("y"))
    >>> f == parse("y ~ a && b")
    True
"""
from tilde.terms import Crossing, Dot, Formula, Function, Intercept, Variable, interact


def variable(name):
    return Variable(name)


def function(name, inner):
    """Apply the elementwise function called ``name`` to ``inner``.

    ``inner`` can be a column name, which is wrapped in a :class:`.Variable`.
    """
    if isinstance(inner, str):
        inner = Variable(inner)
    return Function(name, inner)


def interaction(*operands):
    """Interaction among ``operands``. Repeated operands are dropped and ``a::a`` is ``a``."""
    return interact(*[_as_term(operand) for operand in operands])


def crossing(*operands, order=None):
    """Crossing of ``operands``, optionally limited to interactions of up to ``order`` terms.

    Repeated operands are dropped and ``a && a`` is ``a``.
    """
    operands = list(dict.fromkeys(_as_term(operand) for operand in operands))
    if len(operands) == 1:
        return operands[0]
    return Crossing(*operands, order=order)


def dot():
    return Dot()


def intercept():
    return Intercept()


def formula(*predictors, response=None):
    """Build a formula. Strings are taken as column names."""
    if isinstance(response, str):
        response = Variable(response)
    return Formula(*[_as_term(term) for term in predictors], response=response)


def add(formula_, *terms):
    return formula_.add(*[_as_term(term) for term in terms])


def remove(formula_, *terms):
    return formula_.remove(*[_as_term(term) for term in terms])


def _as_term(obj):
    if isinstance(obj, str):
        return Variable(obj)
    return obj
