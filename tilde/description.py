from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner


def parse(formula):
    """Interpret a model formula.

    Parameters
    ----------
    formula: string
        A string with a model description in formula language, such as ``"y ~ a + log(b)"``.

    Returns
    ----------
    formula: Formula
        The formula, with crossings already expanded.
    """
    return Resolver(Parser(Scanner(formula).scan()).parse()).resolve()


def render(formula):
    """Canonical text of ``formula``. ``parse(render(f)) == f`` holds for every formula."""
    return formula.render()
