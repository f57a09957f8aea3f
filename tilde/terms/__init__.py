from .call import Function
from .formula import Formula
from .terms import Crossing, Dot, Intercept, Interaction, interact
from .variable import Variable

__all__ = [
    "Variable",
    "Function",
    "Interaction",
    "Crossing",
    "Dot",
    "Intercept",
    "Formula",
    "interact",
]
