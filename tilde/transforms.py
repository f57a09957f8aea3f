import numpy as np

from scipy import special

# Elementwise functions available in formulas.
# They receive a 1d float64 array and must return an array of the same length.
# Missing values arrive as NaN and are expected to come back as NaN.


def I(x):
    """Identity function. Returns its argument as it is."""
    return x


def square(x):
    return x**2


TRANSFORMS = {
    "I": I,
    "abs": np.abs,
    "ceil": np.ceil,
    "floor": np.floor,
    "round": np.round,
    "rint": np.rint,
    "sign": np.sign,
    "exp": np.exp,
    "expm1": np.expm1,
    "log": np.log,
    "log1p": np.log1p,
    "log2": np.log2,
    "log10": np.log10,
    "sqrt": np.sqrt,
    "cbrt": np.cbrt,
    "square": square,
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    "logit": special.logit,
    "expit": special.expit,
    "ulp": np.spacing,
}


def lookup_transforms(extra_functions=None):
    """Returns the functions available to a formula.

    User supplied functions in ``extra_functions`` take precedence over the built-in ones.
    """
    extra_functions = extra_functions or {}
    for name, function in extra_functions.items():
        if not callable(function):
            raise ValueError(f"The function '{name}' is not callable.")
    return {**TRANSFORMS, **extra_functions}
