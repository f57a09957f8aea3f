import logging

from .binder import BoundFormula, TermPlan, bind
from .config import config
from .description import parse, render
from .errors import (
    BindError,
    DuplicateResponseInPredictors,
    FormulaError,
    ParseError,
    SchemaMismatch,
    TermTypeError,
    UnknownFunction,
    UnresolvedColumn,
)
from .matrices import DesignMatrices, design_matrices, evaluate
from .schema import Field, Schema
from .terms import Formula
from .version import __version__

__all__ = [
    "bind",
    "config",
    "design_matrices",
    "evaluate",
    "parse",
    "render",
    "BoundFormula",
    "DesignMatrices",
    "Field",
    "Formula",
    "Schema",
    "TermPlan",
    "BindError",
    "DuplicateResponseInPredictors",
    "FormulaError",
    "ParseError",
    "SchemaMismatch",
    "TermTypeError",
    "UnknownFunction",
    "UnresolvedColumn",
    "__version__",
]

_log = logging.getLogger("tilde")

if not logging.root.handlers:
    _log.setLevel(logging.INFO)
    if len(_log.handlers) == 0:
        handler = logging.StreamHandler()
        _log.addHandler(handler)
