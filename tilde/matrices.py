# pylint: disable=relative-beyond-top-level
import logging
import textwrap

from functools import reduce

import numpy as np
import pandas as pd

from pandas.api.types import is_object_dtype, is_string_dtype

from .binder import bind
from .categorical import OneHot, get_encoding
from .config import config
from .errors import SchemaMismatch
from .schema import BOOLEAN, Schema, infer_field
from .terms import Variable
from .utils import get_interaction_matrix, is_categorical_dtype

_log = logging.getLogger("tilde")


class DesignMatrices:
    """The values of a bound formula evaluated with a data frame.

    Instances are created by :func:`evaluate`. All the values are computed when the object is
    created and never modified afterwards.

    Parameters
    ----------
    bound: BoundFormula
        The formula, already bound to a schema compatible with ``data``.
    data: pandas.DataFrame
        The data frame where variables are taken from.

    Attributes
    ----------
    n_rows: int
        The number of rows in ``data``. Rows are never dropped.
    """

    def __init__(self, bound, data):
        self.bound = bound
        self.data = data
        self.n_rows = data.shape[0]
        self.index = data.index

        # Codes for categorical sources, float64 arrays for the rest
        self._sources = {
            field.name: read_column(field, data[field.name]) for field in bound.sources
        }
        evaluator = TermEvaluator(bound, self._sources, self.n_rows)

        self._response = None
        if bound.response_plan is not None:
            term = bound.response_plan.term
            if isinstance(term, Variable):
                self._response = self._sources[term.name]
            else:
                self._response = term.accept(evaluator)[:, 0]

        # Categorical main effects are kept as codes until an encoding is chosen
        self._blocks = []
        for plan in bound.predictor_plans:
            if is_categorical_main_effect(plan):
                self._blocks.append(self._sources[plan.term.name])
            else:
                self._blocks.append(plan.term.accept(evaluator))

        names = [field.name for field in bound.sources]
        incomplete_rows_n = data[names].isna().any(axis=1).sum() if names else 0
        if incomplete_rows_n > 0:
            _log.info(
                "Keeping %s/%s rows with at least one missing value in the dataset.",
                incomplete_rows_n,
                self.n_rows,
            )

    def y(self):
        """The response as a 1d numpy array.

        Numeric responses are ``float64``. Categorical responses are the position of each value
        in the declared levels, as ``int64``, or ``float64`` with NaN if there are missing
        values. String responses are an object array. It is ``None`` for one-sided formulas.
        """
        if self.bound.response_plan is None:
            return None
        field = self.bound.response_plan.fields[0]
        if field.is_categorical and isinstance(self.bound.response_plan.term, Variable):
            codes = self._response
            if (codes < 0).any():
                return np.where(codes < 0, np.nan, codes).astype(float)
            return codes.astype(np.int64)
        return self._response.copy()

    def x(self, encoding=None):
        """The predictors as a 2d ``float64`` numpy array of shape ``(n_rows, n_columns)``.

        Parameters
        ----------
        encoding: string or Encoding
            How categorical main effects are represented: ``"ordinal"``, ``"one_hot"`` or
            ``"dummy"``. Defaults to ``None`` which means ``config.CATEGORICAL_ENCODING``.
        """
        blocks = [block for block, _ in self._encoded_blocks(encoding)]
        if not blocks:
            return np.empty((self.n_rows, 0))
        return np.column_stack(blocks).astype(float)

    def x_labels(self, encoding=None):
        """Names of the columns returned by :meth:`x` with the same ``encoding``."""
        labels = []
        for _, block_labels in self._encoded_blocks(encoding):
            labels.extend(block_labels)
        return labels

    def term_columns(self, term, encoding=None):
        """Get the sub-matrix that corresponds to a given term.

        Parameters
        ----------
        term: string
            The name of the term, such as ``"x"``, ``"log(x)"`` or ``"a::b"``.

        Returns
        ----------
        matrix: np.array
            A 2-dimensional numpy array with the columns of ``x()`` for the term.
        """
        for plan, (block, _) in zip(self.bound.predictor_plans, self._encoded_blocks(encoding)):
            if plan.name == term:
                return block
        raise ValueError(f"'{term}' is not a valid term name")

    def __getitem__(self, term):
        return self.term_columns(term)

    def frame(self):
        """A new pandas.DataFrame with one column per field of the output schema.

        Numeric variables keep their type, or become ``float64`` when they have missing values.
        Categorical variables are pandas categoricals with the declared levels and the rest are
        ``float64``. The index of the data is kept.
        """
        columns = {}
        pairs = list(zip(self.bound.predictor_plans, self._blocks))
        if self.bound.response_plan is not None:
            response = self._response
            if not isinstance(self.bound.response_plan.term, Variable):
                response = response[:, np.newaxis]
            pairs.insert(0, (self.bound.response_plan, response))

        for plan, block in pairs:
            if isinstance(plan.term, Variable):
                field = plan.fields[0]
                if field.is_categorical:
                    columns[field.name] = pd.Categorical.from_codes(
                        block, categories=list(field.levels)
                    )
                elif field.is_string:
                    columns[field.name] = self._sources[field.name].copy()
                else:
                    columns[field.name] = restore_dtype(field, self._sources[field.name])
            else:
                for j, field in enumerate(plan.fields):
                    columns[field.name] = block[:, j]
        return pd.DataFrame(columns, index=self.index, columns=self.bound.output_schema.names)

    def _encoded_blocks(self, encoding):
        encoding = get_encoding(config.CATEGORICAL_ENCODING if encoding is None else encoding)
        for plan, block in zip(self.bound.predictor_plans, self._blocks):
            if is_categorical_main_effect(plan):
                field = plan.fields[0]
                contrast = encoding.code(field.levels)
                yield contrast.take(block), encoding.column_labels(field.name, contrast)
            else:
                yield block, [field.name for field in plan.fields]

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        entries = []
        if self.bound.response_plan is not None:
            entries += [glue_and_align("Response: ", (self.n_rows,), 30)]
        entries += [glue_and_align("Predictors: ", self.x().shape, 30)]
        msg = (
            "DesignMatrices\n\n"
            + glue_and_align("", "(rows, cols)", 30)
            + "\n"
            + "\n".join(entries)
            + "\n\n"
            + wrapify(f"Formula: {self.bound.formula.render()}")
            + "\n"
            + "Use .y(), .x() or .frame() to access the values."
        )
        return msg


class TermEvaluator:
    """Visitor that computes the values of a term as a 2d float64 array.

    Categorical variables inside interactions are represented with one indicator column per
    level, so the columns follow the order of ``itertools.product`` over the levels.
    """

    def __init__(self, bound, sources, n_rows):
        self.bound = bound
        self.sources = sources
        self.n_rows = n_rows

    def visitVariableTerm(self, term):
        field = self.bound.schema[term.name]
        values = self.sources[term.name]
        if field.is_categorical:
            return OneHot().code(field.levels).take(values)
        return values[:, np.newaxis]

    def visitFunctionTerm(self, term):
        function = self.bound.function(term.callee)
        x = term.inner.accept(self)[:, 0]
        with np.errstate(all="ignore"):
            result = np.asarray(function(x), dtype=float)
        if result.shape != x.shape:
            raise ValueError(
                f"Function '{term.callee}' returned shape {result.shape}, expected {x.shape}."
            )
        return result[:, np.newaxis]

    def visitInteractionTerm(self, term):
        matrices = [operand.accept(self) for operand in term.operands]
        if any(matrix.shape[1] == 0 for matrix in matrices):
            return np.empty((self.n_rows, 0))
        return reduce(get_interaction_matrix, matrices)

    def visitInterceptTerm(self, term):  # pylint: disable=unused-argument
        return np.ones((self.n_rows, 1))


def is_categorical_main_effect(plan):
    return isinstance(plan.term, Variable) and plan.fields[0].is_categorical


def read_column(field, x):
    """Converts a column to the array used for evaluation.

    Categorical columns become integer codes in the order of ``field.levels``, with ``-1`` for
    missing values. String columns become object arrays. The rest become float64 with NaN for
    missing values.
    """
    if field.is_categorical:
        if is_categorical_dtype(x):
            return x.cat.codes.to_numpy(dtype=np.int64)
        codes = pd.Categorical(x, categories=list(field.levels)).codes.astype(np.int64)
        unseen = x.notna().to_numpy() & (codes < 0)
        if unseen.any():
            handle_unseen_levels(field, x[unseen])
        return codes
    if field.is_string:
        return x.to_numpy(dtype=object)
    return x.to_numpy(dtype=float, na_value=np.nan)


def restore_dtype(field, values):
    """Casts the float64 values of a numeric column back to the type of ``field``.

    Columns with missing values stay float64, so missing values are always NaN.
    """
    if np.isnan(values).any():
        return values.copy()
    if field.dtype == BOOLEAN:
        return values.astype(bool)
    return values.astype(field.dtype)


def handle_unseen_levels(field, values):
    difference = sorted(str(value) for value in set(values))
    msg = (
        f"The levels {', '.join(difference)} in '{field.name}' are not present in the "
        "levels of the schema."
    )
    if config.EVAL_UNSEEN_CATEGORIES == "error":
        raise SchemaMismatch(msg)
    elif config.EVAL_UNSEEN_CATEGORIES == "warning":
        _log.warning("%s They are taken as missing values.", msg)


def check_compatible(field, x):
    """Raises SchemaMismatch if the column ``x`` can't be read as ``field``."""
    if field.is_categorical:
        if is_categorical_dtype(x):
            levels = tuple(x.cat.categories.tolist())
            if levels != field.levels:
                raise SchemaMismatch(
                    f"Column '{field.name}' has levels {list(levels)} "
                    f"but {list(field.levels)} were expected."
                )
            return
        if is_string_dtype(x.dtype) or is_object_dtype(x.dtype):
            return
    elif field.is_string:
        if not is_categorical_dtype(x) and (is_string_dtype(x.dtype) or is_object_dtype(x.dtype)):
            return
    else:
        try:
            if infer_field(field.name, x).dtype == field.dtype:
                return
        except ValueError:
            pass
    raise SchemaMismatch(f"Column '{field.name}' of type {x.dtype} is not of type {field.dtype}.")


def evaluate(bound, data):
    """Evaluate a bound formula with a data frame.

    Parameters
    ----------
    bound: BoundFormula
        The result of :func:`tilde.binder.bind`.
    data: pandas.DataFrame
        The data frame where variables are taken from. Every column read by the formula must be
        present with the type it had in the schema used to bind the formula.
        An integer column becomes float64 in pandas when it gets missing values, so it no longer
        matches an integer field. Use nullable types such as ``"Int64"`` for integer columns
        that can have missing values.

    Returns
    ----------
    design: DesignMatrices
    """
    if not isinstance(data, pd.DataFrame):
        raise ValueError("'data' must be a pandas.DataFrame.")

    for field in bound.sources:
        if field.name not in data.columns:
            raise SchemaMismatch(f"Column '{field.name}' is not present in 'data'.")
        check_compatible(field, data[field.name])

    return DesignMatrices(bound, data)


def design_matrices(formula, data, extra_functions=None):
    """Parse model formula, bind it to the schema of ``data`` and evaluate it.

    Parameters
    ----------
    formula : string or Formula
        A model formula.
    data: pandas.DataFrame
        The data frame where variables in the formula are taken from.
    extra_functions: dict
        Additional user supplied functions to make available in the formula. Defaults to
        ``None``.

    Returns
    ----------
    design: DesignMatrices
    """
    if isinstance(formula, str) and len(formula) == 0:
        raise ValueError("'formula' cannot be an empty string.")

    if not isinstance(data, pd.DataFrame):
        raise ValueError("'data' must be a pandas.DataFrame.")

    if data.shape[0] == 0:
        raise ValueError("'data' does not contain any observation.")

    bound = bind(formula, Schema.from_dataframe(data), extra_functions)
    return evaluate(bound, data)


# Utils
def wrapify(string, width=100):
    l = string.splitlines(True)
    wrapper = textwrap.TextWrapper(width=width)
    for idx, line in enumerate(l):
        if len(line) > width:
            leading_spaces = len(line) - len(line.lstrip(" "))
            wrapper.subsequent_indent = " " * (leading_spaces + 2)
            wrapped = wrapper.wrap(line)
            l[idx] = "\n".join(wrapped) + "\n"
    return "".join(l)


def glue_and_align(key, value, width):
    key = str(key)
    value = str(value)
    key_n = len(key)
    value_n = len(value)
    if width > (key_n + value_n):
        return key + value.rjust(width - key_n)
    else:
        return key + value
