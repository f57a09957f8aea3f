import itertools
import logging

from .description import parse
from .errors import (
    BindError,
    DuplicateResponseInPredictors,
    TermTypeError,
    UnknownFunction,
    UnresolvedColumn,
)
from .schema import CATEGORICAL, FLOAT64, Field, Schema
from .terms import Dot, Formula, Function, Interaction, Variable
from .transforms import lookup_transforms

_log = logging.getLogger("tilde")


class TermPlan:
    """How one term of a bound formula is evaluated.

    Parameters
    ----------
    term: :class:`.Variable`, :class:`.Function`, :class:`.Interaction` or :class:`.Intercept`
        The term.
    fields: tuple
        The output fields the term produces, in order.
    sources: tuple
        The fields of the bind-time schema the term reads, in schema order.
    """

    def __init__(self, term, fields, sources):
        self._term = term
        self._fields = tuple(fields)
        self._sources = tuple(sources)

    @property
    def term(self):
        return self._term

    @property
    def fields(self):
        return self._fields

    @property
    def sources(self):
        return self._sources

    @property
    def name(self):
        return self._term.name

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return (self.term, self.fields, self.sources) == (other.term, other.fields, other.sources)

    def __hash__(self):
        return hash((self.term, self.fields, self.sources))

    def __repr__(self):  # pragma: no cover
        return self.__str__()

    def __str__(self):  # pragma: no cover
        fields = ", ".join(field.name for field in self.fields)
        return f"{self.__class__.__name__}({self.name} -> [{fields}])"


class BoundFormula:
    """A formula resolved against a schema.

    It holds the output schema and one :class:`.TermPlan` per term. It is immutable and can be
    evaluated against any number of data frames compatible with the schema it was bound to.

    Attributes
    ----------
    output_schema: Schema
        The response field, if any, followed by the fields of each predictor term.
    response_plan: TermPlan
        The plan for the response. ``None`` for one-sided formulas.
    predictor_plans: tuple
        The plans for the predictors, in term order.
    """

    def __init__(self, formula, schema, response_plan, predictor_plans, functions):
        self._formula = formula
        self._schema = schema
        self._response_plan = response_plan
        self._predictor_plans = tuple(predictor_plans)
        self._functions = dict(functions)

        fields = []
        for plan in self.plans:
            fields.extend(plan.fields)
        try:
            self._output_schema = Schema(fields)
        except ValueError as error:
            raise BindError(str(error)) from error

    @property
    def formula(self):
        return self._formula

    @property
    def schema(self):
        """The schema the formula was bound to."""
        return self._schema

    @property
    def output_schema(self):
        return self._output_schema

    @property
    def response_plan(self):
        return self._response_plan

    @property
    def predictor_plans(self):
        return self._predictor_plans

    @property
    def plans(self):
        if self._response_plan is None:
            return self._predictor_plans
        return (self._response_plan,) + self._predictor_plans

    @property
    def terms(self):
        """The predictor terms, with the wildcard already expanded."""
        return [plan.term for plan in self._predictor_plans]

    @property
    def sources(self):
        """Fields of the bind-time schema read by any of the terms, in schema order."""
        names = set()
        for plan in self.plans:
            names.update(field.name for field in plan.sources)
        return [field for field in self._schema if field.name in names]

    def function(self, name):
        return self._functions[name]

    def evaluate(self, data):
        """Evaluate the formula with ``data``. See :func:`tilde.matrices.evaluate`."""
        from .matrices import evaluate  # pylint: disable=import-outside-toplevel

        return evaluate(self, data)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return (
            self.formula == other.formula
            and self.schema == other.schema
            and self.plans == other.plans
            and self._functions == other._functions
        )

    def __hash__(self):
        return hash((self.formula, self.schema, self.plans))

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        entries = [f"formula: {self.formula.render()}"]
        entries += [f"{field.name}: {describe(field)}" for field in self.output_schema]
        return f"{self.__class__.__name__}(\n  " + "\n  ".join(entries) + "\n)"


class Binder:
    """Visitor that resolves the terms of a formula against a schema.

    Visiting a term returns the list of output fields it produces.

    Parameters
    ----------
    formula: Formula
        The formula to bind.
    schema: Schema
        The schema where the variables are looked up.
    extra_functions: dict
        Additional functions, by name, available in the formula. Defaults to ``None``.
    """

    def __init__(self, formula, schema, extra_functions=None):
        self.formula = formula
        self.schema = schema
        self.functions = lookup_transforms(extra_functions)
        self.used_functions = {}

    def bind(self):
        terms = self.resolve_dot()
        self.validate(terms)

        response_plan = None
        if self.formula.response is not None:
            response_plan = TermPlan(
                self.formula.response,
                self.response_fields(self.formula.response),
                self.sources(self.formula.response),
            )
        predictor_plans = [
            TermPlan(term, term.accept(self), self.sources(term)) for term in terms
        ]
        return BoundFormula(
            self.formula, self.schema, response_plan, predictor_plans, self.used_functions
        )

    def resolve_dot(self):
        """Returns the predictor terms with the wildcard replaced by the unused columns.

        The columns keep the schema order and take the place of the wildcard. Columns used in
        the response, used anywhere in the predictors or excluded with ``-`` are skipped, as
        well as columns of type string. Excluded terms are dropped afterwards.
        """
        terms = list(self.formula.predictors)
        excluded = self.formula.excluded

        if Dot() in terms:
            used = set()
            for term in terms:
                used.update(term.var_names)
            if self.formula.response is not None:
                used.update(self.formula.response.var_names)
            used.update(term.name for term in excluded if isinstance(term, Variable))

            strings = [f.name for f in self.schema if f.is_string and f.name not in used]
            if strings:
                _log.debug("Columns of type string are not included by '.': %s", strings)

            expansion = [
                Variable(f.name) for f in self.schema if f.name not in used and not f.is_string
            ]
            index = terms.index(Dot())
            terms[index : index + 1] = expansion
            _log.debug("Expanded '.' into %s", [term.name for term in expansion])

        return [term for term in terms if term not in excluded]

    def validate(self, terms):
        """Checks every variable is in the schema and the response is not a predictor."""
        response = self.formula.response
        checked = terms if response is None else [response] + terms
        for term in checked:
            for name in walk_variables(term):
                if name not in self.schema:
                    raise UnresolvedColumn(name)

        if response is not None and response in terms:
            raise DuplicateResponseInPredictors(response)

    def sources(self, term):
        names = term.var_names
        return [field for field in self.schema if field.name in names]

    def response_fields(self, term):
        # Any type is accepted for a plain response variable
        if isinstance(term, Variable):
            return [self.schema[term.name]]
        return term.accept(self)

    def lookup_function(self, name):
        if name not in self.functions:
            raise UnknownFunction(name)
        self.used_functions[name] = self.functions[name]

    def visitVariableTerm(self, term):
        field = self.schema[term.name]
        if field.is_string:
            raise TermTypeError(
                f"Column '{term.name}' is of type string and can only be used as a plain "
                "response. Declare it as categorical instead."
            )
        return [field]

    def visitFunctionTerm(self, term):
        self.lookup_function(term.callee)
        fields = term.inner.accept(self)
        if len(fields) != 1 or fields[0].is_categorical:
            raise TermTypeError(
                f"The argument of '{term.callee}' must be numeric, "
                f"but '{term.inner.name}' is categorical."
            )
        return [Field(term.name, FLOAT64)]

    def visitInteractionTerm(self, term):
        labels = []
        has_categorical = False
        for operand in term.operands:
            (field,) = operand.accept(self)
            if field.dtype == CATEGORICAL:
                has_categorical = True
                labels.append([f"{operand.name}[{level}]" for level in field.levels])
            else:
                labels.append([operand.name])
        if not has_categorical:
            return [Field(term.name, FLOAT64)]
        return [Field("::".join(names), FLOAT64) for names in itertools.product(*labels)]

    def visitInterceptTerm(self, term):
        return [Field(term.name, FLOAT64)]

    def visitDotTerm(self, term):  # pragma: no cover
        raise BindError("The wildcard must be expanded before planning.")

    def visitCrossingTerm(self, term):  # pragma: no cover
        raise BindError("Crossings must be expanded before planning.")


def bind(formula, schema, extra_functions=None):
    """Bind a formula to a schema.

    Binding is pure: the same formula and schema always give equal bound formulas.

    Parameters
    ----------
    formula: Formula or string
        The formula. Strings are parsed first.
    schema: Schema or pandas.DataFrame
        The schema of the data. The schema of a data frame is inferred with
        :meth:`Schema.from_dataframe`.
    extra_functions: dict
        Additional functions, by name, available in the formula. Defaults to ``None``.

    Returns
    ----------
    bound: BoundFormula
    """
    if isinstance(formula, str):
        formula = parse(formula)
    if not isinstance(formula, Formula):
        raise ValueError("'formula' must be a Formula or a string.")
    if not isinstance(schema, Schema):
        schema = Schema.from_dataframe(schema)
    return Binder(formula, schema, extra_functions).bind()


def walk_variables(term):
    """Yields the names of the variables in ``term``, in order of appearance."""
    if isinstance(term, Variable):
        yield term.name
    elif isinstance(term, Function):
        yield from walk_variables(term.inner)
    elif isinstance(term, Interaction):
        for operand in term.operands:
            yield from walk_variables(operand)


def describe(field):
    if field.is_categorical:
        return f"{field.dtype} {list(field.levels)}"
    return field.dtype
