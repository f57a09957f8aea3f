from tilde.terms.call import Function
from tilde.terms.terms import Crossing, Dot, Intercept, Interaction
from tilde.terms.variable import Variable

ACCEPTED_TERMS = (Variable, Function, Interaction, Dot, Intercept)


class Formula:
    """Representation of a model formula.

    A formula is an optional response and an ordered set of predictor terms. It is immutable:
    :meth:`add`, :meth:`remove` and :meth:`with_response` return new formulas.

    Removing a term from a formula that contains the ``.`` wildcard also records the term as
    excluded, so it is left out when the wildcard is expanded at bind time. Re-adding the term
    drops the exclusion and removing the wildcard drops all of them.

    Parameters
    ----------
    terms: :class:`.Variable`, :class:`.Function`, :class:`.Interaction`, :class:`.Crossing`,
        :class:`.Dot` or :class:`.Intercept`
        The predictor terms, added one at a time. Crossings are expanded.
    response: :class:`.Variable` or :class:`.Function`
        The response term. Defaults to ``None`` which means there is no response.
    """

    def __init__(self, *terms, response=None):
        if response is not None and not isinstance(response, (Variable, Function)):
            raise ValueError(
                f"The response must be a Variable or a Function, not {type(response)}."
            )
        self._response = response
        self._predictors = []
        self._excluded = []
        for term in terms:
            self._add(term)

    @property
    def response(self):
        return self._response

    @property
    def predictors(self):
        return tuple(self._predictors)

    @property
    def excluded(self):
        """Terms removed while the formula contains the wildcard."""
        return tuple(self._excluded)

    @property
    def has_dot(self):
        return Dot() in self._predictors

    @property
    def var_names(self):
        """Get the name of the variables in the formula, response included."""
        var_names = set()
        for term in self._predictors:
            var_names.update(term.var_names)
        if self.response is not None:
            var_names.update(self.response.var_names)
        return var_names

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return (
            self.response == other.response
            and self.predictors == other.predictors
            and self.excluded == other.excluded
        )

    def __hash__(self):
        return hash((self.response, self.predictors, self.excluded))

    def __add__(self, other):
        """Addition operator. Analogous to set union.

        * ``x + x`` is equal to just ``x``
        * ``(x + y) + (y + z)`` is equal to ``x + y + z``
        """
        if isinstance(other, ACCEPTED_TERMS + (Crossing, type(self))):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        """Subtraction operator. Analogous to set difference."""
        if isinstance(other, ACCEPTED_TERMS + (Crossing, type(self))):
            return self.remove(other)
        return NotImplemented

    def __repr__(self):  # pragma: no cover
        return self.__str__()

    def __str__(self):  # pragma: no cover
        terms = [str(term) for term in self._predictors]
        if self.response is not None:
            terms.insert(0, f"Response({self.response})")
        terms += [f"Excluded({term})" for term in self._excluded]
        string = ",\n  ".join(terms)
        return f"{self.__class__.__name__}(\n  {string}\n)"

    def add(self, *terms):
        """Returns a new formula with ``terms`` added to the predictors.

        Adding a term that is already present does nothing. A :class:`.Crossing` adds all the
        terms in its expansion and a :class:`.Formula` adds all of its predictors.
        """
        formula = self._copy()
        for term in terms:
            formula._add(term)
        return formula

    def remove(self, *terms):
        """Returns a new formula with ``terms`` removed from the predictors.

        Terms are matched by structural equality. Removing an absent term does nothing, unless
        the formula contains the wildcard, where the term is recorded as excluded.
        """
        formula = self._copy()
        for term in terms:
            formula._remove(term)
        return formula

    def with_response(self, response):
        """Returns a new formula with the same predictors and a new response."""
        formula = self.__class__(response=response)
        formula._predictors = list(self._predictors)
        formula._excluded = list(self._excluded)
        return formula

    def render(self):
        """Canonical text of the formula.

        Parsing the returned string gives back an equal formula.
        """
        rhs = " + ".join(term.render() for term in self._predictors) or "0"
        for term in self._excluded:
            rhs += f" - {term.render()}"
        if self.response is None:
            return f"~ {rhs}"
        return f"{self.response.render()} ~ {rhs}"

    def bind(self, schema, extra_functions=None):
        """Bind this formula to ``schema``. See :func:`tilde.binder.bind`."""
        from tilde.binder import bind  # pylint: disable=import-outside-toplevel

        return bind(self, schema, extra_functions)

    def _copy(self):
        formula = self.__class__(response=self.response)
        formula._predictors = list(self._predictors)
        formula._excluded = list(self._excluded)
        return formula

    def _add(self, term):
        if isinstance(term, type(self)):
            for t in term.predictors:
                self._add(t)
        elif isinstance(term, Crossing):
            for t in term.expand():
                self._add(t)
        elif isinstance(term, ACCEPTED_TERMS):
            if term in self._excluded:
                self._excluded.remove(term)
            if term not in self._predictors:
                self._predictors.append(term)
        else:
            raise ValueError(f"Can't add an object of class {type(term)} to Formula.")

    def _remove(self, term):
        if isinstance(term, type(self)):
            for t in term.predictors:
                self._remove(t)
        elif isinstance(term, Crossing):
            for t in term.expand():
                self._remove(t)
        elif isinstance(term, Dot):
            if term in self._predictors:
                self._predictors.remove(term)
            self._excluded = []
        elif isinstance(term, ACCEPTED_TERMS):
            if term in self._predictors:
                self._predictors.remove(term)
            if self.has_dot and term not in self._excluded:
                self._excluded.append(term)
        else:
            raise ValueError(f"Can't remove an object of class {type(term)} from Formula.")
