from tilde.utils import IDENTIFIER_RE


class Function:
    """Representation of a named elementwise function applied to a term.

    The function is looked up by name when the formula is bound, so two calls are equal when
    they have the same name and equal arguments.

    Parameters
    ----------
    callee: string
        The name of the function.
    inner: :class:`.Variable`, :class:`.Function` or :class:`.Interaction`
        The term the function is applied to.
    """

    kind = "function"

    def __init__(self, callee, inner):
        # Imported here because Interaction accepts calls as operands.
        from tilde.terms.terms import Interaction
        from tilde.terms.variable import Variable

        if not isinstance(callee, str) or not IDENTIFIER_RE.fullmatch(callee):
            raise ValueError(f"'{callee}' is not a valid function name.")
        if not isinstance(inner, (Variable, Function, Interaction)):
            raise ValueError(f"Can't apply a function to an object of class {type(inner)}.")
        self._callee = callee
        self._inner = inner

    @property
    def callee(self):
        return self._callee

    @property
    def inner(self):
        return self._inner

    @property
    def name(self):
        return f"{self.callee}({self.inner.name})"

    def __hash__(self):
        return hash((self.kind, self.callee, self.inner))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.callee == other.callee and self.inner == other.inner

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return f"{self.__class__.__name__}({self.callee}, {self.inner})"

    @property
    def var_names(self):
        """Returns the names of the variables involved in the call, not including the callee."""
        return self.inner.var_names

    def render(self):
        return f"{self.callee}({self.inner.render()})"

    def accept(self, visitor):
        return visitor.visitFunctionTerm(self)
