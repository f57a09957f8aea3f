from tilde.utils import quote_name


class Variable:
    """Representation of a reference to a column.

    This class and ``Function`` are the atomic components of the other terms.

    Parameters
    ----------
    name: string
        The name of the column.
    """

    kind = "variable"

    def __init__(self, name):
        if not isinstance(name, str) or not name:
            raise ValueError("The name of a Variable must be a non-empty string.")
        if "`" in name:
            raise ValueError(f"The name of a Variable can't contain back-quotes: {name!r}.")
        self._name = name

    @property
    def name(self):
        return self._name

    def __hash__(self):
        return hash((self.kind, self.name))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.name == other.name

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return f"{self.__class__.__name__}({self.name})"

    @property
    def var_names(self):
        """Returns the name of the variable as a set."""
        return {self.name}

    def render(self):
        return quote_name(self.name)

    def accept(self, visitor):
        return visitor.visitVariableTerm(self)
