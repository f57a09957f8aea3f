from itertools import combinations

from tilde.terms.call import Function
from tilde.terms.variable import Variable

FACTORS = (Variable, Function)


class Intercept:
    """Internal representation of a model intercept.

    The intercept is never implicit. It appears only when ``1`` is written in the formula and
    it is bound to a column of ones named ``"Intercept"``.
    """

    kind = "intercept"

    def __eq__(self, other):
        return isinstance(other, type(self))

    def __hash__(self):
        return hash(self.kind)

    def __repr__(self):  # pragma: no cover
        return self.__str__()

    def __str__(self):  # pragma: no cover
        return f"{self.__class__.__name__}()"

    @property
    def name(self):
        return "Intercept"

    @property
    def var_names(self):
        """Returns empty set, no variables are used in the intercept."""
        return set()

    def render(self):
        return "1"

    def accept(self, visitor):
        return visitor.visitInterceptTerm(self)


class Dot:
    """The ``.`` wildcard.

    It stands for every column of the schema not otherwise used in the formula. It only exists
    until the formula is bound, where it is replaced by one :class:`.Variable` per column.
    """

    kind = "dot"

    def __eq__(self, other):
        return isinstance(other, type(self))

    def __hash__(self):
        return hash(self.kind)

    def __repr__(self):  # pragma: no cover
        return self.__str__()

    def __str__(self):  # pragma: no cover
        return f"{self.__class__.__name__}()"

    @property
    def name(self):
        return "."

    @property
    def var_names(self):
        return set()

    def render(self):
        return "."

    def accept(self, visitor):
        return visitor.visitDotTerm(self)


class Interaction:
    """Representation of an interaction between two or more terms.

    Nested interactions are flattened and repeated operands are dropped, so ``a::(b::a)`` is
    the same term as ``a::b``. The order of the operands is kept and it matters for equality.

    Parameters
    ----------
    operands: :class:`.Variable`, :class:`.Function` or :class:`.Interaction`
        The terms involved in the interaction.
    """

    kind = "interaction"

    def __init__(self, *operands):
        self._operands = flatten_operands(operands)
        if len(self._operands) < 2:
            raise ValueError("An Interaction needs at least two distinct operands.")

    @property
    def operands(self):
        return self._operands

    @property
    def name(self):
        return "::".join(operand.name for operand in self.operands)

    def __hash__(self):
        return hash((self.kind, self.operands))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.operands == other.operands

    def __repr__(self):  # pragma: no cover
        return self.__str__()

    def __str__(self):  # pragma: no cover
        string = ", ".join(str(operand) for operand in self.operands)
        return f"{self.__class__.__name__}({string})"

    @property
    def var_names(self):
        return set().union(*[operand.var_names for operand in self.operands])

    def render(self):
        return "::".join(operand.render() for operand in self.operands)

    def accept(self, visitor):
        return visitor.visitInteractionTerm(self)


class Crossing:
    """Full crossing of two or more terms.

    It is a shortcut for all the main effects and all the interactions among the operands.
    It never makes it into a :class:`.Formula`, where it is replaced by the terms returned by
    :meth:`expand`.

    Parameters
    ----------
    operands: :class:`.Variable`, :class:`.Function` or :class:`.Interaction`
        The terms being crossed.
    order: int
        The highest order of the interactions in the expansion. Defaults to ``None`` which
        means the number of operands.
    """

    kind = "crossing"

    def __init__(self, *operands, order=None):
        self._operands = tuple(dict.fromkeys(operands))
        if not all(isinstance(operand, FACTORS + (Interaction,)) for operand in operands):
            raise ValueError("Only variables, calls and interactions can be crossed.")
        if len(self._operands) < 2:
            raise ValueError("A Crossing needs at least two distinct operands.")
        if order is None:
            order = len(self._operands)
        if not isinstance(order, int) or isinstance(order, bool) or order < 1:
            raise ValueError("The order of a Crossing must be a positive integer.")
        self._order = min(order, len(self._operands))

    @property
    def operands(self):
        return self._operands

    @property
    def order(self):
        return self._order

    @property
    def name(self):
        return "&&".join(operand.name for operand in self.operands)

    def __hash__(self):
        return hash((self.kind, self.operands, self.order))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.operands == other.operands and self.order == other.order

    def __repr__(self):  # pragma: no cover
        return self.__str__()

    def __str__(self):  # pragma: no cover
        string = ", ".join(str(operand) for operand in self.operands)
        return f"{self.__class__.__name__}({string}, order={self.order})"

    @property
    def var_names(self):
        return set().union(*[operand.var_names for operand in self.operands])

    def render(self):
        return " && ".join(operand.render() for operand in self.operands)

    def expand(self):
        """Returns the terms the crossing stands for.

        Main effects come first, in the order of the operands. Then the interactions of size 2
        in lexicographic order of the operand positions, then those of size 3, and so on.

        * ``a && b && c`` gives ``a, b, c, a::b, a::c, b::c, a::b::c``.
        """
        terms = []
        for size in range(1, self.order + 1):
            for operands in combinations(self.operands, size):
                term = interact(*operands)
                if term not in terms:
                    terms.append(term)
        return terms

    def accept(self, visitor):
        return visitor.visitCrossingTerm(self)


def flatten_operands(operands):
    components = []
    for operand in operands:
        if isinstance(operand, Interaction):
            nested = operand.operands
        elif isinstance(operand, FACTORS):
            nested = (operand,)
        else:
            raise ValueError(f"Can't use an object of class {type(operand)} in an interaction.")
        for component in nested:
            if component not in components:
                components.append(component)
    return tuple(components)


def interact(*operands):
    """Interaction that collapses to the single operand when all operands are the same.

    * ``x::x`` is ``x``
    * ``x::y`` is ``Interaction(x, y)``
    """
    components = flatten_operands(operands)
    if len(components) == 1:
        return components[0]
    return Interaction(*components)
