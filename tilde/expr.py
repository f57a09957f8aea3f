class Binary:
    """Expr for '~', '+' and '-'.

    The left side of a '~' is ``None`` in one-sided formulas.
    """

    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def __hash__(self):
        return hash((self.left, self.operator, self.right))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return (
            self.left == other.left
            and self.operator == other.operator
            and self.right == other.right
        )

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        left = "  ".join(str(self.left).splitlines(True))
        right = "  ".join(str(self.right).splitlines(True))
        string_list = ["left=" + left, "op=" + str(self.operator.lexeme), "right=" + right]
        return "Binary(\n  " + ",\n  ".join(string_list) + "\n)"

    def accept(self, visitor):
        return visitor.visitBinaryExpr(self)


class Chain:
    """Expr for a run of factors joined by the same operator, '::' or '&&'."""

    def __init__(self, operator, operands):
        self.operator = operator
        self.operands = list(operands)

    def __hash__(self):
        return hash((self.operator, tuple(self.operands)))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.operator == other.operator and self.operands == other.operands

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        operands = ",\n  ".join("  ".join(str(o).splitlines(True)) for o in self.operands)
        return f"Chain(\n  op={self.operator.lexeme},\n  {operands}\n)"

    def accept(self, visitor):
        return visitor.visitChainExpr(self)


class Call:
    """Function call expressions. Calls take exactly one argument."""

    def __init__(self, callee, arg):
        self.callee = callee
        self.arg = arg

    def __hash__(self):
        return hash((self.callee, self.arg))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.callee == other.callee and self.arg == other.arg

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        string_list = [
            "callee=" + str(self.callee),
            "arg=" + "  ".join(str(self.arg).splitlines(True)),
        ]
        return "Call(\n  " + ",\n  ".join(string_list) + "\n)"

    def accept(self, visitor):
        return visitor.visitCallExpr(self)


class Variable:
    def __init__(self, name):
        self.name = name

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.name == other.name

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return "Variable(name=" + self.name.lexeme + ")"

    def accept(self, visitor):
        return visitor.visitVariableExpr(self)


class QuotedName:
    """Expressions for back-quoted names (i.e. `sepal length`)"""

    def __init__(self, expression):
        self.expression = expression

    def __hash__(self):
        return hash(self.expression)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.expression == other.expression

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return "QuotedName(" + self.expression.lexeme + ")"

    def accept(self, visitor):
        return visitor.visitQuotedNameExpr(self)


class Literal:
    """Numeric literals. Only ``0`` and ``1`` reach this point."""

    def __init__(self, value):
        self.value = value

    def __hash__(self):
        return hash(self.value)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.value == other.value

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return "Literal(" + str(self.value) + ")"

    def accept(self, visitor):
        return visitor.visitLiteralExpr(self)


class Period:
    """The '.' wildcard"""

    def __hash__(self):
        return hash("PERIOD")

    def __eq__(self, other):
        return isinstance(other, type(self))

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return "Period()"

    def accept(self, visitor):
        return visitor.visitPeriodExpr(self)
