from tilde import builder
from tilde.errors import ParseError
from tilde.terms import Formula, Function, Variable


class NegatedIntercept:
    """Marker for a ``0`` in the formula. It never makes it into a Formula."""


class Resolver:
    """Visitor that walks through the AST and returns a Formula

    All the terms are created with the functions in ``tilde.builder`` so parsing a string and
    building the same formula by hand give equal results.
    """

    def __init__(self, expr):
        self.expr = expr

    def resolve(self):
        return self.expr.accept(self)

    def visitBinaryExpr(self, expr):
        otype = expr.operator.kind
        if otype == "TILDE":
            response = None
            if expr.left is not None:
                response = expr.left.accept(self)
                if not isinstance(response, (Variable, Function)):
                    raise ParseError(
                        f"The response must be a variable or a function call, not '{response.name}'."
                    )
            return as_formula(expr.right.accept(self)).with_response(response)
        left = as_formula(expr.left.accept(self))
        right = expr.right.accept(self)
        if otype == "PLUS":
            if isinstance(right, NegatedIntercept):
                return left.remove(builder.intercept())
            return left.add(right)
        elif otype == "MINUS":
            if isinstance(right, NegatedIntercept):
                return left.add(builder.intercept())
            return left.remove(right)
        else:  # pragma: no cover
            raise ParseError("Couldn't resolve BinaryExpr with otype '" + otype + "'")

    def visitChainExpr(self, expr):
        otype = expr.operator.kind
        operands = [operand.accept(self) for operand in expr.operands]
        if otype == "COLON_COLON":
            return builder.interaction(*operands)
        elif otype == "AMP_AMP":
            return builder.crossing(*operands)
        else:  # pragma: no cover
            raise ParseError("Couldn't resolve ChainExpr with otype '" + otype + "'")

    def visitCallExpr(self, expr):
        return builder.function(expr.callee.name.lexeme, expr.arg.accept(self))

    def visitVariableExpr(self, expr):
        return builder.variable(expr.name.lexeme)

    def visitQuotedNameExpr(self, expr):
        return builder.variable(expr.expression.lexeme[1:-1])

    def visitLiteralExpr(self, expr):
        if expr.value == 1:
            return builder.intercept()
        return NegatedIntercept()

    def visitPeriodExpr(self, expr):  # pylint: disable=unused-argument
        return builder.dot()


def as_formula(obj):
    if isinstance(obj, Formula):
        return obj
    if isinstance(obj, NegatedIntercept):
        return Formula().remove(builder.intercept())
    return Formula(obj)
