from .errors import ParseError
from .expr import Binary, Call, Chain, Literal, Period, QuotedName, Variable
from .utils import listify


class Parser:
    """Parses a sequence of Tokens and returns an abstract syntax tree.

    The grammar is

    .. code-block:: text

        formula  := [termExpr] '~' rhs
        rhs      := addend (('+' | '-') addend)*
        addend   := termExpr | '.' | '0' | '1'
        termExpr := factor ('::' factor)* | factor ('&&' factor)*
        factor   := name | identifier '(' termExpr ')'

    Parameters
    ----------
    tokens : list
        A list populated with objects of class Token as returned by scanner.Scanner.
    """

    def __init__(self, tokens):
        self.current = 0
        self.tokens = tokens

    def at_end(self):
        return self.peek().kind == "EOF"

    def advance(self):
        if not self.at_end():
            self.current += 1
        return self.tokens[self.current - 1]

    def peek(self):
        """Returns the Token we are about to consume"""
        return self.tokens[self.current]

    def previous(self):
        """Returns the last Token we consumed"""
        return self.tokens[self.current - 1]

    def check(self, kinds):
        # Checks multiple kinds at once
        if self.at_end():
            return False
        return self.peek().kind in listify(kinds)

    def match(self, kinds):
        if self.check(kinds):
            self.advance()
            return True
        return False

    def consume(self, kind, message):
        """Consumes the next Token if it is of the expected kind, otherwise it's an error."""
        if self.check(kind):
            return self.advance()
        raise ParseError(message)

    def parse(self):
        """Parse a sequence of Tokens

        Returns
        -------
        An object of class expr.Binary whose operator is the '~' token.
        """
        expr = self.formula()
        if not self.at_end():
            token = self.peek()
            raise ParseError(f"Unexpected '{token.lexeme}' at position {token.position}.")
        return expr

    def formula(self):
        left = None
        if not self.check("TILDE"):
            left = self.term_expr()
        operator = self.consume("TILDE", "Expect '~' after the response.")
        right = self.rhs()
        return Binary(left, operator, right)

    def rhs(self):
        expr = self.addend()
        while self.match(["PLUS", "MINUS"]):
            operator = self.previous()
            right = self.addend()
            expr = Binary(expr, operator, right)
        return expr

    def addend(self):
        if self.match("PERIOD"):
            return Period()
        if self.match("NUMBER"):
            value = self.previous().literal
            if not isinstance(value, int) or value not in (0, 1):
                raise ParseError(
                    f"Numeric literal '{self.previous().lexeme}' is not allowed, only 0 or 1."
                )
            return Literal(value)
        return self.term_expr()

    def term_expr(self):
        expr = self.factor()
        if self.check(["COLON_COLON", "AMP_AMP"]):
            operator = self.advance()
            operands = [expr, self.factor()]
            while self.match(operator.kind):
                operands.append(self.factor())
            if self.check(["COLON_COLON", "AMP_AMP"]):
                raise ParseError("'::' and '&&' can't be mixed in the same term.")
            expr = Chain(operator, operands)
        return expr

    def factor(self):
        if self.match("IDENTIFIER"):
            identifier = self.previous()
            if self.match("LEFT_PAREN"):
                return self.finishcall(identifier)
            return Variable(identifier)
        elif self.match("BQNAME"):
            return QuotedName(self.previous())
        elif self.check("PERIOD"):
            raise ParseError("'.' can only be used as a term on the right-hand side.")
        else:
            raise ParseError(
                f"Expect a variable name or a function call at position {self.peek().position}."
            )

    def finishcall(self, identifier):
        if self.check("RIGHT_PAREN"):
            raise ParseError(f"Expect an argument in the call to '{identifier.lexeme}'.")
        arg = self.term_expr()
        if isinstance(arg, Chain) and arg.operator.kind == "AMP_AMP":
            raise ParseError("'&&' is not allowed within a function call.")
        self.consume("RIGHT_PAREN", "Expect ')' after arguments.")
        return Call(Variable(identifier), arg)
