class Token:
    """A lexical unit of a model formula

    Parameters
    ----------
    kind: string
        The kind of token, such as ``"IDENTIFIER"`` or ``"TILDE"``.
    lexeme: string
        The text of the token as it appears in the formula.
    literal: int or float
        The value of ``NUMBER`` tokens. ``None`` for the rest.
    position: int
        Offset of the first character of the token in the formula. It is only used to report
        errors and it is not taken into account when comparing tokens.
    """

    def __init__(self, kind, lexeme, literal=None, position=None):
        self.kind = kind
        self.lexeme = lexeme
        self.literal = literal
        self.position = position

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return (self.kind, self.lexeme, self.literal) == (other.kind, other.lexeme, other.literal)

    def __hash__(self):
        return hash((self.kind, self.lexeme, self.literal))

    def __repr__(self):  # pragma: no cover
        return self.__str__()

    def __str__(self):  # pragma: no cover
        if self.literal is None:
            return f"Token({self.kind}, '{self.lexeme}')"
        return f"Token({self.kind}, '{self.lexeme}', {self.literal})"
