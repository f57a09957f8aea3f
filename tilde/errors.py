class FormulaError(Exception):
    """Base class for the errors raised while parsing, binding or evaluating a formula."""


class ParseError(FormulaError):
    pass


class BindError(FormulaError):
    pass


class UnresolvedColumn(BindError):
    """A variable in the formula is not a field of the schema."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Column '{name}' is not present in the schema.")


class DuplicateResponseInPredictors(BindError):
    def __init__(self, term):
        self.term = term
        super().__init__(f"The response '{term.name}' is also used as a predictor.")


class UnknownFunction(BindError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Function '{name}' is not available.")


class TermTypeError(BindError):
    pass


class SchemaMismatch(FormulaError):
    pass
