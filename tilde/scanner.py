from .errors import ParseError
from .token import Token


class Scanner:
    """Scan formula string and returns Tokens"""

    def __init__(self, code):
        """Scans a model formula and returns a list of Tokens

        Parameters
        ----------
        code : string
            The code to be scanned.
        """
        self.code = code
        self.start = 0
        self.current = 0
        self.tokens = []

        if not len(self.code.strip()):
            raise ParseError("'code' is an empty string.")

    def at_end(self):
        return self.current >= len(self.code)

    def advance(self):
        self.current += 1
        return self.code[self.current - 1]

    def peek(self):
        if self.at_end():
            return ""
        return self.code[self.current]

    def match(self, expected):
        if self.at_end():
            return False
        if self.code[self.current] != expected:
            return False
        self.current += 1
        return True

    def add_token(self, kind, literal=None):
        # Only numbers have "literal != None"
        source = self.code[self.start : self.current]
        self.tokens.append(Token(kind, source, literal, self.start))

    def scan_token(self):
        char = self.advance()
        if char == "(":
            self.add_token("LEFT_PAREN")
        elif char == ")":
            self.add_token("RIGHT_PAREN")
        elif char == "`":
            self.backquote()
        elif char == ".":
            self.add_token("PERIOD")
        elif char == "+":
            self.add_token("PLUS")
        elif char == "-":
            self.add_token("MINUS")
        elif char == "~":
            self.add_token("TILDE")
        elif char == ":":
            if self.match(":"):
                self.add_token("COLON_COLON")
            else:
                raise ParseError(f"Unexpected character ':' at position {self.start}, use '::'.")
        elif char == "&":
            if self.match("&"):
                self.add_token("AMP_AMP")
            else:
                raise ParseError(f"Unexpected character '&' at position {self.start}, use '&&'.")
        elif char in [" ", "\n", "\t", "\r"]:
            pass
        elif is_digit(char):
            self.number()
        elif is_alpha(char) or char == "_":
            self.identifier()
        else:
            raise ParseError(f"Unexpected character '{char}' at position {self.start}.")

    def scan(self):
        """Scan formula string.

        Returns
        -------
        tokens : list
            A list of objects of class Token
        """
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token("EOF", "", position=len(self.code)))

        tilde_n = len([token for token in self.tokens if token.kind == "TILDE"])
        if tilde_n == 0:
            raise ParseError("There is no '~' in model formula.")
        if tilde_n > 1:
            raise ParseError("There is more than one '~' in model formula.")

        return self.tokens

    def number(self):
        is_float = False
        while is_digit(self.peek()):
            self.advance()
        # A period right after digits can only be a fractional part
        if self.peek() == ".":
            is_float = True
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        if is_float:
            literal = float(self.code[self.start : self.current])
        else:
            literal = int(self.code[self.start : self.current])
        self.add_token("NUMBER", literal)

    def identifier(self):
        # 'sepal.length' is also an identifier
        while is_alpha(self.peek()) or is_digit(self.peek()) or self.peek() in [".", "_"]:
            self.advance()
        self.add_token("IDENTIFIER")

    def backquote(self):
        while self.peek() != "`":
            if self.at_end():
                raise ParseError("Unterminated back-quoted name.")
            self.advance()
        # The closing backquote
        self.advance()
        if self.current - self.start == 2:
            raise ParseError("Back-quoted names can't be empty.")
        self.add_token("BQNAME")


# Only ASCII letters and digits, other names must be back-quoted
def is_digit(char):
    return "0" <= char <= "9"


def is_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z"
