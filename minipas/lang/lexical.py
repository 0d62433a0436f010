"""Lexical analysis for the minipas language: converts source text into a lazy, pull-based stream of tokens.

Tokens can be loosely defined as follows:

```
<id>          ::= <letter> (<letter> | <digit>)*     ; matched case-sensitively against RESERVED_KEYWORDS
<integer>     ::= <digit>+
<real>        ::= <digit>+ "." <digit>*              ; a second "." terminates the number
<assign>      ::= ":="
<single>      ::= ";" | "*" | "-" | "+" | "/" | "," | ":" | "(" | ")" | "."

<comment>     ::= "{" <char>* "}"                    ; does not nest, may be left open at end of input
```

Whitespace and comments separate tokens but are otherwise skipped. Note that "/" is real division, while the
keyword "DIV" is integer division.
"""

from dataclasses import dataclass
from enum import Enum

from minipas.lang.error import InvalidCharacter


class TokenType(Enum):
    """Kind tag of a token. Parser expectations compare this tag only, never the token's value."""
    INTEGER_CONST = "INTEGER_CONST"
    REAL_CONST = "REAL_CONST"
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    INTEGER_DIV = "DIV"
    REAL_DIV = "/"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    COLON = ":"
    SEMI = ";"
    DOT = "."
    ASSIGN = ":="
    ID = "ID"
    PROGRAM = "PROGRAM"
    VAR = "VAR"
    BEGIN = "BEGIN"
    END = "END"
    PROCEDURE = "PROCEDURE"
    INTEGER = "INTEGER"
    REAL = "REAL"
    EOF = "EOF"


RESERVED_KEYWORDS = {
    "PROGRAM": TokenType.PROGRAM,
    "VAR": TokenType.VAR,
    "BEGIN": TokenType.BEGIN,
    "END": TokenType.END,
    "DIV": TokenType.INTEGER_DIV,
    "PROCEDURE": TokenType.PROCEDURE,
    "INTEGER": TokenType.INTEGER,
    "REAL": TokenType.REAL,
}

SINGLE_CHARS = {
    ";": TokenType.SEMI,
    "*": TokenType.MUL,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "/": TokenType.REAL_DIV,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ".": TokenType.DOT,
}

WHITESPACE = " \t\n\r\x0b\x0c"


@dataclass(frozen=True)
class Token:
    """Immutable token: kind tag, optional literal value, and the 1-based position of its first character."""
    type: TokenType
    value: object = None
    line: int = 1
    column: int = 1

    def describe(self):
        """Short description used in error messages, e.g. "ID('a')" or "SEMI"."""
        if self.value is None:
            return self.type.name
        return f"{self.type.name}({self.value!r})"

    def __str__(self):
        return f"Token({self.describe()}, position={self.line}:{self.column})"


class Lexer:
    """Single forward scan over a source buffer. Tokens are produced one at a time by get_next_token."""

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None
        self.line = 1
        self.column = 1

    def advance(self):
        """Moves to the next character, keeping track of line and column."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        """Returns the character after current_char without consuming anything."""
        peek_pos = self.pos + 1
        if peek_pos >= len(self.text):
            return None
        return self.text[peek_pos]

    def skip_whitespace(self):
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def skip_comment(self):
        """Skips to just past the first closing brace, or to end of input. Assumes the opening brace was consumed."""
        while self.current_char is not None and self.current_char != "}":
            self.advance()
        if self.current_char == "}":
            self.advance()

    def number(self):
        """Returns an INTEGER_CONST or REAL_CONST token from a run of digits with at most one embedded period."""
        line, column = self.line, self.column
        result = ""
        is_real = False

        while self.current_char is not None and (is_ascii_digit(self.current_char) or self.current_char == "."):
            if self.current_char == ".":
                if is_real:
                    break
                is_real = True
            result += self.current_char
            self.advance()

        if is_real:
            return Token(TokenType.REAL_CONST, float(result), line, column)
        return Token(TokenType.INTEGER_CONST, int(result), line, column)

    def id(self):
        """Returns a reserved keyword token or an ID token from a run of alphanumeric characters."""
        line, column = self.line, self.column
        result = ""

        while self.current_char is not None and is_ascii_alnum(self.current_char):
            result += self.current_char
            self.advance()

        token_type = RESERVED_KEYWORDS.get(result)
        if token_type is None:
            return Token(TokenType.ID, result, line, column)
        return Token(token_type, None, line, column)

    def get_next_token(self):
        """Returns the next token in the source. Once the source is exhausted, returns EOF on every call. Raises
        InvalidCharacter if a character matches no token rule.
        """
        while self.current_char is not None:
            if self.current_char in WHITESPACE:
                self.skip_whitespace()
                continue

            if self.current_char == "{":
                self.advance()
                self.skip_comment()
                continue

            if is_ascii_alpha(self.current_char):
                return self.id()

            if is_ascii_digit(self.current_char):
                return self.number()

            line, column = self.line, self.column

            if self.current_char == ":" and self.peek() == "=":
                self.advance()
                self.advance()
                return Token(TokenType.ASSIGN, None, line, column)

            token_type = SINGLE_CHARS.get(self.current_char)
            if token_type is None:
                raise InvalidCharacter(self.current_char, line, column)

            self.advance()
            return Token(token_type, None, line, column)

        return Token(TokenType.EOF, None, self.line, self.column)

    def __iter__(self):
        """Yields tokens up to and including the first EOF."""
        while True:
            token = self.get_next_token()
            yield token
            if token.type is TokenType.EOF:
                return


def is_ascii_digit(char):
    return "0" <= char <= "9"


def is_ascii_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z"


def is_ascii_alnum(char):
    return is_ascii_alpha(char) or is_ascii_digit(char)
