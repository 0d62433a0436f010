"""Error handling for the minipas language. Only GenericExceptions should be encountered while running a program: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every phase is fail-fast, so the first GenericException raised aborts the whole pipeline.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a minipas error. `{}` placeholders in msg are
    filled with exprs, which are bolded when displayed.
    """

    def __init__(self, msg, exprs=None, line=None, column=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ()
        if isinstance(exprs, str):
            exprs = (exprs,)

        self.plain_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets

        self.line = line
        self.column = column
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain_msg)

    @property
    def position(self):
        """(line, column) of the offending source text, or None if it is not known."""
        if self.line is None:
            return None
        return self.line, self.column


class InvalidCharacter(GenericException):
    """The lexer found a character that starts no token."""

    def __init__(self, char, line=None, column=None):
        super().__init__("invalid character '{}'", char, line, column)
        self.char = char


class TokenException(GenericException):
    """Superclass for errors raised at a token: the token's position is used for diagnosis."""

    def __init__(self, msg, exprs, token, internal=False):
        super().__init__(msg, exprs, token.line, token.column, internal=internal)
        self.token = token


class UnexpectedToken(TokenException):
    """The parser expected another kind of token."""

    def __init__(self, token):
        if token.type.name == "EOF":
            super().__init__("unexpected end of input", (), token)
        else:
            super().__init__("unexpected token {}", token.describe(), token)


class DuplicateId(TokenException):
    """A name was declared twice within the same scope."""

    def __init__(self, token):
        super().__init__("duplicate identifier '{}'", token.value, token)


class IdNotFound(TokenException):
    """A name was referenced or assigned without a visible declaration."""

    def __init__(self, token, internal=False):
        super().__init__("identifier '{}' not found", token.value, token, internal=internal)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report minipas errors."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.path = None
        self.source = None

    def register_file(self, path, source=None):
        """Registers the file being run, so that errors can point at their source line."""
        self.path = path
        self.source = source

    def source_line(self, line):
        """Returns line number `line` of the registered source, or None."""
        if self.source is None or line is None:
            return None
        lines = self.source.splitlines()
        if 0 < line <= len(lines):
            return lines[line - 1]
        return None

    @staticmethod
    def diagnose(line, column):
        """Returns line with a caret under column."""
        column = max(column or 1, 1)
        diagnosis = "  " + line[:column - 1]
        diagnosis += colored(line[column - 1:column], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[column:] + "\n"
        diagnosis += "  " + " " * (column - 1) + colored("^", ErrorHandler.ERROR, attrs=["bold"])
        return diagnosis

    def format(self, error):
        """Returns the full, colored report of error."""
        location = self.path or "<input>"
        if error.position is not None:
            location += f":{error.line}:{error.column}"

        error_msg = colored(f"{location}: ", attrs=["bold"])
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg

        line = self.source_line(error.line)
        if not error.internal and error.diagnosis and line is not None:
            error_msg += "\n" + ErrorHandler.diagnose(line, error.column)

        return error_msg

    def throw(self, error):
        """Reports error, a GenericException, on stderr. Exits with status 1 if this handler is fatal."""
        print(self.format(error), file=self.stream or sys.stderr)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("program nests too deeply", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
