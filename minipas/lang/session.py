"""Session control for the minipas language: runs the whole pipeline over one program.

lex -> parse -> analyze -> interpret, strictly in order. Any GenericException aborts the remaining phases, and nothing
is reported until every phase has succeeded.
"""

from minipas.lang.error import GenericException
from minipas.lang.runtime import Interpreter
from minipas.lang.semantic import SemanticAnalyzer
from minipas.lang.syntax import Parser


class Session:
    """Governs one run of one program."""
    SRC_NAME = "<string>"  # path used for programs that do not come from a file

    def __init__(self, source, path=None, error_handler=None):
        self.source = source
        self.path = path if path is not None else Session.SRC_NAME
        self.error_handler = error_handler

        if self.error_handler is not None:
            self.error_handler.register_file(self.path, self.source)

        self.tree = None
        self.scopes = []
        self.results = []

    @classmethod
    def from_file(cls, path, error_handler=None):
        """Reads the whole file at path into memory and returns a Session for it."""
        if error_handler is not None:
            error_handler.register_file(path)
        try:
            with open(path, "r", encoding="utf-8") as file:
                source = file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False)
        except UnicodeDecodeError:
            raise GenericException("'{}' could not be decoded as UTF-8", path, diagnosis=False)
        return cls(source, path, error_handler)

    def parse(self):
        self.tree = Parser.from_source(self.source).parse()
        return self.tree

    def analyze(self):
        self.scopes = SemanticAnalyzer().analyze(self.tree)
        return self.scopes

    def interpret(self):
        self.results = Interpreter().interpret(self.tree)
        return self.results

    def run(self):
        """Runs every phase and returns the final memory report: (name, value) pairs sorted by name."""
        self.parse()
        self.analyze()
        return self.interpret()

    def format_scopes(self):
        """Scope-table dump of every scope left during analysis, innermost first."""
        return "\n\n".join(str(scope) for scope in self.scopes)

    def format_results(self):
        lines = ["*** Run-time GLOBAL_MEMORY contents: ***"]
        lines.extend(f"{name} = {value!r}" for name, value in self.results)
        return "\n".join(lines)
