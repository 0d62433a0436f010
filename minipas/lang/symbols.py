"""Symbols and scoped symbol tables used during semantic analysis. Nothing here exists at run time."""

import logging

logger = logging.getLogger(__name__)


class Symbol:
    """Superclass of named entities recorded in a scope."""

    def __init__(self, name, type=None):
        self.name = name
        self.type = type

    def __eq__(self, other):
        return type(other) is type(self) and other.name == self.name and other.type == self.type

    def __hash__(self):
        return hash((type(self).__name__, self.name))


class BuiltinTypeSymbol(Symbol):
    """INTEGER or REAL. Only ever inserted into the global scope."""

    def __str__(self):
        return f"<{type(self).__name__}(name='{self.name}')>"

    __repr__ = __str__


class VarSymbol(Symbol):
    """A variable or procedure parameter; type is a BuiltinTypeSymbol."""

    def __str__(self):
        return f"<{type(self).__name__}(name='{self.name}', type='{self.type.name}')>"

    __repr__ = __str__


class ProcedureSymbol(Symbol):
    """A declared procedure and its parameters (VarSymbols, in declaration order)."""

    def __init__(self, name, params=None):
        super().__init__(name)
        self.params = list(params) if params is not None else []

    def __eq__(self, other):
        return super().__eq__(other) and other.params == self.params

    __hash__ = Symbol.__hash__

    def __str__(self):
        params = ", ".join(str(param) for param in self.params)
        return f"<{type(self).__name__}(name='{self.name}', parameters=[{params}])>"

    __repr__ = __str__


class ScopedSymbolTable:
    """A lexical scope: name -> Symbol, plus a name, a nesting level and a link to the enclosing scope.

    Level 0 is reserved for the root sentinel (see ScopedSymbolTable.root), which never holds symbols and is never
    searched. The global scope is level 1 and starts out holding the builtin types.
    """
    BUILTIN_TYPES = ("INTEGER", "REAL")
    ROOT_NAME = "None"

    def __init__(self, scope_name, scope_level, enclosing_scope=None):
        self.symbols = {}
        self.scope_name = scope_name
        self.scope_level = scope_level
        self.enclosing_scope = enclosing_scope

        if enclosing_scope is not None and scope_level <= enclosing_scope.scope_level:
            raise ValueError(f"scope level {scope_level} must be deeper than {enclosing_scope.scope_level}")

        if scope_level == 1:
            for name in ScopedSymbolTable.BUILTIN_TYPES:
                self.insert(BuiltinTypeSymbol(name))

    @classmethod
    def root(cls):
        """Returns the level 0 sentinel that encloses the global scope."""
        return cls(cls.ROOT_NAME, 0)

    @property
    def is_root(self):
        return self.scope_level == 0

    def insert(self, symbol):
        """Inserts symbol, replacing any symbol with the same name in this scope. Duplicates must be checked by the
        caller with lookup(name, current_scope_only=True).
        """
        logger.info(f"Insert: {symbol.name}")
        self.symbols[symbol.name] = symbol

    def lookup(self, name, current_scope_only=False):
        """Returns the symbol called name, searching this scope and then each enclosing scope up to (not including)
        the root sentinel. Returns None if name is not visible.
        """
        scope = self
        while scope is not None and not scope.is_root:
            logger.info(f"Lookup: {name}. (Scope name: {scope.scope_name})")
            symbol = scope.symbols.get(name)
            if symbol is not None:
                return symbol
            if current_scope_only:
                return None
            scope = scope.enclosing_scope
        return None

    def __iter__(self):
        """Yields (name, symbol) pairs sorted by name."""
        for name in sorted(self.symbols):
            yield name, self.symbols[name]

    def __str__(self):
        if self.is_root:
            return ScopedSymbolTable.ROOT_NAME

        header = "SCOPE (SCOPED SYMBOL TABLE)"
        lines = [header, "=" * len(header)]

        enclosing = self.enclosing_scope.scope_name if self.enclosing_scope is not None else ScopedSymbolTable.ROOT_NAME
        lines.append(f"Scope name     : {self.scope_name}")
        lines.append(f"Scope level    : {self.scope_level}")
        lines.append(f"Enclosing scope: {enclosing}")

        header = "Scope (Scoped symbol table) contents"
        lines.extend([header, "-" * len(header)])
        lines.extend(f"{name} = {symbol}" for name, symbol in self)

        return "\n".join(lines)

    def __repr__(self):
        return f"{type(self).__name__}('{self.scope_name}', {self.scope_level})"
