"""Semantic analysis for the minipas language.

Walks a parsed program once, before anything is evaluated, and statically resolves every identifier:
- a name may be declared at most once per scope (shadowing an enclosing scope's name is fine)
- every referenced or assigned name must be declared in the current scope or one that encloses it

Scopes follow strict stack discipline: one is pushed on entering the program and each procedure declaration, and
popped on leaving it. Scopes that have been left are kept, in the order they were left, for the scope-table dump.
"""

import logging

from minipas.lang.error import DuplicateId, IdNotFound
from minipas.lang.symbols import ProcedureSymbol, ScopedSymbolTable, VarSymbol
from minipas.lang.tree import NodeVisitor

logger = logging.getLogger(__name__)


class SemanticAnalyzer(NodeVisitor):
    """Validates a tree. The tree is only read, never modified."""
    GLOBAL_SCOPE = "global"

    def __init__(self):
        self.scope_stack = [ScopedSymbolTable.root()]
        self.scopes = []  # scopes that have been left, innermost first

    @property
    def current_scope(self):
        return self.scope_stack[-1]

    def analyze(self, tree):
        """Validates tree and returns the scopes it declared. Raises DuplicateId or IdNotFound on the first
        error found.
        """
        self.visit(tree)
        return self.scopes

    def enter_scope(self, scope_name):
        logger.info(f"ENTER scope: {scope_name}")
        enclosing_scope = self.current_scope
        scope = ScopedSymbolTable(scope_name, enclosing_scope.scope_level + 1, enclosing_scope)
        self.scope_stack.append(scope)
        return scope

    def leave_scope(self):
        scope = self.scope_stack.pop()
        logger.info(scope)
        logger.info(f"LEAVE scope: {scope.scope_name}")
        self.scopes.append(scope)
        return scope

    def visit_Program(self, node):
        self.enter_scope(SemanticAnalyzer.GLOBAL_SCOPE)
        self.visit(node.block)
        self.leave_scope()

    def visit_Block(self, node):
        for declaration in node.declarations:
            self.visit(declaration)
        self.visit(node.compound)

    def visit_Compound(self, node):
        for statement in node.statements:
            self.visit(statement)

    def visit_NoOp(self, node):
        pass

    def declare_var(self, node):
        """Inserts a VarSymbol for node (a VarDecl or Param) into the current scope."""
        type_symbol = self.current_scope.lookup(node.type.name)
        if self.current_scope.lookup(node.id, current_scope_only=True) is not None:
            raise DuplicateId(node.token)

        var_symbol = VarSymbol(node.id, type_symbol)
        self.current_scope.insert(var_symbol)
        return var_symbol

    def visit_VarDecl(self, node):
        self.declare_var(node)

    def visit_ProcedureDecl(self, node):
        if self.current_scope.lookup(node.id, current_scope_only=True) is not None:
            raise DuplicateId(node.token)

        proc_symbol = ProcedureSymbol(node.id)
        self.current_scope.insert(proc_symbol)  # visible to siblings and to its own body

        self.enter_scope(node.id)
        for param in node.params:
            proc_symbol.params.append(self.declare_var(param))

        self.visit(node.block)
        self.leave_scope()

    def visit_Assign(self, node):
        self.visit(node.value)
        self.visit(node.target)

    def visit_VarRef(self, node):
        if self.current_scope.lookup(node.id) is None:
            raise IdNotFound(node.token)

    def visit_BinaryOp(self, node):
        self.visit(node.left)
        self.visit(node.right)

    def visit_UnaryOp(self, node):
        self.visit(node.operand)

    def visit_IntegerLiteral(self, node):
        pass

    def visit_RealLiteral(self, node):
        pass
