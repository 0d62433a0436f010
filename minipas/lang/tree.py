"""Abstract syntax tree for the minipas language.

Nodes are frozen dataclasses and every child sequence is a tuple, so a tree is immutable once the parser has built
it. The same tree is walked twice (semantic analysis, then interpretation) without being copied. Two trees parsed
from the same source compare equal.
"""

from dataclasses import dataclass, fields

from minipas.lang.lexical import Token, TokenType


class Node:
    """Superclass of every AST node."""

    @property
    def children(self):
        """Child nodes in source order."""
        result = []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                result.append(value)
            elif isinstance(value, tuple):
                result.extend(item for item in value if isinstance(item, Node))
        return result

    def label(self):
        """One-line description of this node, without its children."""
        attrs = []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, (Node, tuple, Token)):
                continue
            if isinstance(value, TokenType):
                value = value.value
            attrs.append(f"{field.name}={value!r}")
        return f"{type(self).__name__}({', '.join(attrs)})"

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(<attrs>, nodes=[
            <Node>(<attrs>, nodes=[
                ...
                <Node>(<attrs>)  # <-- if node has no children
            ])
        ])
        """
        result = f"{'    ' * indents}{self.label()}"
        children = self.children
        if children:
            result = result[:-1] + (", " if result[-2] != "(" else "") + "nodes=["
            for child in children:
                result += "\n" + child.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}])"
        return result


@dataclass(frozen=True)
class Program(Node):
    name: str
    block: "Block"


@dataclass(frozen=True)
class Block(Node):
    declarations: tuple
    compound: "Compound"


@dataclass(frozen=True)
class VarDecl(Node):
    id: str
    type: TokenType  # TokenType.INTEGER or TokenType.REAL
    token: Token


@dataclass(frozen=True)
class Param(Node):
    id: str
    type: TokenType
    token: Token


@dataclass(frozen=True)
class ProcedureDecl(Node):
    id: str
    params: tuple
    block: Block
    token: Token


@dataclass(frozen=True)
class IntegerLiteral(Node):
    value: int


@dataclass(frozen=True)
class RealLiteral(Node):
    value: float


@dataclass(frozen=True)
class BinaryOp(Node):
    left: Node
    op: TokenType
    right: Node


@dataclass(frozen=True)
class UnaryOp(Node):
    op: TokenType
    operand: Node


@dataclass(frozen=True)
class Compound(Node):
    statements: tuple


@dataclass(frozen=True)
class VarRef(Node):
    id: str
    token: Token


@dataclass(frozen=True)
class Assign(Node):
    target_id: str
    target: VarRef
    value: Node


@dataclass(frozen=True)
class NoOp(Node):
    pass


class NodeVisitor:
    """Dispatches visit(node) to visit_<NodeClass>(node). Subclasses implement the methods for the nodes they
    handle; a missing method is a bug and raises NotImplementedError.
    """

    def visit(self, node):
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise NotImplementedError(f"{type(self).__name__} has no visit_{type(node).__name__} method")
        return method(node)
