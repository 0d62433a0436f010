"""Tree-walking interpreter for the minipas language, run after semantic analysis has validated the tree.

Run-time values are Integer (32-bit) or Real (single precision). Every arithmetic operation is computed at single
precision, then:
- if either operand is Real, or the operator is real division "/", the result is Real
- otherwise the result is Integer, truncated toward zero ("DIV" is floating division truncated this way)

There is one flat memory table for the whole run. Scoping is only enforced statically, and procedures are declared
but never called, so their bodies never run.
"""

import math
import operator
import struct
from dataclasses import dataclass

from minipas.lang.error import IdNotFound
from minipas.lang.lexical import TokenType
from minipas.lang.tree import NodeVisitor

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def single(value):
    """Rounds a float to the nearest single precision value. Values beyond single range become infinite."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def format_single(value):
    """Shortest decimal digits that read back as the same single precision value, e.g. "10.0" or "0.1"."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    for precision in range(1, 18):
        text = f"{value:.{precision}g}"
        if single(float(text)) == value:
            break

    return repr(float(text))  # "1e+01" -> "10.0"


def saturate(value):
    """Converts a float to a 32-bit integer the way a float-to-int cast does: truncating toward zero, clamping to the
    integer range, and mapping NaN to 0.
    """
    if math.isnan(value):
        return 0
    if value >= INT_MAX:
        return INT_MAX
    if value <= INT_MIN:
        return INT_MIN
    return int(value)


@dataclass(frozen=True)
class Integer:
    value: int

    def __post_init__(self):
        object.__setattr__(self, "value", min(max(int(self.value), INT_MIN), INT_MAX))

    @classmethod
    def from_float(cls, value):
        return cls(saturate(value))

    def as_single(self):
        return single(float(self.value))

    def __neg__(self):
        return Integer(-self.value)

    def __repr__(self):
        return f"Integer({self.value})"


@dataclass(frozen=True)
class Real:
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", single(float(self.value)))

    def as_single(self):
        return self.value

    def __neg__(self):
        return Real(-self.value)

    def __repr__(self):
        return f"Real({format_single(self.value)})"


def divide(dividend, divisor):
    """Floating division with IEEE results for a zero divisor instead of ZeroDivisionError."""
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)
    return dividend / divisor


OPERATIONS = {
    TokenType.PLUS: operator.add,
    TokenType.MINUS: operator.sub,
    TokenType.MUL: operator.mul,
    TokenType.INTEGER_DIV: divide,
    TokenType.REAL_DIV: divide,
}


def arithmetic(op, left, right):
    """Applies binary operator op (a TokenType) to two run-time values, following the promotion rule."""
    result = single(OPERATIONS[op](left.as_single(), right.as_single()))
    if op is TokenType.REAL_DIV or isinstance(left, Real) or isinstance(right, Real):
        return Real(result)
    return Integer.from_float(result)


class Interpreter(NodeVisitor):
    """Evaluates a validated tree. Expressions return run-time values, statements return None."""

    def __init__(self):
        self.GLOBAL_MEMORY = {}

    def interpret(self, tree):
        """Runs tree and returns the final memory report (see report)."""
        self.visit(tree)
        return self.report()

    def report(self):
        """Returns memory contents as (name, value) pairs sorted by name."""
        return sorted(self.GLOBAL_MEMORY.items(), key=operator.itemgetter(0))

    def visit_Program(self, node):
        self.visit(node.block)

    def visit_Block(self, node):
        for declaration in node.declarations:
            self.visit(declaration)
        self.visit(node.compound)

    def visit_VarDecl(self, node):
        """Declarations have no run-time effect."""

    def visit_ProcedureDecl(self, node):
        """Procedures are never called, so their declarations have no run-time effect."""

    def visit_Compound(self, node):
        for statement in node.statements:
            self.visit(statement)

    def visit_NoOp(self, node):
        pass

    def visit_Assign(self, node):
        self.GLOBAL_MEMORY[node.target_id] = self.visit(node.value)

    def visit_VarRef(self, node):
        try:
            return self.GLOBAL_MEMORY[node.id]
        except KeyError:
            raise IdNotFound(node.token, internal=True) from None

    def visit_IntegerLiteral(self, node):
        return Integer(node.value)

    def visit_RealLiteral(self, node):
        return Real(node.value)

    def visit_BinaryOp(self, node):
        left = self.visit(node.left)
        right = self.visit(node.right)
        return arithmetic(node.op, left, right)

    def visit_UnaryOp(self, node):
        operand = self.visit(node.operand)
        if node.op is TokenType.MINUS:
            return -operand
        return operand
