"""
Lox expression tree
Immutable node variants built by the parser, plus the debug printers
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from tokens import Token
from utilities import stringify


@dataclass(frozen=True)
class Literal:
    """A number, string, boolean or nil value embedded in the source"""
    value: Any


@dataclass(frozen=True)
class Grouping:
    """A parenthesized expression"""
    expression: 'Expr'


@dataclass(frozen=True)
class Unary:
    """Prefix `!` or `-` applied to one operand"""
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


Expr = Union[Literal, Grouping, Unary, Binary]


def children(expr: Expr) -> List[Expr]:
    """Direct subexpressions of a node, left to right"""
    if isinstance(expr, Literal):
        return []
    if isinstance(expr, Grouping):
        return [expr.expression]
    if isinstance(expr, Unary):
        return [expr.right]
    if isinstance(expr, Binary):
        return [expr.left, expr.right]
    raise TypeError(f"Not a Lox expression: {expr!r}")


def print_ast(expr: Expr) -> str:
    """Render a tree as a fully parenthesized prefix string"""
    if isinstance(expr, Literal):
        return stringify(expr.value)
    if isinstance(expr, Grouping):
        return f"(group {print_ast(expr.expression)})"
    if isinstance(expr, Unary):
        return f"({expr.operator.lexeme} {print_ast(expr.right)})"
    if isinstance(expr, Binary):
        return f"({expr.operator.lexeme} {print_ast(expr.left)} {print_ast(expr.right)})"
    raise TypeError(f"Not a Lox expression: {expr!r}")


# Utility functions for working with trees
def find_nodes_by_type(expr: Expr, node_type: type) -> List[Expr]:
    """Find all nodes of a specific variant in a tree"""
    result = []

    def search(node: Expr):
        if isinstance(node, node_type):
            result.append(node)
        for child in children(node):
            search(child)

    search(expr)
    return result


def pretty_print_ast(expr: Expr, indent: int = 0) -> str:
    """Pretty print a tree for debugging, one node per line"""
    result = "  " * indent + type(expr).__name__
    if isinstance(expr, Literal):
        result += f"({expr.value!r})"
    elif isinstance(expr, (Unary, Binary)):
        result += f"({expr.operator.lexeme!r})"
    result += "\n"

    for child in children(expr):
        result += pretty_print_ast(child, indent + 1)

    return result


def expr_to_dict(expr: Expr) -> Dict[str, Any]:
    """Convert a tree to a dictionary representation"""
    result: Dict[str, Any] = {"type": type(expr).__name__}
    if isinstance(expr, Literal):
        result["value"] = expr.value
    if isinstance(expr, (Unary, Binary)):
        result["operator"] = expr.operator.lexeme
        result["line"] = expr.operator.line
    result["children"] = [expr_to_dict(child) for child in children(expr)]
    return result
