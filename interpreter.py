"""
Lox Interpreter - tree-walking expression evaluator
Pure functions over the immutable expression tree; errors are raised, never printed
"""

from typing import Dict

from tokens import TokenType
from expressions import Binary, Expr, Grouping, Literal, Unary
from utilities import (
  BinaryOp,
  LoxValue,
  check_number_operand,
  is_truthy,
  lox_add,
  lox_div,
  lox_eq,
  lox_ge,
  lox_gt,
  lox_le,
  lox_lt,
  lox_mul,
  lox_ne,
  lox_sub,
  stringify,
)


BINARY_OPERATORS: Dict[TokenType, BinaryOp] = {
  TokenType.MINUS: lox_sub,
  TokenType.PLUS: lox_add,
  TokenType.SLASH: lox_div,
  TokenType.STAR: lox_mul,
  TokenType.GREATER: lox_gt,
  TokenType.GREATER_EQUAL: lox_ge,
  TokenType.LESS: lox_lt,
  TokenType.LESS_EQUAL: lox_le,
  TokenType.EQUAL_EQUAL: lox_eq,
  TokenType.BANG_EQUAL: lox_ne,
}


# ============================================================================
# EVALUATION FUNCTIONS
# ============================================================================

def eval_ast(expr: Expr, debug: bool = False) -> LoxValue:
  """
  Evaluate an expression tree bottom-up and return its runtime value.
  Raises LoxRuntimeError (LoxTypeError for operand mismatches).
  """
  if debug:
    print(f"Evaluating: {type(expr).__name__}")

  if isinstance(expr, Literal):
    return eval_literal(expr, debug)
  elif isinstance(expr, Grouping):
    return eval_grouping(expr, debug)
  elif isinstance(expr, Unary):
    return eval_unary(expr, debug)
  elif isinstance(expr, Binary):
    return eval_binary(expr, debug)
  raise TypeError(f"Not a Lox expression: {expr!r}")


def eval_literal(expr: Literal, debug: bool = False) -> LoxValue:
  """Evaluate literal"""
  return expr.value


def eval_grouping(expr: Grouping, debug: bool = False) -> LoxValue:
  """Evaluate parenthesized expression"""
  return eval_ast(expr.expression, debug)


def eval_unary(expr: Unary, debug: bool = False) -> LoxValue:
  """Evaluate `!` or `-` applied to its operand"""
  right = eval_ast(expr.right, debug)
  op = expr.operator

  if op.type is TokenType.BANG:
    return not is_truthy(right)
  if op.type is TokenType.MINUS:
    check_number_operand(op, right)
    return -float(right)
  raise ValueError(f"Invalid unary operator: {op.lexeme}")


def eval_binary(expr: Binary, debug: bool = False) -> LoxValue:
  """Evaluate both operands left to right, then apply the operator"""
  left = eval_ast(expr.left, debug)
  right = eval_ast(expr.right, debug)
  op = expr.operator

  handler = BINARY_OPERATORS.get(op.type)
  if handler is None:
    raise ValueError(f"Invalid binary operator: {op.lexeme}")
  result = handler(left, right, op)

  if debug:
    print(f"  {stringify(left)} {op.lexeme} {stringify(right)} => {stringify(result)}")
  return result


# ============================================================================
# INTERPRETER
# ============================================================================

class LoxInterpreter:
  """Evaluates parsed expressions; holds no state between calls"""

  def __init__(self, debug: bool = False):
    self.debug = debug

  def evaluate(self, expr: Expr) -> LoxValue:
    return eval_ast(expr, self.debug)

  def interpret(self, expr: Expr) -> str:
    """Evaluate and render the result as Lox prints it"""
    return stringify(self.evaluate(expr))


def create_interpreter(debug: bool = False) -> LoxInterpreter:
  """Factory function returning an interpreter"""
  return LoxInterpreter(debug=debug)


def create_debug_interpreter() -> LoxInterpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True)
