"""
Utilities module for the Lox evaluator
Runtime value helpers and operator factories shared by the interpreter and printer
"""

from typing import Any, Callable
import math
import operator

from tokens import Token
from error_handling import LoxTypeError


# Runtime values are the closed set None (nil), bool, float and str
LoxValue = Any

BinaryOp = Callable[[LoxValue, LoxValue, Token], LoxValue]


# ==================== TYPE CHECKING UTILITIES ====================

def is_number(value: LoxValue) -> bool:
  """
  Check if value is a Lox number

  bool is a subclass of int in Python, so it must be excluded explicitly.
  """
  return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string(value: LoxValue) -> bool:
  return isinstance(value, str)


def type_name(value: LoxValue) -> str:
  """Lox-facing name of a runtime value's type"""
  if value is None:
    return "Nil"
  if isinstance(value, bool):
    return "Bool"
  if is_number(value):
    return "Number"
  if is_string(value):
    return "String"
  return type(value).__name__


# ==================== VALUE SEMANTICS ====================

def is_truthy(value: LoxValue) -> bool:
  """Only nil and false are falsy"""
  if value is None:
    return False
  if isinstance(value, bool):
    return value
  return True


def is_equal(left: LoxValue, right: LoxValue) -> bool:
  """
  Type-discriminating equality

  Args:
    left: Left operand
    right: Right operand

  Returns:
    True only when both values have the same Lox type and compare equal.
    Nil equals only nil. Python's 0 == False does not apply here.
  """
  if left is None and right is None:
    return True
  if left is None or right is None:
    return False
  if type_name(left) != type_name(right):
    return False
  return left == right


def stringify(value: LoxValue) -> str:
  """
  Render a runtime value the way Lox prints it

  Examples:
    stringify(None) -> "nil"
    stringify(3.0) -> "3"
    stringify(45.67) -> "45.67"
    stringify(True) -> "true"
  """
  if value is None:
    return "nil"
  if isinstance(value, bool):
    return "true" if value else "false"
  if is_number(value):
    number = float(value)
    if math.isnan(number):
      return "NaN"
    if math.isinf(number):
      return "inf" if number > 0 else "-inf"
    if number.is_integer():
      return f"{number:.0f}"
    return repr(number)
  return str(value)


# ==================== OPERAND VALIDATION ====================

def check_number_operand(op: Token, operand: LoxValue) -> None:
  if not is_number(operand):
    raise LoxTypeError(op, "Operand must be a number.")


def check_number_operands(op: Token, left: LoxValue, right: LoxValue) -> None:
  if not (is_number(left) and is_number(right)):
    raise LoxTypeError(op, "Operands must be numbers.")


# ==================== ARITHMETIC ====================

def lox_divide(left: float, right: float) -> float:
  """IEEE-754 division: x/0 is a signed infinity and 0/0 is NaN"""
  if right == 0:
    if left == 0 or math.isnan(left):
      return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)
  return left / right


def lox_add(left: LoxValue, right: LoxValue, op: Token) -> LoxValue:
  """`+` sums two numbers or concatenates two strings"""
  if is_number(left) and is_number(right):
    return float(left) + float(right)
  if is_string(left) and is_string(right):
    return left + right
  raise LoxTypeError(op, "Operands must be two numbers or two strings.")


# ==================== BINARY OPERATION FACTORIES ====================

def binary_arithmetic_op(op: Callable[[float, float], float]) -> BinaryOp:
  """
  Factory for binary arithmetic operations on numbers

  Args:
    op: Python operator function (e.g., operator.sub)

  Returns:
    Function taking (left, right, operator token) and returning a number

  Examples:
    lox_sub = binary_arithmetic_op(operator.sub)
    lox_sub(3.0, 1.0, minus_token) -> 2.0
  """
  def arithmetic(left: LoxValue, right: LoxValue, token: Token) -> float:
    check_number_operands(token, left, right)
    return op(float(left), float(right))

  return arithmetic


def binary_comparison_op(op: Callable[[float, float], bool]) -> BinaryOp:
  """Factory for ordering comparisons, defined on numbers only"""
  def comparison(left: LoxValue, right: LoxValue, token: Token) -> bool:
    check_number_operands(token, left, right)
    return op(float(left), float(right))

  return comparison


def binary_equality_op(negate: bool) -> BinaryOp:
  """Factory for `==`/`!=`, which never fail"""
  def equality(left: LoxValue, right: LoxValue, token: Token) -> bool:
    return is_equal(left, right) != negate

  return equality


lox_sub = binary_arithmetic_op(operator.sub)
lox_mul = binary_arithmetic_op(operator.mul)
lox_div = binary_arithmetic_op(lox_divide)
lox_gt = binary_comparison_op(operator.gt)
lox_ge = binary_comparison_op(operator.ge)
lox_lt = binary_comparison_op(operator.lt)
lox_le = binary_comparison_op(operator.le)
lox_eq = binary_equality_op(negate=False)
lox_ne = binary_equality_op(negate=True)
