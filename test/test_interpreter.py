"""
Evaluator tests for the Lox expression core
"""

import math

import pytest
from interpreter import create_debug_interpreter, eval_ast
from expressions import Binary, Literal
from tokens import Token, TokenType
from error_handling import LoxRuntimeError, LoxTypeError
from utilities import is_equal, is_truthy, stringify


class TestArithmetic:
  """Test numeric operators"""

  def test_addition(self, evaluate):
    assert evaluate("1 + 2") == 3.0

  def test_precedence(self, evaluate):
    assert evaluate("2 + 3 * 4") == 14.0
    assert evaluate("(2 + 3) * 4") == 20.0
    assert evaluate("10 - 4 - 3") == 3.0

  def test_division(self, evaluate):
    assert evaluate("10 / 4") == 2.5

  def test_negation(self, evaluate):
    assert evaluate("-(3 - 5)") == 2.0
    assert evaluate("--7") == 7.0

  def test_division_by_zero_follows_floating_point(self, evaluate):
    assert evaluate("1 / 0") == math.inf
    assert evaluate("-1 / 0") == -math.inf
    assert evaluate("1 / -0") == -math.inf
    assert math.isnan(evaluate("0 / 0"))

  def test_string_concatenation(self, evaluate):
    assert evaluate('"1" + "2"') == "12"
    assert evaluate('"" + ""') == ""


class TestTypeErrors:
  """Test operand type checks"""

  def test_bool_plus_number(self, evaluate):
    with pytest.raises(LoxTypeError) as exc_info:
      evaluate("true + 1")
    assert exc_info.value.message == "Operands must be two numbers or two strings."
    assert exc_info.value.line == 1
    assert exc_info.value.kind == "TypeError"

  def test_string_plus_number(self, evaluate):
    with pytest.raises(LoxTypeError):
      evaluate('"a" + 1')

  def test_negate_string(self, evaluate):
    with pytest.raises(LoxTypeError, match="Operand must be a number"):
      evaluate('-"a"')

  @pytest.mark.parametrize("source", ['"a" - "b"', "nil * 2", '4 / "2"', "true - false"])
  def test_arithmetic_requires_numbers(self, evaluate, source):
    with pytest.raises(LoxTypeError, match="Operands must be numbers"):
      evaluate(source)

  @pytest.mark.parametrize("source", ['"a" < "b"', "nil >= 1", "true > false"])
  def test_comparison_requires_numbers(self, evaluate, source):
    with pytest.raises(LoxTypeError):
      evaluate(source)

  def test_error_carries_operator_line(self, evaluate):
    with pytest.raises(LoxRuntimeError) as exc_info:
      evaluate('1\n+\n"a"')
    assert exc_info.value.line == 2
    assert exc_info.value.location == " at '+'"

  def test_error_inside_grouping(self, evaluate):
    with pytest.raises(LoxTypeError):
      evaluate("1 + (2 * nil)")


class TestComparisonAndEquality:
  """Test comparison, equality and truthiness"""

  def test_comparisons(self, evaluate):
    assert evaluate("1 < 2") is True
    assert evaluate("2 <= 2") is True
    assert evaluate("1 > 2") is False
    assert evaluate("3 >= 4") is False

  def test_equality_is_type_discriminating(self, evaluate):
    assert evaluate("nil == nil") is True
    assert evaluate("0 == false") is False
    assert evaluate("1 == 1.0") is True
    assert evaluate('"1" == 1') is False
    assert evaluate("nil == false") is False
    assert evaluate('"a" == "a"') is True
    assert evaluate('"a" != "b"') is True

  def test_nan_is_not_equal_to_itself(self, evaluate):
    assert evaluate("0 / 0 == 0 / 0") is False

  def test_logical_not(self, evaluate):
    assert evaluate("!nil") is True
    assert evaluate("!false") is True
    assert evaluate("!0") is False
    assert evaluate('!""') is False
    assert evaluate("!true") is False

  def test_spec_expression(self, evaluate):
    assert evaluate("1 - (2 * 3) < 4 == false") is False


class TestValueHelpers:
  """Test the value utilities directly"""

  def test_truthiness(self):
    assert is_truthy(None) is False
    assert is_truthy(False) is False
    assert is_truthy(0.0) is True
    assert is_truthy("") is True

  def test_is_equal(self):
    assert is_equal(None, None)
    assert not is_equal(True, 1.0)
    assert not is_equal(0.0, False)
    assert is_equal(1, 1.0)

  def test_stringify(self):
    assert stringify(None) == "nil"
    assert stringify(True) == "true"
    assert stringify(3.0) == "3"
    assert stringify(-0.0) == "-0"
    assert stringify(45.67) == "45.67"
    assert stringify(math.inf) == "inf"
    assert stringify(-math.inf) == "-inf"
    assert stringify(math.nan) == "NaN"
    assert stringify("text") == "text"


class TestInterpreterObject:
  """Test the interpreter factory API"""

  def test_interpret_renders_value(self, parser, interpreter):
    assert interpreter.interpret(parser.parse_expression("1 + 2")) == "3"
    assert interpreter.interpret(parser.parse_expression("nil")) == "nil"
    assert interpreter.interpret(parser.parse_expression("5 / 2")) == "2.5"

  def test_hand_built_tree(self):
    plus = Token(TokenType.PLUS, "+", None, 1)
    assert eval_ast(Binary(Literal(1.0), plus, Literal(2.0))) == 3.0

  def test_unknown_node(self):
    with pytest.raises(TypeError):
      eval_ast("not a node")

  def test_debug_trace(self, parser, capsys):
    create_debug_interpreter().evaluate(parser.parse_expression("1 + 2"))
    out = capsys.readouterr().out
    assert "Evaluating: Binary" in out
    assert "1 + 2 => 3" in out

  def test_tree_is_reusable(self, parser, interpreter):
    expr = parser.parse_expression("(1 + 2) * 3")
    assert interpreter.evaluate(expr) == interpreter.evaluate(expr) == 9.0
