"""
Error formatting and reporting tests
"""

import pytest
from scanning import scan
from parsing import parse
from tokens import Token, TokenType
from error_handling import (
    ExpectedTokenError, LoxError, LoxErrorHandler, LoxParseError, LoxScanError,
    LoxTypeError, UnexpectedCharacterError, UnexpectedExpressionError,
    UnterminatedStringError, error_location, format_error, get_context_lines,
    locate, make_error,
)


class TestErrorStructures:
  """Test error dicts and their formatting"""

  def test_format_error(self):
    error = make_error("ExpectedToken", "Expect ')' after expression.", 3, " at end")
    assert format_error(error) == "[line 3] Error at end: Expect ')' after expression."

  def test_format_error_with_context(self):
    error = make_error("TypeError", "Operands must be numbers.", 1, context="   1 | x")
    assert format_error(error).splitlines()[1] == "   1 | x"

  def test_error_location(self):
    assert error_location(Token(TokenType.EOF, "", None, 1)) == " at end"
    assert error_location(Token(TokenType.PLUS, "+", None, 1)) == " at '+'"

  def test_parse_error_string(self):
    with pytest.raises(UnexpectedExpressionError) as exc_info:
      parse(scan(")"))
    assert str(exc_info.value) == "[line 1] Error at ')': Expect expression."

  def test_scan_error_string(self):
    with pytest.raises(UnterminatedStringError) as exc_info:
      scan('"open')
    assert str(exc_info.value) == "[line 1] Error: Unterminated string."

  def test_hierarchy(self):
    assert issubclass(UnexpectedCharacterError, LoxScanError)
    assert issubclass(UnterminatedStringError, LoxScanError)
    assert issubclass(ExpectedTokenError, LoxParseError)
    assert issubclass(UnexpectedExpressionError, LoxParseError)
    for cls in (LoxScanError, LoxParseError, LoxTypeError):
      assert issubclass(cls, LoxError)

  def test_kinds(self):
    assert UnexpectedCharacterError.kind == "UnexpectedCharacter"
    assert UnterminatedStringError.kind == "UnterminatedString"
    assert ExpectedTokenError.kind == "ExpectedToken"
    assert UnexpectedExpressionError.kind == "UnexpectedExpression"
    assert LoxTypeError.kind == "TypeError"


class TestSourceContext:
  """Test mapping offsets back to the source"""

  def test_locate(self):
    assert locate("ab\ncd", 3) == (2, 1, "cd")
    assert locate("ab\ncd", 1) == (1, 2, "ab")

  def test_context_caret(self):
    lines = get_context_lines("1 + @", 4).splitlines()
    assert lines[0] == "   1 | 1 + @"
    assert lines[1].index("^") == lines[0].index("@")

  def test_context_lines_around(self):
    lines = get_context_lines("a\nb\nc", 2, context_lines=1).splitlines()
    assert len(lines) == 4
    assert lines[1].endswith("| b")

  def test_handler_format_without_color(self):
    source = "1 +\n  @"
    with pytest.raises(UnexpectedCharacterError) as exc_info:
      scan(source)
    handler = LoxErrorHandler(source, "demo.lox", use_color=False)
    text = handler.format(exc_info.value)
    first, code, caret = text.splitlines()
    assert first == "demo.lox: UnexpectedCharacter: [line 2] Error: Unexpected character '@'."
    assert code == "   2 |   @"
    assert caret.index("^") == code.index("@")

  def test_handler_without_offset(self):
    handler = LoxErrorHandler("", use_color=False)
    error = LoxError("boom", 4)
    assert handler.format(error) == "<input>: Error: [line 4] Error: boom"

  def test_format_all(self):
    handler = LoxErrorHandler("x", use_color=False)
    errors = [LoxError("one", 1), LoxError("two", 2)]
    assert len(handler.format_all(errors).splitlines()) == 2
