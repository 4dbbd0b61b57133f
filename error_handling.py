"""
Error handling for the Lox front end and evaluator
Every error carries the 1-based source line it originated from
"""

from typing import Dict, List, Optional, Tuple

from pyparsing import col, line, lineno
from termcolor import colored

from tokens import Token, TokenType


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_error(
    kind: str,
    message: str,
    line_num: int,
    location: str = "",
    offset: Optional[int] = None,
    context: Optional[str] = None
) -> Dict:
    """Create an immutable error structure"""
    return {
        'kind': kind,
        'message': message,
        'line': line_num,
        'location': location,
        'offset': offset,
        'context': context,
    }


def format_error(error: Dict) -> str:
    """Format an error as `[line N] Error<location>: <message>`"""
    error_msg = f"[line {error['line']}] Error{error['location']}: {error['message']}"
    if error['context']:
        error_msg += f"\n{error['context']}"
    return error_msg


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def error_location(token: Token) -> str:
    """Describe where in the token stream an error occurred"""
    if token.type is TokenType.EOF:
        return " at end"
    return f" at '{token.lexeme}'"


def locate(source_text: str, offset: int) -> Tuple[int, int, str]:
    """Map a source offset to (line number, column, line text)"""
    offset = max(0, min(offset, len(source_text)))
    return lineno(offset, source_text), col(offset, source_text), line(offset, source_text)


def get_context_lines(source_text: str, offset: int, context_lines: int = 0) -> str:
    """Get the source lines around an offset with a caret under the error column"""
    line_num, col_num, _ = locate(source_text, offset)
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        line_prefix = f"{i+1:4d} | "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:
            context_parts.append(f"{'':4} | {' ' * (col_num - 1)}^")

    return '\n'.join(context_parts)


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class LoxError(Exception):
    """Base class for every error the Lox core reports"""
    kind = "Error"

    def __init__(self, message: str, line: int, location: str = "", offset: Optional[int] = None):
        self.message = message
        self.line = line
        self.location = location
        self.offset = offset
        super().__init__(message)

    def to_dict(self, context: Optional[str] = None) -> Dict:
        return make_error(self.kind, self.message, self.line, self.location, self.offset, context)

    def __str__(self) -> str:
        return format_error(self.to_dict())


class LoxScanError(LoxError):
    """Lexical error raised by the scanner"""
    kind = "ScanError"


class UnexpectedCharacterError(LoxScanError):
    kind = "UnexpectedCharacter"

    def __init__(self, char: str, line: int, offset: Optional[int] = None):
        self.char = char
        super().__init__(f"Unexpected character '{char}'.", line, "", offset)


class UnterminatedStringError(LoxScanError):
    """Raised at the line where the unterminated string began"""
    kind = "UnterminatedString"

    def __init__(self, line: int, offset: Optional[int] = None):
        super().__init__("Unterminated string.", line, "", offset)


class LoxParseError(LoxError):
    """Syntax error raised by the parser"""
    kind = "ParseError"

    def __init__(self, token: Token, message: str):
        self.token = token
        super().__init__(message, token.line, error_location(token), token.offset)


class ExpectedTokenError(LoxParseError):
    kind = "ExpectedToken"

    def __init__(self, token: Token, expected: TokenType, message: str):
        self.expected = expected
        super().__init__(token, message)


class UnexpectedExpressionError(LoxParseError):
    kind = "UnexpectedExpression"

    def __init__(self, token: Token, message: str = "Expect expression."):
        super().__init__(token, message)


class LoxRuntimeError(LoxError):
    """Error raised while evaluating an expression"""
    kind = "RuntimeError"

    def __init__(self, token: Token, message: str):
        self.token = token
        super().__init__(message, token.line, error_location(token), token.offset)


class LoxTypeError(LoxRuntimeError):
    """Operand types do not fit the operator"""
    kind = "TypeError"


# ============================================================================
# REPORTING
# ============================================================================

class LoxErrorHandler:
    """Renders Lox errors against the source text they came from"""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, source_text: str, filename: str = "<input>", use_color: bool = True):
        self.source_text = source_text
        self.filename = filename
        self.use_color = use_color

    def _paint(self, text: str, color: Optional[str] = None) -> str:
        if not self.use_color:
            return text
        return colored(text, color, attrs=["bold"])

    def context(self, error: LoxError) -> Optional[str]:
        if error.offset is None or not self.source_text:
            return None
        return get_context_lines(self.source_text, error.offset)

    def format(self, error: LoxError) -> str:
        """Format an error with filename, kind and a source excerpt"""
        header = self._paint(f"{self.filename}: ")
        header += self._paint(f"{error.kind}: ", self.ERROR)
        header += str(error)
        context = self.context(error)
        if context:
            header += "\n" + context
        return header

    def format_all(self, errors: List[LoxError]) -> str:
        return "\n".join(self.format(error) for error in errors)
