"""
Lox scanner
Turns source text into a token list, one character of lookahead at a time
"""

from typing import Any, List, Optional

from tokens import (
    KEYWORDS, ONE_OR_TWO_CHAR_TOKENS, SINGLE_CHAR_TOKENS,
    Token, TokenType, make_eof,
)
from error_handling import UnexpectedCharacterError, UnterminatedStringError


def is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def is_alpha(char: str) -> bool:
    return 'a' <= char <= 'z' or 'A' <= char <= 'Z' or char == '_'


def is_alphanumeric(char: str) -> bool:
    return is_alpha(char) or is_digit(char)


class LoxScanner:
    """Single-use scanner over one source string"""

    def __init__(self, source: str, debug: bool = False):
        self.source = source
        self.debug = debug
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source; the result always ends with one EOF token"""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(make_eof(self.line, self.current))
        if self.debug:
            print(f"Scanned {len(self.tokens)} tokens over {self.line} line(s)")
        return self.tokens

    def scan_token(self) -> None:
        char = self.advance()

        if char in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[char])
        elif char in ONE_OR_TWO_CHAR_TOKENS:
            with_equal, alone = ONE_OR_TWO_CHAR_TOKENS[char]
            self.add_token(with_equal if self.match('=') else alone)
        elif char == '/':
            if self.match('/'):
                # A comment goes until the end of the line
                while self.peek() != '\n' and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
        elif char in (' ', '\r', '\t'):
            pass
        elif char == '\n':
            self.line += 1
        elif char == '"':
            self.string()
        elif is_digit(char):
            self.number()
        elif is_alpha(char):
            self.identifier()
        else:
            raise UnexpectedCharacterError(char, self.line, self.start)

    def string(self) -> None:
        start_line = self.line
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()

        if self.is_at_end():
            raise UnterminatedStringError(start_line, self.start)

        # The closing quote
        self.advance()
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self) -> None:
        while is_digit(self.peek()):
            self.advance()

        # Only a '.' followed by a digit belongs to the number
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self) -> None:
        while is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    # ---- cursor primitives ----

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def add_token(self, token_type: TokenType, literal: Optional[Any] = None) -> None:
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self.line, self.start))


def scan(source: str, debug: bool = False) -> List[Token]:
    """Scan Lox source text into tokens"""
    return LoxScanner(source, debug).scan_tokens()
