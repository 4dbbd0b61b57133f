"""
Lox expression parser
Recursive descent over the token list, one method per precedence level

Grammar, lowest precedence first:

    expression → equality ;
    equality   → comparison ( ( "!=" | "==" ) comparison )* ;
    comparison → term ( ( ">" | ">=" | "<" | "<=" ) term )* ;
    term       → factor ( ( "-" | "+" ) factor )* ;
    factor     → unary ( ( "/" | "*" ) unary )* ;
    unary      → ( "!" | "-" ) unary | primary ;
    primary    → NUMBER | STRING | "true" | "false" | "nil"
               | "(" expression ")" ;
"""

from typing import Callable, List, Tuple

from tokens import STATEMENT_KEYWORDS, Token, TokenType
from expressions import Binary, Expr, Grouping, Literal, Unary, print_ast
from error_handling import (
    ExpectedTokenError, LoxParseError, UnexpectedExpressionError,
)
from scanning import scan


EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPERATORS = (
    TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
)
TERM_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
FACTOR_OPERATORS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

LITERAL_KEYWORDS = {
    TokenType.FALSE: False,
    TokenType.TRUE: True,
    TokenType.NIL: None,
}


class LoxParser:
    """Parser over a borrowed token list; the cursor only moves forward"""

    def __init__(self, tokens: List[Token], debug: bool = False):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.current = 0
        self.debug = debug

    def parse(self) -> Expr:
        """Parse exactly one expression, optionally followed by `;`"""
        expr = self.expression()
        self.match(TokenType.SEMICOLON)
        if not self.is_at_end():
            raise ExpectedTokenError(self.peek(), TokenType.EOF, "Expect end of expression.")
        if self.debug:
            print(f"Parsed: {print_ast(expr)}")
        return expr

    def parse_all(self) -> Tuple[List[Expr], List[LoxParseError]]:
        """
        Parse a `;`-separated sequence of expressions, recovering from errors

        Returns:
            (expressions, errors): every well-formed expression and every
            diagnostic, in source order
        """
        expressions: List[Expr] = []
        errors: List[LoxParseError] = []

        while not self.is_at_end():
            try:
                expr = self.expression()
                if not self.match(TokenType.SEMICOLON) and not self.is_at_end():
                    raise ExpectedTokenError(
                        self.peek(), TokenType.SEMICOLON, "Expect ';' after expression."
                    )
                expressions.append(expr)
            except LoxParseError as e:
                if self.debug:
                    print(f"Recovering from: {e}")
                errors.append(e)
                self.synchronize()

        return expressions, errors

    # ---- grammar rules ----

    def expression(self) -> Expr:
        return self.equality()

    def equality(self) -> Expr:
        return self._left_associative(self.comparison, EQUALITY_OPERATORS)

    def comparison(self) -> Expr:
        return self._left_associative(self.term, COMPARISON_OPERATORS)

    def term(self) -> Expr:
        return self._left_associative(self.factor, TERM_OPERATORS)

    def factor(self) -> Expr:
        return self._left_associative(self.unary, FACTOR_OPERATORS)

    def _left_associative(self, operand: Callable[[], Expr], operators: Tuple[TokenType, ...]) -> Expr:
        expr = operand()

        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def unary(self) -> Expr:
        if self.match(*UNARY_OPERATORS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)

        return self.primary()

    def primary(self) -> Expr:
        if self.match(*LITERAL_KEYWORDS):
            return Literal(LITERAL_KEYWORDS[self.previous().type])

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise UnexpectedExpressionError(self.peek())

    # ---- error recovery ----

    def synchronize(self) -> None:
        """Discard tokens until just past a `;` or before a statement keyword"""
        self.advance()

        while not self.is_at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_KEYWORDS:
                return
            self.advance()

    # ---- cursor primitives ----

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise ExpectedTokenError(self.peek(), token_type, message)

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type is token_type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse(tokens: List[Token], debug: bool = False) -> Expr:
    """Parse a token list into one expression tree"""
    return LoxParser(tokens, debug).parse()


class LoxFrontEnd:
    """Main Lox front end combining scanner and parser"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize Lox source code"""
        return scan(text, self.debug)

    def parse_expression(self, text: str) -> Expr:
        """Parse a single Lox expression"""
        return parse(self.tokenize(text), self.debug)

    def parse_program(self, text: str) -> Tuple[List[Expr], List[LoxParseError]]:
        """Parse `;`-separated expressions, collecting every parse error"""
        return LoxParser(self.tokenize(text), self.debug).parse_all()

    def parse_file(self, filepath: str) -> Tuple[List[Expr], List[LoxParseError]]:
        """Parse a Lox source file"""
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse_program(content)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> LoxFrontEnd:
    """Create a Lox front end"""
    return LoxFrontEnd(debug=debug)


def create_debug_parser() -> LoxFrontEnd:
    """Create a Lox front end with debug enabled"""
    return LoxFrontEnd(debug=True)
