# lexer.py
# Hand-rolled lexer for the switch/case checker
#
# =============================================================================
#  LEXER IMPLEMENTATION: ONE MASTER REGEX, LOCAL RECOVERY
# =============================================================================
#
# The source language is a Python-flavoured scripting language with a C-style
# switch/case block bolted on. Newlines are statement separators, so they are
# emitted as tokens instead of being folded into whitespace.
#
# Scanning runs one anchored match of a compiled master regex per position.
# Named groups classify the match immediately; the group order is the
# priority order (comment, whitespace, newline, number, string, word,
# operator). A position the regex cannot match is an unexpected character:
# it is reported, skipped, and scanning resumes on the next character.
#
# The lexer never raises on input text. Malformed numbers and unterminated
# strings are reported and still produce a best-effort token, so the parser
# always receives a stream ending in exactly one EOF token.
# =============================================================================

import enum
import logging
import re
from typing import Dict, List, NamedTuple, Optional

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# TOKEN TYPES
# ---------------------------------------------------------------------------
class TokenType(enum.Enum):
    # Keywords
    SWITCH = "switch"
    CASE = "case"
    DEFAULT = "default"
    BREAK = "break"
    CONTINUE = "continue"
    PASS = "pass"
    IF = "if"
    WHILE = "while"
    FOR = "for"
    DEF = "def"
    CLASS = "class"
    AND = "and"
    OR = "or"
    NOT = "not"      # also produced by '!'

    # Literals
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    BENOUADFEL = "BENOUADFEL"   # honorary constant
    YACINE = "Yacine"           # honorary constant

    IDENTIFIER = "IDENTIFIER"

    # Operators
    ASSIGN = "="
    PLUS_ASSIGN = "+="
    MINUS_ASSIGN = "-="
    INCREMENT = "++"
    DECREMENT = "--"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    COMMA = ","
    DOT = "."
    COLON = ":"

    # Structure
    NEWLINE = "NEWLINE"
    EOF = "EOF"


# ---------------------------------------------------------------------------
# LOOKUP TABLES
# ---------------------------------------------------------------------------
KEYWORDS: Dict[str, TokenType] = {
    t.value: t
    for t in (
        TokenType.SWITCH, TokenType.CASE, TokenType.DEFAULT, TokenType.BREAK,
        TokenType.CONTINUE, TokenType.PASS, TokenType.IF, TokenType.WHILE,
        TokenType.FOR, TokenType.DEF, TokenType.CLASS, TokenType.AND,
        TokenType.OR, TokenType.NOT,
    )
}

HONORARY_CONSTANTS: Dict[str, TokenType] = {
    TokenType.BENOUADFEL.value: TokenType.BENOUADFEL,
    TokenType.YACINE.value: TokenType.YACINE,
}

BOOLEANS = frozenset({"True", "False"})

OPERATORS: Dict[str, TokenType] = {
    t.value: t
    for t in (
        TokenType.ASSIGN, TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN,
        TokenType.INCREMENT, TokenType.DECREMENT, TokenType.PLUS,
        TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE,
        TokenType.MODULO, TokenType.EQUAL, TokenType.NOT_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER,
        TokenType.GREATER_EQUAL, TokenType.LPAREN, TokenType.RPAREN,
        TokenType.LBRACKET, TokenType.RBRACKET, TokenType.LBRACE,
        TokenType.RBRACE, TokenType.COMMA, TokenType.DOT, TokenType.COLON,
    )
}
OPERATORS["!"] = TokenType.NOT

NEWLINE_LEXEME = "\\n"
EOF_LEXEME = ""

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
# Alternation order is priority order. Two-character operators come before
# their one-character prefixes so '==' never lexes as '=' '='.
_COMMENT    = r"\#[^\n]*"
_WHITESPACE = r"[ \t\r\f\v]+"
_NEWLINE    = r"\n"
_NUMBER     = r"\d+(?:\.\d+)?"
_STRING     = r"""(?P<QUOTE>["'])(?P<BODY>(?:(?!(?P=QUOTE))[^\\\n]|\\[^\n]?)*)(?P<CLOSE>(?P=QUOTE))?"""
_WORD       = r"[^\W\d]\w*"
_OPERATOR   = r"==|!=|<=|>=|\+=|-=|\+\+|--|[-+*/%<>=!(){}\[\],.:]"

_TOKEN_RE = re.compile(
    rf"(?P<COMMENT>{_COMMENT})|"
    rf"(?P<WHITESPACE>{_WHITESPACE})|"
    rf"(?P<NEWLINE>{_NEWLINE})|"
    rf"(?P<NUMBER>{_NUMBER})|"
    rf"(?P<STRING>{_STRING})|"
    rf"(?P<WORD>{_WORD})|"
    rf"(?P<OPERATOR>{_OPERATOR})"
)

# Anything glued to the end of a number: a second '.', a dangling '.', letters.
_NUMBER_TAIL_RE = re.compile(r"[\w.]+")


# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class Token(NamedTuple):
    """Immutable token record: (type, value, line, column), 1-based positions."""
    type: TokenType
    value: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column} {self.type.name} '{self.value}'"


# ---------------------------------------------------------------------------
# LEXER
# ---------------------------------------------------------------------------
class Lexer:
    """
    Single-pass tokenizer.

    All scan state (cursor, line counter, start offset of the current line,
    error list, token list) belongs to this instance. tokenize() scans once;
    later calls hand back the same list.
    """

    def __init__(self, source: str):
        if not isinstance(source, str):
            raise TypeError(f"source must be str, not {type(source).__name__}")
        self._source = source
        self._pos = 0
        self._line = 1
        self._line_start = 0
        self._errors: List[str] = []
        self._tokens: Optional[List[Token]] = None

    def errors(self) -> List[str]:
        return list(self._errors)

    def tokenize(self) -> List[Token]:
        if self._tokens is not None:
            return self._tokens

        tokens: List[Token] = []
        src = self._source
        n = len(src)

        while self._pos < n:
            m = _TOKEN_RE.match(src, self._pos)
            column = self._column()
            if m is None:
                self._error(f"unexpected character '{src[self._pos]}'", column)
                self._pos += 1
                continue

            kind = m.lastgroup
            end = m.end()

            if kind == "NEWLINE":
                tokens.append(Token(TokenType.NEWLINE, NEWLINE_LEXEME, self._line, column))
                self._line += 1
                self._line_start = end
            elif kind == "NUMBER":
                tokens.append(self._number(m.group(), column))
                tail = _NUMBER_TAIL_RE.match(src, end)
                if tail:
                    self._error(f"malformed number '{m.group()}{tail.group()}'", column)
                    end = tail.end()
            elif kind == "STRING":
                if m.group("CLOSE") is None:
                    self._error("unterminated string", column)
                tokens.append(Token(TokenType.STRING, m.group("BODY"), self._line, column))
            elif kind == "WORD":
                tokens.append(self._word(m.group(), column))
            elif kind == "OPERATOR":
                tokens.append(Token(OPERATORS[m.group()], m.group(), self._line, column))
            # COMMENT and WHITESPACE produce nothing

            self._pos = end

        tokens.append(Token(TokenType.EOF, EOF_LEXEME, self._line, self._column()))
        self._tokens = tokens
        logger.debug("lexed %d tokens, %d lexical errors", len(tokens), len(self._errors))
        return tokens

    # -----------------------------------------------------------------------
    # HELPERS
    # -----------------------------------------------------------------------
    def _column(self) -> int:
        return self._pos - self._line_start + 1

    def _error(self, message: str, column: int) -> None:
        entry = f"line {self._line}, column {column}: {message}"
        self._errors.append(entry)
        logger.debug("lexical error: %s", entry)

    def _number(self, text: str, column: int) -> Token:
        kind = TokenType.FLOAT if "." in text else TokenType.INTEGER
        return Token(kind, text, self._line, column)

    def _word(self, text: str, column: int) -> Token:
        if text in KEYWORDS:
            kind = KEYWORDS[text]
        elif text in HONORARY_CONSTANTS:
            kind = HONORARY_CONSTANTS[text]
        elif text in BOOLEANS:
            kind = TokenType.BOOLEAN
        else:
            kind = TokenType.IDENTIFIER
        return Token(kind, text, self._line, column)


def tokenize(source: str):
    """Convenience wrapper: returns (tokens, lexical_errors) for one fresh pass."""
    lexer = Lexer(source)
    tokens = lexer.tokenize()
    return tokens, lexer.errors()
