# switch_parser.py
# Recursive-descent validator for the switch/case language
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT, VALIDATE ONLY
# =============================================================================
#
# One method per grammar rule, no tree is built. The parser walks the token
# list produced by lexer.Lexer and records diagnostics as it goes:
#
#   Program          ::= Statement*
#   Statement        ::= SwitchStatement | AssignmentOrExpr | BREAK | CONTINUE
#                      | PASS | NEWLINE | IgnoredConstruct
#   SwitchStatement  ::= 'switch' '(' Expression ')' '{' CaseClause* DefaultClause? '}'
#   CaseClause       ::= 'case' Expression ':' Statement* ['break']
#   DefaultClause    ::= 'default' ':' Statement* ['break']
#   AssignmentOrExpr ::= IDENTIFIER ( ('='|'+='|'-=') Expression | ('++'|'--') | AccessSuffix* )
#   Expression       ::= LogicalOr
#   LogicalOr        ::= LogicalAnd ('or' LogicalAnd)*
#   LogicalAnd       ::= Equality ('and' Equality)*
#   Equality         ::= Comparison (('=='|'!=') Comparison)*
#   Comparison       ::= Term (('<'|'<='|'>'|'>=') Term)*
#   Term             ::= Factor (('+'|'-') Factor)*
#   Factor           ::= Unary (('*'|'/'|'%') Unary)*
#   Unary            ::= ('!'|'-'|'++'|'--') Unary | Primary
#   Primary          ::= Literal | IDENTIFIER AccessSuffix* | '(' Expression ')'
#                      | '[' [Expression (',' Expression)*] ']'
#   AccessSuffix     ::= '.' IDENTIFIER | '[' Expression ']' | '(' ArgumentList ')'
#   ArgumentList     ::= [Expression (',' Expression)*]
#
# Error model:
# 1. The first diagnosed error clears the validity flag for the whole pass.
# 2. Every loop re-tests the flag, so the cursor freezes soon after the first
#    error. Only the first diagnostic is reliable; later ones may be echoes.
# 3. Nothing is raised. parse() returns the verdict, errors() the messages.
#
# if / while / for / def / class are not analysed. Their text is skipped by
# a brace/paren depth scan that stops at the next 'switch' or at an
# identifier that starts a line, so switch blocks after them still get
# checked.
# =============================================================================

import logging
from typing import Callable, Collection, List, Optional

from lexer import Token, TokenType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
NESTING_LIMIT_DEFAULT = 32   # parens, brackets, calls, unary chains and switches combined

# ---------------------------------------------------------------------------
# TOKEN CLASSES
# ---------------------------------------------------------------------------
IGNORED_KEYWORDS = frozenset({
    TokenType.IF, TokenType.WHILE, TokenType.FOR, TokenType.DEF, TokenType.CLASS,
})

LITERAL_TYPES = frozenset({
    TokenType.INTEGER, TokenType.FLOAT, TokenType.STRING, TokenType.BOOLEAN,
    TokenType.BENOUADFEL, TokenType.YACINE,
})

SIMPLE_STATEMENTS = frozenset({TokenType.BREAK, TokenType.CONTINUE, TokenType.PASS})

ASSIGN_OPS = frozenset({TokenType.ASSIGN, TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN})
STEP_OPS = frozenset({TokenType.INCREMENT, TokenType.DECREMENT})
UNARY_OPS = frozenset({
    TokenType.NOT, TokenType.MINUS, TokenType.INCREMENT, TokenType.DECREMENT,
})
SUFFIX_STARTS = frozenset({TokenType.DOT, TokenType.LBRACKET, TokenType.LPAREN})

EQUALITY_OPS = frozenset({TokenType.EQUAL, TokenType.NOT_EQUAL})
COMPARISON_OPS = frozenset({
    TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL,
})
TERM_OPS = frozenset({TokenType.PLUS, TokenType.MINUS})
FACTOR_OPS = frozenset({TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO})


# ---------------------------------------------------------------------------
# PARSER
# ---------------------------------------------------------------------------
class Parser:
    """
    Validating recursive-descent parser over a finished token list.

    State is (cursor index, validity flag) plus the diagnostics gathered so
    far, all held by this instance. Create one Parser per pass.
    """

    def __init__(self, tokens: List[Token], max_depth: int = NESTING_LIMIT_DEFAULT):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError("token stream must end with an EOF token")
        self.tokens = tokens
        self.index = 0
        self.current = tokens[0]
        self.valid = True
        self._errors: List[str] = []
        self._notices: List[str] = []
        self._verdict: Optional[bool] = None
        self.max_depth = max_depth
        self.depth = 0

    # -----------------------------------------------------------------------
    # PUBLIC API
    # -----------------------------------------------------------------------
    def parse(self) -> bool:
        """Validate the whole stream. True iff EOF is reached with no error."""
        if self._verdict is not None:
            return self._verdict
        self.program()
        self._verdict = self.current.type is TokenType.EOF and self.valid
        logger.info(
            "syntax check %s (%d errors, %d skipped constructs)",
            "passed" if self._verdict else "failed",
            len(self._errors),
            len(self._notices),
        )
        return self._verdict

    def errors(self) -> List[str]:
        return list(self._errors)

    def notices(self) -> List[str]:
        return list(self._notices)

    # -----------------------------------------------------------------------
    # CURSOR UTILITIES
    # -----------------------------------------------------------------------
    def check(self, *kinds: TokenType) -> bool:
        return self.current.type in kinds

    def advance(self) -> None:
        # The cursor parks on EOF.
        if self.index < len(self.tokens) - 1:
            self.index += 1
            self.current = self.tokens[self.index]

    def skip_newlines(self) -> None:
        while self.current.type is TokenType.NEWLINE:
            self.advance()

    def expect(self, kind: TokenType, message: str) -> bool:
        """Consume a token of the given type or record message and return False."""
        if self.current.type is kind:
            self.advance()
            return True
        self.error(message)
        return False

    def error(self, message: str) -> None:
        tok = self.current
        entry = f"line {tok.line}, column {tok.column}: {message} (found '{tok.value}')"
        self._errors.append(entry)
        self.valid = False
        logger.debug("syntax error: %s", entry)

    def nested(self, rule: Callable[[], None]) -> None:
        """
        Run a rule one nesting level deeper.

        Past max_depth the rule is not entered and "nesting too deep" is
        recorded instead, so deeply nested input ends in a diagnostic rather
        than exhausting the interpreter stack.
        """
        if self.depth >= self.max_depth:
            self.error("nesting too deep")
            return
        self.depth += 1
        try:
            rule()
        finally:
            self.depth -= 1

    # -----------------------------------------------------------------------
    # STATEMENTS
    # -----------------------------------------------------------------------
    def program(self) -> None:
        self.skip_newlines()
        while not self.check(TokenType.EOF) and self.valid:
            self.statement()
            self.skip_newlines()

    def statement(self) -> None:
        # Blank lines are the NEWLINE statement.
        self.skip_newlines()
        kind = self.current.type

        if kind is TokenType.SWITCH:
            self.nested(self.switch_statement)
        elif kind is TokenType.IDENTIFIER:
            self.assignment_or_expression()
        elif kind in SIMPLE_STATEMENTS:
            self.advance()
            self.skip_newlines()
        elif kind in IGNORED_KEYWORDS:
            self.skip_ignored_construct()
        elif kind is TokenType.EOF:
            return
        elif kind is TokenType.CASE:
            self.error("'case' outside a switch block or after 'default'")
            self.advance()
        elif kind is TokenType.DEFAULT:
            self.error("'default' outside a switch block or repeated")
            self.advance()
        elif kind is TokenType.RBRACE:
            self.error("unmatched '}'")
            self.advance()
        else:
            self.error("unrecognized statement")
            self.advance()

    def skip_ignored_construct(self) -> None:
        """
        Step over an if/while/for/def/class construct without analysing it.

        Depth of '{}' and '()' is tracked from the keyword on. The scan stops
        when the brace depth goes negative (a closing brace that belongs to an
        enclosing block, left unconsumed) or, at depth zero, on a 'switch'
        keyword or an identifier directly after a NEWLINE.
        """
        keyword = self.current
        notice = (
            f"line {keyword.line}, column {keyword.column}: "
            f"'{keyword.value}' statement skipped (only switch/case is analysed)"
        )
        self._notices.append(notice)
        logger.info(notice)

        self.advance()
        brace_depth = 0
        paren_depth = 0

        while not self.check(TokenType.EOF) and self.valid:
            kind = self.current.type
            if kind is TokenType.LBRACE:
                brace_depth += 1
            elif kind is TokenType.RBRACE:
                brace_depth -= 1
                if brace_depth < 0:
                    break
            elif kind is TokenType.LPAREN:
                paren_depth += 1
            elif kind is TokenType.RPAREN:
                paren_depth -= 1

            if brace_depth == 0 and paren_depth == 0:
                if kind is TokenType.SWITCH:
                    break
                if (kind is TokenType.IDENTIFIER
                        and self.tokens[self.index - 1].type is TokenType.NEWLINE):
                    break

            self.advance()

    def switch_statement(self) -> None:
        if not self.expect(TokenType.SWITCH, "'switch' expected"):
            return
        if not self.expect(TokenType.LPAREN, "'(' expected after 'switch'"):
            return
        self.expression()
        if not self.expect(TokenType.RPAREN, "')' expected after the switch expression"):
            return
        if not self.expect(TokenType.LBRACE, "'{' expected to open the switch block"):
            return

        self.skip_newlines()

        if not self.check(TokenType.CASE, TokenType.DEFAULT):
            self.error("at least one case/default expected")

        while self.check(TokenType.CASE) and self.valid:
            self.case_clause()

        if self.check(TokenType.DEFAULT) and self.valid:
            self.default_clause()

        self.expect(TokenType.RBRACE, "'}' expected to close the switch block")

    def case_clause(self) -> None:
        if not self.expect(TokenType.CASE, "'case' expected"):
            return
        self.expression()
        if not self.expect(TokenType.COLON, "':' expected after the case value"):
            return
        self.clause_body(TokenType.CASE, TokenType.DEFAULT, TokenType.RBRACE, TokenType.EOF)

    def default_clause(self) -> None:
        if not self.expect(TokenType.DEFAULT, "'default' expected"):
            return
        if not self.expect(TokenType.COLON, "':' expected after 'default'"):
            return
        self.clause_body(TokenType.RBRACE, TokenType.EOF)

    def clause_body(self, *terminators: TokenType) -> None:
        # Statements up to a terminator; a 'break' closes the clause.
        self.skip_newlines()
        while not self.check(*terminators) and self.valid:
            if self.check(TokenType.BREAK):
                self.advance()
                self.skip_newlines()
                return
            self.statement()
            self.skip_newlines()

    def assignment_or_expression(self) -> None:
        if not self.expect(TokenType.IDENTIFIER, "identifier expected"):
            return
        if self.check(*ASSIGN_OPS):
            self.advance()
            self.expression()
        elif self.check(*STEP_OPS):
            self.advance()
        else:
            self.access_suffixes()

    def access_suffixes(self) -> None:
        while self.check(*SUFFIX_STARTS) and self.valid:
            if self.check(TokenType.DOT):
                self.advance()
                self.expect(TokenType.IDENTIFIER, "identifier expected after '.'")
            elif self.check(TokenType.LBRACKET):
                self.advance()
                self.nested(self.expression)
                self.expect(TokenType.RBRACKET, "']' expected")
            else:
                self.advance()
                self.nested(self.argument_list)
                self.expect(TokenType.RPAREN, "')' expected")

    # -----------------------------------------------------------------------
    # EXPRESSIONS (lowest precedence first)
    # -----------------------------------------------------------------------
    def expression(self) -> None:
        self.logical_or()

    def _binary(self, operand: Callable[[], None], operators: Collection[TokenType]) -> None:
        operand()
        while self.check(*operators) and self.valid:
            self.advance()
            operand()

    def logical_or(self) -> None:
        self._binary(self.logical_and, (TokenType.OR,))

    def logical_and(self) -> None:
        self._binary(self.equality, (TokenType.AND,))

    def equality(self) -> None:
        self._binary(self.comparison, EQUALITY_OPS)

    def comparison(self) -> None:
        self._binary(self.term, COMPARISON_OPS)

    def term(self) -> None:
        self._binary(self.factor, TERM_OPS)

    def factor(self) -> None:
        self._binary(self.unary, FACTOR_OPS)

    def unary(self) -> None:
        if self.check(*UNARY_OPS):
            self.advance()
            self.nested(self.unary)
        else:
            self.primary()

    def primary(self) -> None:
        kind = self.current.type

        if kind in LITERAL_TYPES:
            self.advance()
        elif kind is TokenType.IDENTIFIER:
            self.advance()
            self.access_suffixes()
        elif kind is TokenType.LPAREN:
            self.advance()
            self.nested(self.expression)
            self.expect(TokenType.RPAREN, "')' expected")
        elif kind is TokenType.LBRACKET:
            self.advance()
            if not self.check(TokenType.RBRACKET):
                self.nested(self.expression_list)
            self.expect(TokenType.RBRACKET, "']' expected")
        else:
            self.error("invalid expression")

    def argument_list(self) -> None:
        if not self.check(TokenType.RPAREN):
            self.expression_list()

    def expression_list(self) -> None:
        self.expression()
        while self.check(TokenType.COMMA) and self.valid:
            self.advance()
            self.expression()
