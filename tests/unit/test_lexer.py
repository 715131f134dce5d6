import pytest

from lexer import Lexer, Token, TokenType, tokenize


def types_of(source):
    return [t.type for t in Lexer(source).tokenize()]


def test_simple_assignment_tokens_and_positions():
    tokens, errors = tokenize("x = 1\n")
    assert errors == []
    assert tokens == [
        Token(TokenType.IDENTIFIER, "x", 1, 1),
        Token(TokenType.ASSIGN, "=", 1, 3),
        Token(TokenType.INTEGER, "1", 1, 5),
        Token(TokenType.NEWLINE, "\\n", 1, 6),
        Token(TokenType.EOF, "", 2, 1),
    ]


def test_no_trailing_newline_means_no_newline_token():
    assert types_of("x = 1") == [
        TokenType.IDENTIFIER, TokenType.ASSIGN, TokenType.INTEGER, TokenType.EOF,
    ]


@pytest.mark.parametrize("source", [
    "", "\n\n", "@@@", '"', "1..", "switch {", "\t\r\n#", "été = 1", "'\\", "$\n$",
])
def test_stream_always_ends_with_single_eof(source):
    tokens = Lexer(source).tokenize()
    assert tokens
    assert tokens[-1].type is TokenType.EOF
    assert [t.type for t in tokens].count(TokenType.EOF) == 1


def test_keywords_are_case_sensitive():
    src = "switch case default break continue pass if while for def class and or not Switch"
    assert types_of(src) == [
        TokenType.SWITCH, TokenType.CASE, TokenType.DEFAULT, TokenType.BREAK,
        TokenType.CONTINUE, TokenType.PASS, TokenType.IF, TokenType.WHILE,
        TokenType.FOR, TokenType.DEF, TokenType.CLASS, TokenType.AND,
        TokenType.OR, TokenType.NOT, TokenType.IDENTIFIER, TokenType.EOF,
    ]


def test_booleans_and_honorary_constants():
    assert types_of("True False BENOUADFEL Yacine benouadfel true") == [
        TokenType.BOOLEAN, TokenType.BOOLEAN, TokenType.BENOUADFEL,
        TokenType.YACINE, TokenType.IDENTIFIER, TokenType.IDENTIFIER,
        TokenType.EOF,
    ]


def test_two_char_operators_win_over_prefixes():
    src = "== != <= >= += -= ++ -- = + - * / % < > !"
    assert types_of(src) == [
        TokenType.EQUAL, TokenType.NOT_EQUAL, TokenType.LESS_EQUAL,
        TokenType.GREATER_EQUAL, TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN,
        TokenType.INCREMENT, TokenType.DECREMENT, TokenType.ASSIGN,
        TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE,
        TokenType.MODULO, TokenType.LESS, TokenType.GREATER, TokenType.NOT,
        TokenType.EOF,
    ]


def test_punctuation():
    assert types_of("()[]{},.:") == [
        TokenType.LPAREN, TokenType.RPAREN, TokenType.LBRACKET,
        TokenType.RBRACKET, TokenType.LBRACE, TokenType.RBRACE,
        TokenType.COMMA, TokenType.DOT, TokenType.COLON, TokenType.EOF,
    ]


def test_integer_and_float_classification():
    tokens, errors = tokenize("42 3.14")
    assert errors == []
    assert tokens[0] == Token(TokenType.INTEGER, "42", 1, 1)
    assert tokens[1] == Token(TokenType.FLOAT, "3.14", 1, 4)


def test_second_decimal_point_reports_and_keeps_prefix():
    tokens, errors = tokenize("1.2.3")
    assert len(errors) == 1
    assert errors[0] == "line 1, column 1: malformed number '1.2.3'"
    assert tokens == [
        Token(TokenType.FLOAT, "1.2", 1, 1),
        Token(TokenType.EOF, "", 1, 6),
    ]


def test_letters_glued_to_number():
    tokens, errors = tokenize("n = 12abc")
    assert errors == ["line 1, column 5: malformed number '12abc'"]
    assert tokens[2] == Token(TokenType.INTEGER, "12", 1, 5)
    assert tokens[3].type is TokenType.EOF


def test_unterminated_string_keeps_partial_content():
    tokens, errors = tokenize('x = "abc')
    assert errors == ["line 1, column 5: unterminated string"]
    assert tokens[2] == Token(TokenType.STRING, "abc", 1, 5)
    assert tokens[3].type is TokenType.EOF


def test_unterminated_string_stops_at_end_of_line():
    tokens, errors = tokenize('s = "abc\nx = 1')
    assert len(errors) == 1
    assert [t.type for t in tokens] == [
        TokenType.IDENTIFIER, TokenType.ASSIGN, TokenType.STRING,
        TokenType.NEWLINE, TokenType.IDENTIFIER, TokenType.ASSIGN,
        TokenType.INTEGER, TokenType.EOF,
    ]
    assert tokens[4] == Token(TokenType.IDENTIFIER, "x", 2, 1)


def test_strings_in_both_quote_styles_with_escapes():
    tokens, errors = tokenize("'it\\'s' \"say \\\"hi\\\"\"")
    assert errors == []
    assert tokens[0].value == "it\\'s"
    assert tokens[1].value == 'say \\"hi\\"'


def test_unexpected_character_is_skipped():
    tokens, errors = tokenize("a @ b")
    assert errors == ["line 1, column 3: unexpected character '@'"]
    assert [t.value for t in tokens] == ["a", "b", ""]


def test_comments_are_dropped_but_newline_kept():
    tokens, errors = tokenize("# just a note\nx")
    assert errors == []
    assert tokens == [
        Token(TokenType.NEWLINE, "\\n", 1, 14),
        Token(TokenType.IDENTIFIER, "x", 2, 1),
        Token(TokenType.EOF, "", 2, 2),
    ]


def test_column_resets_on_each_line():
    tokens = Lexer("a\n\tb\n  c").tokenize()
    positions = [(t.line, t.column) for t in tokens if t.type is TokenType.IDENTIFIER]
    assert positions == [(1, 1), (2, 2), (3, 3)]


def test_positions_never_go_backwards():
    src = 'switch (x) {\n  case 1: y = "a" # c\n  default: pass\n}\n'
    tokens = Lexer(src).tokenize()
    pairs = [(t.line, t.column) for t in tokens]
    assert pairs == sorted(pairs)


def test_tokenize_runs_once_per_instance():
    lexer = Lexer("x = @")
    first = lexer.tokenize()
    assert lexer.tokenize() is first
    assert len(lexer.errors()) == 1


def test_fresh_passes_are_deterministic():
    src = 'x = "abc\n1.2.3 $ switch (x) { case 1: pass }'
    assert tokenize(src) == tokenize(src)


def test_non_string_source_rejected():
    with pytest.raises(TypeError):
        Lexer(b"x = 1")
