import switch_checker as sc
from lexer import TokenType


def test_valid_source_passes():
    result = sc.check("x = 1\n", "inline")
    assert result.ok is True
    assert result.name == "inline"
    assert result.lexical_errors == []
    assert result.syntax_errors == []
    assert result.tokens[-1].type is TokenType.EOF


def test_lexical_and_syntax_errors_are_additive():
    result = sc.check('x = "abc')
    assert result.ok is False
    assert len(result.lexical_errors) == 1
    # the partial STRING token still forms a valid assignment
    assert result.syntax_errors == []
    assert result.error_count == 1


def test_lexical_error_alone_fails_the_verdict():
    result = sc.check("x = 1 @")
    assert result.syntax_errors == []
    assert result.ok is False


def test_both_categories_reported_together():
    result = sc.check("$\nswitch (x) { }")
    assert len(result.lexical_errors) == 1
    assert len(result.syntax_errors) == 1
    assert result.error_count == 2


def test_notices_do_not_fail_the_verdict():
    result = sc.check("if a {\n  b = 1\n}\nswitch (a) { default: pass }\n")
    assert result.ok is True
    assert len(result.notices) == 1


def test_check_is_deterministic():
    src = 'switch (x) { case 1.2.3: "s }\n'
    assert sc.check(src) == sc.check(src)


def test_report_for_passing_source():
    report = sc.format_report(sc.check("x = 1", "demo.src"))
    assert "CHECK: demo.src" in report
    assert "RESULT: OK" in report
    assert "1. IDENTIFIER" in report
    assert "Total: 3 tokens" in report


def test_report_for_failing_source_counts_errors():
    report = sc.format_report(sc.check("$\nswitch (x) { }"), show_tokens=False)
    assert "Tokens:" not in report
    assert "RESULT: FAILED" in report
    assert "lexical errors: 1" in report
    assert "syntax errors:  1" in report
    assert "Total: 2 error(s)" in report
