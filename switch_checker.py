# switch_checker.py
# Syntax checker for the switch/case scripting language: public API and CLI
#
# =============================================================================
#  PIPELINE
# =============================================================================
#
#   source text --Lexer--> tokens + lexical errors
#               --Parser--> verdict + syntax errors + skip notices
#
# The two error categories are additive. The parser always runs, even when
# the lexer reported problems, and the overall verdict is
#
#   ok = (no lexical errors) and (parser reached EOF with the flag still set)
#
# Reading files and printing belong to the CLI at the bottom of this module;
# check() itself performs no I/O.
# =============================================================================

import argparse
import logging
import sys
from typing import List, NamedTuple

from lexer import Lexer, Token, TokenType
from switch_parser import NESTING_LIMIT_DEFAULT, Parser

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEFAULT_SOURCE_NAME = "<input>"
STDIN_SOURCE_NAME   = "<stdin>"
SOURCE_ENCODING     = "utf-8"
RULE_WIDTH          = 60

EXIT_OK        = 0
EXIT_FAILED    = 1
EXIT_NO_SOURCE = 2


# ---------------------------------------------------------------------------
# RESULT RECORD
# ---------------------------------------------------------------------------
class CheckResult(NamedTuple):
    name: str
    tokens: List[Token]
    lexical_errors: List[str]
    syntax_errors: List[str]
    notices: List[str]
    ok: bool

    @property
    def error_count(self) -> int:
        return len(self.lexical_errors) + len(self.syntax_errors)


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def check(
    source: str,
    name: str = DEFAULT_SOURCE_NAME,
    max_depth: int = NESTING_LIMIT_DEFAULT,
) -> CheckResult:
    """
    Run one lexer pass and one parser pass over source.

    Fresh Lexer and Parser instances are built per call, so check() is safe
    to call repeatedly and returns identical results for identical input.
    """
    lexer = Lexer(source)
    tokens = lexer.tokenize()
    lexical_errors = lexer.errors()

    parser = Parser(tokens, max_depth=max_depth)
    syntax_ok = parser.parse()

    ok = not lexical_errors and syntax_ok
    logger.info(
        "%s: %s (%d lexical, %d syntax errors)",
        name,
        "OK" if ok else "FAILED",
        len(lexical_errors),
        len(parser.errors()),
    )
    return CheckResult(
        name=name,
        tokens=tokens,
        lexical_errors=lexical_errors,
        syntax_errors=parser.errors(),
        notices=parser.notices(),
        ok=ok,
    )


def format_report(result: CheckResult, show_tokens: bool = True) -> str:
    """Render a human-readable summary of a CheckResult."""
    rule = "=" * RULE_WIDTH
    thin = "-" * RULE_WIDTH
    out: List[str] = [rule, f"  CHECK: {result.name}", rule, "", "[1/2] Lexical analysis", thin]

    if result.lexical_errors:
        out.append("Lexical errors:")
        out.extend(f"  - {err}" for err in result.lexical_errors)
    else:
        out.append("Lexical analysis OK")

    if show_tokens:
        shown = [t for t in result.tokens if t.type not in (TokenType.NEWLINE, TokenType.EOF)]
        out.append("")
        out.append("Tokens:")
        for count, tok in enumerate(shown, 1):
            out.append(f"  {count:3d}. {tok.type.name:<20} : '{tok.value}'")
        out.append(f"  Total: {len(shown)} tokens")

    out += ["", "[2/2] Syntax analysis", thin]
    out.extend(f"  note: {notice}" for notice in result.notices)
    if result.syntax_errors:
        out.append("Syntax errors:")
        out.extend(f"  - {err}" for err in result.syntax_errors)
    else:
        out.append("Syntax analysis OK")

    out += ["", rule]
    if result.ok:
        out.append("  RESULT: OK - no errors detected")
    else:
        out.append("  RESULT: FAILED")
        out.append(f"    lexical errors: {len(result.lexical_errors)}")
        out.append(f"    syntax errors:  {len(result.syntax_errors)}")
        out.append(f"  Total: {result.error_count} error(s)")
    out.append(rule)
    return "\n".join(out)


# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding=SOURCE_ENCODING) as fh:
        return fh.read()


def _cli(argv: List[str]) -> int:
    """
    Command-line interface for checker runs.

    Exit codes: 0 when the source passes, 1 when any lexical or syntax error
    was found, 2 when the source file cannot be read.
    """
    ap = argparse.ArgumentParser(description="switch/case syntax checker")
    ap.add_argument("file", help="source file to check ('-' reads stdin)")
    ap.add_argument("--debug", action="store_true", help="dump token stream and exit")
    ap.add_argument("--max-depth", type=int, default=NESTING_LIMIT_DEFAULT,
                    help="nesting limit for parens, brackets, calls and switches")
    ap.add_argument("--no-tokens", action="store_true", help="omit the token table from the report")
    ap.add_argument("--quiet", action="store_true", help="print only OK or the diagnostics")
    ap.add_argument("--verbose", action="store_true", help="enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    name = STDIN_SOURCE_NAME if args.file == "-" else args.file
    try:
        data = _read_source(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {name}: {exc}", file=sys.stderr)
        return EXIT_NO_SOURCE

    if args.debug:
        lexer = Lexer(data)
        for tok in lexer.tokenize():
            print(tok)
        for err in lexer.errors():
            print(f"LexicalError: {err}", file=sys.stderr)
        return EXIT_OK

    result = check(data, name, max_depth=args.max_depth)

    if args.quiet:
        if result.ok:
            print("OK")
        for err in result.lexical_errors:
            print(f"LexicalError: {err}", file=sys.stderr)
        for err in result.syntax_errors:
            print(f"SyntaxError: {err}", file=sys.stderr)
    else:
        print(format_report(result, show_tokens=not args.no_tokens))

    return EXIT_OK if result.ok else EXIT_FAILED


def main() -> None:
    sys.exit(_cli(sys.argv[1:]))


# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
