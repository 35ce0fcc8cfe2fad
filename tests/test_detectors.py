"""
Unit tests for the logging call checks.

Calls are built directly from syntax nodes, so these tests do not
depend on the Go parser.
"""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from loglinter.config import Config
from loglinter.detectors.casing import MESSAGE as CASING_MESSAGE
from loglinter.detectors.casing import check_starts_with_upper
from loglinter.detectors.charset import (
    NON_LATIN_MESSAGE,
    SPECIAL_MESSAGE,
    check_not_allowed_symbols,
    remove_non_latin,
    remove_special_symbols,
)
from loglinter.detectors.sensitive import check_sensitive_data
from loglinter.detectors.utils import collect_idents, string_literal
from loglinter.syntax import BasicLit, BinaryExpr, CallExpr, Ident, Token

LIT_POS = 10


def make_lit_call(kind: Token, value: str) -> CallExpr:
    """Call whose first argument is a literal starting at LIT_POS."""
    return CallExpr(fun=Ident("f"), args=(BasicLit(kind, value, LIT_POS),))


def make_ident_call(name: str) -> CallExpr:
    return CallExpr(fun=Ident("f"), args=(Ident(name, LIT_POS),))


def make_expr_call(expr) -> CallExpr:
    return CallExpr(fun=Ident("f"), args=(expr,))


def lit(value: str) -> BasicLit:
    return BasicLit(Token.STRING, value)


def add(x, y) -> BinaryExpr:
    return BinaryExpr(x, Token.ADD, y)


def messages(diagnostics) -> list:
    return [d.message for d in diagnostics]


# Literal decoding

class TestStringLiteral:

    @pytest.mark.parametrize("call, expected", [
        (make_lit_call(Token.STRING, '"hello world"'), "hello world"),
        (make_lit_call(Token.STRING, "`raw`"), "raw"),
        (make_lit_call(Token.STRING, '"café"'), "café"),
        (make_lit_call(Token.STRING, '"line1\\nline2"'), "line1\nline2"),
    ])
    def test_decodes_string_literals(self, call, expected):
        assert string_literal(call) == expected

    @pytest.mark.parametrize("call", [
        make_lit_call(Token.STRING, '""'),
        make_lit_call(Token.STRING, "``"),
        make_lit_call(Token.STRING, '"\\q"'),
        make_lit_call(Token.INT, "42"),
        make_lit_call(Token.CHAR, "'x'"),
        make_ident_call("variable"),
        CallExpr(fun=Ident("f"), args=()),
    ])
    def test_not_applicable(self, call):
        assert string_literal(call) is None


# Concatenation trees

class TestCollectIdents:

    def test_single_ident(self):
        assert [i.name for i in collect_idents(Ident("x"))] == ["x"]

    def test_binary_add_with_two_idents(self):
        expr = add(Ident("a"), Ident("b"))
        assert [i.name for i in collect_idents(expr)] == ["a", "b"]

    def test_nested_binary_add(self):
        # (a + b) + c
        expr = add(add(Ident("a"), Ident("b")), Ident("c"))
        assert [i.name for i in collect_idents(expr)] == ["a", "b", "c"]

    def test_right_nested_binary_add(self):
        # a + (b + c) without parentheses in the tree
        expr = add(Ident("a"), add(Ident("b"), Ident("c")))
        assert [i.name for i in collect_idents(expr)] == ["a", "b", "c"]

    def test_non_add_binary_op_stops_recursion(self):
        expr = BinaryExpr(Ident("a"), Token.MUL, Ident("b"))
        assert collect_idents(expr) == []

    def test_basic_lit_is_ignored(self):
        expr = add(lit('"hello"'), Ident("x"))
        assert [i.name for i in collect_idents(expr)] == ["x"]

    def test_none(self):
        assert collect_idents(None) == []


# Casing

class TestCheckStartsWithUpper:

    @pytest.mark.parametrize("value, want", [
        ('"hello world"', 0),
        ('"Hello world"', 1),
        ('"123 hello"', 0),
        ('"Über"', 1),
        ('"über"', 0),
        ('"日本語"', 0),
        ('"!hello"', 0),
        ('""', 0),
    ])
    def test_report_count(self, value, want):
        diagnostics = check_starts_with_upper(make_lit_call(Token.STRING, value), Config())
        assert len(diagnostics) == want
        assert all(d.message == CASING_MESSAGE for d in diagnostics)

    def test_non_string_arg(self):
        assert check_starts_with_upper(make_ident_call("someVar"), Config()) == []

    def test_diagnostic_spans_literal(self):
        value = '"Hello world"'
        [diagnostic] = check_starts_with_upper(make_lit_call(Token.STRING, value), Config())
        assert diagnostic.pos == LIT_POS
        assert diagnostic.end == LIT_POS + len(value)

    def test_fix_replaces_first_letter(self):
        [diagnostic] = check_starts_with_upper(make_lit_call(Token.STRING, '"Hello"'), Config())
        [fix] = diagnostic.suggested_fixes
        [edit] = fix.text_edits
        assert fix.message == "letter H must be lowercase"
        assert (edit.pos, edit.end) == (LIT_POS + 1, LIT_POS + 2)
        assert edit.new_text == b"h"

    def test_fix_covers_multibyte_letter(self):
        [diagnostic] = check_starts_with_upper(make_lit_call(Token.STRING, '"Über"'), Config())
        [edit] = diagnostic.suggested_fixes[0].text_edits
        assert (edit.pos, edit.end) == (LIT_POS + 1, LIT_POS + 3)
        assert edit.new_text == "ü".encode("utf-8")

    def test_fix_covers_escape_sequence(self):
        [diagnostic] = check_starts_with_upper(make_lit_call(Token.STRING, '"\\u0048ello"'), Config())
        [edit] = diagnostic.suggested_fixes[0].text_edits
        assert (edit.pos, edit.end) == (LIT_POS + 1, LIT_POS + 7)
        assert edit.new_text == b"h"

    def test_raw_string(self):
        [diagnostic] = check_starts_with_upper(make_lit_call(Token.STRING, "`Hello`"), Config())
        [edit] = diagnostic.suggested_fixes[0].text_edits
        assert (edit.pos, edit.end) == (LIT_POS + 1, LIT_POS + 2)


# Character set

class TestCheckNotAllowedSymbols:

    @pytest.mark.parametrize("value, want_non_latin, want_special", [
        ('"hello world 123"', False, False),
        ('"привет"', True, False),
        ('"hello!"', False, True),
        ('"привет!"', True, True),
        ('"hello..."', False, True),
        ('"hello мир"', True, False),
        ('"hello\\u2764"', False, True),
        ('"hello❤️"', False, True),
        ('"tab\\there"', False, True),
        ('"über"', True, False),
        ('"١٢٣"', False, True),
    ])
    def test_classification(self, value, want_non_latin, want_special):
        diagnostics = check_not_allowed_symbols(make_lit_call(Token.STRING, value), Config())
        msgs = messages(diagnostics)
        assert (NON_LATIN_MESSAGE in msgs) == want_non_latin
        assert (SPECIAL_MESSAGE in msgs) == want_special

    def test_non_string_arg(self):
        assert check_not_allowed_symbols(make_ident_call("someVar"), Config()) == []

    def test_non_latin_fix(self):
        value = '"hello мир"'
        [diagnostic] = check_not_allowed_symbols(make_lit_call(Token.STRING, value), Config())
        [edit] = diagnostic.suggested_fixes[0].text_edits
        assert diagnostic.suggested_fixes[0].message == "remove non-latin characters"
        assert (edit.pos, edit.end) == (LIT_POS, LIT_POS + len(value.encode("utf-8")))
        assert edit.new_text == b'"hello "'

    def test_special_fix_keeps_other_scripts(self):
        diagnostics = check_not_allowed_symbols(make_lit_call(Token.STRING, '"привет, мир!"'), Config())
        assert messages(diagnostics) == [NON_LATIN_MESSAGE, SPECIAL_MESSAGE]
        non_latin_edit = diagnostics[0].suggested_fixes[0].text_edits[0]
        special_edit = diagnostics[1].suggested_fixes[0].text_edits[0]
        assert non_latin_edit.new_text == b'" "'
        assert special_edit.new_text == '"привет мир"'.encode("utf-8")
        assert (non_latin_edit.pos, non_latin_edit.end) == (special_edit.pos, special_edit.end)

    @pytest.mark.parametrize("value", [
        '"hello мир"',
        '"Привет, world!"',
        '"status: 200 OK ✅"',
        '"tab\\tnew\\nline"',
        '"ñandú über 42°"',
    ])
    def test_fix_output_is_clean(self, value):
        diagnostics = check_not_allowed_symbols(make_lit_call(Token.STRING, value), Config())
        for diagnostic in diagnostics:
            new_text = diagnostic.suggested_fixes[0].text_edits[0].new_text.decode("utf-8")
            again = messages(check_not_allowed_symbols(make_lit_call(Token.STRING, new_text), Config()))
            if diagnostic.message == NON_LATIN_MESSAGE:
                assert again == []
            else:
                assert SPECIAL_MESSAGE not in again


class TestFilters:

    def test_remove_non_latin(self):
        assert remove_non_latin("héllo wörld 42!") == "hllo wrld 42"

    def test_remove_special_symbols(self):
        assert remove_special_symbols("héllo, wörld: 42!") == "héllo wörld 42"
        assert remove_special_symbols("٣ apples") == "٣ apples"


# Sensitive data

class TestCheckSensitiveData:

    @pytest.mark.parametrize("expr, want, ident", [
        (add(lit('"hello"'), Ident("myToken")), 1, "myToken"),
        (add(lit('"data"'), Ident("userPassword")), 1, "userPassword"),
        (add(lit('"hello"'), Ident("username")), 0, None),
        (lit('"hello"'), 0, None),
        (Ident("secret"), 0, None),
        (BinaryExpr(Ident("secret"), Token.MUL, Ident("count")), 0, None),
        (add(add(lit('"prefix"'), Ident("apiKey")), lit('"suffix"')), 1, "apiKey"),
        (add(lit('"cred: "'), Ident("credential")), 1, "credential"),
        # matches "private", and would match a "key" pattern too
        (add(lit('"val: "'), Ident("privateKey")), 1, "privateKey"),
        (add(lit('"data"'), Ident("AccessTOKEN")), 1, "AccessTOKEN"),
        (add(lit('"h"'), Ident("passwdHash")), 1, "passwdHash"),
    ])
    def test_detection(self, expr, want, ident):
        diagnostics = check_sensitive_data(make_expr_call(expr), Config())
        assert len(diagnostics) == want
        if ident is not None:
            assert diagnostics[0].message == (
                f'potentially sensitive data "{ident}" is concatenated into log message'
            )

    def test_multiple_sensitive_vars_reported_in_order(self):
        expr = add(add(Ident("secretValue", 5), lit('" and "')), Ident("authHeader", 30))
        diagnostics = check_sensitive_data(make_expr_call(expr), Config())
        assert [d.pos for d in diagnostics] == [5, 30]
        assert '"secretValue"' in diagnostics[0].message
        assert '"authHeader"' in diagnostics[1].message

    def test_one_diagnostic_per_identifier(self):
        expr = add(lit('"x"'), Ident("secretAuthToken"))
        assert len(check_sensitive_data(make_expr_call(expr), Config())) == 1

    def test_diagnostic_at_identifier(self):
        expr = add(lit('"x"'), Ident("token", 42))
        [diagnostic] = check_sensitive_data(make_expr_call(expr), Config())
        assert (diagnostic.pos, diagnostic.end) == (42, 47)
        assert diagnostic.suggested_fixes == ()

    def test_custom_patterns_replace_defaults(self):
        config = Config.from_patterns(["Session"])
        flagged = check_sensitive_data(make_expr_call(add(lit('"x"'), Ident("sessionID"))), config)
        ignored = check_sensitive_data(make_expr_call(add(lit('"x"'), Ident("myToken"))), config)
        assert len(flagged) == 1
        assert ignored == []

    def test_no_args(self):
        assert check_sensitive_data(CallExpr(fun=Ident("f")), Config()) == []
