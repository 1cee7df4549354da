"""Unit tests for the diagnostic pass (E1-E4) and whole-run behavior.

Run with:

    python3 tests/test_detect.py
"""
import sys
import os

# Ensure project root is on the path regardless of working directory.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from analysis import analyze_source
from analysis.diagnostics import DiagnosticKind, summarize
from analysis.type_compat import check_assignment_type, strip_nullable
from runtime.context import AnalysisContext

E1 = DiagnosticKind.TYPE_MISMATCH
E2 = DiagnosticKind.MISSPELLED_KEYWORD
E3 = DiagnosticKind.USE_BEFORE_DECLARATION
E4 = DiagnosticKind.RELATIONAL_OPERATOR_MISUSE


def _diags(src, kind=None):
    ctx = analyze_source(src)
    return [d for d in ctx.diagnostics if kind is None or d.kind is kind]


def test_int_declaration_ok():
    ctx = analyze_source("int x = 5;")
    assert ctx.declarations.lookup("x") == "int"
    assert list(ctx.diagnostics) == []
    print("PASS: int x = 5")


def test_int_takes_string_once():
    diags = _diags('int x = "hi";')
    assert len(diags) == 1
    d = diags[0]
    assert d.kind is E1
    assert "int" in d.message and "'x'" in d.message and '"hi"' in d.message
    assert d.line == 1
    print("PASS: int x = \"hi\"")


def test_char_assignments():
    assert _diags("char c = 'a';") == []
    diags = _diags("char c = 5;")
    assert [d.kind for d in diags] == [E1]
    assert "char literal" in diags[0].message
    print("PASS: char assignments")


def test_integral_rules():
    for value in ("3.14", "10L", "'c'", '"s"'):
        diags = _diags(f"int v = {value};")
        assert [d.kind for d in diags] == [E1], (value, diags)
    assert _diags("long_ok = 1; int n = 42;", E1) == []
    print("PASS: integral rules")


def test_floating_rules():
    assert _diags("double d = 3;") == []
    assert _diags("float f = 2.5f;") == []
    assert [d.kind for d in _diags("double d = 'x';")] == [E1]
    print("PASS: floating rules")


def test_string_and_user_types_unchecked():
    assert _diags("String s = 5;") == []
    print("PASS: String has no rule")


def test_undeclared_assignment_reported_once():
    """`y = 3;` with y never declared gives one E3 on y's line."""
    diags = _diags("\n\ny = 3;")
    assert len(diags) == 1
    assert diags[0].kind is E3
    assert diags[0].line == 3
    assert diags[0].lexeme == "y"
    print("PASS: y = 3 gives one E3")


def test_later_declaration_counts():
    """Declared means present anywhere in the file."""
    assert _diags("pre = 99;\nint pre;") == []
    print("PASS: later declaration counts")


def test_identifier_after_keyword_not_reported():
    assert _diags("return value;") == []
    print("PASS: identifier after keyword")


def test_misspelled_keyword():
    diags = _diags("vaar count = 5")
    kinds = [d.kind for d in diags]
    assert kinds.count(E2) == 1
    e2 = [d for d in diags if d.kind is E2][0]
    assert e2.lexeme == "vaar"
    assert e2.suggestion == "var"
    assert "did you mean 'var'?" in e2.message
    print("PASS: misspelled keyword")


def test_declared_keyword_like_name_not_flagged():
    assert _diags("int vaar; vaar = 1;") == []
    print("PASS: declared keyword-like name")


def test_relational_invalid_operands():
    diags = _diags("x < ;", E4)
    assert len(diags) == 1
    assert "invalid operands" in diags[0].message
    print("PASS: x < ;")


def test_relational_position():
    first = _diags("== y", E4)
    assert len(first) == 1 and "invalid position" in first[0].message
    last = _diags("int y; y >", E4)
    assert len(last) == 1 and "invalid position" in last[0].message
    print("PASS: relational at edges")


def test_relational_valid():
    assert _diags("int a; int b; if (a >= b) { }", E4) == []
    assert _diags('int c; c == "s"', E4) == []
    print("PASS: valid relational")


def test_kotlin_annotated_initializer():
    ctx = analyze_source('var a: Int = 3.14\nval s: String = "ok"\nvar c: Char = "no"')
    kinds = [d.kind for d in ctx.diagnostics]
    assert kinds == [E1, E1]
    assert ctx.diagnostics[0].line == 1
    assert ctx.diagnostics[1].line == 3
    # the positional sniff saw `var a` first
    assert ctx.declarations.lookup("a") == "var"
    print("PASS: Kotlin annotated initializer")


def test_kotlin_unannotated_declaration():
    ctx = analyze_source("var count = 0\ncount = 5")
    assert list(ctx.diagnostics) == []
    assert ctx.declarations.get("count") is not None
    print("PASS: Kotlin unannotated declaration")


def test_nullable_annotation_stripped():
    assert strip_nullable("Int?") == "Int"
    assert strip_nullable("Int") == "Int"
    assert check_assignment_type("Int?", "3.5", 1, "n") is not None
    assert check_assignment_type(None, "3.5", 1, "n") is None
    print("PASS: nullable stripped")


def test_diagnostics_in_scan_order():
    ctx = analyze_source("b = 1;\na = 2;")
    assert [d.lexeme for d in ctx.diagnostics] == ["b", "a"]
    print("PASS: scan order")


def test_repeated_runs_identical():
    """Re-running on a reset context yields identical collections."""
    src = "// c\nint x = \"s\";\ny < ;\nvaar z"
    ctx = AnalysisContext()
    analyze_source(src, ctx)
    first = (list(ctx.tokens), list(ctx.comments), list(ctx.diagnostics))
    analyze_source(src, ctx)
    second = (list(ctx.tokens), list(ctx.comments), list(ctx.diagnostics))
    assert first == second
    print("PASS: repeated runs identical")


def test_diagnostic_cap():
    ctx = AnalysisContext(max_diagnostics=2)
    analyze_source("a1 = 1; a2 = 2; a3 = 3; a4 = 4;", ctx)
    assert len(ctx.diagnostics) == 2
    assert ctx.diagnostics.dropped == 2
    assert ctx.truncated
    print("PASS: diagnostic cap")


def test_summary():
    summary = summarize(_diags("vaar x\nq < ;"))
    assert summary[E2] == 1
    assert summary[E4] == 1
    assert summary.total == len(_diags("vaar x\nq < ;"))
    assert str(summary).startswith("E1=0  E2=1")
    print("PASS: summary")


if __name__ == "__main__":
    test_int_declaration_ok()
    test_int_takes_string_once()
    test_char_assignments()
    test_integral_rules()
    test_floating_rules()
    test_string_and_user_types_unchecked()
    test_undeclared_assignment_reported_once()
    test_later_declaration_counts()
    test_identifier_after_keyword_not_reported()
    test_misspelled_keyword()
    test_declared_keyword_like_name_not_flagged()
    test_relational_invalid_operands()
    test_relational_position()
    test_relational_valid()
    test_kotlin_annotated_initializer()
    test_kotlin_unannotated_declaration()
    test_nullable_annotation_stripped()
    test_diagnostics_in_scan_order()
    test_repeated_runs_identical()
    test_diagnostic_cap()
    test_summary()
    print("\nAll detection tests passed.")
