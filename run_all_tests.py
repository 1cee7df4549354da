# Ethan Doughty
# run_all_tests.py

import sys
import os
import re
import glob
from pathlib import Path
from typing import Dict, Optional, Tuple

from analysis import analyze_source
from analysis.diagnostics import DiagnosticKind, summarize
from runtime.context import AnalysisContext

_REPO_ROOT = Path(__file__).resolve().parent


def test_sort_key(path: str) -> str:
    """Sort test files alphabetically by full path."""
    return path


TEST_FILES = sorted(
    glob.glob(str(_REPO_ROOT / "tests/fixtures/**/*.java"), recursive=True)
    + glob.glob(str(_REPO_ROOT / "tests/fixtures/**/*.kt"), recursive=True),
    key=test_sort_key,
)

EXPECT_RE = re.compile(r"//\s*EXPECT:\s*(.+)$")
EXPECT_TOTAL_RE = re.compile(r"diagnostics\s*=\s*(\d+)\s*$", re.IGNORECASE)
EXPECT_KIND_RE = re.compile(r"(E[1-4])\s*=\s*(\d+)\s*$")
EXPECT_DECL_RE = re.compile(r"decl\s+([A-Za-z_]\w*)\s*=\s*(\S+)\s*$")

_KINDS_BY_CODE = {kind.code: kind for kind in DiagnosticKind}


class Expectations:
    """Assertions collected from `// EXPECT:` comments of one fixture."""

    def __init__(self):
        self.total: Optional[int] = None
        self.per_kind: Dict[DiagnosticKind, int] = {}
        self.decls: Dict[str, str] = {}


def parse_expectations(src: str) -> Expectations:
    exp = Expectations()
    for line in src.splitlines():
        m = EXPECT_RE.match(line.strip())
        if not m:
            continue
        payload = m.group(1).strip()

        m_total = EXPECT_TOTAL_RE.match(payload)
        if m_total:
            exp.total = int(m_total.group(1))
            continue

        m_kind = EXPECT_KIND_RE.match(payload)
        if m_kind:
            exp.per_kind[_KINDS_BY_CODE[m_kind.group(1)]] = int(m_kind.group(2))
            continue

        m_decl = EXPECT_DECL_RE.match(payload)
        if m_decl:
            exp.decls[m_decl.group(1)] = m_decl.group(2)

    return exp


def run_test(path: str) -> bool:
    """Run one fixture file and check its expectations.

    Args:
        path: Path to a .java or .kt fixture

    Returns:
        True if every expectation held
    """
    print(f"===== Analysis for {path}")
    if not os.path.exists(path):
        print("ERROR: file not found\n")
        return False

    src = open(path, "r", errors='replace').read()
    exp = parse_expectations(src)

    ctx = analyze_source(src, AnalysisContext(source_name=path))
    diagnostics = list(ctx.diagnostics)

    if not diagnostics:
        print("No errors found.")
    else:
        print("Diagnostics:")
        for d in diagnostics:
            print("-", d)
    print("Declarations:")
    print("   ", ctx.declarations)

    passed = True
    summary = summarize(diagnostics)

    if exp.total is not None and summary.total != exp.total:
        print(f"ASSERT FAIL: expected diagnostics = {exp.total}, got {summary.total}")
        passed = False

    for kind, expected in exp.per_kind.items():
        if summary[kind] != expected:
            print(f"ASSERT FAIL: expected {kind.code} = {expected}, got {summary[kind]}")
            passed = False

    for name, expected_type in exp.decls.items():
        decl = ctx.declarations.get(name)
        actual = decl.type_label() if decl is not None else "<undeclared>"
        if actual != expected_type:
            print(f"ASSERT FAIL: expected decl {name} = {expected_type}, got {actual}")
            passed = False

    print("ASSERTIONS:", "PASS" if passed else "FAIL")
    print()
    return passed


def _run_structural_tests() -> Tuple[int, int]:
    """Run structural Python tests and return (total, passed) counts."""
    import importlib.util
    structural_dir = _REPO_ROOT / "tests" / "structural"
    test_files = sorted(structural_dir.glob("test_*.py"))
    total = 0
    ok = 0
    for tf in test_files:
        spec = importlib.util.spec_from_file_location(tf.stem, tf)
        mod = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(mod)
        test_fns = [
            (name, obj)
            for name, obj in vars(mod).items()
            if name.startswith("test_") and callable(obj)
        ]
        for name, func in test_fns:
            total += 1
            try:
                func()
                print(f"===== Structural: {tf.stem}.{name}: PASS")
                ok += 1
            except AssertionError as e:
                print(f"===== Structural: {tf.stem}.{name}: FAIL: {e}")
            except Exception as e:
                print(f"===== Structural: {tf.stem}.{name}: ERROR: {type(e).__name__}: {e}")
    return total, ok


def main(return_code: bool = False) -> int:
    """Run all tests.

    Args:
        return_code: If True, return exit code instead of exiting

    Returns:
        Exit code (0 for all tests passed, 1 otherwise)
    """
    total = 0
    ok = 0

    for path in TEST_FILES:
        total += 1
        if run_test(path):
            ok += 1

    # Run structural Python tests alongside fixture files
    structural_total, structural_ok = _run_structural_tests()
    total += structural_total
    ok += structural_ok

    print(f"===== Summary: {ok}/{total} tests passed =====")

    rc = 0 if ok == total else 1
    if return_code:
        return rc
    sys.exit(rc)


if __name__ == "__main__":
    main()
