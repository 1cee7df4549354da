# Ethan Doughty
# jklint.py
"""Command-line interface for jklint, a Java/Kotlin lexical analyzer."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from analysis import analyze_source
from frontend.pipeline import SourceReadError, read_source
from runtime.context import AnalysisContext, DEFAULT_MAX_DIAGNOSTICS
from report import format_report

# Files offered by the interactive language menu
LANGUAGE_FILES = {"1": "Input.java", "2": "Input.kt"}


def run_file(file_path: str, color: bool = False, scan_order: bool = False,
             show_tokens: bool = True, max_diagnostics: int = DEFAULT_MAX_DIAGNOSTICS,
             benchmark: bool = False) -> int:
    """Analyze a single Java/Kotlin file and print the report.

    Args:
        file_path: Path to the source file
        color: If True, use the pastel ANSI palette
        scan_order: If True, list tokens in scan order
        show_tokens: If False, omit the symbol table
        max_diagnostics: Cap on recorded diagnostics
        benchmark: If True, print timing breakdown

    Returns:
        Exit code (0 for success, 1 if the file cannot be read)
    """
    t_start = time.perf_counter()
    try:
        src = read_source(file_path)
    except SourceReadError as e:
        print(f"ERROR: {e}")
        return 1
    t_read = time.perf_counter()

    ctx = AnalysisContext(max_diagnostics=max_diagnostics, source_name=file_path)
    analyze_source(src, ctx)
    t_analyze = time.perf_counter()

    print(f"=== Analysis for {file_path} ===")
    print(format_report(ctx, color=color, scan_order=scan_order, show_tokens=show_tokens))

    if benchmark:
        line_count = src.count("\n") + 1
        total_ms = (t_analyze - t_start) * 1000
        print(f"\n--- Benchmark ({line_count} lines, {len(ctx.tokens)} tokens) ---")
        print(f"  Read:      {(t_read - t_start) * 1000:7.1f}ms")
        print(f"  Analyze:   {(t_analyze - t_read) * 1000:7.1f}ms")
        print(f"  Total:     {total_ms:7.1f}ms")
        if total_ms > 0:
            print(f"  Throughput: {line_count / total_ms * 1000:.0f} lines/sec")

    return 0


def _ask(prompt: str, read_line: Callable[[], str], out: TextIO) -> Optional[str]:
    """Prompt until a non-blank answer arrives; None on end of input."""
    while True:
        out.write(prompt)
        out.flush()
        answer = read_line()
        if not answer:
            return None
        answer = answer.strip()
        if answer:
            return answer


def prompt_language(read_line: Callable[[], str], out: TextIO) -> Optional[str]:
    """Ask for Java or Kotlin; returns the matching file name or None on EOF."""
    while True:
        answer = _ask("\nSelect language: (1) Java  (2) Kotlin  [enter 1 or 2]: ", read_line, out)
        if answer is None:
            return None
        if answer[0] in LANGUAGE_FILES:
            return LANGUAGE_FILES[answer[0]]
        out.write("Invalid choice. Please enter 1 or 2.\n")


def prompt_yesno(msg: str, read_line: Callable[[], str], out: TextIO) -> bool:
    """Ask a y/n question; end of input counts as no."""
    while True:
        answer = _ask(f"{msg} (y/n): ", read_line, out)
        if answer is None:
            return False
        c = answer[0].lower()
        if c == "y":
            return True
        if c == "n":
            return False
        out.write("Please answer y or n.\n")


def run_interactive(directory: str = ".", color: bool = False,
                    read_line: Optional[Callable[[], str]] = None,
                    out: Optional[TextIO] = None) -> int:
    """Menu loop: pick a language, confirm, analyze, repeat.

    Args:
        directory: Directory holding Input.java / Input.kt
        color: If True, use the pastel ANSI palette
        read_line: Line source (stdin by default; returns '' at EOF)
        out: Prompt output stream

    Returns:
        Exit code (1 if input ended before a language was chosen)
    """
    read_line = read_line or sys.stdin.readline
    out = out or sys.stdout
    out.write("Lexical Analyzer for Java and Kotlin\n")
    while True:
        filename = prompt_language(read_line, out)
        if filename is None:
            out.write("Input error. Exiting.\n")
            return 1
        out.write(f"Selected file: {filename}\n")
        if prompt_yesno("Proceed with analysis on this file", read_line, out):
            run_file(str(Path(directory) / filename), color=color)

        if not prompt_yesno("Do you want to continue and analyze another file", read_line, out):
            out.write("Exiting. Goodbye.\n")
            return 0


def run_tests() -> int:
    """Run the fixture and structural test suite.

    Returns:
        Exit code (0 for all tests passed, 1 otherwise)
    """
    import run_all_tests
    return run_all_tests.main(return_code=True)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the jklint CLI tool.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = argparse.ArgumentParser(
        prog="jklint",
        description="jklint: lexical analyzer and heuristic checker for Java/Kotlin"
    )
    parser.add_argument("file", nargs="?", help="Java (.java) or Kotlin (.kt) file to analyze")
    parser.add_argument(
        "--tests",
        action="store_true",
        help="Run test suite"
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Language menu loop over Input.java / Input.kt"
    )
    parser.add_argument(
        "--dir",
        default=".",
        help="Directory searched by --interactive (default: current directory)"
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Colorize the report with a pastel ANSI palette"
    )
    parser.add_argument(
        "--sort",
        choices=("line", "scan"),
        default="line",
        help="Symbol table order: by line then lexeme (default) or scan order"
    )
    parser.add_argument(
        "--no-tokens",
        action="store_true",
        help="Omit the symbol table from the report"
    )
    parser.add_argument(
        "--max-diagnostics",
        type=int,
        default=DEFAULT_MAX_DIAGNOSTICS,
        metavar="N",
        help=f"Stop recording diagnostics after N (default: {DEFAULT_MAX_DIAGNOSTICS})"
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Print timing breakdown for analysis phases"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log analysis details to stderr"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.max_diagnostics < 0:
        parser.error("--max-diagnostics must be non-negative")

    if args.tests:
        return run_tests()

    if args.interactive:
        return run_interactive(args.dir, color=args.color)

    if not args.file:
        parser.print_help()
        return 1

    return run_file(args.file, color=args.color, scan_order=args.sort == "scan",
                    show_tokens=not args.no_tokens, max_diagnostics=args.max_diagnostics,
                    benchmark=args.benchmark)


if __name__ == "__main__":
    raise SystemExit(main())
