# Ethan Doughty
# type_compat.py
"""Assignment compatibility between a declared type and a value token."""

from typing import Optional

from analysis.diagnostics import Diagnostic, err_char_expected, err_type_mismatch
from frontend.classify import ends_with_letter, is_char_literal, is_string_literal

INTEGRAL_TYPES = frozenset({"int", "Int", "Long", "Short", "Byte"})
FLOATING_TYPES = frozenset({"float", "Float", "double", "Double"})
CHAR_TYPES = frozenset({"char", "Char"})


def strip_nullable(declared_type: str) -> str:
    """Drop one trailing Kotlin nullability marker ('Int?' -> 'Int')."""
    if declared_type.endswith("?"):
        return declared_type[:-1]
    return declared_type


def check_assignment_type(
    declared_type: Optional[str], value: str, line: int, name: str, col: int = 0,
    value_line: int = 0,
) -> Optional[Diagnostic]:
    """Judge `name = value` against the declared type of name.

    Args:
        declared_type: Declared type (None when unresolved)
        value: Lexeme of the token right after '='
        line: Line reported for a mismatch
        name: Variable being assigned
        col: Column of the value token
        value_line: Line of the value token (0 when it is `line`)

    Returns:
        A TypeMismatch diagnostic, or None if the value is accepted or the
        type has no rule (String, user types, unresolved)
    """
    if declared_type is None:
        return None
    dtype = strip_nullable(declared_type)

    if dtype in INTEGRAL_TYPES:
        # literals, anything with a dot, and letter-suffixed values (3f, 10L, x)
        if (is_string_literal(value) or is_char_literal(value)
                or "." in value or ends_with_letter(value)):
            return err_type_mismatch(line, dtype, name, value, col, value_line)
        return None

    if dtype in FLOATING_TYPES:
        if is_char_literal(value) or is_string_literal(value):
            return err_type_mismatch(line, dtype, name, value, col, value_line)
        return None

    if dtype in CHAR_TYPES:
        if not is_char_literal(value):
            return err_char_expected(line, dtype, name, value, col, value_line)
        return None

    return None
