# Ethan Doughty
# classify.py
"""Lexeme classification and literal-shape predicates.

Pure functions over raw lexeme text. The scanner uses classify() to tag
words; the diagnostic pass uses the predicates to judge assignment values
and to spot misspelled keywords.
"""

from typing import Optional

from frontend.tokens import TokenClass

# Java + Kotlin keywords and primitive/boxed type names.
# Order matters only for closest_keyword() tie-breaking.
KEYWORDS = (
    "int", "float", "double", "char", "if", "else", "for", "while", "class",
    "public", "private", "return", "static", "void", "new",
    "fun", "var", "val", "when", "is", "in", "object", "null", "true", "false",
    "package", "import", "override", "data", "sealed", "lateinit",
    "Int", "Float", "Double", "Char", "String", "Boolean", "Long", "Short", "Byte",
)
KEYWORD_SET = frozenset(KEYWORDS)

# Keywords whose remaining line is captured as a single NAMESPACE token
NAMESPACE_KEYWORDS = frozenset({"package", "import"})

# Kotlin declaration introducers
DECL_KEYWORDS = frozenset({"var", "val"})

RELATIONAL_OPS = frozenset({"<", ">", "<=", ">=", "==", "!="})

# Exact edit distance is only computed below this length
LEVENSHTEIN_GUARD = 300
MAX_KEYWORD_DISTANCE = 2
MIN_KEYWORD_LIKE_LEN = 3


def is_keyword(word: str) -> bool:
    return word in KEYWORD_SET


def classify(lexeme: str) -> TokenClass:
    """Classify an alphabetic-leading word as KEYWORD or IDENTIFIER."""
    if is_keyword(lexeme):
        return TokenClass.KEYWORD
    return TokenClass.IDENTIFIER


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute costs.

    Inputs longer than LEVENSHTEIN_GUARD skip the DP table and return
    |len(a) - len(b)| + 3, which is always above the keyword threshold.
    """
    n, m = len(a), len(b)
    if n > LEVENSHTEIN_GUARD or m > LEVENSHTEIN_GUARD:
        return abs(n - m) + 3

    prev = list(range(m + 1))
    for i in range(1, n + 1):
        cur = [i] + [0] * m
        for j in range(1, m + 1):
            if a[i - 1] == b[j - 1]:
                cur[j] = prev[j - 1]
            else:
                cur[j] = 1 + min(prev[j - 1], prev[j], cur[j - 1])
        prev = cur
    return prev[m]


def is_keyword_like(word: str) -> bool:
    """True if word has at least 3 chars and is within distance 2 of any keyword."""
    if len(word) < MIN_KEYWORD_LIKE_LEN:
        return False
    return any(levenshtein(word, kw) <= MAX_KEYWORD_DISTANCE for kw in KEYWORDS)


def closest_keyword(word: str) -> Optional[str]:
    """Nearest keyword to a keyword-like word, or None.

    Ties go to the keyword listed first in KEYWORDS.
    """
    if len(word) < MIN_KEYWORD_LIKE_LEN:
        return None
    best = None
    best_dist = MAX_KEYWORD_DISTANCE + 1
    for kw in KEYWORDS:
        d = levenshtein(word, kw)
        if d < best_dist:
            best, best_dist = kw, d
    return best


# ----------------------
# Literal shape predicates
# ----------------------

def is_float_shaped(lexeme: str) -> bool:
    return "." in lexeme or "f" in lexeme or "F" in lexeme


def is_char_literal(lexeme: str) -> bool:
    return len(lexeme) >= 3 and lexeme[0] == "'" and lexeme[-1] == "'"


def is_string_literal(lexeme: str) -> bool:
    return len(lexeme) >= 2 and lexeme[0] == '"' and lexeme[-1] == '"'


def is_int_shaped(lexeme: str) -> bool:
    """All ASCII digits, with an optional single leading sign."""
    if not lexeme:
        return False
    body = lexeme[1:] if lexeme[0] in "+-" else lexeme
    return all("0" <= c <= "9" for c in body)


def is_relational_op(lexeme: str) -> bool:
    return lexeme in RELATIONAL_OPS


def ends_with_letter(lexeme: str) -> bool:
    """Last character is an ASCII letter (suffixed or identifier-like values)."""
    return bool(lexeme) and lexeme[-1].isascii() and lexeme[-1].isalpha()
