"""Unit tests for lexeme classification and literal predicates."""
import sys
import os
# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import unittest
from frontend.classify import (
    KEYWORDS,
    LEVENSHTEIN_GUARD,
    classify,
    closest_keyword,
    ends_with_letter,
    is_char_literal,
    is_float_shaped,
    is_int_shaped,
    is_keyword,
    is_keyword_like,
    is_relational_op,
    is_string_literal,
    levenshtein,
)
from frontend.tokens import TokenClass


class TestKeywords(unittest.TestCase):
    def test_keyword_count(self):
        self.assertEqual(len(KEYWORDS), 40)
        self.assertEqual(len(set(KEYWORDS)), 40)

    def test_keywords_are_case_sensitive(self):
        self.assertTrue(is_keyword("int"))
        self.assertTrue(is_keyword("Int"))
        self.assertFalse(is_keyword("INT"))
        self.assertFalse(is_keyword("string"))

    def test_classify(self):
        self.assertIs(classify("fun"), TokenClass.KEYWORD)
        self.assertIs(classify("String"), TokenClass.KEYWORD)
        self.assertIs(classify("main"), TokenClass.IDENTIFIER)
        self.assertIs(classify("_tmp1"), TokenClass.IDENTIFIER)


class TestLevenshtein(unittest.TestCase):
    def test_identity_and_empty(self):
        self.assertEqual(levenshtein("", ""), 0)
        self.assertEqual(levenshtein("abc", "abc"), 0)
        self.assertEqual(levenshtein("", "abc"), 3)
        self.assertEqual(levenshtein("abc", ""), 3)

    def test_classic_pairs(self):
        self.assertEqual(levenshtein("kitten", "sitting"), 3)
        self.assertEqual(levenshtein("vaar", "var"), 1)
        self.assertEqual(levenshtein("retrun", "return"), 2)

    def test_symmetric(self):
        self.assertEqual(levenshtein("whlie", "while"), levenshtein("while", "whlie"))

    def test_guard_skips_table(self):
        long_word = "a" * (LEVENSHTEIN_GUARD + 1)
        self.assertEqual(levenshtein(long_word, "int"), len(long_word) - 3 + 3)
        # exactly at the guard the real distance is computed
        at_guard = "a" * LEVENSHTEIN_GUARD
        self.assertEqual(levenshtein(at_guard, at_guard), 0)


class TestKeywordLike(unittest.TestCase):
    def test_misspellings(self):
        self.assertTrue(is_keyword_like("vaar"))
        self.assertTrue(is_keyword_like("retrun"))
        self.assertTrue(is_keyword_like("whle"))

    def test_short_words_never_match(self):
        self.assertFalse(is_keyword_like("va"))
        self.assertFalse(is_keyword_like("x"))

    def test_distant_words(self):
        self.assertFalse(is_keyword_like("counter"))
        self.assertFalse(is_keyword_like("a" * 400))

    def test_closest_keyword(self):
        self.assertEqual(closest_keyword("vaar"), "var")
        self.assertEqual(closest_keyword("retrun"), "return")
        self.assertEqual(closest_keyword("whle"), "while")
        self.assertIsNone(closest_keyword("counter"))
        self.assertIsNone(closest_keyword("in"))

    def test_closest_keyword_tie_uses_list_order(self):
        # 'vat' is distance 1 from both 'var' and 'val'
        self.assertEqual(closest_keyword("vat"), "var")


class TestLiteralShapes(unittest.TestCase):
    def test_float_shaped(self):
        self.assertTrue(is_float_shaped("3.14"))
        self.assertTrue(is_float_shaped("2f"))
        self.assertTrue(is_float_shaped("2F"))
        self.assertFalse(is_float_shaped("42"))

    def test_char_literal(self):
        self.assertTrue(is_char_literal("'a'"))
        self.assertTrue(is_char_literal(r"'\n'"))
        self.assertFalse(is_char_literal("''"))
        self.assertFalse(is_char_literal("'a"))
        self.assertFalse(is_char_literal("a"))

    def test_string_literal(self):
        self.assertTrue(is_string_literal('""'))
        self.assertTrue(is_string_literal('"hi"'))
        self.assertFalse(is_string_literal('"hi'))
        self.assertFalse(is_string_literal('"'))

    def test_int_shaped(self):
        self.assertTrue(is_int_shaped("42"))
        self.assertTrue(is_int_shaped("-7"))
        self.assertTrue(is_int_shaped("+0"))
        self.assertFalse(is_int_shaped(""))
        self.assertFalse(is_int_shaped("4.2"))
        self.assertFalse(is_int_shaped("10L"))

    def test_relational(self):
        for op in ("<", ">", "<=", ">=", "==", "!="):
            self.assertTrue(is_relational_op(op))
        for op in ("=", "===", "&&", "?:"):
            self.assertFalse(is_relational_op(op))

    def test_ends_with_letter(self):
        self.assertTrue(ends_with_letter("10L"))
        self.assertTrue(ends_with_letter("x"))
        self.assertFalse(ends_with_letter("10"))
        self.assertFalse(ends_with_letter(""))
        self.assertFalse(ends_with_letter("1é"))


if __name__ == "__main__":
    unittest.main()
