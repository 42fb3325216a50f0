"""Tests for locating and repairing the JSON payload in model output.

Validates:
  - Fenced blocks win over surrounding prose
  - Object, array and whole-text fallbacks
  - Trailing comma, BOM and stray fence repairs
  - ParseError carries both parser messages
"""

from __future__ import annotations

import json
import sys
import unittest

from circuitmind.pipeline.solution import (
    ParseError, SolutionResponseError, extract_json_payload, interpret_response_text,
    parse_with_repair, sanitize_json_text,
)


class TestExtractJsonPayload(unittest.TestCase):

    def test_prose_then_fenced_json(self):
        """Prose followed by a ```json block yields the block."""
        text = 'Here is the design:\n```json\n{ "a": 1 }\n```\nLet me know.'
        self.assertEqual(json.loads(extract_json_payload(text)), {"a": 1})

    def test_untagged_fence(self):
        """Fences without a language tag are also unwrapped."""
        text = "```\n[1, 2]\n```"
        self.assertEqual(extract_json_payload(text), "[1, 2]")

    def test_clean_text_unchanged(self):
        """Already-clean JSON is returned trimmed."""
        self.assertEqual(extract_json_payload('  {"a": 1}  '), '{"a": 1}')

    def test_object_inside_prose(self):
        """First '{' to last '}' when there is no fence."""
        text = 'Sure! {"a": {"b": 2}} Hope that helps.'
        self.assertEqual(extract_json_payload(text), '{"a": {"b": 2}}')

    def test_array_inside_prose(self):
        """Falls back to '[' ... ']' when there are no braces."""
        self.assertEqual(extract_json_payload("values: [1, 2] done"), "[1, 2]")

    def test_fence_without_json_falls_back_to_full_text(self):
        """A fence holding prose falls back to braces in the full text."""
        text = '```\nno data here\n```\n{"a": 1}'
        self.assertEqual(extract_json_payload(text), '{"a": 1}')

    def test_nothing_found(self):
        """Text with no JSON shape comes back unchanged."""
        self.assertEqual(extract_json_payload("not json at all"), "not json at all")


class TestParseWithRepair(unittest.TestCase):

    def test_strict_parse(self):
        """Valid JSON parses on the first pass."""
        self.assertEqual(parse_with_repair('{"a": [1, 2]}'), {"a": [1, 2]})

    def test_trailing_commas(self):
        """Trailing commas before '}' and ']' are removed."""
        self.assertEqual(parse_with_repair('{"a":1,}'), {"a": 1})
        self.assertEqual(parse_with_repair('{"a": [1, 2, ], }'), {"a": [1, 2]})

    def test_byte_order_mark(self):
        """A leading BOM is stripped."""
        self.assertEqual(parse_with_repair('\ufeff{"a": 1}'), {"a": 1})

    def test_stray_fences(self):
        """Fence markers left in the text are removed."""
        self.assertEqual(parse_with_repair('```json\n{"a": 1}\n```'), {"a": 1})

    def test_unsalvageable_raises(self):
        """Prose that is not JSON raises ParseError."""
        with self.assertRaises(ParseError) as ctx:
            parse_with_repair("not json at all")
        err = ctx.exception
        self.assertIsInstance(err, SolutionResponseError)
        self.assertTrue(err.message)
        self.assertTrue(err.first_error)
        self.assertEqual(err.text, "not json at all")

    @unittest.skipUnless(hasattr(sys, "get_int_max_str_digits"),
                         "interpreter has no integer digit limit")
    def test_oversized_integer_raises_parse_error(self):
        """Integers past the decoder digit limit are a ParseError."""
        text = '{"solutions": [{"cost": ' + "9" * 5000 + "}]}"
        with self.assertRaises(ParseError):
            parse_with_repair(text)
        with self.assertRaises(SolutionResponseError):
            interpret_response_text(text)

    def test_deep_nesting_raises_parse_error(self):
        """Nesting past the decoder recursion limit is a ParseError."""
        text = "[" * 100000 + "]" * 100000
        with self.assertRaises(ParseError):
            parse_with_repair(text)
        with self.assertRaises(SolutionResponseError):
            interpret_response_text(text)

    def test_sanitize_order(self):
        """Repairs apply in order and trim the result."""
        self.assertEqual(sanitize_json_text('\ufeff ```json [1,] ``` '), "[1]")


if __name__ == "__main__":
    unittest.main()
