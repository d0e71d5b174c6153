import unittest

from engine import simulate
from utils import (EMPTY_COLOR, HIT_COLOR, REPLACED_COLOR, ReferenceParseError,
                   cell_label, format_ratio, format_reference_string, get_color,
                   parse_reference_string, random_reference_string, ratio)


class TestParseReferenceString(unittest.TestCase):

    def test_space_separated(self):
        self.assertEqual(parse_reference_string("7 0 1 2"), [7, 0, 1, 2])

    def test_comma_separated(self):
        self.assertEqual(parse_reference_string("0,1, 2 ,3"), [0, 1, 2, 3])

    def test_extra_whitespace(self):
        self.assertEqual(parse_reference_string("  4\t5\n6  "), [4, 5, 6])

    def test_negative_numbers(self):
        self.assertEqual(parse_reference_string("-1 2"), [-1, 2])

    def test_blank_is_empty(self):
        self.assertEqual(parse_reference_string(""), [])
        self.assertEqual(parse_reference_string("   "), [])

    def test_invalid_token(self):
        with self.assertRaises(ReferenceParseError) as ctx:
            parse_reference_string("1 two 3")
        self.assertIn("two", str(ctx.exception))

    def test_float_rejected(self):
        with self.assertRaises(ValueError):
            parse_reference_string("1 2.5")

    def test_format_round_trip(self):
        self.assertEqual(format_reference_string([7, 0, 1]), "7 0 1")


class TestRandomReferenceString(unittest.TestCase):

    def test_seeded_is_reproducible(self):
        self.assertEqual(random_reference_string(20, 9, seed=3),
                         random_reference_string(20, 9, seed=3))

    def test_bounds(self):
        pages = random_reference_string(50, 4, seed=0)
        self.assertEqual(len(pages), 50)
        self.assertTrue(all(0 <= p <= 4 for p in pages))


class TestPresentationHelpers(unittest.TestCase):

    def test_ratio(self):
        self.assertEqual(ratio(0, 0), 0.0)
        self.assertAlmostEqual(ratio(1, 4), 0.25)

    def test_format_ratio(self):
        self.assertEqual(format_ratio(0.0), "0.00")
        self.assertEqual(format_ratio(2 / 3), "0.67")

    def test_cell_label(self):
        self.assertEqual(cell_label(None), "-")
        self.assertEqual(cell_label(7), "7")

    def test_get_color(self):
        steps = simulate([7, 0, 7], 2, "fifo").steps
        # Page 0 just loaded into slot 1
        self.assertEqual(get_color(steps[2], 1), REPLACED_COLOR)
        self.assertEqual(get_color(steps[2], 0), EMPTY_COLOR)
        # Hit on page 7 in slot 0
        self.assertEqual(get_color(steps[3], 0), HIT_COLOR)
        self.assertEqual(get_color(steps[3], 1), EMPTY_COLOR)
        self.assertEqual(get_color(steps[0], 0), EMPTY_COLOR)


if __name__ == "__main__":
    unittest.main()
