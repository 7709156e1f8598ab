import unittest
from itertools import combinations

from mindep.combination import generate_combinations, iter_strata, proper_subsets
from mindep.util.errors import ConfigurationException


class TestGenerateCombinations(unittest.TestCase):
    def setUp(self) -> None:
        self.attributes = ["A", "B", "C", "D"]

    def test_count_for_four_attributes(self) -> None:
        result = generate_combinations(self.attributes, 3)
        self.assertEqual(len(result), 4 + 6 + 4)

    def test_no_duplicates_and_bounded_size(self) -> None:
        result = generate_combinations(self.attributes, 3)
        self.assertEqual(len({frozenset(s) for s in result}), len(result))
        self.assertTrue(all(1 <= len(s) <= 3 for s in result))

    def test_non_decreasing_size(self) -> None:
        sizes = [len(s) for s in generate_combinations(self.attributes, 3)]
        self.assertEqual(sizes, sorted(sizes))

    def test_ties_follow_column_order(self) -> None:
        result = generate_combinations(self.attributes, 2)
        self.assertEqual(
            result[:5],
            [("A",), ("B",), ("C",), ("D",), ("A", "B")],
        )
        self.assertEqual(result[4:], list(combinations(self.attributes, 2)))

    def test_deterministic(self) -> None:
        self.assertEqual(
            generate_combinations(self.attributes, 3),
            generate_combinations(self.attributes, 3),
        )

    def test_max_size_larger_than_attributes(self) -> None:
        result = generate_combinations(["A", "B"], 5)
        self.assertEqual(result, [("A",), ("B",), ("A", "B")])

    def test_invalid_max_size(self) -> None:
        for bad in (0, -1, 1.5, True):
            with self.assertRaises(ConfigurationException):
                generate_combinations(self.attributes, bad)  # type: ignore

    def test_duplicate_attributes(self) -> None:
        with self.assertRaises(ConfigurationException):
            generate_combinations(["A", "A"], 2)

    def test_strata(self) -> None:
        strata = list(iter_strata(self.attributes, 3))
        self.assertEqual([size for size, _ in strata], [1, 2, 3])
        self.assertEqual([len(s) for _, s in strata], [4, 6, 4])


class TestProperSubsets(unittest.TestCase):
    def test_three_attributes(self) -> None:
        result = list(proper_subsets(("A", "B", "C")))
        self.assertEqual(len(result), 2**3 - 2)
        self.assertNotIn(("A", "B", "C"), result)
        self.assertIn(("A", "C"), result)
        self.assertIn(("B",), result)

    def test_single_attribute_has_none(self) -> None:
        self.assertEqual(list(proper_subsets(("A",))), [])


if __name__ == "__main__":
    unittest.main()
