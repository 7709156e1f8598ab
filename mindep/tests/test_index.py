import unittest

from mindep.fd.dependency import Dependency, canonical_key
from mindep.index import DependencyIndex, has_determining_subset


class TestDependencyIndex(unittest.TestCase):
    def setUp(self) -> None:
        self.index = DependencyIndex()
        self.index.add(("A",), "D")
        self.index.add(("B", "C"), "E")

    def test_single_attribute_subset(self) -> None:
        self.assertTrue(self.index.has_determining_subset(("A", "B"), "D"))

    def test_larger_subset_is_checked(self) -> None:
        # a pair, not only single attributes, can make a triple non-minimal
        self.assertTrue(self.index.has_determining_subset(("A", "B", "C"), "E"))
        self.assertTrue(has_determining_subset(("C", "B", "D"), "E", self.index))

    def test_other_rhs_is_not_used(self) -> None:
        self.assertFalse(self.index.has_determining_subset(("A", "B"), "E"))

    def test_the_set_itself_is_not_a_proper_subset(self) -> None:
        self.assertFalse(self.index.has_determining_subset(("A",), "D"))
        self.assertFalse(self.index.has_determining_subset(("C", "B"), "E"))

    def test_order_insensitive(self) -> None:
        self.assertTrue(self.index.contains(("C", "B"), "E"))
        self.assertFalse(self.index.add(("C", "B"), "E"))
        self.assertEqual(len(self.index), 2)

    def test_rejects_non_minimal_and_trivial(self) -> None:
        with self.assertRaises(ValueError):
            self.index.add(("A", "C"), "D")
        with self.assertRaises(ValueError):
            self.index.add(("A", "C"), "A")

    def test_items(self) -> None:
        self.assertEqual(list(self.index.items()), [(("A",), "D"), (("B", "C"), "E")])

    def test_comma_in_attribute_name(self) -> None:
        index = DependencyIndex()
        index.add(("x,y",), "r")
        self.assertFalse(index.contains(("x", "y"), "r"))
        self.assertTrue(index.add(("x", "y"), "r"))
        self.assertFalse(index.has_determining_subset(("x", "y", "z"), "x,y"))


class TestDependency(unittest.TestCase):
    def test_str_and_key(self) -> None:
        dependency = Dependency.create(dependent="c", determinants=["b", "a"])
        self.assertEqual(str(dependency), "b,a -> c")
        self.assertEqual(dependency.key, canonical_key(["a", "b"]))
        self.assertEqual(dependency.size, 2)

    def test_trivial_dependency_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Dependency.create(dependent="a", determinants=["a", "b"])
        with self.assertRaises(ValueError):
            Dependency.create(dependent="a", determinants=[])


if __name__ == "__main__":
    unittest.main()
