import unittest

from odata_to_code.utils import join_namespace, normalize_qualified_name


class TestNormalizeQualifiedName(unittest.TestCase):
    def test_multi_part_namespace_is_collapsed(self):
        self.assertEqual(normalize_qualified_name("Company.Sub.Order"), "CompanySub.Order")
        self.assertEqual(normalize_qualified_name("A.B.C.D"), "ABC.D")

    def test_single_dot_survives(self):
        for name in ["Company.Sub.Order", "A.B.C.D.E", "x.y.z"]:
            self.assertEqual(normalize_qualified_name(name).count("."), 1)

    def test_two_segments_unchanged(self):
        self.assertEqual(normalize_qualified_name("Orders.Order"), "Orders.Order")
        self.assertEqual(normalize_qualified_name("Edm.String"), "Edm.String")

    def test_unqualified_unchanged(self):
        self.assertEqual(normalize_qualified_name("void"), "void")
        self.assertEqual(normalize_qualified_name(""), "")


class TestJoinNamespace(unittest.TestCase):
    def test_join_namespace(self):
        self.assertEqual(join_namespace("Company.Sales"), "CompanySales")
        self.assertEqual(join_namespace("Default"), "Default")


if __name__ == "__main__":
    unittest.main()
