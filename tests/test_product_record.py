# tests/test_product_record.py

"""Tests for the PricePoint and ProductRecord models."""

import unittest

from src.models.product_record import PricePoint, ProductRecord


class TestPricePoint(unittest.TestCase):
    """PricePoint JSON helpers."""

    def test_to_dict(self) -> None:
        self.assertEqual(
            PricePoint(9.99, 1000).to_dict(),
            {"price": 9.99, "timestamp": 1000},
        )

    def test_from_dict_coerces_types(self) -> None:
        """Integer prices come back as floats."""
        point = PricePoint.from_dict({"price": 10, "timestamp": 5})
        self.assertIsInstance(point.price, float)
        self.assertEqual(point.timestamp, 5)

    def test_from_dict_missing_key(self) -> None:
        with self.assertRaises(KeyError):
            PricePoint.from_dict({"price": 1.0})


class TestProductRecord(unittest.TestCase):
    """ProductRecord defaults and helpers."""

    def test_default_history_not_shared(self) -> None:
        """Each record gets its own history list."""
        a = ProductRecord("A", "ua")
        b = ProductRecord("B", "ub")
        a.history.append(PricePoint(1.0, 1))
        self.assertEqual(b.history, [])

    def test_latest(self) -> None:
        record = ProductRecord("A", "u", [PricePoint(1.0, 1), PricePoint(2.0, 2)])
        self.assertEqual(record.latest, PricePoint(2.0, 2))
        self.assertIsNone(ProductRecord("A", "u").latest)

    def test_from_dict_missing_title(self) -> None:
        with self.assertRaises(KeyError):
            ProductRecord.from_dict({"url": "u", "history": []})

    def test_from_dict_null_title(self) -> None:
        """A null title is rejected rather than stored as "None"."""
        with self.assertRaises(TypeError):
            ProductRecord.from_dict({"title": None, "url": "u", "history": []})

    def test_from_dict_numeric_url(self) -> None:
        with self.assertRaises(TypeError):
            ProductRecord.from_dict({"title": "t", "url": 5, "history": []})


if __name__ == "__main__":
    unittest.main()
