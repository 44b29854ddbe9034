# User value: This test validates product print requirements so artwork is always checked against the right target.
import unittest

from pydantic import ValidationError

from schemas.preflight import PrintSpecification
from services.print_specs import (
    DEFAULT_PRODUCT_TYPE,
    PRINT_SPECS,
    PRODUCT_TYPES,
    VALIDATION_RULES,
    get_specification,
    resolve_product_type,
)


class PrintSpecsUnitTests(unittest.TestCase):
    # User value: confirms every product is available for lookup.
    def test_known_products(self):
        self.assertEqual(set(PRODUCT_TYPES), {"sticker", "label", "custom"})
        self.assertEqual(DEFAULT_PRODUCT_TYPE, "custom")

    # User value: unknown or blank products fall back to custom rules instead of failing.
    def test_unknown_product_falls_back_to_custom(self):
        self.assertEqual(resolve_product_type("poster"), "custom")
        self.assertEqual(resolve_product_type(""), "custom")
        self.assertEqual(resolve_product_type(None), "custom")
        self.assertIs(get_specification("poster"), PRINT_SPECS["custom"])

    def test_lookup_ignores_case_and_whitespace(self):
        self.assertEqual(resolve_product_type("  Sticker "), "sticker")
        self.assertIs(get_specification("LABEL"), PRINT_SPECS["label"])

    # User value: keeps the dpi ordering sane for every product so resolution checks are meaningful.
    def test_every_spec_orders_dpi_limits(self):
        for key, spec in PRINT_SPECS.items():
            with self.subTest(product=key):
                self.assertLessEqual(spec.min_dpi, spec.recommended_dpi)
                self.assertLessEqual(spec.recommended_dpi, spec.max_dpi)
                self.assertEqual(spec.bleed.top, 0.125)

    def test_label_requires_cmyk(self):
        self.assertTrue(PRINT_SPECS["label"].requires_cmyk)
        self.assertFalse(PRINT_SPECS["sticker"].requires_cmyk)
        self.assertNotIn("jpg", PRINT_SPECS["label"].allowed_formats)

    # User value: prevents the shared tables from being changed at runtime.
    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            PRINT_SPECS["poster"] = PRINT_SPECS["custom"]
        with self.assertRaises(TypeError):
            VALIDATION_RULES["min_dpi"] = 72
        with self.assertRaises(ValidationError):
            PRINT_SPECS["sticker"].width = 10

    def test_inverted_dpi_limits_rejected(self):
        with self.assertRaises(ValidationError):
            PrintSpecification(
                width=1,
                height=1,
                min_dpi=300,
                max_dpi=600,
                recommended_dpi=200,
                allowed_formats=("pdf",),
            )


if __name__ == "__main__":
    unittest.main()
