# User value: This test validates that every scoring model answers in the same shape so the UI can switch between them.
import unittest

from schemas.preflight import Severity
from services.scoring import (
    STRATEGY_NAMES,
    BaseScorer,
    DeductionStrategy,
    PrintReadyStrategy,
    WeightedFactorStrategy,
    get_scorer,
)
from tests.helpers import make_metadata


class ScoringStrategiesUnitTests(unittest.TestCase):
    def test_registry(self):
        self.assertEqual(STRATEGY_NAMES, ("deduction", "weighted", "print_ready"))
        self.assertIsInstance(get_scorer(" Weighted "), WeightedFactorStrategy)
        self.assertIsInstance(get_scorer("deduction"), DeductionStrategy)

    def test_unknown_strategy_raises(self):
        with self.assertRaises(ValueError):
            get_scorer("average")

    def test_base_scorer_is_abstract(self):
        with self.assertRaises(TypeError):
            BaseScorer()

    # User value: clean artwork is ready under every model.
    def test_clean_file_ready_everywhere(self):
        meta = make_metadata()
        for name in STRATEGY_NAMES:
            with self.subTest(strategy=name):
                out = get_scorer(name).evaluate(meta, "sticker")
                self.assertEqual(out.strategy, name)
                self.assertEqual(out.product_type, "sticker")
                self.assertTrue(out.ready_to_print)
                self.assertEqual(out.blocking, 0)

    def test_deduction_and_weighted_scores(self):
        meta = make_metadata(color_space="rgb", width=216, height=144)
        deduction = get_scorer("deduction").evaluate(meta, "label")
        weighted = get_scorer("weighted").evaluate(meta, "label")
        self.assertEqual(deduction.score, 80)
        self.assertEqual(weighted.score, 40)
        self.assertEqual(deduction.findings[0].code, "wrong-color-space")
        self.assertEqual(deduction.findings[0].severity, Severity.BLOCKING)
        self.assertFalse(weighted.ready_to_print)

    def test_print_ready_maps_checks_to_unified_severity(self):
        out = get_scorer("print_ready").evaluate(make_metadata(), "poster")
        self.assertEqual(out.product_type, "custom")
        self.assertEqual(out.score, 93)
        self.assertEqual(out.advisory, 1)
        self.assertEqual(out.informational, 0)
        self.assertEqual(
            sum(1 for f in out.findings if f.severity == Severity.PASSED),
            len(out.findings) - 1,
        )

    def test_notices_are_informational(self):
        out = get_scorer("deduction").evaluate(make_metadata(dpi=900), "sticker")
        self.assertEqual(out.informational, 1)
        self.assertEqual(out.score, 100)
        self.assertIsInstance(PrintReadyStrategy(), BaseScorer)


if __name__ == "__main__":
    unittest.main()
