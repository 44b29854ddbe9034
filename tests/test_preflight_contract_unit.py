# User value: This test keeps the published preflight vocabulary in step with the models clients receive.
import unittest
from typing import get_args

from routes.contract import preflight_contract
from schemas.preflight import (
    CheckSeverity,
    DetailedScore,
    FeedbackStatus,
    IssueLevel,
    PreflightResult,
    PrintReadyFeedback,
    Severity,
)
from schemas.preflight_contract import (
    APPROVABLE_WORKFLOW_STATUSES,
    CHECK_SEVERITIES,
    DETAILED_SCORE_FIELDS,
    DISPLAY_SEVERITIES,
    FEEDBACK_FIELDS,
    FEEDBACK_STATUSES,
    ISSUE_LEVELS,
    OVERALL_TO_WORKFLOW_STATUS,
    PREFLIGHT_RESULT_FIELDS,
    WORKFLOW_FIELDS,
    WORKFLOW_STATUSES,
)
from schemas.responses import WorkflowRecord


class PreflightContractUnitTests(unittest.TestCase):
    def test_vocabularies_match_models(self):
        self.assertEqual(set(ISSUE_LEVELS), set(get_args(IssueLevel)))
        self.assertEqual(set(CHECK_SEVERITIES), set(get_args(CheckSeverity)))
        self.assertEqual(set(FEEDBACK_STATUSES), set(get_args(FeedbackStatus)))
        self.assertEqual(set(DISPLAY_SEVERITIES), {s.value for s in Severity})

    # User value: field lists published to clients match what the API actually returns.
    def test_field_sets_match_models(self):
        self.assertEqual(set(PREFLIGHT_RESULT_FIELDS), set(PreflightResult.model_fields))
        self.assertEqual(set(DETAILED_SCORE_FIELDS), set(DetailedScore.model_fields))
        self.assertEqual(set(FEEDBACK_FIELDS), set(PrintReadyFeedback.model_fields))
        self.assertEqual(set(WORKFLOW_FIELDS), set(WorkflowRecord.model_fields))

    def test_workflow_statuses(self):
        self.assertEqual(set(OVERALL_TO_WORKFLOW_STATUS.values()) - set(WORKFLOW_STATUSES), set())
        self.assertEqual(set(APPROVABLE_WORKFLOW_STATUSES), {"PASS", "WARNING"})

    def test_contract_endpoint(self):
        out = preflight_contract()
        self.assertEqual(out["product_types"], ["sticker", "label", "custom"])
        self.assertEqual(out["fallback_product_type"], "custom")
        self.assertEqual(out["scoring_strategies"], ["deduction", "weighted", "print_ready"])
        self.assertIn("workflow_enabled", out["capabilities"])


if __name__ == "__main__":
    unittest.main()
