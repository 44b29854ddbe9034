# User value: This test validates re-upload tracking and admin approval so customers and staff share one status.
import unittest

from config import WORKFLOW_TTL_SEC
from services.preflight_workflow import (
    approve_workflow,
    get_workflow,
    normalize_file_id,
    record_preflight_result,
    workflow_key,
)
from services.print_ready import generate_preflight_result
from tests.helpers import FakeRedis, make_bad_metadata, make_metadata

SLOT = "upload-1"


class PreflightWorkflowUnitTests(unittest.TestCase):
    def setUp(self):
        self.r = FakeRedis()
        self.report = generate_preflight_result(make_metadata())

    def test_first_result_opens_record(self):
        ok, record = record_preflight_result(
            self.r, file_id=SLOT, report=self.report, product_type="sticker", user="cust-1"
        )
        self.assertTrue(ok)
        self.assertEqual(record["file_id"], SLOT)
        self.assertEqual(record["artwork_id"], self.report.file_id)
        self.assertEqual(record["status"], "WARNING")
        self.assertEqual(record["retries"], 0)
        self.assertEqual(record["last_score"], 93)
        self.assertEqual(record["user"], "cust-1")
        self.assertTrue(record["customer_notified"])
        self.assertTrue(record["customer_ready_to_proceed"])
        self.assertFalse(record["admin_approved"])
        self.assertEqual(self.r.ttls[workflow_key(SLOT)], WORKFLOW_TTL_SEC)

    # User value: support can see how many attempts a customer needed.
    def test_reupload_increments_retries(self):
        record_preflight_result(self.r, file_id=SLOT, report=self.report, product_type="sticker")
        ok, record = record_preflight_result(self.r, file_id=SLOT, report=self.report, product_type="sticker")
        self.assertTrue(ok)
        self.assertEqual(record["retries"], 1)

    # User value: a fixed re-upload lands on the same record as the failed one and unblocks approval.
    def test_corrected_upload_updates_same_slot(self):
        bad = generate_preflight_result(make_bad_metadata())
        fixed = generate_preflight_result(make_metadata(filename="flyer.jpg", file_format="jpg", color_space="rgb"))
        self.assertNotEqual(bad.file_id, fixed.file_id)

        ok, record = record_preflight_result(self.r, file_id=SLOT, report=bad, product_type="sticker")
        self.assertTrue(ok)
        self.assertEqual(record["status"], "FAIL")
        self.assertEqual(record["retries"], 0)

        ok, record = record_preflight_result(self.r, file_id=SLOT, report=fixed, product_type="sticker")
        self.assertTrue(ok)
        self.assertEqual(record["status"], "WARNING")
        self.assertEqual(record["retries"], 1)
        self.assertEqual(record["artwork_id"], fixed.file_id)
        self.assertTrue(record["customer_ready_to_proceed"])
        self.assertEqual(list(self.r.hashes), [workflow_key(SLOT)])

        ok, record = approve_workflow(self.r, file_id=SLOT)
        self.assertTrue(ok)
        self.assertEqual(record["status"], "APPROVED")

    def test_separate_slots_do_not_share_records(self):
        record_preflight_result(self.r, file_id="upload-1", report=self.report, product_type="sticker")
        ok, record = record_preflight_result(self.r, file_id="upload-2", report=self.report, product_type="sticker")
        self.assertTrue(ok)
        self.assertEqual(record["retries"], 0)

    def test_approve_passing_file(self):
        record_preflight_result(self.r, file_id=SLOT, report=self.report, product_type="sticker")
        ok, record = approve_workflow(self.r, file_id=SLOT, admin_notes="  looks good ")
        self.assertTrue(ok)
        self.assertEqual(record["status"], "APPROVED")
        self.assertTrue(record["admin_approved"])
        self.assertEqual(record["admin_notes"], "looks good")

    def test_approved_record_is_not_reopened(self):
        record_preflight_result(self.r, file_id=SLOT, report=self.report, product_type="sticker")
        approve_workflow(self.r, file_id=SLOT)
        ok, record = record_preflight_result(self.r, file_id=SLOT, report=self.report, product_type="sticker")
        self.assertFalse(ok)
        self.assertEqual(record["status"], "APPROVED")

    # User value: failing files stay blocked until the customer fixes them.
    def test_failed_file_cannot_be_approved(self):
        report = generate_preflight_result(make_bad_metadata())
        record_preflight_result(self.r, file_id=SLOT, report=report, product_type="sticker")
        ok, record = approve_workflow(self.r, file_id=SLOT)
        self.assertFalse(ok)
        self.assertEqual(record["status"], "FAIL")
        self.assertFalse(record["customer_ready_to_proceed"])

    def test_missing_record(self):
        self.assertIsNone(get_workflow(self.r, "file-missing"))
        self.assertEqual(approve_workflow(self.r, file_id="file-missing"), (False, None))

    def test_normalize_file_id(self):
        self.assertEqual(normalize_file_id("  up/load 1 "), "upload1")
        self.assertEqual(normalize_file_id("order-7:front.v2"), "order-7:front.v2")
        self.assertEqual(normalize_file_id("///"), "")
        self.assertEqual(normalize_file_id(None), "")
        self.assertEqual(len(normalize_file_id("a" * 300)), 128)


if __name__ == "__main__":
    unittest.main()
