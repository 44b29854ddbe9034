# User value: This test validates workflow endpoint behavior so tracked uploads and approvals respond predictably.
import asyncio
import unittest
from unittest.mock import patch

from fastapi import HTTPException

from routes.health import health
from routes.preflight_workflow import approve_artwork, submit_artwork, workflow_status
from schemas.requests import PreflightRequest, WorkflowApprovalRequest
from tests.helpers import FakeRedis, make_bad_metadata, make_metadata

TOKEN = "Bearer test-token"


class PreflightWorkflowEndpointUnitTests(unittest.TestCase):
    def setUp(self):
        self.r = FakeRedis()
        self.patches = [
            patch("routes.preflight_workflow.r", self.r),
            patch("routes.preflight_workflow.is_workflow_enabled", return_value=True),
        ]
        for p in self.patches:
            p.start()

    def tearDown(self):
        for p in self.patches:
            p.stop()

    # User value: ensures disabled feature gate does not change user flow unexpectedly.
    def test_disabled_returns_404(self):
        async def run_case():
            with patch("routes.preflight_workflow.is_workflow_enabled", return_value=False):
                with self.assertRaises(HTTPException) as ctx:
                    await workflow_status(file_id="file-x", token=TOKEN)
                self.assertEqual(ctx.exception.status_code, 404)
                self.assertEqual(ctx.exception.detail["error_code"], "FEATURE_DISABLED")

        asyncio.run(run_case())

    def test_submit_status_and_approve(self):
        payload = PreflightRequest(metadata=make_metadata(), product_type="sticker")

        async def run_case():
            submitted = await submit_artwork(file_id=" upload-1 ", payload=payload, token=TOKEN, x_customer_id=" cust-1 ")
            file_id = submitted.workflow.file_id
            self.assertEqual(file_id, "upload-1")
            self.assertEqual(submitted.workflow.status, "WARNING")
            self.assertEqual(submitted.workflow.user, "cust-1")
            self.assertEqual(submitted.feedback.status, "ready")

            fetched = await workflow_status(file_id=file_id, token=TOKEN)
            self.assertEqual(fetched.workflow.last_score, 93)

            approved = await approve_artwork(
                file_id=file_id,
                payload=WorkflowApprovalRequest(admin_notes="ok"),
                token=TOKEN,
            )
            self.assertEqual(approved.workflow.status, "APPROVED")

            with self.assertRaises(HTTPException) as ctx:
                await submit_artwork(file_id="upload-1", payload=payload, token=TOKEN, x_customer_id=None)
            self.assertEqual(ctx.exception.status_code, 409)
            self.assertEqual(ctx.exception.detail["error_code"], "WORKFLOW_STATE_CONFLICT")

        asyncio.run(run_case())

    # User value: failing artwork cannot be approved by mistake.
    def test_approve_failed_returns_409(self):
        payload = PreflightRequest(metadata=make_bad_metadata())

        async def run_case():
            submitted = await submit_artwork(file_id="upload-2", payload=payload, token=TOKEN, x_customer_id=None)
            self.assertEqual(submitted.workflow.status, "FAIL")
            with self.assertRaises(HTTPException) as ctx:
                await approve_artwork(file_id=submitted.workflow.file_id, payload=WorkflowApprovalRequest(), token=TOKEN)
            self.assertEqual(ctx.exception.status_code, 409)
            self.assertEqual(ctx.exception.detail["error_code"], "WORKFLOW_STATE_CONFLICT")

        asyncio.run(run_case())

    # User value: a corrected re-upload to the same slot counts as a retry and can then be approved.
    def test_corrected_reupload_is_a_retry(self):
        bad = PreflightRequest(metadata=make_bad_metadata())
        fixed = PreflightRequest(metadata=make_metadata(filename="flyer.jpg", file_format="jpg", color_space="rgb"))

        async def run_case():
            first = await submit_artwork(file_id="order-9", payload=bad, token=TOKEN, x_customer_id=None)
            self.assertEqual(first.workflow.status, "FAIL")
            self.assertEqual(first.workflow.retries, 0)

            second = await submit_artwork(file_id="order-9", payload=fixed, token=TOKEN, x_customer_id=None)
            self.assertEqual(second.workflow.status, "WARNING")
            self.assertEqual(second.workflow.retries, 1)
            self.assertNotEqual(second.workflow.artwork_id, first.workflow.artwork_id)

            approved = await approve_artwork(file_id="order-9", payload=WorkflowApprovalRequest(), token=TOKEN)
            self.assertEqual(approved.workflow.status, "APPROVED")

        asyncio.run(run_case())

    def test_invalid_file_id_returns_400(self):
        payload = PreflightRequest(metadata=make_metadata())

        async def run_case():
            with self.assertRaises(HTTPException) as ctx:
                await submit_artwork(file_id="///", payload=payload, token=TOKEN, x_customer_id=None)
            self.assertEqual(ctx.exception.status_code, 400)
            self.assertEqual(ctx.exception.detail["error_code"], "INVALID_FILE_ID")
            self.assertEqual(self.r.hashes, {})

        asyncio.run(run_case())

    def test_unknown_file_returns_404(self):
        async def run_case():
            with self.assertRaises(HTTPException) as ctx:
                await workflow_status(file_id="file-missing", token=TOKEN)
            self.assertEqual(ctx.exception.detail["error_code"], "WORKFLOW_NOT_FOUND")
            with self.assertRaises(HTTPException) as ctx:
                await approve_artwork(file_id="file-missing", payload=WorkflowApprovalRequest(), token=TOKEN)
            self.assertEqual(ctx.exception.status_code, 404)

        asyncio.run(run_case())

    def test_store_outage_returns_503(self):
        self.r.fail = True

        async def run_case():
            with self.assertRaises(HTTPException) as ctx:
                await workflow_status(file_id="file-x", token=TOKEN)
            self.assertEqual(ctx.exception.status_code, 503)

        asyncio.run(run_case())

    def test_health_reports_store(self):
        with patch("routes.health.is_workflow_enabled", return_value=False):
            self.assertEqual(health()["workflow_store"], "disabled")
        with patch("routes.health.is_workflow_enabled", return_value=True), patch("routes.health.workflow_store", self.r):
            self.assertEqual(health()["workflow_store"], "connected")
            self.r.fail = True
            self.assertEqual(health()["status"], "DEGRADED")


if __name__ == "__main__":
    unittest.main()
