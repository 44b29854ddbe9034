# User value: This test keeps error responses in one shape so clients can branch on error_code and find the upload in logs.
import asyncio
import json
import os
import unittest
from unittest.mock import patch

from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from utils.request_id import clear_request_context, set_file_id, set_request_id

_SAFE_ENV = {
    "FEATURE_PREFLIGHT_WORKFLOW": "0",
    "FEATURE_DETAILED_SCORE": "1",
    "DEFAULT_PRODUCT_TYPE": "sticker",
    "CORS_ALLOW_ORIGINS": "https://shop.example.com",
    "WORKFLOW_TTL_SEC": "3600",
    "MAX_ARTWORK_FILE_SIZE_MB": "100",
    "RECOMMENDED_ARTWORK_FILE_SIZE_MB": "50",
}

with patch.dict(os.environ, _SAFE_ENV):
    import app as api


def _request(path: str) -> Request:
    return Request({"type": "http", "method": "POST", "path": path, "query_string": b"", "headers": []})


class ErrorEnvelopeUnitTests(unittest.TestCase):
    def tearDown(self):
        clear_request_context()

    def test_error_codes_by_status(self):
        self.assertEqual(api._to_error_code(404, "Not Found"), "RESOURCE_NOT_FOUND")
        self.assertEqual(api._to_error_code(405, "Method Not Allowed"), "METHOD_NOT_ALLOWED")
        self.assertEqual(api._to_error_code(418, "teapot"), "HTTP_418")
        self.assertEqual(api._to_error_code(409, {"error_code": "workflow_state_conflict"}), "WORKFLOW_STATE_CONFLICT")

    # User value: a failed workflow call names the upload slot it was about.
    def test_http_error_body_carries_bound_file_id(self):
        set_request_id("req-12345678")
        set_file_id("upload-1")
        exc = StarletteHTTPException(
            status_code=409,
            detail={"error_code": "WORKFLOW_STATE_CONFLICT", "error_message": "already approved"},
        )
        response = asyncio.run(api.http_exception_handler(_request("/preflight/workflows/upload-1/results"), exc))
        body = json.loads(response.body)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(body["error_code"], "WORKFLOW_STATE_CONFLICT")
        self.assertEqual(body["error_message"], "already approved")
        self.assertEqual(body["request_id"], "req-12345678")
        self.assertEqual(body["file_id"], "upload-1")

    def test_http_error_body_without_file_id(self):
        exc = StarletteHTTPException(status_code=404, detail="Not Found")
        response = asyncio.run(api.http_exception_handler(_request("/nope"), exc))
        body = json.loads(response.body)
        self.assertEqual(body["error_code"], "RESOURCE_NOT_FOUND")
        self.assertEqual(body["path"], "/nope")
        self.assertNotIn("file_id", body)


if __name__ == "__main__":
    unittest.main()
