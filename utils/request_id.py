# User value: This file carries the request and artwork ids through a request so every log line can be traced to one upload.
import re
import uuid
from contextvars import ContextVar

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_FILE_ID_CTX: ContextVar[str | None] = ContextVar("preflight_file_id", default=None)
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{8,128}$")


def normalize_request_id(raw: str | None) -> str:
    value = (raw or "").strip()
    if value and _REQUEST_ID_RE.match(value):
        return value
    return f"req-{uuid.uuid4().hex}"


def set_request_id(value: str | None) -> None:
    _REQUEST_ID_CTX.set(value)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


# User value: tags the rest of the request with the artwork being checked so logs group by file.
def set_file_id(value: str | None) -> None:
    _FILE_ID_CTX.set(str(value or "").strip() or None)


def get_file_id() -> str | None:
    return _FILE_ID_CTX.get()


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _FILE_ID_CTX.set(None)
