"""
Student API client - async HTTP access to the remote certificate service.

Wraps httpx.AsyncClient around the service contract:
- GET    /api/students/courses/search?q=   course suggestions
- GET    /api/students/search?q=           record by registration number
- GET    /api/students/check-regno/{regNo} uniqueness check
- POST   /api/students                     create (multipart)
- PUT    /api/students/{regNo}             update (multipart)
- DELETE /api/students/{regNo}             delete
- GET    /uploads/{filePath}               stored image bytes

Every request is logged on the http channel with its latency and carries the
current operation ID as X-Request-ID. Failures are translated into the
certform.errors taxonomy; nothing httpx-specific leaks to callers.
"""

import time
from urllib.parse import quote

import httpx

from certform.config import Settings, upload_path
from certform.errors import NotFound, ServerRejected, TransportFailure
from certform.logging_config import get_logger, log_with_context, operation_id_var
from certform.models.student_record import Attachment

logger = get_logger("http")


def _segment(value: str) -> str:
    """Quote a value for use as a single path segment."""
    return quote(str(value), safe="")


def _multipart(fields: dict, attachment: Attachment = None) -> list:
    """
    Build httpx multipart parts from text fields and an optional file.

    Text fields are sent as filename-less parts so the body is
    multipart/form-data even when no file is attached.
    """
    parts = [(name, (None, str(value).encode("utf-8"))) for name, value in fields.items()]
    if attachment is not None:
        parts.append(("file", (attachment.filename, attachment.content, attachment.content_type)))
    return parts


class StudentApiClient:
    """Async client for the certificate service, configured from Settings."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport = None):
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request and return the response, raising on any failure.

        Raises:
            TransportFailure: no response was received
            NotFound: the server answered 404
            ServerRejected: the server answered with any other non-2xx status
        """
        headers = kwargs.pop("headers", {})
        op_id = operation_id_var.get("")
        if op_id:
            headers["X-Request-ID"] = op_id

        start_time = time.time()
        log_with_context(logger, "DEBUG", f"Request started: {method} {path}",
                         extra_data={"params": kwargs.get("params") or {}})
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as e:
            log_with_context(logger, "ERROR", f"Request failed: {method} {path}: {e}",
                             extra_data={"error": type(e).__name__})
            raise TransportFailure(str(e)) from e

        duration_ms = (time.time() - start_time) * 1000
        log_with_context(logger, "INFO",
            f"Request completed: {method} {path} → {response.status_code}",
            extra_data={"duration_ms": round(duration_ms, 2), "status_code": response.status_code})

        if response.status_code == 404:
            raise NotFound(_detail(response))
        if response.is_error:
            raise ServerRejected(response.status_code, _detail(response))
        return response

    async def search_courses(self, query: str) -> list:
        """Course descriptors matching the (raw) course code text."""
        response = await self._request("GET", "/api/students/courses/search", params={"q": query})
        return _json_body(response, list)

    async def get_student(self, reg_no: str) -> dict:
        """Fetch the record for a registration number. Raises NotFound if absent."""
        response = await self._request("GET", "/api/students/search", params={"q": reg_no})
        return _json_body(response, dict)

    async def reg_no_exists(self, reg_no: str) -> bool:
        response = await self._request("GET", f"/api/students/check-regno/{_segment(reg_no)}")
        return bool(_json_body(response, dict).get("exists"))

    async def create_student(self, fields: dict, attachment: Attachment) -> dict:
        response = await self._request("POST", "/api/students", files=_multipart(fields, attachment))
        return _json_or_empty(response)

    async def update_student(self, reg_no: str, fields: dict, attachment: Attachment = None) -> dict:
        response = await self._request("PUT", f"/api/students/{_segment(reg_no)}",
                                       files=_multipart(fields, attachment))
        return _json_or_empty(response)

    async def delete_student(self, reg_no: str) -> dict:
        response = await self._request("DELETE", f"/api/students/{_segment(reg_no)}")
        return _json_or_empty(response)

    async def fetch_upload(self, file_path: str) -> bytes:
        """Raw bytes of a previously stored upload."""
        response = await self._request("GET", upload_path(file_path))
        return response.content


def _json_body(response: httpx.Response, expected_type: type):
    """
    Decode a success body that must be a JSON object or array.

    Raises:
        ServerRejected: the body is not JSON or not of expected_type
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, expected_type):
        log_with_context(logger, "ERROR", "Unexpected response body",
                         extra_data={"status_code": response.status_code,
                                     "content_type": response.headers.get("content-type", ""),
                                     "body": response.text[:200]})
        raise ServerRejected(response.status_code, "unexpected response body")
    return body


def _detail(response: httpx.Response) -> str:
    """Best-effort error detail from a JSON or text error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("message") or body.get("error") or "")
    return ""


def _json_or_empty(response: httpx.Response):
    try:
        return response.json()
    except ValueError:
        return {}
