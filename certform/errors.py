"""
Error taxonomy for the certificate form.

The API client raises TransportFailure, NotFound and ServerRejected; the
form controller raises ValidationFailed and DuplicateRegNo internally. All of
them end at the controller, which logs them and turns them into notices.
"""


class CertFormError(Exception):
    """Base class for every error the form can surface."""


class TransportFailure(CertFormError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


class ServerRejected(CertFormError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}" if detail else f"HTTP {status_code}")


class NotFound(ServerRejected):
    """The requested record does not exist (HTTP 404)."""

    def __init__(self, detail: str = ""):
        super().__init__(404, detail)


class ValidationFailed(CertFormError):
    """Required fields are empty; raised before any request is made."""

    def __init__(self, missing: list):
        self.missing = list(missing)
        super().__init__("Missing required fields: " + ", ".join(self.missing))


class DuplicateRegNo(CertFormError):
    """The registration number is already taken."""

    def __init__(self, reg_no: str):
        self.reg_no = reg_no
        super().__init__(f"Registration number already exists: {reg_no}")
