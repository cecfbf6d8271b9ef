from typing import Any, Dict, Optional


class EmailDispatchError(Exception):
    """Base class for every terminal failure of the send-email endpoint."""
    status_code = 500
    message = "Unexpected error while sending email."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ClientValidationError(EmailDispatchError):
    status_code = 400
    message = "Missing 'to', 'subject', or 'text' in body"


class MethodNotAllowedError(EmailDispatchError):
    status_code = 405
    message = "Method not allowed"


class ConfigurationError(EmailDispatchError):
    # Deployment problem, never retried automatically
    status_code = 500
    message = "Email service not configured (missing env vars)."


class UpstreamRejectionError(EmailDispatchError):
    message = "Postmark send failed"

    def __init__(self, status_code: int, details: Any = None):
        super().__init__(status_code=status_code)
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class UnexpectedDispatchError(EmailDispatchError):
    status_code = 500
    message = "Unexpected error while sending email."


class SignupStoreError(Exception):
    """The signups store refused or failed an insert."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
