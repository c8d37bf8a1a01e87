from typing import Dict, Optional


class PortalError(Exception):
    """Raised when the portal server cannot be reached or answers with a failure."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ValidationFailed(PortalError):
    """Field-level validation errors returned by the server (HTTP 422)."""

    def __init__(self, errors: Dict[str, str], message: str = "The given data was invalid."):
        super().__init__(message, status=422)
        self.errors = errors

    def first(self) -> str:
        return next(iter(self.errors.values()), str(self))
