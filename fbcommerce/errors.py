"""Error types raised by Graph API operations."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

from typing import Optional

TRANSPORT_ERROR_CODE = 0
JSON_ERROR_SYNTAX = 4

AUTH_ERROR_CODES = (102, 190)
PERMISSION_ERROR_CODE = 10


class ApiError(Exception):
    """Base error for all Graph API failures."""

    def __init__(self, message: str, code: int = 0,
                 subcode: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode

    def __repr__(self):
        return (f"{self.__class__.__name__}(code={self.code}, "
                f"subcode={self.subcode}, message={self.message!r})")


class TransportFailure(ApiError):
    """The request never completed (DNS, connect, TLS, timeout...)."""

    def __init__(self, message: str = None, code: int = None):
        super().__init__(message or "Transport failure",
                         TRANSPORT_ERROR_CODE if code is None else code)


class MalformedResponse(ApiError):
    """The HTTP exchange completed but the body is not a JSON object."""

    def __init__(self, detail: str = None):
        message = "Syntax error"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, JSON_ERROR_SYNTAX)


class RemoteApiError(ApiError):
    """The Graph API answered with a top-level ``error`` object."""

    def __init__(self, message: str, code: int = 0,
                 subcode: Optional[int] = None,
                 error_type: Optional[str] = None,
                 fbtrace_id: Optional[str] = None):
        super().__init__(message, code, subcode)
        self.error_type = error_type
        self.fbtrace_id = fbtrace_id

    @classmethod
    def from_body(cls, error: dict) -> "RemoteApiError":
        """Create the error from the ``error`` object of a response body."""
        if not isinstance(error, dict):
            return cls(str(error))
        return cls(
            error.get("message", ""),
            code=error.get("code", 0),
            subcode=error.get("error_subcode"),
            error_type=error.get("type"),
            fbtrace_id=error.get("fbtrace_id"),
        )

    @property
    def is_auth_error(self) -> bool:
        """Access token is invalid, expired or revoked."""
        return self.code in AUTH_ERROR_CODES

    @property
    def is_permission_error(self) -> bool:
        """Token is valid but lacks a permission for this call."""
        return self.code == PERMISSION_ERROR_CODE or \
            (isinstance(self.code, int) and 200 <= self.code <= 299)
