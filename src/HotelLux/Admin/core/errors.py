# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Structured exceptions raised by the HotelLux admin client.

Every error carries a stable ``code`` plus an optional ``subcode`` so callers can
branch without parsing messages. :class:`RemoteOperationFailed` is the single
kind the entity list controller handles; it wraps whatever went wrong underneath.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional


class AdminError(Exception):
    """Base structured error for the HotelLux admin client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(AdminError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class AuthenticationError(AdminError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="auth_error", subcode=subcode, details=details, source="client")


class HttpError(AdminError):
    def __init__(
        self,
        message: str,
        status_code: int,
        is_transient: bool = False,
        subcode: Optional[str] = None,
        service_error_code: Optional[str] = None,
        correlation_id: Optional[str] = None,
        request_id: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if correlation_id is not None:
            d["correlation_id"] = correlation_id
        if request_id is not None:
            d["request_id"] = request_id
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if retry_after is not None:
            d["retry_after"] = retry_after
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


class RemoteOperationFailed(AdminError):
    """
    A load, search or delete call against the remote data service failed.

    Network, authorization and server failures all collapse into this error.
    The original exception is kept on :attr:`cause` (and chained as ``__cause__``
    when raised with ``raise ... from``).

    :param operation: Name of the failed operation (``"load"``, ``"search"`` or ``"delete"``).
    :type operation: str
    :param cause: The underlying exception.
    :type cause: Exception or None
    """

    def __init__(self, operation: str, message: str, *, cause: Optional[BaseException] = None) -> None:
        status_code = getattr(cause, "status_code", None)
        is_transient = bool(getattr(cause, "is_transient", False))
        details: Dict[str, Any] = {"operation": operation}
        if cause is not None:
            details["cause"] = type(cause).__name__
        super().__init__(
            message,
            code="remote_operation_failed",
            subcode=getattr(cause, "subcode", None),
            status_code=status_code,
            details=details,
            source="server" if status_code is not None else "client",
            is_transient=is_transient,
        )
        self.operation = operation
        self.cause = cause


__all__ = [
    "AdminError",
    "ValidationError",
    "AuthenticationError",
    "HttpError",
    "RemoteOperationFailed",
]
