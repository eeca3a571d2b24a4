# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Telemetry infrastructure for the HotelLux admin client.

Logs every REST call made by the data service, dispatches request events to
user-supplied hooks, and emits OpenTelemetry spans when ``opentelemetry-api``
is installed and tracing is enabled.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generator,
    List,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

from ..common.constants import (
    OTEL_ATTR_ADMIN_CORRELATION_ID,
    OTEL_ATTR_ADMIN_ENTITY_SET,
    OTEL_ATTR_ADMIN_OPERATION,
    OTEL_ATTR_ADMIN_REQUEST_ID,
    OTEL_ATTR_HTTP_METHOD,
    OTEL_ATTR_HTTP_STATUS_CODE,
    OTEL_ATTR_HTTP_URL,
)

# Optional OpenTelemetry imports
try:
    from opentelemetry import trace
    from opentelemetry.trace import Status, StatusCode

    _OTEL_AVAILABLE = True
except ImportError:
    _OTEL_AVAILABLE = False
    trace = None  # type: ignore
    Status = None  # type: ignore
    StatusCode = None  # type: ignore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for request telemetry.

    Telemetry is opt-in. With nothing enabled the client uses a no-op manager.

    Example:
        Log every request at DEBUG and failures at WARNING::

            config = AdminConfig(
                telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG")
            )
    """

    enable_tracing: bool = False
    enable_logging: bool = False

    log_level: str = "WARNING"
    logger_name: str = "HotelLux.Admin"

    hooks: List["TelemetryHook"] = field(default_factory=list)


@dataclass
class RequestContext:
    """Context passed to telemetry hooks for each HTTP request."""

    client_request_id: str
    correlation_id: str

    method: str
    url: str
    operation: str  # e.g. "users.fetch_all", "users.delete"
    entity_set: Optional[str] = None

    start_time: float = field(default_factory=time.perf_counter)

    # Custom data bag for hooks to share state
    custom_data: Dict[str, Any] = field(default_factory=dict)

    _span: Any = field(default=None, repr=False)
    _responded: bool = field(default=False, repr=False)


@dataclass
class ResponseContext:
    """Response information passed to telemetry hooks."""

    status_code: int
    duration_ms: float
    service_request_id: Optional[str] = None
    error: Optional[Exception] = None


@runtime_checkable
class TelemetryHook(Protocol):
    """Protocol for custom telemetry hooks. Implement only the methods you need.

    Every request calls ``on_request_start`` and then exactly one of:

    - ``on_request_end`` when the service answered, whatever the status. An HTTP
      error response carries the raised exception on ``ResponseContext.error``.
    - ``on_request_error`` when no response arrived, e.g. a network failure
      after the transport exhausted its retries.
    """

    def on_request_start(self, context: RequestContext) -> None:
        ...

    def on_request_end(self, request: RequestContext, response: ResponseContext) -> None:
        ...

    def on_request_error(self, request: RequestContext, error: Exception) -> None:
        ...

    def get_additional_headers(self) -> Dict[str, str]:
        ...


class TelemetryManager:
    """Manages telemetry instrumentation for the admin client.

    This class is internal and not part of the public API.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._tracer: Optional[Any] = None
        self._logger: Optional[logging.Logger] = None
        self._hooks = list(self._config.hooks)

        if self._config.enable_tracing and _OTEL_AVAILABLE:
            self._tracer = trace.get_tracer("HotelLux.Admin")
        if self._config.enable_logging:
            self._logger = logging.getLogger(self._config.logger_name)
            self._logger.setLevel(getattr(logging, self._config.log_level.upper()))

    @property
    def is_tracing_enabled(self) -> bool:
        return self._tracer is not None

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        client_request_id: str,
        correlation_id: str,
        entity_set: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        """Create a traced request context.

        Usage:
            with telemetry.trace_request("users.fetch_all", "GET", url, req_id, corr_id) as ctx:
                response = self._http._request(...)
                telemetry.record_response(ctx, response.status_code)
        """
        ctx = RequestContext(
            client_request_id=client_request_id,
            correlation_id=correlation_id,
            method=method,
            url=url,
            operation=operation,
            entity_set=entity_set,
        )
        self._dispatch("on_request_start", ctx)

        span = None
        if self._tracer:
            attributes = {
                OTEL_ATTR_ADMIN_OPERATION: operation,
                OTEL_ATTR_HTTP_METHOD: method,
                OTEL_ATTR_HTTP_URL: url,
                OTEL_ATTR_ADMIN_REQUEST_ID: client_request_id,
                OTEL_ATTR_ADMIN_CORRELATION_ID: correlation_id,
            }
            if entity_set:
                attributes[OTEL_ATTR_ADMIN_ENTITY_SET] = entity_set
            span = self._tracer.start_span(
                f"HotelLux {operation}",
                kind=trace.SpanKind.CLIENT,
                attributes=attributes,
            )
            ctx._span = span

        try:
            yield ctx
        except Exception as e:
            if span:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
            # An error response was already logged and dispatched by record_response
            if not ctx._responded:
                if self._logger:
                    duration_ms = (time.perf_counter() - ctx.start_time) * 1000
                    self._logger.error(
                        f"{ctx.operation} {ctx.method} failed without response after {duration_ms:.1f}ms: {e}",
                        extra={"client_request_id": ctx.client_request_id},
                    )
                self._dispatch("on_request_error", ctx, e)
            raise
        finally:
            if span:
                span.end()

    def record_response(
        self,
        ctx: RequestContext,
        status_code: int,
        service_request_id: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Log the response and dispatch it to hooks."""
        ctx._responded = True
        duration_ms = (time.perf_counter() - ctx.start_time) * 1000
        response = ResponseContext(
            status_code=status_code,
            duration_ms=duration_ms,
            service_request_id=service_request_id,
            error=error,
        )

        if ctx._span:
            ctx._span.set_attribute(OTEL_ATTR_HTTP_STATUS_CODE, status_code)

        if self._logger:
            level = logging.WARNING if status_code >= 400 else logging.DEBUG
            self._logger.log(
                level,
                f"{ctx.operation} {ctx.method} {status_code} {duration_ms:.1f}ms",
                extra={
                    "client_request_id": ctx.client_request_id,
                    "service_request_id": service_request_id,
                },
            )

        self._dispatch("on_request_end", ctx, response)

    def _dispatch(self, name: str, *args: Any) -> None:
        for hook in self._hooks:
            method = getattr(hook, name, None)
            if method is None:
                continue
            try:
                method(*args)
            except Exception:
                # Hooks must not break requests
                logger.warning("Telemetry hook %r failed in %s", hook, name, exc_info=True)

    def get_additional_headers(self) -> Dict[str, str]:
        """Collect additional headers from all hooks."""
        headers: Dict[str, str] = {}
        for hook in self._hooks:
            if not hasattr(hook, "get_additional_headers"):
                continue
            try:
                hook_headers = hook.get_additional_headers()
            except Exception:
                logger.warning("Telemetry hook %r failed in get_additional_headers", hook, exc_info=True)
                continue
            if hook_headers:
                headers.update(hook_headers)
        return headers


class NoOpTelemetryManager:
    """No-op telemetry manager when telemetry is disabled."""

    is_tracing_enabled = False

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        client_request_id: str,
        correlation_id: str,
        entity_set: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        yield RequestContext(
            client_request_id=client_request_id,
            correlation_id=correlation_id,
            method=method,
            url=url,
            operation=operation,
            entity_set=entity_set,
        )

    def record_response(self, *args: Any, **kwargs: Any) -> None:
        pass

    def get_additional_headers(self) -> Dict[str, str]:
        return {}


def create_telemetry_manager(
    config: Optional[TelemetryConfig],
) -> Union[TelemetryManager, NoOpTelemetryManager]:
    """Factory to create appropriate telemetry manager."""
    if config is None:
        return NoOpTelemetryManager()
    if not (config.enable_tracing or config.enable_logging or config.hooks):
        return NoOpTelemetryManager()
    return TelemetryManager(config)


__all__ = [
    "TelemetryConfig",
    "TelemetryHook",
    "TelemetryManager",
    "NoOpTelemetryManager",
    "RequestContext",
    "ResponseContext",
    "create_telemetry_manager",
]
