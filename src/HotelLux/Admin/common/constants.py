# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Constants shared by the HotelLux admin client.

Entity sets and default view routes used by the admin dashboard, plus the
attribute names recorded on tracing spans.
"""

# Entity sets exposed by the HotelLux REST API
ENTITY_SET_USERS = "users"

# Default dashboard routes
ROUTE_USER_DETAILS = "/user-details"
ROUTE_USER_EDIT = "/user-edit"
ROUTE_LOGIN = "/login"

# Request headers
HEADER_CLIENT_REQUEST_ID = "x-client-request-id"
HEADER_CORRELATION_ID = "x-correlation-id"
HEADER_SERVICE_REQUEST_ID = "x-request-id"

# Span attribute names (OpenTelemetry semantic conventions where they exist)
OTEL_ATTR_HTTP_METHOD = "http.request.method"
OTEL_ATTR_HTTP_URL = "url.full"
OTEL_ATTR_HTTP_STATUS_CODE = "http.response.status_code"
OTEL_ATTR_ADMIN_OPERATION = "hotellux.admin.operation"
OTEL_ATTR_ADMIN_ENTITY_SET = "hotellux.admin.entity_set"
OTEL_ATTR_ADMIN_REQUEST_ID = "hotellux.admin.client_request_id"
OTEL_ATTR_ADMIN_CORRELATION_ID = "hotellux.admin.correlation_id"
