# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

from typing import Optional

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_409 = "http_409"
HTTP_422 = "http_422"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

_HTTP_STATUS_TO_SUBCODE = {
    400: HTTP_400,
    401: HTTP_401,
    403: HTTP_403,
    404: HTTP_404,
    409: HTTP_409,
    422: HTTP_422,
    429: HTTP_429,
    500: HTTP_500,
    502: HTTP_502,
    503: HTTP_503,
    504: HTTP_504,
}

TRANSIENT_STATUS = {429, 502, 503, 504}

# Validation subcodes
VALIDATION_BASE_URL_EMPTY = "validation_base_url_empty"
VALIDATION_ENTITY_SET_EMPTY = "validation_entity_set_empty"
VALIDATION_ENTITY_ID_EMPTY = "validation_entity_id_empty"
VALIDATION_UNEXPECTED_PAYLOAD = "validation_unexpected_payload"

# Authentication subcodes
AUTH_SESSION_TERMINATED = "auth_session_terminated"

# Remote operation names
OPERATION_LOAD = "load"
OPERATION_SEARCH = "search"
OPERATION_DELETE = "delete"


def http_status_to_subcode(status: int) -> str:
    """Map an HTTP status code to its ``http_<status>`` subcode."""
    return _HTTP_STATUS_TO_SUBCODE.get(status, f"http_{status}")


def is_transient_status(status: Optional[int]) -> bool:
    return status in TRANSIENT_STATUS
