# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Core infrastructure components for the HotelLux admin client.

This module contains the foundational components: session authentication,
configuration, HTTP transport, telemetry and error handling.
"""

from .errors import (
    AdminError,
    AuthenticationError,
    HttpError,
    RemoteOperationFailed,
    ValidationError,
)

__all__ = [
    "AdminError",
    "AuthenticationError",
    "HttpError",
    "RemoteOperationFailed",
    "ValidationError",
]
