# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .telemetry import TelemetryConfig


@dataclass(frozen=True)
class AdminConfig:
    """
    Configuration settings for HotelLux admin client operations.

    :param api_root: Path prefix of the REST API under the base URL. Default is ``"/api"``.
    :type api_root: str
    :param search_param: Query-string parameter carrying the search keyword. Default is ``"keyword"``.
    :type search_param: str
    :param http_retries: Maximum number of attempts for HTTP requests (default: 5).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff (default: 0.5).
    :type http_backoff: float or None
    :param http_max_backoff: Maximum delay between retry attempts in seconds (default: 60.0).
    :type http_max_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param http_jitter: Whether to add jitter to retry delays (default: True).
    :type http_jitter: bool or None
    :param http_retry_transient_errors: Whether to retry 429, 502, 503 and 504 responses (default: True).
    :type http_retry_transient_errors: bool or None
    :param telemetry: Optional telemetry settings for HTTP calls.
    :type telemetry: ~HotelLux.Admin.core.telemetry.TelemetryConfig or None
    """

    api_root: str = "/api"
    search_param: str = "keyword"

    # HTTP retry and resilience configuration
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_max_backoff: Optional[float] = None
    http_timeout: Optional[float] = None
    http_jitter: Optional[bool] = None
    http_retry_transient_errors: Optional[bool] = None

    telemetry: Optional["TelemetryConfig"] = None

    @classmethod
    def from_env(cls) -> "AdminConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~HotelLux.Admin.core.config.AdminConfig
        """
        # Environment-free defaults
        return cls(
            api_root="/api",
            search_param="keyword",
            http_retries=None,  # Will default to 5 in _HttpClient
            http_backoff=None,  # Will default to 0.5 in _HttpClient
            http_max_backoff=None,  # Will default to 60.0 in _HttpClient
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            http_jitter=None,  # Will default to True in _HttpClient
            http_retry_transient_errors=None,  # Will default to True in _HttpClient
            telemetry=None,
        )
