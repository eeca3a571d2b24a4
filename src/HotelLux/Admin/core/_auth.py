# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Session context for the admin client.

Wraps an Azure Identity credential, caches the bearer token for the current
operator session and exposes :meth:`SessionContext.terminate_session` for logout.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from azure.core.credentials import TokenCredential

from ._error_codes import AUTH_SESSION_TERMINATED
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

# Refresh tokens this many seconds before they expire
_EXPIRY_MARGIN_SECONDS = 300


@dataclass
class _TokenPair:
    resource: str
    access_token: str
    expires_on: int = 0


class SessionContext:
    """
    Operator session backed by an Azure Identity credential.

    :param credential: Credential used to acquire bearer tokens.
    :type credential: ~azure.core.credentials.TokenCredential
    :raises TypeError: If ``credential`` does not implement ``TokenCredential``.
    """

    def __init__(self, credential: TokenCredential) -> None:
        if not isinstance(credential, TokenCredential):
            raise TypeError("credential must implement azure.core.credentials.TokenCredential.")
        self.credential: TokenCredential = credential
        self._tokens: dict[str, _TokenPair] = {}
        self._active = True
        self._lock = threading.Lock()

    @property
    def is_active(self) -> bool:
        return self._active

    def acquire_token(self, scope: str) -> _TokenPair:
        """
        Return a bearer token for ``scope``, reusing the cached one until it nears expiry.

        :raises AuthenticationError: If the session has been terminated.
        """
        with self._lock:
            if not self._active:
                raise AuthenticationError(
                    "Session has been terminated; sign in again.",
                    subcode=AUTH_SESSION_TERMINATED,
                )
            cached = self._tokens.get(scope)
            if cached is not None and cached.expires_on - _EXPIRY_MARGIN_SECONDS > time.time():
                return cached
            token = self.credential.get_token(scope)
            pair = _TokenPair(
                resource=scope,
                access_token=token.token,
                expires_on=int(getattr(token, "expires_on", 0) or 0),
            )
            self._tokens[scope] = pair
            return pair

    def terminate_session(self) -> None:
        """Drop cached tokens and refuse further token requests. Safe to call repeatedly."""
        with self._lock:
            was_active = self._active
            self._tokens.clear()
            self._active = False
        if was_active:
            logger.info("Operator session terminated")

    def start_session(self) -> None:
        """Allow token acquisition again after a logout."""
        with self._lock:
            self._active = True
        logger.info("Operator session started")
