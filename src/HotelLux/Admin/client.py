# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Dict, Optional

import requests

from azure.core.credentials import TokenCredential

from .common.constants import ENTITY_SET_USERS
from .core._auth import SessionContext
from .core.config import AdminConfig
from .data._entities import _EntityServiceClient
from .operations.entities import AsyncEntityOperations, EntityOperations
from .ui.entity_list import EntityListController
from .ui.navigation import EntityRoutes, Router
from .ui.operator import Operator


class AdminClient:
    """
    High-level client for the HotelLux administration API.

    Authenticates through Azure Identity and delegates HTTP calls to an internal
    :class:`~HotelLux.Admin.data._entities._EntityServiceClient` created on first use.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager reuses one HTTP session for every
        call and releases it on exit::

            with AdminClient("https://admin.hotellux.example", credential) as client:
                for user in client.users.list():
                    print(user.id, user.display_name())

    :param base_url: HotelLux back-end URL, for example ``"https://admin.hotellux.example"``.
        Trailing slash is removed.
    :type base_url: :class:`str`
    :param credential: Azure Identity credential used for bearer tokens.
    :type credential: ~azure.core.credentials.TokenCredential
    :param config: Optional configuration for API paths, timeouts and retries.
        Defaults to :meth:`~HotelLux.Admin.core.config.AdminConfig.from_env`.
    :type config: ~HotelLux.Admin.core.config.AdminConfig or None

    :raises ValueError: If ``base_url`` is missing or empty after trimming.

    Example:
        Driving the dashboard controller::

            import asyncio
            from azure.identity import InteractiveBrowserCredential
            from HotelLux.Admin.client import AdminClient
            from HotelLux.Admin.ui.navigation import HistoryRouter
            from HotelLux.Admin.ui.operator import ConsoleOperator

            async def main():
                with AdminClient(base_url, InteractiveBrowserCredential()) as client:
                    dashboard = client.dashboard(HistoryRouter(), ConsoleOperator())
                    await dashboard.initialize()
                    await dashboard.search("ada")

            asyncio.run(main())
    """

    def __init__(
        self,
        base_url: str,
        credential: TokenCredential,
        config: Optional[AdminConfig] = None,
    ) -> None:
        self.session = SessionContext(credential)
        self._base_url = (base_url or "").strip().rstrip("/")
        if not self._base_url:
            raise ValueError("base_url is required.")
        self._config = config or AdminConfig.from_env()
        self._service: Optional[_EntityServiceClient] = None
        self._http_session: Optional[requests.Session] = None
        self._owns_session: bool = False
        self._operations: Dict[str, EntityOperations] = {}

        self.users = self.entities(ENTITY_SET_USERS)

    def __enter__(self) -> "AdminClient":
        """Create an HTTP session shared by every call made inside the context."""
        if self._http_session is None:
            self._http_session = requests.Session()
            self._owns_session = True
            # A service built before entering would not use the pooled session
            if self._service is not None:
                self._service.close()
                self._service = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the HTTP session and the internal service client.

        Safe to call multiple times; called automatically when leaving the context manager.
        """
        if self._service is not None:
            self._service.close()
            self._service = None
        if self._http_session is not None and self._owns_session:
            self._http_session.close()
            self._http_session = None
            self._owns_session = False

    def _get_service(self) -> _EntityServiceClient:
        """Get or lazily create the internal REST client."""
        if self._service is None:
            self._service = _EntityServiceClient(
                self.session,
                self._base_url,
                self._config,
                session=self._http_session,
            )
        return self._service

    def entities(self, entity_set: str) -> EntityOperations:
        """
        Blocking operations for ``entity_set``. ``client.users`` is ``client.entities("users")``.
        """
        ops = self._operations.get(entity_set)
        if ops is None:
            ops = EntityOperations(self, entity_set)
            self._operations[entity_set] = ops
        return ops

    def async_entities(self, entity_set: str = ENTITY_SET_USERS) -> AsyncEntityOperations:
        """Awaitable data service for ``entity_set``, as consumed by :class:`EntityListController`."""
        return AsyncEntityOperations(self.entities(entity_set))

    def dashboard(
        self,
        router: Router,
        operator: Operator,
        *,
        entity_set: str = ENTITY_SET_USERS,
        routes: Optional[EntityRoutes] = None,
        entity_label: str = "user",
    ) -> EntityListController:
        """
        Build the entity list controller for ``entity_set`` wired to this client's session.

        :param router: Where detail, edit and login navigation goes.
        :param operator: Confirmation and notification surface.
        :return: A controller that has not loaded anything yet; await ``initialize()``.
        :rtype: ~HotelLux.Admin.ui.entity_list.EntityListController
        """
        return EntityListController(
            self.async_entities(entity_set),
            router,
            self.session,
            operator,
            routes=routes,
            entity_label=entity_label,
        )


__all__ = ["AdminClient"]
