# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""Entity collection operations namespace."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, List

import requests

from ..core._error_codes import OPERATION_DELETE, OPERATION_LOAD, OPERATION_SEARCH
from ..core.errors import AdminError, RemoteOperationFailed
from ..models.entity import Entity, EntityId

if TYPE_CHECKING:
    from ..client import AdminClient

logger = logging.getLogger(__name__)


class EntityOperations:
    """
    Blocking operations on one entity set.

    Accessed via ``client.users`` for the user accounts collection, or
    ``client.entities("rooms")`` for any other set.

    Example::

        users = client.users.list()
        matches = client.users.search("ada")
        client.users.delete(matches[0].id)
    """

    def __init__(self, client: "AdminClient", entity_set: str) -> None:
        """
        :param client: Parent AdminClient instance.
        :type client: AdminClient
        :param entity_set: Entity set name, e.g. ``"users"``.
        :type entity_set: str
        """
        self._client = client
        self.entity_set = entity_set

    def list(self) -> List[Entity]:
        """
        Fetch every entity in the set, in the order the service returns them.

        :raises HotelLux.Admin.core.errors.HttpError: If the service answers with an error status.
        :raises requests.exceptions.RequestException: If the service cannot be reached.
        """
        return self._client._get_service()._fetch_all(self.entity_set)

    def search(self, term: str) -> List[Entity]:
        """
        Fetch entities matching ``term``. The term is sent as-is; callers decide
        what an empty term means.
        """
        return self._client._get_service()._search(self.entity_set, term)

    def get(self, entity_id: EntityId) -> Entity:
        return self._client._get_service()._get(self.entity_set, entity_id)

    def delete(self, entity_id: EntityId) -> None:
        """Delete one entity by id."""
        self._client._get_service()._delete(self.entity_set, entity_id)


class AsyncEntityOperations:
    """
    Awaitable data service over :class:`EntityOperations`.

    Blocking HTTP calls run in a worker thread. Any client error or transport
    failure is re-raised as :class:`~HotelLux.Admin.core.errors.RemoteOperationFailed`,
    the only failure kind the dashboard controller handles.

    :param operations: Blocking operations to delegate to.
    :type operations: EntityOperations
    """

    def __init__(self, operations: EntityOperations) -> None:
        self._operations = operations

    @property
    def entity_set(self) -> str:
        return self._operations.entity_set

    async def fetch_all(self) -> List[Entity]:
        return await self._call(OPERATION_LOAD, self._operations.list)

    async def search(self, term: str) -> List[Entity]:
        return await self._call(OPERATION_SEARCH, self._operations.search, term)

    async def delete_by_id(self, entity_id: EntityId) -> None:
        await self._call(OPERATION_DELETE, self._operations.delete, entity_id)

    async def _call(self, operation: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except (AdminError, requests.exceptions.RequestException) as e:
            logger.debug("%s %s failed: %s", self.entity_set, operation, e)
            raise RemoteOperationFailed(
                operation, f"Could not {operation} {self.entity_set}: {e}", cause=e
            ) from e


__all__ = ["EntityOperations", "AsyncEntityOperations"]
