# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Controller behind the admin dashboard's entity list.

Holds the displayed collection and the last search term, and turns operator
actions into data service calls and navigation. Remote failures never escape:
they are logged and surfaced to the operator.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, runtime_checkable

from ..core.errors import RemoteOperationFailed
from ..models.entity import Entity, EntityId
from .navigation import EntityRoutes, Router
from .operator import Operator

logger = logging.getLogger(__name__)


@runtime_checkable
class EntityDataService(Protocol):
    """Remote data service for one entity set. Every call may raise ``RemoteOperationFailed``."""

    async def fetch_all(self) -> List[Entity]:
        ...

    async def search(self, term: str) -> List[Entity]:
        ...

    async def delete_by_id(self, entity_id: EntityId) -> None:
        ...


@runtime_checkable
class SessionService(Protocol):
    def terminate_session(self) -> None:
        ...


class EntityListController:
    """
    List, search, view, edit and delete entities; log the operator out.

    Every load or search takes a new request id. A response is applied only if
    its id is still the latest one dispatched, so when calls overlap the most
    recent *request* wins regardless of which response arrives last.

    :param data_service: Remote data service for the entity set.
    :type data_service: EntityDataService
    :param router: Navigation target for detail, edit and login views.
    :type router: ~HotelLux.Admin.ui.navigation.Router
    :param session: Session whose ``terminate_session()`` is called on logout.
    :type session: SessionService
    :param operator: Confirmation and notification surface.
    :type operator: ~HotelLux.Admin.ui.operator.Operator
    :param routes: View paths; defaults to the user account views.
    :type routes: ~HotelLux.Admin.ui.navigation.EntityRoutes or None
    :param entity_label: Singular noun used in operator messages.
    :type entity_label: str

    Example::

        controller = EntityListController(client.async_entities("users"), router, client.session, ConsoleOperator())
        await controller.initialize()
        await controller.search("ada")
        await controller.delete(controller.entities[0].id)
    """

    def __init__(
        self,
        data_service: EntityDataService,
        router: Router,
        session: SessionService,
        operator: Operator,
        *,
        routes: Optional[EntityRoutes] = None,
        entity_label: str = "user",
    ) -> None:
        self._data_service = data_service
        self._router = router
        self._session = session
        self._operator = operator
        self.routes = routes or EntityRoutes()
        self.entity_label = entity_label

        self._entities: List[Entity] = []
        self.search_term: str = ""
        # Never read or written by any operation; kept for views that track a selection.
        self.selected_entity: Optional[Entity] = None

        self._initialized = False
        self._latest_request_id = 0
        self._settled_request_id = 0

    @property
    def entities(self) -> List[Entity]:
        """The collection currently displayed, in server order."""
        return list(self._entities)

    @property
    def is_loading(self) -> bool:
        """True while the most recent load or search has not resolved."""
        return self._settled_request_id != self._latest_request_id

    # ------------------------------------------------------------ lifecycle

    async def initialize(self) -> None:
        """Load the collection when the view first becomes active."""
        if self._initialized:
            logger.debug("%s list already initialized", self.entity_label)
            return
        self._initialized = True
        await self.load_all()

    # ---------------------------------------------------------- load/search

    async def load_all(self) -> None:
        """Replace the collection with every entity the service returns."""
        request_id = self._dispatch()
        try:
            entities = await self._data_service.fetch_all()
        except RemoteOperationFailed as e:
            self._fail(request_id, f"Error fetching {self.entity_label}s", e)
            return
        self._apply(request_id, entities)

    async def search(self, term: str) -> None:
        """Show entities matching ``term``; a blank term reloads everything."""
        self.search_term = term or ""
        if not self.search_term.strip():
            await self.load_all()
            return
        request_id = self._dispatch()
        try:
            entities = await self._data_service.search(term)
        except RemoteOperationFailed as e:
            self._fail(request_id, f"Error searching {self.entity_label}s", e)
            return
        self._apply(request_id, entities)

    # --------------------------------------------------------------- delete

    async def delete(self, entity_id: EntityId) -> bool:
        """
        Delete one entity after the operator confirms, then reload the list.

        :return: True if the entity was deleted.
        :rtype: bool
        """
        confirmed = await self._operator.confirm(f"Are you sure you want to delete this {self.entity_label}?")
        if confirmed is not True:
            logger.debug("Deletion of %s %r cancelled", self.entity_label, entity_id)
            return False

        try:
            await self._data_service.delete_by_id(entity_id)
        except RemoteOperationFailed as e:
            logger.error("Error deleting %s %r: %s", self.entity_label, entity_id, e)
            self._operator.report_error(f"Error deleting {self.entity_label}", e)
            return False

        logger.info("Deleted %s %r", self.entity_label, entity_id)
        self._operator.notify(f"{self.entity_label.capitalize()} deleted")
        await self.load_all()
        return True

    # ----------------------------------------------------------- navigation

    def view_details(self, entity_id: EntityId) -> None:
        self._router.navigate_to(self.routes.detail, {"id": entity_id})

    def edit_entity(self, entity_id: EntityId) -> None:
        self._router.navigate_to(self.routes.edit, {"id": entity_id})

    def logout(self) -> None:
        """End the session, then show the login view."""
        try:
            self._session.terminate_session()
        except Exception:
            logger.exception("Session termination failed; continuing to login view")
        self._router.navigate_to(self.routes.login, {})

    # ------------------------------------------------------------- internal

    def _dispatch(self) -> int:
        self._latest_request_id += 1
        return self._latest_request_id

    def _is_current(self, request_id: int) -> bool:
        return request_id == self._latest_request_id

    def _apply(self, request_id: int, entities: List[Any]) -> None:
        if not self._is_current(request_id):
            logger.debug(
                "Discarding %s response %d; request %d is newer",
                self.entity_label,
                request_id,
                self._latest_request_id,
            )
            return
        self._entities = list(entities)
        self._settled_request_id = request_id

    def _fail(self, request_id: int, message: str, error: RemoteOperationFailed) -> None:
        if not self._is_current(request_id):
            logger.debug("Ignoring failure of superseded %s request %d: %s", self.entity_label, request_id, error)
            return
        self._settled_request_id = request_id
        logger.error("%s: %s", message, error)
        self._operator.report_error(message, error)


__all__ = ["EntityListController", "EntityDataService", "SessionService"]
