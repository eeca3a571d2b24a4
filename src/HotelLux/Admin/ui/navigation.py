# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""Router port and an in-memory router that keeps navigation history."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable
from urllib.parse import quote, urlencode

from ..common.constants import ROUTE_LOGIN, ROUTE_USER_DETAILS, ROUTE_USER_EDIT

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


@runtime_checkable
class Router(Protocol):
    """Anything that can move the dashboard to another view."""

    def navigate_to(self, path: str, params: Mapping[str, Any]) -> None:
        ...


@dataclass(frozen=True)
class EntityRoutes:
    """View paths the entity list navigates to."""

    detail: str = ROUTE_USER_DETAILS
    edit: str = ROUTE_USER_EDIT
    login: str = ROUTE_LOGIN


@dataclass(frozen=True)
class Route:
    """
    A visited view: its path and the parameters it was opened with.

    :attr:`url` renders ``:name`` placeholders from ``params``; an unused ``id``
    parameter is appended as a trailing segment and anything else left over
    becomes the query string, so ``Route("/user-details", {"id": 7}).url`` is
    ``"/user-details/7"``.
    """

    path: str
    params: Mapping[str, Any] = field(default_factory=dict)

    @property
    def url(self) -> str:
        remaining: Dict[str, Any] = dict(self.params)

        def _fill(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name not in remaining:
                return match.group(0)
            return quote(str(remaining.pop(name)), safe="")

        url = _PLACEHOLDER_RE.sub(_fill, self.path)
        if "id" in remaining:
            url = f"{url.rstrip('/')}/{quote(str(remaining.pop('id')), safe='')}"
        if remaining:
            url = f"{url}?{urlencode(sorted(remaining.items()))}"
        return url


class HistoryRouter:
    """
    In-memory :class:`Router` recording every navigation.

    Listeners registered with :meth:`subscribe` are called with each new
    :class:`Route`; a failing listener is logged and does not stop navigation.
    """

    def __init__(self, initial: Optional[Route] = None) -> None:
        self._history: List[Route] = [initial] if initial is not None else []
        self._listeners: List[Callable[[Route], None]] = []

    @property
    def history(self) -> List[Route]:
        return list(self._history)

    @property
    def current(self) -> Optional[Route]:
        return self._history[-1] if self._history else None

    def subscribe(self, listener: Callable[[Route], None]) -> None:
        self._listeners.append(listener)

    def navigate_to(self, path: str, params: Optional[Mapping[str, Any]] = None) -> None:
        route = Route(path, dict(params or {}))
        self._history.append(route)
        logger.debug("Navigated to %s", route.url)
        self._notify(route)

    def back(self) -> Optional[Route]:
        """Pop the current view and return the one now showing (None when history is exhausted)."""
        if len(self._history) <= 1:
            return None
        self._history.pop()
        route = self._history[-1]
        self._notify(route)
        return route

    def _notify(self, route: Route) -> None:
        for listener in list(self._listeners):
            try:
                listener(route)
            except Exception:
                logger.exception("Navigation listener %r failed for %s", listener, route.url)


__all__ = ["Router", "EntityRoutes", "Route", "HistoryRouter"]
