# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""HotelLux REST API client for entity collections: list, search, get and delete."""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from ..common.constants import (
    HEADER_CLIENT_REQUEST_ID,
    HEADER_CORRELATION_ID,
    HEADER_SERVICE_REQUEST_ID,
)
from ..core._auth import SessionContext
from ..core._error_codes import (
    VALIDATION_BASE_URL_EMPTY,
    VALIDATION_ENTITY_ID_EMPTY,
    VALIDATION_ENTITY_SET_EMPTY,
    VALIDATION_UNEXPECTED_PAYLOAD,
    http_status_to_subcode,
    is_transient_status,
)
from ..core._http import _HttpClient
from ..core.config import AdminConfig
from ..core.errors import HttpError, ValidationError
from ..core.telemetry import create_telemetry_manager
from ..models.entity import Entity, EntityId

_BODY_EXCERPT_LIMIT = 200


class _EntityServiceClient:
    """REST client for entity sets exposed under ``{base_url}{api_root}``."""

    def __init__(
        self,
        auth: SessionContext,
        base_url: str,
        config: Optional[AdminConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.base_url = (base_url or "").strip().rstrip("/")
        if not self.base_url:
            raise ValidationError("base_url is required.", subcode=VALIDATION_BASE_URL_EMPTY)
        self.config = config or AdminConfig.from_env()
        api_root = "/" + (self.config.api_root or "").strip("/")
        self.api = f"{self.base_url}{api_root}".rstrip("/")
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            session=session,
            max_backoff=self.config.http_max_backoff,
            jitter=self.config.http_jitter,
            retry_transient_errors=self.config.http_retry_transient_errors,
        )
        self._telemetry = create_telemetry_manager(self.config.telemetry)
        # One correlation id per client instance ties a dashboard session's calls together
        self._correlation_id = str(uuid.uuid4())

    def close(self) -> None:
        self._http.close()

    # ----------------------------- transport ------------------------------
    def _headers(self) -> Dict[str, str]:
        """Build standard JSON headers with bearer auth."""
        scope = f"{self.base_url}/.default"
        token = self.auth.acquire_token(scope).access_token
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, url: str, *, operation: str = "request", entity_set: Optional[str] = None, **kwargs: Any):
        """Send a request and raise :class:`HttpError` for any status >= 400."""
        client_request_id = str(uuid.uuid4())
        headers = dict(kwargs.pop("headers", None) or {})
        headers.update(self._telemetry.get_additional_headers())
        headers[HEADER_CLIENT_REQUEST_ID] = client_request_id
        headers[HEADER_CORRELATION_ID] = self._correlation_id

        with self._telemetry.trace_request(
            operation, method.upper(), url, client_request_id, self._correlation_id, entity_set
        ) as ctx:
            r = self._http._request(method, url, headers=headers, **kwargs)
            response_headers = getattr(r, "headers", None) or {}
            service_request_id = response_headers.get(HEADER_SERVICE_REQUEST_ID)
            error = self._error_from_response(r, url, method) if r.status_code >= 400 else None
            self._telemetry.record_response(ctx, r.status_code, service_request_id, error)
            if error is not None:
                raise error
            return r

    def _error_from_response(self, r: Any, url: str, method: str) -> HttpError:
        headers = getattr(r, "headers", None) or {}
        body_text = getattr(r, "text", "") or ""
        service_code: Optional[str] = None
        message: Optional[str] = None
        try:
            body = r.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict):
                service_code = err.get("code")
                message = err.get("message")
            elif isinstance(err, str):
                message = err
            message = body.get("message") or message
        retry_after: Optional[int] = None
        raw_retry = headers.get("Retry-After")
        if raw_retry is not None:
            try:
                retry_after = int(raw_retry)
            except (TypeError, ValueError):
                retry_after = None
        status = r.status_code
        return HttpError(
            message or f"{method.upper()} {url} failed with HTTP {status}",
            status_code=status,
            is_transient=is_transient_status(status),
            subcode=http_status_to_subcode(status),
            service_error_code=service_code,
            correlation_id=headers.get(HEADER_CORRELATION_ID) or self._correlation_id,
            request_id=headers.get(HEADER_SERVICE_REQUEST_ID),
            body_excerpt=body_text[:_BODY_EXCERPT_LIMIT] if body_text else None,
            retry_after=retry_after,
        )

    # ----------------------------- helpers --------------------------------
    def _collection_url(self, entity_set: str) -> str:
        es = (entity_set or "").strip().strip("/")
        if not es:
            raise ValidationError("entity_set is required.", subcode=VALIDATION_ENTITY_SET_EMPTY)
        return f"{self.api}/{es}"

    def _item_url(self, entity_set: str, entity_id: EntityId) -> str:
        if entity_id is None or (isinstance(entity_id, str) and not entity_id.strip()):
            raise ValidationError("entity id is required.", subcode=VALIDATION_ENTITY_ID_EMPTY)
        return f"{self._collection_url(entity_set)}/{quote(str(entity_id), safe='')}"

    @staticmethod
    def _items_from_body(body: Any) -> List[Dict[str, Any]]:
        """Accept a bare JSON array or an object wrapping it in ``value`` (or ``content`` for paged responses)."""
        if isinstance(body, list):
            items = body
        elif isinstance(body, dict) and isinstance(body.get("value"), list):
            items = body["value"]
        elif isinstance(body, dict) and isinstance(body.get("content"), list):
            items = body["content"]
        else:
            raise ValidationError(
                "Expected a JSON array of entities.",
                subcode=VALIDATION_UNEXPECTED_PAYLOAD,
                details={"payload_type": type(body).__name__},
            )
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValidationError(
                    "Expected every entity in the array to be a JSON object.",
                    subcode=VALIDATION_UNEXPECTED_PAYLOAD,
                    details={"index": index, "item_type": type(item).__name__},
                )
        return items

    def _parse_collection(self, entity_set: str, r: Any) -> List[Entity]:
        try:
            body = r.json()
        except ValueError as e:
            raise ValidationError(
                "Response body is not valid JSON.", subcode=VALIDATION_UNEXPECTED_PAYLOAD
            ) from e
        try:
            return [Entity.from_api_response(entity_set, item) for item in self._items_from_body(body)]
        except ValueError as e:
            raise ValidationError(str(e), subcode=VALIDATION_UNEXPECTED_PAYLOAD) from e

    # ------------------------------ CRUD ----------------------------------
    def _fetch_all(self, entity_set: str) -> List[Entity]:
        """GET the whole collection, preserving server order."""
        url = self._collection_url(entity_set)
        r = self._request("get", url, operation=f"{entity_set}.fetch_all", entity_set=entity_set, headers=self._headers())
        return self._parse_collection(entity_set, r)

    def _search(self, entity_set: str, term: str) -> List[Entity]:
        """GET ``/{entity_set}/search`` with the keyword as query parameter."""
        url = f"{self._collection_url(entity_set)}/search"
        params = {self.config.search_param: term}
        r = self._request(
            "get", url, operation=f"{entity_set}.search", entity_set=entity_set, headers=self._headers(), params=params
        )
        return self._parse_collection(entity_set, r)

    def _get(self, entity_set: str, entity_id: EntityId) -> Entity:
        url = self._item_url(entity_set, entity_id)
        r = self._request("get", url, operation=f"{entity_set}.get", entity_set=entity_set, headers=self._headers())
        try:
            body = r.json()
        except ValueError as e:
            raise ValidationError(
                "Response body is not valid JSON.", subcode=VALIDATION_UNEXPECTED_PAYLOAD
            ) from e
        if not isinstance(body, dict):
            raise ValidationError(
                "Expected a JSON object.",
                subcode=VALIDATION_UNEXPECTED_PAYLOAD,
                details={"payload_type": type(body).__name__},
            )
        try:
            return Entity.from_api_response(entity_set, body)
        except ValueError as e:
            raise ValidationError(str(e), subcode=VALIDATION_UNEXPECTED_PAYLOAD) from e

    def _delete(self, entity_set: str, entity_id: EntityId) -> None:
        url = self._item_url(entity_set, entity_id)
        self._request("delete", url, operation=f"{entity_set}.delete", entity_set=entity_set, headers=self._headers())
