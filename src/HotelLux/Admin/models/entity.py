# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Entity data model for records owned by the HotelLux REST API.

An entity is opaque to the admin client apart from its identifier; display
fields are kept as-is and exposed through dict-like access.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Union

# Type aliases for semantic clarity
EntityId = Union[int, str]
EntitySet = str  # e.g. "users"

# Key suffixes accepted as an identifier when there is no "id" key, e.g. userId, user_id
_ID_SUFFIXES = ("Id", "_id")


@dataclass
class Entity:
    """
    Server-owned record with a unique identifier and display fields.

    :param id: Unique identifier as returned by the service (int or str).
    :type id: int | str
    :param entity_set: Collection the record belongs to (e.g. ``"users"``).
    :type entity_set: str
    :param data: Record fields as key-value pairs.
    :type data: dict[str, Any]
    :param etag: Optional ETag returned by the service.
    :type etag: str | None

    Example::

        user = Entity.from_api_response("users", {"id": 7, "username": "ada"})
        print(user.id)           # 7
        print(user["username"])  # "ada"
    """

    id: EntityId
    entity_set: EntitySet
    data: Dict[str, Any] = field(default_factory=dict)
    etag: Optional[str] = None

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __delitem__(self, key: str) -> None:
        del self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def keys(self):
        return self.data.keys()

    def values(self):
        return self.data.values()

    def items(self):
        return self.data.items()

    def display_name(self) -> str:
        """
        Best-effort label for the entity, used in operator messages.

        Tries ``name``, ``username``, ``fullName``, ``email`` and falls back to ``#<id>``.
        """
        for key in ("name", "username", "fullName", "email"):
            value = self.data.get(key)
            if value:
                return str(value)
        return f"#{self.id}"

    def to_dict(self) -> Dict[str, Any]:
        """Return only the data fields (no id/entity_set/etag metadata)."""
        return dict(self.data)

    def to_full_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "entity_set": self.entity_set,
            "data": dict(self.data),
            "etag": self.etag,
        }

    @classmethod
    def from_api_response(
        cls,
        entity_set: str,
        response_data: Dict[str, Any],
        *,
        id_field: Optional[str] = None,
    ) -> "Entity":
        """
        Create an Entity from an API response object.

        The identifier is taken from ``id_field`` when given, then ``id``, then
        the first key ending in ``Id`` or ``_id`` that is not an annotation. Keys
        starting with ``@`` are annotations and are dropped from ``data``; an
        ``@odata.etag`` annotation becomes :attr:`etag`.

        :raises ValueError: If no identifier can be found.
        """
        data = dict(response_data)

        entity_id: Optional[EntityId] = None
        if id_field and data.get(id_field) is not None:
            entity_id = data[id_field]
        elif data.get("id") is not None:
            entity_id = data["id"]
        else:
            for key, value in data.items():
                if key.startswith(("@", "_")) or value is None:
                    continue
                if key.endswith(_ID_SUFFIXES):
                    entity_id = value
                    break
        if entity_id is None:
            raise ValueError(f"Response object for {entity_set!r} has no identifier field")

        etag = data.pop("@odata.etag", None)
        clean_data = {k: v for k, v in data.items() if not k.startswith("@")}

        return cls(id=entity_id, entity_set=entity_set, data=clean_data, etag=etag)


__all__ = ["Entity", "EntityId", "EntitySet"]
