"""HTTP responses, API errors and the JSON:API document envelope."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from http import HTTPStatus
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

A = TypeVar("A")
R = TypeVar("R")

SUCCESS_STATUSES = frozenset({200, 201, 202, 204, 205})

_FRACTION = re.compile(r"\.(\d+)")


def _object(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"expected a JSON object for {what}, got {type(value).__name__}")
    return value


def parse_time(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp into an aware datetime; None stays None."""
    if value is None:
        return None
    try:
        text = re.sub(r"[Zz]$", "+00:00", value)
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        parsed = datetime.fromisoformat(text)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")
    return parsed


def _field(key: Optional[str] = None, default: Any = None, parse: Optional[Callable] = None):
    """A dataclass field read from JSON member `key`, optionally converted by `parse`."""
    metadata = {name: value for name, value in (("key", key), ("parse", parse)) if value}
    return field(default=default, metadata=metadata)


def _time(key: Optional[str] = None):
    return _field(key, None, parse_time)


def _build(cls: type, payload: Any, hyphenate: bool = False) -> Any:
    """Build dataclass `cls` from a JSON object; absent members keep their defaults.

    Fields whose default is itself such a dataclass are built from the nested object.
    """
    payload = _object(payload, cls.__name__)
    values = {}
    for item in fields(cls):
        key = item.metadata.get("key") or (
            item.name.replace("_", "-") if hyphenate else item.name
        )
        if key not in payload:
            continue
        parse = item.metadata.get("parse") or getattr(type(item.default), "from_dict", None)
        values[item.name] = parse(payload[key]) if parse else payload[key]
    return cls(**values)


@dataclass(frozen=True)
class Response:
    """A raw HTTP response returned by the API."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    def raise_for_status(self) -> "Response":
        """Return self for a success status, raise ApiError otherwise."""
        if self.status_code not in SUCCESS_STATUSES:
            raise ApiError(self)
        return self


class ApiError(Exception):
    """Raised when the API answers with a non-success status."""

    def __init__(self, response: Response) -> None:
        self.response = response
        try:
            phrase = HTTPStatus(response.status_code).phrase
        except ValueError:
            phrase = ""
        body = response.body.decode("utf-8", errors="replace")
        super().__init__(f"{response.status_code}: {phrase}, Body: {body}")

    @property
    def status_code(self) -> int:
        return self.response.status_code


@dataclass(frozen=True)
class Link:
    """A related/self link pair."""

    related: str = ""
    self_url: str = _field("self", "")

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "Link":
        return _build(cls, payload)


@dataclass(frozen=True)
class SelfLink:
    """A link to the resource itself."""

    self_url: str = _field("self", "")

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "SelfLink":
        return _build(cls, payload)


@dataclass(frozen=True)
class RelationshipLinks:
    """The links of one relationship."""

    links: Link = Link()

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "RelationshipLinks":
        return _build(cls, payload)


@dataclass(frozen=True)
class JsonApi:
    """The jsonapi member of a document."""

    version: str = ""

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "JsonApi":
        return _build(cls, payload)


@dataclass(frozen=True)
class ResourceData(Generic[A, R]):
    """One resource object: type, id, attributes, relationships and links."""

    type: str
    id: str
    attributes: A
    relationships: Optional[R]
    links: SelfLink = SelfLink()

    @classmethod
    def from_dict(
        cls,
        payload: Optional[Mapping[str, Any]],
        attributes: Callable[[Mapping[str, Any]], A],
        relationships: Optional[Callable[[Mapping[str, Any]], R]] = None,
    ) -> "ResourceData[A, R]":
        payload = _object(payload, "data")
        related = _object(payload.get("relationships"), "relationships")
        return cls(
            type=payload.get("type", ""),
            id=payload.get("id", ""),
            attributes=attributes(_object(payload.get("attributes"), "attributes")),
            relationships=None if relationships is None else relationships(related),
            links=SelfLink.from_dict(payload.get("links")),
        )


@dataclass(frozen=True)
class Document(Generic[A, R]):
    """A document holding a single resource."""

    jsonapi: JsonApi
    links: SelfLink
    data: ResourceData[A, R]

    @classmethod
    def from_dict(
        cls,
        payload: Optional[Mapping[str, Any]],
        attributes: Callable[[Mapping[str, Any]], A],
        relationships: Optional[Callable[[Mapping[str, Any]], R]] = None,
    ) -> "Document[A, R]":
        payload = _object(payload, "document")
        return cls(
            jsonapi=JsonApi.from_dict(payload.get("jsonapi")),
            links=SelfLink.from_dict(payload.get("links")),
            data=ResourceData.from_dict(payload.get("data"), attributes, relationships),
        )


@dataclass(frozen=True)
class DocumentList(Generic[A, R]):
    """A document holding a page of resources."""

    jsonapi: JsonApi
    links: Mapping[str, Any]
    meta: Mapping[str, Any]
    data: list

    @classmethod
    def from_dict(
        cls,
        payload: Optional[Mapping[str, Any]],
        attributes: Callable[[Mapping[str, Any]], A],
        relationships: Optional[Callable[[Mapping[str, Any]], R]] = None,
    ) -> "DocumentList[A, R]":
        payload = _object(payload, "document")
        items = payload.get("data") or []
        if not isinstance(items, list):
            raise TypeError("expected a JSON array for data")
        return cls(
            jsonapi=JsonApi.from_dict(payload.get("jsonapi")),
            links=dict(_object(payload.get("links"), "links")),
            meta=dict(_object(payload.get("meta"), "meta")),
            data=[ResourceData.from_dict(item, attributes, relationships) for item in items],
        )