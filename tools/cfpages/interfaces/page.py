# cfpages/interfaces/page.py

"""
Value types for paginated Cloud Foundry v2 collections.

A v2 list response looks like::

    {
        "total_results": 3,
        "total_pages": 2,
        "prev_url": null,
        "next_url": "/v2/apps?page=2&results-per-page=2",
        "resources": [{"metadata": {...}, "entity": {...}}, ...]
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..errors import ParseError, ProtocolError


@dataclass(frozen=True)
class ResourceMetadata:
    """Identity and timestamps of a v2 resource."""
    id: str
    url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass(frozen=True)
class Resource:
    """A single v2 resource entry: metadata plus its entity payload."""
    metadata: ResourceMetadata
    entity: Dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def name(self) -> Optional[str]:
        # not every resource has a name (routes use host, users use username)
        return self.entity.get("name") or self.entity.get("host") or self.entity.get("username")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resource":
        if not isinstance(data, dict):
            raise ParseError(f"Resource must be an object, got {type(data).__name__}")
        metadata = data.get("metadata")
        if not isinstance(metadata, dict) or not metadata.get("guid"):
            raise ParseError("Resource is missing metadata.guid")
        entity = data.get("entity") or {}
        if not isinstance(entity, dict):
            raise ParseError(f"Resource {metadata['guid']} has a non-object entity")
        return cls(
            metadata=ResourceMetadata(
                id=metadata["guid"],
                url=metadata.get("url"),
                created_at=metadata.get("created_at"),
                updated_at=metadata.get("updated_at"),
            ),
            entity=entity,
        )


@dataclass(frozen=True)
class Page:
    """
    One server response unit of a collection.

    ``page`` is the 1-based number that was requested. More pages remain
    while ``page < total_pages``; ``next_url`` is informational only.
    """
    page: int
    total_pages: int
    total_results: int
    resources: Tuple[Resource, ...] = ()
    prev_url: Optional[str] = None
    next_url: Optional[str] = None

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    def __len__(self) -> int:
        return len(self.resources)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], page: int) -> "Page":
        """
        Build a Page from a decoded v2 list response.

        Raises:
            ProtocolError: If the pagination metadata is missing or unusable
            ParseError: If the resources cannot be decoded
        """
        if not isinstance(payload, dict):
            raise ParseError(f"List response must be an object, got {type(payload).__name__}")

        total_pages = _read_count(payload, "total_pages")
        total_results = _read_count(payload, "total_results")

        resources = payload.get("resources")
        if not isinstance(resources, list):
            raise ParseError("List response is missing its 'resources' array")

        return cls(
            page=page,
            total_pages=total_pages,
            total_results=total_results,
            resources=tuple(Resource.from_dict(r) for r in resources),
            prev_url=payload.get("prev_url"),
            next_url=payload.get("next_url"),
        )


@dataclass(frozen=True)
class Job:
    """An asynchronous Cloud Controller job (``/v2/jobs/:guid``)."""
    id: str
    status: str
    error: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None

    @property
    def finished(self) -> bool:
        return self.status in ("finished", "failed")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        resource = Resource.from_dict(data)
        status = resource.entity.get("status")
        if not status:
            raise ParseError(f"Job {resource.id} has no status")
        return cls(
            id=resource.id,
            status=status,
            error=resource.entity.get("error"),
            error_details=resource.entity.get("error_details"),
        )


def _read_count(payload: Dict[str, Any], key: str) -> int:
    value = payload.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProtocolError(f"Pagination field '{key}' is missing or not an integer: {value!r}")
    if value < 0:
        raise ProtocolError(f"Pagination field '{key}' is negative: {value}")
    return value
