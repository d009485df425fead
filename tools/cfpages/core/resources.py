# cfpages/core/resources.py

"""
Cloud Foundry v2 resource collections.

Each collection knows its endpoint, the ``q`` filters the Cloud Controller
accepts for it and the association lists hanging off a single resource
(for example ``/v2/organizations/:guid/spaces``).
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, AsyncIterator, FrozenSet, Optional, Tuple

from ..interfaces.page import Job, Resource
from ..interfaces.request import ListRequest
from .sequence import single_or_none

if TYPE_CHECKING:
    from .client import CloudFoundryClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceType:
    name: str
    path: str
    filters: FrozenSet[str]
    associations: Tuple[str, ...] = ()


APPLICATIONS = ResourceType(
    name="applications",
    path="/v2/apps",
    filters=frozenset({"name", "space_guid", "organization_guid", "stack_guid", "diego"}),
    associations=("routes", "service_bindings", "route_mappings"),
)

ORGANIZATIONS = ResourceType(
    name="organizations",
    path="/v2/organizations",
    filters=frozenset({
        "name", "space_guid", "user_guid", "manager_guid",
        "billing_manager_guid", "auditor_guid", "status",
    }),
    associations=(
        "spaces", "users", "managers", "billing_managers", "auditors",
        "domains", "private_domains", "services", "space_quota_definitions",
    ),
)

SPACES = ResourceType(
    name="spaces",
    path="/v2/spaces",
    filters=frozenset({"name", "organization_guid", "developer_guid", "app_guid", "isolation_segment_guid"}),
    associations=(
        "apps", "routes", "service_instances", "developers", "managers",
        "auditors", "domains", "events", "services", "security_groups",
    ),
)

ROUTES = ResourceType(
    name="routes",
    path="/v2/routes",
    filters=frozenset({"host", "domain_guid", "organization_guid", "path", "port"}),
    associations=("apps", "route_mappings"),
)

SERVICE_INSTANCES = ResourceType(
    name="service_instances",
    path="/v2/service_instances",
    filters=frozenset({
        "name", "space_guid", "service_plan_guid", "service_binding_guid",
        "gateway_name", "organization_guid", "service_key_guid",
    }),
    associations=("service_bindings", "service_keys", "routes"),
)

SERVICE_PLANS = ResourceType(
    name="service_plans",
    path="/v2/service_plans",
    filters=frozenset({"service_guid", "service_instance_guid", "service_broker_guid", "active", "unique_id"}),
    associations=("service_instances",),
)

BUILDPACKS = ResourceType(
    name="buildpacks",
    path="/v2/buildpacks",
    filters=frozenset({"name", "stack"}),
)

USERS = ResourceType(
    name="users",
    path="/v2/users",
    filters=frozenset({
        "space_guid", "organization_guid", "managed_organization_guid",
        "billing_managed_organization_guid", "audited_organization_guid",
        "managed_space_guid", "audited_space_guid",
    }),
    associations=(
        "spaces", "organizations", "managed_organizations", "billing_managed_organizations",
        "audited_organizations", "managed_spaces", "audited_spaces",
    ),
)

RESOURCE_TYPES = {
    t.name: t
    for t in (APPLICATIONS, ORGANIZATIONS, SPACES, ROUTES, SERVICE_INSTANCES, SERVICE_PLANS, BUILDPACKS, USERS)
}


class ResourceCollection:
    """List and fetch resources of one type through a CloudFoundryClient."""

    def __init__(self, client: "CloudFoundryClient", resource_type: ResourceType):
        self.client = client
        self.resource_type = resource_type

    def __repr__(self) -> str:
        return f"ResourceCollection({self.resource_type.name})"

    def list(self, **criteria: Any) -> AsyncIterator[Resource]:
        """
        Lazily enumerate the collection, narrowed by keyword criteria.

        ``organization_id="abc"`` filters on ``organization_guid``; list
        values become ``IN`` filters. Unknown filter names raise ValueError
        before any request is made.
        """
        return self.list_request(ListRequest.from_kwargs(**criteria))

    def list_request(self, request: ListRequest) -> AsyncIterator[Resource]:
        unknown = [name for name in request.filter_names if name not in self.resource_type.filters]
        if unknown:
            raise ValueError(
                f"{self.resource_type.name} cannot be filtered by {', '.join(sorted(unknown))}; "
                f"supported: {', '.join(sorted(self.resource_type.filters))}"
            )
        return self.client.enumerate(self.resource_type.path, request, label=self.resource_type.name)

    def list_related(self, resource_id: str, association: str, **criteria: Any) -> AsyncIterator[Resource]:
        """Enumerate an association list such as an organization's spaces."""
        if association not in self.resource_type.associations:
            raise ValueError(
                f"{self.resource_type.name} has no '{association}' association; "
                f"supported: {', '.join(self.resource_type.associations) or 'none'}"
            )
        if not resource_id:
            raise ValueError("resource_id must not be empty")
        path = f"{self.resource_type.path}/{resource_id}/{association}"
        label = f"{self.resource_type.name}/{association}"
        return self.client.enumerate(path, ListRequest.from_kwargs(**criteria), label=label)

    async def get(self, resource_id: str) -> Resource:
        if not resource_id:
            raise ValueError("resource_id must not be empty")
        payload = await self.client.get_json(f"{self.resource_type.path}/{resource_id}")
        return Resource.from_dict(payload)

    async def find_by_name(self, name: str) -> Optional[Resource]:
        """Return the resource with this exact name, or None if there is none."""
        if "name" not in self.resource_type.filters:
            raise ValueError(f"{self.resource_type.name} cannot be looked up by name")
        return await single_or_none(self.list(name=name))


class JobCollection:
    """Read access to asynchronous Cloud Controller jobs."""

    path = "/v2/jobs"

    def __init__(self, client: "CloudFoundryClient"):
        self.client = client

    async def get(self, job_id: str) -> Job:
        if not job_id:
            raise ValueError("job_id must not be empty")
        payload = await self.client.get_json(f"{self.path}/{job_id}")
        return Job.from_dict(payload)
