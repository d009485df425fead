# File: cfpages/core/client.py

import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from curl_cffi import requests

from ..config import ClientConfig
from ..errors import AuthenticationError, CloudFoundryError, NetworkError, ParseError
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..interfaces.page import Page, Resource
from ..interfaces.paginator import FetchPage, PaginatorOptions
from ..interfaces.request import ListRequest
from ..utils.http_utils import build_auth_headers, build_url, with_retries
from .paginator import Paginator
from .resources import (
    APPLICATIONS, BUILDPACKS, ORGANIZATIONS, ROUTES, SERVICE_INSTANCES,
    SERVICE_PLANS, SPACES, USERS, JobCollection, ResourceCollection,
)

logger = logging.getLogger(__name__)


class CloudFoundryClient:
    """
    Async client for the Cloud Foundry v2 API.

    Use as an async context manager so the underlying curl_cffi session is
    closed::

        async with CloudFoundryClient(config) as client:
            async for app in client.applications.list(space_id=space_id):
                ...
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[Any] = None,
        event_bus: Optional[EventBusInterface] = None,
    ):
        self.config = config
        self.event_bus = event_bus
        self._session = session
        self._owns_session = session is None
        self.paginator = Paginator(event_bus, PaginatorOptions(max_pages=config.max_pages))

        self.applications = ResourceCollection(self, APPLICATIONS)
        self.organizations = ResourceCollection(self, ORGANIZATIONS)
        self.spaces = ResourceCollection(self, SPACES)
        self.routes = ResourceCollection(self, ROUTES)
        self.service_instances = ResourceCollection(self, SERVICE_INSTANCES)
        self.service_plans = ResourceCollection(self, SERVICE_PLANS)
        self.buildpacks = ResourceCollection(self, BUILDPACKS)
        self.users = ResourceCollection(self, USERS)
        self.jobs = JobCollection(self)
        logger.info(f"CloudFoundryClient initialized for {config.api_host}")

    async def __aenter__(self) -> "CloudFoundryClient":
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _ensure_session(self):
        if self._session is None:
            self._session = requests.AsyncSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
            logger.debug("HTTP session closed")

    def collection(self, name: str) -> ResourceCollection:
        """Look up a resource collection by its name, e.g. ``"spaces"``."""
        collection = getattr(self, name, None)
        if not isinstance(collection, ResourceCollection):
            raise ValueError(f"Unknown resource type '{name}'")
        return collection

    async def get_json(self, path: str, params: Optional[List[Tuple[str, str]]] = None) -> Dict[str, Any]:
        """
        GET a Cloud Controller path and decode its JSON body.

        Raises:
            NetworkError: If the request could not be made
            AuthenticationError: On 401 or 403
            CloudFoundryError: On any other non-2xx status
            ParseError: If a successful response is not JSON
        """
        session = self._ensure_session()
        url = build_url(self.config.api_host, path, params)
        logger.debug(f"GET {url}")

        try:
            response = await session.get(
                url,
                headers=build_auth_headers(self.config.token),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestsError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        status = response.status_code
        if status in (401, 403):
            logger.error(f"Authentication/Authorization error for {url}. Status: {status}.")
            raise AuthenticationError(f"GET {path} failed with status {status}. Check the token and its scopes.")
        if not 200 <= status < 300:
            raise _error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"Response from {url} is not valid JSON: {e}") from e

    def page_fetcher(self, path: str, request: ListRequest) -> FetchPage:
        """
        Fetch function for one list operation.

        The request (and therefore every filter) is fixed here; only the page
        number varies between calls.
        """
        request = request.with_results_per_page(self.config.results_per_page)

        async def fetch_page(page: int) -> Page:
            payload = await self.get_json(path, request.to_params(page))
            return Page.from_dict(payload, page)

        fetch_page.__name__ = path
        return with_retries(
            fetch_page,
            max_retries=self.config.max_retries,
            retry_delay=self.config.retry_delay,
            event_bus=self.event_bus,
        )

    def enumerate(self, path: str, request: Optional[ListRequest] = None, label: Optional[str] = None) -> AsyncIterator[Resource]:
        return self.paginator.enumerate(self.page_fetcher(path, request or ListRequest()), label=label or path)


def _error_from_response(response) -> CloudFoundryError:
    """Build a CloudFoundryError from a v2 error body (code, description, error_code)."""
    code = description = error_code = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        code = body.get("code")
        description = body.get("description")
        error_code = body.get("error_code")
    else:
        description = (response.text or "")[:200] or None
    error = CloudFoundryError(response.status_code, code=code, description=description, error_code=error_code)
    logger.warning(f"Cloud Controller error: {error}")
    return error
