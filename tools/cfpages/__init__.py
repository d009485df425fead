# cfpages/__init__.py
"""
Lazy, page-by-page enumeration of Cloud Foundry v2 collections.
"""

from .config import ClientConfig, load_client_config
from .core.client import CloudFoundryClient
from .core.paginator import Paginator
from .core.sequence import collect, first, single, single_or_none, take, with_timeout
from .interfaces.page import Job, Page, Resource, ResourceMetadata
from .interfaces.paginator import PaginatorOptions
from .interfaces.request import Filter, FilterOperator, ListRequest, OrderDirection
from .errors import (
    CFPagesError,
    NetworkError,
    AuthenticationError,
    CloudFoundryError,
    ParseError,
    ProtocolError,
    CardinalityError,
    EnumerationTimeout,
    ConfigError,
)

__all__ = [
    "ClientConfig",
    "load_client_config",
    "CloudFoundryClient",
    "Paginator",
    "PaginatorOptions",
    "collect",
    "first",
    "single",
    "single_or_none",
    "take",
    "with_timeout",
    "Job",
    "Page",
    "Resource",
    "ResourceMetadata",
    "Filter",
    "FilterOperator",
    "ListRequest",
    "OrderDirection",
    "CFPagesError",
    "NetworkError",
    "AuthenticationError",
    "CloudFoundryError",
    "ParseError",
    "ProtocolError",
    "CardinalityError",
    "EnumerationTimeout",
    "ConfigError",
]
