# cfpages/core/__init__.py
from .event_bus import EventBus
from .paginator import Paginator
from .client import CloudFoundryClient
from .resources import ResourceCollection, JobCollection, RESOURCE_TYPES

__all__ = [
    "EventBus",
    "Paginator",
    "CloudFoundryClient",
    "ResourceCollection",
    "JobCollection",
    "RESOURCE_TYPES",
]

"""
Core components for the cfpages package.
"""
