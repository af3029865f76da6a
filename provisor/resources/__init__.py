"""
Provisor Resources - Pydantic models for desired-state declarations.
"""

from .base import Notification, Resource, resource_class_for
from .collection import ResourceCollection
from .file import FileResource
from .lightweight import LightweightResource
from .log import LogResource

__all__ = [
    "FileResource",
    "LightweightResource",
    "LogResource",
    "Notification",
    "Resource",
    "ResourceCollection",
    "resource_class_for",
]
