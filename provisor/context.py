"""
Run context - ambient state shared by the providers of one converge run.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any

from .resources.collection import ResourceCollection
from .settings import ProvisorSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """Current resource collection plus the configuration shared by a run.

    Providers declare resources into ``resource_collection``. ``clone()``
    produces an isolated child with its own collection that still shares
    settings, node attributes and cookbook names with its parent.

    Attributes:
        resource_collection: Declarations pending convergence
        settings: Provisor settings in effect for the run
        node: Free-form node attributes readable from actions
        cookbooks: Names of the cookbooks loaded for the run
    """

    resource_collection: ResourceCollection = field(default_factory=ResourceCollection)
    settings: ProvisorSettings = field(default_factory=get_settings)
    node: dict[str, Any] = field(default_factory=dict)
    cookbooks: list[str] = field(default_factory=list)

    def clone(self, resource_collection: ResourceCollection | None = None) -> "RunContext":
        """Copy this context, swapping in a collection (a fresh one by default).

        The copy is shallow: ``settings``, ``node`` and ``cookbooks`` are the
        same objects as in the parent.
        """
        if resource_collection is None:
            resource_collection = ResourceCollection()
        logger.debug("Cloned run context with an isolated resource collection")
        return dataclasses.replace(self, resource_collection=resource_collection)
