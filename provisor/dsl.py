"""
Declaration DSL - appends resource declarations to the current run context.
"""

import logging
from typing import TYPE_CHECKING, Any

from .errors import ProviderNotFoundError, UnknownResourceTypeError
from .resources.base import Resource, resource_class_for
from .resources.lightweight import LightweightResource

if TYPE_CHECKING:
    from .context import RunContext

logger = logging.getLogger(__name__)


def build_resource(
    resource_type: "str | type[Resource]", name: str, **attributes: Any
) -> Resource:
    """Instantiate a declaration for a resource class or type name.

    Type names without a resource class fall back to a LightweightResource
    when a provider is registered for them; its default action is the
    provider's first defined action.

    Raises:
        UnknownResourceTypeError: If nothing knows the type name
    """
    if isinstance(resource_type, type):
        return resource_type(name=name, **attributes)

    resource_class = resource_class_for(resource_type)
    if resource_class is not None:
        return resource_class(name=name, **attributes)

    from .providers import provider_for

    try:
        provider_class = provider_for(resource_type)
    except ProviderNotFoundError:
        raise UnknownResourceTypeError(
            f"No resource or provider found for {resource_type}[{name}]"
        ) from None

    return LightweightResource.of_type(
        resource_type,
        name,
        default_action=provider_class.first_action(),
        **attributes,
    )


class RecipeDSL:
    """Mixin giving ``declare()`` to anything holding a ``run_context``."""

    run_context: "RunContext"

    def declare(
        self, resource_type: "str | type[Resource]", name: str, **attributes: Any
    ) -> Resource:
        """Declare a resource in the current run context's collection.

        Args:
            resource_type: Resource class or registered type name ("file")
            name: Resource name
            **attributes: Resource attributes

        Returns:
            The declared resource (chain ``.notifies()`` on it)

        Example:
            self.declare("file", "/etc/motd", content="hello")
        """
        resource = build_resource(resource_type, name, **attributes)
        self.run_context.resource_collection.insert(resource)
        logger.debug(f"Declared {resource.identity}")
        return resource


class Recipe(RecipeDSL):
    """Top-level declaration surface handed to recipe files."""

    def __init__(self, run_context: "RunContext"):
        self.run_context = run_context

    @property
    def resources(self) -> list[Resource]:
        return list(self.run_context.resource_collection)
