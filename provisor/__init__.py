"""
Provisor - Declarative resource providers with scoped convergence.

Recipes declare resources; providers bring each resource to its desired
state. Providers loaded from cookbook files define named actions, and an
action can converge the resources it declares inline, in an isolated
collection, reporting back whether anything changed.
"""

from .context import RunContext
from .core import ProvisorCore
from .dsl import Recipe
from .providers import LWRPBase, Provider
from .resources import Resource, ResourceCollection
from .runner import Runner
from .settings import ProvisorSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "LWRPBase",
    "Provider",
    "ProvisorCore",
    "ProvisorSettings",
    "Recipe",
    "Resource",
    "ResourceCollection",
    "RunContext",
    "Runner",
    "get_settings",
    "reload_settings",
]
