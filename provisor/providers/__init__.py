"""
Provisor Providers - action handlers that converge resources.
"""

from .base import ActionHandler, Provider, provider_for, registered_providers
from .file import FileProvider
from .inline import inline_action, isolated_run_context, run_scoped
from .loader import ProviderLoadCache, get_load_cache
from .log import LogProvider
from .lwrp import LWRPBase

__all__ = [
    "ActionHandler",
    "FileProvider",
    "LWRPBase",
    "LogProvider",
    "Provider",
    "ProviderLoadCache",
    "get_load_cache",
    "inline_action",
    "isolated_run_context",
    "provider_for",
    "registered_providers",
    "run_scoped",
]
