"""Lightweight providers built from cookbook source files."""

import importlib.util
import logging
from collections.abc import Callable
from pathlib import Path
from typing import ClassVar

from provisor.errors import ProviderLoadError, ProvisorError

from .base import ActionBody, ActionHandler, Provider
from .inline import inline_action
from .loader import (
    ProviderLoadCache,
    convert_to_class_name,
    filename_to_qualified_string,
    get_load_cache,
)

logger = logging.getLogger(__name__)

ProviderSource = Path | str | Callable[[type["LWRPBase"]], None]


class LWRPBase(Provider):
    """Base class from which providers loaded from source inherit.

    A provider source file is an ordinary Python module. While it executes,
    its namespace holds:

        provider               the new provider class
        action                 decorator defining an action on it
        define_action          ``define_action(name, body)``
        use_inline_resources   opt into inline convergence

    Example ``cookbooks/webapp/providers/site.py``::

        use_inline_resources()

        @action("deploy")
        def deploy(self):
            self.declare("file", self.new_resource.docroot + "/index.html",
                         content=self.new_resource.banner)

    Without inline resources, resources declared by an action are added to
    the caller's collection right after the resource being converged. They
    can notify and be notified by resources outside the provider, but the
    provider's ``new_resource`` can never reflect whether they changed
    anything, because the action returns before they run.

    With inline resources, every action runs against a temporary run context
    with its own collection, which is converged before the action returns.
    If any of those resources was updated, ``new_resource`` is marked
    updated. Inline resources cannot notify outside resources, and delayed
    notifications among them fire at the end of the action rather than at
    the end of the run.
    """

    _inline_resources: ClassVar[bool] = False
    declarative_actions: ClassVar[bool] = True

    resource_name: ClassVar[str | None] = None
    cookbook_name: ClassVar[str | None] = None

    def load_current_resource(self) -> None:
        # no-op so simple providers do not have to define one
        pass

    @classmethod
    def use_inline_resources(cls) -> None:
        """Converge every action defined from now on inline."""
        cls._inline_resources = True
        logger.debug(f"{cls.__name__} uses inline resources")

    @classmethod
    def _build_action_handler(cls, name: str, body: ActionBody) -> ActionHandler:
        if cls._inline_resources:
            return ActionHandler(name=name, body=inline_action(body), scoped=True)
        return super()._build_action_handler(name, body)

    @classmethod
    def class_from_source(cls, source: ProviderSource) -> None:
        """Execute a provider source against this class.

        Args:
            source: Path of a provider file, or a callable receiving the class

        Raises:
            ProviderLoadError: If the file does not exist or cannot be loaded
        """
        if callable(source):
            source(cls)
            return

        path = Path(source)
        if not path.is_file():
            raise ProviderLoadError(f"Provider file not found: {path}")

        spec = importlib.util.spec_from_file_location(
            f"provisor_providers.{cls.__name__}", path
        )
        if spec is None or spec.loader is None:
            raise ProviderLoadError(f"Could not load {path}")

        module = importlib.util.module_from_spec(spec)
        module.provider = cls
        module.action = cls.action
        module.define_action = cls.define_action
        module.use_inline_resources = cls.use_inline_resources
        spec.loader.exec_module(module)

    @classmethod
    def load_once(
        cls,
        key: str,
        source: ProviderSource,
        resource_name: str | None = None,
        cookbook_name: str | None = None,
        cache: ProviderLoadCache | None = None,
    ) -> type["LWRPBase"]:
        """Build a provider type from ``source`` unless ``key`` was loaded before.

        Args:
            key: Load key; repeated keys return the type built the first time
            source: Provider file path or callable receiving the new class
            resource_name: Resource type the provider serves (defaults to key)
            cookbook_name: Cookbook the source belongs to, for diagnostics
            cache: Load cache to use (defaults to the process-wide one)

        Returns:
            The provider class for ``key``

        Raises:
            ProviderLoadError: If executing the source fails
        """
        if cache is None:
            cache = get_load_cache()
        resource_name = resource_name or key

        def build() -> type["LWRPBase"]:
            provider_class = type(
                convert_to_class_name(resource_name),
                (cls,),
                {"resource_name": resource_name, "cookbook_name": cookbook_name},
            )
            try:
                provider_class.class_from_source(source)
            except ProvisorError:
                raise
            except Exception as e:
                raise ProviderLoadError(
                    f"Failed to load {key} into provider {resource_name}: {e}"
                ) from e

            if cookbook_name:
                provider_class.origin = f"LWRP provider {resource_name} from cookbook {cookbook_name}"
            else:
                provider_class.origin = f"LWRP provider {resource_name} from {key}"
            provider_class.provides(resource_name)

            logger.debug(
                f"Loaded contents of {key} into provider {resource_name} ({provider_class.__name__})"
            )
            return provider_class

        return cache.load_once(key, build)

    @classmethod
    def build_from_file(
        cls,
        cookbook_name: str,
        filename: str | Path,
        cache: ProviderLoadCache | None = None,
    ) -> type["LWRPBase"]:
        """Load a cookbook provider file, at most once per resolved path.

        Example:
            LWRPBase.build_from_file("webapp", "cookbooks/webapp/providers/site.py")
            # provides "webapp_site"
        """
        path = Path(filename).resolve()
        return cls.load_once(
            str(path),
            path,
            resource_name=filename_to_qualified_string(cookbook_name, path),
            cookbook_name=cookbook_name,
            cache=cache,
        )
