"""
Provisor Core - loads cookbook providers and converges recipes.

Converge Pipeline: Load cookbook providers → Evaluate recipe → Converge resources
"""

import importlib.util
import logging
from pathlib import Path
from typing import Any

from .context import RunContext
from .dsl import Recipe
from .errors import ConfigurationError
from .providers import LWRPBase, registered_providers
from .providers.loader import ProviderLoadCache
from .runner import Runner
from .settings import ProvisorSettings, get_settings

logger = logging.getLogger(__name__)


class ProvisorCore:
    """Main coordinator for the Provisor converge pipeline."""

    def __init__(
        self,
        cookbook_path: Path | None = None,
        settings: ProvisorSettings | None = None,
        load_cache: ProviderLoadCache | None = None,
    ):
        """
        Initialize ProvisorCore.

        Args:
            cookbook_path: Directory of cookbooks (overrides settings/.env)
            settings: Settings to use instead of the global ones
            load_cache: Provider load cache (defaults to the process-wide one)
        """
        self.settings = settings or get_settings()
        self.cookbook_path = Path(cookbook_path or self.settings.cookbook_path)
        self.load_cache = load_cache

        logger.info("ProvisorCore initialized")

    def load_cookbooks(self) -> list[str]:
        """
        Load every ``<cookbook>/providers/*.py`` under the cookbook path.

        Returns:
            Names of the cookbooks found, in sorted order

        Raises:
            ConfigurationError: If the cookbook path exists but is not a directory
        """
        if self.cookbook_path.exists() and not self.cookbook_path.is_dir():
            raise ConfigurationError(f"Cookbook path {self.cookbook_path} is not a directory")
        if not self.cookbook_path.is_dir():
            logger.warning(f"Cookbook path {self.cookbook_path} does not exist, no providers loaded")
            return []

        cookbooks = []
        for cookbook_dir in sorted(p for p in self.cookbook_path.iterdir() if p.is_dir()):
            cookbooks.append(cookbook_dir.name)
            for provider_file in sorted((cookbook_dir / "providers").glob("*.py")):
                LWRPBase.build_from_file(cookbook_dir.name, provider_file, cache=self.load_cache)

        logger.info(f"Loaded {len(cookbooks)} cookbooks from {self.cookbook_path}")
        return cookbooks

    def converge(self, recipe_file: Path, node: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Full pipeline: load cookbooks → evaluate recipe → converge.

        Args:
            recipe_file: Path to the recipe file declaring resources
            node: Node attributes made available to recipes and actions

        Returns:
            Dict with run results
        """
        logger.info(f"Starting Provisor converge for: {recipe_file}")

        # 1. Load cookbook providers
        cookbooks = self.load_cookbooks()

        # 2. Evaluate the recipe into a fresh run context
        run_context = RunContext(settings=self.settings, node=dict(node or {}), cookbooks=cookbooks)
        self._load_recipe(recipe_file, run_context)
        collection = run_context.resource_collection
        logger.info(f"Loaded {len(collection)} resources")

        # 3. Converge
        Runner(run_context).converge()
        updated = [resource.identity for resource in collection if resource.updated]
        logger.info(f"Provisor converge complete, {len(updated)}/{len(collection)} resources updated")

        return {
            "success": True,
            "resources": len(collection),
            "updated": updated,
        }

    def _load_recipe(self, recipe_file: Path, run_context: RunContext) -> Recipe:
        """
        Evaluate a recipe file with ``declare``, ``recipe`` and ``node`` in scope.

        Args:
            recipe_file: Path to the recipe
            run_context: Context receiving the declarations

        Returns:
            The Recipe the file declared into
        """
        if not recipe_file.exists():
            raise FileNotFoundError(f"File not found: {recipe_file}")

        spec = importlib.util.spec_from_file_location("provisor_recipe", recipe_file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Could not load {recipe_file}")

        recipe = Recipe(run_context)
        module = importlib.util.module_from_spec(spec)
        module.recipe = recipe
        module.declare = recipe.declare
        module.node = run_context.node
        spec.loader.exec_module(module)

        return recipe

    def providers(self) -> dict[str, str]:
        """
        Load cookbooks and describe every registered provider.

        Returns:
            Mapping of resource type name to provider description
        """
        self.load_cookbooks()
        return {
            type_name: provider_class.origin or provider_class.__name__
            for type_name, provider_class in sorted(registered_providers().items())
        }
