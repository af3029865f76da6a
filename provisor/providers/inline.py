"""Inline resource convergence for provider actions.

An inline action does not add its resources to the caller's collection.
Instead it runs against a temporary run context with an empty collection,
converges that collection before returning, and marks the provider's
``new_resource`` updated when any of those resources was updated.

Resources declared inline can notify each other, with delayed notifications
firing at the end of the action, but they cannot notify or be notified by
anything outside it.
"""

import functools
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from provisor.context import RunContext
from provisor.resources.collection import ResourceCollection
from provisor.runner import Runner

if TYPE_CHECKING:
    from .base import ActionBody, Provider

logger = logging.getLogger(__name__)


@contextmanager
def isolated_run_context(provider: "Provider") -> Iterator[RunContext]:
    """Swap an empty-collection clone in as ``provider.run_context``.

    The provider's original run context is put back on every exit path.
    """
    saved_run_context = provider.run_context
    temp_run_context = saved_run_context.clone(ResourceCollection())
    provider.run_context = temp_run_context
    try:
        yield temp_run_context
    finally:
        provider.run_context = saved_run_context


def run_scoped(provider: "Provider", body: "ActionBody") -> Any:
    """Run ``body`` in an isolated run context and converge what it declared.

    Returns:
        The body's return value

    Raises:
        Whatever the body or the convergence raised, after the provider's run
        context has been restored. If the body finished and convergence then
        failed, ``new_resource`` is still marked updated when a resource that
        converged before the failure was updated.
    """
    temp_run_context = None
    body_finished = False
    try:
        with isolated_run_context(provider) as temp_run_context:
            result = body(provider)
            body_finished = True
            Runner(temp_run_context).converge()
    finally:
        if body_finished and temp_run_context.resource_collection.any_updated():
            logger.debug(f"{provider.new_resource.identity} updated by inline resources")
            provider.new_resource.set_updated_by_last_action(True)
    return result


def inline_action(body: "ActionBody") -> "ActionBody":
    """Wrap an action body so it always runs through ``run_scoped``."""

    @functools.wraps(body)
    def scoped_body(provider: "Provider") -> Any:
        return run_scoped(provider, body)

    return scoped_body
