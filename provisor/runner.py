"""
Runner - converges a resource collection in declaration order.
"""

import logging
from typing import TYPE_CHECKING

from .errors import ConvergenceError
from .resources.base import Notification, Resource

if TYPE_CHECKING:
    from .context import RunContext
    from .resources.collection import ResourceCollection

logger = logging.getLogger(__name__)


class Runner:
    """Runs every action of every resource in a run context's collection.

    Resources converge strictly in collection order. Resources inserted
    while converging (by default-mode provider actions) run right after the
    resource that declared them. Immediate notifications fire as soon as the
    notifying resource is updated; delayed notifications are queued once per
    (action, target) and fire after the last resource.
    """

    def __init__(self, run_context: "RunContext"):
        self.run_context = run_context
        self.delayed_notifications: list[Notification] = []

    def converge(self) -> "ResourceCollection":
        """Converge the collection.

        Returns:
            The converged collection

        Raises:
            ConvergenceError: If a resource action fails and the resource does
                not ignore failures
            ResourceNotFoundError: If a notification targets a resource that
                is not in this collection
        """
        collection = self.run_context.resource_collection
        logger.debug(f"Converging {len(collection)} resources")

        collection.execute_each_resource(self._run_all_actions)
        self._run_delayed_notifications()

        logger.debug(f"Converge complete, {len(collection.updated_resources())} resources updated")
        return collection

    def _run_all_actions(self, resource: Resource) -> None:
        for action in resource.actions:
            self.run_action(resource, action)

    def run_action(self, resource: Resource, action: str) -> None:
        """Run one action of ``resource`` and handle its notifications."""
        try:
            resource.run_action(action, self.run_context)
        except Exception as e:
            if resource.ignore_failure:
                logger.error(f"{resource.identity} action {action} failed, ignoring: {e}")
                return
            raise ConvergenceError(resource.identity, action, e) from e

        if not resource.updated_by_last_action:
            return

        logger.info(f"{resource.identity} updated by action {action}")

        for notification in resource.immediate_notifications:
            target = self.run_context.resource_collection.lookup(notification.target)
            logger.info(
                f"{resource.identity} sending {notification.action} action to "
                f"{target.identity} (immediate)"
            )
            self.run_action(target, notification.action)

        for notification in resource.delayed_notifications:
            if notification in self.delayed_notifications:
                continue
            logger.info(
                f"{resource.identity} sending {notification.action} action to "
                f"{notification.target} (delayed)"
            )
            self.delayed_notifications.append(notification)

    def _run_delayed_notifications(self) -> None:
        # notifications queued while running delayed ones are appended and run too
        collection = self.run_context.resource_collection
        position = 0
        while position < len(self.delayed_notifications):
            notification = self.delayed_notifications[position]
            target = collection.lookup(notification.target)
            logger.info(f"Processing delayed {notification.action} action on {target.identity}")

            declared_from = len(collection)
            self.run_action(target, notification.action)
            # resources declared by a default-mode target land at the end
            if len(collection) > declared_from:
                collection.execute_each_resource(self._run_all_actions, start=declared_from)
            position += 1
