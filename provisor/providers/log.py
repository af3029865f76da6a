"""Provider for log resources."""

import logging

from provisor.resources.log import LogResource

from .base import Provider

logger = logging.getLogger(__name__)


class LogProvider(Provider):
    """Writes the resource message to the ``provisor`` log."""

    new_resource: LogResource

    def load_current_resource(self) -> None:
        pass

    def action_write(self) -> None:
        message = self.new_resource.message or self.new_resource.name
        getattr(logger, self.new_resource.level)(message)
        self.new_resource.set_updated_by_last_action(True)


LogProvider.provides("log")
