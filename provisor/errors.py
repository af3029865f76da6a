"""
Provisor errors.
"""


class ProvisorError(Exception):
    """Base exception for all Provisor errors."""
    pass


class ConfigurationError(ProvisorError):
    """Errors in configuration."""
    pass


class UnknownActionError(ProvisorError):
    """Dispatch requested for an action the provider never defined."""

    def __init__(self, action: str, provider: str):
        self.action = action
        self.provider = provider
        super().__init__(f"{provider} has no action '{action}'")


class ActionBodyError(ProvisorError):
    """A declarative (LWRP) action body raised while declaring resources."""

    def __init__(self, action: str, provider: str, cause: BaseException):
        self.action = action
        self.provider = provider
        self.cause = cause
        super().__init__(f"{provider} failed in action '{action}': {cause}")


class ConvergenceError(ProvisorError):
    """A resource failed while being converged.

    When the failing run belongs to an inline provider action, the action
    dispatch that ran it is recorded in ``dispatch_action`` and
    ``dispatch_provider``.
    """

    def __init__(self, resource: str, action: str, cause: BaseException):
        self.resource = resource
        self.action = action
        self.cause = cause
        self.dispatch_action: str | None = None
        self.dispatch_provider: str | None = None
        super().__init__(f"{resource} failed to run action '{action}': {cause}")

    def annotate_dispatch(self, action: str, provider: str) -> None:
        """Record the innermost provider action this failure escaped from."""
        if self.dispatch_action is None:
            self.dispatch_action = action
            self.dispatch_provider = provider

    def __str__(self) -> str:
        message = super().__str__()
        if self.dispatch_action is not None:
            message += f" (in action '{self.dispatch_action}' of {self.dispatch_provider})"
        return message


class ProviderLoadError(ProvisorError):
    """A provider source could not be loaded."""
    pass


class ProviderNotFoundError(ProvisorError):
    """No provider is registered for a resource type."""
    pass


class ResourceNotFoundError(ProvisorError):
    """A resource lookup in a collection found nothing."""
    pass


class UnknownResourceTypeError(ProvisorError):
    """A declaration named a resource type nobody provides."""
    pass
