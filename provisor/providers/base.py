"""Provider base class and action registry."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from provisor.dsl import RecipeDSL
from provisor.errors import (
    ActionBodyError,
    ConvergenceError,
    ProviderNotFoundError,
    ProvisorError,
    UnknownActionError,
)

if TYPE_CHECKING:
    from provisor.context import RunContext
    from provisor.resources.base import Resource

logger = logging.getLogger(__name__)

ActionBody = Callable[["Provider"], Any]

# resource type name -> provider class; last registration wins
_providers: dict[str, type["Provider"]] = {}
_providers_lock = threading.Lock()


def provider_for(type_name: str) -> type["Provider"]:
    """Return the provider class registered for a resource type.

    Raises:
        ProviderNotFoundError: If no provider provides ``type_name``
    """
    with _providers_lock:
        provider_class = _providers.get(type_name)
    if provider_class is None:
        raise ProviderNotFoundError(f"No provider found for resource type {type_name}")
    return provider_class


def registered_providers() -> dict[str, type["Provider"]]:
    """Snapshot of the provider registry."""
    with _providers_lock:
        return dict(_providers)


@dataclass(frozen=True)
class ActionHandler:
    """A named action body stored on a provider class.

    Attributes:
        name: Action name
        body: Callable run with the provider instance as its only argument
        scoped: True when ``body`` converges in an isolated run context
    """

    name: str
    body: ActionBody
    scoped: bool = False

    def __call__(self, provider: "Provider") -> Any:
        return self.body(provider)


class Provider(RecipeDSL):
    """Base class for providers - brings resources to their desired state.

    Each provider class owns a map of action name to ActionHandler. The map
    is copied from the parent class when a subclass is created, so subclasses
    inherit actions and may replace them without touching the parent.

    Actions are registered three ways:
    - methods named ``action_<name>`` on the class body
    - ``define_action(name, body)``
    - the ``@SomeProvider.action(name)`` decorator

    Example:
        class MotdProvider(Provider):
            def load_current_resource(self):
                pass

            def action_create(self):
                self.declare("file", "/etc/motd", content="hello")

        MotdProvider.provides("motd")
    """

    _actions: ClassVar[dict[str, ActionHandler]] = {}

    # human-readable description of where this provider type came from
    origin: ClassVar[str | None] = None

    # wrap body exceptions in ActionBodyError; native providers raise their own
    declarative_actions: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._actions = dict(cls._actions)
        for attr, value in list(cls.__dict__.items()):
            if attr.startswith("action_") and callable(value):
                cls.define_action(attr[len("action_"):], value)

    def __init__(self, new_resource: "Resource", run_context: "RunContext"):
        self.new_resource = new_resource
        self.run_context = run_context
        self.current_resource: "Resource | None" = None

    # class-level action registry

    @classmethod
    def define_action(cls, name: str, body: ActionBody) -> ActionHandler:
        """Install ``body`` as action ``name``; an existing handler is replaced.

        Args:
            name: Action name
            body: Callable taking the provider instance

        Returns:
            The stored ActionHandler
        """
        handler = cls._build_action_handler(name, body)
        if name in cls._actions:
            logger.debug(f"Redefining action {name} on {cls.__name__}")
        cls._actions[name] = handler
        return handler

    @classmethod
    def _build_action_handler(cls, name: str, body: ActionBody) -> ActionHandler:
        return ActionHandler(name=name, body=body)

    @classmethod
    def action(cls, name: str) -> Callable[[ActionBody], ActionBody]:
        """Decorator form of ``define_action``.

        Example:
            @provider.action("deploy")
            def deploy(self):
                self.declare("log", "deploying")
        """

        def decorator(body: ActionBody) -> ActionBody:
            cls.define_action(name, body)
            return body

        return decorator

    @classmethod
    def handler_for(cls, name: str) -> ActionHandler | None:
        return cls._actions.get(name)

    @classmethod
    def defined_actions(cls) -> list[str]:
        return list(cls._actions)

    @classmethod
    def first_action(cls) -> str:
        """First action defined after ``nothing``, used as a default action."""
        for name in cls._actions:
            if name != "nothing":
                return name
        return "nothing"

    @classmethod
    def provides(cls, type_name: str) -> None:
        """Register this class as the provider of a resource type."""
        with _providers_lock:
            previous = _providers.get(type_name)
            _providers[type_name] = cls
        if previous is not None and previous is not cls:
            logger.debug(f"{cls.__name__} replaces {previous.__name__} as provider of {type_name}")

    # instance behaviour

    def load_current_resource(self) -> None:
        """Load the current state of ``new_resource`` into ``current_resource``."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement load_current_resource()"
        )

    def run_action(self, action: str) -> Any:
        """Dispatch ``action`` to its handler.

        Args:
            action: Action name

        Returns:
            The handler's return value

        Raises:
            UnknownActionError: If the action was never defined
            ActionBodyError: If a declarative handler raised a non-Provisor
                exception; native providers propagate the original exception
            ConvergenceError: If an inline run failed, annotated with this
                action and provider
        """
        handler = self.handler_for(action)
        if handler is None:
            raise UnknownActionError(action, str(self))

        self.load_current_resource()
        logger.debug(f"{self} running action {action}")

        try:
            return handler(self)
        except ConvergenceError as e:
            e.annotate_dispatch(action, str(self))
            raise
        except ProvisorError:
            raise
        except Exception as e:
            if not self.declarative_actions:
                raise
            logger.error(f"{self} failed in action {action}: {e}")
            raise ActionBodyError(action, str(self), e) from e

    def converge_by(self, description: str, callback: Callable[[], Any]) -> Any:
        """Run a state-changing callback and mark the resource updated."""
        logger.info(f"{self.new_resource.identity}: {description}")
        result = callback()
        self.new_resource.set_updated_by_last_action(True)
        return result

    def action_nothing(self) -> None:
        logger.debug(f"{self.new_resource.identity}: doing nothing")

    def __str__(self) -> str:
        return self.origin or f"{self.__class__.__name__}"

    __repr__ = __str__


Provider.define_action("nothing", Provider.action_nothing)
