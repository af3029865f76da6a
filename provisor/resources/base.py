"""Base resource classes for Provisor."""

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Optional, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
)

from provisor.errors import UnknownActionError

if TYPE_CHECKING:
    from provisor.context import RunContext
    from provisor.providers.base import Provider

logger = logging.getLogger(__name__)

# resource_type -> Resource subclass, filled on subclassing
_resource_types: dict[str, type["Resource"]] = {}


def resource_class_for(type_name: str) -> Optional[type["Resource"]]:
    """Return the resource class registered for a type name, if any."""
    return _resource_types.get(type_name)


class Notification(BaseModel):
    """A request to run `action` on `target` once the notifier is updated.

    Attributes:
        action: Action to run on the target resource
        target: Identity string of the target, e.g. "file[/etc/motd]"
        timing: "immediate" runs right after the notifier, "delayed" runs
                once at the end of the collection's convergence
    """

    model_config = ConfigDict(frozen=True)

    action: str
    target: str
    timing: Literal["delayed", "immediate"] = "delayed"


class Resource(BaseModel):
    """Base resource class - all resources inherit from this.

    A resource is a single desired-state declaration. It is appended to a
    ResourceCollection and, when converged, hands each of its actions to the
    provider registered for its ``resource_type``.

    Outcome tracking:
    - ``updated_by_last_action`` is reset before each action and set by the
      provider when that action changed something
    - ``updated`` is cumulative: once a run updates the resource it stays
      true for the rest of the process

    Subclasses declare three class variables:
        resource_type: Type name used for lookups and provider resolution
        default_action: Action run when none is declared
        allowed_actions: Actions accepted by validation (None accepts any)

    Attributes:
        name: Identifier of this declaration, unique per resource type
        action: One or more actions to run, in order
        ignore_failure: Log and continue when an action of this resource fails
        _notifications: Notifications fired after an updating action
    """

    resource_type: ClassVar[str] = "resource"
    default_action: ClassVar[str] = "nothing"
    allowed_actions: ClassVar[Optional[tuple[str, ...]]] = ("nothing",)

    name: str
    action: list[str] = Field(default_factory=list)
    ignore_failure: bool = False

    _notifications: list[Notification] = PrivateAttr(default_factory=list)
    _updated: bool = PrivateAttr(default=False)
    _updated_by_last_action: bool = PrivateAttr(default=False)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if "resource_type" in cls.__dict__:
            _resource_types[cls.resource_type] = cls
            logger.debug(f"Registered resource type {cls.resource_type} ({cls.__name__})")

    @field_validator("action", mode="before")
    @classmethod
    def coerce_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("action")
    @classmethod
    def validate_action(cls, value: list[str]) -> list[str]:
        if cls.allowed_actions is None:
            return value
        for action in value:
            if action != "nothing" and action not in cls.allowed_actions:
                raise ValueError(
                    f"'{action}' is not a valid action for {cls.resource_type}, "
                    f"expected one of {list(cls.allowed_actions)}"
                )
        return value

    @property
    def type_name(self) -> str:
        return self.resource_type

    @property
    def identity(self) -> str:
        """Lookup key of this declaration, e.g. ``file[/etc/motd]``."""
        return f"{self.type_name}[{self.name}]"

    @property
    def actions(self) -> list[str]:
        """Actions to run, falling back to the class default."""
        return list(self.action) or [self.default_action]

    @property
    def updated(self) -> bool:
        return self._updated

    @property
    def updated_by_last_action(self) -> bool:
        return self._updated_by_last_action

    def set_updated_by_last_action(self, value: bool) -> None:
        """Record whether the running action changed anything.

        Setting it true also marks the resource updated; setting it false
        never clears ``updated``.
        """
        self._updated_by_last_action = value
        if value:
            self._updated = True

    def notifies(
        self,
        action: str,
        target: "Resource | str",
        timing: Literal["delayed", "immediate"] = "delayed",
    ) -> Self:
        """Notify ``target`` to run ``action`` when this resource is updated.

        Args:
            action: Action to run on the target
            target: Target resource, or its identity string ("type[name]")
            timing: "delayed" (default) or "immediate"

        Returns:
            Self for method chaining

        Example:
            template.notifies("restart", "service[nginx]", timing="immediate")
        """
        if isinstance(target, Resource):
            target = target.identity
        self._notifications.append(
            Notification(action=action, target=target, timing=timing)
        )
        return self

    @property
    def immediate_notifications(self) -> list[Notification]:
        return [n for n in self._notifications if n.timing == "immediate"]

    @property
    def delayed_notifications(self) -> list[Notification]:
        return [n for n in self._notifications if n.timing == "delayed"]

    def provider_class(self) -> type["Provider"]:
        """Resolve the provider class registered for this resource's type."""
        from provisor.providers import provider_for

        return provider_for(self.type_name)

    def run_action(self, action: str, run_context: "RunContext") -> Any:
        """Run one action of this resource through its provider.

        Args:
            action: Action name to dispatch
            run_context: Context the provider declares and converges against

        Returns:
            Whatever the action handler returned

        Raises:
            UnknownActionError: If the provider has no such action; the
                resource's flags are left untouched
        """
        provider = self.provider_class()(self, run_context)
        if provider.handler_for(action) is None:
            raise UnknownActionError(action, str(provider))
        self._updated_by_last_action = False
        logger.debug(f"Running {self.identity} action {action} with {provider}")
        return provider.run_action(action)

    def __str__(self) -> str:
        return self.identity
