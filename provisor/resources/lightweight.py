"""Resource declarations for loaded provider types without a resource class."""

from typing import Any, ClassVar, Optional

from pydantic import ConfigDict, PrivateAttr

from .base import Resource


class LightweightResource(Resource):
    """A resource of an arbitrary type name carrying free-form attributes.

    Used when a recipe declares a type that only a loaded provider knows
    about; every extra keyword becomes an attribute the provider can read
    through ``new_resource``.

    Example:
        >>> site = LightweightResource.of_type(
        ...     "webapp_site", "blog", default_action="deploy", port=8080
        ... )
        >>> site.identity, site.port
        ('webapp_site[blog]', 8080)
    """

    model_config = ConfigDict(extra="allow")

    allowed_actions: ClassVar[Optional[tuple[str, ...]]] = None

    _type_name: str = PrivateAttr(default="lightweight")
    _default_action: str = PrivateAttr(default="nothing")

    @classmethod
    def of_type(
        cls,
        type_name: str,
        name: str,
        default_action: str = "nothing",
        **attributes: Any,
    ) -> "LightweightResource":
        resource = cls(name=name, **attributes)
        resource._type_name = type_name
        resource._default_action = default_action
        return resource

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def actions(self) -> list[str]:
        return list(self.action) or [self._default_action]
