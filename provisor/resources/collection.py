"""Ordered collection of resource declarations."""

import logging
from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, overload

from provisor.errors import ResourceNotFoundError

if TYPE_CHECKING:
    from .base import Resource

logger = logging.getLogger(__name__)


class ResourceCollection(Sequence):
    """Ordered, append-mostly sequence of resource declarations.

    Declaration order is the convergence order. By extending
    collections.abc.Sequence we get iteration, ``in``, ``index()`` and
    ``count()`` for free.

    While the collection is being walked by ``execute_each_resource()``,
    ``insert()`` places new declarations right after the resource currently
    converging (and after anything it already inserted), so resources
    declared by an action run before the rest of the original list.

    Example:
        >>> collection = ResourceCollection()
        >>> collection.insert(FileResource(name="/etc/motd", content="hi"))
        >>> collection.lookup("file[/etc/motd]").content
        'hi'
    """

    def __init__(self, resources: "Sequence[Resource] | None" = None):
        self._resources: list["Resource"] = list(resources or [])
        self._insert_after: int | None = None

    @overload
    def __getitem__(self, index: int) -> "Resource": ...

    @overload
    def __getitem__(self, index: slice) -> list["Resource"]: ...

    def __getitem__(self, index):
        return self._resources[index]

    def __iter__(self) -> Iterator["Resource"]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __repr__(self) -> str:
        return f"ResourceCollection({[r.identity for r in self._resources]})"

    def insert(self, resource: "Resource") -> "Resource":
        """Add a declaration, honouring the insert position during convergence.

        Args:
            resource: Resource declaration to add

        Returns:
            The resource, for chaining in declaration helpers

        Raises:
            TypeError: If ``resource`` is not a Resource
        """
        from .base import Resource

        if not isinstance(resource, Resource):
            raise TypeError(
                f"Can only add Resource objects, got {type(resource).__name__}"
            )

        if self._insert_after is None:
            self._resources.append(resource)
        else:
            self._insert_after += 1
            self._resources.insert(self._insert_after, resource)
        return resource

    def execute_each_resource(
        self, callback: Callable[["Resource"], None], start: int = 0
    ) -> None:
        """Call ``callback`` on every resource from ``start`` on, including late inserts.

        The insert position is cleared again on every exit path.
        """
        position = start
        try:
            while position < len(self._resources):
                self._insert_after = position
                callback(self._resources[position])
                position += 1
        finally:
            self._insert_after = None

    def lookup(self, identity: str) -> "Resource":
        """Find the latest declaration with the given identity.

        Args:
            identity: Identity string such as ``file[/etc/motd]``

        Raises:
            ResourceNotFoundError: If no declaration matches
        """
        for resource in reversed(self._resources):
            if resource.identity == identity:
                return resource
        raise ResourceNotFoundError(
            f"Cannot find a resource matching {identity} (did you define it first?)"
        )

    def any_updated(self) -> bool:
        return any(resource.updated for resource in self._resources)

    def updated_resources(self) -> list["Resource"]:
        return [resource for resource in self._resources if resource.updated]
