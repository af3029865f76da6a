"""Log resource - writes a message to the run log."""

from typing import ClassVar, Literal

from pydantic import Field

from .base import Resource


class LogResource(Resource):
    """Writes ``message`` (or the name) to the log when converged.

    A log resource is always updated by its ``write`` action, which makes it a
    convenient notifier and a simple way to mark a composite action as changed.
    """

    resource_type: ClassVar[str] = "log"
    default_action: ClassVar[str] = "write"
    allowed_actions: ClassVar[tuple[str, ...]] = ("write",)

    message: str | None = Field(None, description="Text to log, defaults to the name")
    level: Literal["debug", "info", "warning", "error"] = "info"
