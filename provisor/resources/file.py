"""File resource for managing file content and permissions."""

from pathlib import Path
from typing import ClassVar

from pydantic import Field, field_validator

from .base import Resource


class FileResource(Resource):
    """File resource - keeps a file at a path with the declared content.

    The resource name is the target path unless ``path`` is given.

    Usage:
        FileResource(name="/etc/motd", content="Welcome!\\n", mode="644")

        FileResource(name="motd", path="scratch/motd.txt", content="hi")
    """

    resource_type: ClassVar[str] = "file"
    default_action: ClassVar[str] = "create"
    allowed_actions: ClassVar[tuple[str, ...]] = ("create", "delete", "touch")

    path: str | None = Field(
        None,
        description="Full file path - overrides the name if provided",
    )
    content: str | None = Field(
        None,
        description="File content; None leaves existing content untouched",
    )
    mode: str | None = Field(
        None,
        description="Unix file permissions in octal",
        examples=["644", "755", "600"],
    )

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, value: str | None) -> str | None:
        """Mode must be an octal permission string."""
        if value is None:
            return value
        try:
            int(value, 8)
        except ValueError:
            raise ValueError(f"mode must be octal, got {value!r}") from None
        return value

    def resolve_path(self) -> Path:
        """Resolve the target path, relative paths against the current directory.

        Returns:
            Absolute Path of the managed file
        """
        file_path = Path(self.path or self.name)
        if not file_path.is_absolute():
            file_path = Path.cwd() / file_path
        return file_path
