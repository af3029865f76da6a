"""Provider for file resources using plain Python file I/O."""

import logging
import os
import stat
from pathlib import Path

from provisor.resources.file import FileResource

from .base import Provider

logger = logging.getLogger(__name__)


class FileProvider(Provider):
    """Creates, touches and deletes files."""

    new_resource: FileResource

    def load_current_resource(self) -> None:
        """Read the file's content and mode, if it exists."""
        path = self.new_resource.resolve_path()
        self.current_resource = FileResource(name=self.new_resource.name, path=str(path))

        if path.is_file():
            self.current_resource.content = path.read_text(encoding="utf-8")
            self.current_resource.mode = format(stat.S_IMODE(path.stat().st_mode), "o")

    def _exists(self) -> bool:
        return self.new_resource.resolve_path().is_file()

    def _write(self, path: Path, content: str) -> None:
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def _set_mode(self, path: Path) -> None:
        mode = self.new_resource.mode
        if mode is None:
            return
        if self.current_resource.mode is not None and int(self.current_resource.mode, 8) == int(mode, 8):
            return
        self.converge_by(f"change mode to {mode}", lambda: os.chmod(path, int(mode, 8)))

    def action_create(self) -> None:
        path = self.new_resource.resolve_path()
        content = self.new_resource.content

        if not self._exists():
            self.converge_by(f"create {path}", lambda: self._write(path, content or ""))
        elif content is not None and self.current_resource.content != content:
            self.converge_by(f"update content of {path}", lambda: self._write(path, content))
        else:
            logger.debug(f"{self.new_resource.identity} content is up to date")

        self._set_mode(path)

    def action_touch(self) -> None:
        path = self.new_resource.resolve_path()
        self.action_create()
        self.converge_by(f"touch {path}", lambda: os.utime(path, None))

    def action_delete(self) -> None:
        path = self.new_resource.resolve_path()
        if path.exists():
            self.converge_by(f"delete {path}", path.unlink)


FileProvider.provides("file")
