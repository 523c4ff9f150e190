"""Workspace manager for playground sandboxes.

Each editor session gets its own workspace directory seeded with the playground
bootstrap file. A WorkspaceSandbox exposes the file operations the code
generator needs (read the entry file, write generated files back).
"""

import shutil
from pathlib import Path
from typing import Iterable, Protocol

from codegen.config import get_settings
from codegen.models import GeneratedFile
from codegen.utils.logging import get_logger
from codegen.utils.security import is_safe_relative_path, is_valid_workspace_id

logger = get_logger(__name__)


ENTRY_TEMPLATE = """/**
 * Use this template to create generated components using the
 * AI panel in the editor
 */
import {Component} from '@angular/core';
import {bootstrapApplication} from '@angular/platform-browser';

@Component({
  selector: 'app-root',
  standalone: true,
  template: ``,
})
export class PlaygroundComponent {}

bootstrapApplication(PlaygroundComponent);
"""


class Sandbox(Protocol):
    """File access the code generator expects from a sandbox."""

    async def read_file(self, path: str) -> str: ...


class WorkspaceSandbox:
    """Directory-backed sandbox rooted at a single workspace."""

    def __init__(self, workspace_id: str, root: Path):
        self.workspace_id = workspace_id
        self.root = root

    def _resolve(self, path: str) -> Path:
        """Resolve a relative path inside the workspace.

        Raises:
            ValueError: If the path could escape the workspace
        """
        if not is_safe_relative_path(path):
            raise ValueError(f"Invalid workspace path: {path!r}")
        return self.root / path

    async def read_file(self, path: str) -> str:
        """Read a text file from the workspace.

        Raises:
            ValueError: If the path is unsafe
            FileNotFoundError: If the file does not exist
        """
        return self._resolve(path).read_text(encoding="utf-8")

    async def write_file(self, path: str, content: str) -> None:
        """Write a text file, creating parent directories as needed."""
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    async def write_files(self, files: Iterable[GeneratedFile]) -> int:
        """Write every generated file into the workspace.

        All names are checked before anything is written, so an unsafe name
        leaves the workspace untouched.

        Returns:
            Number of files written

        Raises:
            ValueError: If any file name could escape the workspace
        """
        log = get_logger(__name__, workspace_id=self.workspace_id)
        files = list(files)

        unsafe = [f.name for f in files if not is_safe_relative_path(f.name)]
        if unsafe:
            raise ValueError(f"Invalid workspace paths: {unsafe!r}")

        count = 0
        for generated_file in files:
            await self.write_file(generated_file.name, generated_file.code)
            count += 1
        log.info(f"Wrote {count} files to workspace")
        return count


class WorkspaceManager:
    """Creates, looks up and removes playground workspaces."""

    def __init__(self):
        self._settings = get_settings()
        self._base_dir = Path(self._settings.workspace_base_dir)

    @property
    def entry_file_path(self) -> str:
        return self._settings.entry_file_path

    def ensure_base_dir(self) -> Path:
        """Create the base directory that holds every workspace."""
        self._base_dir.mkdir(parents=True, exist_ok=True)
        return self._base_dir

    def _get_workspace_path(self, workspace_id: str) -> Path:
        # Validate workspace_id to prevent path traversal
        if not is_valid_workspace_id(workspace_id):
            raise ValueError(f"Invalid workspace ID: {workspace_id}")

        return self._base_dir / workspace_id

    async def create_workspace(self, workspace_id: str) -> WorkspaceSandbox:
        """Create a workspace seeded with the playground entry template.

        Args:
            workspace_id: Workspace identifier

        Returns:
            Sandbox for the new workspace

        Raises:
            ValueError: If workspace_id is invalid
            FileExistsError: If the workspace already exists
        """
        workspace_path = self._get_workspace_path(workspace_id)

        self.ensure_base_dir()
        workspace_path.mkdir(mode=0o700, exist_ok=False)

        sandbox = WorkspaceSandbox(workspace_id, workspace_path)
        await sandbox.write_file(self.entry_file_path, ENTRY_TEMPLATE)

        logger.info(
            "Created workspace",
            extra={"workspace_id": workspace_id},
        )
        return sandbox

    async def get_sandbox(self, workspace_id: str) -> WorkspaceSandbox | None:
        """Return the sandbox for an existing workspace, or None."""
        workspace_path = self._get_workspace_path(workspace_id)

        if not workspace_path.is_dir():
            return None

        return WorkspaceSandbox(workspace_id, workspace_path)

    async def cleanup_workspace(self, workspace_id: str) -> bool:
        """Remove a workspace directory and all contents.

        Returns:
            True if cleanup successful, False if workspace didn't exist
        """
        workspace_path = self._get_workspace_path(workspace_id)

        if not workspace_path.exists():
            return False

        shutil.rmtree(workspace_path)
        logger.info(
            "Cleaned up workspace",
            extra={"workspace_id": workspace_id},
        )
        return True

    async def cleanup_all_workspaces(self) -> int:
        """Clean up all workspaces (used during shutdown).

        Returns:
            Number of workspaces cleaned up
        """
        if not self._base_dir.exists():
            return 0

        count = 0
        for item in self._base_dir.iterdir():
            if item.is_dir():
                try:
                    shutil.rmtree(item)
                    count += 1
                except OSError as e:
                    logger.error(f"Failed to cleanup workspace {item}: {e}")

        logger.info(f"Cleaned up {count} workspaces")
        return count


def get_workspace_manager() -> WorkspaceManager:
    """Get workspace manager instance."""
    return WorkspaceManager()
