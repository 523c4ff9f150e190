"""Service layer for the playground code generator."""

from codegen.services.code_generator import CodeGeneratorService
from codegen.services.workspace_manager import WorkspaceManager, WorkspaceSandbox

__all__ = [
    "CodeGeneratorService",
    "WorkspaceManager",
    "WorkspaceSandbox",
]
