"""API routes for the playground code generator."""

from codegen.api.routes import health, workspaces

__all__ = ["health", "workspaces"]
