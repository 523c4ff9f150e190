"""API route modules."""

from codegen.api.routes.health import router as health_router
from codegen.api.routes.workspaces import router as workspaces_router

__all__ = ["health_router", "workspaces_router"]
