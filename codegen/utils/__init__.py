"""Utility modules for the playground code generator."""

from codegen.utils.logging import get_logger, setup_logging
from codegen.utils.security import generate_workspace_id, validate_api_key

__all__ = [
    "get_logger",
    "setup_logging",
    "generate_workspace_id",
    "validate_api_key",
]
