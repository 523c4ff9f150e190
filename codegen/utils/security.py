"""Security helpers for request authentication and workspace paths."""

import hmac
import secrets


def constant_time_compare(a: str, b: str) -> bool:
    """Compare two strings in constant time to prevent timing attacks."""
    return hmac.compare_digest(a.encode(), b.encode())


def validate_api_key(provided_key: str | None, expected_key: str | None) -> bool:
    """Validate the X-API-Key header against the configured secret.

    Args:
        provided_key: Key sent by the client
        expected_key: Configured secret; None disables the check

    Returns:
        True if the request is allowed
    """
    if expected_key is None:
        return True
    if not provided_key:
        return False
    return constant_time_compare(provided_key, expected_key)


def is_safe_path_component(component: str) -> bool:
    """Check if a path component is safe (no path traversal)."""
    if not component:
        return False

    if component in (".", "..", "~"):
        return False

    if component.startswith("/") or component.startswith("\\"):
        return False

    if "\x00" in component:
        return False

    return True


def is_safe_relative_path(path: str) -> bool:
    """Check that a slash-separated path stays inside its root.

    Args:
        path: Relative path such as 'src/main.ts'

    Returns:
        True if every component is safe and the path is relative
    """
    if not path or path.startswith("/") or "\\" in path:
        return False
    return all(is_safe_path_component(part) for part in path.split("/"))


def is_valid_workspace_id(workspace_id: str) -> bool:
    """Workspace IDs are restricted to alphanumerics, hyphens and underscores."""
    if not workspace_id or len(workspace_id) > 64:
        return False
    return all(c.isalnum() or c in "-_" for c in workspace_id)


def generate_workspace_id() -> str:
    """Generate a unique workspace identifier."""
    return secrets.token_hex(16)
