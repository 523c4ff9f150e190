"""Workspace and generation API endpoints.

Provides endpoints to:
- Create a playground workspace seeded with the entry template
- Generate a component into a workspace
- Read a workspace file
- Delete a workspace
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from pydantic import ValidationError

from codegen.config import get_settings
from codegen.models import (
    ErrorResponse,
    FileResponse,
    GenerateRequest,
    GenerateResponse,
    WorkspaceCreate,
    WorkspaceResponse,
)
from codegen.services.code_generator import CodeGeneratorService
from codegen.services.workspace_manager import WorkspaceSandbox, get_workspace_manager
from codegen.utils.logging import get_logger
from codegen.utils.security import generate_workspace_id, validate_api_key

logger = get_logger(__name__)


async def verify_api_key(x_api_key: str | None = Header(None)) -> None:
    """Dependency to verify X-API-Key when a service secret is configured."""
    settings = get_settings()

    if not validate_api_key(x_api_key, settings.service_secret):
        logger.warning("Invalid or missing API key in request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "unauthorized",
                "message": "Invalid or missing API key",
            },
        )


router = APIRouter(
    prefix="/api/workspaces",
    tags=["workspaces"],
    dependencies=[Depends(verify_api_key)],
)


def _error(status_code: int, error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"error": error, "message": message},
    )


async def _get_sandbox_or_404(workspace_id: str) -> WorkspaceSandbox:
    manager = get_workspace_manager()

    try:
        sandbox = await manager.get_sandbox(workspace_id)
    except ValueError:
        raise _error(
            status.HTTP_400_BAD_REQUEST, "invalid_workspace", "Invalid workspace ID"
        )

    if sandbox is None:
        raise _error(
            status.HTTP_404_NOT_FOUND,
            "not_found",
            f"Workspace {workspace_id} not found",
        )
    return sandbox


@router.post(
    "",
    response_model=WorkspaceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a playground workspace",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid workspace ID"},
        409: {"model": ErrorResponse, "description": "Workspace already exists"},
    },
)
async def create_workspace(request: WorkspaceCreate) -> WorkspaceResponse:
    """Create a workspace seeded with the playground entry file."""
    workspace_id = request.workspace_id or generate_workspace_id()
    manager = get_workspace_manager()

    try:
        await manager.create_workspace(workspace_id)
    except ValueError:
        raise _error(
            status.HTTP_400_BAD_REQUEST, "invalid_workspace", "Invalid workspace ID"
        )
    except FileExistsError:
        raise _error(
            status.HTTP_409_CONFLICT,
            "workspace_exists",
            f"Workspace {workspace_id} already exists",
        )

    return WorkspaceResponse(
        workspace_id=workspace_id,
        entry_file=manager.entry_file_path,
    )


@router.post(
    "/{workspace_id}/generate",
    response_model=GenerateResponse,
    summary="Generate a component into a workspace",
    responses={
        400: {"model": ErrorResponse, "description": "Missing API key"},
        404: {"model": ErrorResponse, "description": "Workspace or entry file not found"},
        502: {"model": ErrorResponse, "description": "Model returned unusable output"},
    },
)
async def generate(workspace_id: str, request: GenerateRequest) -> GenerateResponse:
    """Generate component files and a patched entry file.

    The entry file is always the last element. With ``use_local_model`` the
    in-browser model is expected to do the work and no files are returned.
    """
    settings = get_settings()
    sandbox = await _get_sandbox_or_404(workspace_id)
    log = get_logger(__name__, workspace_id=workspace_id)

    api_key = request.api_key or settings.google_api_key
    if not api_key and not request.use_local_model:
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "missing_api_key",
            "No Gemini API key provided or configured",
        )

    model = request.model or settings.default_model
    service = CodeGeneratorService(sandbox, settings.entry_file_path)

    try:
        files = await service.generate_code(
            api_key or "",
            model,
            request.prompt,
            request.use_local_model,
        )
    except ValidationError as e:
        log.error(f"Model returned unusable output: {e}")
        raise _error(
            status.HTTP_502_BAD_GATEWAY,
            "invalid_generation_response",
            "The model did not return a valid file list",
        )
    except FileNotFoundError:
        raise _error(
            status.HTTP_404_NOT_FOUND,
            "entry_file_missing",
            f"{settings.entry_file_path} not found in workspace",
        )

    if request.apply and files:
        try:
            await sandbox.write_files(files)
        except ValueError as e:
            log.error(f"Model returned unsafe file names: {e}")
            raise _error(
                status.HTTP_502_BAD_GATEWAY,
                "invalid_generation_response",
                "The model returned file names outside the workspace",
            )

    return GenerateResponse(files=files)


@router.get(
    "/{workspace_id}/files",
    response_model=FileResponse,
    summary="Read a workspace file",
    responses={
        400: {"model": ErrorResponse, "description": "Unsafe path"},
        404: {"model": ErrorResponse, "description": "File not found"},
    },
)
async def read_file(
    workspace_id: str,
    path: str = Query(..., min_length=1, description="Path relative to the workspace"),
) -> FileResponse:
    sandbox = await _get_sandbox_or_404(workspace_id)

    try:
        code = await sandbox.read_file(path)
    except ValueError:
        raise _error(status.HTTP_400_BAD_REQUEST, "invalid_path", "Invalid file path")
    except (FileNotFoundError, IsADirectoryError):
        raise _error(status.HTTP_404_NOT_FOUND, "not_found", f"{path} not found")

    return FileResponse(name=path, code=code)


@router.delete(
    "/{workspace_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a workspace",
    responses={
        404: {"model": ErrorResponse, "description": "Workspace not found"},
    },
)
async def delete_workspace(workspace_id: str) -> None:
    manager = get_workspace_manager()

    try:
        removed = await manager.cleanup_workspace(workspace_id)
    except ValueError:
        raise _error(
            status.HTTP_400_BAD_REQUEST, "invalid_workspace", "Invalid workspace ID"
        )

    if not removed:
        raise _error(
            status.HTTP_404_NOT_FOUND,
            "not_found",
            f"Workspace {workspace_id} not found",
        )
