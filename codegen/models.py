"""Pydantic models for generated files and API schemas.

- GeneratedFile: one file returned by the model (or synthesized entry file)
- GenerateRequest / GenerateResponse: generation endpoint payloads
- WorkspaceCreate / WorkspaceResponse: workspace lifecycle payloads
- FileResponse / ErrorResponse: misc API responses
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class GeneratedFile(BaseModel):
    """A single generated source file.

    The model returns camelCase keys (``className``); attributes are snake_case
    and serialize back to the camelCase aliases.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        serialize_by_alias=True,
        extra="ignore",
    )

    name: str = Field(..., description="File path, e.g. 'card.component.ts'")
    code: str = Field(..., description="Full file contents")
    class_name: str | None = Field(
        default=None, alias="className", description="Exported class name"
    )
    type: str | None = Field(
        default=None, description="'Component' for the primary component file"
    )
    selector: str | None = Field(default=None, description="Component selector")


GeneratedFileList = TypeAdapter(list[GeneratedFile])


class GenerateRequest(BaseModel):
    """Schema for a generation request."""

    prompt: str = Field(..., min_length=1, description="Description of the component")
    api_key: str | None = Field(
        default=None, description="Gemini API key; falls back to GOOGLE_API_KEY"
    )
    model: str | None = Field(
        default=None, description="Gemini model name; falls back to the default model"
    )
    use_local_model: bool = Field(
        default=False, description="Use the in-browser model (returns no files)"
    )
    apply: bool = Field(
        default=False, description="Write the returned files into the workspace"
    )


class GenerateResponse(BaseModel):
    """Files produced by a generation, entry file last."""

    files: list[GeneratedFile]


class WorkspaceCreate(BaseModel):
    """Schema for creating a workspace."""

    workspace_id: str | None = Field(
        default=None,
        max_length=64,
        description="Optional identifier; generated when omitted",
    )


class WorkspaceResponse(BaseModel):
    """Workspace information safe to expose to clients."""

    workspace_id: str
    entry_file: str


class FileResponse(BaseModel):
    """Contents of a single workspace file."""

    name: str
    code: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
