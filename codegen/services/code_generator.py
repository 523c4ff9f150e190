"""Code generator service.

Sends a component description to Gemini, parses the JSON file list it returns
and appends a patched copy of the playground entry file so the new component
is rendered by the running application.
"""

from langchain_core.messages import HumanMessage, SystemMessage

from codegen.config import get_settings
from codegen.models import GeneratedFile, GeneratedFileList
from codegen.services.model import get_model
from codegen.services.template_patcher import patch_entry_file
from codegen.services.workspace_manager import Sandbox
from codegen.system_prompts.generator_prompt import GENERATOR_PROMPT
from codegen.utils.logging import get_logger

logger = get_logger(__name__)


def response_text(content) -> str:
    """Flatten chat model content (string or list of parts) to text."""
    if isinstance(content, str):
        return content

    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


def parse_generated_files(text: str) -> list[GeneratedFile]:
    """Parse the model's JSON array into generated files.

    Raises:
        pydantic.ValidationError: If the text is not JSON or not a file list
    """
    return GeneratedFileList.validate_json(text)


class CodeGeneratorService:
    """Generates Angular component files for a single sandbox."""

    system_instruction = GENERATOR_PROMPT

    def __init__(self, sandbox: Sandbox, entry_file_path: str | None = None):
        self.sandbox = sandbox
        self.entry_file_path = entry_file_path or get_settings().entry_file_path

    async def generate_code(
        self,
        api_key: str,
        model: str,
        prompt: str,
        use_local_model: bool,
    ) -> list[GeneratedFile]:
        """Generate component files and the patched entry file.

        Args:
            api_key: Gemini API key
            model: Gemini model name
            prompt: Description of the component to build
            use_local_model: The in-browser model handles generation itself

        Returns:
            Generated files followed by the patched entry file, or an empty
            list when use_local_model is set
        """
        if use_local_model:
            return []

        log = get_logger(__name__, model=model)

        chat_model = get_model(api_key, model)
        messages = [
            SystemMessage(content=self.system_instruction),
            HumanMessage(content=prompt),
        ]

        log.info("Requesting component generation")
        response = await chat_model.ainvoke(messages)
        files = parse_generated_files(response_text(response.content))
        log.info(f"Model returned {len(files)} files")

        code = await self.update_primary_component(files)
        main_file = GeneratedFile(name=self.entry_file_path, code=code)

        return [*files, main_file]

    async def update_primary_component(self, files: list[GeneratedFile]) -> str:
        """Read the entry file from the sandbox and wire in the generated component."""
        file_contents = await self.sandbox.read_file(self.entry_file_path)
        return patch_entry_file(files, file_contents)
