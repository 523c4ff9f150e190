"""Tests for the code generator service."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from pydantic import ValidationError

from codegen.services.code_generator import (
    CodeGeneratorService,
    parse_generated_files,
    response_text,
)
from codegen.system_prompts.generator_prompt import GENERATOR_PROMPT


class TestGenerateCode:
    """Tests for CodeGeneratorService.generate_code."""

    @pytest.mark.asyncio
    async def test_local_model_returns_nothing(self, mock_sandbox: AsyncMock):
        """The in-browser model path never calls Gemini or reads the sandbox."""
        service = CodeGeneratorService(mock_sandbox, "src/main.ts")

        with patch("codegen.services.code_generator.get_model") as get_model:
            result = await service.generate_code("key", "gemini-2.0-flash", "a card", True)

        assert result == []
        get_model.assert_not_called()
        mock_sandbox.read_file.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returns_generated_files_then_entry_file(
        self,
        mock_sandbox: AsyncMock,
        mock_chat_model: MagicMock,
        card_files: list[dict],
    ):
        service = CodeGeneratorService(mock_sandbox, "src/main.ts")

        with patch(
            "codegen.services.code_generator.get_model", return_value=mock_chat_model
        ) as get_model:
            result = await service.generate_code(
                "test-key", "gemini-2.0-flash", "a card", False
            )

        get_model.assert_called_once_with("test-key", "gemini-2.0-flash")
        mock_sandbox.read_file.assert_awaited_once_with("src/main.ts")

        assert len(result) == len(card_files) + 1
        assert [f.name for f in result[:-1]] == [f["name"] for f in card_files]
        assert result[0].class_name == "Card"
        assert result[0].type == "Component"

        main_file = result[-1]
        assert main_file.name == "src/main.ts"
        assert main_file.code.startswith("import { Card } from 'card.component';")
        assert "imports: [Card]," in main_file.code
        assert "template: `<app-card />`" in main_file.code

    @pytest.mark.asyncio
    async def test_sends_system_instruction_and_prompt(
        self,
        mock_sandbox: AsyncMock,
        mock_chat_model: MagicMock,
    ):
        service = CodeGeneratorService(mock_sandbox, "src/main.ts")

        with patch(
            "codegen.services.code_generator.get_model", return_value=mock_chat_model
        ):
            await service.generate_code("key", "gemini-2.0-flash", "a login form", False)

        messages = mock_chat_model.ainvoke.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == GENERATOR_PROMPT
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == "a login form"

    @pytest.mark.asyncio
    async def test_invalid_json_propagates(self, mock_sandbox: AsyncMock):
        model = MagicMock()
        model.ainvoke = AsyncMock(return_value=AIMessage(content="Sure! Here is your code"))
        service = CodeGeneratorService(mock_sandbox, "src/main.ts")

        with patch("codegen.services.code_generator.get_model", return_value=model):
            with pytest.raises(ValidationError):
                await service.generate_code("key", "gemini-2.0-flash", "a card", False)

        mock_sandbox.read_file.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_shape_propagates(self, mock_sandbox: AsyncMock):
        model = MagicMock()
        model.ainvoke = AsyncMock(
            return_value=AIMessage(content=json.dumps({"name": "a.ts", "code": ""}))
        )
        service = CodeGeneratorService(mock_sandbox, "src/main.ts")

        with patch("codegen.services.code_generator.get_model", return_value=model):
            with pytest.raises(ValidationError):
                await service.generate_code("key", "gemini-2.0-flash", "a card", False)

    @pytest.mark.asyncio
    async def test_missing_entry_file_propagates(self, mock_chat_model: MagicMock):
        sandbox = AsyncMock()
        sandbox.read_file.side_effect = FileNotFoundError("src/main.ts")
        service = CodeGeneratorService(sandbox, "src/main.ts")

        with patch(
            "codegen.services.code_generator.get_model", return_value=mock_chat_model
        ):
            with pytest.raises(FileNotFoundError):
                await service.generate_code("key", "gemini-2.0-flash", "a card", False)


class TestResponseParsing:
    """Tests for turning model output into generated files."""

    def test_list_content_is_joined(self):
        content = [
            {"type": "text", "text": '[{"name": "a.ts",'},
            {"type": "text", "text": ' "code": "x"}]'},
        ]

        assert response_text(content) == '[{"name": "a.ts", "code": "x"}]'

    def test_non_text_parts_are_skipped(self):
        content = ["[]", {"type": "thinking", "thinking": "hmm"}]

        assert response_text(content) == "[]"

    def test_extra_keys_are_ignored(self):
        files = parse_generated_files(
            '[{"name": "a.ts", "code": "x", "fileImports": ["CommonModule"]}]'
        )

        assert files[0].name == "a.ts"
        assert files[0].class_name is None

    def test_serializes_with_camel_case_keys(self):
        files = parse_generated_files(
            '[{"name": "a.ts", "code": "x", "className": "A", "type": "Component"}]'
        )

        dumped = files[0].model_dump()
        assert dumped["className"] == "A"
        assert "class_name" not in dumped

    def test_missing_code_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_generated_files('[{"name": "a.ts"}]')
