"""Pytest configuration and fixtures."""

import json
import os
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["WORKSPACE_BASE_DIR"] = tempfile.mkdtemp()
os.environ["GOOGLE_API_KEY"] = ""
os.environ.pop("SERVICE_SECRET", None)

from langchain_core.messages import AIMessage  # noqa: E402


ENTRY_FILE = """@Component({
  selector: 'app-root',
  template: ``,
})
export class Root {}"""


@pytest.fixture
def temp_workspace() -> Generator[Path, None, None]:
    """Create a temporary workspace directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def entry_file() -> str:
    """Minimal bootstrap file with a decorator and an empty template."""
    return ENTRY_FILE


@pytest.fixture
def card_files() -> list[dict]:
    """Files as the model returns them for a card component."""
    return [
        {
            "name": "card.component.ts",
            "className": "Card",
            "selector": "app-card",
            "type": "Component",
            "code": (
                "import { Component } from '@angular/core';\n\n"
                "@Component({\n"
                "  selector: 'app-card',\n"
                "  standalone: true,\n"
                "  templateUrl: './card.component.html',\n"
                "})\n"
                "export class Card {}"
            ),
        },
        {
            "name": "card.component.html",
            "code": "<div class=\"card\"><ng-content /></div>",
        },
        {
            "name": "card.component.css",
            "code": ".card { padding: 1rem; }",
        },
    ]


@pytest.fixture
def mock_sandbox(entry_file: str) -> AsyncMock:
    """Sandbox whose entry file is the minimal bootstrap file."""
    sandbox = AsyncMock()
    sandbox.read_file.return_value = entry_file
    return sandbox


@pytest.fixture
def mock_chat_model(card_files: list[dict]) -> MagicMock:
    """Chat model that answers with the card component file list."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content=json.dumps(card_files)))
    return model
