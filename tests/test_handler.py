"""Tests for the ToolHandler facade."""

import logging
import tempfile
from pathlib import Path

import pytest
import yaml

import sample_tools
from tooldeck import ToolExecutionError, ToolHandler, ToolValidationError
from tooldeck.config import ConfigManager
from tooldeck.errors import TOOL_EXECUTION_FAILED
from tooldeck.prompts import PromptCatalog
from tooldeck.tools import ToolRegistry


@pytest.fixture
def handler():
    prompts = PromptCatalog.from_dicts([
        {"id": "system", "title": "System", "content": "Be precise."},
        {"id": "developer", "content": "Help the developer.", "depends": ["system"], "tools": ["site"]},
    ])
    return ToolHandler.from_modules([sample_tools], prompts)


class TestToolHandler:
    """Tests for ToolHandler."""

    def test_tool_definitions(self, handler):
        assert len(handler.get_tool_definitions()) == 5

    def test_cli_commands(self, handler):
        assert len(handler.get_cli_commands()) == 6

    def test_prompts(self, handler):
        assert handler.get_available_prompts() == ["system", "developer"]
        built = handler.build_prompt("developer")
        assert built.system_prompt == "## System\n\nBe precise.\n\nHelp the developer."
        assert "getSiteConfig" in built.tool_names

    def test_has_tool(self, handler):
        assert handler.has_tool("addSite")
        assert not handler.has_tool("run")

    def test_empty_handler(self):
        handler = ToolHandler()
        assert handler.get_tool_definitions() == []
        assert handler.get_available_prompts() == []

    @pytest.mark.asyncio
    async def test_use_tool(self, handler):
        assert await handler.use_tool("addSite", {"name": "blog"}) == {
            "name": "blog", "module": "", "example": "local",
        }

    @pytest.mark.asyncio
    async def test_validation_errors_logged_and_raised(self, handler, caplog):
        with caplog.at_level(logging.INFO, logger="tooldeck"):
            with pytest.raises(ToolValidationError):
                await handler.use_tool("addSite", {})
        assert "ToolValidationError: Parameter validation failed" in caplog.text
        assert "Missing required parameter: name" in caplog.text

    @pytest.mark.asyncio
    async def test_execution_errors_pass_through(self, handler):
        with pytest.raises(ToolExecutionError) as exc_info:
            await handler.use_tool("getSiteConfig", {"site": "blog"})
        assert exc_info.value.message == "Unknown site 'blog'"

    @pytest.mark.asyncio
    async def test_unexpected_errors_wrapped(self):
        class BrokenRegistry(ToolRegistry):
            async def use_tool(self, name, parameters=None):
                raise RuntimeError("registry down")

        handler = ToolHandler(BrokenRegistry())
        with pytest.raises(ToolExecutionError) as exc_info:
            await handler.use_tool("anything", {})
        err = exc_info.value
        assert err.message == 'Error executing tool "anything": registry down'
        assert err.code == TOOL_EXECUTION_FAILED
        assert isinstance(err.cause, RuntimeError)


class TestFromConfig:
    """Tests for building a handler from configuration."""

    def test_modules_prompts_and_builtins(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "prompts").mkdir()
            (root / "prompts" / "base.md").write_text("---\ntools: [site]\n---\nBase.\n")
            config_path = root / "config.yaml"
            config_path.write_text(yaml.dump({
                "tools": {"modules": ["sample_tools"]},
                "prompts": {"directory": "prompts"},
            }))

            handler = ToolHandler.from_config(ConfigManager(str(config_path)))

        assert handler.has_tool("run")
        assert handler.has_tool("addSite")
        assert handler.get_available_prompts() == ["base"]
        assert "run" not in [d["name"] for d in handler.get_tool_definitions()]
        assert "run" in [c.name for c in handler.get_cli_commands()]

    def test_builtins_disabled(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.yaml"
            config_path.write_text(yaml.dump({"tools": {"modules": [], "builtins": False}}))
            handler = ToolHandler.from_config(ConfigManager(str(config_path)))

        assert not handler.has_tool("run")
        assert handler.get_available_prompts() == []
