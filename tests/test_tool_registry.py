"""Tests for the tool catalog and registry."""

import pytest

import sample_tools
from tooldeck.errors import (
    PARAMETER_VALIDATION_FAILED,
    TOOL_EXECUTION_FAILED,
    UNKNOWN_TOOL,
    ToolExecutionError,
    ToolValidationError,
)
from tooldeck.tools import ToolCatalog, ToolDescriptor, ToolRegistry

PUBLIC = ["addSite", "getSiteConfig", "listSites", "setSiteTheme", "setSitePanels"]


@pytest.fixture
def registry():
    return ToolRegistry(ToolCatalog.from_modules([sample_tools]))


class TestToolCatalog:
    """Tests for building the catalog."""

    def test_from_modules_accepts_import_paths(self):
        catalog = ToolCatalog.from_modules(["sample_tools"])
        assert "addSite" in catalog
        assert len(catalog) == 7

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="conflicts with module"):
            ToolCatalog.from_modules([sample_tools, sample_tools])

    def test_load_pairs_by_name(self):
        def greet(name):
            return f"hi {name}"

        def orphan():
            pass

        catalog = ToolCatalog.load(
            [("greet", greet), ("orphan", orphan)],
            [
                {"name": "greet", "module": "misc", "params": [{"name": "name", "type": "string"}]},
                ToolDescriptor(name="ghost"),
            ],
        )
        assert catalog.names() == ["greet"]
        assert catalog.get("greet").handler is greet
        assert catalog.descriptor("ghost") is None

    def test_to_metadata(self):
        metadata = ToolCatalog.from_modules([sample_tools]).to_metadata()
        first = metadata[0]
        assert first["name"] == "addSite"
        assert first["module"] == "site"
        assert first["params"][2] == {
            "name": "example",
            "type": "string",
            "description": "Name of an example with initial content to copy.",
            "optional": True,
            "defaultValue": "local",
        }


class TestToolDefinitions:
    """Tests for the AI function-calling view."""

    def test_only_public_tools(self, registry):
        names = [d["name"] for d in registry.get_tool_definitions()]
        assert names == PUBLIC

    def test_schema_shape(self, registry):
        by_name = {d["name"]: d for d in registry.get_tool_definitions()}
        theme = by_name["setSiteTheme"]
        assert theme["description"] == "Sets the site theme."
        assert theme["parameters"]["type"] == "object"
        assert theme["parameters"]["required"] == ["site", "theme"]
        assert theme["parameters"]["properties"]["theme"] == {
            "type": "string",
            "description": "Color theme.",
            "enum": ["light", "dark"],
        }

    def test_defaults_and_fallback_descriptions(self, registry):
        by_name = {d["name"]: d for d in registry.get_tool_definitions()}
        props = by_name["setSitePanels"]["parameters"]["properties"]
        assert props["enabled"] == {
            "type": "boolean",
            "description": "Parameter enabled",
            "default": True,
        }
        assert props["order"]["default"] == 0

    def test_missing_description_fallback(self):
        catalog = ToolCatalog.load([("ping", lambda: "pong")], [{"name": "ping"}])
        definition = ToolRegistry(catalog).get_tool_definitions()[0]
        assert definition["description"] == "Execute the ping function"

    def test_required_params_exist_in_properties(self, registry):
        for definition in registry.get_tool_definitions():
            props = definition["parameters"]["properties"]
            for name in definition["parameters"]["required"]:
                assert name in props
            for prop in props.values():
                if "enum" in prop:
                    assert prop["enum"]


class TestCliCommands:
    """Tests for the CLI command view."""

    def test_private_tools_excluded(self, registry):
        names = [c.name for c in registry.get_cli_commands()]
        assert "removeSite" not in names
        assert "clearSiteCache" in names
        assert len(names) == 6

    def test_command_paths(self, registry):
        paths = {c.name: c.command for c in registry.get_cli_commands()}
        assert paths["addSite"] == ("site", "add")
        assert paths["getSiteConfig"] == ("site", "config", "get")
        assert paths["clearSiteCache"] == ("site", "cache", "clear")


class TestLookup:
    """Tests for the read-only lookups."""

    def test_has_tool(self, registry):
        assert registry.has_tool("removeSite")
        assert not registry.has_tool("nope")

    def test_get_tool_names(self, registry):
        assert registry.get_tool_names()[:2] == ["addSite", "getSiteConfig"]

    def test_get_tool_metadata(self, registry):
        assert registry.get_tool_metadata("listSites").module == "site"
        assert registry.get_tool_metadata("nope") is None

    def test_get_module_tools_public_only(self, registry):
        assert registry.get_module_tools("site") == PUBLIC
        assert registry.get_module_tools("page") == []


class TestUseTool:
    """Tests for validated dispatch."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry):
        with pytest.raises(ToolValidationError) as exc_info:
            await registry.use_tool("nope", {})
        assert exc_info.value.code == UNKNOWN_TOOL
        assert exc_info.value.message == 'Unknown tool: "nope"'

    @pytest.mark.asyncio
    async def test_missing_required(self, registry):
        with pytest.raises(ToolValidationError) as exc_info:
            await registry.use_tool("getSiteConfig", {})
        err = exc_info.value
        assert err.code == PARAMETER_VALIDATION_FAILED
        assert err.validation_errors == ["Missing required parameter: site"]
        assert err.tool_name == "getSiteConfig"

    @pytest.mark.asyncio
    async def test_all_errors_reported(self, registry):
        with pytest.raises(ToolValidationError) as exc_info:
            await registry.use_tool("setSiteTheme", {"theme": "blue", "colour": 1})
        assert exc_info.value.validation_errors == [
            "Missing required parameter: site",
            "Invalid value for parameter theme: must be one of [light, dark]",
            "Unknown parameter: colour",
        ]

    @pytest.mark.asyncio
    async def test_async_tool(self, registry):
        result = await registry.use_tool("getSiteConfig", {"site": "docs"})
        assert result == {"title": "Docs", "theme": "light"}

    @pytest.mark.asyncio
    async def test_sync_tool(self, registry):
        result = await registry.use_tool("listSites")
        assert result == [{"name": "docs", "title": "Docs"}]

    @pytest.mark.asyncio
    async def test_execution_error_keeps_cause(self, registry):
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.use_tool("getSiteConfig", {"site": "blog"})
        err = exc_info.value
        assert err.code == TOOL_EXECUTION_FAILED
        assert isinstance(err.cause, LookupError)
        assert err.__cause__ is err.cause
        assert "Unknown site 'blog'" in err.message

    @pytest.mark.asyncio
    async def test_boolean_coercion(self, registry):
        result = await registry.use_tool(
            "setSitePanels", {"site": "docs", "panel": "nav", "enabled": "no"},
        )
        assert result == {"site": "docs", "panel": "nav", "enabled": False, "order": 0}

    @pytest.mark.asyncio
    async def test_absent_optionals_use_python_defaults(self, registry):
        result = await registry.use_tool("addSite", {"name": "blog", "example": "basic"})
        assert result == {"name": "blog", "module": "", "example": "basic"}

    @pytest.mark.asyncio
    async def test_absent_optional_none_default(self, registry):
        result = await registry.use_tool("setSiteTheme", {"site": "docs", "theme": "dark"})
        assert result == "docs:dark:None"

    @pytest.mark.asyncio
    async def test_private_tools_still_callable(self, registry):
        assert await registry.use_tool("removeSite", {"site": "docs"}) is None


class TestPositionalDispatch:
    """Tests for calling tools loaded from metadata records."""

    @pytest.mark.asyncio
    async def test_absent_optional_without_python_default(self):
        async def remove(site, force):
            return site, force

        catalog = ToolCatalog.load(
            [("removeSite", remove)],
            [{
                "name": "removeSite",
                "params": [
                    {"name": "site", "type": "string"},
                    {"name": "force", "type": "boolean", "optional": True},
                ],
            }],
        )
        result = await ToolRegistry(catalog).use_tool("removeSite", {"site": "docs"})
        assert result == ("docs", None)

    @pytest.mark.asyncio
    async def test_var_args_callable(self):
        catalog = ToolCatalog.load(
            [("addPage", lambda *a: a)],
            [{
                "name": "addPage",
                "params": [
                    {"name": "name", "type": "string"},
                    {"name": "title", "type": "string", "optional": True},
                    {"name": "after", "type": "string", "optional": True},
                ],
            }],
        )
        result = await ToolRegistry(catalog).use_tool("addPage", {"name": "p", "after": "q"})
        assert result == ("p", None, "q")

    @pytest.mark.asyncio
    async def test_parameter_names_need_not_match(self):
        def rename(a, b="same"):
            return a, b

        catalog = ToolCatalog.load(
            [("renamePage", rename)],
            [{
                "name": "renamePage",
                "params": [
                    {"name": "page", "type": "string"},
                    {"name": "title", "type": "string", "optional": True},
                ],
            }],
        )
        registry = ToolRegistry(catalog)
        assert await registry.use_tool("renamePage", {"page": "p"}) == ("p", "same")
        assert await registry.use_tool("renamePage", {"page": "p", "title": "t"}) == ("p", "t")

    @pytest.mark.asyncio
    async def test_declared_default_when_callable_has_none(self):
        catalog = ToolCatalog.load(
            [("listPages", lambda limit: limit)],
            [{
                "name": "listPages",
                "params": [{"name": "limit", "type": "number", "optional": True, "defaultValue": 10}],
            }],
        )
        assert await ToolRegistry(catalog).use_tool("listPages") == 10
