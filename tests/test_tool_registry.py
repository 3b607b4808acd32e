"""
Tests for tool registry and auto-discovery.
"""

import pytest

from tools.base import DrillTool, ToolParameter, ToolResult
from tools.registry import ToolRegistry, get_registry


class SimpleTool(DrillTool):
    """Simple tool for testing registry."""

    @property
    def name(self) -> str:
        return "simple_tool"

    @property
    def description(self) -> str:
        return "A simple test tool"

    @property
    def parameters(self) -> list[ToolParameter]:
        return []

    def execute(self, **kwargs) -> ToolResult:
        return ToolResult(success=True, data={"result": "simple"})


class AnotherTool(DrillTool):
    """Another tool for testing registry."""

    @property
    def name(self) -> str:
        return "another_tool"

    @property
    def description(self) -> str:
        return "Another test tool"

    @property
    def parameters(self) -> list[ToolParameter]:
        return []

    def execute(self, **kwargs) -> ToolResult:
        return ToolResult(success=True, data={"result": "another"})


class TestToolRegistry:
    """Test ToolRegistry registration and lookup."""

    def test_register_tool(self):
        """Should register a tool instance."""
        registry = ToolRegistry()

        registry.register(SimpleTool())

        assert len(registry) == 1
        assert "simple_tool" in registry

    def test_register_duplicate_raises(self):
        """Registering duplicate tool name should raise ValueError."""
        registry = ToolRegistry()
        registry.register(SimpleTool())

        with pytest.raises(ValueError, match="already registered"):
            registry.register(SimpleTool())

    def test_get_tool(self):
        """Should retrieve registered tool by name."""
        registry = ToolRegistry()
        registry.register(SimpleTool())

        retrieved = registry.get("simple_tool")

        assert retrieved is not None
        assert retrieved.name == "simple_tool"

    def test_get_nonexistent_tool(self):
        """Getting non-existent tool should return None."""
        assert ToolRegistry().get("nonexistent") is None

    def test_list_tools(self):
        """Should list all registered tools."""
        registry = ToolRegistry()
        registry.register(SimpleTool())
        registry.register(AnotherTool())

        names = [t["name"] for t in registry.list_tools()]

        assert names == ["simple_tool", "another_tool"]

    def test_contains(self):
        """Should check if tool is registered."""
        registry = ToolRegistry()
        registry.register(SimpleTool())

        assert "simple_tool" in registry
        assert "nonexistent" not in registry


class TestToolRegistryDiscovery:
    """Test auto-discovery of tools."""

    def test_discover_drill_tools(self):
        """Should discover the three chord drill tools."""
        registry = ToolRegistry()

        count = registry.discover("tools.drills")

        assert count == 3
        assert "generate_chord_exercise" in registry
        assert "check_chord_answer" in registry
        assert "describe_chord" in registry

    def test_discover_from_tools_root(self):
        """Scanning the parent package finds the same tools once each."""
        registry = ToolRegistry()

        registry.discover("tools")

        assert "describe_chord" in registry
        assert len(registry) == 3

    def test_discover_twice_does_not_duplicate(self):
        registry = ToolRegistry()
        registry.discover("tools.drills")

        assert registry.discover("tools.drills") == 0
        assert len(registry) == 3

    def test_discover_nonexistent_package(self):
        """Discovery on non-existent package should return 0."""
        registry = ToolRegistry()

        count = registry.discover("nonexistent_package")

        assert count == 0
        assert len(registry) == 0

    def test_global_registry_is_singleton(self):
        assert get_registry() is get_registry()
        assert "check_chord_answer" in get_registry()
