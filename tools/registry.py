"""
Tool registry with automatic discovery.

The registry discovers all DrillTool subclasses and provides
lookup by name. No hardcoding — tools register themselves.
"""

import importlib
import inspect
import logging
import pkgutil

from tools.base import DrillTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Registry for all drill tools with automatic discovery.

    Tools are discovered by scanning a package for concrete DrillTool
    subclasses. No manual registration required.

    Usage:
        registry = ToolRegistry()
        registry.discover()  # Auto-discover all tools

        tool = registry.get("describe_chord")
        result = tool(root="D", quality="minor7", inversion="first")
    """

    def __init__(self):
        self._tools: dict[str, DrillTool] = {}

    def register(self, tool: DrillTool) -> None:
        """
        Register a tool instance.

        Args:
            tool: DrillTool instance to register

        Raises:
            ValueError: If tool with same name already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool

    def get(self, name: str) -> DrillTool | None:
        """
        Get tool by name.

        Args:
            name: Tool name

        Returns:
            DrillTool instance or None if not found
        """
        return self._tools.get(name)

    def list_tools(self) -> list[dict]:
        """
        List all registered tools.

        Returns:
            List of tool dicts (name, description, parameters)
        """
        return [tool.to_dict() for tool in self._tools.values()]

    def discover(self, package_name: str = "tools.drills") -> int:
        """
        Auto-discover all DrillTool subclasses in a package.

        Walks every module of the package and registers each concrete
        DrillTool subclass defined there (classes merely imported into a
        module are skipped so nothing registers twice).

        Args:
            package_name: Package to scan (default: "tools.drills")

        Returns:
            Number of tools discovered
        """
        count = 0

        try:
            package = importlib.import_module(package_name)
        except ImportError:
            logger.warning("Tool package %r could not be imported", package_name)
            return 0

        if not hasattr(package, "__path__"):
            return 0

        for _finder, module_name, _is_pkg in pkgutil.walk_packages(
            package.__path__, prefix=f"{package_name}."
        ):
            try:
                module = importlib.import_module(module_name)
            except ImportError as exc:
                logger.warning("Skipping tool module %s: %s", module_name, exc)
                continue

            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if obj is DrillTool or obj.__module__ != module_name:
                    continue
                if issubclass(obj, DrillTool) and not inspect.isabstract(obj):
                    tool_instance = obj()
                    if tool_instance.name in self._tools:
                        continue
                    self.register(tool_instance)
                    count += 1

        logger.debug("Discovered %d drill tools in %s", count, package_name)
        return count

    def __len__(self) -> int:
        """Return number of registered tools."""
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        """Check if tool is registered."""
        return name in self._tools


# Global registry instance
_registry: ToolRegistry | None = None


def get_registry() -> ToolRegistry:
    """
    Get global tool registry singleton.

    Auto-discovers tools on first call.

    Returns:
        Initialized ToolRegistry
    """
    global _registry
    if _registry is None:
        _registry = ToolRegistry()
        _registry.discover()
    return _registry
