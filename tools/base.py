"""
Tool base class and common types.

All drill tools inherit from DrillTool and implement execute().
This ensures a consistent interface for the tool registry and for hosts
that expose the tools over their own transport.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolParameter:
    """
    Tool parameter specification.

    Attributes:
        name: Parameter name
        type: Python type, or tuple of accepted types (e.g. (list, tuple))
        description: Human-readable description for the host
        required: Whether parameter is required
        default: Default value if not required
        choices: Allowed values, or None for any value of the right type
    """

    name: str
    type: type | tuple[type, ...]
    description: str
    required: bool = True
    default: Any = None
    choices: tuple[Any, ...] | None = None

    @property
    def type_name(self) -> str:
        if isinstance(self.type, tuple):
            return " | ".join(t.__name__ for t in self.type)
        return self.type.__name__

    def validate(self, value: Any) -> tuple[bool, str | None]:
        """
        Validate parameter value.

        Args:
            value: Value to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if value is None:
            if self.required:
                return False, f"Required parameter '{self.name}' is missing"
            return True, None

        # Type check (bool is an int subclass but never a valid number here)
        if not isinstance(value, self.type) or (
            isinstance(value, bool) and self.type in (int, float)
        ):
            return (
                False,
                f"Parameter '{self.name}' must be {self.type_name}, got {type(value).__name__}",
            )

        if self.choices is not None and value not in self.choices:
            return (
                False,
                f"Parameter '{self.name}' must be one of {list(self.choices)}, got {value!r}",
            )

        return True, None


@dataclass(frozen=True)
class ToolResult:
    """
    Result from tool execution.

    Attributes:
        success: Whether execution succeeded
        data: Result data (dict, list, str, etc.)
        error: Error message if success=False
        metadata: Optional metadata (seed, level id, etc.)
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] | None = None


class DrillTool(ABC):
    """
    Abstract base class for all chord drill tools.

    Drill tools are deterministic functions over core/chord_theory:
    generate an exercise, check an answer, describe a chord.

    Subclasses must implement:
        - name: Unique tool identifier
        - description: Clear description of what the tool does
        - parameters: List of ToolParameter specs
        - execute(): Core tool logic

    Example:
        class DescribeChord(DrillTool):
            @property
            def name(self) -> str:
                return "describe_chord"

            def execute(self, **kwargs) -> ToolResult:
                instance = build_instance(kwargs["root"], kwargs["quality"])
                return ToolResult(success=True, data=instance.to_dict())
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool identifier (lowercase, underscores)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """
        Human-readable description of the tool.

        Be specific about inputs and what comes back.

        Good: "Check a student's notes or chord name against a generated exercise"
        Bad: "Check answer"
        """

    @property
    @abstractmethod
    def parameters(self) -> list[ToolParameter]:
        """
        List of parameters this tool accepts.

        Order matters — positional parameters come first.
        """

    def validate_inputs(self, **kwargs) -> tuple[bool, str | None]:
        """
        Validate all input parameters.

        Args:
            **kwargs: Parameter values to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        for param in self.parameters:
            value = kwargs.get(param.name)
            is_valid, error = param.validate(value)
            if not is_valid:
                return False, error

        return True, None

    @abstractmethod
    def execute(self, **kwargs) -> ToolResult:
        """
        Execute tool with validated parameters.

        Args:
            **kwargs: Tool parameters (already validated)

        Returns:
            ToolResult with success status and data
        """

    def __call__(self, **kwargs) -> ToolResult:
        """
        Execute tool with automatic validation.

        This is the main entry point — validates inputs then calls execute().
        Engine errors (bad note names, unknown qualities, unknown levels)
        come back as ToolResult(success=False).

        Args:
            **kwargs: Tool parameters

        Returns:
            ToolResult (error if validation fails)
        """
        is_valid, error = self.validate_inputs(**kwargs)
        if not is_valid:
            return ToolResult(success=False, error=error)

        try:
            return self.execute(**kwargs)
        except Exception as e:
            return ToolResult(success=False, error=f"Tool execution failed: {str(e)}")

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize tool for host consumption.

        Returns dict with name, description and parameters.
        """
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type_name,
                    "description": p.description,
                    "required": p.required,
                    "default": p.default,
                    "choices": list(p.choices) if p.choices is not None else None,
                }
                for p in self.parameters
            ],
        }
