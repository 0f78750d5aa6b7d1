"""Configuration classes for markup composition.

This module provides the configuration objects that control how markup trees
are serialized: indentation, line breaks, the default minimization mode and
the encoding used when writing to byte sinks.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

_VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_VALID_VOID_CLOSURES = ["", " /", "/"]
_COMPONENT_FIELDS = ["render", "global_"]


@dataclass
class RenderConfig:
    """Configuration for the markup serializer."""

    indent_unit: str = "  "
    line_break: str = "\n"
    minimize_by_default: bool = True
    encoding: str = "utf-8"
    void_closure: str = ""  # Closure given to void elements built from descriptions

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if self.indent_unit.strip():
            raise ValueError("indent_unit must contain only whitespace")
        if self.line_break not in ("\n", "\r\n", "\r"):
            raise ValueError("line_break must be one of '\\n', '\\r\\n' or '\\r'")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")
        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding}") from e
        if self.void_closure not in _VALID_VOID_CLOSURES:
            raise ValueError(f"void_closure must be one of {_VALID_VOID_CLOSURES}")

    def indent(self, level: int) -> str:
        """Return the indent prefix for a nesting level."""
        return self.indent_unit * max(level, 0)

    @classmethod
    def html(cls) -> "RenderConfig":
        """Create configuration for compact HTML output."""
        return cls()

    @classmethod
    def xhtml(cls) -> "RenderConfig":
        """Create configuration for XML style output with self-closing void tags."""
        return cls(void_closure=" /")

    @classmethod
    def pretty(cls) -> "RenderConfig":
        """Create configuration that renders indented output unless told otherwise."""
        return cls(minimize_by_default=False)


@dataclass
class GlobalConfig:
    """Global settings that apply across all components."""

    logging_level: str = "WARNING"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in _VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {_VALID_LOGGING_LEVELS}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ComposerConfig:
    """Complete, immutable configuration for composing and serializing markup.

    Component configurations are validated when they are built; any
    ``ValueError`` they raise surfaces here as a `ConfigValidationError`.
    """

    render: RenderConfig = field(default_factory=RenderConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    # Metadata
    version: str = "1.0.0"
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete composer configuration."""
        try:
            self.render.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ComposerConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override, using ``component__field`` for
                component settings

        Returns:
            New ComposerConfig instance with overrides applied

        Example:
            >>> config = ComposerConfig().override(render__indent_unit="    ")
            >>> config.render.indent_unit
            '    '
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            for component in _COMPONENT_FIELDS:
                prefix = f"{component}__"
                if key.startswith(prefix):
                    nested_overrides.setdefault(component, {})[key[len(prefix):]] = value
                    break
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for component in _COMPONENT_FIELDS:
            current = getattr(self, component)
            overrides = nested_overrides.pop(component, None)
            if isinstance(overrides, dict):
                try:
                    new_fields[component] = replace(current, **overrides)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=component) from e
            elif overrides is not None:
                new_fields[component] = overrides

        new_fields.update(nested_overrides)
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComposerConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that misspelled settings do not pass
        silently.

        Args:
            data: Dictionary containing configuration data

        Returns:
            ComposerConfig instance created from dictionary
        """
        component_types = {"render": RenderConfig, "global_": GlobalConfig}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_types:
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"Section '{key}' must be an object", field_name=key
                    )
                try:
                    values[key] = component_types[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("version", "name", "description"):
                values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}",
                    field_name=key,
                    suggestions=sorted([*component_types, "version", "name", "description"]),
                )
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ComposerConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def html(cls) -> "ComposerConfig":
        """Create configuration preset for compact HTML output."""
        return cls(
            render=RenderConfig.html(),
            name="html",
            description="Minimized markup with HTML style void elements",
        )

    @classmethod
    def xhtml(cls) -> "ComposerConfig":
        """Create configuration preset for XHTML and XML output."""
        return cls(
            render=RenderConfig.xhtml(),
            name="xhtml",
            description="Minimized markup with self-closing void elements",
        )

    @classmethod
    def pretty(cls) -> "ComposerConfig":
        """Create configuration preset for human readable output."""
        return cls(
            render=RenderConfig.pretty(),
            name="pretty",
            description="Indented markup with comments preserved",
        )

    @classmethod
    def preset(cls, name: str) -> "ComposerConfig":
        """Look up a preset by name."""
        presets = {"html": cls.html, "xhtml": cls.xhtml, "pretty": cls.pretty}
        if name not in presets:
            raise ConfigValidationError(
                f"Unknown preset: {name}", field_name="preset", suggestions=sorted(presets)
            )
        return presets[name]()
