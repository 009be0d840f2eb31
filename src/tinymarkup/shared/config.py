"""Configuration classes for tinymarkup.

This module provides immutable configuration objects for the tokenizer, the
tree builder and the ambient concerns shared by every layer. The default
configuration reproduces the historical parsing behaviour exactly; every
option that changes which inputs are accepted is opt-in.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
COMPONENT_FIELDS = ["tokenization", "tree", "global_"]


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
class TokenizationConfig:
    """Configuration for the tokenizer."""

    # End tags carry no name unless asked for
    record_end_tag_names: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.record_end_tag_names, bool):
            raise ValueError("record_end_tag_names must be a bool")


@dataclass(frozen=True)
class TreeConfig:
    """Configuration for tree building."""

    validate_end_tags: bool = False
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if not isinstance(self.validate_end_tags, bool):
            raise ValueError("validate_end_tags must be a bool")
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ValueError("max_depth must be an int or None")
            if self.max_depth <= 0:
                raise ValueError("max_depth must be > 0 or None")


@dataclass(frozen=True)
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "WARNING"
    enable_metrics: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")
        if not isinstance(self.enable_metrics, bool):
            raise ValueError("enable_metrics must be a bool")


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for all parser components.

    Frozen, so a single instance can be shared between parsers and threads.
    """

    tokenization: TokenizationConfig = field(default_factory=TokenizationConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    # Metadata
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.tokenization.__post_init__()
            self.tree.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        self._validate_cross_component_dependencies()

    def _validate_cross_component_dependencies(self) -> None:
        # The builder can only compare names the tokenizer kept
        if (
            self.tree.validate_end_tags
            and not self.tokenization.record_end_tag_names
        ):
            raise ConfigValidationError(
                "tree.validate_end_tags requires tokenization.record_end_tag_names",
                field_name="tree.validate_end_tags",
                suggestions=[
                    "Set tokenization__record_end_tag_names=True",
                    "Use ParserConfig.strict()",
                ],
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``component__field``

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig()
            >>> config.override(tree__max_depth=32).tree.max_depth
            32
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.rsplit("__", 1)
                if component not in COMPONENT_FIELDS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=COMPONENT_FIELDS,
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for component in COMPONENT_FIELDS:
                if component in nested_overrides:
                    new_fields[component] = replace(
                        getattr(self, component), **nested_overrides.pop(component)
                    )
            new_fields.update(nested_overrides)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, (list, tuple, set)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do not
        silently fall back to defaults.
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            if not isinstance(data_dict, dict):
                raise ConfigValidationError(
                    f"Expected a mapping for {target_class.__name__}"
                )
            known = target_class.__dataclass_fields__
            unknown = sorted(set(data_dict) - set(known))
            if unknown:
                raise ConfigValidationError(
                    f"Unknown {target_class.__name__} fields: {', '.join(unknown)}",
                    field_name=unknown[0],
                    suggestions=sorted(known),
                )

            field_values: Dict[str, Any] = {}
            for field_name, value in data_dict.items():
                field_type = known[field_name].type
                if hasattr(field_type, "__dataclass_fields__"):
                    field_values[field_name] = _dict_to_dataclass(value, field_type)
                else:
                    field_values[field_name] = value
            try:
                return target_class(**field_values)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e)) from e

        return _dict_to_dataclass(data, cls)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def compatible(cls) -> "ParserConfig":
        """Historical behaviour: any end tag closes the current element."""
        return cls(
            name="compatible",
            description="Untyped end tags, no depth limit",
        )

    @classmethod
    def strict(cls) -> "ParserConfig":
        """End tags carry their name and must match the element they close."""
        return cls(
            tokenization=TokenizationConfig(record_end_tag_names=True),
            tree=TreeConfig(validate_end_tags=True),
            name="strict",
            description="Mismatched end tags are rejected",
        )
