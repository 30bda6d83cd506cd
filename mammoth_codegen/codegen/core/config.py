"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import copy
import json
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union
from dataclasses import asdict, dataclass, field, fields


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass(frozen=True)
class SchemaConventions:
    """Reserved names the schema and the generated runtime agree on."""

    event_type_parameter: str = "event_type"
    defaulted_parameters: Tuple[str, ...] = (
        "screen_name",
        "previous_screen_name",
        "modal_name",
    )

    # Metadata keys of the business event
    business_event_id_key: str = "schema_event_id"
    business_schema_version_key: str = "schema_version"

    # Metadata keys of the publish event
    publish_event_id_key: str = "achievement_id"
    publish_schema_version_key: str = "score"

    # Tags whose class contains this marker (case-insensitive) name explicit consumers
    consumer_tag_marker: str = "Sdk"

    enum_value_field: str = "value"


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_file: Optional[str] = None
    output_class_name: str = "AnalyticsEvent"
    package_name: str = "com.trafi.analytics"

    # Generation switches
    include_schema_metadata: bool = True
    require_publish_event: bool = False
    strict_identifiers: bool = False
    add_comments: bool = True

    conventions: SchemaConventions = field(default_factory=SchemaConventions)

    # Language-specific settings
    language_config: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["kotlin"] = {
            "output_file": "MammothEvents.kt",
            "package_name": "com.trafi.analytics",
            "language_config": {},
        }

        self._configs["python"] = {
            "output_file": "mammoth_events.py",
            "package_name": "",
            "language_config": {},
        }

    def get_config(self, language: str, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = copy.deepcopy(self._configs.get(language, {}))

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        """Shallow merge, except that language_config dicts are merged key by key."""
        for key, value in overrides.items():
            if key == "language_config" and isinstance(value, dict):
                base.setdefault("language_config", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        language_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                language_args[key] = value

        # Unknown top-level keys are language settings
        if language_args:
            existing = dict(config_args.get('language_config') or {})
            existing.update(language_args)
            config_args['language_config'] = existing

        conventions = config_args.get('conventions')
        if isinstance(conventions, dict):
            config_args['conventions'] = self._dict_to_conventions(conventions)

        return GeneratorConfig(**config_args)

    def _dict_to_conventions(self, conventions: Dict[str, Any]) -> SchemaConventions:
        known = {f.name for f in fields(SchemaConventions)}
        unknown = set(conventions) - known
        if unknown:
            raise ConfigError(f"Unknown convention settings: {', '.join(sorted(unknown))}")

        values = dict(conventions)
        if 'defaulted_parameters' in values:
            values['defaulted_parameters'] = tuple(values['defaulted_parameters'])
        return SchemaConventions(**values)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)
        config_dict['conventions']['defaulted_parameters'] = list(
            config.conventions.defaulted_parameters
        )

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def list_languages(self) -> list[str]:
        """Get list of languages with default settings."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> list[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.output_class_name.isidentifier():
            warnings.append(f"Invalid output class name: {config.output_class_name}")

        if language == "kotlin":
            segments = config.package_name.split(".") if config.package_name else []
            if not segments or not all(s.isidentifier() for s in segments):
                warnings.append(f"Invalid Kotlin package name: {config.package_name}")

        return warnings


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: str = "kotlin", custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)


# Example configuration file for reference
EXAMPLE_CONFIG = {
    "output_class_name": "AnalyticsEvent",
    "include_schema_metadata": True,
    "conventions": {
        "consumer_tag_marker": "Sdk",
    },
    "language_config": {
        "schema_version_constant": "mammothSchemaVersion",
    },
}
