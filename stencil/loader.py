"""Configuration loader with strict validation.

``.json`` files are parsed with the json module; anything else is read as
YAML.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union
import yaml

from stencil.config import FORMAT_KEYS, StencilConfig
from stencil.exceptions import ValidationError, ConfigValidationError
from stencil.variables import FormatOptions


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps 'yes', 'no', 'on' and 'off' as strings.

    Variable values such as ``enable_feature: no`` must reach the template
    verbatim. Only ``true``/``false`` resolve to booleans.
    """
    pass


PreservingLoader.yaml_implicit_resolvers = dict(PreservingLoader.yaml_implicit_resolvers)
for _first in ('y', 'Y', 'n', 'N', 'o', 'O'):
    if _first in PreservingLoader.yaml_implicit_resolvers:
        PreservingLoader.yaml_implicit_resolvers[_first] = [
            (tag, regexp) for tag, regexp in PreservingLoader.yaml_implicit_resolvers[_first]
            if tag != 'tag:yaml.org,2002:bool'
        ]


class ConfigLoader:
    """Loads and validates a stencil configuration file (JSON or YAML)."""

    PATH_FIELDS = {'templateDir': 'template_dir', 'outputDir': 'output_dir'}
    FLAG_FIELDS = {'interactive': 'interactive', 'dryRun': 'dry_run', 'skipConfirm': 'skip_confirm'}
    KNOWN_FIELDS = set(PATH_FIELDS) | set(FLAG_FIELDS) | {'variables', 'formats'}

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def load(self, config_path: Union[str, Path]) -> StencilConfig:
        """Load, validate and convert a configuration file."""
        self.errors = []
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if Path(config_path).suffix == '.json':
                    raw = json.load(f)
                else:
                    raw = yaml.load(f, Loader=PreservingLoader)
        except (OSError, ValueError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load config file '{config_path}': {e}")
            self._raise_validation_errors()

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            self._add_error("Config must be an object/dictionary")
            self._raise_validation_errors()

        return self.load_dict(raw)

    def load_dict(self, raw: Dict[str, Any]) -> StencilConfig:
        """Validate an already-parsed mapping and build a config from it."""
        self.errors = []
        config = StencilConfig()

        for key in raw:
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'", key)

        for key, attr in self.PATH_FIELDS.items():
            if key in raw:
                value = raw[key]
                if not isinstance(value, str) or not value:
                    self._add_error("must be a non-empty string", key)
                else:
                    setattr(config, attr, value)

        for key, attr in self.FLAG_FIELDS.items():
            if key in raw:
                value = raw[key]
                if not isinstance(value, bool):
                    self._add_error(f"must be true or false, got {type(value).__name__}", key)
                else:
                    setattr(config, attr, value)

        if 'variables' in raw:
            config.variables = self._validate_variables(raw['variables'])

        if 'formats' in raw:
            config.formats = self._validate_formats(raw['formats'])

        if self.errors:
            self._raise_validation_errors()

        return config

    def _validate_variables(self, variables: Any) -> Dict[str, str]:
        """Validate the variables mapping, stringifying scalar values."""
        if variables is None:
            return {}
        if not isinstance(variables, dict):
            self._add_error("must be a dictionary of name/value pairs", 'variables')
            return {}

        result: Dict[str, str] = {}
        for name, value in variables.items():
            path = f"variables.{name}"
            if not isinstance(name, str) or not name:
                self._add_error("variable names must be non-empty strings", path)
            elif value is None:
                result[name] = ""
            elif isinstance(value, bool):
                result[name] = 'true' if value else 'false'
            elif isinstance(value, (str, int, float)):
                result[name] = str(value)
            else:
                self._add_error(f"value must be a scalar, got {type(value).__name__}", path)
        return result

    def _validate_formats(self, formats: Any) -> FormatOptions:
        """Validate the formats block; omitted keys stay enabled."""
        if formats is None:
            return FormatOptions()
        if not isinstance(formats, dict):
            self._add_error("must be a dictionary", 'formats')
            return FormatOptions()

        known = set(FORMAT_KEYS.values())
        for key in formats:
            if key not in known:
                self._add_error(f"Unknown format option '{key}'", f"formats.{key}")

        kwargs: Dict[str, bool] = {}
        for attr, key in FORMAT_KEYS.items():
            if key in formats:
                value = formats[key]
                if not isinstance(value, bool):
                    self._add_error(f"must be true or false, got {type(value).__name__}", f"formats.{key}")
                else:
                    kwargs[attr] = value
        return FormatOptions(**kwargs)

    def _add_error(self, message: str, path: str = ""):
        """Record a validation error."""
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self):
        """Raise every collected error at once."""
        raise ConfigValidationError(self.errors)
