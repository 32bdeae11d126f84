"""Generator configuration record, defaults, and persistence."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from stencil.variables import FormatOptions


DEFAULT_TEMPLATE_DIR = "./template"
DEFAULT_OUTPUT_DIR = "./output"

# Searched in order when no config file is given explicitly
CONFIG_CANDIDATES = (
    "stencil.json",
    ".stencil.json",
    "stencil.config.json",
    "stencil.yaml",
    "stencil.yml",
)

# FormatOptions field -> key used in config files
FORMAT_KEYS = {
    'braces': 'enableBraces',
    'angle_brackets': 'enableAngleBrackets',
    'underscores': 'enableUnderscores',
    'percent': 'enablePercent',
}


@dataclass
class StencilConfig:
    """Everything a generation run needs."""
    template_dir: str = DEFAULT_TEMPLATE_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    variables: Dict[str, str] = field(default_factory=dict)
    interactive: bool = False
    dry_run: bool = False
    skip_confirm: bool = False
    formats: FormatOptions = field(default_factory=FormatOptions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk (camelCase) representation."""
        return {
            "templateDir": self.template_dir,
            "outputDir": self.output_dir,
            "variables": dict(self.variables),
            "interactive": self.interactive,
            "dryRun": self.dry_run,
            "skipConfirm": self.skip_confirm,
            "formats": {
                key: getattr(self.formats, attr)
                for attr, key in FORMAT_KEYS.items()
            },
        }


def default_config() -> StencilConfig:
    """Return a configuration with every field at its default."""
    return StencilConfig()


def save_config(path: Union[str, Path], config: StencilConfig) -> Path:
    """
    Write a configuration as JSON.

    Args:
        path: Destination file; parent directories are created
        config: Configuration to persist

    Returns:
        The path written
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    return target


def find_config_file(directory: Optional[Path] = None) -> Optional[Path]:
    """Return the first well-known config file present in ``directory``."""
    base = Path(directory) if directory is not None else Path.cwd()
    for name in CONFIG_CANDIDATES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None
