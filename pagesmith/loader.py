"""Project config and content dataset loading with strict validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from pagesmith.assets.stylesheet import DEFAULT_COMMAND
from pagesmith.exceptions import ConfigValidationError, ValidationError
from pagesmith.template.includes import IncludePolicy


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps on/off/yes/no/y/n as strings; only true/false are booleans."""
    pass


# Drop the YAML 1.1 boolean resolvers for every first letter except t/T/f/F
PreservingLoader.yaml_implicit_resolvers = dict(PreservingLoader.yaml_implicit_resolvers)
for _first in ('o', 'O', 'y', 'Y', 'n', 'N'):
    if _first in PreservingLoader.yaml_implicit_resolvers:
        PreservingLoader.yaml_implicit_resolvers[_first] = [
            (tag, regexp) for tag, regexp in PreservingLoader.yaml_implicit_resolvers[_first]
            if tag != 'tag:yaml.org,2002:bool'
        ]


CONFIG_FILENAME = "pagesmith.yaml"


@dataclass
class BuildConfig:
    """Resolved project layout and build options."""
    root: Path
    templates_dir: str = "templates"
    src_dir: str = "src"
    content_file: str = "content/content.yaml"
    dist_dir: str = "dist"
    final_dir: str = "final"
    entry: str = "index.tmpl.html"
    include_policy: IncludePolicy = IncludePolicy.RAW
    stylesheet_command: List[str] = field(default_factory=lambda: list(DEFAULT_COMMAND))
    poll_ms: int = 500

    def __post_init__(self):
        self.root = Path(self.root).resolve()
        self.include_policy = IncludePolicy(self.include_policy)

    @property
    def templates_path(self) -> Path:
        return self.root / self.templates_dir

    @property
    def src_path(self) -> Path:
        return self.root / self.src_dir

    @property
    def content_path(self) -> Path:
        return self.root / self.content_file

    @property
    def dist_path(self) -> Path:
        return self.root / self.dist_dir

    @property
    def final_path(self) -> Path:
        return self.root / self.final_dir

    @property
    def entry_path(self) -> Path:
        return self.root / self.entry

    def watch_paths(self) -> List[Path]:
        """Paths whose changes trigger a rebuild."""
        return [
            self.templates_path,
            self.src_path / "scss",
            self.src_path / "js",
            self.content_path.parent,
            self.entry_path,
        ]


class ConfigLoader:
    """Loads and validates pagesmith.yaml with strict key checking."""

    PATH_FIELDS = {'templates_dir', 'src_dir', 'content_file', 'dist_dir', 'final_dir', 'entry'}
    KNOWN_FIELDS = PATH_FIELDS | {'include_policy', 'stylesheet_command', 'poll_ms'}

    def __init__(self, root: Path):
        """Initialize loader with project root."""
        self.root = Path(root).resolve()
        self.errors: List[ValidationError] = []

    def load(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> BuildConfig:
        """
        Load the project config.

        Args:
            config_path: Explicit config file; defaults to <root>/pagesmith.yaml
            overrides: Values taking precedence over the file (None values ignored)

        Returns:
            Validated BuildConfig

        Raises:
            ConfigValidationError: If the file or any override is invalid
        """
        self.errors = []
        explicit = config_path is not None
        path = Path(config_path) if explicit else self.root / CONFIG_FILENAME

        data: Dict[str, Any] = {}
        if path.exists():
            data = self._read(path)
        elif explicit:
            self._add_error(f"Config file not found: {path}")
            self._raise_validation_errors()

        for key, value in (overrides or {}).items():
            if value is not None:
                data[key] = value

        self._validate(data)

        if self.errors:
            self._raise_validation_errors()

        return BuildConfig(root=self.root, **data)

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.load(f, Loader=PreservingLoader)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load config: {e}", str(path))
            self._raise_validation_errors()

        if data is None:
            return {}

        if not isinstance(data, dict):
            self._add_error("Config must be a YAML object/dictionary", str(path))
            self._raise_validation_errors()

        return data

    def _validate(self, data: Dict[str, Any]):
        for key in list(data.keys()):
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown config field '{key}'", key)
                del data[key]

        for key in self.PATH_FIELDS & data.keys():
            value = data[key]
            if not isinstance(value, str) or not value:
                self._add_error(f"'{key}' must be a non-empty string", key)
            else:
                self._validate_path_safety(value, key)

        if 'include_policy' in data:
            policy = data['include_policy']
            valid = [p.value for p in IncludePolicy]
            if policy not in valid:
                self._add_error(f"'include_policy' must be one of {valid}, got '{policy}'", 'include_policy')

        if 'stylesheet_command' in data:
            command = data['stylesheet_command']
            if (not isinstance(command, list) or not command
                    or not all(isinstance(token, str) for token in command)):
                self._add_error("'stylesheet_command' must be a non-empty list of strings", 'stylesheet_command')

        if 'poll_ms' in data:
            poll_ms = data['poll_ms']
            if isinstance(poll_ms, bool) or not isinstance(poll_ms, int) or poll_ms <= 0:
                self._add_error("'poll_ms' must be a positive integer", 'poll_ms')

    def _validate_path_safety(self, value: str, field_name: str):
        """Reject absolute paths and parent traversal."""
        if os.path.isabs(value):
            self._add_error(f"'{field_name}': absolute path not allowed: {value}", field_name)
        elif '..' in Path(value).parts:
            self._add_error(f"'{field_name}': parent directory traversal not allowed: {value}", field_name)

    def _add_error(self, message: str, path: str = ""):
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self):
        raise ConfigValidationError(self.errors)


class ContentLoader:
    """Loads the content dataset (name -> scalar or config mapping)."""

    def load(self, content_path: Path) -> Dict[str, Any]:
        """
        Load content YAML.

        A missing or empty file is an empty dataset.

        Raises:
            ConfigValidationError: If the file cannot be parsed or is not a mapping
        """
        content_path = Path(content_path)
        if not content_path.exists():
            return {}

        try:
            with open(content_path, 'r', encoding='utf-8') as f:
                data = yaml.load(f, Loader=PreservingLoader)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigValidationError([
                ValidationError(message=f"Failed to load content: {e}", path=str(content_path))
            ])

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigValidationError([
                ValidationError(
                    message=f"Content must be a YAML object/dictionary, got {type(data).__name__}",
                    path=str(content_path)
                )
            ])

        return {str(key): value for key, value in data.items()}
