#!/usr/bin/env python3
"""
Stunt Configuration System - global + project config for the stuntc toolchain
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)

ENV_PREFIX = "STUNT_"


@dataclass
class AnalyzerOptions:
    """Options passed through to the semantic analyzer"""

    warn_unused: bool = True
    warnings_as_errors: bool = False


class StuntConfig:
    """Stunt configuration manager with global + project config merging"""

    def __init__(self, home: Optional[Path] = None, cwd: Optional[Path] = None):
        self.home = home or Path.home()
        self.cwd = cwd or self._current_directory()

        self.global_config_dir = self.home / ".stunt"
        self.global_config_file = self.global_config_dir / "config.yaml"

        # Project config (search upwards from the working directory)
        self.project_config_dir = self._find_project_config_dir()
        self.project_config_file = (
            self.project_config_dir / "config.yaml" if self.project_config_dir else None
        )

        self._config_cache = None

    @staticmethod
    def _current_directory() -> Optional[Path]:
        """The working directory, or None if it has been removed"""
        try:
            return Path.cwd()
        except OSError:
            return None

    def _find_project_config_dir(self) -> Optional[Path]:
        """Find project config by searching upwards for .stunt/ directory"""
        current = self.cwd
        if current is None:
            return None

        # Search up to 10 levels or until root
        for _ in range(10):
            stunt_dir = current / ".stunt"
            try:
                found = stunt_dir.is_dir()
            except OSError:
                # Unreadable directory, stop searching
                return None
            if found and stunt_dir != self.global_config_dir:
                return stunt_dir

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def _load_yaml_config(self, config_file: Path) -> Dict[str, Any]:
        """Load YAML config file, warning on anything unreadable"""
        if not config_file.exists():
            return {}

        try:
            with open(config_file, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            console.print(f"⚠️ Warning: Could not load config {config_file}: {escape(str(e))}")
            return {}

        if not isinstance(data, dict):
            console.print(
                f"⚠️ Warning: Ignoring config {config_file}: top level must be a mapping"
            )
            return {}
        return data

    def _merge_configs(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Merge override into base (override wins, nested dicts merge)"""
        merged = base.copy()

        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            "analyzer": {
                "warn_unused": True,
                "warnings_as_errors": False,
            },
            "output": {
                "indent": 2,
                "show_source": True,
                "show_tokens": True,
                "show_ast": True,
            },
            "logging": {
                "level": "WARNING",
            },
        }

    def get_config(self, force_reload: bool = False) -> Dict[str, Any]:
        """Get merged configuration (cached unless force_reload=True)"""
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        # 1. Start with defaults
        config = self._get_default_config()

        # 2. Load global config
        config = self._merge_configs(
            config, self._load_yaml_config(self.global_config_file)
        )

        # 3. Load project config (if exists)
        if self.project_config_file:
            config = self._merge_configs(
                config, self._load_yaml_config(self.project_config_file)
            )

        # 4. Apply environment variables: STUNT_OUTPUT__INDENT=4
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX) and "__" in key:
                config_path = key[len(ENV_PREFIX):].lower().split("__")
                self._set_nested_value(config, config_path, self._parse_env_value(value))

        self._config_cache = config
        return config

    def _parse_env_value(self, value: str) -> Any:
        """Interpret an environment value as a YAML scalar (true, 4, ...)"""
        try:
            return yaml.safe_load(value)
        except yaml.YAMLError:
            return value

    def _set_nested_value(self, config: Dict[str, Any], path: List[str], value: Any):
        """Set nested dictionary value from environment variable"""
        current = config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def get_analyzer_options(self) -> AnalyzerOptions:
        analyzer = self.get_config().get("analyzer", {})
        return AnalyzerOptions(
            warn_unused=bool(analyzer.get("warn_unused", True)),
            warnings_as_errors=bool(analyzer.get("warnings_as_errors", False)),
        )

    def get_indent(self) -> int:
        return int(self.get_config().get("output", {}).get("indent", 2))

    def get_display_flags(self) -> Dict[str, bool]:
        """Which sections `stuntc tokenize` prints"""
        output = self.get_config().get("output", {})
        return {
            "source": bool(output.get("show_source", True)),
            "tokens": bool(output.get("show_tokens", True)),
            "ast": bool(output.get("show_ast", True)),
        }

    def get_log_level(self) -> str:
        return str(self.get_config().get("logging", {}).get("level", "WARNING")).upper()

    def write_project_config(self, force: bool = False) -> Path:
        """Write the defaults to ./.stunt/config.yaml and return its path"""
        if self.cwd is None:
            raise FileNotFoundError("the working directory no longer exists")
        config_dir = self.cwd / ".stunt"
        config_file = config_dir / "config.yaml"
        if config_file.exists() and not force:
            raise FileExistsError(str(config_file))

        config_dir.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            yaml.dump(self._get_default_config(), f, default_flow_style=False)

        self.project_config_dir = config_dir
        self.project_config_file = config_file
        self._config_cache = None
        return config_file


# Global config instance, created on first use
_config_manager: Optional[StuntConfig] = None


def get_config_manager() -> StuntConfig:
    """Return the shared configuration, building it the first time"""
    global _config_manager
    if _config_manager is None:
        _config_manager = StuntConfig()
    return _config_manager
