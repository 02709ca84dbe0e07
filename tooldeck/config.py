"""Configuration management for tooldeck."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

_log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/tooldeck/config.yaml"
CONFIG_ENV_VAR = "TOOLDECK_CONFIG"


class ConfigManager:
    """Manage tooldeck configuration from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        path = config_path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        self.config_path = Path(path).expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._create_default_config()
        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            _log.error("Error reading config %s: %s", self.config_path, e)
            return {}
        return content if isinstance(content, dict) else {}

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = {
            "cli": {
                "name": "tooldeck",
                "description": "Run tools and build prompts from the command line",
                "version": "0.1.0",
            },
            "tools": {
                "modules": [],
                "builtins": True,
            },
            "prompts": {
                "directory": "",
            },
            "logging": {
                "level": "WARNING",
            },
        }

        with open(self.config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    def _resolve_env_var(self, value: str) -> str:
        """Resolve environment variable references like ${VAR_NAME}."""
        if not value.startswith("${") or not value.endswith("}"):
            return value

        var_name = value[2:-1]
        return os.getenv(var_name, "")

    def _section(self, name: str, defaults: Dict[str, Any]) -> Dict[str, Any]:
        config = self.data.get(name) or {}
        if not isinstance(config, dict):
            return dict(defaults)
        return {**defaults, **config}

    def get_cli_config(self) -> Dict[str, Any]:
        """Get program name, description and version for the CLI."""
        return self._section("cli", {
            "name": "tooldeck",
            "description": "",
            "version": "0.1.0",
        })

    def get_tools_config(self) -> Dict[str, Any]:
        """Get tool module import paths and the builtins toggle."""
        config = self._section("tools", {"modules": [], "builtins": True})
        modules = config.get("modules") or []
        if isinstance(modules, str):
            modules = [modules]
        config["modules"] = [str(m) for m in modules]
        return config

    def get_tool_modules(self) -> list[str]:
        return self.get_tools_config()["modules"]

    def get_prompts_dir(self) -> Optional[Path]:
        """Resolved prompts directory, or None when not configured."""
        raw = str(self._section("prompts", {"directory": ""}).get("directory") or "")
        resolved = self._resolve_env_var(raw)
        if not resolved:
            return None
        path = Path(resolved).expanduser()
        if not path.is_absolute():
            path = self.config_path.parent / path
        return path

    def get_log_level(self) -> str:
        return str(self._section("logging", {"level": "WARNING"}).get("level", "WARNING")).upper()

    def save(self) -> None:
        """Save configuration to file."""
        with open(self.config_path, "w") as f:
            yaml.dump(self.data, f, default_flow_style=False)
