"""Application configuration with Pydantic validation.

Values are resolved from, in increasing precedence: built-in defaults,
the YAML config file, ``FLUX_TUI_*`` environment variables, and finally
explicit CLI flags (applied by the caller via ``with_overrides``).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

# XDG-compliant config location
CONFIG_DIR = Path.home() / ".config" / "flux-tui"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_REFRESH_INTERVAL = 5
DEFAULT_COMMAND_TIMEOUT = 300


class FluxTUIConfig(BaseModel):
    """Complete flux-tui configuration."""

    model_config = ConfigDict(extra="forbid")

    kubeconfig: str | None = None
    context: str | None = None
    namespace: str | None = None
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    flux_binary: str | None = None

    @field_validator("refresh_interval", "command_timeout")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate intervals and timeouts are positive."""
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        if v is None:
            return None
        return str(Path(v).expanduser())

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> FluxTUIConfig:
        """Create configuration with environment variable overrides.

        Supported environment variables:
            FLUX_TUI_KUBECONFIG: Path to kubeconfig file
            FLUX_TUI_CONTEXT: Kubernetes context to use
            FLUX_TUI_NAMESPACE: Initial namespace filter
            FLUX_TUI_REFRESH_INTERVAL: Auto-refresh interval in seconds
            FLUX_TUI_COMMAND_TIMEOUT: Timeout for flux CLI commands in seconds
            FLUX_TUI_FLUX_BINARY: Explicit path to the flux binary
        """
        config_dict = base_config.copy() if base_config else {}

        if kubeconfig := os.environ.get("FLUX_TUI_KUBECONFIG"):
            config_dict["kubeconfig"] = kubeconfig

        if context := os.environ.get("FLUX_TUI_CONTEXT"):
            config_dict["context"] = context

        if namespace := os.environ.get("FLUX_TUI_NAMESPACE"):
            config_dict["namespace"] = namespace

        if interval := os.environ.get("FLUX_TUI_REFRESH_INTERVAL"):
            config_dict["refresh_interval"] = int(interval)

        if timeout := os.environ.get("FLUX_TUI_COMMAND_TIMEOUT"):
            config_dict["command_timeout"] = int(timeout)

        if binary := os.environ.get("FLUX_TUI_FLUX_BINARY"):
            config_dict["flux_binary"] = binary

        return cls.model_validate(config_dict)

    def with_overrides(self, **overrides: Any) -> FluxTUIConfig:
        """Return a copy with non-None overrides applied and re-validated."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return type(self).model_validate(data)


def load_config(path: Path | None = None) -> FluxTUIConfig:
    """Load configuration from YAML and the environment.

    Args:
        path: Explicit config file. Defaults to ~/.config/flux-tui/config.yaml,
            which is optional; an explicit path must exist.

    Returns:
        The resolved configuration.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If the file is not valid YAML or not a mapping.
    """
    config_path = path or CONFIG_FILE
    base: dict[str, Any] = {}

    if config_path.exists():
        try:
            loaded = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")
        base = loaded
    elif path is not None:
        raise FileNotFoundError(f"Config file not found: {path}")

    return FluxTUIConfig.from_env(base)
