"""Run configuration for depselect.

Values are layered with increasing precedence: built-in defaults from
``Constants``, the optional YAML/JSON config file, environment variables, and
finally explicit CLI flags.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from selection.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_SECTION = "depselect"

# config file key -> (RunConfig field, environment variable, CLI attribute)
_LAYERS = {
    "manifest": ("manifest", None, "MANIFEST"),
    "tool_key": ("tool_key", None, "TOOL_KEY"),
    "installer": ("installer_command", Constants.ENV_INSTALLER, "INSTALLER"),
    "wiring_command": ("wiring_command", Constants.ENV_WIRING_COMMAND, "WIRING_COMMAND"),
    "vendor_dir": ("vendor_dir", None, "VENDOR_DIR"),
}


@dataclass
class RunConfig:
    """Resolved settings for one run."""

    directory: str = "."
    manifest: str = Constants.MANIFEST_FILE
    tool_key: str = Constants.TOOL_KEY
    installer_command: str = Constants.INSTALLER_COMMAND
    wiring_command: Optional[str] = None
    vendor_dir: Optional[str] = None
    dry_run: bool = False

    @property
    def manifest_path(self) -> str:
        if os.path.isabs(self.manifest):
            return self.manifest
        return os.path.join(self.directory, self.manifest)

    def resolve_vendor_dir(self, manifest: Dict[str, Any]) -> str:
        """Vendor directory: explicit setting, then ``config.vendor-dir``, then 'vendor'."""
        vendor = self.vendor_dir
        if not vendor:
            section = manifest.get("config")
            if isinstance(section, dict) and isinstance(section.get("vendor-dir"), str):
                vendor = section["vendor-dir"]
        vendor = vendor or Constants.VENDOR_DIR
        if os.path.isabs(vendor):
            return vendor
        return os.path.join(os.path.dirname(self.manifest_path), vendor)


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load settings from a YAML or JSON file.

    A top-level ``depselect:`` section is used when present. A missing path
    only logs a warning.

    Raises:
        ConfigError: If the file cannot be parsed or is not a mapping.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping")
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"Config {path}: '{CONFIG_SECTION}' must be a mapping")
    return section


def build_run_config(args, environ: Optional[Dict[str, str]] = None) -> RunConfig:
    """Merge defaults, config file, environment and CLI flags into a RunConfig."""
    environ = os.environ if environ is None else environ
    config = RunConfig(
        directory=getattr(args, "DIRECTORY", None) or ".",
        dry_run=bool(getattr(args, "DRY_RUN", False)),
    )
    file_values = load_config(getattr(args, "CONFIG", None))

    for key, (attr, env_name, cli_name) in _LAYERS.items():
        value = file_values.get(key)
        if env_name and environ.get(env_name):
            value = environ[env_name]
        cli_value = getattr(args, cli_name, None)
        if cli_value:
            value = cli_value
        if value is not None and value != "":
            setattr(config, attr, str(value))

    unknown = sorted(set(file_values) - set(_LAYERS))
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    return config
