"""Configuration for the notebook root, editor and log filter.

Values come from, in increasing precedence:

1. built-in defaults (root ``$HOME/.adrus``, log filter ``info``);
2. an optional TOML file, ``$ADRUS_CONFIG`` or ``~/.config/adrus/config.toml``::

       dir        = "~/notes"
       editor     = "nvim"
       log_filter = "warn"

3. the environment: ``ADRUS_DIR``, ``EDITOR``, ``LOG_FILTER``.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from adrus.errors import ConfigError
from adrus.logging_config import DEFAULT_FILTER

CONFIG_FILENAME = "config.toml"
DEFAULT_DIRNAME = ".adrus"


@dataclass
class NotebookConfig:
    """Resolved settings for one invocation."""

    root: Path
    editor: str | None = None
    log_filter: str = DEFAULT_FILTER


def config_file_path(env: Mapping[str, str]) -> Path | None:
    """Location of the TOML config file, or ``None`` when it can't be determined."""
    explicit = env.get("ADRUS_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    home = env.get("HOME")
    if not home:
        return None
    return Path(home) / ".config" / "adrus" / CONFIG_FILENAME


def read_config_file(path: Path | None) -> dict[str, Any]:
    """Load *path* as TOML.  A missing file yields an empty dict."""
    if path is None or not path.exists():
        return {}
    try:
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"failed to read config file '{path}': {exc}") from exc
    for key in ("dir", "editor", "log_filter"):
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"config file '{path}': '{key}' must be a string")
    return data


def _expand(value: str, env: Mapping[str, str]) -> Path:
    if value == "~" or value.startswith("~/"):
        home = env.get("HOME")
        if not home:
            raise ConfigError("env var HOME not set")
        return Path(home) / value[2:]
    return Path(value)


def load_config(env: Mapping[str, str] | None = None) -> NotebookConfig:
    """Resolve the configuration from *env* (defaults to ``os.environ``)."""
    env = os.environ if env is None else env
    data = read_config_file(config_file_path(env))

    root_value = env.get("ADRUS_DIR") or data.get("dir")
    if root_value:
        root = _expand(root_value, env)
    else:
        home = env.get("HOME")
        if not home:
            raise ConfigError("env var HOME not set")
        root = Path(home) / DEFAULT_DIRNAME

    return NotebookConfig(
        root=root,
        editor=env.get("EDITOR") or data.get("editor"),
        log_filter=env.get("LOG_FILTER") or data.get("log_filter") or DEFAULT_FILTER,
    )
