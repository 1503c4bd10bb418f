"""
Interpreter configuration.

Holds the fixed strings the engine emits (markers, prefixes, error
template) and the optional step limit used when driving a run to
completion. Configuration can be built in code or read from YAML:

    start_marker: "--- Flash Execution Started ---"
    max_steps: 10000
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration mapping or file is invalid."""
    pass


@dataclass
class InterpreterConfig:
    """
    Output formats and limits for an Interpreter.

    Properties:
        start_marker: Emitted by ``run()``
        finish_marker: Emitted once when the cursor reaches the end
        prompt_prefix: Prepended to ``get input for`` prompts
        echo_prefix: Prepended to the echo of delivered input
        error_template: Format string with ``{line}`` and ``{message}``
        max_steps: Limit for ``run_until_blocked``; None means unbounded
    """

    start_marker: str = "--- Flash Execution Started ---"
    finish_marker: str = "--- Flash Execution Finished ---"
    prompt_prefix: str = "[Flash asks]: "
    echo_prefix: str = "> "
    error_template: str = "Error on line {line}: {message}"
    max_steps: Optional[int] = None

    def format_error(self, line: int, message: str) -> str:
        return self.error_template.format(line=line, message=message)


def config_from_dict(d: Dict[str, Any] | None) -> InterpreterConfig:
    """
    Build a config from a mapping, rejecting unknown keys and bad types.

    Raises:
        ConfigError: If the mapping is invalid
    """
    if d is None:
        return InterpreterConfig()
    if not isinstance(d, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(d).__name__}")

    known = {f.name for f in fields(InterpreterConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {unknown}")

    for key, value in d.items():
        if key == "max_steps":
            if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 1):
                raise ConfigError(f"max_steps must be a positive integer, got {value!r}")
        elif not isinstance(value, str):
            raise ConfigError(f"{key} must be a string, got {value!r}")

    if "error_template" in d:
        try:
            d["error_template"].format(line=1, message="")
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise ConfigError(f"Invalid error_template: {e}")

    return InterpreterConfig(**d)


def load_config(filepath: str) -> InterpreterConfig:
    """
    Read an InterpreterConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the YAML is malformed or the values are invalid
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {filepath}")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {filepath}: {e}")

    config = config_from_dict(data)
    logger.debug("Loaded configuration from %s", filepath)
    return config


__all__ = ["ConfigError", "InterpreterConfig", "config_from_dict", "load_config"]
