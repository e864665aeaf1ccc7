"""
Configuration management for the base reporter.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, TextIO
from dataclasses import dataclass

from base_reporter.core.errors import ConfigurationError

COLORS_ENV_VAR = "BASE_REPORTER_COLORS"
CONFIG_ENV_VAR = "BASE_REPORTER_CONFIG"
CONFIG_TABLE = "base_reporter"

# Fields a config file may fill in, with the type each must have
FILE_KEYS = {"use_colors": bool, "inline_diffs": bool, "verbosity": int}


def _isatty(stream: Optional[TextIO]) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def detect_colors(
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> bool:
    """
    Decide whether colored output should be enabled by default.

    Colors are on when both output streams are interactive terminals, or
    when the BASE_REPORTER_COLORS environment variable is set to anything.
    """
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr
    environ = os.environ if environ is None else environ
    return (_isatty(stdout) and _isatty(stderr)) or COLORS_ENV_VAR in environ


@dataclass
class ReporterConfig:
    """Formatting configuration shared by the reporter, colors and diffs."""

    # None means "detect" / "use the default"
    use_colors: Optional[bool] = None
    inline_diffs: Optional[bool] = None
    verbosity: Optional[int] = None
    config_file: Optional[Path] = None

    def __post_init__(self):
        """Resolve file values and defaults."""
        self._load_config_file()

        if self.use_colors is None:
            self.use_colors = detect_colors()
        if self.inline_diffs is None:
            self.inline_diffs = False
        if self.verbosity is None:
            self.verbosity = 0

        if not isinstance(self.verbosity, int) or isinstance(self.verbosity, bool):
            raise ValueError(f"verbosity must be an integer, got {self.verbosity!r}")
        if not 0 <= self.verbosity <= 3:
            raise ValueError(f"verbosity must be between 0 and 3, got {self.verbosity}")

    def _load_config_file(self) -> None:
        """Fill unset fields from a TOML file, if one is configured."""
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            self.config_file = Path(env_path).resolve()
        elif self.config_file is not None:
            self.config_file = Path(self.config_file).resolve()

        if not self.config_file:
            return
        if not self.config_file.exists():
            raise ConfigurationError(f"Config file does not exist: {self.config_file}")

        try:
            try:
                import tomllib  # Python 3.11+
            except ModuleNotFoundError:  # Python 3.8-3.10
                import tomli as tomllib

            data = tomllib.loads(self.config_file.read_text())
        except Exception as e:
            raise ConfigurationError(f"Failed to read config file: {self.config_file}: {e}") from e

        table = data.get(CONFIG_TABLE) or data.get("tool", {}).get(CONFIG_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigurationError(f"[{CONFIG_TABLE}] in {self.config_file} must be a table")

        for key, value in table.items():
            if key not in FILE_KEYS or value is None:
                continue
            expected = FILE_KEYS[key]
            # bool is an int subclass; reject it where a number is expected
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ConfigurationError(
                    f"{key} in {self.config_file} must be {expected.__name__}, got {value!r}"
                )
            # Explicit constructor arguments win over the file
            if getattr(self, key) is not None:
                continue
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "use_colors": self.use_colors,
            "inline_diffs": self.inline_diffs,
            "verbosity": self.verbosity,
            "config_file": str(self.config_file) if self.config_file else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReporterConfig":
        """Create configuration from dictionary."""
        data = dict(data)
        if isinstance(data.get("config_file"), str):
            data["config_file"] = Path(data["config_file"])
        return cls(**data)
