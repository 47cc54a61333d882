"""Stored exclusion lists — ~/.sbextract/config.toml."""

from __future__ import annotations

import os
import stat
import tomllib
from pathlib import Path

from sbextract.models import ExclusionConfig

_CONFIG_FILE = Path.home() / ".sbextract" / "config.toml"

_SECTION = "exclusions"
_FUNCTIONS_KEY = "function_schemas"
_TRIGGERS_KEY = "trigger_schemas"


def _escape_toml_value(v: str) -> str:
    """Escape a string for safe inclusion in a TOML double-quoted value."""
    return v.replace("\\", "\\\\").replace('"', '\\"')


def _toml_array(values: tuple[str, ...]) -> str:
    return "[" + ", ".join(f'"{_escape_toml_value(v)}"' for v in values) + "]"


def _write_toml(config: ExclusionConfig) -> None:
    lines = [
        f"[{_SECTION}]",
        f"{_FUNCTIONS_KEY} = {_toml_array(config.function_schemas)}",
        f"{_TRIGGERS_KEY} = {_toml_array(config.trigger_schemas)}",
        "",
    ]
    _CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    _CONFIG_FILE.write_text("\n".join(lines))
    os.chmod(_CONFIG_FILE, stat.S_IRUSR | stat.S_IWUSR)  # 0600


def _load_file() -> dict:
    if not _CONFIG_FILE.exists():
        return {}
    return tomllib.loads(_CONFIG_FILE.read_text())


def config_path() -> Path:
    return _CONFIG_FILE


def load_exclusions() -> ExclusionConfig:
    """Return the stored exclusion lists, falling back to defaults per list."""
    section = _load_file().get(_SECTION, {})
    defaults = ExclusionConfig.default()
    functions = section.get(_FUNCTIONS_KEY)
    triggers = section.get(_TRIGGERS_KEY)
    return ExclusionConfig(
        function_schemas=(
            tuple(str(s) for s in functions)
            if isinstance(functions, list)
            else defaults.function_schemas
        ),
        trigger_schemas=(
            tuple(str(s) for s in triggers)
            if isinstance(triggers, list)
            else defaults.trigger_schemas
        ),
    )


def save_exclusions(config: ExclusionConfig) -> Path:
    """Write the exclusion lists to the config file."""
    _write_toml(config)
    return _CONFIG_FILE


def reset_exclusions() -> bool:
    """Remove stored lists so defaults apply. Returns True if a file existed."""
    if not _CONFIG_FILE.exists():
        return False
    _CONFIG_FILE.unlink()
    return True
