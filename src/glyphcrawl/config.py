from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "GLYPHCRAWL_"
DEFAULT_SETTINGS_FILE = "glyphcrawl.toml"


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values into a bool.

    Accepts: True/False, 1/0, "true"/"false", "yes"/"no", "on"/"off" (case-insensitive).
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off", ""}:
            return False
        return True
    return bool(value)


def _as_seed(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class Settings:
    """Runtime settings for the runner.

    Sources, lowest to highest precedence:
    - dataclass defaults
    - a TOML file (env GLYPHCRAWL_SETTINGS_FILE, else ./glyphcrawl.toml if present)
    - environment variables (prefix GLYPHCRAWL_)
    - command-line flags, applied by ``__main__`` via ``dataclasses.replace``
    """

    world: str = "dungeon"
    seed: Optional[int] = None
    headless: bool = False
    font_size: int = 14

    def validate(self) -> None:
        """Validate and normalize settings to safe values."""
        try:
            self.font_size = int(self.font_size)
        except (TypeError, ValueError):
            logger.error("Invalid font_size %r; using 14", self.font_size)
            self.font_size = 14
        try:
            self.seed = _as_seed(self.seed)
        except (TypeError, ValueError):
            logger.error("Invalid seed %r; using a random seed", self.seed)
            self.seed = None
        if self.font_size < 6:
            logger.warning("font_size %s too small; resetting to 14", self.font_size)
            self.font_size = 14
        self.headless = _as_bool(self.headless)
        self.world = str(self.world)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            logger.warning("Ignoring unknown settings: %s", ", ".join(sorted(unknown)))
        obj = cls(**{k: v for k, v in data.items() if k in allowed})
        obj.validate()
        return obj

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            f"{ENV_PREFIX}WORLD": ("world", str),
            f"{ENV_PREFIX}SEED": ("seed", _as_seed),
            f"{ENV_PREFIX}HEADLESS": ("headless", _as_bool),
            f"{ENV_PREFIX}FONT_SIZE": ("font_size", int),
        }
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env_key in env and env[env_key] != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
        return out

    @classmethod
    def from_toml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        try:
            with path.open("rb") as f:
                doc = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.error("Failed to read settings TOML %s: %s", path, exc)
            return {}
        # Keys may sit at top level or under a [glyphcrawl] table
        flat = {k: v for k, v in doc.items() if not isinstance(v, dict)}
        if isinstance(doc.get("glyphcrawl"), dict):
            flat.update(doc["glyphcrawl"])
        return flat

    @classmethod
    def discover_config_path(cls, env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
        env = os.environ if env is None else env
        env_path = env.get(f"{ENV_PREFIX}SETTINGS_FILE")
        if env_path:
            return Path(env_path).expanduser().resolve()
        default_path = Path.cwd() / DEFAULT_SETTINGS_FILE
        if default_path.exists():
            return default_path
        return None

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        file_path: Optional[Path | str] = None,
    ) -> "Settings":
        data: Dict[str, Any] = {}
        chosen = Path(file_path).expanduser().resolve() if file_path is not None else cls.discover_config_path(env)
        if chosen is not None:
            data.update(cls.from_toml_file(chosen))
        data.update(cls.from_env(env))
        return cls.from_dict(data)


__all__ = ["Settings", "ENV_PREFIX"]
