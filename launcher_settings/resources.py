"""Locate settings, include and icon files across the configured directories."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Union

SETTINGS_FILE = "settings.json"
ICONS_DIR = "icons"
SETTINGS_FILE_ENV_VAR = "KEYPAD_LAUNCHER_SETTINGS_FILE"
ICONS_DIR_ENV_VAR = "KEYPAD_LAUNCHER_ICONS_DIR"


def _env_token(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    if value is None:
        return None
    token = value.strip()
    return token or None


@dataclass(frozen=True)
class ResourceNames:
    """File names looked up inside every config directory."""

    settings_json: str = SETTINGS_FILE
    icons_dir: str = ICONS_DIR

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "ResourceNames":
        """Apply developer overrides (e.g. a scratch ``dev-settings.json``)."""

        env = os.environ if environ is None else environ
        return cls(
            settings_json=_env_token(env, SETTINGS_FILE_ENV_VAR) or SETTINGS_FILE,
            icons_dir=_env_token(env, ICONS_DIR_ENV_VAR) or ICONS_DIR,
        )


class Resources:
    """Search ordered config directories; the first one is the primary directory."""

    def __init__(
        self,
        config_paths: Iterable[Union[str, Path]],
        names: Optional[ResourceNames] = None,
    ) -> None:
        self._config_paths: List[Path] = [Path(path) for path in config_paths]
        if not self._config_paths:
            raise ValueError("Resources need at least one config directory")
        self._names = names or ResourceNames.from_environment()

    @property
    def names(self) -> ResourceNames:
        return self._names

    @property
    def config_paths(self) -> List[Path]:
        return list(self._config_paths)

    @property
    def primary_dir(self) -> Path:
        return self._config_paths[0]

    def file(self, file_name: str) -> Optional[Path]:
        for directory in self._config_paths:
            candidate = directory / file_name
            if candidate.exists():
                return candidate
        return None

    def icon(self, icon_file: str) -> Optional[Path]:
        return self.file(f"{self._names.icons_dir}/{icon_file}")

    def settings_json(self) -> Optional[Path]:
        return self.file(self._names.settings_json)

    def settings_json_or(self) -> Path:
        """Existing root settings file, or where a new one would be created."""

        return self.settings_json() or self.primary_dir / self._names.settings_json

    def new_file(self, file_name: str) -> Optional[Path]:
        """Candidate path in the primary directory; None when the file already exists."""

        if self.file(file_name) is not None:
            return None
        return self.primary_dir / file_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resources):
            return NotImplemented
        return self._config_paths == other._config_paths and self._names == other._names

    def __repr__(self) -> str:
        return f"Resources({[str(path) for path in self._config_paths]!r}, {self._names!r})"
